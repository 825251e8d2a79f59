"""
Configuration and Styling Module.

This module contains the process limits used by the calculation model, the
default recipe shown when the dashboard starts, and the colour themes used by
the plots. Recipe defaults can be overridden from 'assets/recipe_defaults.json'.
"""
from dataclasses import dataclass

# --- Unit Conversion ---
UM_PER_MM = 1000.0

# --- Blade / Spindle Limits ---
# Target tip speed window in m/s. Outside this band micro-chipping rises.
TIP_SPEED_MIN_MPS = 30.0
TIP_SPEED_MAX_MPS = 45.0
TARGET_TIP_SPEED_MPS = 38.0

# Kerf grows linearly with blade wear
KERF_WEAR_COEFFICIENT = 0.12

RPM_MIN = 8000.0
RPM_MAX = 60000.0

FEED_MIN_MM_S = 0.2
FEED_MAX_MM_S = 6.0
# Thinnest wafer (mm) considered by the feed suggestion
FEED_MIN_THICKNESS_MM = 0.05

COOLANT_MIN_LPM = 1.0
COOLANT_MAX_LPM = 12.0
COOLANT_BASE_LPM = 3.0
COOLANT_LPM_PER_KW = 6.0

# --- Chipping Risk Weights ---
RISK_FEED_THRESHOLD_MM_S = 1.5
RISK_FEED_WEIGHT = 8.0
RISK_LOW_TIP_WEIGHT = 0.8
RISK_HIGH_TIP_WEIGHT = 0.9
RISK_BLADE_THICKNESS_DIVISOR = 100.0
RISK_WAFER_THICKNESS_WEIGHT = 6.0
RISK_COOLANT_WEIGHT = 1.1
RISK_MIN = 0
RISK_MAX = 100
# Scores below this are reported as "Low"
RISK_LOW_THRESHOLD = 35

# --- Verification Tolerances ---
STREET_TOLERANCE = 0.10
WAFER_THICKNESS_TOLERANCE = 0.02
DIE_SIZE_TOLERANCE_MM = 0.01
KERF_LOWER_FACTOR = 0.8
KERF_UPPER_FACTOR = 1.5
VACUUM_NOMINAL_KPA = 80.0
VACUUM_MIN_KPA = 70.0
VACUUM_MAX_KPA = 90.0

# --- Planning ---
# Indexing overhead per wafer (s)
INDEXING_OVERHEAD_S = 20.0
MIN_FEED_FOR_CYCLE_MM_S = 0.001
BLADE_LIFE_MAX_PCT = 200.0
BLADE_SWAP_WARNING_PCT = 90.0
MIN_EDGE_CLEARANCE_MM = 1.0
MAX_THETA_DEG = 0.1

# --- Default Recipe ---
# Used when 'assets/recipe_defaults.json' is missing or incomplete.
DEFAULT_RECIPE = {
    'material': 'Si',
    'wafer_diameter_mm': 300.0,
    'wafer_thickness_um': 725.0,
    'die_width_mm': 5.0,
    'die_height_mm': 5.0,
    'street_width_um': 60.0,
    'blade_diameter_mm': 58.0,
    'blade_thickness_um': 30.0,
    'blade_bond': 'Resin',
    'rpm': 30000.0,
    'feed_mm_per_s': 1.5,
    'coolant_l_per_min': 4.0,
    'wear_factor': 0.2,
}

DEFAULT_EXPECTED_BLADE_LIFE_M = 1200.0

# --- Wafer Map Ingestion ---
MAP_X_COLUMNS = ('x', 'die_x')
MAP_Y_COLUMNS = ('y', 'die_y')
MAP_STATUS_COLUMN = 'status'
MAP_FILE_TYPES = ['csv', 'txt']

# --- Export ---
CSV_EXPORT_FILENAME = 'dicing_toolkit_export.csv'
EXCEL_EXPORT_FILENAME = 'dicing_toolkit_report.xlsx'
UNKNOWN_PLACEHOLDER = '-'

# --- Theme Configuration ---
@dataclass
class PlotTheme:
    background_color: str
    plot_area_color: str
    wafer_color: str
    axis_color: str
    text_color: str

    good_die_color: str = '#2ECC71'
    bad_die_color: str = '#E74C3C'
    grid_line_color: str = '#5D6D7E'

# Default Theme (Dark Mode)
DEFAULT_THEME = PlotTheme(
    background_color='#2C3E50',       # Dark Blue-Grey
    plot_area_color='#333333',        # Dark Grey
    wafer_color='#A9B7C6',            # Silicon Grey
    axis_color='#8B98A5',
    text_color='#FFFFFF'
)


# --- Recipe Defaults (Loaded from JSON) ---
import json
import logging
from pathlib import Path
from typing import Any, Dict

RECIPE_DEFAULTS_PATH = Path(__file__).parent.parent.parent / "assets/recipe_defaults.json"

def load_recipe_defaults(path: Path = RECIPE_DEFAULTS_PATH) -> Dict[str, Any]:
    """
    Loads the starting recipe from an external JSON file.

    Values from the file are layered over DEFAULT_RECIPE; keys that are not part
    of the recipe are ignored. If the file is missing or corrupt a warning is
    logged and the built-in defaults are returned so the dashboard can still run.

    Returns:
        Dict[str, Any]: recipe field name -> default value.
    """
    recipe = dict(DEFAULT_RECIPE)
    try:
        with open(path, 'r') as f:
            overrides = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError) as e:
        logging.warning(f"Warning: Could not load 'recipe_defaults.json' ({e}). Using built-in recipe.")
        return recipe

    if not isinstance(overrides, dict):
        logging.warning("Warning: 'recipe_defaults.json' must contain an object. Using built-in recipe.")
        return recipe

    for key, value in overrides.items():
        if key in recipe:
            recipe[key] = value
        else:
            logging.warning(f"Ignoring unknown recipe key '{key}' in 'recipe_defaults.json'.")
    return recipe
