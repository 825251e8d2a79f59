"""
Setpoint Suggestion Model.

Suggested feed, spindle speed and coolant flow for a recipe. Each suggestion
is clamped into the range the saw can run, so the UI can offer it directly.
"""
import math
import numpy as np
from typing import Union

from dicing_toolkit.core.config import (
    FEED_MIN_MM_S, FEED_MAX_MM_S, FEED_MIN_THICKNESS_MM,
    RPM_MIN, RPM_MAX, TARGET_TIP_SPEED_MPS,
    COOLANT_MIN_LPM, COOLANT_MAX_LPM, COOLANT_BASE_LPM, COOLANT_LPM_PER_KW
)
from dicing_toolkit.core.materials import material_properties, bond_properties
from dicing_toolkit.core.units import um_to_mm, clamp, maximum
from dicing_toolkit.enums import Material, BladeBond

def suggest_feed(material: Union[Material, str], wafer_thickness_um: float) -> float:
    """
    Feed rate in mm/s. Scales with 1/sqrt(thickness) from the material's
    base feed at 1 mm, so thicker wafers are cut slower.
    """
    base = material_properties(material).feed_base_mm_s
    thickness_mm = maximum(um_to_mm(wafer_thickness_um), FEED_MIN_THICKNESS_MM)
    return clamp(base * (1.0 / math.sqrt(thickness_mm)), FEED_MIN_MM_S, FEED_MAX_MM_S)

def target_tip_speed_mps(material: Union[Material, str], blade_bond: Union[BladeBond, str]) -> float:
    return TARGET_TIP_SPEED_MPS * material_properties(material).rpm_factor * bond_properties(blade_bond).rpm_factor

def suggest_rpm(
    material: Union[Material, str],
    blade_diameter_mm: float,
    blade_bond: Union[BladeBond, str]
) -> float:
    """Spindle speed that puts the blade rim at the material/bond target tip speed."""
    target_tip = target_tip_speed_mps(material, blade_bond)
    circumference_m = np.float64(math.pi * (blade_diameter_mm / 1000))
    # A zero diameter asks for an unbounded speed; let it clamp to RPM_MAX
    with np.errstate(divide='ignore', invalid='ignore'):
        rpm = np.float64(target_tip * 60) / circumference_m
    return clamp(rpm, RPM_MIN, RPM_MAX)

def suggest_coolant_lpm(spindle_power_kw: float) -> float:
    """Coolant flow in L/min, rising with the heat put into the cut."""
    return clamp(COOLANT_BASE_LPM + COOLANT_LPM_PER_KW * spindle_power_kw, COOLANT_MIN_LPM, COOLANT_MAX_LPM)
