from dataclasses import fields
from typing import List, Optional

from dicing_toolkit.core.config import (
    TIP_SPEED_MIN_MPS, TIP_SPEED_MAX_MPS, VACUUM_MIN_KPA, VACUUM_MAX_KPA
)
from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.core.models import ProcessInputs
from dicing_toolkit.core.units import is_finite
from dicing_toolkit.enums import Material, BladeBond

LENGTH_FIELDS = [
    'wafer_diameter_mm', 'wafer_thickness_um', 'die_width_mm', 'die_height_mm',
    'street_width_um', 'blade_diameter_mm', 'blade_thickness_um',
]

def validate_process_inputs(inputs: ProcessInputs) -> List[str]:
    """
    Checks a recipe against its invariants.
    Returns human-readable warnings; the model still evaluates invalid recipes,
    so nothing here raises.
    """
    warnings = []

    numeric_fields = [f.name for f in fields(ProcessInputs) if f.name not in ('material', 'blade_bond')]
    for name in numeric_fields:
        value = getattr(inputs, name)
        if not is_finite(value):
            warnings.append(f"'{name}' is not a number; dependent results will show '-'.")

    for name in LENGTH_FIELDS:
        value = getattr(inputs, name)
        if is_finite(value) and value < 0:
            warnings.append(f"'{name}' must not be negative (got {value}).")

    if is_finite(inputs.wear_factor) and not 0 <= inputs.wear_factor <= 1:
        warnings.append(f"Wear factor must be between 0 and 1 (got {inputs.wear_factor}).")

    if Material.parse(inputs.material) is None:
        warnings.append(f"Unknown material '{inputs.material}'; default material constants are used.")
    if BladeBond.parse(inputs.blade_bond) is None:
        warnings.append(f"Unknown blade bond '{inputs.blade_bond}'; default bond constants are used.")

    tip = GeometryEngine.tip_speed_mps(inputs.blade_diameter_mm, inputs.rpm)
    if is_finite(tip) and not GeometryEngine.tip_speed_in_window(tip):
        warnings.append(
            f"Tip speed {tip:.2f} m/s is outside the {TIP_SPEED_MIN_MPS:.0f}-{TIP_SPEED_MAX_MPS:.0f} m/s target window."
        )

    return warnings

def validate_vacuum_kpa(vacuum_kpa: Optional[float]) -> Optional[str]:
    """Warning for a chuck vacuum outside the 70-90 kPa window; None when not entered or in range."""
    if vacuum_kpa is None:
        return None
    if not is_finite(vacuum_kpa):
        return "Vacuum level is not a number."
    if not VACUUM_MIN_KPA <= vacuum_kpa <= VACUUM_MAX_KPA:
        return f"Vacuum level {vacuum_kpa:g} kPa is outside the {VACUUM_MIN_KPA:.0f}-{VACUUM_MAX_KPA:.0f} kPa chuck window."
    return None
