"""
Risk & Power Model.

Spindle power is estimated from the volume of material removed per second.
Chipping risk is an additive heuristic: a material baseline plus penalties for
aggressive feed, a tip speed outside the 30-45 m/s window, thick blades and
thick wafers, minus a credit for coolant flow.
"""
from dataclasses import dataclass
from typing import List, Union

from dicing_toolkit.core.config import (
    TIP_SPEED_MIN_MPS, TIP_SPEED_MAX_MPS,
    RISK_FEED_THRESHOLD_MM_S, RISK_FEED_WEIGHT,
    RISK_LOW_TIP_WEIGHT, RISK_HIGH_TIP_WEIGHT,
    RISK_BLADE_THICKNESS_DIVISOR, RISK_WAFER_THICKNESS_WEIGHT,
    RISK_COOLANT_WEIGHT, RISK_MIN, RISK_MAX, RISK_LOW_THRESHOLD
)
from dicing_toolkit.core.materials import material_properties
from dicing_toolkit.core.units import um_to_mm, clamp, maximum, round_half_up, is_finite
from dicing_toolkit.enums import Material

@dataclass(frozen=True)
class RiskContribution:
    """One additive term of the chipping risk score."""
    factor: str
    points: float

def estimate_power_kw(
    material: Union[Material, str],
    feed_mm_per_s: float,
    kerf_um: float,
    wafer_thickness_um: float
) -> float:
    """Approximate spindle load in kW: material coefficient times removal rate (mm^3/s)."""
    coefficient = material_properties(material).power_coefficient
    return coefficient * feed_mm_per_s * um_to_mm(kerf_um) * um_to_mm(wafer_thickness_um)

def risk_breakdown(
    material: Union[Material, str],
    feed_mm_per_s: float,
    tip_speed_mps: float,
    wafer_thickness_um: float,
    blade_thickness_um: float,
    coolant_l_per_min: float
) -> List[RiskContribution]:
    """Returns the individual score terms; their sum is the unrounded risk score."""
    low_tip = maximum(0, TIP_SPEED_MIN_MPS - tip_speed_mps) * RISK_LOW_TIP_WEIGHT
    high_tip = maximum(0, tip_speed_mps - TIP_SPEED_MAX_MPS) * RISK_HIGH_TIP_WEIGHT

    return [
        RiskContribution("Material baseline", material_properties(material).risk_base),
        RiskContribution("Feed above 1.5 mm/s", RISK_FEED_WEIGHT * maximum(0, feed_mm_per_s - RISK_FEED_THRESHOLD_MM_S)),
        RiskContribution("Tip speed below window", low_tip),
        RiskContribution("Tip speed above window", high_tip),
        RiskContribution("Blade thickness", blade_thickness_um / RISK_BLADE_THICKNESS_DIVISOR),
        RiskContribution("Wafer thickness", um_to_mm(wafer_thickness_um) * RISK_WAFER_THICKNESS_WEIGHT),
        RiskContribution("Coolant credit", -coolant_l_per_min * RISK_COOLANT_WEIGHT),
    ]

def chipping_risk(
    material: Union[Material, str],
    feed_mm_per_s: float,
    tip_speed_mps: float,
    wafer_thickness_um: float,
    blade_thickness_um: float,
    coolant_l_per_min: float
) -> Union[int, float]:
    """
    Composite chipping risk score, 0-100.

    The raw score is rounded (half up) before clamping. Returns an int for
    numeric input and NaN when any input is NaN.
    """
    terms = risk_breakdown(
        material, feed_mm_per_s, tip_speed_mps,
        wafer_thickness_um, blade_thickness_um, coolant_l_per_min
    )
    score = 0.0
    for term in terms:
        score += term.points

    bounded = clamp(round_half_up(score), RISK_MIN, RISK_MAX)
    if is_finite(bounded):
        return int(bounded)
    return bounded

def risk_label(score: Union[int, float]) -> str:
    return "Low" if score < RISK_LOW_THRESHOLD else "Watch"
