"""
Process-parameter derivation.
Wires the geometry, setpoint and risk models together for one recipe.
"""
import dataclasses
import logging

from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.core.models import ProcessInputs, DerivedMetrics
from dicing_toolkit.core.units import round_half_up, is_finite
from dicing_toolkit.process.setpoints import suggest_feed, suggest_rpm, suggest_coolant_lpm
from dicing_toolkit.process.risk import estimate_power_kw, chipping_risk

logger = logging.getLogger(__name__)

def derive_metrics(inputs: ProcessInputs) -> DerivedMetrics:
    """
    Computes all derived metrics for a recipe.

    Power uses the feed actually set (not the suggestion) with the wear-adjusted
    kerf; the coolant suggestion follows from that power. The risk score is
    evaluated at the current setpoints.
    """
    tip = GeometryEngine.tip_speed_mps(inputs.blade_diameter_mm, inputs.rpm)
    kerf = GeometryEngine.estimate_kerf_um(inputs.blade_thickness_um, inputs.wear_factor)
    power = estimate_power_kw(inputs.material, inputs.feed_mm_per_s, kerf, inputs.wafer_thickness_um)

    return DerivedMetrics(
        tip_speed_mps=tip,
        kerf_um=kerf,
        spindle_power_kw=power,
        chipping_risk=chipping_risk(
            inputs.material, inputs.feed_mm_per_s, tip,
            inputs.wafer_thickness_um, inputs.blade_thickness_um, inputs.coolant_l_per_min
        ),
        coolant_suggestion_l_per_min=suggest_coolant_lpm(power),
        feed_suggestion_mm_per_s=suggest_feed(inputs.material, inputs.wafer_thickness_um),
        rpm_suggestion=suggest_rpm(inputs.material, inputs.blade_diameter_mm, inputs.blade_bond),
    )

def _round_to(value: float, digits: int) -> float:
    # Round like the display formatter so the applied value matches what was shown
    if not is_finite(value):
        return value
    return float(f"{value:.{digits}f}")

def apply_suggestions(inputs: ProcessInputs, metrics: DerivedMetrics = None) -> ProcessInputs:
    """
    Returns a copy of inputs with RPM, feed and coolant replaced by the
    suggestions: RPM to the nearest whole rpm, feed to 0.01 mm/s and coolant
    to 0.1 L/min.
    """
    if metrics is None:
        metrics = derive_metrics(inputs)

    rpm = metrics.rpm_suggestion
    if is_finite(rpm):
        rpm = round_half_up(rpm)

    updated = dataclasses.replace(
        inputs,
        rpm=rpm,
        feed_mm_per_s=_round_to(metrics.feed_suggestion_mm_per_s, 2),
        coolant_l_per_min=_round_to(metrics.coolant_suggestion_l_per_min, 1),
    )
    logger.info(
        f"Applied suggestions: rpm={updated.rpm}, feed={updated.feed_mm_per_s} mm/s, "
        f"coolant={updated.coolant_l_per_min} L/min"
    )
    return updated
