"""
Documentation and Operator Guidance Module.

This module contains:
1. The generated dicing SOP (standard operating procedure) text.
2. Static guidance shown on the Risk tab.
"""
from dicing_toolkit.core.config import TIP_SPEED_MIN_MPS, TIP_SPEED_MAX_MPS
from dicing_toolkit.core.models import ProcessInputs, DerivedMetrics
from dicing_toolkit.utils.formatting import format_number, format_plain
from dicing_toolkit.core.units import round_half_up, is_finite

# Bullet points for the "Risk Breakdown" card
RISK_FACTORS = [
    "Material sensitivity baseline: Si (low) → Sapphire/SiC (high).",
    f"Tip speed outside {TIP_SPEED_MIN_MPS:.0f}–{TIP_SPEED_MAX_MPS:.0f} m/s increases micro-chipping risk.",
    "Higher feed and thicker blades amplify edge stress.",
    "Coolant reduces thermal/mechanical damage risk.",
]

# Title -> recommended actions
ACTION_HINTS = {
    "If chipping is high": [
        "Raise coolant toward suggestion.",
        f"Bring tip speed into {TIP_SPEED_MIN_MPS:.0f}–{TIP_SPEED_MAX_MPS:.0f} m/s (tune RPM / blade Ø).",
        "Reduce feed toward suggestion.",
        "Consider thinner blade or resin bond.",
    ],
    "If throughput is low": [
        "Increase feed in small steps while inspecting edges.",
        "Move to hybrid bond for wear resistance.",
        "Optimize street width if design allows.",
    ],
}

BOND_GUIDANCE = (
    "Resin bond favors low damage; Hybrid extends life; "
    "Metal for harder materials (SiC/Sapphire)."
)

DISCLAIMER = "Heuristics only. Validate on your saw and process-of-record."

SOP_TEMPLATE = """SOP: Wafer Dicing

1) Wafer Structure & Identification
- Material: {material}
- Diameter: {wafer_diameter} mm; Thickness: {wafer_thickness} µm
- Die size: {die_width} × {die_height} mm; Streets: {street} µm
- Orientation: notch/flat per traveler; Fiducials per mask (verify visibility).

2) Blade Selection
- Blade Ø: {blade_diameter} mm; Thickness: {blade_thickness} µm; Bond: {bond}
- Expected kerf (initial): {kerf} µm; Tip speed target {tip_min}–{tip_max} m/s (current {tip}).

3) Machine Setpoints
- Spindle speed: {rpm} rpm
- Feed: {feed} mm/s
- Coolant: {coolant} L/min
- Wear factor: {wear} (update after every wafer)

4) Alignment & Vacuum
- Align to wafer fiducials; set theta ≤ 0.1°.
- Vacuum level: 70–90 kPa (set per chuck spec).

5) Dummy Sample Run
- Run 1 wafer with current setpoints. Inspect kerf, edge chipping, die size.

6) Measurement & Acceptance
- Streets: {street} µm ±10%
- Die size: ±10 µm
- Wafer thickness: ±2%
- Kerf ≤ 1.5× blade thickness (monitor wear).

7) Actions If OOS
- Bring tip speed into {tip_min}–{tip_max} m/s via rpm.
- Reduce feed or raise coolant.
- Consider thinner/resin bond if chipping high.

8) Documentation
- Record all parameters and measurements in traveler. Release to production after PASS.
"""


def generate_sop(inputs: ProcessInputs, metrics: DerivedMetrics) -> str:
    """Fills the SOP template with the current recipe and derived values."""
    rpm = inputs.rpm
    rpm_text = str(int(round_half_up(rpm))) if is_finite(rpm) else format_number(rpm)

    return SOP_TEMPLATE.format(
        material=inputs.material_key,
        wafer_diameter=format_plain(inputs.wafer_diameter_mm),
        wafer_thickness=format_plain(inputs.wafer_thickness_um),
        die_width=format_plain(inputs.die_width_mm),
        die_height=format_plain(inputs.die_height_mm),
        street=format_plain(inputs.street_width_um),
        blade_diameter=format_plain(inputs.blade_diameter_mm),
        blade_thickness=format_plain(inputs.blade_thickness_um),
        bond=inputs.bond_key,
        kerf=format_number(metrics.kerf_um),
        tip=format_number(metrics.tip_speed_mps),
        tip_min=f"{TIP_SPEED_MIN_MPS:.0f}",
        tip_max=f"{TIP_SPEED_MAX_MPS:.0f}",
        rpm=rpm_text,
        feed=format_number(inputs.feed_mm_per_s),
        coolant=format_number(inputs.coolant_l_per_min, 1),
        wear=format_number(inputs.wear_factor, 2),
    )
