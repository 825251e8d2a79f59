from dicing_toolkit.core.models import ProcessInputs
from dicing_toolkit.process.model import derive_metrics
from dicing_toolkit.documentation import generate_sop, ACTION_HINTS, RISK_FACTORS


def test_sop_default_recipe():
    inputs = ProcessInputs()
    sop = generate_sop(inputs, derive_metrics(inputs))
    assert sop.startswith("SOP: Wafer Dicing")
    assert "- Material: Si" in sop
    assert "- Diameter: 300 mm; Thickness: 725 µm" in sop
    assert "- Die size: 5 × 5 mm; Streets: 60 µm" in sop
    assert "Bond: Resin" in sop
    assert "Expected kerf (initial): 30.72 µm" in sop
    assert "(current 91.11)" in sop
    assert "- Spindle speed: 30000 rpm" in sop
    assert "- Feed: 1.50 mm/s" in sop
    assert "- Coolant: 4.0 L/min" in sop
    assert "- Wear factor: 0.20" in sop
    assert "- Streets: 60 µm ±10%" in sop


def test_sop_has_all_sections():
    inputs = ProcessInputs()
    sop = generate_sop(inputs, derive_metrics(inputs))
    for n in range(1, 9):
        assert f"\n{n}) " in sop


def test_sop_rounds_rpm_half_up():
    inputs = ProcessInputs(rpm=12512.5)
    assert "- Spindle speed: 12513 rpm" in generate_sop(inputs, derive_metrics(inputs))


def test_sop_non_numeric_values():
    inputs = ProcessInputs(rpm=float('nan'))
    sop = generate_sop(inputs, derive_metrics(inputs))
    assert "- Spindle speed: - rpm" in sop
    assert "(current -)" in sop


def test_guidance_text():
    assert len(RISK_FACTORS) == 4
    assert set(ACTION_HINTS) == {"If chipping is high", "If throughput is low"}
