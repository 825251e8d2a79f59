"""
Runtime self checks.

A handful of sanity checks over the calculation model, shown in the dashboard's
Tests tab so a broken formula is visible to the engineer using it.
"""
import logging
from typing import List

from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.enums import Material, BladeBond
from dicing_toolkit.io.ingestion import parse_wafer_map
from dicing_toolkit.process.setpoints import suggest_feed, suggest_rpm, suggest_coolant_lpm
from dicing_toolkit.process.risk import chipping_risk
from dicing_toolkit.analytics.models import CheckResult
from dicing_toolkit.analytics.yield_analysis import summarize_wafer_map

logger = logging.getLogger(__name__)

SAMPLE_MAP = "x,y,status\n0,0,good\n0,1,bad"

def run_self_checks() -> List[CheckResult]:
    checks = []

    tip = GeometryEngine.tip_speed_mps(58, 30000)
    checks.append(CheckResult("Tip speed calc", abs(tip - 90.99) < 0.5, f"{tip:.2f}"))

    d200 = GeometryEngine.die_count(200, 5, 5, 60).usable_dies
    d300 = GeometryEngine.die_count(300, 5, 5, 60).usable_dies
    checks.append(CheckResult("Die count scales with wafer", d300 >= d200, f"{d200}→{d300}"))

    feed = suggest_feed(Material.SI, 725)
    checks.append(CheckResult("Suggest feed in [0.2,6.0]", 0.2 <= feed <= 6.0, f"{feed:.2f}"))

    risk = chipping_risk(Material.SI, 1.5, 38, 725, 30, 4)
    checks.append(CheckResult("Chipping risk bounded 0–100", 0 <= risk <= 100, str(risk)))

    c1 = suggest_coolant_lpm(0.1)
    c2 = suggest_coolant_lpm(0.2)
    checks.append(CheckResult("Coolant suggestion monotonic", c2 >= c1, f"{c1:.1f}→{c2:.1f}"))

    rpm = suggest_rpm(Material.SI, 58, BladeBond.RESIN)
    checks.append(CheckResult("RPM suggestion in [8k,60k]", 8000 <= rpm <= 60000, f"{rpm:.0f}"))

    summary = summarize_wafer_map(parse_wafer_map(SAMPLE_MAP))
    checks.append(CheckResult(
        "CSV parser counts", summary.good == 1 and summary.bad == 1,
        f"{summary.good} good / {summary.bad} bad"
    ))

    narrow = GeometryEngine.die_count(300, 5, 5, 40).usable_dies
    wide = GeometryEngine.die_count(300, 5, 5, 120).usable_dies
    checks.append(CheckResult("Street width effect", wide <= narrow, f"{narrow} vs {wide}"))

    failed = [c.name for c in checks if not c.passed]
    if failed:
        logger.warning(f"Self checks failed: {failed}")
    return checks
