"""
Verification bands for the dummy-sample run.
Derives an acceptance band per measured parameter from the current recipe and
classifies entered measurements as PASS, FAIL or unknown.
"""
import pandas as pd
from typing import Any, Dict, List, Mapping, Optional

from dicing_toolkit.core.config import (
    STREET_TOLERANCE, WAFER_THICKNESS_TOLERANCE, DIE_SIZE_TOLERANCE_MM,
    KERF_LOWER_FACTOR, KERF_UPPER_FACTOR,
    TIP_SPEED_MIN_MPS, TIP_SPEED_MAX_MPS,
    VACUUM_NOMINAL_KPA, VACUUM_MIN_KPA, VACUUM_MAX_KPA
)
from dicing_toolkit.core.models import VerificationSpec
from dicing_toolkit.core.units import maximum, is_finite
from dicing_toolkit.analytics.models import SpecResult
from dicing_toolkit.enums import SpecStatus
from dicing_toolkit.utils.formatting import coerce_number


def build_verification_specs(
    street_width_um: float,
    kerf_um: float,
    die_width_mm: float,
    die_height_mm: float,
    wafer_thickness_um: float,
    tip_speed_mps: float
) -> List[VerificationSpec]:
    """
    Returns the acceptance bands in display order.

    Street and wafer thickness use a relative band, die size an absolute
    +/-0.01 mm band, kerf an asymmetric -20% / +50% band. Tip speed and vacuum
    use fixed windows regardless of the nominal value.
    """
    return [
        VerificationSpec(
            'Street Width (µm)', street_width_um,
            street_width_um * (1 - STREET_TOLERANCE), street_width_um * (1 + STREET_TOLERANCE), 'street'
        ),
        VerificationSpec(
            'Kerf (µm)', kerf_um,
            maximum(0, kerf_um * KERF_LOWER_FACTOR), maximum(kerf_um, kerf_um * KERF_UPPER_FACTOR), 'kerf'
        ),
        VerificationSpec(
            'Die Width (mm)', die_width_mm,
            maximum(0, die_width_mm - DIE_SIZE_TOLERANCE_MM), die_width_mm + DIE_SIZE_TOLERANCE_MM, 'dieW'
        ),
        VerificationSpec(
            'Die Height (mm)', die_height_mm,
            maximum(0, die_height_mm - DIE_SIZE_TOLERANCE_MM), die_height_mm + DIE_SIZE_TOLERANCE_MM, 'dieH'
        ),
        VerificationSpec(
            'Wafer Thickness (µm)', wafer_thickness_um,
            wafer_thickness_um * (1 - WAFER_THICKNESS_TOLERANCE),
            wafer_thickness_um * (1 + WAFER_THICKNESS_TOLERANCE), 'thk'
        ),
        VerificationSpec('Tip Speed (m/s)', tip_speed_mps, TIP_SPEED_MIN_MPS, TIP_SPEED_MAX_MPS, 'tip'),
        VerificationSpec('Vacuum Level (kPa)', VACUUM_NOMINAL_KPA, VACUUM_MIN_KPA, VACUUM_MAX_KPA, 'vac'),
    ]


def evaluate_measurement(spec: VerificationSpec, measured: Any) -> SpecStatus:
    """PASS inside the closed band, FAIL outside, UNKNOWN when nothing usable was entered."""
    value = coerce_number(measured)
    if value is None or not is_finite(value):
        return SpecStatus.UNKNOWN
    if spec.lower_bound <= value <= spec.upper_bound:
        return SpecStatus.PASS
    return SpecStatus.FAIL


def evaluate_measurements(
    specs: List[VerificationSpec],
    measurements: Optional[Mapping[str, Any]] = None
) -> List[SpecResult]:
    """Pairs every spec with its measurement (looked up by spec key)."""
    measurements = measurements or {}
    results = []
    for spec in specs:
        raw = measurements.get(spec.key)
        value = coerce_number(raw)
        results.append(SpecResult(
            name=spec.name,
            key=spec.key,
            nominal=spec.nominal,
            lower_bound=spec.lower_bound,
            upper_bound=spec.upper_bound,
            measured=value if value is not None and is_finite(value) else None,
            status=evaluate_measurement(spec, raw),
        ))
    return results


def verification_table(results: List[SpecResult]) -> pd.DataFrame:
    """Display/export frame with one row per parameter."""
    rows: List[Dict[str, Any]] = []
    for r in results:
        rows.append({
            'Parameter': r.name,
            'Nominal': r.nominal,
            'Lower': r.lower_bound,
            'Upper': r.upper_bound,
            'Measured': r.measured,
            'Status': r.status.value,
        })
    return pd.DataFrame(rows, columns=['Parameter', 'Nominal', 'Lower', 'Upper', 'Measured', 'Status'])
