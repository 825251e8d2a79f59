"""
Line planning helpers: throughput, blade life and alignment checks.
"""
import math

from dicing_toolkit.core.config import (
    INDEXING_OVERHEAD_S, MIN_FEED_FOR_CYCLE_MM_S,
    BLADE_LIFE_MAX_PCT, BLADE_SWAP_WARNING_PCT,
    MIN_EDGE_CLEARANCE_MM, MAX_THETA_DEG
)
from dicing_toolkit.core.geometry import GeometryEngine
from dicing_toolkit.core.units import um_to_mm, clamp, maximum
from dicing_toolkit.analytics.models import ThroughputEstimate, BladeLifeStatus, AlignmentCheck


def wafer_cycle_length_mm(
    wafer_diameter_mm: float,
    die_width_mm: float,
    die_height_mm: float,
    street_width_um: float
) -> float:
    """Blade travel for one wafer, counting every lane as a full-diameter pass."""
    lanes = GeometryEngine.lane_counts(wafer_diameter_mm, die_width_mm, die_height_mm, street_width_um)
    return wafer_diameter_mm * lanes.total


def estimate_throughput(
    wafer_diameter_mm: float,
    die_width_mm: float,
    die_height_mm: float,
    street_width_um: float,
    feed_mm_per_s: float
) -> ThroughputEstimate:
    lanes = GeometryEngine.lane_counts(wafer_diameter_mm, die_width_mm, die_height_mm, street_width_um)
    total_length = wafer_diameter_mm * lanes.total
    cycle_time = total_length / maximum(feed_mm_per_s, MIN_FEED_FOR_CYCLE_MM_S)
    wafers_per_hour = 3600 / maximum(cycle_time + INDEXING_OVERHEAD_S, 1)
    return ThroughputEstimate(
        lanes_x=lanes.lanes_x,
        lanes_y=lanes.lanes_y,
        total_cut_length_mm=total_length,
        cycle_time_s=cycle_time,
        wafers_per_hour=wafers_per_hour,
    )


def blade_life_status(expected_life_m: float, accumulated_cut_mm: float) -> BladeLifeStatus:
    """
    Percentage of rated blade life consumed, capped at 200%.
    A zero rated life reads as fully overrun.
    """
    expected_life_mm = expected_life_m * 1000
    if expected_life_mm == 0:
        used_ratio = math.copysign(math.inf, accumulated_cut_mm) if accumulated_cut_mm else float('nan')
    else:
        used_ratio = accumulated_cut_mm / expected_life_mm
    used_pct = clamp(used_ratio * 100, 0, BLADE_LIFE_MAX_PCT)
    return BladeLifeStatus(
        life_used_pct=used_pct,
        remaining_m=(expected_life_mm - accumulated_cut_mm) / 1000,
        swap_soon=used_pct > BLADE_SWAP_WARNING_PCT,
    )


def check_alignment(
    wafer_diameter_mm: float,
    die_width_mm: float,
    die_height_mm: float,
    offset_x_um: float,
    offset_y_um: float,
    theta_deg: float
) -> AlignmentCheck:
    """Flags stage offsets that push the outer die toward the wafer edge, or a rotated wafer."""
    shift = math.hypot(um_to_mm(offset_x_um), um_to_mm(offset_y_um))
    clearance = (wafer_diameter_mm / 2) - (maximum(die_width_mm, die_height_mm) / 2) - shift
    return AlignmentCheck(
        stage_shift_mm=shift,
        edge_clearance_mm=clearance,
        needs_attention=clearance < MIN_EDGE_CLEARANCE_MM or abs(theta_deg) > MAX_THETA_DEG,
    )
