from typing import Optional

from dicing_toolkit.state import SessionStore
from dicing_toolkit.core.models import DerivedMetrics, DieLayout
from dicing_toolkit.analytics.planning import blade_life_status
from dicing_toolkit.analytics.yield_analysis import summarize_wafer_map
from dicing_toolkit.analytics.models import MapSummary
from dicing_toolkit.reporting import DashboardSnapshot


def get_map_summary(store: SessionStore) -> Optional[MapSummary]:
    """Summary of the loaded wafer map, or None when no usable map is loaded."""
    result = store.map_result
    if result is None or not result.ok:
        return None
    return summarize_wafer_map(result.records)


def get_dashboard_snapshot(store: SessionStore, metrics: DerivedMetrics, layout: DieLayout) -> DashboardSnapshot:
    """
    Captures the current session into the structure used by the exports.
    Ensures the blade-life figure matches what the Blade Life tab shows.
    """
    life = blade_life_status(store.expected_life_m, store.cumulative_cut_mm)
    return DashboardSnapshot(
        inputs=store.inputs,
        metrics=metrics,
        layout=layout,
        map_summary=get_map_summary(store),
        offset_x_um=store.offset_x_um,
        offset_y_um=store.offset_y_um,
        theta_deg=store.theta_deg,
        life_used_pct=life.life_used_pct,
        cumulative_cut_mm=store.cumulative_cut_mm,
        measurements=store.measurements,
    )
