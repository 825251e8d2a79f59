from typing import List, Optional, Union

from dicing_toolkit.core.models import DieLayout, WaferMapRecord
from dicing_toolkit.analytics.models import MapSummary


def summarize_wafer_map(records: List[WaferMapRecord]) -> MapSummary:
    """Counts good and bad dies; duplicate coordinates are counted as often as they appear."""
    bad = sum(1 for r in records if r.is_bad)
    return MapSummary(good=len(records) - bad, bad=bad)


def usable_die_count(layout: DieLayout, map_summary: Optional[MapSummary] = None) -> Union[int, float]:
    """The good-die count of a loaded wafer map takes precedence over the geometric estimate."""
    if map_summary is not None:
        return map_summary.good
    return layout.usable_dies
