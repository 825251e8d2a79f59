from dataclasses import dataclass
from typing import Optional, Union

from dicing_toolkit.enums import SpecStatus

@dataclass(frozen=True)
class MapSummary:
    """Good/bad die counts from an imported wafer map."""
    good: int
    bad: int

    @property
    def total(self) -> int:
        return self.good + self.bad

    @property
    def yield_pct(self) -> float:
        return self.good / self.total * 100 if self.total else float('nan')

@dataclass(frozen=True)
class ThroughputEstimate:
    """Cut length and cycle time for one wafer; excludes blade swaps and alignment."""
    lanes_x: Union[int, float]
    lanes_y: Union[int, float]
    total_cut_length_mm: float
    cycle_time_s: float
    wafers_per_hour: float

@dataclass(frozen=True)
class BladeLifeStatus:
    life_used_pct: float
    remaining_m: float
    swap_soon: bool

    @property
    def note(self) -> str:
        return "Swap soon" if self.swap_soon else "OK"

@dataclass(frozen=True)
class AlignmentCheck:
    stage_shift_mm: float
    edge_clearance_mm: float
    needs_attention: bool

    @property
    def note(self) -> str:
        return "Check lanes" if self.needs_attention else "OK"

@dataclass(frozen=True)
class SpecResult:
    """A verification band paired with the entered measurement."""
    name: str
    key: str
    nominal: float
    lower_bound: float
    upper_bound: float
    measured: Optional[float]
    status: SpecStatus

@dataclass(frozen=True)
class CheckResult:
    """Outcome of one runtime self check."""
    name: str
    passed: bool
    info: str = ""
