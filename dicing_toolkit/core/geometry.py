import math
from dataclasses import dataclass
from typing import Union

from dicing_toolkit.core.config import (
    KERF_WEAR_COEFFICIENT, TIP_SPEED_MIN_MPS, TIP_SPEED_MAX_MPS
)
from dicing_toolkit.core.models import DieLayout
from dicing_toolkit.core.units import um_to_mm, clamp, maximum, floor_count

@dataclass(frozen=True)
class LaneCounts:
    """Number of straight cuts needed along each axis to singulate the grid."""
    lanes_x: Union[int, float]
    lanes_y: Union[int, float]

    @property
    def total(self) -> Union[int, float]:
        return self.lanes_x + self.lanes_y

class GeometryEngine:
    """
    Centralized logic for blade and wafer geometry.
    Every method is a pure function of its arguments and never raises for
    numeric input; NaN arguments give NaN results.
    """

    @staticmethod
    def tip_speed_mps(blade_diameter_mm: float, rpm: float) -> float:
        """Linear speed of the blade rim in m/s."""
        return math.pi * (blade_diameter_mm / 1000) * rpm / 60

    @staticmethod
    def tip_speed_in_window(tip_speed_mps: float) -> bool:
        return TIP_SPEED_MIN_MPS <= tip_speed_mps <= TIP_SPEED_MAX_MPS

    @staticmethod
    def estimate_kerf_um(blade_thickness_um: float, wear_factor: float) -> float:
        """Kerf widens linearly with wear: 12% wider at full wear."""
        return blade_thickness_um * (1 + KERF_WEAR_COEFFICIENT * wear_factor)

    @staticmethod
    def pitch_mm(die_size_mm: float, street_width_um: float) -> float:
        return die_size_mm + um_to_mm(street_width_um)

    @staticmethod
    def _grid_count(span_mm: float, pitch_mm: float) -> Union[int, float]:
        # A non-positive pitch cannot tile the wafer
        if pitch_mm <= 0:
            return 0
        count = floor_count(span_mm / pitch_mm)
        if isinstance(count, int):
            return max(0, count)
        return count

    @staticmethod
    def die_count(
        wafer_diameter_mm: float,
        die_width_mm: float,
        die_height_mm: float,
        street_width_um: float
    ) -> DieLayout:
        """
        Estimates the die grid for a wafer.

        The grid spans the full diameter; the share of the grid covered by the
        wafer circle (capped at 1) scales the grid down to the usable die count.
        """
        pitch_x = GeometryEngine.pitch_mm(die_width_mm, street_width_um)
        pitch_y = GeometryEngine.pitch_mm(die_height_mm, street_width_um)

        columns = GeometryEngine._grid_count(wafer_diameter_mm, pitch_x)
        rows = GeometryEngine._grid_count(wafer_diameter_mm, pitch_y)

        radius = wafer_diameter_mm / 2
        circle_area = math.pi * radius * radius
        grid_area = maximum(1, columns * rows * pitch_x * pitch_y)
        fill = clamp(circle_area / grid_area, 0, 1)
        usable = floor_count(columns * rows * fill)

        return DieLayout(columns=columns, rows=rows, usable_dies=usable)

    @staticmethod
    def lane_counts(
        wafer_diameter_mm: float,
        die_width_mm: float,
        die_height_mm: float,
        street_width_um: float
    ) -> LaneCounts:
        """Cuts run between neighbouring columns/rows, so one fewer than the grid count."""
        columns = GeometryEngine._grid_count(
            wafer_diameter_mm, GeometryEngine.pitch_mm(die_width_mm, street_width_um)
        )
        rows = GeometryEngine._grid_count(
            wafer_diameter_mm, GeometryEngine.pitch_mm(die_height_mm, street_width_um)
        )
        return LaneCounts(
            lanes_x=_non_negative(columns - 1),
            lanes_y=_non_negative(rows - 1),
        )

def _non_negative(count: Union[int, float]) -> Union[int, float]:
    if isinstance(count, int):
        return max(0, count)
    return count

# Module-level aliases for the most used formulas
tip_speed_mps = GeometryEngine.tip_speed_mps
estimate_kerf_um = GeometryEngine.estimate_kerf_um
die_count = GeometryEngine.die_count
