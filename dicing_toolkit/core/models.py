"""
Domain Models for the Dicing Process Calculator.
Plain immutable value objects: recipe inputs, derived metrics, die layout,
wafer map records and verification bands.
"""
from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, Union

from dicing_toolkit.core.config import DEFAULT_RECIPE
from dicing_toolkit.enums import Material, BladeBond, DieStatus

@dataclass(frozen=True)
class ProcessInputs:
    """
    A dicing recipe as entered by the engineer.
    Lengths are in the units named by each field; wear_factor is 0-1.
    Material and bond may be enum members or raw keys; unknown keys fall back to
    the default material/bond constants rather than failing.
    """
    material: Union[Material, str] = Material.SI
    wafer_diameter_mm: float = DEFAULT_RECIPE['wafer_diameter_mm']
    wafer_thickness_um: float = DEFAULT_RECIPE['wafer_thickness_um']
    die_width_mm: float = DEFAULT_RECIPE['die_width_mm']
    die_height_mm: float = DEFAULT_RECIPE['die_height_mm']
    street_width_um: float = DEFAULT_RECIPE['street_width_um']
    blade_diameter_mm: float = DEFAULT_RECIPE['blade_diameter_mm']
    blade_thickness_um: float = DEFAULT_RECIPE['blade_thickness_um']
    blade_bond: Union[BladeBond, str] = BladeBond.RESIN
    rpm: float = DEFAULT_RECIPE['rpm']
    feed_mm_per_s: float = DEFAULT_RECIPE['feed_mm_per_s']
    coolant_l_per_min: float = DEFAULT_RECIPE['coolant_l_per_min']
    wear_factor: float = DEFAULT_RECIPE['wear_factor']

    @property
    def material_key(self) -> str:
        member = Material.parse(self.material)
        return member.value if member else str(self.material)

    @property
    def bond_key(self) -> str:
        member = BladeBond.parse(self.blade_bond)
        return member.value if member else str(self.blade_bond)

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> "ProcessInputs":
        """Builds inputs from a flat mapping (session state, JSON); unknown keys are ignored."""
        names = {f.name for f in fields(cls)}
        kwargs = {k: v for k, v in params.items() if k in names}
        if 'material' in kwargs:
            kwargs['material'] = Material.parse(kwargs['material']) or kwargs['material']
        if 'blade_bond' in kwargs:
            kwargs['blade_bond'] = BladeBond.parse(kwargs['blade_bond']) or kwargs['blade_bond']
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['material'] = self.material_key
        data['blade_bond'] = self.bond_key
        return data

@dataclass(frozen=True)
class DerivedMetrics:
    """Everything computed from a ProcessInputs; recomputed on every change."""
    tip_speed_mps: float
    kerf_um: float
    spindle_power_kw: float
    chipping_risk: Union[int, float]  # int 0-100, NaN when inputs were not numeric
    coolant_suggestion_l_per_min: float
    feed_suggestion_mm_per_s: float
    rpm_suggestion: float

@dataclass(frozen=True)
class DieLayout:
    """Rectangular die grid fitted to the wafer diameter."""
    columns: Union[int, float]
    rows: Union[int, float]
    usable_dies: Union[int, float]

@dataclass(frozen=True)
class WaferMapRecord:
    x: Union[int, float]
    y: Union[int, float]
    status: DieStatus = DieStatus.GOOD

    @property
    def is_bad(self) -> bool:
        return self.status is DieStatus.BAD

@dataclass(frozen=True)
class VerificationSpec:
    """Acceptance band for one measured parameter of a dummy-run wafer."""
    name: str
    nominal: float
    lower_bound: float
    upper_bound: float
    key: str
