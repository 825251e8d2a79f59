"""
Material Property Table.

Per-material and per-bond constants used by the setpoint, power and risk
models. Lookups accept either the enum member or its string key; anything that
does not resolve to a known member gets the explicit UNKNOWN entry.
"""
from dataclasses import dataclass
from typing import Dict, Union

from dicing_toolkit.enums import Material, BladeBond

@dataclass(frozen=True)
class MaterialProperties:
    feed_base_mm_s: float     # feed at 1 mm thickness
    rpm_factor: float         # scales the target tip speed
    power_coefficient: float  # kW per (mm/s * mm * mm)
    risk_base: float          # chipping risk baseline score

@dataclass(frozen=True)
class BondProperties:
    rpm_factor: float

MATERIAL_TABLE: Dict[Material, MaterialProperties] = {
    Material.SI: MaterialProperties(feed_base_mm_s=2.0, rpm_factor=1.0, power_coefficient=0.015, risk_base=25),
    Material.GAAS: MaterialProperties(feed_base_mm_s=1.2, rpm_factor=0.9, power_coefficient=0.02, risk_base=40),
    Material.SIC: MaterialProperties(feed_base_mm_s=0.7, rpm_factor=1.15, power_coefficient=0.06, risk_base=55),
    Material.SAPPHIRE: MaterialProperties(feed_base_mm_s=0.5, rpm_factor=1.2, power_coefficient=0.07, risk_base=60),
    Material.GLASS: MaterialProperties(feed_base_mm_s=0.8, rpm_factor=1.05, power_coefficient=0.018, risk_base=45),
}

UNKNOWN_MATERIAL = MaterialProperties(feed_base_mm_s=1.0, rpm_factor=1.0, power_coefficient=0.02, risk_base=35)

BOND_TABLE: Dict[BladeBond, BondProperties] = {
    BladeBond.RESIN: BondProperties(rpm_factor=1.0),
    BladeBond.METAL: BondProperties(rpm_factor=0.9),
    BladeBond.HYBRID: BondProperties(rpm_factor=1.1),
}

UNKNOWN_BOND = BondProperties(rpm_factor=1.0)

def material_properties(material: Union[Material, str, None]) -> MaterialProperties:
    member = Material.parse(material)
    if member is None:
        return UNKNOWN_MATERIAL
    return MATERIAL_TABLE[member]

def bond_properties(bond: Union[BladeBond, str, None]) -> BondProperties:
    member = BladeBond.parse(bond)
    if member is None:
        return UNKNOWN_BOND
    return BOND_TABLE[member]
