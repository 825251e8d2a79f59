"""
Enum Definitions Module.

This module contains Enumeration classes for the constant sets of values used
across the toolkit: wafer materials, blade bonds, die status in a wafer map,
verification outcomes and the dashboard tabs. Using enums instead of raw
strings improves readability and reduces the risk of typos.
"""
from enum import Enum
from typing import Optional, Union

class _LookupEnum(Enum):
    """Enum that can be resolved from its value or an existing member."""

    @classmethod
    def values(cls) -> list[str]:
        """Returns the string values of all enum members."""
        return [item.value for item in cls]

    @classmethod
    def parse(cls, key: Union[str, "_LookupEnum", None]):
        """Returns the matching member, or None for unknown keys."""
        if isinstance(key, cls):
            return key
        if key is None:
            return None
        text = str(key).strip()
        for item in cls:
            if text == item.value:
                return item
        return None

class Material(_LookupEnum):
    """Wafer substrate materials with tabulated dicing properties."""
    SI = "Si"
    GAAS = "GaAs"
    SIC = "SiC"
    SAPPHIRE = "Sapphire"
    GLASS = "Glass"

    @property
    def display_name(self) -> str:
        return MATERIAL_DISPLAY_NAMES[self]

class BladeBond(_LookupEnum):
    """Diamond blade bond types."""
    RESIN = "Resin"
    METAL = "Metal"
    HYBRID = "Hybrid"

    @property
    def display_name(self) -> str:
        return BOND_DISPLAY_NAMES[self]

class DieStatus(_LookupEnum):
    """Status of a die in an imported wafer map."""
    GOOD = "good"
    BAD = "bad"

    @classmethod
    def from_text(cls, text: Optional[str]) -> "DieStatus":
        """Anything other than 'bad' (case-insensitive) counts as a good die."""
        if text is not None and str(text).lower() == cls.BAD.value:
            return cls.BAD
        return cls.GOOD

class SpecStatus(_LookupEnum):
    """Outcome of comparing a measurement against a verification band."""
    PASS = "PASS"
    FAIL = "FAIL"
    UNKNOWN = "-"

class Tab(_LookupEnum):
    """Enumeration for the dashboard tabs, in display order."""
    PROCESS = "Process"
    PLANNING = "Planning"
    RISK = "Risk"
    MAP = "Map"
    LIFE = "Blade Life & Align"
    VERIFY = "Verification"
    SOP = "SOP"
    TESTS = "Tests"

MATERIAL_DISPLAY_NAMES = {
    Material.SI: "Silicon (100)",
    Material.GAAS: "GaAs",
    Material.SIC: "SiC",
    Material.SAPPHIRE: "Sapphire",
    Material.GLASS: "Borosilicate Glass",
}

BOND_DISPLAY_NAMES = {
    BladeBond.RESIN: "Resin-bonded diamond",
    BladeBond.METAL: "Metal-bonded diamond",
    BladeBond.HYBRID: "Hybrid bond",
}
