"""
Unit conversion and numeric guards.

The guards are numpy-backed so that NaN coming from unparsed user input
propagates through every formula instead of raising (math.floor and round
raise on NaN, and Python's min/max silently drop it).
"""
import numpy as np
from typing import Union

from dicing_toolkit.core.config import UM_PER_MM

Number = Union[int, float]

def mm_to_um(mm: Number) -> float:
    return mm * UM_PER_MM

def um_to_mm(um: Number) -> float:
    return um / UM_PER_MM

def clamp(value: Number, lower: Number, upper: Number) -> float:
    """Clamps value into [lower, upper]. NaN stays NaN, infinities clamp to the bounds."""
    return float(np.clip(value, lower, upper))

def maximum(a: Number, b: Number) -> float:
    """NaN-propagating max of two numbers."""
    return float(np.maximum(a, b))

def round_half_up(value: Number) -> float:
    """Rounds to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
    return float(np.floor(value + 0.5))

def floor_count(value: Number) -> Union[int, float]:
    """
    Floors a count. Finite results come back as int; NaN and infinities are
    returned unchanged as float so callers can see they were not computable.
    """
    floored = np.floor(value)
    if np.isfinite(floored):
        return int(floored)
    return float(floored)

def is_finite(value) -> bool:
    try:
        return bool(np.isfinite(value))
    except TypeError:
        return False
