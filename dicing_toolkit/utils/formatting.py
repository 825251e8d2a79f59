from typing import Any, Optional

from dicing_toolkit.core.config import UNKNOWN_PLACEHOLDER
from dicing_toolkit.core.units import is_finite

def format_number(value: Any, digits: int = 2) -> str:
    """Fixed-point text for display; anything non-finite or non-numeric renders as '-'."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return UNKNOWN_PLACEHOLDER
    if not is_finite(number):
        return UNKNOWN_PLACEHOLDER
    return f"{number:.{digits}f}"

def coerce_number(raw: Any) -> Optional[float]:
    """
    Converts raw user input to a float.
    None and blank strings mean "not entered" and return None;
    anything else that is not numeric becomes NaN.
    """
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        return float(raw)
    text = str(raw).strip()
    if not text:
        return None
    try:
        return float(text)
    except ValueError:
        return float('nan')

def format_plain(value: Any) -> str:
    """Shortest text for a recipe value: 300.0 -> '300', 1.5 -> '1.5'."""
    if isinstance(value, float) and is_finite(value) and value.is_integer():
        return str(int(value))
    return str(value)
