import math
import pytest

from dicing_toolkit.core.units import (
    mm_to_um, um_to_mm, clamp, maximum, round_half_up, floor_count, is_finite
)
from dicing_toolkit.utils.formatting import format_number, coerce_number, format_plain


def test_unit_conversions():
    assert mm_to_um(1.5) == 1500
    assert um_to_mm(725) == pytest.approx(0.725)


def test_clamp_bounds_and_nan():
    assert clamp(5, 0, 1) == 1
    assert clamp(-5, 0, 1) == 0
    assert clamp(math.inf, 0, 100) == 100
    assert math.isnan(clamp(float('nan'), 0, 1))


def test_maximum_propagates_nan():
    assert maximum(0, 3) == 3
    assert math.isnan(maximum(0, float('nan')))


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(-2.5) == -2
    assert round_half_up(2.49) == 2


def test_floor_count():
    count = floor_count(59.29)
    assert count == 59
    assert isinstance(count, int)
    assert math.isnan(floor_count(float('nan')))


def test_is_finite():
    assert is_finite(1.0)
    assert not is_finite(float('nan'))
    assert not is_finite(math.inf)
    assert not is_finite("abc")
    assert not is_finite(None)


def test_format_number():
    assert format_number(1.234) == "1.23"
    assert format_number(91.1061, 1) == "91.1"
    assert format_number(float('nan')) == "-"
    assert format_number(math.inf) == "-"
    assert format_number("abc") == "-"


def test_coerce_number():
    assert coerce_number(None) is None
    assert coerce_number("   ") is None
    assert coerce_number(" 60 ") == 60.0
    assert coerce_number(7) == 7.0
    assert math.isnan(coerce_number("abc"))


def test_format_plain():
    assert format_plain(300.0) == "300"
    assert format_plain(1.5) == "1.5"
    assert format_plain(59) == "59"
    assert format_plain(float('nan')) == "nan"


@pytest.mark.parametrize("value", [0, 1, 0.725, 5.06, 300, 1e-3])
def test_mm_um_round_trip(value):
    assert um_to_mm(mm_to_um(value)) == pytest.approx(value)
