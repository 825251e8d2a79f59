import math
import pytest

from dicing_toolkit.analytics.planning import (
    wafer_cycle_length_mm, estimate_throughput, blade_life_status, check_alignment
)


class TestThroughput:
    def test_default_recipe(self):
        t = estimate_throughput(300, 5, 5, 60, 1.5)
        assert (t.lanes_x, t.lanes_y) == (58, 58)
        assert t.total_cut_length_mm == 34800
        assert t.cycle_time_s == pytest.approx(23200)
        assert t.wafers_per_hour == pytest.approx(3600 / 23220)

    def test_zero_feed_uses_floor(self):
        t = estimate_throughput(300, 5, 5, 60, 0)
        assert t.cycle_time_s == pytest.approx(34800 / 0.001)

    def test_no_lanes(self):
        t = estimate_throughput(300, 400, 400, 60, 1.5)
        assert t.total_cut_length_mm == 0
        assert t.wafers_per_hour == pytest.approx(3600 / 20)

    def test_cycle_length(self):
        assert wafer_cycle_length_mm(300, 5, 5, 60) == 34800


class TestBladeLife:
    def test_new_blade(self):
        life = blade_life_status(1200, 0)
        assert life.life_used_pct == 0
        assert life.remaining_m == 1200
        assert not life.swap_soon
        assert life.note == "OK"

    def test_swap_soon(self):
        life = blade_life_status(1200, 1_100_000)
        assert life.life_used_pct == pytest.approx(91.6667, rel=1e-4)
        assert life.swap_soon
        assert life.note == "Swap soon"

    def test_capped_at_200(self):
        life = blade_life_status(1200, 3_000_000)
        assert life.life_used_pct == 200
        assert life.remaining_m == pytest.approx(-1800)

    def test_zero_rated_life(self):
        assert blade_life_status(0, 5).life_used_pct == 200
        assert math.isnan(blade_life_status(0, 0).life_used_pct)


class TestAlignment:
    def test_centered(self):
        check = check_alignment(300, 5, 5, 0, 0, 0)
        assert check.stage_shift_mm == 0
        assert check.edge_clearance_mm == pytest.approx(147.5)
        assert not check.needs_attention
        assert check.note == "OK"

    def test_shift_is_vector_length(self):
        check = check_alignment(300, 5, 5, 3000, 4000, 0)
        assert check.stage_shift_mm == pytest.approx(5)
        assert check.edge_clearance_mm == pytest.approx(142.5)

    def test_theta_out_of_range(self):
        assert check_alignment(300, 5, 5, 0, 0, 0.2).needs_attention
        assert check_alignment(300, 5, 5, 0, 0, -0.2).needs_attention
        assert not check_alignment(300, 5, 5, 0, 0, 0.1).needs_attention

    def test_low_clearance(self):
        check = check_alignment(10, 8, 8, 0, 0, 0)
        assert check.edge_clearance_mm == pytest.approx(1)
        assert not check.needs_attention
        check = check_alignment(10, 8, 8, 100, 0, 0)
        assert check.needs_attention
        assert check.note == "Check lanes"
