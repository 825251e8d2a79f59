import math
import unittest

from dicing_toolkit.core.geometry import GeometryEngine, LaneCounts
from dicing_toolkit.core.models import DieLayout


class TestTipSpeed(unittest.TestCase):
    def test_default_blade(self):
        # 58 mm blade at 30000 rpm
        tip = GeometryEngine.tip_speed_mps(58, 30000)
        self.assertAlmostEqual(tip, math.pi * 29, places=6)
        self.assertLess(abs(tip - 90.99), 0.5)

    def test_zero_rpm(self):
        self.assertEqual(GeometryEngine.tip_speed_mps(58, 0), 0)

    def test_window(self):
        self.assertTrue(GeometryEngine.tip_speed_in_window(30))
        self.assertTrue(GeometryEngine.tip_speed_in_window(45))
        self.assertFalse(GeometryEngine.tip_speed_in_window(45.01))
        self.assertFalse(GeometryEngine.tip_speed_in_window(float('nan')))


class TestKerf(unittest.TestCase):
    def test_new_blade(self):
        self.assertEqual(GeometryEngine.estimate_kerf_um(30, 0), 30)

    def test_worn_blade(self):
        self.assertAlmostEqual(GeometryEngine.estimate_kerf_um(30, 0.2), 30.72)
        self.assertAlmostEqual(GeometryEngine.estimate_kerf_um(30, 1), 33.6)


class TestDieCount(unittest.TestCase):
    def test_default_recipe(self):
        layout = GeometryEngine.die_count(300, 5, 5, 60)
        self.assertIsInstance(layout, DieLayout)
        self.assertEqual(layout.columns, 59)
        self.assertEqual(layout.rows, 59)
        # Grid covers more than the circle, so usable = circle area / pitch^2
        self.assertEqual(layout.usable_dies, 2760)

    def test_usable_never_exceeds_grid(self):
        layout = GeometryEngine.die_count(100, 3, 7, 80)
        self.assertLessEqual(layout.usable_dies, layout.columns * layout.rows)
        self.assertGreaterEqual(layout.usable_dies, 0)

    def test_larger_wafer_gives_more_dies(self):
        d200 = GeometryEngine.die_count(200, 5, 5, 60).usable_dies
        d300 = GeometryEngine.die_count(300, 5, 5, 60).usable_dies
        self.assertGreaterEqual(d300, d200)

    def test_wider_street_gives_fewer_dies(self):
        narrow = GeometryEngine.die_count(300, 5, 5, 40).usable_dies
        wide = GeometryEngine.die_count(300, 5, 5, 120).usable_dies
        self.assertLessEqual(wide, narrow)

    def test_zero_pitch(self):
        layout = GeometryEngine.die_count(300, 0, 0, 0)
        self.assertEqual((layout.columns, layout.rows, layout.usable_dies), (0, 0, 0))

    def test_negative_pitch(self):
        layout = GeometryEngine.die_count(300, -1, -1, 0)
        self.assertEqual((layout.columns, layout.rows, layout.usable_dies), (0, 0, 0))

    def test_die_larger_than_wafer(self):
        layout = GeometryEngine.die_count(300, 400, 400, 60)
        self.assertEqual(layout.usable_dies, 0)

    def test_nan_input(self):
        layout = GeometryEngine.die_count(float('nan'), 5, 5, 60)
        self.assertTrue(math.isnan(layout.columns))
        self.assertTrue(math.isnan(layout.usable_dies))


class TestLaneCounts(unittest.TestCase):
    def test_default_recipe(self):
        lanes = GeometryEngine.lane_counts(300, 5, 5, 60)
        self.assertEqual(lanes, LaneCounts(58, 58))
        self.assertEqual(lanes.total, 116)

    def test_never_negative(self):
        lanes = GeometryEngine.lane_counts(300, 400, 400, 60)
        self.assertEqual(lanes.total, 0)


if __name__ == '__main__':
    unittest.main()
