import unittest
from unittest.mock import patch

from dicing_toolkit.analytics.self_check import run_self_checks
from dicing_toolkit.analytics.models import CheckResult


class TestSelfChecks(unittest.TestCase):
    def test_all_pass(self):
        checks = run_self_checks()
        self.assertEqual(len(checks), 8)
        failed = [c.name for c in checks if not c.passed]
        self.assertEqual(failed, [])

    def test_names(self):
        names = [c.name for c in run_self_checks()]
        self.assertEqual(names[0], "Tip speed calc")
        self.assertIn("CSV parser counts", names)
        self.assertIn("Street width effect", names)

    def test_info(self):
        checks = {c.name: c for c in run_self_checks()}
        self.assertEqual(checks["Tip speed calc"].info, "91.11")
        self.assertEqual(checks["CSV parser counts"].info, "1 good / 1 bad")

    def test_failure_is_reported(self):
        with patch("dicing_toolkit.analytics.self_check.suggest_rpm", return_value=70000.0):
            with self.assertLogs("dicing_toolkit.analytics.self_check", level="WARNING"):
                checks = {c.name: c for c in run_self_checks()}
        self.assertFalse(checks["RPM suggestion in [8k,60k]"].passed)
        self.assertIsInstance(checks["RPM suggestion in [8k,60k]"], CheckResult)


if __name__ == '__main__':
    unittest.main()
