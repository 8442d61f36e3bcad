import pathlib
import sys
import tempfile
import unittest

# Ensure src/ is on path for direct test execution
ROOT = pathlib.Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from bldcmon.config import MonitorConfig, config_from_mapping, load_config  # noqa: E402
from bldcmon.core.models import PlotChannel  # noqa: E402


class MonitorConfigTest(unittest.TestCase):
    def test_defaults_match_reference_setup(self):
        cfg = MonitorConfig()
        self.assertEqual(cfg.sample_period_s, 0.001)
        self.assertIsNone(cfg.max_plot_points)
        self.assertEqual(cfg.link, "sim")
        self.assertIs(cfg.plot_channel, PlotChannel.ANGLE)
        self.assertEqual(cfg.refresh_interval_ms, 20)

    def test_mapping_flattens_monitor_block_and_ignores_unknown_keys(self):
        cfg = config_from_mapping(
            {
                "monitor": {"sample_period_s": 0.002, "initial_channel": "Torque"},
                "link": "STDOUT",
                "colour": "blue",
            }
        )
        self.assertEqual(cfg.sample_period_s, 0.002)
        self.assertEqual(cfg.initial_channel, "torque")
        self.assertEqual(cfg.link, "stdout")

    def test_sanitized_clamps_limits(self):
        cfg = MonitorConfig(sample_period_s=0.0, refresh_hz=0.0, max_plot_points=0).sanitized()
        self.assertEqual(cfg.sample_period_s, 1e-4)
        self.assertEqual(cfg.refresh_hz, 1.0)
        self.assertIsNone(cfg.max_plot_points)

    def test_sanitized_rejects_unknown_channel(self):
        with self.assertRaises(ValueError):
            MonitorConfig(initial_channel="current").sanitized()

    def test_overrides_skip_none(self):
        cfg = MonitorConfig().with_overrides(link="serial", serial_port="/dev/ttyACM0", baudrate=None)
        self.assertEqual(cfg.link, "serial")
        self.assertEqual(cfg.serial_port, "/dev/ttyACM0")
        self.assertEqual(cfg.baudrate, 115200)

    def test_load_missing_file_returns_defaults(self):
        self.assertEqual(load_config("/nonexistent/monitor.yaml"), MonitorConfig())
        self.assertEqual(load_config(None), MonitorConfig())

    def test_load_yaml_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "monitor.yaml"
            path.write_text(
                "monitor:\n  refresh_hz: 30\n  max_plot_points: 2000\n  capture_on_start: false\n",
                encoding="utf-8",
            )
            cfg = load_config(path)
        self.assertEqual(cfg.refresh_hz, 30.0)
        self.assertEqual(cfg.max_plot_points, 2000)
        self.assertFalse(cfg.capture_on_start)

    def test_load_rejects_non_mapping(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = pathlib.Path(tmpdir) / "monitor.yaml"
            path.write_text("- just\n- a list\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(path)


if __name__ == "__main__":
    unittest.main()
