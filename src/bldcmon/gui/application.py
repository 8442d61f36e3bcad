"""Qt application entry point for the BLDC monitor.

This module parses the command line, configures logging, starts the device
worker and the :class:`~bldcmon.gui.main_window.MonitorWindow`, and runs the
Qt event loop. ``python main.py``, ``python -m bldcmon.gui.application`` and
the ``bldcmon`` console script all end up in :func:`main`.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Tuple

from PySide6.QtCore import QLoggingCategory
from PySide6.QtWidgets import QApplication

from ..config import MonitorConfig, load_config
from ..core import RelayHandles, build_relay
from ..link import LINK_KINDS, LinkError
from .main_window import MonitorWindow

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="BLDC motor monitor and controller")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="YAML configuration file (see monitor.example.yaml)",
    )
    parser.add_argument(
        "--link",
        choices=LINK_KINDS,
        default=None,
        help="Device link: simulated, text lines on stdout, or a serial port",
    )
    parser.add_argument("--port", type=str, default=None, help="Serial port for --link serial")
    parser.add_argument("--baud", type=int, default=None, help="Serial baud rate (default: 115200)")
    parser.add_argument(
        "--period-ms",
        type=float,
        default=None,
        help="Device worker sampling period in milliseconds (default: 1)",
    )
    parser.add_argument(
        "--refresh-hz",
        type=float,
        default=None,
        help="Plot refresh rate in Hz (default: 50)",
    )
    parser.add_argument(
        "--max-points",
        type=int,
        default=None,
        help="Keep at most this many plot points; 0 keeps the whole capture",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Logging verbosity (default: INFO)",
    )
    return parser


def _parse_cli_args(argv: list[str]) -> tuple[argparse.Namespace, list[str]]:
    parser = _build_arg_parser()
    args, qt_args = parser.parse_known_args(argv[1:])
    qt_argv = [argv[0], *qt_args]
    return args, qt_argv


def config_from_args(args: argparse.Namespace) -> MonitorConfig:
    """Load the config file named on the command line and apply flag overrides."""
    base = load_config(args.config)
    period_s = None if args.period_ms is None else float(args.period_ms) / 1000.0
    return base.with_overrides(
        link=args.link,
        serial_port=args.port,
        baudrate=args.baud,
        sample_period_s=period_s,
        refresh_hz=args.refresh_hz,
        max_plot_points=args.max_points,
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-7s [%(threadName)s] %(name)s: %(message)s",
    )


def create_app(
    qt_argv: list[str],
    config: MonitorConfig,
) -> Tuple[QApplication, MonitorWindow, RelayHandles]:
    """
    Create the QApplication, start the relay and build the main window.

    Returns
    -------
    app:
        The QApplication instance (owned by caller).
    window:
        The main window, not yet shown.
    relay:
        Running worker plus the dispatcher and sink the window uses.
    """
    # Qt only honours the scale factor if it is set before QApplication exists.
    os.environ.setdefault("QT_SCALE_FACTOR", f"{config.ui_scale:g}")
    app = QApplication.instance() or QApplication(qt_argv)
    QLoggingCategory.setFilterRules("qt.core.qobject.connect=false")

    relay = build_relay(config)
    window = MonitorWindow(relay, config)
    window.resize(config.window_width, config.window_height)
    return app, window, relay


def main(argv: list[str] | None = None) -> None:
    raw_argv = list(argv) if argv is not None else sys.argv
    args, qt_argv = _parse_cli_args(raw_argv)
    configure_logging(args.log_level)

    try:
        config = config_from_args(args)
    except ValueError as exc:
        raise SystemExit(f"Invalid configuration: {exc}") from exc

    try:
        app, win, relay = create_app(qt_argv, config)
    except (LinkError, ValueError) as exc:
        logger.error("Could not open the device link: %s", exc)
        raise SystemExit(2) from exc

    logger.info(
        "Monitoring via %s link, sampling every %.3f ms, refresh %.0f Hz",
        config.link,
        config.sample_period_s * 1000.0,
        config.refresh_hz,
    )
    win.show()
    try:
        code = app.exec()
    finally:
        relay.shutdown()
    raise SystemExit(code)


if __name__ == "__main__":
    main()
