"""Runtime configuration for the monitor: worker cadence, plotting and link."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping, Optional

import yaml

from ..core.models import PlotChannel


@dataclass(slots=True)
class MonitorConfig:
    """
    Tuning knobs for the device worker, the telemetry sink and the window.

    The defaults reproduce the reference setup: a simulated link sampled at
    1 kHz, a 50 Hz plot refresh and an unbounded plot buffer.
    """

    sample_period_s: float = 0.001
    refresh_hz: float = 50.0
    # None keeps every point of a capture window
    max_plot_points: Optional[int] = None

    link: str = "sim"
    serial_port: Optional[str] = None
    baudrate: int = 115200

    initial_channel: str = "angle"
    capture_on_start: bool = True

    ui_scale: float = 1.5
    window_width: int = 1024
    window_height: int = 768

    def sanitized(self) -> MonitorConfig:
        """Return a copy with derived limits applied."""
        max_points = self.max_plot_points
        if max_points is not None:
            max_points = int(max_points)
            if max_points <= 0:
                max_points = None
        return MonitorConfig(
            sample_period_s=max(1e-4, float(self.sample_period_s)),
            refresh_hz=max(1.0, float(self.refresh_hz)),
            max_plot_points=max_points,
            link=str(self.link).strip().lower(),
            serial_port=str(self.serial_port) if self.serial_port else None,
            baudrate=max(1, int(self.baudrate)),
            initial_channel=PlotChannel.parse(self.initial_channel).value,
            capture_on_start=bool(self.capture_on_start),
            ui_scale=max(0.5, float(self.ui_scale)),
            window_width=max(320, int(self.window_width)),
            window_height=max(240, int(self.window_height)),
        )

    def with_overrides(self, **overrides: Any) -> MonitorConfig:
        """Apply non-``None`` overrides (e.g. from the command line)."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes).sanitized()

    @property
    def plot_channel(self) -> PlotChannel:
        return PlotChannel.parse(self.initial_channel)

    @property
    def refresh_interval_ms(self) -> int:
        return max(1, int(round(1000.0 / self.refresh_hz)))


def _recognized_fields() -> set[str]:
    return {f.name for f in fields(MonitorConfig)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten a top-level ``monitor:`` block into the root mapping."""
    if "monitor" in data and isinstance(data["monitor"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "monitor":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def config_from_mapping(data: Mapping[str, Any] | None) -> MonitorConfig:
    """Build :class:`MonitorConfig` from ``data`` (ignoring unknown keys)."""
    if not data:
        return MonitorConfig()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return MonitorConfig(**payload).sanitized()


def load_config(path: str | Path | None) -> MonitorConfig:
    """
    Load configuration from a YAML file at ``path``.

    Missing files fall back to the default :class:`MonitorConfig`.
    """
    if path is None:
        return MonitorConfig()
    cfg_path = Path(path)
    if not cfg_path.exists():
        return MonitorConfig()
    with cfg_path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    if not isinstance(raw, Mapping):
        raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
    return config_from_mapping(raw)


__all__ = ["MonitorConfig", "config_from_mapping", "load_config"]
