"""Configuration objects and helpers for the monitor.

Settings live in an optional YAML file (see ``monitor.example.yaml``) and
are loaded into the typed :class:`MonitorConfig` dataclass from
:mod:`runtime`; command-line flags override individual fields.
"""

from .runtime import MonitorConfig, config_from_mapping, load_config

__all__ = ["MonitorConfig", "config_from_mapping", "load_config"]
