"""Device links the worker drives: simulated, text-line and serial.

:func:`build_link` picks one from a :class:`~bldcmon.config.MonitorConfig`.
The serial link is imported lazily so pyserial is only touched when used.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import DeviceLink, LinkError
from .simulated import SimulatedLink, simulate_status
from .text import TextCommandLink

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config.runtime import MonitorConfig

LINK_KINDS = ("sim", "stdout", "serial")


def build_link(config: "MonitorConfig") -> DeviceLink:
    """Create the device link named by ``config.link``."""
    kind = config.link
    if kind == "sim":
        return SimulatedLink()
    if kind == "stdout":
        return TextCommandLink()
    if kind == "serial":
        if not config.serial_port:
            raise ValueError("serial link needs serial_port to be set")
        from .serial_link import SerialCommandLink

        return SerialCommandLink(config.serial_port, config.baudrate)
    raise ValueError(f"Unknown link {kind!r}; expected one of {', '.join(LINK_KINDS)}")


__all__ = [
    "DeviceLink",
    "LINK_KINDS",
    "LinkError",
    "SimulatedLink",
    "TextCommandLink",
    "build_link",
    "simulate_status",
]
