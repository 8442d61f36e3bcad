"""Line-oriented text protocol: one ``"Angle 1.5"``-style line per command."""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

from ..core.models import Command, StatusSample, format_command
from .base import DeviceLink, LinkError
from .simulated import SimulatedLink

logger = logging.getLogger(__name__)


class TextCommandLink:
    """
    Write each command as a text line; read telemetry from another link.

    The text protocol only carries commands, so telemetry is delegated to
    ``telemetry`` (a :class:`SimulatedLink` unless told otherwise). Commands
    are forwarded to the telemetry link too, keeping its state in step.
    """

    def __init__(self, stream: Optional[TextIO] = None, telemetry: Optional[DeviceLink] = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self.telemetry: DeviceLink = telemetry if telemetry is not None else SimulatedLink()

    def apply(self, command: Command) -> None:
        line = format_command(command)
        try:
            self._write_line(line)
        except (OSError, ValueError) as exc:
            raise LinkError(f"Failed to send {line!r}: {exc}") from exc
        self.telemetry.apply(command)

    def _write_line(self, line: str) -> None:
        self._stream.write(line + "\n")
        self._stream.flush()

    def read_status(self, elapsed_s: float) -> StatusSample:
        return self.telemetry.read_status(elapsed_s)

    def close(self) -> None:
        self.telemetry.close()
