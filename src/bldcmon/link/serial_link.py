"""Text command protocol carried over a serial port."""

from __future__ import annotations

import logging
from typing import Optional

import serial

from .base import DeviceLink, LinkError
from .text import TextCommandLink

logger = logging.getLogger(__name__)


class SerialCommandLink(TextCommandLink):
    """
    Send ``format_command`` lines, ASCII encoded and ``\\n`` terminated,
    to a motor driver on a serial port.
    """

    def __init__(
        self,
        port: str,
        baudrate: int = 115200,
        *,
        telemetry: Optional[DeviceLink] = None,
        timeout: float = 0.01,
        write_timeout: float = 0.05,
    ) -> None:
        super().__init__(stream=None, telemetry=telemetry)
        try:
            self._serial = serial.Serial(port, baudrate, timeout=timeout, write_timeout=write_timeout)
        except (serial.SerialException, ValueError) as exc:
            raise LinkError(f"Could not open {port} @ {baudrate} baud: {exc}") from exc
        logger.info("Opened %s @ %d baud", port, baudrate)

    def _write_line(self, line: str) -> None:
        try:
            self._serial.write((line + "\n").encode("ascii"))
        except serial.SerialException as exc:
            raise LinkError(f"Serial write error: {exc}") from exc

    def close(self) -> None:
        try:
            if self._serial.is_open:
                self._serial.close()
                logger.info("Serial port %s closed", self._serial.port)
        finally:
            super().close()
