"""Interface between the device worker and whatever drives the motor."""

from __future__ import annotations

from typing import Protocol

from ..core.models import Command, StatusSample


class LinkError(RuntimeError):
    """A device link could not be opened or could not carry a command."""


class DeviceLink(Protocol):
    """
    What the device worker needs from a motor connection.

    Only the worker thread calls these methods, so implementations need no
    locking of their own.
    """

    def apply(self, command: Command) -> None:  # pragma: no cover - protocol
        ...

    def read_status(self, elapsed_s: float) -> StatusSample:  # pragma: no cover - protocol
        ...

    def close(self) -> None:  # pragma: no cover - protocol
        ...
