"""Commands, telemetry samples and plot channel selection shared by the relay."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

import numpy as np


@dataclass(frozen=True)
class SetAngle:
    value: float


@dataclass(frozen=True)
class SetVelocity:
    value: float


@dataclass(frozen=True)
class SetTorque:
    value: float


@dataclass(frozen=True)
class Enable:
    pass


@dataclass(frozen=True)
class Disable:
    pass


Command = Union[SetAngle, SetVelocity, SetTorque, Enable, Disable]

# verb used on the text line protocol for each setpoint command
_SETPOINT_VERBS: dict[type, str] = {
    SetAngle: "Angle",
    SetVelocity: "Velocity",
    SetTorque: "Torque",
}
_VERB_TO_SETPOINT = {verb: cls for cls, verb in _SETPOINT_VERBS.items()}


def _format_value(value: float) -> str:
    # f32 precision, plain decimal digits, no exponent and no trailing ".0"
    return np.format_float_positional(np.float32(value), trim="-")


def format_command(command: Command) -> str:
    """
    Render ``command`` as one line of the text device protocol.

    Setpoints become ``"<Verb> <value>"`` (``"Angle 1.5"``, ``"Torque -2"``),
    with the value rounded to single precision and written in positional
    notation (``1e20`` is sent as ``"100000000000000000000"``). Power commands are the bare words ``"Enable"`` and ``"Disable"``. The
    returned string carries no line terminator.
    """
    if isinstance(command, Enable):
        return "Enable"
    if isinstance(command, Disable):
        return "Disable"
    verb = _SETPOINT_VERBS.get(type(command))
    if verb is None:
        raise TypeError(f"Not a motor command: {command!r}")
    return f"{verb} {_format_value(command.value)}"


def parse_command(line: str) -> Command:
    """Inverse of :func:`format_command`; raises ``ValueError`` on bad input."""
    parts = line.strip().split()
    if not parts:
        raise ValueError("Empty command line")
    verb, args = parts[0], parts[1:]
    if verb in ("Enable", "Disable"):
        if args:
            raise ValueError(f"{verb} takes no argument: {line!r}")
        return Enable() if verb == "Enable" else Disable()
    cls = _VERB_TO_SETPOINT.get(verb)
    if cls is None:
        raise ValueError(f"Unknown command verb {verb!r}")
    if len(args) != 1:
        raise ValueError(f"{verb} expects exactly one value: {line!r}")
    return cls(float(args[0]))


class PlotChannel(Enum):
    """Scalar field of :class:`StatusSample` that is projected into the plot."""

    ANGLE = "angle"
    VELOCITY = "velocity"
    TORQUE = "torque"

    @classmethod
    def parse(cls, name: str | PlotChannel) -> PlotChannel:
        if isinstance(name, cls):
            return name
        try:
            return cls(str(name).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown plot channel {name!r}") from None

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class StatusSample:
    """One telemetry observation; ``timestamp`` is seconds since worker start."""

    timestamp: float
    angle: float
    velocity: float
    torque: float

    def project(self, channel: PlotChannel) -> float:
        return float(getattr(self, channel.value))


__all__ = [
    "Command",
    "Disable",
    "Enable",
    "PlotChannel",
    "SetAngle",
    "SetTorque",
    "SetVelocity",
    "StatusSample",
    "format_command",
    "parse_command",
]
