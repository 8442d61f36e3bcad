"""Software stand-in for a BLDC driver, used when no hardware is attached."""

from __future__ import annotations

import logging
import math
from collections import deque
from typing import Deque, Optional

from ..core.models import (
    Command,
    Disable,
    Enable,
    SetAngle,
    SetTorque,
    SetVelocity,
    StatusSample,
)

logger = logging.getLogger(__name__)

ANGLE_RATE = 500.0
VELOCITY_RATE = 251.0
TORQUE_RATE = 101.0


def simulate_status(t: float) -> StatusSample:
    """Reference telemetry at ``t`` seconds after the worker started."""
    return StatusSample(
        timestamp=t,
        angle=math.sin(t * ANGLE_RATE),
        velocity=math.cos(t * VELOCITY_RATE),
        torque=math.cos(2.0 * t * TORQUE_RATE),
    )


class SimulatedLink:
    """
    Accepts every command and reports synthetic telemetry.

    Setpoints and the power state are remembered so they can be inspected,
    but the telemetry is a pure function of elapsed time.
    """

    def __init__(self, history_size: int = 256) -> None:
        self.enabled = False
        self.angle_setpoint: Optional[float] = None
        self.velocity_setpoint: Optional[float] = None
        self.torque_setpoint: Optional[float] = None
        self.applied: Deque[Command] = deque(maxlen=max(1, int(history_size)))
        self.closed = False

    def apply(self, command: Command) -> None:
        if isinstance(command, SetAngle):
            self.angle_setpoint = command.value
        elif isinstance(command, SetVelocity):
            self.velocity_setpoint = command.value
        elif isinstance(command, SetTorque):
            self.torque_setpoint = command.value
        elif isinstance(command, Enable):
            self.enabled = True
        elif isinstance(command, Disable):
            self.enabled = False
        else:
            raise TypeError(f"Not a motor command: {command!r}")
        self.applied.append(command)
        logger.debug("Simulated link applied %r", command)

    def read_status(self, elapsed_s: float) -> StatusSample:
        return simulate_status(elapsed_s)

    def close(self) -> None:
        self.closed = True
