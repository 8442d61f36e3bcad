"""Control-surface side of the command channel."""

from __future__ import annotations

import logging

from .channels import Channel, ChannelClosed
from .models import Command, Disable, Enable, SetAngle, SetTorque, SetVelocity

logger = logging.getLogger(__name__)


class CommandDispatcher:
    """
    Turn operator actions into :class:`Command` values on the command channel.

    Dispatch is fire-and-forget. Each method returns ``True`` when the
    command was queued and ``False`` when the worker is gone; nothing is
    raised and nothing is retried. Setpoint values are not validated here.
    """

    def __init__(self, channel: Channel[Command]) -> None:
        self._channel = channel

    def dispatch(self, command: Command) -> bool:
        try:
            self._channel.send(command)
        except ChannelClosed:
            logger.debug("Dropped %r: command channel closed", command)
            return False
        return True

    def set_angle(self, value: float) -> bool:
        return self.dispatch(SetAngle(float(value)))

    def set_velocity(self, value: float) -> bool:
        return self.dispatch(SetVelocity(float(value)))

    def set_torque(self, value: float) -> bool:
        return self.dispatch(SetTorque(float(value)))

    def enable(self) -> bool:
        return self.dispatch(Enable())

    def disable(self) -> bool:
        return self.dispatch(Disable())
