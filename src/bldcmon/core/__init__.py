"""Core relay: commands in, telemetry out.

Operator commands travel through a :class:`Channel` to the
:class:`DeviceWorker`, which owns the device link and emits one
:class:`StatusSample` per tick onto a second channel. The
:class:`TelemetrySink` drains that channel on the rendering thread and keeps
the :class:`PlotBuffer` that the GUI draws.
"""

from .channels import Channel, ChannelClosed
from .dispatch import CommandDispatcher
from .models import (
    Command,
    Disable,
    Enable,
    PlotChannel,
    SetAngle,
    SetTorque,
    SetVelocity,
    StatusSample,
    format_command,
    parse_command,
)
from .plot_buffer import PlotBuffer
from .ringbuffer import RingBuffer
from .telemetry_sink import TelemetrySink
from .worker import DEFAULT_SAMPLE_PERIOD_S, DeviceWorker, WorkerHandle, start_worker
from .wiring import RelayHandles, build_relay

__all__ = [
    "Channel",
    "ChannelClosed",
    "Command",
    "CommandDispatcher",
    "DEFAULT_SAMPLE_PERIOD_S",
    "DeviceWorker",
    "Disable",
    "Enable",
    "PlotBuffer",
    "PlotChannel",
    "RelayHandles",
    "RingBuffer",
    "SetAngle",
    "SetTorque",
    "SetVelocity",
    "StatusSample",
    "TelemetrySink",
    "WorkerHandle",
    "build_relay",
    "format_command",
    "parse_command",
    "start_worker",
]
