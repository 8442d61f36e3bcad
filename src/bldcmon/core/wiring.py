"""Factory helpers that wire the relay from configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from .dispatch import CommandDispatcher
from .telemetry_sink import TelemetrySink
from .worker import WorkerHandle, start_worker

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..config.runtime import MonitorConfig
    from ..link.base import DeviceLink

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RelayHandles:
    """Return value from :func:`build_relay` containing ready-to-use pieces."""

    worker: WorkerHandle
    dispatcher: CommandDispatcher
    sink: TelemetrySink

    def shutdown(self, timeout: Optional[float] = 1.0) -> None:
        """Stop the worker, wait for it, and stop accepting telemetry."""
        self.worker.stop(join=True, timeout=timeout)
        if self.worker.is_alive():
            logger.warning("Device worker did not stop within %.1f s", timeout or 0.0)
        self.sink.close()


def build_relay(cfg: "MonitorConfig", *, link: Optional["DeviceLink"] = None) -> RelayHandles:
    """
    Start a device worker and build the dispatcher and sink around it.

    Parameters
    ----------
    cfg:
        Runtime configuration (usually loaded from YAML).
    link:
        Device link to hand to the worker. When omitted one is created from
        ``cfg.link`` via :func:`bldcmon.link.build_link`.
    """
    normalized = cfg.sanitized()
    if link is None:
        from ..link import build_link

        link = build_link(normalized)

    worker = start_worker(link, sample_period_s=normalized.sample_period_s)
    sink = TelemetrySink(
        worker.status,
        channel=normalized.plot_channel,
        armed=normalized.capture_on_start,
        max_points=normalized.max_plot_points,
    )
    return RelayHandles(
        worker=worker,
        dispatcher=CommandDispatcher(worker.commands),
        sink=sink,
    )


__all__ = ["RelayHandles", "build_relay"]
