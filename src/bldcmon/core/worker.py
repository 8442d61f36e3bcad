"""
Device worker: the single owner of the device link.

Each tick the worker applies every pending command in arrival order, reads
one status sample from the link and queues it on the status channel, then
sleeps for the sampling period. Neither channel operation ever waits, so
samples keep flowing at cadence whether or not commands arrive and however
slowly the consumer drains.
"""

from __future__ import annotations

import logging
import math
import threading
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

from ..tools.debug import debug_enabled
from .channels import Channel
from .models import Command, StatusSample

if TYPE_CHECKING:  # pragma: no cover - typing only
    from ..link.base import DeviceLink

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_PERIOD_S = 0.001
_DEBUG_LOG_INTERVAL_S = 5.0


class DeviceWorker:
    """Bridges the command channel to the link and the link to the status channel."""

    def __init__(
        self,
        link: "DeviceLink",
        commands: Channel[Command],
        status: Channel[StatusSample],
        *,
        sample_period_s: float = DEFAULT_SAMPLE_PERIOD_S,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if sample_period_s <= 0:
            raise ValueError("sample_period_s must be positive")
        self._link = link
        self._commands = commands
        self._status = status
        self.sample_period_s = float(sample_period_s)
        self._clock = clock
        self._started_at: Optional[float] = None
        self._last_timestamp: Optional[float] = None
        self._status_dropped = False
        self.applied = 0
        self.emitted = 0
        self.failed_commands = 0

    @property
    def link(self) -> "DeviceLink":
        return self._link

    def step(self) -> Optional[StatusSample]:
        """Run one iteration without sleeping and return the emitted sample."""
        if self._started_at is None:
            self._started_at = self._clock()

        for command in self._commands.drain():
            self._apply(command)

        timestamp = self._next_timestamp()
        try:
            sample = self._link.read_status(timestamp)
        except Exception:
            logger.exception("Device link failed to report status at t=%.6f", timestamp)
            return None

        if self._status.try_send(sample):
            self.emitted += 1
        elif not self._status_dropped:
            self._status_dropped = True
            logger.debug("Status channel closed; dropping telemetry from now on")
        return sample

    def _apply(self, command: Command) -> None:
        try:
            self._link.apply(command)
        except Exception:
            self.failed_commands += 1
            logger.exception("Failed to apply %r; continuing", command)
            return
        self.applied += 1

    def _next_timestamp(self) -> float:
        assert self._started_at is not None
        elapsed = max(0.0, self._clock() - self._started_at)
        last = self._last_timestamp
        if last is not None and elapsed <= last:
            # clock did not advance since the previous tick
            elapsed = math.nextafter(last, math.inf)
        self._last_timestamp = elapsed
        return elapsed

    def run(self, stop_event: threading.Event) -> None:
        """Tick until ``stop_event`` is set, then release the link."""
        debug_on = debug_enabled()
        debug_last_log = time.perf_counter()
        debug_last_emitted = 0
        logger.info("Device worker started (period %.3f ms)", self.sample_period_s * 1000.0)
        try:
            while not stop_event.is_set():
                self.step()
                if debug_on:
                    now = time.perf_counter()
                    if now - debug_last_log >= _DEBUG_LOG_INTERVAL_S:
                        window = self.emitted - debug_last_emitted
                        logger.debug(
                            "worker emitted=%d recent≈%.1f Hz applied=%d failed=%d",
                            self.emitted,
                            window / (now - debug_last_log),
                            self.applied,
                            self.failed_commands,
                        )
                        debug_last_log = now
                        debug_last_emitted = self.emitted
                stop_event.wait(self.sample_period_s)
        finally:
            self._commands.close()
            try:
                self._link.close()
            except Exception:
                logger.exception("Error while closing device link")
            logger.info(
                "Device worker stopped after %d sample(s), %d command(s) applied",
                self.emitted,
                self.applied,
            )


@dataclass
class WorkerHandle:
    """Owned handle to a running device worker thread."""

    thread: threading.Thread
    stop_event: threading.Event
    commands: Channel[Command]
    status: Channel[StatusSample]
    worker: DeviceWorker

    def stop(self, *, join: bool = False, timeout: Optional[float] = None) -> None:
        self.stop_event.set()
        if join:
            self.thread.join(timeout)

    def is_alive(self) -> bool:
        return self.thread.is_alive()


def start_worker(
    link: "DeviceLink",
    *,
    sample_period_s: float = DEFAULT_SAMPLE_PERIOD_S,
    commands: Optional[Channel[Command]] = None,
    status: Optional[Channel[StatusSample]] = None,
    thread_name: Optional[str] = None,
) -> WorkerHandle:
    """Start the device worker on a daemon thread and return its handle."""
    command_channel: Channel[Command] = commands if commands is not None else Channel("commands")
    status_channel: Channel[StatusSample] = status if status is not None else Channel("status")
    worker = DeviceWorker(
        link,
        command_channel,
        status_channel,
        sample_period_s=sample_period_s,
    )
    stop_event = threading.Event()
    thread = threading.Thread(
        target=worker.run,
        args=(stop_event,),
        name=thread_name or "BldcDeviceWorker",
        daemon=True,
    )
    thread.start()
    return WorkerHandle(
        thread=thread,
        stop_event=stop_event,
        commands=command_channel,
        status=status_channel,
        worker=worker,
    )
