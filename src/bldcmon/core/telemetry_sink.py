"""Consumer side of the status channel: turns samples into a plot series."""

from __future__ import annotations

import logging
from typing import Optional

from ..analysis.rate import RateController
from .channels import Channel
from .models import PlotChannel, StatusSample
from .plot_buffer import PlotBuffer

logger = logging.getLogger(__name__)


class TelemetrySink:
    """
    Drain the status channel and accumulate the selected scalar while armed.

    The sink is pull-based: whoever renders calls :meth:`refresh` at its own
    cadence, independent of how fast the device worker produces samples. All
    methods must be called from that one thread.

    The plot buffer only ever holds one scalar type from one capture window.
    It is cleared when the selected channel changes and when capture goes
    from disarmed to armed. Disarming keeps the last series on screen.
    """

    def __init__(
        self,
        status: Channel[StatusSample],
        *,
        channel: PlotChannel = PlotChannel.ANGLE,
        armed: bool = False,
        max_points: Optional[int] = None,
        rate_window: int = 500,
    ) -> None:
        self._status = status
        self._buffer = PlotBuffer(max_points)
        self._channel = PlotChannel.parse(channel)
        self._armed = bool(armed)
        # selection the current buffer contents were captured under
        self._buffer_channel = self._channel
        self._buffer_armed = self._armed
        self._latest: Optional[StatusSample] = None
        self._rate = RateController(window_size=rate_window)
        self._consumed = 0

    # ------------------------------------------------------------- selection
    @property
    def channel(self) -> PlotChannel:
        return self._channel

    @property
    def armed(self) -> bool:
        return self._armed

    def select_channel(self, channel: PlotChannel | str) -> None:
        """Switch the plotted field; a real change empties the buffer."""
        self._channel = PlotChannel.parse(channel)
        self._reconcile()

    def set_capture(self, armed: bool) -> None:
        """Arm or disarm capture; arming from disarmed empties the buffer."""
        self._armed = bool(armed)
        self._reconcile()

    def toggle_capture(self) -> bool:
        self.set_capture(not self._armed)
        return self._armed

    def _reconcile(self) -> None:
        if self._channel is not self._buffer_channel:
            logger.debug(
                "Plot channel %s -> %s; clearing %d point(s)",
                self._buffer_channel.value,
                self._channel.value,
                len(self._buffer),
            )
            self._buffer.clear()
            self._buffer_channel = self._channel
        if self._armed and not self._buffer_armed:
            logger.debug("Capture armed; clearing %d point(s)", len(self._buffer))
            self._buffer.clear()
        self._buffer_armed = self._armed

    # ----------------------------------------------------------------- drain
    def refresh(self) -> int:
        """
        Consume every sample currently queued and return how many there were.

        Never blocks; with nothing queued this returns 0 immediately.
        """
        self._reconcile()
        samples = self._status.drain()
        if not samples:
            return 0

        channel = self._channel
        for sample in samples:
            self._latest = sample
            self._consumed += 1
            self._rate.add_sample_time(sample.timestamp)
            if not self._armed:
                continue
            try:
                self._buffer.append(sample.timestamp, sample.project(channel))
            except ValueError as exc:
                logger.warning("Skipping out-of-order sample: %s", exc)
        return len(samples)

    def close(self) -> None:
        """Stop consuming; the worker's later sends are dropped."""
        self._status.close()

    # ------------------------------------------------------------------ view
    @property
    def buffer(self) -> PlotBuffer:
        return self._buffer

    @property
    def latest_sample(self) -> Optional[StatusSample]:
        return self._latest

    @property
    def rate_hz(self) -> float:
        return self._rate.estimated_hz

    @property
    def consumed(self) -> int:
        """Total samples taken off the status channel, armed or not."""
        return self._consumed
