from __future__ import annotations

from collections import deque
from typing import Deque


class RateController:
    """
    Estimate the telemetry emission rate from sample timestamps.

    Notes
    -----
    - Timestamps are in seconds and assumed monotonic increasing.
    - Only the last ``window_size`` timestamps take part, so the estimate
      follows slowdowns of the device worker within a fraction of a second
      at the nominal 1 kHz rate.
    """

    def __init__(self, window_size: int = 500, default_hz: float = 0.0) -> None:
        if window_size <= 1:
            raise ValueError("window_size must be > 1")
        self._times: Deque[float] = deque(maxlen=window_size)
        self.default_hz = float(default_hz)

    def add_sample_time(self, t: float) -> None:
        self._times.append(float(t))

    @property
    def estimated_hz(self) -> float:
        """Samples per second over the current window, or ``default_hz``."""
        span = self.buffer_span_s
        if span <= 0:
            return self.default_hz
        return (len(self._times) - 1) / span

    @property
    def buffer_span_s(self) -> float:
        if len(self._times) < 2:
            return 0.0
        return self._times[-1] - self._times[0]
