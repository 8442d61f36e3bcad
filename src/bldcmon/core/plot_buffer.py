"""Time-ordered ``(timestamp, value)`` series backing the live plot."""

from __future__ import annotations

from collections.abc import Iterator
from typing import List, Optional, Tuple

import numpy as np

from .ringbuffer import RingBuffer

PlotPoint = Tuple[float, float]


class PlotBuffer:
    """
    Append-only series of plot points with non-decreasing timestamps.

    By default the series grows without limit for the whole capture window.
    Passing ``max_points`` switches storage to a :class:`RingBuffer`, in which
    case the oldest points drop off the plot once the cap is reached.

    The buffer is owned by a single thread (the one that renders it), so no
    locking is done here.
    """

    __slots__ = ("_points", "_max_points")

    def __init__(self, max_points: Optional[int] = None) -> None:
        if max_points is not None and max_points <= 0:
            raise ValueError("max_points must be positive or None")
        self._max_points = max_points
        self._points: List[PlotPoint] | RingBuffer[PlotPoint] = (
            [] if max_points is None else RingBuffer(max_points)
        )

    @property
    def max_points(self) -> Optional[int]:
        return self._max_points

    def append(self, timestamp: float, value: float) -> None:
        """Append one point; raises ``ValueError`` if time would run backwards."""
        point = (float(timestamp), float(value))
        if len(self._points) and point[0] < self._points[-1][0]:
            raise ValueError(
                f"timestamp {point[0]!r} precedes last plotted timestamp {self._points[-1][0]!r}"
            )
        self._points.append(point)

    def clear(self) -> None:
        self._points.clear()

    def latest(self) -> Optional[PlotPoint]:
        if not len(self._points):
            return None
        return self._points[-1]

    def points(self) -> List[PlotPoint]:
        """Return a copy of the series, oldest first."""
        return list(self._points)

    def as_arrays(self) -> tuple[np.ndarray, np.ndarray]:
        """Return ``(timestamps, values)`` as ``float64`` arrays for plotting."""
        count = len(self._points)
        if count == 0:
            return np.empty(0, dtype=np.float64), np.empty(0, dtype=np.float64)
        data = np.fromiter(
            (coord for point in self._points for coord in point),
            dtype=np.float64,
            count=2 * count,
        ).reshape(count, 2)
        return data[:, 0].copy(), data[:, 1].copy()

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self) -> Iterator[PlotPoint]:
        return iter(self._points)

    def __bool__(self) -> bool:
        return len(self._points) > 0
