from __future__ import annotations

from typing import Optional

import numpy as np
import pyqtgraph as pg
from PySide6.QtWidgets import QVBoxLayout, QWidget

from ...core.models import PlotChannel

_CHANNEL_UNITS = {
    PlotChannel.ANGLE: "rad",
    PlotChannel.VELOCITY: "rad/s",
    PlotChannel.TORQUE: "N·m",
}


class TelemetryPlot(QWidget):
    """Single pyqtgraph plot showing the active telemetry channel over time."""

    def __init__(self, parent: Optional[QWidget] = None, line_width: float = 1.5) -> None:
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._plot_widget = pg.PlotWidget(self)
        layout.addWidget(self._plot_widget)

        plot = self._plot_widget.getPlotItem()
        plot.setMenuEnabled(False)
        plot.showGrid(x=True, y=True, alpha=0.3)
        plot.setLabel("bottom", "Time", units="s")
        plot.enableAutoRange(x=True, y=True)
        # skip drawing points that share a pixel; capture windows get long
        plot.setDownsampling(auto=True, mode="peak")
        plot.setClipToView(True)
        self._plot = plot
        self._line = plot.plot([], [], pen=pg.mkPen(width=max(1.0, float(line_width))))

    def set_channel(self, channel: PlotChannel) -> None:
        self._plot.setLabel("left", channel.label, units=_CHANNEL_UNITS.get(channel))

    def set_data(self, times: np.ndarray, values: np.ndarray) -> None:
        self._line.setData(times, values)

    def clear_data(self) -> None:
        self._line.setData([], [])
