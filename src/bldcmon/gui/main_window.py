"""Main window for the BLDC monitor."""

from __future__ import annotations

import logging

from PySide6.QtCore import QTimer, Qt, Slot
from PySide6.QtGui import QCloseEvent, QFont
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..config import MonitorConfig
from ..core import PlotChannel, RelayHandles
from ..perf_system import get_process_cpu_percent
from ..tools.debug import time_block
from .widgets import SetpointRow, TelemetryPlot

logger = logging.getLogger(__name__)


class MonitorWindow(QMainWindow):
    """
    Setpoint controls, power buttons and the live telemetry plot.

    A QTimer running at ``refresh_hz`` drives the telemetry sink: each tick
    drains the status channel and redraws the plot from the plot buffer.
    """

    def __init__(self, relay: RelayHandles, config: MonitorConfig | None = None) -> None:
        super().__init__()
        self.setWindowTitle("BLDC monitor")
        self._relay = relay
        self._config = (config or MonitorConfig()).sanitized()
        self._plot_len = -1

        self._build_ui()

        self._refresh_timer = QTimer(self)
        self._refresh_timer.setTimerType(Qt.PreciseTimer)
        self._refresh_timer.setInterval(self._config.refresh_interval_ms)
        self._refresh_timer.timeout.connect(self._on_refresh_tick)
        self._refresh_timer.start()

        self._status_timer = QTimer(self)
        self._status_timer.setInterval(1000)
        self._status_timer.timeout.connect(self._update_status_bar)
        self._status_timer.start()

    def _build_ui(self) -> None:
        dispatcher = self._relay.dispatcher
        sink = self._relay.sink

        heading = QLabel(self.tr("BLDC Monitor"))
        font = QFont(heading.font())
        font.setPointSizeF(font.pointSizeF() * 1.6)
        font.setBold(True)
        heading.setFont(font)

        self.angle_row = SetpointRow(self.tr("Angle"))
        self.velocity_row = SetpointRow(self.tr("Velocity"))
        self.torque_row = SetpointRow(self.tr("Torque"))
        self.angle_row.submitted.connect(dispatcher.set_angle)
        self.velocity_row.submitted.connect(dispatcher.set_velocity)
        self.torque_row.submitted.connect(dispatcher.set_torque)

        self.disable_button = QPushButton(self.tr("Disable"))
        self.enable_button = QPushButton(self.tr("Enable"))
        self.disable_button.clicked.connect(dispatcher.disable)
        self.enable_button.clicked.connect(dispatcher.enable)
        power_row = QHBoxLayout()
        power_row.addWidget(self.disable_button)
        power_row.addWidget(self.enable_button)
        power_row.addStretch(1)

        self.channel_combo = QComboBox()
        for channel in PlotChannel:
            self.channel_combo.addItem(channel.label, channel.value)
        self.channel_combo.setCurrentIndex(self.channel_combo.findData(sink.channel.value))
        self.channel_combo.currentIndexChanged.connect(self._on_channel_changed)

        self.capture_check = QCheckBox(self.tr("Capture"))
        self.capture_check.setChecked(sink.armed)
        self.capture_check.toggled.connect(self._on_capture_toggled)

        plot_controls = QHBoxLayout()
        plot_controls.addWidget(QLabel(self.tr("Plot:")))
        plot_controls.addWidget(self.channel_combo)
        plot_controls.addWidget(self.capture_check)
        plot_controls.addStretch(1)

        self.plot = TelemetryPlot(self)
        self.plot.set_channel(sink.channel)

        container = QWidget()
        layout = QVBoxLayout(container)
        layout.addWidget(heading)
        layout.addWidget(self.angle_row)
        layout.addWidget(self.velocity_row)
        layout.addWidget(self.torque_row)
        layout.addLayout(power_row)
        layout.addLayout(plot_controls)
        layout.addWidget(self.plot, stretch=1)
        self.setCentralWidget(container)

        self._readout = QLabel("")
        self.statusBar().addWidget(self._readout, 1)

    # --------------------------------------------------------------- slots
    @Slot(int)
    def _on_channel_changed(self, index: int) -> None:
        data = self.channel_combo.itemData(index)
        if data is None:
            return
        channel = PlotChannel.parse(data)
        self._relay.sink.select_channel(channel)
        self.plot.set_channel(channel)
        self._redraw()

    @Slot(bool)
    def _on_capture_toggled(self, checked: bool) -> None:
        self._relay.sink.set_capture(checked)
        self._redraw()

    @Slot()
    def _on_refresh_tick(self) -> None:
        with time_block("refresh tick", emitter=logger.debug):
            self._relay.sink.refresh()
            self._redraw()

    def _redraw(self) -> None:
        buffer = self._relay.sink.buffer
        length = len(buffer)
        # an unbounded buffer only changes by growing or being cleared
        if length == self._plot_len and buffer.max_points is None:
            return
        self._plot_len = length
        if length == 0:
            self.plot.clear_data()
            return
        self.plot.set_data(*buffer.as_arrays())

    @Slot()
    def _update_status_bar(self) -> None:
        sink = self._relay.sink
        sample = sink.latest_sample
        if sample is None:
            values = self.tr("waiting for telemetry")
        else:
            values = (
                f"t={sample.timestamp:8.3f} s  angle={sample.angle:+.3f}  "
                f"velocity={sample.velocity:+.3f}  torque={sample.torque:+.3f}"
            )
        self._readout.setText(
            f"{values}   rate≈{sink.rate_hz:6.0f} Hz   points={len(sink.buffer)}   "
            f"cpu={get_process_cpu_percent():4.1f}%"
        )

    def closeEvent(self, event: QCloseEvent) -> None:
        self._refresh_timer.stop()
        self._status_timer.stop()
        try:
            self._relay.shutdown()
        except Exception:  # pragma: no cover - best-effort shutdown
            logger.exception("Failed to stop the device worker on close")
        super().closeEvent(event)
