from .setpoint_row import SetpointRow
from .telemetry_plot import TelemetryPlot

__all__ = [
    "SetpointRow",
    "TelemetryPlot",
]
