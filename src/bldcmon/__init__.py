"""BLDC Monitor: live command/telemetry relay for a brushless-motor actuator.

The :mod:`bldcmon.core` package holds the relay itself (channels, device
worker, telemetry sink), :mod:`bldcmon.link` the device links the worker
drives, and :mod:`bldcmon.gui` a PySide6 control surface on top of both.
"""

__version__ = "0.1.0"
