"""Desktop control surface built with PySide6/Qt and pyqtgraph.

:mod:`gui.main_window` lays out the setpoint rows, power buttons and live
plot; :mod:`gui.widgets` houses the reusable pieces. Streaming and command
relay are delegated to :mod:`bldcmon.core`.
"""
