from __future__ import annotations

from typing import Optional

from PySide6.QtCore import Signal, Slot
from PySide6.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QPushButton, QWidget

from ..validation import parse_setpoint


class SetpointRow(QWidget):
    """
    Label, text field and "Set" button for one numeric setpoint.

    The button is only enabled while the field holds a valid number;
    clicking it emits :attr:`submitted` with that number.
    """

    submitted = Signal(float)

    def __init__(self, title: str, initial: float = 0.0, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._value: Optional[float] = float(initial)

        self._label = QLabel(title)
        self._edit = QLineEdit(f"{initial:g}")
        self._label.setBuddy(self._edit)
        self._button = QPushButton(self.tr("Set"))

        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._label)
        layout.addWidget(self._edit, stretch=1)
        layout.addWidget(self._button)

        self._edit.textChanged.connect(self._on_text_changed)
        self._edit.returnPressed.connect(self._on_submit)
        self._button.clicked.connect(self._on_submit)

    def value(self) -> Optional[float]:
        return self._value

    @Slot(str)
    def _on_text_changed(self, text: str) -> None:
        self._value = parse_setpoint(text)
        self._button.setEnabled(self._value is not None)

    @Slot()
    def _on_submit(self) -> None:
        if self._value is not None:
            self.submitted.emit(self._value)
