"""Operator input parsing for the setpoint fields (kept free of Qt imports)."""

from __future__ import annotations

import math
from typing import Optional


def parse_setpoint(text: str) -> Optional[float]:
    """Return ``text`` as a finite float, or ``None`` if it is not one.

    Only a plain decimal literal is accepted. Python's ``float()`` also takes
    digit-group underscores and surrounding whitespace, which are rejected here.
    """
    if not text or text != text.strip() or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value
