"""Helpers for querying local process performance metrics."""

from __future__ import annotations

import logging
import os
from typing import Final

import psutil

logger = logging.getLogger(__name__)

_PROCESS: Final[psutil.Process] = psutil.Process(os.getpid())


def get_process_cpu_percent() -> float:
    """
    Return the CPU usage of this process since the previous call.

    The first call returns 0.0; the status bar polls it once a second, which
    is what psutil's interval-less mode expects.
    """
    try:
        return float(_PROCESS.cpu_percent(interval=None))
    except psutil.Error as exc:
        logger.debug("CPU percent unavailable: %r", exc)
        return 0.0
