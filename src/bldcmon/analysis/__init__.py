"""Lightweight analysis helpers that stay free of Qt and I/O dependencies."""

from .rate import RateController

__all__ = ["RateController"]
