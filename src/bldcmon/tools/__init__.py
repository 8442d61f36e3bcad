"""Opt-in debugging and instrumentation helpers."""
