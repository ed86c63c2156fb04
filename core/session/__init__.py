"""Scanning session module."""

from core.session.capture_latch import CaptureLatch, LatchState

__all__ = [
    'CaptureLatch',
    'LatchState'
]
