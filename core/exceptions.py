"""
Core Exceptions Module.

Error types raised by the core layer when an input breaks the contract of
the frame-to-grade pipeline. Services catch these and turn them into
classified results; they never escape a frame.
"""

from typing import Any, Dict, Optional


class BarcodeGraderError(Exception):
    """
    Base class for all grading pipeline errors.
    
    Attributes:
        message: Human readable description.
        details: Optional structured context for logging.
    """
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} {self.details}"
        return self.message


class MalformedInputError(BarcodeGraderError):
    """Frame buffers or dimensions are inconsistent with the declared geometry."""


class InvalidGeometryError(BarcodeGraderError):
    """Corner points or a derived crop rectangle cannot be used for cropping."""
