# Core module for Barcode Grader
# Contains interfaces and implementations for ingest, detection, geometry, grading and session state

from core.interfaces.frame_interface import RawFrame, PlaneBuffer
from core.interfaces.barcode_detector_interface import (
    IBarcodeDetector,
    BarcodeFormat,
    DetectionOutcome,
    Found,
    NotFound
)
from core.interfaces.grader_interface import Grade, QualityMetrics, GradingThresholds
from core.exceptions import BarcodeGraderError, MalformedInputError, InvalidGeometryError
from core.session.capture_latch import CaptureLatch, LatchState

__all__ = [
    "RawFrame",
    "PlaneBuffer",
    "IBarcodeDetector",
    "BarcodeFormat",
    "DetectionOutcome",
    "Found",
    "NotFound",
    "Grade",
    "QualityMetrics",
    "GradingThresholds",
    "BarcodeGraderError",
    "MalformedInputError",
    "InvalidGeometryError",
    "CaptureLatch",
    "LatchState",
]
