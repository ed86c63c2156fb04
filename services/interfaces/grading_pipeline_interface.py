"""
Grading Pipeline Interface Module.

Defines the per-frame outcome types of the grading pipeline and the
interface of the service that chains the five stages behind the
session's capture latch.

Follows:
- ISP: Callers only see processFrame
- DIP: Callers depend on this abstraction
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional

import numpy as np

from core.interfaces.barcode_detector_interface import BarcodeFormat, Quad
from core.interfaces.frame_interface import RawFrame
from core.interfaces.grader_interface import Grade, QualityMetrics
from core.session.capture_latch import CaptureLatch


class PipelineStatus(Enum):
    """Classification of one frame."""
    ACCEPTED = "accepted"
    NOT_SHARP = "not_sharp"
    SYMBOL_NOT_FOUND = "symbol_not_found"
    MALFORMED_INPUT = "malformed_input"
    INVALID_GEOMETRY = "invalid_geometry"
    DETECTOR_ERROR = "detector_error"
    SKIPPED_LATCHED = "skipped_latched"
    BUSY = "busy"
    
    @property
    def isContractViolation(self) -> bool:
        """True for statuses caused by bad input from the frame stream."""
        return self in (PipelineStatus.MALFORMED_INPUT, PipelineStatus.INVALID_GEOMETRY)


@dataclass(frozen=True)
class GradingResult:
    """
    Final result of a graded frame.
    
    Attributes:
        decodedValue: Payload reported by the detector, if decoded.
        format: Symbology reported by the detector.
        corners: Quad in upright raster coordinates.
        grade: Assigned grade.
        normalizedImage: Loose crop around the symbol (RGB).
        gradingImage: Isolated bar region, None if ungradable.
        overlayImage: Loose crop with the quad and value drawn on it.
        metrics: Metrics behind the grade, None if ungradable.
        sourceWidth: Width of the upright raster.
        sourceHeight: Height of the upright raster.
        barCount: Number of bar contours counted in the loose crop.
        ungradable: True if no bar region was found (grade F).
    """
    decodedValue: Optional[str]
    format: BarcodeFormat
    corners: Quad
    grade: Grade
    normalizedImage: np.ndarray
    gradingImage: Optional[np.ndarray]
    overlayImage: Optional[np.ndarray]
    metrics: Optional[QualityMetrics]
    sourceWidth: int
    sourceHeight: int
    barCount: int = 0
    ungradable: bool = False
    
    def toDict(self) -> Dict[str, Any]:
        """Serializable summary without image data."""
        return {
            "decodedValue": self.decodedValue,
            "format": self.format.value,
            "corners": [list(p) for p in self.corners],
            "grade": str(self.grade),
            "metrics": self.metrics.toDict() if self.metrics else None,
            "sourceWidth": self.sourceWidth,
            "sourceHeight": self.sourceHeight,
            "barCount": self.barCount,
            "ungradable": self.ungradable,
        }


@dataclass
class PipelineOutcome:
    """
    Outcome of processing one frame.
    
    Attributes:
        status: Classification of the frame.
        frameId: Frame identifier.
        result: GradingResult, present only when status is ACCEPTED.
        message: Human readable detail for non-accepted frames.
        latched: True if this frame moved the session latch to CAPTURED.
        timing: Stage name -> milliseconds, plus "total".
    """
    status: PipelineStatus
    frameId: str
    result: Optional[GradingResult] = None
    message: str = ""
    latched: bool = False
    timing: Dict[str, float] = field(default_factory=dict)
    
    @property
    def accepted(self) -> bool:
        """True if the frame produced a GradingResult."""
        return self.status == PipelineStatus.ACCEPTED


ResultCallback = Callable[[PipelineOutcome], None]


class IGradingPipelineService(ABC):
    """
    Interface for the frame-to-grade pipeline.
    
    Stages run strictly in order and each may short-circuit the frame:
    ingest -> sharpness -> locate -> geometry -> grading.
    """
    
    @abstractmethod
    def processFrame(
        self,
        rawFrame: RawFrame,
        latch: CaptureLatch,
        frameId: Optional[str] = None,
        onResult: Optional[ResultCallback] = None
    ) -> PipelineOutcome:
        """
        Run one frame through the pipeline under the session latch.
        
        Args:
            rawFrame: Frame from the external frame stream.
            latch: Capture latch of the current session.
            frameId: Frame identifier, generated if omitted.
            onResult: Called with the outcome when a result is produced.
            
        Returns:
            PipelineOutcome classifying the frame.
        """
        pass
