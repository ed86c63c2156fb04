"""
Grading Pipeline Service Module.

Chains the five stage services for one frame, behind the capture latch
of the scanning session:

1. S1 Frame Ingest: YUV 4:2:0 -> upright RGB raster
2. S2 Sharpness Gate: Laplacian variance > threshold
3. S3 Symbol Locator: external detector -> Found / NotFound
4. S4 Geometry Normalizer: loose crop + bar isolation
5. S5 Quality Grader: luminance metrics -> grade

Every frame is classified with a PipelineStatus. Only ACCEPTED frames
carry a GradingResult and may latch the session.

Follows:
- SRP: Only sequences stages and classifies outcomes
- DIP: Depends on stage service interfaces
"""

import itertools
import logging
import time
from datetime import datetime
from typing import Dict, Optional

from core.interfaces.barcode_detector_interface import Found
from core.interfaces.frame_interface import RawFrame
from core.session.capture_latch import CaptureLatch
from services.interfaces.frame_ingest_service_interface import IFrameIngestService
from services.interfaces.geometry_normalizer_service_interface import IGeometryNormalizerService
from services.interfaces.grading_pipeline_interface import (
    GradingResult,
    IGradingPipelineService,
    PipelineOutcome,
    PipelineStatus,
    ResultCallback
)
from services.interfaces.quality_grader_service_interface import IQualityGraderService
from services.interfaces.sharpness_gate_service_interface import ISharpnessGateService
from services.interfaces.symbol_locator_service_interface import ISymbolLocatorService
from services.performance_logger import PerformanceLogger


_STATUS_LOG_LEVELS = {
    PipelineStatus.ACCEPTED: logging.INFO,
    PipelineStatus.NOT_SHARP: logging.DEBUG,
    PipelineStatus.SYMBOL_NOT_FOUND: logging.DEBUG,
    PipelineStatus.SKIPPED_LATCHED: logging.DEBUG,
    PipelineStatus.BUSY: logging.DEBUG,
    PipelineStatus.MALFORMED_INPUT: logging.WARNING,
    PipelineStatus.INVALID_GEOMETRY: logging.WARNING,
    PipelineStatus.DETECTOR_ERROR: logging.ERROR,
}


class GradingPipelineService(IGradingPipelineService):
    """
    Frame-to-grade pipeline.
    
    A frame claims the session latch without blocking for its whole run.
    If another frame is in flight the new one is dropped as BUSY; if the
    session already captured, it is dropped as SKIPPED_LATCHED before any
    stage runs.
    """
    
    def __init__(
        self,
        ingestService: IFrameIngestService,
        sharpnessService: ISharpnessGateService,
        locatorService: ISymbolLocatorService,
        geometryService: IGeometryNormalizerService,
        gradingService: IQualityGraderService,
        performanceLogger: Optional[PerformanceLogger] = None
    ):
        """
        Initialize GradingPipelineService.
        
        Args:
            ingestService: Step 1 service.
            sharpnessService: Step 2 service.
            locatorService: Step 3 service.
            geometryService: Step 4 service.
            gradingService: Step 5 service.
            performanceLogger: Optional per-stage timing recorder.
        """
        self._ingestService = ingestService
        self._sharpnessService = sharpnessService
        self._locatorService = locatorService
        self._geometryService = geometryService
        self._gradingService = gradingService
        self._performanceLogger = performanceLogger
        self._sequence = itertools.count(1)
        self._logger = logging.getLogger(__name__)
    
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
            onResult: Called with the outcome of an ACCEPTED frame, after
                the latch has been released.
            
        Returns:
            PipelineOutcome classifying the frame.
        """
        frameId = frameId or self._nextFrameId()
        
        with latch.claimFrame() as claimed:
            if not claimed:
                outcome = PipelineOutcome(
                    status=PipelineStatus.BUSY,
                    frameId=frameId,
                    message="Another frame is in flight"
                )
            elif latch.isCaptured():
                outcome = PipelineOutcome(
                    status=PipelineStatus.SKIPPED_LATCHED,
                    frameId=frameId,
                    message=f"Session {latch.sessionId} already captured"
                )
            else:
                outcome = self._runStages(rawFrame, frameId)
                if outcome.accepted:
                    outcome.latched = latch.capture(outcome.result.grade)
        
        self._logOutcome(outcome)
        
        if outcome.accepted and onResult is not None:
            onResult(outcome)
        
        return outcome
    
    def _runStages(self, rawFrame: RawFrame, frameId: str) -> PipelineOutcome:
        startTime = time.time()
        timing: Dict[str, float] = {}
        
        def finish(status: PipelineStatus, message: str = "", result: Optional[GradingResult] = None) -> PipelineOutcome:
            timing["total"] = (time.time() - startTime) * 1000
            if self._performanceLogger is not None:
                self._performanceLogger.recordTiming(timing)
            return PipelineOutcome(
                status=status,
                frameId=frameId,
                result=result,
                message=message,
                timing=timing
            )
        
        # S1: Frame Ingest
        ingestResult = self._ingestService.ingest(rawFrame, frameId)
        timing["ingest"] = ingestResult.processingTimeMs
        if not ingestResult.success:
            return finish(PipelineStatus.MALFORMED_INPUT, ingestResult.errorMessage)
        raster = ingestResult.raster
        
        # S2: Sharpness Gate
        sharpnessResult = self._sharpnessService.evaluate(raster, frameId)
        timing["sharpness"] = sharpnessResult.processingTimeMs
        if not sharpnessResult.isSharp:
            return finish(
                PipelineStatus.NOT_SHARP,
                f"Laplacian variance {sharpnessResult.variance:.1f} <= {sharpnessResult.threshold}"
            )
        
        # S3: Symbol Locator
        locatorResult = self._locatorService.locate(raster, frameId)
        timing["locate"] = locatorResult.processingTimeMs
        if not locatorResult.success:
            return finish(PipelineStatus.DETECTOR_ERROR, locatorResult.errorMessage)
        if not isinstance(locatorResult.outcome, Found):
            return finish(PipelineStatus.SYMBOL_NOT_FOUND, "No symbol located")
        found = locatorResult.outcome
        
        # S4: Geometry Normalizer
        geometryResult = self._geometryService.normalize(
            raster, found.corners, frameId, found.decodedValue, found.format
        )
        timing["geometry"] = geometryResult.processingTimeMs
        if not geometryResult.success:
            return finish(PipelineStatus.INVALID_GEOMETRY, geometryResult.errorMessage)
        
        # S5: Quality Grader
        gradingResult = self._gradingService.grade(geometryResult.gradingImage, frameId)
        timing["grading"] = gradingResult.processingTimeMs
        
        result = GradingResult(
            decodedValue=found.decodedValue,
            format=found.format,
            corners=list(found.corners),
            grade=gradingResult.grade,
            normalizedImage=geometryResult.normalizedImage,
            gradingImage=geometryResult.gradingImage,
            overlayImage=geometryResult.overlayImage,
            metrics=gradingResult.metrics,
            sourceWidth=raster.shape[1],
            sourceHeight=raster.shape[0],
            barCount=geometryResult.barCount,
            ungradable=gradingResult.ungradable
        )
        return finish(PipelineStatus.ACCEPTED, result=result)
    
    def _logOutcome(self, outcome: PipelineOutcome) -> None:
        level = _STATUS_LOG_LEVELS[outcome.status]
        if outcome.accepted:
            result = outcome.result
            self._logger.log(
                level,
                f"[{outcome.frameId}] Grade {result.grade} for {result.format.value} "
                f"{result.decodedValue!r} (latched={outcome.latched}, "
                f"total={outcome.timing.get('total', 0.0):.1f}ms)"
            )
        else:
            self._logger.log(
                level,
                f"[{outcome.frameId}] {outcome.status.name}: {outcome.message}"
            )
    
    def _nextFrameId(self) -> str:
        now = datetime.now()
        timestamp = now.strftime("%Y%m%d_%H%M%S") + f"_{now.microsecond // 1000:03d}"
        return f"frame_{timestamp}_{next(self._sequence):04d}"
