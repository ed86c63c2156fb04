"""
S2 Sharpness Gate Service Implementation.

Step 2 of the pipeline: variance of the Laplacian as a blur measure.
Frames at or below the threshold never reach detection.

Follows:
- SRP: Only handles sharpness gating
- DIP: Implements ISharpnessGateService
"""

import time

import numpy as np

from core.quality.sharpness_evaluator import SharpnessEvaluator
from services.interfaces.base_service_interface import BaseService
from services.interfaces.sharpness_gate_service_interface import (
    ISharpnessGateService,
    SharpnessGateServiceResult
)


class S2SharpnessGateService(ISharpnessGateService, BaseService):
    """
    Step 2: Sharpness Gate Service Implementation.
    """
    
    SERVICE_NAME = "s2_sharpness"
    
    def __init__(
        self,
        threshold: float = 100.0,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize S2SharpnessGateService.
        
        Args:
            threshold: Minimum Laplacian variance (exclusive).
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        self._evaluator = SharpnessEvaluator(threshold=threshold)
        self._logger.info(f"S2SharpnessGateService initialized (threshold={threshold})")
    
    def getThreshold(self) -> float:
        """Get the configured variance threshold."""
        return self._evaluator.threshold
    
    def evaluate(self, raster: np.ndarray, frameId: str) -> SharpnessGateServiceResult:
        """Measure sharpness and decide whether the frame may proceed."""
        startTime = time.time()
        
        variance = self._evaluator.computeVariance(raster)
        isSharp = self._evaluator.isSharp(variance)
        
        processingTimeMs = self._measureTime(startTime)
        self._logger.debug(
            f"[{frameId}] Laplacian variance={variance:.1f} "
            f"(threshold={self._evaluator.threshold}, sharp={isSharp}, "
            f"time={processingTimeMs:.2f}ms)"
        )
        
        return SharpnessGateServiceResult(
            variance=variance,
            threshold=self._evaluator.threshold,
            isSharp=isSharp,
            frameId=frameId,
            processingTimeMs=processingTimeMs
        )
