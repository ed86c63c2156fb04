"""
S5 Quality Grader Service Implementation.

Step 5 of the pipeline: luminance contrast, edge density and noise over
the isolated bar region, mapped to a grade through the tier table.

Follows:
- SRP: Only handles grading
- DIP: Depends on IQualityGrader abstraction (interface)
"""

import time
from typing import Optional

import numpy as np

from core.interfaces.grader_interface import GradingThresholds
from core.quality.barcode_grader import BarcodeGrader
from services.interfaces.base_service_interface import BaseService
from services.interfaces.quality_grader_service_interface import (
    IQualityGraderService,
    QualityGraderServiceResult
)


class S5QualityGraderService(IQualityGraderService, BaseService):
    """
    Step 5: Quality Grader Service Implementation.
    """
    
    SERVICE_NAME = "s5_grading"
    
    def __init__(
        self,
        thresholds: Optional[GradingThresholds] = None,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize S5QualityGraderService.
        
        Args:
            thresholds: Grading thresholds, defaults when None.
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        self._grader = BarcodeGrader(thresholds=thresholds)
        self._thresholds = self._grader.thresholds
        self._logger.info(
            f"S5QualityGraderService initialized "
            f"(edgeThreshold={self._thresholds.edgeThreshold}, "
            f"noiseThreshold={self._thresholds.noiseThreshold})"
        )
    
    def grade(self, region: Optional[np.ndarray], frameId: str) -> QualityGraderServiceResult:
        """Grade a bar region, F when there is nothing to grade."""
        startTime = time.time()
        
        if region is None or region.size == 0:
            processingTimeMs = self._measureTime(startTime)
            self._logger.debug(f"[{frameId}] Ungradable region, grade {self._thresholds.ungradableGrade}")
            return QualityGraderServiceResult(
                grade=self._thresholds.ungradableGrade,
                metrics=None,
                ungradable=True,
                frameId=frameId,
                processingTimeMs=processingTimeMs
            )
        
        metrics = self._grader.computeMetrics(region)
        grade = self._grader.assignGrade(metrics)
        
        processingTimeMs = self._measureTime(startTime)
        self._logger.debug(
            f"[{frameId}] Grade {grade}: range={metrics.contrastRange}, "
            f"edges={metrics.edgeDensity}, noise={metrics.noiseCount}, "
            f"size={metrics.width}x{metrics.height}"
        )
        self._saveDebugJson(frameId, {"grade": str(grade), **metrics.toDict()})
        
        return QualityGraderServiceResult(
            grade=grade,
            metrics=metrics,
            ungradable=False,
            frameId=frameId,
            processingTimeMs=processingTimeMs
        )
