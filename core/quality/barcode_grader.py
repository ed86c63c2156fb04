"""
Barcode Grader Module.

Grades the print quality of an isolated bar region from luminance
statistics: contrast range, horizontal edge density and vertical noise.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Optional

import numpy as np

from core.interfaces.grader_interface import (
    Grade,
    GradingThresholds,
    IQualityGrader,
    QualityMetrics
)


class BarcodeGrader(IQualityGrader):
    """
    Multi-metric print quality grader.
    
    Luminance per pixel is floor(0.299R + 0.587G + 0.114B). Metrics:
    - contrastRange: max - min luminance
    - edgeDensity: horizontal neighbours differing by > edgeThreshold
    - noiseCount: vertical neighbours differing by > noiseThreshold,
      first row and first column excluded
    
    Grades come from ordered tiers (strictest first, first match wins).
    Bars are vertical, so a clean print has many horizontal transitions
    and almost no vertical ones.
    """
    
    def __init__(
        self,
        thresholds: Optional[GradingThresholds] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize BarcodeGrader.
        
        Args:
            thresholds: Grading constants (defaults to the A/B/C table).
            logger: Logger instance for debug output.
        """
        self._thresholds = thresholds or GradingThresholds()
        self._logger = logger or logging.getLogger(__name__)
    
    @property
    def thresholds(self) -> GradingThresholds:
        """Get grading thresholds."""
        return self._thresholds
    
    @staticmethod
    def luminance(image: np.ndarray) -> np.ndarray:
        """
        Integer luminance of an RGB raster.
        
        Args:
            image: RGB raster (H, W, 3) or single channel (H, W).
            
        Returns:
            np.ndarray: int32 luminance (H, W).
        """
        if image.ndim == 2:
            return image.astype(np.int32)
        
        # Scaled by 1000 so the floor is exact
        rgb = image[..., :3].astype(np.int32)
        return (299 * rgb[..., 0] + 587 * rgb[..., 1] + 114 * rgb[..., 2]) // 1000
    
    def computeMetrics(self, region: np.ndarray) -> QualityMetrics:
        """
        Compute luminance statistics over every pixel of the region.
        
        Args:
            region: Isolated bar region (RGB numpy array).
            
        Returns:
            QualityMetrics for the region.
        """
        lum = self.luminance(region)
        height, width = lum.shape
        
        contrastRange = int(lum.max() - lum.min())
        meanLuminance = int(lum.sum() // lum.size)
        
        horizontal = np.abs(np.diff(lum, axis=1))
        edgeDensity = int(np.count_nonzero(horizontal > self._thresholds.edgeThreshold))
        
        # Row above, skipping the first row and column
        vertical = np.abs(lum[1:, 1:] - lum[:-1, 1:])
        noiseCount = int(np.count_nonzero(vertical > self._thresholds.noiseThreshold))
        
        return QualityMetrics(
            contrastRange=contrastRange,
            edgeDensity=edgeDensity,
            noiseCount=noiseCount,
            meanLuminance=meanLuminance,
            width=width,
            height=height
        )
    
    def assignGrade(self, metrics: QualityMetrics) -> Grade:
        """
        Map metrics to a grade. Pure function of the metrics.
        
        Args:
            metrics: Metrics of a region.
            
        Returns:
            Grade of the first matching tier, or the fallback grade.
        """
        for tier in self._thresholds.tiers:
            if tier.matches(metrics):
                return tier.grade
        return self._thresholds.fallbackGrade
    
    def grade(self, region: Optional[np.ndarray]) -> Grade:
        """
        Grade a region. No region at all is ungradable.
        
        Args:
            region: Isolated bar region, or None.
            
        Returns:
            Grade for the region.
        """
        if region is None or region.size == 0:
            return self._thresholds.ungradableGrade
        
        metrics = self.computeMetrics(region)
        grade = self.assignGrade(metrics)
        
        self._logger.debug(
            f"Graded region {metrics.width}x{metrics.height}: "
            f"range={metrics.contrastRange}, edges={metrics.edgeDensity}, "
            f"noise={metrics.noiseCount} -> {grade}"
        )
        return grade
