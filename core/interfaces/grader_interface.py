"""
Quality Grader Interface Module.

Defines grades, quality metrics and the tiered thresholds that map
metrics onto a grade.

Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, List, Optional

import numpy as np


class Grade(IntEnum):
    """
    Print quality grade, ordered by quality (A best, F worst).
    """
    A = 4
    B = 3
    C = 2
    D = 1
    F = 0
    
    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class QualityMetrics:
    """
    Luminance statistics of an isolated bar region.
    
    Attributes:
        contrastRange: Max minus min luminance (0-255).
        edgeDensity: Horizontally adjacent pairs whose luminance differs
            by more than the edge threshold.
        noiseCount: Vertically adjacent pairs whose luminance differs by
            more than the noise threshold.
        meanLuminance: Integer mean luminance of the region.
        width: Region width in pixels.
        height: Region height in pixels.
    """
    contrastRange: int
    edgeDensity: int
    noiseCount: int
    meanLuminance: int
    width: int
    height: int
    
    @property
    def contrast(self) -> float:
        """Contrast range normalized to [0, 1]."""
        return self.contrastRange / 255.0
    
    @property
    def area(self) -> int:
        """Number of pixels in the region."""
        return self.width * self.height
    
    def toDict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "contrastRange": self.contrastRange,
            "contrast": round(self.contrast, 4),
            "edgeDensity": self.edgeDensity,
            "noiseCount": self.noiseCount,
            "meanLuminance": self.meanLuminance,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class GradeTier:
    """
    One row of the grading table. All conditions must hold.
    
    Attributes:
        grade: Grade assigned when the tier matches.
        minContrast: Normalized contrast must be strictly greater.
        minEdgeDensity: Edge count must be strictly greater.
        minContrastRange: Contrast range must be strictly greater.
        noiseDivisor: Noise count must be below (width*height) // divisor.
    """
    grade: Grade
    minContrast: float
    minEdgeDensity: int
    minContrastRange: int
    noiseDivisor: int
    
    def matches(self, metrics: QualityMetrics) -> bool:
        """Check whether the metrics satisfy every condition of this tier."""
        return (
            metrics.contrast > self.minContrast
            and metrics.edgeDensity > self.minEdgeDensity
            and metrics.contrastRange > self.minContrastRange
            and metrics.noiseCount < metrics.area // self.noiseDivisor
        )


def _defaultTiers() -> List[GradeTier]:
    return [
        GradeTier(Grade.A, 0.5, 200, 128, 100),
        GradeTier(Grade.B, 0.25, 100, 64, 50),
        GradeTier(Grade.C, 0.125, 50, 32, 30),
    ]


@dataclass(frozen=True)
class GradingThresholds:
    """
    Empirical grading constants.
    
    Attributes:
        tiers: Ordered tiers, strictest first. First match wins.
        fallbackGrade: Grade when no tier matches.
        ungradableGrade: Grade when there is no region to grade.
        edgeThreshold: Luminance delta counted as an edge.
        noiseThreshold: Luminance delta counted as noise.
    """
    tiers: List[GradeTier] = field(default_factory=_defaultTiers)
    fallbackGrade: Grade = Grade.D
    ungradableGrade: Grade = Grade.F
    edgeThreshold: int = 50
    noiseThreshold: int = 15
    
    @classmethod
    def fromDict(cls, data: Optional[Dict[str, Any]]) -> "GradingThresholds":
        """
        Build thresholds from a config section.
        
        Expected layout:
            {"edgeThreshold": 50, "noiseThreshold": 15,
             "tiers": {"A": {"minContrast": 0.5, "minEdgeDensity": 200,
                             "minContrastRange": 128, "noiseDivisor": 100}, ...}}
        Missing keys fall back to the defaults.
        """
        defaults = cls()
        if not data:
            return defaults
        
        tierConfig = data.get("tiers", {}) or {}
        tiers = []
        for tier in defaults.tiers:
            override = tierConfig.get(tier.grade.name, {}) or {}
            tiers.append(GradeTier(
                grade=tier.grade,
                minContrast=float(override.get("minContrast", tier.minContrast)),
                minEdgeDensity=int(override.get("minEdgeDensity", tier.minEdgeDensity)),
                minContrastRange=int(override.get("minContrastRange", tier.minContrastRange)),
                noiseDivisor=int(override.get("noiseDivisor", tier.noiseDivisor)),
            ))
        
        return cls(
            tiers=tiers,
            edgeThreshold=int(data.get("edgeThreshold", defaults.edgeThreshold)),
            noiseThreshold=int(data.get("noiseThreshold", defaults.noiseThreshold)),
        )


class IQualityGrader(ABC):
    """
    Interface for print quality grading of an isolated bar region.
    """
    
    @abstractmethod
    def computeMetrics(self, region: np.ndarray) -> QualityMetrics:
        """
        Compute luminance statistics over every pixel of the region.
        
        Args:
            region: Isolated bar region (RGB numpy array).
            
        Returns:
            QualityMetrics for the region.
        """
        pass
    
    @abstractmethod
    def assignGrade(self, metrics: QualityMetrics) -> Grade:
        """
        Map metrics to a grade. Pure function of the metrics.
        
        Args:
            metrics: Metrics of a region.
            
        Returns:
            Grade of the first matching tier, or the fallback grade.
        """
        pass
