"""
Quality Grader Service Interface Module.

Defines the interface for Step 5 of the pipeline: computing luminance
metrics over the isolated bar region and assigning a grade.

Follows:
- SRP: Only handles grading
- DIP: Depends on IQualityGrader abstraction from core layer
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.interfaces.grader_interface import Grade, QualityMetrics


@dataclass
class QualityGraderServiceResult:
    """
    Result of the quality grader.
    
    Attributes:
        grade: Assigned grade.
        metrics: Metrics the grade was derived from, None if ungradable.
        ungradable: True if there was no bar region to grade.
        frameId: Frame identifier.
        processingTimeMs: Time taken for grading.
    """
    grade: Grade
    metrics: Optional[QualityMetrics]
    ungradable: bool
    frameId: str
    processingTimeMs: float = 0.0


class IQualityGraderService(ABC):
    """Interface for quality grading (Step 5)."""
    
    @abstractmethod
    def grade(self, region: Optional[np.ndarray], frameId: str) -> QualityGraderServiceResult:
        """
        Grade a bar region.
        
        Args:
            region: Isolated bar region (RGB), or None if isolation failed.
            frameId: Frame identifier.
            
        Returns:
            QualityGraderServiceResult, grade F when region is None.
        """
        pass
