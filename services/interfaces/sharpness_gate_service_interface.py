"""
Sharpness Gate Service Interface Module.

Defines the interface for Step 2 of the pipeline: rejecting blurry
frames before the costlier detection and grading stages.

Follows:
- SRP: Only handles sharpness gating
- DIP: Pipeline depends on this abstraction
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np


@dataclass
class SharpnessGateServiceResult:
    """
    Result of the sharpness gate.
    
    Attributes:
        variance: Variance of the Laplacian response.
        threshold: Threshold the variance was compared against.
        isSharp: True iff variance > threshold.
        frameId: Frame identifier.
        processingTimeMs: Time taken for the measurement.
    """
    variance: float
    threshold: float
    isSharp: bool
    frameId: str
    processingTimeMs: float = 0.0


class ISharpnessGateService(ABC):
    """Interface for sharpness gating (Step 2)."""
    
    @abstractmethod
    def evaluate(self, raster: np.ndarray, frameId: str) -> SharpnessGateServiceResult:
        """
        Measure sharpness and decide whether the frame may proceed.
        
        Args:
            raster: RGB raster.
            frameId: Frame identifier.
            
        Returns:
            SharpnessGateServiceResult with the accept decision.
        """
        pass
    
    @abstractmethod
    def getThreshold(self) -> float:
        """Get the configured variance threshold."""
        pass
