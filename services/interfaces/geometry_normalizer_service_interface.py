"""
Geometry Normalizer Service Interface Module.

Defines the interface for Step 4 of the pipeline: loose crop around the
detected quad and isolation of the bar region used for grading.

Follows:
- SRP: Only handles geometry normalization
- DIP: Pipeline depends on this abstraction
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.geometry.barcode_cropper import CropRect
from core.interfaces.barcode_detector_interface import BarcodeFormat, Quad


@dataclass
class GeometryNormalizerServiceResult:
    """
    Result of geometry normalization.
    
    Attributes:
        normalizedImage: Loose crop (quad bounding box plus padding).
        cropRect: Loose crop rectangle in source coordinates.
        gradingImage: Isolated bar region, None if no contour was found.
        gradingRect: Bar region rectangle in loose crop coordinates.
        overlayImage: Loose crop with the quad and value drawn on it.
        barCount: Number of bar contours in the loose crop.
        frameId: Frame identifier.
        success: False if the geometry was invalid.
        errorMessage: Reason for invalid geometry.
        processingTimeMs: Time taken for normalization.
    """
    normalizedImage: Optional[np.ndarray]
    cropRect: Optional[CropRect]
    gradingImage: Optional[np.ndarray]
    gradingRect: Optional[CropRect]
    overlayImage: Optional[np.ndarray]
    barCount: int
    frameId: str
    success: bool
    errorMessage: str = ""
    processingTimeMs: float = 0.0
    
    @property
    def isGradable(self) -> bool:
        """True if a bar region was isolated."""
        return self.gradingImage is not None


class IGeometryNormalizerService(ABC):
    """Interface for geometry normalization (Step 4)."""
    
    @abstractmethod
    def normalize(
        self,
        raster: np.ndarray,
        corners: Quad,
        frameId: str,
        decodedValue: Optional[str] = None,
        barcodeFormat: BarcodeFormat = BarcodeFormat.UNKNOWN
    ) -> GeometryNormalizerServiceResult:
        """
        Crop the symbol and isolate its bars.
        
        Args:
            raster: Upright RGB raster.
            corners: Detected quad in raster coordinates.
            frameId: Frame identifier.
            decodedValue: Value drawn on the overlay, if any.
            barcodeFormat: Symbology, used for the expected module count.
            
        Returns:
            GeometryNormalizerServiceResult, success=False on invalid geometry.
        """
        pass
