"""
OpenCV Barcode Detector Implementation.

This module provides linear barcode detection using OpenCV's
cv2.barcode.BarcodeDetector. The detector can locate a symbol it
cannot decode, which is reported as Found with no decoded value.

Follows the Single Responsibility Principle (SRP) from SOLID.
"""

import logging
from typing import Optional

import cv2
import numpy as np

from core.interfaces.barcode_detector_interface import (
    BarcodeFormat,
    DetectionOutcome,
    Found,
    IBarcodeDetector,
    NotFound
)


class OpenCVBarcodeDetector(IBarcodeDetector):
    """
    Barcode detector using OpenCV (objdetect barcode module).
    """
    
    BACKEND_NAME = "opencv"
    
    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize OpenCVBarcodeDetector.
        
        Args:
            logger: Logger instance for debug output.
            
        Raises:
            ImportError: If this OpenCV build has no barcode module.
        """
        self._logger = logger or logging.getLogger(__name__)
        
        if not hasattr(cv2, "barcode"):
            raise ImportError("OpenCV barcode module not available (requires opencv-python >= 4.8)")
        
        self._detector = cv2.barcode.BarcodeDetector()
        self._logger.info("OpenCVBarcodeDetector initialized")
    
    def getBackendName(self) -> str:
        """Get backend name."""
        return self.BACKEND_NAME
    
    def detect(self, image: np.ndarray) -> DetectionOutcome:
        """
        Detect and decode a barcode.
        
        Args:
            image: Input raster (RGB or grayscale).
            
        Returns:
            Found for the first located symbol, NotFound otherwise.
        """
        if image.ndim == 3:
            grayImage = cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
        else:
            grayImage = image
        
        ok, decodedInfo, decodedType, points = self._detector.detectAndDecodeWithType(grayImage)
        if not ok or points is None or len(points) == 0:
            self._logger.debug("No barcode detected")
            return NotFound()
        
        # Prefer the first symbol that decoded
        index = 0
        for i, info in enumerate(decodedInfo or []):
            if info:
                index = i
                break
        
        corners = [(int(round(x)), int(round(y))) for x, y in points[index]]
        text = decodedInfo[index] if decodedInfo and decodedInfo[index] else None
        typeName = decodedType[index] if decodedType and len(decodedType) > index else None
        barcodeFormat = BarcodeFormat.fromName(typeName)
        
        self._logger.debug(f"Barcode located: {text} ({barcodeFormat.value})")
        return Found(decodedValue=text, format=barcodeFormat, corners=corners)
