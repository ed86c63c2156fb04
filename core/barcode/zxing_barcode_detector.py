"""
ZXing Barcode Detector Implementation.

This module provides barcode detection using the zxing-cpp library.
zxing-cpp is a high-performance C++ implementation with Python bindings
that reports a corner quadrilateral for every symbol it decodes.

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


class ZxingBarcodeDetector(IBarcodeDetector):
    """
    Barcode detector using zxing-cpp.
    
    Returns the first valid symbol with its four corners in
    top-left, top-right, bottom-right, bottom-left order as reported
    by zxing-cpp.
    """
    
    BACKEND_NAME = "zxing"
    
    def __init__(
        self,
        tryRotate: bool = True,
        tryDownscale: bool = True,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize ZxingBarcodeDetector.
        
        Args:
            tryRotate: Try rotated symbols (90/270 degrees).
            tryDownscale: Try downscaled versions for better detection.
            logger: Logger instance for debug output.
        """
        self._tryRotate = tryRotate
        self._tryDownscale = tryDownscale
        self._logger = logger or logging.getLogger(__name__)
        self._zxingcpp = None
        
        self._logger.info(
            f"ZxingBarcodeDetector initialized "
            f"(tryRotate={tryRotate}, tryDownscale={tryDownscale})"
        )
    
    def getBackendName(self) -> str:
        """Get backend name."""
        return self.BACKEND_NAME
    
    def _ensureZxing(self) -> None:
        """Lazily import zxing-cpp module."""
        if self._zxingcpp is None:
            try:
                import zxingcpp
                self._zxingcpp = zxingcpp
                self._logger.info("zxing-cpp module loaded successfully")
            except ImportError as e:
                self._logger.error(
                    f"Failed to import zxing-cpp. "
                    f"Please install: pip install zxing-cpp. Error: {e}"
                )
                raise
    
    def detect(self, image: np.ndarray) -> DetectionOutcome:
        """
        Detect and decode a barcode.
        
        Args:
            image: Input raster (RGB or grayscale).
            
        Returns:
            Found for the first valid symbol, NotFound otherwise.
        """
        self._ensureZxing()
        
        if image.ndim == 3:
            grayImage = cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
        else:
            grayImage = image
        
        barcodes = self._zxingcpp.read_barcodes(
            grayImage,
            try_rotate=self._tryRotate,
            try_downscale=self._tryDownscale
        )
        
        for barcode in barcodes or []:
            if not getattr(barcode, "valid", True):
                continue
            
            position = barcode.position
            corners = [
                (int(position.top_left.x), int(position.top_left.y)),
                (int(position.top_right.x), int(position.top_right.y)),
                (int(position.bottom_right.x), int(position.bottom_right.y)),
                (int(position.bottom_left.x), int(position.bottom_left.y))
            ]
            
            formatName = getattr(barcode.format, "name", str(barcode.format))
            barcodeFormat = BarcodeFormat.fromName(formatName.split(".")[-1])
            text = barcode.text or None
            
            self._logger.debug(f"Barcode detected: {text} ({barcodeFormat.value})")
            return Found(decodedValue=text, format=barcodeFormat, corners=corners)
        
        self._logger.debug("No barcode detected")
        return NotFound()
