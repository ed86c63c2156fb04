"""
Pyzbar Barcode Detector Implementation.

This module provides barcode detection using the pyzbar library.
Follows the Single Responsibility Principle (SRP) and
Dependency Inversion Principle (DIP) from SOLID.
"""

import logging
from typing import List, Optional

import cv2
import numpy as np

from core.interfaces.barcode_detector_interface import (
    BarcodeFormat,
    DetectionOutcome,
    Found,
    IBarcodeDetector,
    NotFound,
    Quad
)


class PyzbarBarcodeDetector(IBarcodeDetector):
    """
    Barcode detector using pyzbar (ZBar bindings).
    
    ZBar reports a free-form polygon. For linear symbols it often has
    more or fewer than four points, in which case the corners of the
    reported bounding rect are used instead.
    """
    
    BACKEND_NAME = "pyzbar"
    
    def __init__(
        self,
        symbolTypes: Optional[List] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize PyzbarBarcodeDetector.
        
        Args:
            symbolTypes: List of ZBarSymbol types to detect (default: all).
            logger: Logger instance for debug output.
        """
        self._symbolTypes = symbolTypes
        self._logger = logger or logging.getLogger(__name__)
        self._decode = None
    
    def getBackendName(self) -> str:
        """Get backend name."""
        return self.BACKEND_NAME
    
    def _ensurePyzbar(self) -> None:
        """Lazily import pyzbar."""
        if self._decode is None:
            try:
                from pyzbar.pyzbar import decode
                self._decode = decode
            except ImportError as e:
                self._logger.error(
                    f"Failed to import pyzbar. "
                    f"Please install: pip install pyzbar. Error: {e}"
                )
                raise
    
    def detect(self, image: np.ndarray) -> DetectionOutcome:
        """
        Detect a barcode in an image.
        
        Args:
            image: Input raster (RGB or grayscale).
            
        Returns:
            Found for the first decoded symbol, NotFound otherwise.
        """
        self._ensurePyzbar()
        
        if image.ndim == 3:
            grayImage = cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
        else:
            grayImage = image
        
        results = self._decode(grayImage, symbols=self._symbolTypes)
        if not results:
            self._logger.debug("No barcode detected in image")
            return NotFound()
        
        symbol = results[0]
        text = symbol.data.decode("utf-8", errors="replace") if symbol.data else None
        barcodeFormat = BarcodeFormat.fromName(symbol.type)
        
        self._logger.debug(f"Barcode detected: {text} ({barcodeFormat.value})")
        return Found(
            decodedValue=text,
            format=barcodeFormat,
            corners=self._toCorners(symbol)
        )
    
    @staticmethod
    def _toCorners(symbol) -> Quad:
        polygon = [(int(p.x), int(p.y)) for p in (symbol.polygon or [])]
        if len(polygon) == 4:
            return polygon
        
        left, top = int(symbol.rect.left), int(symbol.rect.top)
        right = left + int(symbol.rect.width)
        bottom = top + int(symbol.rect.height)
        return [(left, top), (right, top), (right, bottom), (left, bottom)]
