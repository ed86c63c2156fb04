"""
Barcode Detector Interface Module.

This module defines the interface and outcome types for the external
barcode detection capability. The pipeline never decodes bars itself;
it only consumes a DetectionOutcome.

Follows the Interface Segregation Principle (ISP) from SOLID.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union

import numpy as np


Point = Tuple[int, int]
Quad = List[Point]


class BarcodeFormat(Enum):
    """Symbologies the detector backends can report."""
    EAN_13 = "EAN_13"
    EAN_8 = "EAN_8"
    UPC_A = "UPC_A"
    UPC_E = "UPC_E"
    CODE_128 = "CODE_128"
    CODE_39 = "CODE_39"
    CODE_93 = "CODE_93"
    CODABAR = "CODABAR"
    ITF = "ITF"
    QR_CODE = "QR_CODE"
    DATA_MATRIX = "DATA_MATRIX"
    PDF_417 = "PDF_417"
    AZTEC = "AZTEC"
    UNKNOWN = "UNKNOWN"
    
    @classmethod
    def fromName(cls, name: Optional[str]) -> "BarcodeFormat":
        """
        Map a backend format name to a BarcodeFormat.
        
        Accepts the spellings used by zxing-cpp ("EAN13", "Code128"),
        pyzbar ("EAN13", "CODE128", "QRCODE") and OpenCV ("EAN_13").
        
        Args:
            name: Backend specific format name.
            
        Returns:
            Matching BarcodeFormat, or UNKNOWN.
        """
        if not name:
            return cls.UNKNOWN
        
        key = name.upper().replace("-", "").replace("_", "").replace(" ", "")
        return _FORMAT_ALIASES.get(key, cls.UNKNOWN)


_FORMAT_ALIASES = {
    "EAN13": BarcodeFormat.EAN_13,
    "EAN8": BarcodeFormat.EAN_8,
    "UPCA": BarcodeFormat.UPC_A,
    "UPCE": BarcodeFormat.UPC_E,
    "CODE128": BarcodeFormat.CODE_128,
    "CODE39": BarcodeFormat.CODE_39,
    "CODE93": BarcodeFormat.CODE_93,
    "CODABAR": BarcodeFormat.CODABAR,
    "ITF": BarcodeFormat.ITF,
    "I25": BarcodeFormat.ITF,
    "QRCODE": BarcodeFormat.QR_CODE,
    "QR": BarcodeFormat.QR_CODE,
    "DATAMATRIX": BarcodeFormat.DATA_MATRIX,
    "PDF417": BarcodeFormat.PDF_417,
    "AZTEC": BarcodeFormat.AZTEC,
}


@dataclass(frozen=True)
class NotFound:
    """No symbol was located in the image."""
    found: bool = field(default=False, init=False)


@dataclass(frozen=True)
class Found:
    """
    A symbol was located.
    
    Attributes:
        decodedValue: Decoded payload, if the detector could decode it.
        format: Symbology reported by the detector.
        corners: Corner points in detector order (no winding guarantee).
    """
    decodedValue: Optional[str]
    format: BarcodeFormat
    corners: Quad
    found: bool = field(default=True, init=False)


DetectionOutcome = Union[NotFound, Found]


class IBarcodeDetector(ABC):
    """
    Interface for the external barcode detection capability.
    
    Implementations wrap a detection library and adapt its result into
    a DetectionOutcome. They must not modify the input image.
    """
    
    @abstractmethod
    def detect(self, image: np.ndarray) -> DetectionOutcome:
        """
        Detect a barcode in an image.
        
        Args:
            image: Input raster (RGB or grayscale numpy array).
            
        Returns:
            Found with value, format and corners, or NotFound.
        """
        pass
    
    @abstractmethod
    def getBackendName(self) -> str:
        """
        Get the backend name used for logging.
        
        Returns:
            str: Backend name (e.g. "zxing").
        """
        pass
