"""
Barcode Detector Factory Module.

Factory function for creating barcode detector instances based on backend
selection. Supports zxing-cpp, pyzbar and OpenCV backends.

Follows:
- OCP (Open/Closed Principle): Easy to extend with new backends
- DIP (Dependency Inversion): Returns IBarcodeDetector interface
- Factory Pattern: Encapsulates object creation logic
"""

import logging
from typing import List

from core.interfaces.barcode_detector_interface import IBarcodeDetector


logger = logging.getLogger(__name__)


def createBarcodeDetector(
    backend: str = "zxing",
    # ZXing params (prefixed with 'zxing')
    zxingTryRotate: bool = True,
    zxingTryDownscale: bool = True
) -> IBarcodeDetector:
    """
    Factory function to create a barcode detector based on backend.
    
    Supports:
    - "zxing": zxing-cpp backend (fast, reports corner quadrilateral)
    - "pyzbar": ZBar backend
    - "opencv": OpenCV objdetect barcode backend
    
    Args:
        backend: Backend name.
        zxingTryRotate: (zxing) Try rotated barcodes (90/270 degrees).
        zxingTryDownscale: (zxing) Try downscaled versions for better detection.
        
    Returns:
        IBarcodeDetector: Detector instance.
        
    Raises:
        ValueError: If backend is invalid or not supported.
        ImportError: If required library is not installed.
        
    Examples:
        >>> detector = createBarcodeDetector(backend="zxing")
        >>> outcome = detector.detect(rgbImage)
    """
    backend = backend.lower().strip()
    
    supportedBackends = getSupportedBarcodeBackends()
    if backend not in supportedBackends:
        errorMsg = (
            f"Invalid barcode backend: '{backend}'. "
            f"Supported backends: {supportedBackends}"
        )
        logger.error(errorMsg)
        raise ValueError(errorMsg)
    
    if backend == "zxing":
        from core.barcode.zxing_barcode_detector import ZxingBarcodeDetector
        
        logger.info(
            f"Creating ZXing barcode detector "
            f"(tryRotate={zxingTryRotate}, tryDownscale={zxingTryDownscale})"
        )
        return ZxingBarcodeDetector(
            tryRotate=zxingTryRotate,
            tryDownscale=zxingTryDownscale
        )
    
    elif backend == "pyzbar":
        from core.barcode.pyzbar_barcode_detector import PyzbarBarcodeDetector
        
        logger.info("Creating pyzbar barcode detector")
        return PyzbarBarcodeDetector()
    
    elif backend == "opencv":
        from core.barcode.opencv_barcode_detector import OpenCVBarcodeDetector
        
        try:
            logger.info("Creating OpenCV barcode detector")
            return OpenCVBarcodeDetector()
        except ImportError as e:
            errorMsg = (
                "OpenCV barcode module requires opencv-python >= 4.8. "
                "Install with: pip install -U opencv-python"
            )
            logger.error(errorMsg)
            raise ImportError(errorMsg) from e
    
    # Should never reach here due to validation above
    raise ValueError(f"Unsupported barcode backend: {backend}")


def getSupportedBarcodeBackends() -> List[str]:
    """
    Get list of supported barcode backend names.
    
    Returns:
        List[str]: ["zxing", "pyzbar", "opencv"].
    """
    return ["zxing", "pyzbar", "opencv"]


def isBarcodeBackendAvailable(backend: str) -> bool:
    """
    Check if a barcode backend is available (library installed).
    
    Args:
        backend: Backend name.
        
    Returns:
        bool: True if backend library is installed and available.
    """
    backend = backend.lower().strip()
    
    if backend == "zxing":
        try:
            import zxingcpp
            return True
        except ImportError:
            return False
    
    elif backend == "pyzbar":
        try:
            from pyzbar import pyzbar
            return True
        except ImportError:
            return False
    
    elif backend == "opencv":
        import cv2
        return hasattr(cv2, "barcode")
    
    return False
