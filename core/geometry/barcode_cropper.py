"""
Barcode Cropper Module

Normalizes barcode geometry for grading:
- Loose crop: padded bounding box of the detector corners, clamped to the image
- Bar isolation: largest dark blob inside the loose crop
- Bar counting: diagnostic count of vertical bar structures

Follows SRP: Only handles geometric extraction of the symbol.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import cv2
import numpy as np

from core.exceptions import InvalidGeometryError
from core.interfaces.barcode_detector_interface import BarcodeFormat


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CropRect:
    """
    Axis aligned rectangle in pixel coordinates (half-open).
    
    Attributes:
        x: Left edge.
        y: Top edge.
        width: Width in pixels (>= 1).
        height: Height in pixels (>= 1).
    """
    x: int
    y: int
    width: int
    height: int
    
    @property
    def right(self) -> int:
        """Exclusive right edge."""
        return self.x + self.width
    
    @property
    def bottom(self) -> int:
        """Exclusive bottom edge."""
        return self.y + self.height
    
    def crop(self, image: np.ndarray) -> np.ndarray:
        """Return a copy of the image region covered by this rectangle."""
        return image[self.y:self.bottom, self.x:self.right].copy()
    
    def toTuple(self) -> Tuple[int, int, int, int]:
        """Convert to (x, y, width, height)."""
        return (self.x, self.y, self.width, self.height)


class BarcodeCropper:
    """
    Two stage crop of a detected barcode.
    
    The loose crop keeps a small margin around the symbol for display.
    It still contains quiet zones and human readable digits, which would
    corrupt contrast and edge statistics, so grading works on the
    isolated bar region instead: grayscale, Gaussian blur, inverse binary
    threshold, then the bounding box of the largest external contour.
    """
    
    def __init__(
        self,
        padding: int = 5,
        blurKernelSize: int = 5,
        binaryThreshold: int = 100,
        barCountThreshold: int = 128,
        barKernelHeight: int = 20
    ):
        """
        Initialize BarcodeCropper.
        
        Args:
            padding: Pixels added around the corner bounding box.
            blurKernelSize: Gaussian kernel size (odd) for bar isolation.
            binaryThreshold: Cutoff separating dark bars from background.
            barCountThreshold: Cutoff used when counting bars.
            barKernelHeight: Height of the vertical closing kernel used
                when counting bars.
        """
        if blurKernelSize < 1 or blurKernelSize % 2 == 0:
            raise ValueError(f"blurKernelSize must be a positive odd number, got {blurKernelSize}")
        
        self._padding = padding
        self._blurKernelSize = blurKernelSize
        self._binaryThreshold = binaryThreshold
        self._barCountThreshold = barCountThreshold
        self._barKernelHeight = barKernelHeight
    
    @property
    def padding(self) -> int:
        """Get crop padding."""
        return self._padding
    
    def computeLooseRect(
        self,
        corners: Sequence[Tuple[int, int]],
        imageWidth: int,
        imageHeight: int
    ) -> CropRect:
        """
        Padded bounding rectangle of the corners, clamped to the image.
        
        Args:
            corners: Exactly four (x, y) points, any winding order.
            imageWidth: Source image width.
            imageHeight: Source image height.
            
        Returns:
            CropRect fully inside [0, imageWidth) x [0, imageHeight).
            
        Raises:
            InvalidGeometryError: If there are not four points or the
                clamped rectangle is empty.
        """
        if corners is None or len(corners) != 4:
            raise InvalidGeometryError(
                "Expected exactly 4 corner points",
                {"count": 0 if corners is None else len(corners)}
            )
        
        xs = [int(p[0]) for p in corners]
        ys = [int(p[1]) for p in corners]
        
        left = max(0, min(xs) - self._padding)
        top = max(0, min(ys) - self._padding)
        right = min(imageWidth, max(xs) + self._padding)
        bottom = min(imageHeight, max(ys) + self._padding)
        
        width = right - left
        height = bottom - top
        if width < 1 or height < 1:
            raise InvalidGeometryError(
                "Crop rectangle is empty after clamping",
                {"x": left, "y": top, "width": width, "height": height}
            )
        
        return CropRect(left, top, width, height)
    
    def looseCrop(
        self,
        image: np.ndarray,
        corners: Sequence[Tuple[int, int]]
    ) -> Tuple[np.ndarray, CropRect]:
        """
        Crop the padded bounding box of the corners.
        
        Args:
            image: Source raster.
            corners: Exactly four (x, y) points.
            
        Returns:
            Tuple of (cropped raster, rectangle in source coordinates).
            
        Raises:
            InvalidGeometryError: See computeLooseRect.
        """
        imageHeight, imageWidth = image.shape[:2]
        rect = self.computeLooseRect(corners, imageWidth, imageHeight)
        
        logger.debug(f"Loose crop: {rect.toTuple()} from {imageWidth}x{imageHeight}")
        return rect.crop(image), rect
    
    def isolateBars(self, image: np.ndarray) -> Optional[Tuple[np.ndarray, CropRect]]:
        """
        Isolate the bar region as the largest dark blob.
        
        Args:
            image: Loose crop (RGB raster).
            
        Returns:
            Tuple of (bar region raster, rectangle in crop coordinates),
            or None if no contour with positive area exists.
        """
        if image is None or image.size == 0:
            return None
        
        gray = self._toGray(image)
        blurred = cv2.GaussianBlur(gray, (self._blurKernelSize, self._blurKernelSize), 0)
        _, binary = cv2.threshold(
            blurred, self._binaryThreshold, 255, cv2.THRESH_BINARY_INV
        )
        
        contours, _ = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        
        barContour = None
        maxArea = 0.0
        for contour in contours:
            area = cv2.contourArea(contour)
            if area > maxArea:
                maxArea = area
                barContour = contour
        
        if barContour is None:
            logger.debug(f"No bar contour found among {len(contours)} contours")
            return None
        
        x, y, w, h = cv2.boundingRect(barContour)
        rect = CropRect(int(x), int(y), int(w), int(h))
        
        logger.debug(f"Bar region: {rect.toTuple()} (area={maxArea:.0f})")
        return rect.crop(image), rect
    
    def countBars(self, image: np.ndarray) -> int:
        """
        Count vertical bar structures in a crop.
        
        Inverse threshold, vertical closing to join broken bars, then
        one external contour per bar.
        
        Args:
            image: Loose crop (RGB raster).
            
        Returns:
            int: Number of bar contours.
        """
        if image is None or image.size == 0:
            return 0
        
        gray = self._toGray(image)
        _, binary = cv2.threshold(
            gray, self._barCountThreshold, 255, cv2.THRESH_BINARY_INV
        )
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (1, self._barKernelHeight))
        morphed = cv2.morphologyEx(binary, cv2.MORPH_CLOSE, kernel)
        
        contours, _ = cv2.findContours(morphed, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)
        return len(contours)
    
    @staticmethod
    def expectedBarCount(barcodeFormat: BarcodeFormat, decodedValue: Optional[str]) -> int:
        """
        Expected number of modules for formats with a known structure.
        
        Args:
            barcodeFormat: Detected symbology.
            decodedValue: Decoded payload.
            
        Returns:
            int: 95 for EAN-13/UPC-A, 11 per character plus 13 for
            Code 128, 0 when unknown.
        """
        if barcodeFormat in (BarcodeFormat.EAN_13, BarcodeFormat.UPC_A):
            return 95
        if barcodeFormat == BarcodeFormat.CODE_128:
            return len(decodedValue or "") * 11 + 13
        return 0
    
    @staticmethod
    def _toGray(image: np.ndarray) -> np.ndarray:
        if image.ndim == 2:
            return image
        return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)


def translateCorners(
    corners: Sequence[Tuple[int, int]],
    origin: CropRect
) -> List[Tuple[int, int]]:
    """Shift corner points into the coordinate space of a crop."""
    return [(int(x) - origin.x, int(y) - origin.y) for (x, y) in corners]
