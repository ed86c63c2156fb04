"""
Overlay Renderer Module

Draws the detected symbol outline and decoded value onto a crop for
display.

Follows SRP: Only handles drawing.
"""

from typing import Optional, Sequence, Tuple

import cv2
import numpy as np


class OverlayRenderer:
    """
    Draws a closed polygon through the corners plus the decoded text.
    
    Colors are RGB because rasters in this pipeline are RGB.
    """
    
    def __init__(
        self,
        lineColor: Tuple[int, int, int] = (255, 0, 0),
        lineThickness: int = 5,
        textColor: Tuple[int, int, int] = (255, 0, 0),
        fontScale: float = 0.8
    ):
        """
        Initialize OverlayRenderer.
        
        Args:
            lineColor: Outline color (RGB).
            lineThickness: Outline thickness in pixels.
            textColor: Text color (RGB).
            fontScale: OpenCV font scale for the decoded value.
        """
        self._lineColor = lineColor
        self._lineThickness = lineThickness
        self._textColor = textColor
        self._fontScale = fontScale
    
    def render(
        self,
        image: np.ndarray,
        corners: Sequence[Tuple[int, int]],
        decodedValue: Optional[str] = None
    ) -> np.ndarray:
        """
        Draw the overlay on a copy of the image.
        
        Args:
            image: RGB raster (not modified).
            corners: Corner points in the image's coordinate space.
            decodedValue: Text drawn above the first corner.
            
        Returns:
            np.ndarray: New raster with the overlay.
        """
        overlay = image.copy()
        if len(corners) != 4:
            return overlay
        
        points = np.array(corners, dtype=np.int32).reshape(-1, 1, 2)
        cv2.polylines(overlay, [points], True, self._lineColor, self._lineThickness)
        
        if decodedValue:
            x, y = corners[0]
            textY = max(int(y) - 10, 15)
            cv2.putText(
                overlay,
                decodedValue,
                (int(x), textY),
                cv2.FONT_HERSHEY_SIMPLEX,
                self._fontScale,
                self._textColor,
                2,
                cv2.LINE_AA
            )
        
        return overlay
