"""
Sharpness Evaluator Module

Estimates focus quality with the variance of the Laplacian.
A blurry frame produces meaningless print quality metrics, so frames
below the threshold are rejected before detection.

Follows SRP: Only handles sharpness measurement.
"""

import logging

import cv2
import numpy as np


logger = logging.getLogger(__name__)


class SharpnessEvaluator:
    """
    Focus quality gate based on Laplacian variance.
    
    Process:
    1. Convert the raster to single channel intensity
    2. Apply the discrete Laplacian (second derivative, edge response)
    3. Variance of the response over the whole image
    
    Sharp edges give strong positive and negative responses (high variance),
    defocus flattens them (low variance).
    """
    
    def __init__(self, threshold: float = 100.0):
        """
        Initialize SharpnessEvaluator.
        
        Args:
            threshold: Minimum variance (exclusive) for a frame to pass.
        """
        self._threshold = threshold
        
        logger.info(f"SharpnessEvaluator initialized: threshold={threshold}")
    
    @property
    def threshold(self) -> float:
        """Get current threshold."""
        return self._threshold
    
    def computeVariance(self, image: np.ndarray) -> float:
        """
        Compute the variance of the Laplacian.
        
        Args:
            image: RGB raster or single channel image.
            
        Returns:
            float: Laplacian variance (0.0 for empty images).
        """
        if image is None or image.size == 0:
            return 0.0
        
        if image.ndim == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)
        else:
            gray = image
        
        laplacian = cv2.Laplacian(gray, cv2.CV_64F)
        return float(laplacian.var())
    
    def isSharp(self, variance: float) -> bool:
        """Check a variance against the threshold."""
        return variance > self._threshold
