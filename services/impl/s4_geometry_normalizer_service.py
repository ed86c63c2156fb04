"""
S4 Geometry Normalizer Service Implementation.

Step 4 of the pipeline:
1. Loose crop: quad bounding box plus padding, clamped to the raster
2. Bar isolation: largest dark blob inside the loose crop
3. Diagnostics: bar count and an overlay of the quad on the loose crop

Follows:
- SRP: Only handles geometry normalization
- DIP: Implements IGeometryNormalizerService
"""

import time
from typing import Optional

import numpy as np

from core.exceptions import InvalidGeometryError
from core.geometry.barcode_cropper import BarcodeCropper, translateCorners
from core.geometry.overlay_renderer import OverlayRenderer
from core.interfaces.barcode_detector_interface import BarcodeFormat, Quad
from services.interfaces.base_service_interface import BaseService
from services.interfaces.geometry_normalizer_service_interface import (
    GeometryNormalizerServiceResult,
    IGeometryNormalizerService
)


class S4GeometryNormalizerService(IGeometryNormalizerService, BaseService):
    """
    Step 4: Geometry Normalizer Service Implementation.
    
    A located symbol whose crop holds no dark contour is still a success:
    gradingImage is None and the grader degrades to F.
    """
    
    SERVICE_NAME = "s4_geometry"
    
    def __init__(
        self,
        padding: int = 5,
        blurKernelSize: int = 5,
        binaryThreshold: int = 100,
        barCountThreshold: int = 128,
        barKernelHeight: int = 20,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize S4GeometryNormalizerService.
        
        Args:
            padding: Loose crop padding in pixels.
            blurKernelSize: Gaussian kernel size for bar isolation (odd).
            binaryThreshold: Inverse threshold separating bars from background.
            barCountThreshold: Inverse threshold used when counting bars.
            barKernelHeight: Height of the vertical closing kernel for bar counting.
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        
        self._cropper = BarcodeCropper(
            padding=padding,
            blurKernelSize=blurKernelSize,
            binaryThreshold=binaryThreshold,
            barCountThreshold=barCountThreshold,
            barKernelHeight=barKernelHeight
        )
        self._renderer = OverlayRenderer()
        
        self._logger.info(
            f"S4GeometryNormalizerService initialized "
            f"(padding={padding}, blur={blurKernelSize}, threshold={binaryThreshold})"
        )
    
    def normalize(
        self,
        raster: np.ndarray,
        corners: Quad,
        frameId: str,
        decodedValue: Optional[str] = None,
        barcodeFormat: BarcodeFormat = BarcodeFormat.UNKNOWN
    ) -> GeometryNormalizerServiceResult:
        """Crop the symbol and isolate its bars."""
        startTime = time.time()
        
        try:
            normalizedImage, cropRect = self._cropper.looseCrop(raster, corners)
        except InvalidGeometryError as e:
            return GeometryNormalizerServiceResult(
                normalizedImage=None,
                cropRect=None,
                gradingImage=None,
                gradingRect=None,
                overlayImage=None,
                barCount=0,
                frameId=frameId,
                success=False,
                errorMessage=str(e),
                processingTimeMs=self._measureTime(startTime)
            )
        
        isolated = self._cropper.isolateBars(normalizedImage)
        if isolated is None:
            gradingImage, gradingRect = None, None
            self._logger.debug(f"[{frameId}] No bar contour in crop {cropRect.toTuple()}")
        else:
            gradingImage, gradingRect = isolated
        
        barCount = self._cropper.countBars(normalizedImage)
        expectedModules = self._cropper.expectedBarCount(barcodeFormat, decodedValue)
        overlayImage = self._renderer.render(
            normalizedImage,
            translateCorners(corners, cropRect),
            decodedValue
        )
        
        processingTimeMs = self._measureTime(startTime)
        self._logger.debug(
            f"[{frameId}] Crop {cropRect.toTuple()}, "
            f"bars {gradingRect.toTuple() if gradingRect else None}, "
            f"barCount={barCount}, expectedModules={expectedModules}, time={processingTimeMs:.2f}ms"
        )
        
        self._saveDebugImage(frameId, normalizedImage, prefix="crop")
        self._saveDebugImage(frameId, gradingImage, prefix="bars")
        self._saveDebugImage(frameId, overlayImage, prefix="overlay")
        
        return GeometryNormalizerServiceResult(
            normalizedImage=normalizedImage,
            cropRect=cropRect,
            gradingImage=gradingImage,
            gradingRect=gradingRect,
            overlayImage=overlayImage,
            barCount=barCount,
            frameId=frameId,
            success=True,
            processingTimeMs=processingTimeMs
        )
