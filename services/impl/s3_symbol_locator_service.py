"""
S3 Symbol Locator Service Implementation.

Step 3 of the pipeline: delegates to the external barcode detector.
Detection runs on a single worker thread and is exposed as a Future so
callers can wait for it or chain on it.

Follows:
- SRP: Only handles symbol location
- DIP: Depends on IBarcodeDetector abstraction (interface)
- Factory Pattern: Uses createBarcodeDetector() for backend selection
"""

import time
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

import numpy as np

from core.barcode import createBarcodeDetector
from core.interfaces.barcode_detector_interface import (
    DetectionOutcome,
    Found,
    IBarcodeDetector
)
from services.interfaces.base_service_interface import BaseService
from services.interfaces.symbol_locator_service_interface import (
    ISymbolLocatorService,
    SymbolLocatorServiceResult
)


class S3SymbolLocatorService(ISymbolLocatorService, BaseService):
    """
    Step 3: Symbol Locator Service Implementation.
    
    Either receives a ready detector (tests, custom backends) or builds one
    from the backend name.
    """
    
    SERVICE_NAME = "s3_symbol_locator"
    
    def __init__(
        self,
        detector: Optional[IBarcodeDetector] = None,
        
        # Backend selection
        backend: str = "zxing",
        
        # ZXing params (prefixed with 'zxing')
        zxingTryRotate: bool = True,
        zxingTryDownscale: bool = True,
        
        # Debug settings
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize S3SymbolLocatorService.
        
        Args:
            detector: Detector instance, overrides backend when given.
            backend: Detector backend ("zxing", "pyzbar" or "opencv").
            zxingTryRotate: (ZXing) Try rotated barcodes.
            zxingTryDownscale: (ZXing) Try downscaled versions.
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.
            
        Raises:
            ValueError: If backend is not supported.
            ImportError: If the backend library is not installed.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        
        if detector is None:
            detector = createBarcodeDetector(
                backend=backend,
                zxingTryRotate=zxingTryRotate,
                zxingTryDownscale=zxingTryDownscale
            )
        
        self._detector: IBarcodeDetector = detector
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="symbol-locator")
        
        self._logger.info(
            f"S3SymbolLocatorService initialized (backend={detector.getBackendName()})"
        )
    
    def getBackendName(self) -> str:
        """Get the detector backend name."""
        return self._detector.getBackendName()
    
    def locateAsync(self, raster: np.ndarray, frameId: str) -> "Future[DetectionOutcome]":
        """Submit a raster to the detector worker."""
        self._logger.debug(f"[{frameId}] Submitting frame to {self.getBackendName()} detector")
        return self._executor.submit(self._detector.detect, raster)
    
    def locate(self, raster: np.ndarray, frameId: str) -> SymbolLocatorServiceResult:
        """
        Locate a symbol and wait for the outcome.
        
        A detector exception becomes success=False with the error message.
        """
        startTime = time.time()
        future = self.locateAsync(raster, frameId)
        
        try:
            outcome = future.result()
        except Exception as e:
            self._logger.error(f"[{frameId}] Detector {self.getBackendName()} failed: {e}")
            return SymbolLocatorServiceResult(
                outcome=None,
                frameId=frameId,
                success=False,
                errorMessage=f"{type(e).__name__}: {e}",
                processingTimeMs=self._measureTime(startTime)
            )
        
        processingTimeMs = self._measureTime(startTime)
        self._logTiming(frameId, processingTimeMs)
        
        if isinstance(outcome, Found):
            self._logger.debug(
                f"[{frameId}] Found {outcome.format.value} "
                f"value={outcome.decodedValue!r} corners={outcome.corners}"
            )
            self._saveDebugJson(frameId, {
                "decodedValue": outcome.decodedValue,
                "format": outcome.format.value,
                "corners": outcome.corners
            })
        
        return SymbolLocatorServiceResult(
            outcome=outcome,
            frameId=frameId,
            success=True,
            processingTimeMs=processingTimeMs
        )
    
    def shutdown(self) -> None:
        """Stop the detector worker, waiting for a running detection."""
        self._executor.shutdown(wait=True)
        self._logger.info("S3SymbolLocatorService shut down")
