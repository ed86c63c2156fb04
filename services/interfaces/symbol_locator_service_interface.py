"""
Symbol Locator Service Interface Module.

Defines the interface for Step 3 of the pipeline: delegating to the
external barcode detector and normalizing its outcome.

Follows:
- SRP: Only handles symbol location
- DIP: Depends on IBarcodeDetector abstraction from core layer
"""

from abc import ABC, abstractmethod
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.interfaces.barcode_detector_interface import DetectionOutcome


@dataclass
class SymbolLocatorServiceResult:
    """
    Result of the symbol locator.
    
    Attributes:
        outcome: Found or NotFound, None if the detector failed.
        frameId: Frame identifier.
        success: False only if the detector raised.
        errorMessage: Detector failure description.
        processingTimeMs: Time spent waiting for the detector.
    """
    outcome: Optional[DetectionOutcome]
    frameId: str
    success: bool
    errorMessage: str = ""
    processingTimeMs: float = 0.0
    
    @property
    def found(self) -> bool:
        """True if a symbol was located."""
        return self.outcome is not None and self.outcome.found


class ISymbolLocatorService(ABC):
    """Interface for symbol location (Step 3)."""
    
    @abstractmethod
    def locateAsync(self, raster: np.ndarray, frameId: str) -> "Future[DetectionOutcome]":
        """
        Submit a raster to the detector.
        
        Args:
            raster: RGB raster.
            frameId: Frame identifier.
            
        Returns:
            Future that resolves exactly once to a DetectionOutcome or
            to the detector's exception.
        """
        pass
    
    @abstractmethod
    def locate(self, raster: np.ndarray, frameId: str) -> SymbolLocatorServiceResult:
        """
        Locate a symbol and wait for the outcome.
        
        Args:
            raster: RGB raster.
            frameId: Frame identifier.
            
        Returns:
            SymbolLocatorServiceResult, success=False on detector failure.
        """
        pass
    
    @abstractmethod
    def getBackendName(self) -> str:
        """Get the detector backend name."""
        pass
    
    @abstractmethod
    def shutdown(self) -> None:
        """Stop the worker used for detection."""
        pass
