"""
Base Service Interface Module.

Defines the base interface and common helpers for all grading pipeline
services. Every stage service inherits from BaseService.

Follows:
- ISP (Interface Segregation Principle): Minimal base interface
- DIP (Dependency Inversion Principle): High-level modules depend on abstractions
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional
import json
import logging
import time

import cv2
import numpy as np


class IBaseService(ABC):
    """
    Base interface for all pipeline services.
    
    Provides:
    - Service identification
    - Debug output management
    """
    
    @abstractmethod
    def getServiceName(self) -> str:
        """
        Get the service name for logging and debug output.
        
        Returns:
            str: Service name (e.g., "s1_frame_ingest", "s5_grading")
        """
        pass
    
    @abstractmethod
    def setDebugEnabled(self, enabled: bool) -> None:
        """
        Enable or disable debug output.
        
        Args:
            enabled: True to enable debug output.
        """
        pass
    
    @abstractmethod
    def isDebugEnabled(self) -> bool:
        """Check if debug output is enabled."""
        pass


class BaseService(IBaseService):
    """
    Helper base class for pipeline services.
    
    Debug artifacts are written under <debugBasePath>/<serviceName>.
    Rasters are RGB and converted to BGR before cv2.imwrite.
    """
    
    def __init__(
        self,
        serviceName: str,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize BaseService.
        
        Args:
            serviceName: Name of the service (e.g., "s2_sharpness").
            debugBasePath: Base path for debug output.
            debugEnabled: Whether debug output is enabled.
        """
        self._serviceName = serviceName
        self._debugBasePath = Path(debugBasePath) / serviceName
        self._debugEnabled = debugEnabled
        self._logger = logging.getLogger(serviceName)
        
        if debugEnabled:
            self._ensureDebugDirectory()
    
    def getServiceName(self) -> str:
        """Get the service name."""
        return self._serviceName
    
    def setDebugEnabled(self, enabled: bool) -> None:
        """Enable or disable debug output."""
        self._debugEnabled = enabled
        if enabled:
            self._ensureDebugDirectory()
        self._logger.info(f"Debug {'enabled' if enabled else 'disabled'}")
    
    def isDebugEnabled(self) -> bool:
        """Check if debug is enabled."""
        return self._debugEnabled
    
    def _ensureDebugDirectory(self) -> None:
        self._debugBasePath.mkdir(parents=True, exist_ok=True)
    
    def _saveDebugImage(
        self,
        frameId: str,
        image: Optional[np.ndarray],
        prefix: str = ""
    ) -> Optional[str]:
        """
        Save an RGB raster as PNG.
        
        Args:
            frameId: Frame identifier for naming.
            image: RGB or grayscale raster.
            prefix: Optional prefix for filename.
            
        Returns:
            Saved file path, or None if debug is disabled or writing failed.
        """
        if not self._debugEnabled or image is None or image.size == 0:
            return None
        
        filename = f"{prefix}_{frameId}.png" if prefix else f"{frameId}.png"
        filepath = self._debugBasePath / filename
        
        toWrite = cv2.cvtColor(image, cv2.COLOR_RGB2BGR) if image.ndim == 3 else image
        if not cv2.imwrite(str(filepath), toWrite):
            self._logger.warning(f"[{frameId}] Failed to save debug image: {filepath}")
            return None
        
        self._logger.debug(f"[{frameId}] Saved debug image: {filepath}")
        return str(filepath)
    
    def _saveDebugJson(self, frameId: str, data: Dict[str, Any], prefix: str = "") -> Optional[str]:
        """
        Save debug JSON with consistent naming.
        
        Args:
            frameId: Frame identifier for naming.
            data: Data to save as JSON.
            prefix: Optional prefix for filename.
            
        Returns:
            Saved file path, or None if debug is disabled or writing failed.
        """
        if not self._debugEnabled:
            return None
        
        filename = f"{prefix}_{frameId}.json" if prefix else f"{frameId}.json"
        filepath = self._debugBasePath / filename
        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False, default=str)
        except OSError as e:
            self._logger.warning(f"[{frameId}] Failed to save debug JSON: {e}")
            return None
        
        self._logger.debug(f"[{frameId}] Saved debug JSON: {filepath}")
        return str(filepath)
    
    def _logTiming(self, frameId: str, processingTimeMs: float) -> None:
        """
        Log stage processing time.
        
        Args:
            frameId: Frame identifier.
            processingTimeMs: Processing time in milliseconds.
        """
        self._logger.debug(f"[{frameId}] Processing time: {processingTimeMs:.2f}ms")
    
    def _measureTime(self, startTime: float) -> float:
        """
        Calculate elapsed time in milliseconds.
        
        Args:
            startTime: Start time from time.time().
            
        Returns:
            Elapsed time in milliseconds.
        """
        return (time.time() - startTime) * 1000
