"""
Frame Ingest Service Interface Module.

Defines the interface for Step 1 of the pipeline: converting a planar
YUV RawFrame into an upright RGB raster.

Follows:
- SRP: Only handles frame conversion
- DIP: Pipeline depends on this abstraction
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import numpy as np

from core.interfaces.frame_interface import RawFrame


@dataclass
class FrameIngestServiceResult:
    """
    Result of the frame ingest service.
    
    Attributes:
        raster: Upright RGB raster (H, W, 3) uint8, None on failure.
        frameId: Frame identifier.
        success: False if the frame was malformed.
        errorMessage: Reason for a malformed frame.
        processingTimeMs: Time taken for conversion and rotation.
    """
    raster: Optional[np.ndarray]
    frameId: str
    success: bool
    errorMessage: str = ""
    processingTimeMs: float = 0.0


class IFrameIngestService(ABC):
    """Interface for frame ingest operations (Step 1)."""
    
    @abstractmethod
    def ingest(self, rawFrame: RawFrame, frameId: str) -> FrameIngestServiceResult:
        """
        Convert and rotate a raw frame.
        
        Args:
            rawFrame: Planar YUV 4:2:0 frame with rotation metadata.
            frameId: Frame identifier.
            
        Returns:
            FrameIngestServiceResult with the RGB raster.
        """
        pass
