"""
S1 Frame Ingest Service Implementation.

Step 1 of the pipeline: planar YUV 4:2:0 to RGB conversion followed by
the clockwise rotation carried in the frame metadata.

Follows:
- SRP: Only handles frame conversion
- DIP: Implements IFrameIngestService
"""

import time

from core.exceptions import MalformedInputError
from core.ingest.yuv_frame_converter import YuvFrameConverter
from core.interfaces.frame_interface import RawFrame
from services.interfaces.base_service_interface import BaseService
from services.interfaces.frame_ingest_service_interface import (
    FrameIngestServiceResult,
    IFrameIngestService
)


class S1FrameIngestService(IFrameIngestService, BaseService):
    """
    Step 1: Frame Ingest Service Implementation.
    
    Malformed frames are reported as success=False; the caller classifies
    them as contract violations of the frame stream.
    """
    
    SERVICE_NAME = "s1_frame_ingest"
    
    def __init__(
        self,
        debugBasePath: str = "output/debug",
        debugEnabled: bool = False
    ):
        """
        Initialize S1FrameIngestService.
        
        Args:
            debugBasePath: Base path for debug output.
            debugEnabled: Whether to save debug output.
        """
        BaseService.__init__(
            self,
            serviceName=self.SERVICE_NAME,
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        self._logger.info("S1FrameIngestService initialized")
    
    def ingest(self, rawFrame: RawFrame, frameId: str) -> FrameIngestServiceResult:
        """
        Convert a raw frame into an upright RGB raster.
        
        Args:
            rawFrame: Planar YUV frame.
            frameId: Frame identifier.
            
        Returns:
            FrameIngestServiceResult with the raster, or success=False
            if the buffers do not match the declared geometry.
        """
        startTime = time.time()
        
        try:
            raster = YuvFrameConverter.toRotatedRgb(rawFrame)
        except MalformedInputError as e:
            return FrameIngestServiceResult(
                raster=None,
                frameId=frameId,
                success=False,
                errorMessage=str(e),
                processingTimeMs=self._measureTime(startTime)
            )
        
        processingTimeMs = self._measureTime(startTime)
        self._logTiming(frameId, processingTimeMs)
        self._saveDebugImage(frameId, raster, prefix="rgb")
        
        return FrameIngestServiceResult(
            raster=raster,
            frameId=frameId,
            success=True,
            processingTimeMs=processingTimeMs
        )
