"""
OpenCV Frame Source Implementation

Implements IFrameSource using OpenCV's VideoCapture. Each BGR capture is
repacked as a planar I420 RawFrame so the pipeline sees the same layout
a mobile camera stream delivers.
Follows SRP: Only handles frame acquisition.
"""

import logging
from typing import Optional, Tuple, Union

import cv2

from core.ingest.yuv_frame_converter import YuvFrameConverter
from core.interfaces.frame_interface import RawFrame
from core.interfaces.frame_source_interface import IFrameSource


logger = logging.getLogger(__name__)


class OpenCVFrameSource(IFrameSource):
    """
    Frame source backed by cv2.VideoCapture.
    
    Accepts a camera index or a video file path. Odd frame dimensions are
    cropped by one pixel since I420 needs even width and height.
    """
    
    def __init__(
        self,
        source: Union[int, str] = 0,
        width: int = 1280,
        height: int = 720,
        rotationDegrees: int = 0
    ):
        """
        Initialize OpenCVFrameSource.
        
        Args:
            source: Camera index or video file path.
            width: Desired frame width.
            height: Desired frame height.
            rotationDegrees: Rotation metadata attached to every frame.
        """
        self._source = source
        self._width = width
        self._height = height
        self._rotationDegrees = YuvFrameConverter.validateRotation(rotationDegrees)
        self._capture: Optional[cv2.VideoCapture] = None
    
    def open(self) -> bool:
        """
        Open the capture device.
        
        Returns:
            bool: True if the device opened successfully.
        """
        if self._capture is not None:
            self.release()
        
        self._capture = cv2.VideoCapture(self._source)
        if not self._capture.isOpened():
            logger.error(f"Failed to open frame source {self._source}")
            self._capture = None
            return False
        
        if isinstance(self._source, int):
            self._capture.set(cv2.CAP_PROP_FRAME_WIDTH, self._width)
            self._capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self._height)
            self._capture.set(cv2.CAP_PROP_BUFFERSIZE, 1)
        
        logger.info(f"Frame source {self._source} opened ({self._width}x{self._height})")
        return True
    
    def read(self) -> Tuple[bool, Optional[RawFrame]]:
        """
        Read a frame and convert it to I420.
        
        Returns:
            Tuple[bool, Optional[RawFrame]]: Success flag and frame.
        """
        if self._capture is None or not self._capture.isOpened():
            return (False, None)
        
        ret, bgr = self._capture.read()
        if not ret:
            return (False, None)
        
        height, width = bgr.shape[:2]
        bgr = bgr[:height - height % 2, :width - width % 2]
        return (True, YuvFrameConverter.fromBgr(bgr, self._rotationDegrees))
    
    def release(self) -> None:
        """Release the capture device."""
        if self._capture is not None:
            self._capture.release()
            logger.info(f"Frame source {self._source} released")
            self._capture = None
    
    def isOpened(self) -> bool:
        """Check if the capture device is opened."""
        return self._capture is not None and self._capture.isOpened()
