"""
Frame Source Interface Module

Defines the abstract interface for the external frame stream that feeds
the grading pipeline with RawFrame objects.
Follows ISP (Interface Segregation Principle): Only contains frame stream methods.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from core.interfaces.frame_interface import RawFrame


class IFrameSource(ABC):
    """
    Abstract interface for a source of raw YUV frames.
    
    Implementations may wrap a camera, a video file or a single still image.
    """
    
    @abstractmethod
    def open(self) -> bool:
        """
        Open the underlying device or file.
        
        Returns:
            bool: True if the source opened successfully.
        """
        pass
    
    @abstractmethod
    def read(self) -> Tuple[bool, Optional[RawFrame]]:
        """
        Read the next frame.
        
        Returns:
            Tuple[bool, Optional[RawFrame]]:
                - First element: True if a frame was read.
                - Second element: The raw YUV frame, or None if failed.
        """
        pass
    
    @abstractmethod
    def release(self) -> None:
        """Release the device and free resources."""
        pass
    
    @abstractmethod
    def isOpened(self) -> bool:
        """
        Check if the source is currently opened.
        
        Returns:
            bool: True if opened.
        """
        pass
