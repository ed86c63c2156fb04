"""Frame sources."""

from core.camera.opencv_frame_source import OpenCVFrameSource

__all__ = ['OpenCVFrameSource']
