"""Frame ingest module."""

from core.ingest.yuv_frame_converter import YuvFrameConverter

__all__ = [
    'YuvFrameConverter'
]
