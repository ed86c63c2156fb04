"""
Frame Interface Module.

Defines the raw camera frame handed to the pipeline by the external
frame stream: three planar YUV 4:2:0 buffers plus rotation metadata.
"""

from dataclasses import dataclass


VALID_ROTATIONS = (0, 90, 180, 270)


@dataclass(frozen=True)
class PlaneBuffer:
    """
    A single image plane.
    
    Attributes:
        data: Raw plane bytes.
        rowStride: Distance in bytes between the starts of two rows.
        pixelStride: Distance in bytes between two samples of a row
            (1 for planar, 2 for semi-planar interleaved chroma).
    """
    data: bytes
    rowStride: int
    pixelStride: int = 1


@dataclass(frozen=True)
class RawFrame:
    """
    Raw camera frame in YUV 4:2:0 layout.
    
    The luma plane covers width x height samples, each chroma plane covers
    ceil(width/2) x ceil(height/2) samples.
    
    Attributes:
        yPlane: Luma plane.
        uPlane: Chroma-U (Cb) plane.
        vPlane: Chroma-V (Cr) plane.
        width: Frame width in pixels.
        height: Frame height in pixels.
        rotationDegrees: Clockwise rotation needed to display the frame
            upright (0, 90, 180 or 270).
    """
    yPlane: PlaneBuffer
    uPlane: PlaneBuffer
    vPlane: PlaneBuffer
    width: int
    height: int
    rotationDegrees: int = 0
    
    @property
    def chromaWidth(self) -> int:
        """Number of chroma samples per row."""
        return (self.width + 1) // 2
    
    @property
    def chromaHeight(self) -> int:
        """Number of chroma rows."""
        return (self.height + 1) // 2
