"""
YUV Frame Converter Module.

Converts planar YUV 4:2:0 camera frames into RGB rasters and applies the
frame's rotation metadata.

Follows SRP: Only handles pixel format conversion and rotation.
"""

import cv2
import numpy as np

from core.exceptions import MalformedInputError
from core.interfaces.frame_interface import (
    PlaneBuffer,
    RawFrame,
    VALID_ROTATIONS
)


_ROTATE_CODES = {
    90: cv2.ROTATE_90_CLOCKWISE,
    180: cv2.ROTATE_180,
    270: cv2.ROTATE_90_COUNTERCLOCKWISE,
}


class YuvFrameConverter:
    """
    Converts RawFrame buffers into RGB rasters.
    
    Uses the integer BT.601 coefficients:
        C = Y - 16, D = U - 128, E = V - 128
        R = clamp((298*C + 409*E + 128) >> 8)
        G = clamp((298*C - 100*D - 208*E + 128) >> 8)
        B = clamp((298*C + 516*D + 128) >> 8)
    
    All methods are deterministic and never modify their inputs.
    """
    
    @staticmethod
    def toRgb(frame: RawFrame) -> np.ndarray:
        """
        Convert a raw frame to an RGB raster without rotating it.
        
        Args:
            frame: Raw YUV 4:2:0 frame.
            
        Returns:
            np.ndarray: RGB raster of shape (height, width, 3), dtype uint8.
            
        Raises:
            MalformedInputError: If dimensions are invalid or a plane is
                too short for the declared geometry.
        """
        if frame.width <= 0 or frame.height <= 0:
            raise MalformedInputError(
                "Frame dimensions must be positive",
                {"width": frame.width, "height": frame.height}
            )
        
        y = YuvFrameConverter._readPlane(frame.yPlane, frame.height, frame.width, "Y")
        u = YuvFrameConverter._readPlane(frame.uPlane, frame.chromaHeight, frame.chromaWidth, "U")
        v = YuvFrameConverter._readPlane(frame.vPlane, frame.chromaHeight, frame.chromaWidth, "V")
        
        # Each chroma sample covers a 2x2 luma block
        u = np.repeat(np.repeat(u, 2, axis=0), 2, axis=1)[:frame.height, :frame.width]
        v = np.repeat(np.repeat(v, 2, axis=0), 2, axis=1)[:frame.height, :frame.width]
        
        c = y.astype(np.int32) - 16
        d = u.astype(np.int32) - 128
        e = v.astype(np.int32) - 128
        
        r = (298 * c + 409 * e + 128) >> 8
        g = (298 * c - 100 * d - 208 * e + 128) >> 8
        b = (298 * c + 516 * d + 128) >> 8
        
        rgb = np.stack([r, g, b], axis=-1)
        return np.clip(rgb, 0, 255).astype(np.uint8)
    
    @staticmethod
    def rotate(image: np.ndarray, rotationDegrees: int) -> np.ndarray:
        """
        Rotate a raster clockwise by 0, 90, 180 or 270 degrees.
        
        Args:
            image: Input raster.
            rotationDegrees: 0, 90, 180 or 270.
            
        Returns:
            np.ndarray: New rotated raster. Width and height are swapped
            for 90 and 270.
            
        Raises:
            MalformedInputError: If the rotation is not 0, 90, 180 or 270.
        """
        degrees = YuvFrameConverter.validateRotation(rotationDegrees)
        if degrees == 0:
            return image.copy()
        return cv2.rotate(image, _ROTATE_CODES[degrees])
    
    @staticmethod
    def validateRotation(rotationDegrees: int) -> int:
        """
        Check that a rotation is one of 0, 90, 180, 270.
        
        Raises:
            MalformedInputError: For any other value, including 360 and -90.
        """
        if rotationDegrees not in VALID_ROTATIONS:
            raise MalformedInputError(
                "Rotation must be one of 0, 90, 180, 270",
                {"rotationDegrees": rotationDegrees}
            )
        return rotationDegrees
    
    @staticmethod
    def toRotatedRgb(frame: RawFrame) -> np.ndarray:
        """Convert a frame and apply its rotation metadata."""
        return YuvFrameConverter.rotate(
            YuvFrameConverter.toRgb(frame),
            frame.rotationDegrees
        )
    
    @staticmethod
    def fromBgr(image: np.ndarray, rotationDegrees: int = 0) -> RawFrame:
        """
        Build a planar I420 RawFrame from a BGR image.
        
        Used to feed OpenCV camera frames and still images through the
        same ingest path as a mobile camera stream.
        
        Args:
            image: BGR image with even width and height.
            rotationDegrees: Rotation metadata to attach.
            
        Returns:
            RawFrame with tightly packed planes.
            
        Raises:
            MalformedInputError: If the image is empty or has odd dimensions.
        """
        if image is None or image.size == 0 or image.ndim != 3:
            raise MalformedInputError("Expected a non-empty BGR image")
        
        height, width = image.shape[:2]
        if width % 2 or height % 2:
            raise MalformedInputError(
                "I420 conversion needs even dimensions",
                {"width": width, "height": height}
            )
        
        i420 = cv2.cvtColor(image, cv2.COLOR_BGR2YUV_I420)
        flat = i420.reshape(-1)
        lumaSize = width * height
        chromaSize = lumaSize // 4
        
        yBytes = flat[:lumaSize].tobytes()
        uBytes = flat[lumaSize:lumaSize + chromaSize].tobytes()
        vBytes = flat[lumaSize + chromaSize:lumaSize + 2 * chromaSize].tobytes()
        
        return RawFrame(
            yPlane=PlaneBuffer(yBytes, rowStride=width),
            uPlane=PlaneBuffer(uBytes, rowStride=width // 2),
            vPlane=PlaneBuffer(vBytes, rowStride=width // 2),
            width=width,
            height=height,
            rotationDegrees=rotationDegrees
        )
    
    @staticmethod
    def _readPlane(
        plane: PlaneBuffer,
        rows: int,
        cols: int,
        name: str
    ) -> np.ndarray:
        """
        Read a strided plane into a (rows, cols) uint8 array.
        
        Raises:
            MalformedInputError: If strides are invalid or the buffer is short.
        """
        if plane.pixelStride < 1 or plane.rowStride < plane.pixelStride * (cols - 1) + 1:
            raise MalformedInputError(
                f"Invalid strides for {name} plane",
                {"rowStride": plane.rowStride, "pixelStride": plane.pixelStride, "cols": cols}
            )
        
        required = plane.rowStride * (rows - 1) + plane.pixelStride * (cols - 1) + 1
        if len(plane.data) < required:
            raise MalformedInputError(
                f"{name} plane is too short",
                {"expected": required, "actual": len(plane.data)}
            )
        
        buffer = np.frombuffer(plane.data, dtype=np.uint8)
        view = np.lib.stride_tricks.as_strided(
            buffer,
            shape=(rows, cols),
            strides=(plane.rowStride, plane.pixelStride),
            writeable=False
        )
        return view.copy()
