"""Geometry normalization module."""

from core.geometry.barcode_cropper import BarcodeCropper, CropRect, translateCorners
from core.geometry.overlay_renderer import OverlayRenderer

__all__ = [
    'BarcodeCropper',
    'CropRect',
    'translateCorners',
    'OverlayRenderer'
]
