"""Barcode detection backends."""

from core.barcode.barcode_detector_factory import (
    createBarcodeDetector,
    getSupportedBarcodeBackends,
    isBarcodeBackendAvailable
)

__all__ = [
    'createBarcodeDetector',
    'getSupportedBarcodeBackends',
    'isBarcodeBackendAvailable'
]
