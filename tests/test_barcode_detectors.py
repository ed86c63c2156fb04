"""
Tests for detector adapters and the backend factory.

Backend libraries are replaced by small fakes so the adapters' result
mapping is exercised without zxing-cpp or ZBar installed.
"""

from types import SimpleNamespace

import cv2
import numpy as np
import pytest

from core.barcode import createBarcodeDetector, getSupportedBarcodeBackends, isBarcodeBackendAvailable
from core.barcode.opencv_barcode_detector import OpenCVBarcodeDetector
from core.barcode.pyzbar_barcode_detector import PyzbarBarcodeDetector
from core.barcode.zxing_barcode_detector import ZxingBarcodeDetector
from core.interfaces.barcode_detector_interface import BarcodeFormat, Found, NotFound
from services.impl.s3_symbol_locator_service import S3SymbolLocatorService


def point(x, y):
    return SimpleNamespace(x=x, y=y)


class TestBarcodeFormat:
    """Backend format names."""
    
    @pytest.mark.parametrize("name,expected", [
        ("EAN13", BarcodeFormat.EAN_13),
        ("EAN_13", BarcodeFormat.EAN_13),
        ("Code128", BarcodeFormat.CODE_128),
        ("CODE-39", BarcodeFormat.CODE_39),
        ("QRCODE", BarcodeFormat.QR_CODE),
        ("I25", BarcodeFormat.ITF),
        ("UPC-A", BarcodeFormat.UPC_A),
        ("MaxiCode", BarcodeFormat.UNKNOWN),
        ("", BarcodeFormat.UNKNOWN),
        (None, BarcodeFormat.UNKNOWN),
    ])
    def test_from_name(self, name, expected):
        assert BarcodeFormat.fromName(name) == expected
    
    def test_outcome_tags(self):
        assert not NotFound().found
        assert Found(decodedValue=None, format=BarcodeFormat.UNKNOWN, corners=[]).found


class TestFactory:
    """Backend selection."""
    
    def test_supported_backends(self):
        assert getSupportedBarcodeBackends() == ["zxing", "pyzbar", "opencv"]
    
    def test_invalid_backend(self):
        with pytest.raises(ValueError):
            createBarcodeDetector(backend="wechat")
    
    def test_zxing_backend_is_lazy(self):
        detector = createBarcodeDetector(backend=" ZXing ")
        
        assert isinstance(detector, ZxingBarcodeDetector)
        assert detector.getBackendName() == "zxing"
    
    def test_unknown_backend_is_unavailable(self):
        assert not isBarcodeBackendAvailable("nope")


class TestZxingAdapter:
    """zxing-cpp result mapping."""
    
    def makeDetector(self, barcodes):
        detector = ZxingBarcodeDetector()
        detector._zxingcpp = SimpleNamespace(read_barcodes=lambda image, **kwargs: barcodes)
        return detector
    
    def test_found(self):
        barcode = SimpleNamespace(
            valid=True,
            text="012345678905",
            format=SimpleNamespace(name="EAN13"),
            position=SimpleNamespace(
                top_left=point(10, 20),
                top_right=point(110, 21),
                bottom_right=point(109, 60),
                bottom_left=point(11, 59)
            )
        )
        
        outcome = self.makeDetector([barcode]).detect(np.zeros((80, 120, 3), dtype=np.uint8))
        
        assert outcome == Found(
            decodedValue="012345678905",
            format=BarcodeFormat.EAN_13,
            corners=[(10, 20), (110, 21), (109, 60), (11, 59)]
        )
    
    def test_invalid_results_are_skipped(self):
        barcode = SimpleNamespace(valid=False)
        
        outcome = self.makeDetector([barcode]).detect(np.zeros((8, 8), dtype=np.uint8))
        
        assert isinstance(outcome, NotFound)


class TestPyzbarAdapter:
    """ZBar result mapping."""
    
    def makeDetector(self, symbols):
        detector = PyzbarBarcodeDetector()
        detector._decode = lambda image, symbols=None, results=list(symbols): results
        return detector
    
    def test_polygon_corners(self):
        symbol = SimpleNamespace(
            data=b"ABC-123",
            type="CODE128",
            polygon=[point(1, 2), point(30, 2), point(30, 20), point(1, 20)],
            rect=SimpleNamespace(left=1, top=2, width=29, height=18)
        )
        
        outcome = self.makeDetector([symbol]).detect(np.zeros((24, 32, 3), dtype=np.uint8))
        
        assert outcome.decodedValue == "ABC-123"
        assert outcome.format == BarcodeFormat.CODE_128
        assert outcome.corners == [(1, 2), (30, 2), (30, 20), (1, 20)]
    
    def test_rect_fallback(self):
        symbol = SimpleNamespace(
            data=b"5901234123457",
            type="EAN13",
            polygon=[point(1, 2), point(30, 2)],
            rect=SimpleNamespace(left=1, top=2, width=29, height=18)
        )
        
        outcome = self.makeDetector([symbol]).detect(np.zeros((24, 32), dtype=np.uint8))
        
        assert outcome.corners == [(1, 2), (30, 2), (30, 20), (1, 20)]
    
    def test_nothing_decoded(self):
        outcome = self.makeDetector([]).detect(np.zeros((24, 32), dtype=np.uint8))
        
        assert isinstance(outcome, NotFound)


class TestOpenCVResultMapping:
    """cv2.barcode result mapping through a fake BarcodeDetector."""
    
    def makeDetector(self, monkeypatch, result):
        fake = SimpleNamespace(detectAndDecodeWithType=lambda image: result)
        monkeypatch.setattr(cv2, "barcode", SimpleNamespace(BarcodeDetector=lambda: fake), raising=False)
        return OpenCVBarcodeDetector()
    
    def test_first_decoded_symbol_is_chosen(self, monkeypatch):
        points = np.array([
            [[0.0, 0.0], [5.0, 0.0], [5.0, 5.0], [0.0, 5.0]],
            [[10.4, 20.6], [110.5, 20.2], [109.7, 60.4], [11.2, 59.5]],
        ], dtype=np.float32)
        detector = self.makeDetector(monkeypatch, (True, ("", "5901234123457"), ("", "EAN_13"), points))
        
        outcome = detector.detect(np.zeros((80, 120, 3), dtype=np.uint8))
        
        assert outcome.decodedValue == "5901234123457"
        assert outcome.format == BarcodeFormat.EAN_13
        assert outcome.corners == [(10, 21), (110, 20), (110, 60), (11, 60)]
        assert all(isinstance(coordinate, int) for point in outcome.corners for coordinate in point)
    
    def test_located_but_not_decoded(self, monkeypatch):
        points = np.array([[[1.0, 2.0], [30.0, 2.0], [30.0, 20.0], [1.0, 20.0]]], dtype=np.float32)
        detector = self.makeDetector(monkeypatch, (True, ("",), ("",), points))
        
        outcome = detector.detect(np.zeros((24, 32), dtype=np.uint8))
        
        assert outcome.found
        assert outcome.decodedValue is None
        assert outcome.format == BarcodeFormat.UNKNOWN
        assert outcome.corners == [(1, 2), (30, 2), (30, 20), (1, 20)]
    
    def test_nothing_located(self, monkeypatch):
        detector = self.makeDetector(monkeypatch, (False, (), (), None))
        
        assert isinstance(detector.detect(np.zeros((24, 32), dtype=np.uint8)), NotFound)
    
    def test_missing_barcode_module(self, monkeypatch):
        monkeypatch.delattr(cv2, "barcode", raising=False)
        
        with pytest.raises(ImportError):
            OpenCVBarcodeDetector()


@pytest.mark.skipif(not hasattr(cv2, "barcode"), reason="OpenCV barcode module not available")
class TestOpenCVAdapter:
    """cv2.barcode backend on a blank image."""
    
    def test_blank_image(self):
        detector = createBarcodeDetector(backend="opencv")
        
        outcome = detector.detect(np.full((120, 160, 3), 255, dtype=np.uint8))
        
        assert isinstance(outcome, NotFound)


class TestSymbolLocatorService:
    """Future based locator."""
    
    def test_locate_async_resolves(self, scriptedDetector, found):
        service = S3SymbolLocatorService(detector=scriptedDetector(found()))
        try:
            future = service.locateAsync(np.zeros((4, 4, 3), dtype=np.uint8), "frame_1")
            assert future.result(timeout=5) == found()
        finally:
            service.shutdown()
    
    def test_locate_async_carries_error(self, scriptedDetector):
        service = S3SymbolLocatorService(detector=scriptedDetector(ValueError("bad image")))
        try:
            future = service.locateAsync(np.zeros((4, 4, 3), dtype=np.uint8), "frame_1")
            with pytest.raises(ValueError):
                future.result(timeout=5)
        finally:
            service.shutdown()
    
    def test_locate_classifies_error(self, scriptedDetector):
        service = S3SymbolLocatorService(detector=scriptedDetector(OSError("device lost")))
        try:
            result = service.locate(np.zeros((4, 4, 3), dtype=np.uint8), "frame_2")
        finally:
            service.shutdown()
        
        assert not result.success
        assert not result.found
        assert "device lost" in result.errorMessage
    
    def test_backend_name(self, scriptedDetector):
        service = S3SymbolLocatorService(detector=scriptedDetector())
        try:
            assert service.getBackendName() == "scripted"
        finally:
            service.shutdown()
