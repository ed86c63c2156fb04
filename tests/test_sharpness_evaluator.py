"""
Tests for the Laplacian variance sharpness gate.
"""

import numpy as np
import pytest

from core.ingest.yuv_frame_converter import YuvFrameConverter
from core.quality.sharpness_evaluator import SharpnessEvaluator
from services.impl.s2_sharpness_gate_service import S2SharpnessGateService


def checkerboard(amplitude: int, size: int = 64) -> np.ndarray:
    rows, cols = np.indices((size, size))
    signs = np.where((rows + cols) % 2 == 0, 1, -1)
    gray = (128 + amplitude * signs).astype(np.uint8)
    return np.stack([gray, gray, gray], axis=-1)


class TestSharpnessEvaluator:
    """Variance of the Laplacian."""
    
    def test_uniform_image_has_zero_variance(self):
        evaluator = SharpnessEvaluator()
        image = np.full((32, 32, 3), 90, dtype=np.uint8)
        
        assert evaluator.computeVariance(image) == 0.0
        assert not evaluator.isSharp(0.0)
    
    def test_variance_grows_with_high_frequency_noise(self):
        evaluator = SharpnessEvaluator()
        
        variances = [evaluator.computeVariance(checkerboard(a)) for a in (0, 5, 10, 20, 40)]
        
        assert variances == sorted(variances)
        assert variances[-1] > variances[0]
    
    def test_threshold_is_exclusive(self):
        evaluator = SharpnessEvaluator(threshold=100.0)
        
        assert not evaluator.isSharp(100.0)
        assert evaluator.isSharp(100.01)
    
    def test_accepts_grayscale(self):
        evaluator = SharpnessEvaluator()
        
        assert evaluator.computeVariance(checkerboard(40)[..., 0]) > 100.0
    
    def test_empty_image(self):
        assert SharpnessEvaluator().computeVariance(np.zeros((0, 0, 3), dtype=np.uint8)) == 0.0
    
    def test_bar_frame_is_sharp(self, gradeAFrame, gradeCFrame):
        evaluator = SharpnessEvaluator()
        
        for frame in (gradeAFrame, gradeCFrame):
            raster = YuvFrameConverter.toRotatedRgb(frame)
            assert evaluator.isSharp(evaluator.computeVariance(raster))


class TestSharpnessGateService:
    """Stage service around the evaluator."""
    
    def test_rejects_blank_frame(self, blankFrame):
        service = S2SharpnessGateService(threshold=100.0)
        raster = YuvFrameConverter.toRotatedRgb(blankFrame)
        
        result = service.evaluate(raster, "frame_blank")
        
        assert not result.isSharp
        assert result.variance == 0.0
        assert result.threshold == 100.0
        assert result.frameId == "frame_blank"
    
    def test_configurable_threshold(self):
        service = S2SharpnessGateService(threshold=1e9)
        
        result = service.evaluate(checkerboard(40), "frame_1")
        
        assert service.getThreshold() == 1e9
        assert not result.isSharp
