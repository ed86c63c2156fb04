"""
Tests for luminance metrics and the grade tier table.
"""

import itertools

import numpy as np
import pytest

from core.interfaces.grader_interface import Grade, GradingThresholds, QualityMetrics
from core.quality.barcode_grader import BarcodeGrader
from services.impl.s5_quality_grader_service import S5QualityGraderService


def metrics(contrastRange, edgeDensity, noiseCount, width=100, height=10):
    return QualityMetrics(
        contrastRange=contrastRange,
        edgeDensity=edgeDensity,
        noiseCount=noiseCount,
        meanLuminance=128,
        width=width,
        height=height
    )


def grayRgb(luma):
    gray = np.asarray(luma, dtype=np.uint8)
    return np.stack([gray, gray, gray], axis=-1)


class TestLuminance:
    """floor(0.299R + 0.587G + 0.114B)."""
    
    def test_floor_of_weighted_sum(self):
        image = np.array([[[10, 20, 30], [255, 255, 255]]], dtype=np.uint8)
        
        lum = BarcodeGrader.luminance(image)
        
        assert lum.tolist() == [[18, 255]]
    
    def test_every_gray_level_maps_to_itself(self):
        # Weights sum to 1000: gray g maps to g
        levels = np.arange(256, dtype=np.uint8).reshape(16, 16)
        
        lum = BarcodeGrader.luminance(np.stack([levels, levels, levels], axis=-1))
        
        assert np.array_equal(lum, levels.astype(np.int32))
    
    def test_single_channel_passthrough(self):
        lum = BarcodeGrader.luminance(np.array([[7, 9]], dtype=np.uint8))
        
        assert lum.tolist() == [[7, 9]]


class TestComputeMetrics:
    """contrastRange, edgeDensity and noiseCount."""
    
    def test_small_region(self):
        region = grayRgb([
            [0, 100, 0],
            [0, 100, 20],
            [0, 100, 0],
        ])
        
        result = BarcodeGrader().computeMetrics(region)
        
        assert result.contrastRange == 100
        assert result.edgeDensity == 6
        assert result.noiseCount == 2
        assert result.meanLuminance == 35
        assert (result.width, result.height) == (3, 3)
        assert result.contrast == pytest.approx(100 / 255.0)
    
    def test_noise_skips_first_column(self):
        region = grayRgb([
            [0, 50],
            [200, 50],
        ])
        
        assert BarcodeGrader().computeMetrics(region).noiseCount == 0
    
    def test_edge_threshold_is_exclusive(self):
        region = grayRgb([[0, 50, 101]])
        
        assert BarcodeGrader().computeMetrics(region).edgeDensity == 1
    
    def test_custom_pixel_thresholds(self):
        grader = BarcodeGrader(GradingThresholds(edgeThreshold=10, noiseThreshold=100))
        region = grayRgb([
            [0, 20, 0],
            [0, 20, 60],
        ])
        
        result = grader.computeMetrics(region)
        
        assert result.edgeDensity == 4
        assert result.noiseCount == 0


class TestAssignGrade:
    """Ordered tiers, first match wins."""
    
    @pytest.mark.parametrize("values,expected", [
        ((200, 300, 0), Grade.A),
        ((128, 300, 0), Grade.B),
        ((200, 200, 0), Grade.B),
        ((200, 300, 10), Grade.B),
        ((64, 300, 0), Grade.C),
        ((200, 100, 0), Grade.C),
        ((200, 300, 20), Grade.C),
        ((32, 300, 0), Grade.D),
        ((200, 50, 0), Grade.D),
        ((200, 300, 33), Grade.D),
    ])
    def test_tier_table(self, values, expected):
        # area 1000 -> noise limits 10 / 20 / 33
        assert BarcodeGrader().assignGrade(metrics(*values)) == expected
    
    def test_noise_bound_uses_integer_division(self):
        # area 999: 999 // 100 == 9
        grader = BarcodeGrader()
        
        assert grader.assignGrade(metrics(200, 300, 9, width=111, height=9)) == Grade.B
        assert grader.assignGrade(metrics(200, 300, 8, width=111, height=9)) == Grade.A
    
    def test_grade_is_pure(self):
        grader = BarcodeGrader()
        sample = metrics(100, 150, 3)
        
        assert {grader.assignGrade(sample) for _ in range(5)} == {Grade.B}
    
    def test_tier_nesting(self):
        tiers = {tier.grade: tier for tier in GradingThresholds().tiers}
        grid = itertools.product(
            range(0, 256, 16),
            (0, 40, 60, 120, 220, 400),
            (0, 5, 12, 25, 40)
        )
        
        for contrastRange, edges, noise in grid:
            sample = metrics(contrastRange, edges, noise)
            if tiers[Grade.A].matches(sample):
                assert tiers[Grade.B].matches(sample)
            if tiers[Grade.B].matches(sample):
                assert tiers[Grade.C].matches(sample)
    
    def test_grades_are_ordered(self):
        assert Grade.A > Grade.B > Grade.C > Grade.D > Grade.F
        assert str(Grade.C) == "C"


class TestGrade:
    """End to end on rasters."""
    
    def test_missing_region_is_f(self):
        assert BarcodeGrader().grade(None) == Grade.F
        assert BarcodeGrader().grade(np.zeros((0, 0, 3), dtype=np.uint8)) == Grade.F
    
    def test_high_contrast_bars_grade_a(self):
        columns = np.where(np.arange(90) % 3 == 0, 255, 0)
        region = grayRgb(np.tile(columns, (20, 1)))
        
        assert BarcodeGrader().grade(region) == Grade.A
    
    def test_flat_region_grades_d(self):
        assert BarcodeGrader().grade(grayRgb(np.full((10, 10), 200))) == Grade.D


class TestGradingThresholds:
    """Overridable constants."""
    
    def test_defaults(self):
        thresholds = GradingThresholds.fromDict(None)
        
        assert [t.grade for t in thresholds.tiers] == [Grade.A, Grade.B, Grade.C]
        assert thresholds.tiers[0].minContrast == 0.5
        assert thresholds.tiers[2].noiseDivisor == 30
        assert thresholds.fallbackGrade == Grade.D
        assert thresholds.ungradableGrade == Grade.F
    
    def test_partial_override(self):
        thresholds = GradingThresholds.fromDict({
            "edgeThreshold": 30,
            "tiers": {"A": {"minEdgeDensity": 1000}}
        })
        
        assert thresholds.edgeThreshold == 30
        assert thresholds.noiseThreshold == 15
        assert thresholds.tiers[0].minEdgeDensity == 1000
        assert thresholds.tiers[0].minContrastRange == 128
        assert BarcodeGrader(thresholds).assignGrade(metrics(200, 300, 0)) == Grade.B


class TestQualityGraderService:
    """Stage service."""
    
    def test_ungradable(self):
        result = S5QualityGraderService().grade(None, "frame_1")
        
        assert result.grade == Grade.F
        assert result.ungradable
        assert result.metrics is None
    
    def test_graded(self):
        columns = np.where(np.arange(90) % 3 == 0, 255, 0)
        region = grayRgb(np.tile(columns, (20, 1)))
        
        result = S5QualityGraderService().grade(region, "frame_2")
        
        assert result.grade == Grade.A
        assert not result.ungradable
        assert result.metrics.contrastRange == 255
