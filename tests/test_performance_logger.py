"""
Tests for PerformanceLogger.
"""

import pytest

from services.performance_logger import PerformanceLogger, TimingInfo


TIMING = {"ingest": 2.0, "sharpness": 3.0, "locate": 10.0, "geometry": 4.0, "grading": 1.0, "total": 20.0}


class TestPerformanceLogger:
    """Timing records and rolling FPS."""
    
    def test_record_timing(self):
        perfLogger = PerformanceLogger(logInterval=0)
        
        timing = perfLogger.recordTiming(TIMING)
        
        assert timing.locateMs == 10.0
        assert timing.totalMs == 20.0
        assert timing.fps == pytest.approx(50.0)
        assert perfLogger.frameCount == 1
        assert perfLogger.getLastTiming() is timing
    
    def test_total_defaults_to_stage_sum(self):
        perfLogger = PerformanceLogger(logInterval=0)
        
        timing = perfLogger.recordTiming({"ingest": 1.0, "sharpness": 4.0})
        
        assert timing.totalMs == 5.0
        assert timing.geometryMs == 0.0
    
    def test_rolling_window(self):
        perfLogger = PerformanceLogger(logInterval=0, rollingWindowSize=2)
        
        perfLogger.recordTiming({"total": 1000.0})
        perfLogger.recordTiming({"total": 10.0})
        perfLogger.recordTiming({"total": 10.0})
        
        assert perfLogger.getAverageFps() == pytest.approx(100.0)
        assert perfLogger.frameCount == 3
    
    def test_disabled(self):
        perfLogger = PerformanceLogger(enabled=False)
        
        assert perfLogger.recordTiming(TIMING) == TimingInfo()
        assert perfLogger.frameCount == 0
        assert perfLogger.getAverageFps() == 0.0
    
    def test_on_update_callback(self):
        updates = []
        perfLogger = PerformanceLogger(logInterval=0, onUpdate=updates.append)
        
        perfLogger.recordTiming(TIMING)
        
        assert len(updates) == 1
        assert updates[0].gradingMs == 1.0
    
    def test_reset(self):
        perfLogger = PerformanceLogger(logInterval=0)
        perfLogger.recordTiming(TIMING)
        
        perfLogger.reset()
        
        assert perfLogger.frameCount == 0
        assert perfLogger.getAverageFps() == 0.0
        assert perfLogger.getLastTiming() == TimingInfo()
    
    def test_summary_line(self):
        text = repr(TimingInfo(locateMs=12.5, totalMs=20.0, fps=50.0))
        
        assert "locate=12.5ms" in text
        assert "FPS=50.0" in text
