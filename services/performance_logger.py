"""
Performance Logger Service

Tracks and logs performance metrics for the grading pipeline.
Records per-stage times (ingest, sharpness, locate, geometry, grading)
and calculates a rolling average FPS.
"""

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Optional


logger = logging.getLogger(__name__)


@dataclass
class TimingInfo:
    """
    Timing of a single pipeline run. All times are in milliseconds.
    Stages that did not run stay at 0.0.
    """
    ingestMs: float = 0.0
    sharpnessMs: float = 0.0
    locateMs: float = 0.0
    geometryMs: float = 0.0
    gradingMs: float = 0.0
    totalMs: float = 0.0
    fps: float = 0.0
    
    def __repr__(self) -> str:
        return (
            f"ingest={self.ingestMs:.1f}ms, "
            f"sharpness={self.sharpnessMs:.1f}ms, "
            f"locate={self.locateMs:.1f}ms, "
            f"geometry={self.geometryMs:.1f}ms, "
            f"grading={self.gradingMs:.1f}ms | "
            f"Total={self.totalMs:.1f}ms | "
            f"FPS={self.fps:.1f}"
        )


class PerformanceLogger:
    """
    Performance logging service for the grading pipeline.
    
    Features:
    - Records timing for each pipeline stage
    - Calculates rolling average FPS
    - Logs a summary at most once per logInterval seconds
    - Supports callback for display updates
    
    Follows SRP: Only handles performance measurement and logging.
    """
    
    def __init__(
        self,
        enabled: bool = True,
        logInterval: float = 5.0,
        rollingWindowSize: int = 30,
        onUpdate: Optional[Callable[[TimingInfo], None]] = None
    ):
        """
        Initialize PerformanceLogger.
        
        Args:
            enabled: Enable/disable performance logging.
            logInterval: Seconds between summary logs (0 = don't log).
            rollingWindowSize: Number of frames for rolling average FPS.
            onUpdate: Callback called with TimingInfo after each frame.
        """
        self._enabled = enabled
        self._logInterval = logInterval
        self._onUpdate = onUpdate
        
        self._recentTimes: deque = deque(maxlen=rollingWindowSize)
        self._frameCount = 0
        self._lastLogTime = time.monotonic()
        self._currentTiming = TimingInfo()
    
    @property
    def enabled(self) -> bool:
        """Check if performance logging is enabled."""
        return self._enabled
    
    @enabled.setter
    def enabled(self, value: bool) -> None:
        self._enabled = value
    
    @property
    def frameCount(self) -> int:
        """Number of pipeline runs recorded."""
        return self._frameCount
    
    def recordTiming(self, timing: Dict[str, float]) -> TimingInfo:
        """
        Record the timing dictionary of one pipeline run.
        
        Expected keys: ingest, sharpness, locate, geometry, grading, total.
        A missing total is computed as the sum of the stages.
        
        Args:
            timing: Stage name -> milliseconds.
            
        Returns:
            TimingInfo with all recorded metrics.
        """
        if not self._enabled:
            return TimingInfo()
        
        self._currentTiming = TimingInfo(
            ingestMs=timing.get("ingest", 0.0),
            sharpnessMs=timing.get("sharpness", 0.0),
            locateMs=timing.get("locate", 0.0),
            geometryMs=timing.get("geometry", 0.0),
            gradingMs=timing.get("grading", 0.0)
        )
        self._currentTiming.totalMs = timing.get(
            "total",
            self._currentTiming.ingestMs +
            self._currentTiming.sharpnessMs +
            self._currentTiming.locateMs +
            self._currentTiming.geometryMs +
            self._currentTiming.gradingMs
        )
        
        self._recentTimes.append(self._currentTiming.totalMs)
        self._currentTiming.fps = self.getAverageFps()
        self._frameCount += 1
        
        now = time.monotonic()
        if self._logInterval > 0 and now - self._lastLogTime >= self._logInterval:
            logger.info(f"Performance: {self._currentTiming}")
            self._lastLogTime = now
        
        if self._onUpdate:
            self._onUpdate(self._currentTiming)
        
        return self._currentTiming
    
    def getAverageFps(self) -> float:
        """
        Get the rolling average FPS.
        
        Returns:
            Average FPS over the rolling window.
        """
        if len(self._recentTimes) == 0:
            return 0.0
        
        avgMs = sum(self._recentTimes) / len(self._recentTimes)
        return 1000.0 / avgMs if avgMs > 0 else 0.0
    
    def getLastTiming(self) -> TimingInfo:
        """Get the timing info of the last run."""
        return self._currentTiming
    
    def reset(self) -> None:
        """Reset all counters and timing data."""
        self._recentTimes.clear()
        self._frameCount = 0
        self._currentTiming = TimingInfo()
