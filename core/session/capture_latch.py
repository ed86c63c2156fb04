"""
Capture Latch Module

One-shot-per-session gate around the grading pipeline. Once a frame has
been graded, every later frame is discarded until the latch is reset.

Follows SRP: Only handles the capture state of a scanning session.
"""

import logging
import threading
import uuid
from contextlib import contextmanager
from enum import Enum
from typing import Iterator, Optional

from core.interfaces.grader_interface import Grade


logger = logging.getLogger(__name__)


class LatchState(Enum):
    """State of a scanning session."""
    IDLE = "idle"
    CAPTURED = "captured"


class CaptureLatch:
    """
    Session scoped capture latch.
    
    States:
    - IDLE: frames run the full pipeline
    - CAPTURED: frames are dropped before any work, until reset()
    
    One instance per scanning session, owned by the caller. Frames claim
    the latch for their whole pipeline run with claimFrame(), so the
    check-then-capture sequence is atomic and two detections never
    overlap. A frame that cannot claim the latch is dropped, including a
    nested claim from the thread already holding it. State transitions
    take a separate lock so capture() can run inside a claim.
    """
    
    def __init__(
        self,
        latchOnFailingGrade: bool = True,
        sessionId: Optional[str] = None
    ):
        """
        Initialize CaptureLatch.
        
        Args:
            latchOnFailingGrade: If True any grade (including F) latches.
                If False only A-D latch and an F frame keeps scanning.
            sessionId: Identifier used in log messages.
        """
        self._latchOnFailingGrade = latchOnFailingGrade
        self._sessionId = sessionId or uuid.uuid4().hex[:8]
        self._state = LatchState.IDLE
        self._frameLock = threading.Lock()
        self._stateLock = threading.Lock()
        
        logger.debug(
            f"[session {self._sessionId}] CaptureLatch created "
            f"(latchOnFailingGrade={latchOnFailingGrade})"
        )
    
    @property
    def sessionId(self) -> str:
        """Get session identifier."""
        return self._sessionId
    
    @property
    def state(self) -> LatchState:
        """Get current state."""
        return self._state
    
    @property
    def latchOnFailingGrade(self) -> bool:
        """Whether an F grade latches the session."""
        return self._latchOnFailingGrade
    
    def isCaptured(self) -> bool:
        """Check if the session has already captured a frame."""
        return self._state == LatchState.CAPTURED
    
    @contextmanager
    def claimFrame(self) -> Iterator[bool]:
        """
        Claim the latch for one frame without blocking.
        
        Yields:
            bool: True if this frame owns the latch until the block exits,
            False if another frame is in flight.
        """
        acquired = self._frameLock.acquire(blocking=False)
        try:
            yield acquired
        finally:
            if acquired:
                self._frameLock.release()
    
    def shouldLatch(self, grade: Grade) -> bool:
        """Check the latch policy for a grade."""
        return self._latchOnFailingGrade or grade != Grade.F
    
    def capture(self, grade: Grade) -> bool:
        """
        Transition IDLE -> CAPTURED if the policy allows it.
        
        Args:
            grade: Grade of the frame that completed the pipeline.
            
        Returns:
            bool: True if the latch transitioned.
        """
        with self._stateLock:
            if self._state == LatchState.CAPTURED:
                return False
            if not self.shouldLatch(grade):
                logger.debug(
                    f"[session {self._sessionId}] Grade {grade} does not latch, keep scanning"
                )
                return False
            
            self._state = LatchState.CAPTURED
            logger.info(f"[session {self._sessionId}] Captured with grade {grade}")
            return True
    
    def reset(self) -> None:
        """Return to IDLE ("scan again")."""
        with self._stateLock:
            self._state = LatchState.IDLE
        logger.info(f"[session {self._sessionId}] Latch reset")
