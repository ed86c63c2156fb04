"""
Pytest configuration and shared fixtures for the barcode grader tests.

Frames are synthesized directly in YUV 4:2:0 so the tests exercise the
same ingest path as a camera stream. Detection is scripted: no test
needs a camera or a detector library.
"""

from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

import numpy as np
import pytest

from core.interfaces.barcode_detector_interface import (
    BarcodeFormat,
    DetectionOutcome,
    Found,
    IBarcodeDetector,
    NotFound
)
from core.interfaces.frame_interface import PlaneBuffer, RawFrame
from services.grading_pipeline_service import GradingPipelineService
from services.impl.s1_frame_ingest_service import S1FrameIngestService
from services.impl.s2_sharpness_gate_service import S2SharpnessGateService
from services.impl.s3_symbol_locator_service import S3SymbolLocatorService
from services.impl.s4_geometry_normalizer_service import S4GeometryNormalizerService
from services.impl.s5_quality_grader_service import S5QualityGraderService


PROJECT_ROOT = Path(__file__).parent.parent

FRAME_WIDTH = 640
FRAME_HEIGHT = 480
BAR_CORNERS = [(100, 200), (300, 200), (300, 260), (100, 260)]
WIDE_CORNERS = [(60, 150), (580, 150), (580, 330), (60, 330)]
EAN_VALUE = "012345678905"



# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Frame builders
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


def lumaToRawFrame(luma: np.ndarray, rotationDegrees: int = 0) -> RawFrame:
    """
    Pack a gray luminance image (0..255) into a neutral-chroma I420 frame.
    
    Y = round(L * 219 / 255) + 16 decodes back to L exactly for the
    values used in these tests.
    """
    height, width = luma.shape
    y = (np.round(luma.astype(np.float64) * 219.0 / 255.0) + 16).astype(np.uint8)
    chromaW, chromaH = (width + 1) // 2, (height + 1) // 2
    neutral = np.full((chromaH, chromaW), 128, dtype=np.uint8)
    
    return RawFrame(
        yPlane=PlaneBuffer(y.tobytes(), rowStride=width),
        uPlane=PlaneBuffer(neutral.tobytes(), rowStride=chromaW),
        vPlane=PlaneBuffer(neutral.tobytes(), rowStride=chromaW),
        width=width,
        height=height,
        rotationDegrees=rotationDegrees
    )


def barPatternLuma(
    corners: Sequence = BAR_CORNERS,
    barLevel: int = 0,
    spaceLevel: int = 255,
    background: int = 255
) -> np.ndarray:
    """
    Vertical bars (period 3: one space column, two bar columns) filling the
    bounding box of the corners on a plain background.
    """
    luma = np.full((FRAME_HEIGHT, FRAME_WIDTH), background, dtype=np.uint8)
    xs = [p[0] for p in corners]
    ys = [p[1] for p in corners]
    left, right, top, bottom = min(xs), max(xs), min(ys), max(ys)
    
    columns = np.arange(left, right + 1)
    pattern = np.where(columns % 3 == 0, spaceLevel, barLevel).astype(np.uint8)
    luma[top:bottom + 1, left:right + 1] = pattern[np.newaxis, :]
    return luma


@pytest.fixture
def makeRawFrame() -> Callable[..., RawFrame]:
    """Builder turning a luminance image into a RawFrame."""
    return lumaToRawFrame


@pytest.fixture
def gradeAFrame() -> RawFrame:
    """Sharp black/white bars at BAR_CORNERS: grades A."""
    return lumaToRawFrame(barPatternLuma(BAR_CORNERS))


@pytest.fixture
def gradeCFrame() -> RawFrame:
    """Low contrast bars (50 vs 105) at WIDE_CORNERS: grades C."""
    return lumaToRawFrame(barPatternLuma(WIDE_CORNERS, barLevel=50, spaceLevel=105))


@pytest.fixture
def blankFrame() -> RawFrame:
    """Uniform mid gray frame: Laplacian variance 0."""
    return lumaToRawFrame(np.full((FRAME_HEIGHT, FRAME_WIDTH), 128, dtype=np.uint8))


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Scripted detector
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


class ScriptedDetector(IBarcodeDetector):
    """
    Detector returning scripted outcomes in order.
    
    The last outcome repeats once the script is exhausted. An exception
    instance in the script is raised instead of returned.
    """
    
    def __init__(self, *outcomes: Union[DetectionOutcome, Exception]):
        self._outcomes: List = list(outcomes) or [NotFound()]
        self.calls: List[np.ndarray] = []
    
    def getBackendName(self) -> str:
        return "scripted"
    
    def detect(self, image: np.ndarray) -> DetectionOutcome:
        self.calls.append(image)
        index = min(len(self.calls) - 1, len(self._outcomes) - 1)
        outcome = self._outcomes[index]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def foundAt(
    corners: Sequence = BAR_CORNERS,
    value: Optional[str] = EAN_VALUE,
    barcodeFormat: BarcodeFormat = BarcodeFormat.EAN_13
) -> Found:
    """Found outcome at the given corners."""
    return Found(decodedValue=value, format=barcodeFormat, corners=list(corners))


@pytest.fixture
def scriptedDetector() -> Callable[..., ScriptedDetector]:
    """Factory for ScriptedDetector."""
    return ScriptedDetector


@pytest.fixture
def found() -> Callable[..., Found]:
    """Factory for Found outcomes."""
    return foundAt


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# Pipeline
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━


@pytest.fixture
def buildPipeline():
    """
    Factory building a GradingPipelineService around a detector.
    
    Locator workers are shut down after the test.
    """
    locators: List[S3SymbolLocatorService] = []
    
    def build(detector: IBarcodeDetector, **kwargs) -> GradingPipelineService:
        locator = S3SymbolLocatorService(detector=detector)
        locators.append(locator)
        return GradingPipelineService(
            ingestService=S1FrameIngestService(),
            sharpnessService=S2SharpnessGateService(),
            locatorService=locator,
            geometryService=S4GeometryNormalizerService(),
            gradingService=S5QualityGraderService(),
            **kwargs
        )
    
    yield build
    
    for locator in locators:
        locator.shutdown()


@pytest.fixture
def configPath() -> Path:
    """Path of the shipped application config."""
    return PROJECT_ROOT / "config" / "application_config.json"
