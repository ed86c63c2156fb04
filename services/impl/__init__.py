"""
Services Implementation Package.

Exports all service implementations for the barcode grading pipeline.
"""

from services.impl.config_service import ConfigService
from services.impl.s1_frame_ingest_service import S1FrameIngestService
from services.impl.s2_sharpness_gate_service import S2SharpnessGateService
from services.impl.s3_symbol_locator_service import S3SymbolLocatorService
from services.impl.s4_geometry_normalizer_service import S4GeometryNormalizerService
from services.impl.s5_quality_grader_service import S5QualityGraderService


__all__ = [
    "ConfigService",
    "S1FrameIngestService",
    "S2SharpnessGateService",
    "S3SymbolLocatorService",
    "S4GeometryNormalizerService",
    "S5QualityGraderService",
]
