"""
Services Interfaces Package.

Exports all service interfaces for the barcode grading pipeline.
"""

from services.interfaces.base_service_interface import (
    IBaseService,
    BaseService
)

from services.interfaces.config_service_interface import IConfigService

from services.interfaces.frame_ingest_service_interface import (
    FrameIngestServiceResult,
    IFrameIngestService
)

from services.interfaces.sharpness_gate_service_interface import (
    SharpnessGateServiceResult,
    ISharpnessGateService
)

from services.interfaces.symbol_locator_service_interface import (
    SymbolLocatorServiceResult,
    ISymbolLocatorService
)

from services.interfaces.geometry_normalizer_service_interface import (
    GeometryNormalizerServiceResult,
    IGeometryNormalizerService
)

from services.interfaces.quality_grader_service_interface import (
    QualityGraderServiceResult,
    IQualityGraderService
)

from services.interfaces.grading_pipeline_interface import (
    PipelineStatus,
    GradingResult,
    PipelineOutcome,
    ResultCallback,
    IGradingPipelineService
)


__all__ = [
    # Base
    "IBaseService",
    "BaseService",
    # Config
    "IConfigService",
    # Step 1: Frame Ingest
    "FrameIngestServiceResult",
    "IFrameIngestService",
    # Step 2: Sharpness Gate
    "SharpnessGateServiceResult",
    "ISharpnessGateService",
    # Step 3: Symbol Locator
    "SymbolLocatorServiceResult",
    "ISymbolLocatorService",
    # Step 4: Geometry Normalizer
    "GeometryNormalizerServiceResult",
    "IGeometryNormalizerService",
    # Step 5: Quality Grader
    "QualityGraderServiceResult",
    "IQualityGraderService",
    # Pipeline
    "PipelineStatus",
    "GradingResult",
    "PipelineOutcome",
    "ResultCallback",
    "IGradingPipelineService",
]
