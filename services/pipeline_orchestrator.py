"""
Pipeline Orchestrator Module.

Builds the barcode grading pipeline from configuration.
Creates ConfigService and initializes all services with proper parameters.

Pipeline Steps:
1. S1 Frame Ingest: YUV -> RGB, rotation
2. S2 Sharpness Gate: reject blurry frames
3. S3 Symbol Locator: external barcode detector
4. S4 Geometry Normalizer: loose crop, bar isolation
5. S5 Quality Grader: metrics and grade

Follows:
- SRP: Only handles pipeline construction and lifecycle
- DIP: Services receive parameters, not the config object
- OCP: Easy to add new services
"""

import logging
from typing import Optional

from core.barcode import getSupportedBarcodeBackends, isBarcodeBackendAvailable
from core.interfaces.barcode_detector_interface import IBarcodeDetector
from core.interfaces.frame_interface import RawFrame
from core.interfaces.grader_interface import GradingThresholds
from core.session.capture_latch import CaptureLatch
from services.grading_pipeline_service import GradingPipelineService
from services.impl.config_service import ConfigService
from services.impl.s1_frame_ingest_service import S1FrameIngestService
from services.impl.s2_sharpness_gate_service import S2SharpnessGateService
from services.impl.s3_symbol_locator_service import S3SymbolLocatorService
from services.impl.s4_geometry_normalizer_service import S4GeometryNormalizerService
from services.impl.s5_quality_grader_service import S5QualityGraderService
from services.interfaces.grading_pipeline_interface import PipelineOutcome, ResultCallback
from services.performance_logger import PerformanceLogger


class PipelineOrchestrator:
    """
    Orchestrates the barcode grading pipeline.
    
    Responsibilities:
    - Initialize ConfigService
    - Create all pipeline services with parameters from config
    - Create capture latches for scanning sessions
    - Shut down the detector worker
    """
    
    def __init__(
        self,
        configPath: str = "config/application_config.json",
        detector: Optional[IBarcodeDetector] = None,
        backend: Optional[str] = None
    ):
        """
        Initialize the pipeline orchestrator.
        
        Args:
            configPath: Path to the application configuration file.
            detector: Detector instance replacing the configured backend.
            backend: Backend name overriding s3_symbol_locator.backend.
        """
        self._logger = logging.getLogger(__name__)
        
        self._configService = ConfigService(configPath)
        self._logger.info("ConfigService initialized")
        
        debugBasePath = self._configService.getDebugBasePath()
        debugEnabled = self._configService.isDebugEnabled()
        
        self._initializeServices(debugBasePath, debugEnabled, detector, backend)
        
        self._logger.info("PipelineOrchestrator initialized successfully")
    
    def _initializeServices(
        self,
        debugBasePath: str,
        debugEnabled: bool,
        detector: Optional[IBarcodeDetector],
        backend: Optional[str]
    ) -> None:
        """
        Initialize all pipeline services with parameters from config.
        
        Following DIP: Services receive parameters, not IConfigService.
        """
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S1 Frame Ingest Service
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        self._s1FrameIngestService = S1FrameIngestService(
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S2 Sharpness Gate Service
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        self._s2SharpnessGateService = S2SharpnessGateService(
            threshold=self._configService.getSharpnessThreshold(),
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S3 Symbol Locator Service
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        backendName = backend or self._configService.getDetectorBackend()
        if detector is None:
            self._checkBackendInstalled(backendName)
        
        self._s3SymbolLocatorService = S3SymbolLocatorService(
            detector=detector,
            backend=backendName,
            zxingTryRotate=self._configService.getZxingTryRotate(),
            zxingTryDownscale=self._configService.getZxingTryDownscale(),
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S4 Geometry Normalizer Service
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        self._s4GeometryNormalizerService = S4GeometryNormalizerService(
            padding=self._configService.getCropPadding(),
            blurKernelSize=self._configService.getBlurKernelSize(),
            binaryThreshold=self._configService.getBinaryThreshold(),
            barCountThreshold=self._configService.getBarCountThreshold(),
            barKernelHeight=self._configService.getBarKernelHeight(),
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        # S5 Quality Grader Service
        # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
        self._s5QualityGraderService = S5QualityGraderService(
            thresholds=GradingThresholds.fromDict(self._configService.getGradingConfig()),
            debugBasePath=debugBasePath,
            debugEnabled=debugEnabled
        )
        
        self._performanceLogger = PerformanceLogger(
            logInterval=self._configService.getPerformanceLogInterval()
        )
        
        self._pipelineService = GradingPipelineService(
            ingestService=self._s1FrameIngestService,
            sharpnessService=self._s2SharpnessGateService,
            locatorService=self._s3SymbolLocatorService,
            geometryService=self._s4GeometryNormalizerService,
            gradingService=self._s5QualityGraderService,
            performanceLogger=self._performanceLogger
        )
    
    def _checkBackendInstalled(self, backendName: str) -> None:
        """
        Fail at startup when the configured detector library is missing.
        
        Unknown names are left to createBarcodeDetector(), which raises ValueError.
        
        Raises:
            ImportError: If the backend is known but its library is not installed.
        """
        normalized = backendName.lower().strip()
        if normalized not in getSupportedBarcodeBackends():
            return
        
        if not isBarcodeBackendAvailable(normalized):
            errorMsg = (
                f"Detector backend '{normalized}' is not installed. "
                f"Choose another with --backend or s3_symbol_locator.backend"
            )
            self._logger.error(errorMsg)
            raise ImportError(errorMsg)
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Service Accessors
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    @property
    def configService(self) -> ConfigService:
        """Get ConfigService instance."""
        return self._configService
    
    @property
    def pipelineService(self) -> GradingPipelineService:
        """Get the grading pipeline."""
        return self._pipelineService
    
    @property
    def symbolLocatorService(self) -> S3SymbolLocatorService:
        """Get S3SymbolLocatorService instance."""
        return self._s3SymbolLocatorService
    
    @property
    def performanceLogger(self) -> PerformanceLogger:
        """Get PerformanceLogger instance."""
        return self._performanceLogger
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Sessions
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def createSession(self, sessionId: Optional[str] = None) -> CaptureLatch:
        """
        Start a scanning session.
        
        Args:
            sessionId: Identifier used in log messages.
            
        Returns:
            CaptureLatch in IDLE state, configured with the latch policy.
        """
        return CaptureLatch(
            latchOnFailingGrade=self._configService.getLatchOnFailingGrade(),
            sessionId=sessionId
        )
    
    def processFrame(
        self,
        rawFrame: RawFrame,
        latch: CaptureLatch,
        frameId: Optional[str] = None,
        onResult: Optional[ResultCallback] = None
    ) -> PipelineOutcome:
        """Shortcut for pipelineService.processFrame()."""
        return self._pipelineService.processFrame(rawFrame, latch, frameId, onResult)
    
    def setDebugEnabled(self, enabled: bool) -> None:
        """
        Enable or disable debug output for all services.
        
        Args:
            enabled: True to enable debug mode.
        """
        self._configService.setDebugEnabled(enabled)
        self._s1FrameIngestService.setDebugEnabled(enabled)
        self._s2SharpnessGateService.setDebugEnabled(enabled)
        self._s3SymbolLocatorService.setDebugEnabled(enabled)
        self._s4GeometryNormalizerService.setDebugEnabled(enabled)
        self._s5QualityGraderService.setDebugEnabled(enabled)
    
    def shutdown(self) -> None:
        """Release the detector worker."""
        self._s3SymbolLocatorService.shutdown()
        self._logger.info("PipelineOrchestrator shut down")
