"""
Config Service Implementation.

Centralized configuration management for the barcode grading pipeline.
Loads application_config.json, organized by stage section
(s1_frame_ingest, s2_sharpness, ... capture_latch, debug, app).

Typed getters fall back to the documented defaults when a key is missing.

Follows:
- SRP: Only handles configuration management
- DIP: Provides configuration to the orchestrator via interface
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict


from services.interfaces.config_service_interface import IConfigService


logger = logging.getLogger(__name__)


class ConfigService(IConfigService):
    """
    Implementation of IConfigService backed by a JSON file.
    """
    
    def __init__(self, configPath: str = "config/application_config.json"):
        """
        Initialize ConfigService.
        
        Args:
            configPath: Path to the configuration file.
            
        Raises:
            RuntimeError: If the file is missing or not valid JSON.
        """
        self._config: Dict[str, Any] = {}
        self._configPath = Path(configPath)
        self._debugEnabled = False
        
        if not self.loadConfig(configPath):
            raise RuntimeError(f"Failed to load configuration from: {configPath}")
    
    def loadConfig(self, configPath: str) -> bool:
        """Load configuration from JSON file."""
        path = Path(configPath)
        if not path.exists():
            logger.error(f"Config file not found: {configPath}")
            return False
        
        try:
            with open(path, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON in config file: {e}")
            return False
        except OSError as e:
            logger.error(f"Failed to read config: {e}")
            return False
        
        if not isinstance(loaded, dict):
            logger.error(f"Config root must be an object: {configPath}")
            return False
        
        self._config = loaded
        self._configPath = path
        self._debugEnabled = bool(self.get("debug.enabled", False))
        
        logger.info(f"Configuration loaded from: {path.absolute()}")
        return True
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Generic Config Access
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by key with dot notation support.
        
        Examples:
            get("s2_sharpness.threshold") -> 100.0
            get("s3_symbol_locator.backend") -> "zxing"
        """
        value = self._config
        for part in key.split('.'):
            if not isinstance(value, dict):
                return default
            value = value.get(part)
            if value is None:
                return default
        return value
    
    def getServiceConfig(self, serviceName: str) -> Dict[str, Any]:
        """Get the configuration section of one stage."""
        config = self._config.get(serviceName, {})
        return config if isinstance(config, dict) else {}
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Debug Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def getDebugBasePath(self) -> str:
        """Get base path for debug output."""
        return self.get("debug.basePath", "output/debug")
    
    def isDebugEnabled(self) -> bool:
        """Check if debug mode is enabled."""
        return self._debugEnabled
    
    def setDebugEnabled(self, enabled: bool) -> None:
        """Enable or disable debug mode at runtime."""
        self._debugEnabled = enabled
        logger.info(f"Debug mode {'enabled' if enabled else 'disabled'}")
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # App Settings
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def getAppName(self) -> str:
        """Get application display name."""
        return self.get("app.name", "Barcode Grader")
    
    def getOutputDirectory(self) -> str:
        """Get directory for saved result images."""
        return self.get("app.outputDirectory", "output/results")
    
    def getPerformanceLogInterval(self) -> float:
        """Get performance summary log interval in seconds."""
        return float(self.get("app.performanceLogInterval", 5.0))
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S1: Frame Ingest
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def getCameraIndex(self) -> int:
        """Get camera index for the live session."""
        return int(self.get("s1_frame_ingest.cameraIndex", 0))
    
    def getFrameWidth(self) -> int:
        """Get requested camera frame width."""
        return int(self.get("s1_frame_ingest.frameWidth", 1280))
    
    def getFrameHeight(self) -> int:
        """Get requested camera frame height."""
        return int(self.get("s1_frame_ingest.frameHeight", 720))
    
    def getDefaultRotation(self) -> int:
        """Get rotation metadata attached to camera frames."""
        return int(self.get("s1_frame_ingest.rotationDegrees", 0))
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S2: Sharpness Gate
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def getSharpnessThreshold(self) -> float:
        """Get Laplacian variance threshold (accept iff variance > threshold)."""
        return float(self.get("s2_sharpness.threshold", 100.0))
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S3: Symbol Locator
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def getDetectorBackend(self) -> str:
        """Get detector backend name ("zxing", "pyzbar" or "opencv")."""
        return self.get("s3_symbol_locator.backend", "zxing")
    
    def getZxingTryRotate(self) -> bool:
        """Get zxing-cpp try_rotate flag."""
        return bool(self.get("s3_symbol_locator.zxingTryRotate", True))
    
    def getZxingTryDownscale(self) -> bool:
        """Get zxing-cpp try_downscale flag."""
        return bool(self.get("s3_symbol_locator.zxingTryDownscale", True))
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S4: Geometry Normalizer
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def getCropPadding(self) -> int:
        """Get loose crop padding in pixels."""
        return int(self.get("s4_geometry.padding", 5))
    
    def getBlurKernelSize(self) -> int:
        """Get Gaussian blur kernel size used for bar isolation."""
        return int(self.get("s4_geometry.blurKernelSize", 5))
    
    def getBinaryThreshold(self) -> int:
        """Get inverse binary threshold used for bar isolation."""
        return int(self.get("s4_geometry.binaryThreshold", 100))
    
    def getBarCountThreshold(self) -> int:
        """Get threshold used when counting bars."""
        return int(self.get("s4_geometry.barCountThreshold", 128))
    
    def getBarKernelHeight(self) -> int:
        """Get height of the vertical closing kernel used when counting bars."""
        return int(self.get("s4_geometry.barKernelHeight", 20))
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # S5: Quality Grading
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def getGradingConfig(self) -> Dict[str, Any]:
        """
        Get the grading thresholds section.
        
        Layout accepted by GradingThresholds.fromDict:
        {"edgeThreshold": 50, "noiseThreshold": 15, "tiers": {"A": {...}}}
        """
        return self.getServiceConfig("s5_grading")
    
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    # Capture Latch
    # ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
    
    def getLatchOnFailingGrade(self) -> bool:
        """Whether an F grade latches the session."""
        return bool(self.get("capture_latch.latchOnFailingGrade", True))
