"""
Config Service Interface Module.

Defines the interface for centralized configuration management of the
grading pipeline.

Follows:
- SRP: Only handles configuration management
- DIP: The orchestrator depends on this abstraction
"""

from abc import ABC, abstractmethod
from typing import Any, Dict


class IConfigService(ABC):
    """
    Interface for configuration management.
    
    Supports dot notation for nested config access.
    """
    
    @abstractmethod
    def loadConfig(self, configPath: str) -> bool:
        """
        Load configuration from a JSON file.
        
        Args:
            configPath: Path to the configuration file.
            
        Returns:
            bool: True if loaded successfully, False otherwise.
        """
        pass
    
    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by key.
        
        Supports dot notation for nested access:
        - "app.name" -> config["app"]["name"]
        - "s5_grading.tiers.A.minContrast" -> nested value
        
        Args:
            key: Configuration key (supports dot notation).
            default: Default value if key not found.
            
        Returns:
            Configuration value or default.
        """
        pass
    
    @abstractmethod
    def getServiceConfig(self, serviceName: str) -> Dict[str, Any]:
        """
        Get the configuration section of one stage.
        
        Args:
            serviceName: Section name (e.g., "s2_sharpness").
            
        Returns:
            Dictionary with the section, empty if missing.
        """
        pass
    
    @abstractmethod
    def getDebugBasePath(self) -> str:
        """Get the base path for debug output."""
        pass
    
    @abstractmethod
    def isDebugEnabled(self) -> bool:
        """Check if debug mode is enabled globally."""
        pass
    
    @abstractmethod
    def setDebugEnabled(self, enabled: bool) -> None:
        """
        Enable or disable debug mode globally.
        
        Args:
            enabled: True to enable debug mode.
        """
        pass
