"""
Tests for JSON configuration loading.
"""

import json

import pytest

from core.interfaces.grader_interface import Grade, GradingThresholds
from services.impl.config_service import ConfigService


class TestShippedConfig:
    """config/application_config.json."""
    
    def test_stage_values(self, configPath):
        config = ConfigService(str(configPath))
        
        assert config.getSharpnessThreshold() == 100.0
        assert config.getDetectorBackend() == "zxing"
        assert config.getCropPadding() == 5
        assert config.getBlurKernelSize() == 5
        assert config.getBinaryThreshold() == 100
        assert config.getLatchOnFailingGrade() is True
        assert not config.isDebugEnabled()
    
    def test_grading_section_matches_defaults(self, configPath):
        config = ConfigService(str(configPath))
        
        assert GradingThresholds.fromDict(config.getGradingConfig()) == GradingThresholds()
    
    def test_dot_notation(self, configPath):
        config = ConfigService(str(configPath))
        
        assert config.get("s5_grading.tiers.B.noiseDivisor") == 50
        assert config.get("s5_grading.tiers.Z.noiseDivisor", "missing") == "missing"
        assert config.get("s2_sharpness.threshold.deeper", 1) == 1


class TestConfigLoading:
    """Missing keys, files and bad JSON."""
    
    def test_missing_keys_fall_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"s2_sharpness": {"threshold": 250}}), encoding="utf-8")
        
        config = ConfigService(str(path))
        
        assert config.getSharpnessThreshold() == 250.0
        assert config.getCropPadding() == 5
        assert config.getDebugBasePath() == "output/debug"
        assert config.getServiceConfig("s4_geometry") == {}
        assert GradingThresholds.fromDict(config.getGradingConfig()).tiers[0].grade == Grade.A
    
    def test_latch_policy(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"capture_latch": {"latchOnFailingGrade": False}}), encoding="utf-8")
        
        assert ConfigService(str(path)).getLatchOnFailingGrade() is False
    
    def test_missing_file(self, tmp_path):
        with pytest.raises(RuntimeError):
            ConfigService(str(tmp_path / "absent.json"))
    
    def test_invalid_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        
        with pytest.raises(RuntimeError):
            ConfigService(str(path))
    
    def test_debug_toggle(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"debug": {"enabled": True}}), encoding="utf-8")
        config = ConfigService(str(path))
        
        assert config.isDebugEnabled()
        config.setDebugEnabled(False)
        assert not config.isDebugEnabled()
