"""
Tests for the command line entry point.
"""

import json

import cv2
import numpy as np
import pytest

from conftest import BAR_CORNERS, barPatternLuma
from main import gradeImage, main, parseArgs
from services.pipeline_orchestrator import PipelineOrchestrator


@pytest.fixture
def orchestrator(configPath, scriptedDetector, found):
    orchestrator = PipelineOrchestrator(str(configPath), detector=scriptedDetector(found()))
    yield orchestrator
    orchestrator.shutdown()


@pytest.fixture
def barcodeImage(tmp_path):
    """PNG of sharp black/white bars at BAR_CORNERS."""
    path = tmp_path / "label.png"
    cv2.imwrite(str(path), cv2.cvtColor(barPatternLuma(BAR_CORNERS), cv2.COLOR_GRAY2BGR))
    return path


class TestParseArgs:
    """Argument parsing."""
    
    def test_image_mode(self):
        args = parseArgs(["--image", "label.png", "--rotation", "90", "-b", "pyzbar"])
        
        assert args.image == "label.png"
        assert args.camera is None
        assert args.rotation == 90
        assert args.backend == "pyzbar"
    
    def test_camera_default_index(self):
        args = parseArgs(["--camera"])
        
        assert args.camera == -1
        assert args.rotation is None
    
    def test_source_required(self):
        with pytest.raises(SystemExit):
            parseArgs([])
    
    def test_sources_are_exclusive(self):
        with pytest.raises(SystemExit):
            parseArgs(["--image", "a.png", "--camera", "0"])
    
    def test_invalid_rotation(self):
        with pytest.raises(SystemExit):
            parseArgs(["--image", "a.png", "--rotation", "45"])


class TestGradeImage:
    """Still image grading."""
    
    def test_graded(self, orchestrator, barcodeImage, tmp_path, capsys):
        outputPath = tmp_path / "out" / "overlay.png"
        
        exitCode = gradeImage(orchestrator, str(barcodeImage), 0, str(outputPath))
        
        assert exitCode == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["status"] == "accepted"
        assert summary["decodedValue"] == "012345678905"
        assert summary["grade"] in ("A", "B", "C", "D")
        assert outputPath.exists()
    
    def test_unreadable_image(self, orchestrator, tmp_path):
        assert gradeImage(orchestrator, str(tmp_path / "missing.png"), 0, None) == 1
    
    @pytest.mark.parametrize("shape", [(1, 8, 3), (8, 1, 3)])
    def test_one_pixel_image(self, orchestrator, tmp_path, shape):
        path = tmp_path / "thin.png"
        cv2.imwrite(str(path), np.full(shape, 255, dtype=np.uint8))
        
        assert gradeImage(orchestrator, str(path), 0, None) == 1
    
    def test_rejected_frame(self, configPath, scriptedDetector, barcodeImage, capsys):
        orchestrator = PipelineOrchestrator(str(configPath), detector=scriptedDetector())
        try:
            exitCode = gradeImage(orchestrator, str(barcodeImage), 0, None)
        finally:
            orchestrator.shutdown()
        
        assert exitCode == 2
        assert json.loads(capsys.readouterr().out)["status"] == "symbol_not_found"


class TestMain:
    """Start-up failures."""
    
    def test_missing_config(self, tmp_path):
        assert main(["--image", "label.png", "--config", str(tmp_path / "absent.json")]) == 1
    
    def test_invalid_backend(self, configPath):
        assert main(["--image", "label.png", "--config", str(configPath), "--backend", "nope"]) == 1
    
    def test_backend_not_installed(self, configPath, monkeypatch):
        monkeypatch.setattr("services.pipeline_orchestrator.isBarcodeBackendAvailable", lambda backend: False)
        
        assert main(["--image", "label.png", "--config", str(configPath), "--backend", "pyzbar"]) == 1
