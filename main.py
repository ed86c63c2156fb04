"""
Barcode Grader Application

Command line entry point for the barcode print-quality grader.
Uses PipelineOrchestrator to initialize all services following SOLID principles.

Modes:
- --image PATH: grade a single still image
- --camera [INDEX]: live session, 'r' rescans after a capture, 'q' quits

Architecture:
- PipelineOrchestrator: Reads config and creates all services with parameters
- GradingPipelineService: Runs one frame through the five stages
- CaptureLatch: One per scanning session, owned here
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

import cv2

from core.camera.opencv_frame_source import OpenCVFrameSource
from core.exceptions import BarcodeGraderError
from core.ingest.yuv_frame_converter import YuvFrameConverter
from services.interfaces.grading_pipeline_interface import PipelineOutcome
from services.pipeline_orchestrator import PipelineOrchestrator


WINDOW_PREVIEW = "Barcode Grader"
WINDOW_RESULT = "Captured"


def setupLogging(debugMode: bool = False) -> None:
    """
    Setup application logging.
    
    Args:
        debugMode: If True, set log level to DEBUG.
    """
    level = logging.DEBUG if debugMode else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )


def parseArgs(argv: Optional[list] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Grade the print quality of a barcode",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  barcode-grader --image samples/ean13.png
  barcode-grader --image photo.jpg --rotation 90 --output overlay.png
  barcode-grader --camera 0 --backend pyzbar
        """
    )
    
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--image", "-i",
        type=str,
        help="Still image to grade"
    )
    source.add_argument(
        "--camera",
        type=int,
        nargs="?",
        const=-1,
        help="Run a live session on a camera (default index from config)"
    )
    
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="config/application_config.json",
        help="Path to configuration file"
    )
    parser.add_argument(
        "--rotation", "-r",
        type=int,
        default=None,
        choices=[0, 90, 180, 270],
        help="Clockwise rotation needed to make frames upright"
    )
    parser.add_argument(
        "--backend", "-b",
        type=str,
        default=None,
        help="Detector backend (zxing, pyzbar, opencv)"
    )
    parser.add_argument(
        "--output", "-o",
        type=str,
        default=None,
        help="Write the overlay image of the graded symbol to this path"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode (saves stage output to output/debug/)"
    )
    
    return parser.parse_args(argv)


def saveOverlay(outcome: PipelineOutcome, outputPath: str) -> None:
    """Write the overlay image (RGB) of an accepted outcome."""
    logger = logging.getLogger(__name__)
    
    path = Path(outputPath)
    path.parent.mkdir(parents=True, exist_ok=True)
    bgr = cv2.cvtColor(outcome.result.overlayImage, cv2.COLOR_RGB2BGR)
    if cv2.imwrite(str(path), bgr):
        logger.info(f"Overlay saved: {path}")
    else:
        logger.error(f"Failed to write overlay: {path}")


def gradeImage(
    orchestrator: PipelineOrchestrator,
    imagePath: str,
    rotationDegrees: int,
    outputPath: Optional[str]
) -> int:
    """
    Grade a still image.
    
    Returns:
        Process exit code: 0 if graded, 1 if the image cannot be read or
        converted, 2 if the frame was rejected.
    """
    logger = logging.getLogger(__name__)
    
    bgr = cv2.imread(imagePath)
    if bgr is None:
        logger.error(f"Cannot read image: {imagePath}")
        return 1
    
    height, width = bgr.shape[:2]
    bgr = bgr[:height - height % 2, :width - width % 2]
    try:
        rawFrame = YuvFrameConverter.fromBgr(bgr, rotationDegrees)
    except BarcodeGraderError as e:
        logger.error(f"Cannot grade image {imagePath}: {e}")
        return 1
    
    latch = orchestrator.createSession()
    outcome = orchestrator.processFrame(rawFrame, latch, frameId=Path(imagePath).stem)
    
    if not outcome.accepted:
        print(json.dumps({"status": outcome.status.value, "message": outcome.message}))
        return 2
    
    print(json.dumps({"status": outcome.status.value, **outcome.result.toDict()}, indent=2))
    if outputPath:
        saveOverlay(outcome, outputPath)
    return 0


def runCamera(
    orchestrator: PipelineOrchestrator,
    cameraIndex: int,
    rotationDegrees: int,
    outputPath: Optional[str]
) -> int:
    """
    Run a live scanning session until 'q' is pressed.
    
    Returns:
        Process exit code.
    """
    logger = logging.getLogger(__name__)
    config = orchestrator.configService
    
    try:
        frameSource = OpenCVFrameSource(
            source=cameraIndex,
            width=config.getFrameWidth(),
            height=config.getFrameHeight(),
            rotationDegrees=rotationDegrees
        )
    except BarcodeGraderError as e:
        logger.error(f"Cannot start camera session: {e}")
        return 1
    
    if not frameSource.open():
        return 1
    
    latch = orchestrator.createSession()
    resultShown = [False]
    
    def onResult(outcome: PipelineOutcome) -> None:
        result = outcome.result
        overlay = cv2.cvtColor(result.overlayImage, cv2.COLOR_RGB2BGR)
        cv2.imshow(WINDOW_RESULT, overlay)
        resultShown[0] = True
        logger.info(
            f"Captured {result.format.value} {result.decodedValue!r}: grade {result.grade}. "
            f"Press 'r' to scan again."
        )
        if outputPath:
            saveOverlay(outcome, outputPath)
    
    logger.info("Live session started: 'r' = scan again, 'q' = quit")
    try:
        while True:
            ok, rawFrame = frameSource.read()
            if not ok:
                logger.warning("Frame source returned no frame, stopping")
                break
            
            outcome = orchestrator.processFrame(rawFrame, latch, onResult=onResult)
            
            preview = cv2.cvtColor(YuvFrameConverter.toRotatedRgb(rawFrame), cv2.COLOR_RGB2BGR)
            label = f"{latch.state.value} | {outcome.status.value}"
            cv2.putText(preview, label, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.8, (0, 255, 0), 2)
            cv2.imshow(WINDOW_PREVIEW, preview)
            
            key = cv2.waitKey(1) & 0xFF
            if key == ord('q'):
                break
            if key == ord('r'):
                latch.reset()
                if resultShown[0]:
                    cv2.destroyWindow(WINDOW_RESULT)
                    resultShown[0] = False
    finally:
        frameSource.release()
        cv2.destroyAllWindows()
    
    return 0


def main(argv: Optional[list] = None) -> int:
    """Main entry point."""
    args = parseArgs(argv)
    
    setupLogging(debugMode=args.debug or os.environ.get("DEBUG", "").lower() == "true")
    logger = logging.getLogger(__name__)
    
    try:
        orchestrator = PipelineOrchestrator(args.config, backend=args.backend)
    except (RuntimeError, ValueError, ImportError) as e:
        logger.error(f"Pipeline failed to start: {e}")
        return 1
    
    if args.debug:
        orchestrator.setDebugEnabled(True)
    
    config = orchestrator.configService
    rotation = args.rotation if args.rotation is not None else config.getDefaultRotation()
    
    try:
        if args.image:
            return gradeImage(orchestrator, args.image, rotation, args.output)
        
        cameraIndex = args.camera if args.camera >= 0 else config.getCameraIndex()
        return runCamera(orchestrator, cameraIndex, rotation, args.output)
    finally:
        orchestrator.shutdown()


if __name__ == "__main__":
    sys.exit(main())
