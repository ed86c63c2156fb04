"""Quality measurement module."""

from core.quality.sharpness_evaluator import SharpnessEvaluator
from core.quality.barcode_grader import BarcodeGrader

__all__ = [
    'SharpnessEvaluator',
    'BarcodeGrader'
]
