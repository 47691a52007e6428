from .analysis import analyze_contours, analyze_mask, classify_defect
from .config import AnnotationStyle, FingerCountConfig
from .detector import FingerCountDetector
from .segmentation import HsvRange
from .types import Defect, FrameResult, Point

__all__ = [
    "FingerCountDetector",
    "FingerCountConfig",
    "AnnotationStyle",
    "HsvRange",
    "FrameResult",
    "Defect",
    "Point",
    "analyze_mask",
    "analyze_contours",
    "classify_defect",
]
