from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .analysis import analyze_mask
from .config import DEFAULT_CONFIG, DEFAULT_STYLE, AnnotationStyle, FingerCountConfig
from .drawing import draw_count_label, render
from .segmentation import HsvRange, threshold_mask
from .types import FrameResult


class FingerCountDetector:
    """
    Finger counter for a single hand segmented by colour.

    Input frames are expected as **BGR** images (OpenCV default). Each call is
    independent: nothing from a previous frame affects the next one.
    """

    def __init__(
        self,
        hsv_range: Optional[HsvRange] = None,
        config: FingerCountConfig = DEFAULT_CONFIG,
        style: AnnotationStyle = DEFAULT_STYLE,
        blur_ksize: int = 7,
    ) -> None:
        self.hsv_range = hsv_range or HsvRange()
        self.config = config
        self.style = style
        self.blur_ksize = blur_ksize

    def mask(self, frame_bgr, hsv_range: Optional[HsvRange] = None) -> np.ndarray:
        return threshold_mask(frame_bgr, hsv_range or self.hsv_range, blur_ksize=self.blur_ksize)

    def analyze(self, frame_bgr, mask) -> FrameResult:
        """Count fingers in an externally produced `mask` aligned with `frame_bgr`."""
        return analyze_mask(mask, config=self.config, style=self.style, frame_shape=frame_bgr.shape)

    def detect(self, frame_bgr, hsv_range: Optional[HsvRange] = None) -> Tuple[np.ndarray, FrameResult]:
        mask = self.mask(frame_bgr, hsv_range)
        return mask, self.analyze(frame_bgr, mask)

    def draw(self, frame_bgr, result: FrameResult, label: bool = True, copy: bool = False):
        out = render(frame_bgr, result.commands, copy=copy)
        if label:
            draw_count_label(out, result.finger_count)
        return out
