from __future__ import annotations

from dataclasses import dataclass

import cv2
import numpy as np


@dataclass(frozen=True)
class HsvRange:
    """Inclusive HSV range (OpenCV units: H 0-180, S and V 0-255)."""

    hue_min: int = 0
    hue_max: int = 180
    sat_min: int = 0
    sat_max: int = 255
    val_min: int = 0
    val_max: int = 255

    def __post_init__(self) -> None:
        for name, lo, hi, limit in (
            ("hue", self.hue_min, self.hue_max, 180),
            ("saturation", self.sat_min, self.sat_max, 255),
            ("value", self.val_min, self.val_max, 255),
        ):
            if not (0 <= lo <= limit and 0 <= hi <= limit):
                raise ValueError(f"{name} range must be within 0-{limit}, got {lo}-{hi}")

    @property
    def lower(self) -> np.ndarray:
        return np.array([self.hue_min, self.sat_min, self.val_min], dtype=np.uint8)

    @property
    def upper(self) -> np.ndarray:
        return np.array([self.hue_max, self.sat_max, self.val_max], dtype=np.uint8)

    def describe(self) -> str:
        return (
            f"Hue range: {self.hue_min}-{self.hue_max}\t"
            f"Saturation range: {self.sat_min}-{self.sat_max}\t"
            f"Value range: {self.val_min}-{self.val_max}"
        )


def threshold_mask(frame_bgr, hsv_range: HsvRange, blur_ksize: int = 7) -> np.ndarray:
    """Blur, convert to HSV and keep pixels inside `hsv_range`. Returns a uint8 {0, 255} mask."""

    if frame_bgr is None or getattr(frame_bgr, "ndim", 0) != 3 or frame_bgr.shape[2] != 3:
        raise ValueError(f"expected a BGR frame of shape (H, W, 3), got {getattr(frame_bgr, 'shape', None)}")
    if blur_ksize < 1 or blur_ksize % 2 == 0:
        raise ValueError(f"blur_ksize must be a positive odd number, got {blur_ksize}")

    blurred = cv2.blur(frame_bgr, (blur_ksize, blur_ksize)) if blur_ksize > 1 else frame_bgr
    hsv = cv2.cvtColor(blurred, cv2.COLOR_BGR2HSV)
    return cv2.inRange(hsv, hsv_range.lower, hsv_range.upper)
