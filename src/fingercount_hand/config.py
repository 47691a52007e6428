from __future__ import annotations

from dataclasses import dataclass

from .types import Color


@dataclass(frozen=True)
class FingerCountConfig:
    """
    Thresholds for the finger-valley test.

    A defect counts as a valley between two fingers iff:
      depth > depth_threshold,
      both sides (start->far, end->far) > bbox.height / side_divisor,
      angle at far < max_angle_deg,
      start.y and end.y <= bbox.y + bbox.height - bbox.height / wrist_divisor.
    """

    depth_threshold: float = 10.0
    side_divisor: float = 5.0
    max_angle_deg: float = 95.0
    wrist_divisor: float = 4.0
    baseline_count: int = 1
    max_fingers: int = 5
    no_hand_count: int = 0

    def __post_init__(self) -> None:
        if self.side_divisor <= 0 or self.wrist_divisor <= 0:
            raise ValueError("side_divisor and wrist_divisor must be positive")
        if self.depth_threshold < 0:
            raise ValueError(f"depth_threshold must be >= 0, got {self.depth_threshold}")
        if not (0.0 < self.max_angle_deg <= 180.0):
            raise ValueError(f"max_angle_deg must be in (0, 180], got {self.max_angle_deg}")
        if self.baseline_count > self.max_fingers:
            raise ValueError("baseline_count cannot exceed max_fingers")
        if self.no_hand_count < 0 or self.baseline_count < 0:
            raise ValueError("counts must be non-negative")


@dataclass(frozen=True)
class AnnotationStyle:
    """Colours (BGR) and line widths for the draw commands of one frame."""

    selected_color: Color = (0, 0, 255)
    selected_thickness: int = 2
    finger_color: Color = (255, 255, 255)
    rejected_color: Color = (255, 0, 0)
    defect_thickness: int = 2
    far_radius: int = 4
    hull_color: Color = (0, 255, 255)
    hull_thickness: int = 2
    other_color: Color = (0, 255, 0)
    other_thickness: int = 1


DEFAULT_CONFIG = FingerCountConfig()
DEFAULT_STYLE = AnnotationStyle()
