from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple, Union

import numpy as np


Color = Tuple[int, int, int]  # BGR


@dataclass(frozen=True)
class Point:
    """A 2-D point in image coordinates (x to the right, y down)."""

    x: float
    y: float

    def as_int(self) -> Tuple[int, int]:
        return (int(round(self.x)), int(round(self.y)))


@dataclass(frozen=True, eq=False)
class Contour:
    """Closed boundary polyline; point order defines traversal direction."""

    points: np.ndarray  # (N, 2) int32, read-only

    def __post_init__(self) -> None:
        pts = np.array(self.points, dtype=np.int32).reshape(-1, 2)
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)

    @classmethod
    def from_cv(cls, arr) -> "Contour":
        return cls(points=arr)

    def __len__(self) -> int:
        return int(self.points.shape[0])

    def point(self, idx: int) -> Point:
        x, y = self.points[idx]
        return Point(float(x), float(y))

    def as_cv(self) -> np.ndarray:
        return np.array(self.points).reshape(-1, 1, 2)


@dataclass(frozen=True)
class ContourSet:
    """External contours of one mask, in extraction order."""

    contours: Tuple[Contour, ...]
    has_children: Tuple[bool, ...]

    def __len__(self) -> int:
        return len(self.contours)

    def __getitem__(self, idx: int) -> Contour:
        return self.contours[idx]

    def __iter__(self):
        return iter(self.contours)


@dataclass(frozen=True, eq=False)
class Hull:
    """Convex hull as ascending contour indices (contour traversal order)."""

    contour: Contour
    indices: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.indices)

    def points(self) -> Tuple[Point, ...]:
        return tuple(self.contour.point(i) for i in self.indices)


@dataclass(frozen=True)
class Defect:
    """
    A concavity between two hull-adjacent contour points.

    `depth` is the distance (pixels) from the hull edge start->end to the far point.
    `raw_depth` keeps the fixed-point value (depth * 256) reported by OpenCV.
    """

    start_index: int
    end_index: int
    far_index: int
    depth: float
    raw_depth: int = 0


@dataclass(frozen=True)
class BoundingBox:
    x: int
    y: int
    width: int
    height: int


@dataclass(frozen=True)
class DefectCandidate:
    """Geometry of one defect that passed the depth gate, plus the finger verdict."""

    defect: Defect
    start: Point
    end: Point
    far: Point
    start_far: float
    end_far: float
    angle_deg: float
    is_finger: bool


@dataclass(frozen=True)
class LineCommand:
    start: Point
    end: Point
    color: Color
    thickness: int


@dataclass(frozen=True)
class CircleCommand:
    center: Point
    radius: int
    color: Color
    thickness: int


@dataclass(frozen=True)
class PolylineCommand:
    points: Tuple[Point, ...]
    color: Color
    thickness: int
    closed: bool = True


DrawCommand = Union[LineCommand, CircleCommand, PolylineCommand]


@dataclass(frozen=True)
class FrameResult:
    """Per-frame output: finger count plus the draw commands that annotate it."""

    finger_count: int
    commands: Tuple[DrawCommand, ...] = ()
    candidates: Tuple[DefectCandidate, ...] = ()
    selected_index: Optional[int] = None
    bounding_box: Optional[BoundingBox] = None

    @property
    def hand_found(self) -> bool:
        return self.selected_index is not None

    @property
    def fingers(self) -> Tuple[DefectCandidate, ...]:
        return tuple(c for c in self.candidates if c.is_finger)
