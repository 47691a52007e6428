from __future__ import annotations

from typing import Optional

import cv2
import numpy as np

from .types import BoundingBox, Contour, ContourSet


def as_binary_mask(mask) -> np.ndarray:
    """
    Return a fresh uint8 {0, 255} copy of a 2-D mask (bool or any numeric dtype).

    Any non-zero value counts as set. The caller's array is never touched.
    """

    arr = np.asarray(mask)
    if arr.ndim != 2:
        raise ValueError(f"mask must be a 2-D array, got shape {arr.shape}")
    return np.where(arr != 0, 255, 0).astype(np.uint8)


def extract_contours(mask) -> ContourSet:
    """
    Find the outermost boundaries of all connected regions in `mask`.

    Points are run-length compressed (CHAIN_APPROX_SIMPLE): straight horizontal,
    vertical and diagonal runs keep only their end points. Holes are not returned,
    only recorded as `has_children` on the contour that encloses them.
    """

    binary = as_binary_mask(mask)
    found = cv2.findContours(binary, cv2.RETR_TREE, cv2.CHAIN_APPROX_SIMPLE)
    # OpenCV 3 returns (image, contours, hierarchy); OpenCV 4 returns (contours, hierarchy).
    raw_contours, hierarchy = found[-2], found[-1]
    if hierarchy is None or len(raw_contours) == 0:
        return ContourSet(contours=(), has_children=())

    # hierarchy rows: [next, previous, first_child, parent]
    rows = hierarchy.reshape(-1, 4)
    contours = []
    has_children = []
    for raw, (_, _, first_child, parent) in zip(raw_contours, rows):
        if parent != -1:
            continue
        contours.append(Contour.from_cv(raw))
        has_children.append(bool(first_child != -1))

    return ContourSet(contours=tuple(contours), has_children=tuple(has_children))


def contour_area(contour: Contour) -> float:
    """Enclosed polygon area (shoelace), not pixel count."""
    if len(contour) < 3:
        return 0.0
    return float(cv2.contourArea(contour.as_cv()))


def bounding_box(contour: Contour) -> BoundingBox:
    if len(contour) == 0:
        return BoundingBox(0, 0, 0, 0)
    x, y, w, h = cv2.boundingRect(contour.as_cv())
    return BoundingBox(int(x), int(y), int(w), int(h))


def biggest_contour_index(contour_set: ContourSet) -> Optional[int]:
    """
    Index of the contour with the largest enclosed area, or None for an empty set.

    Ties go to the first contour in extraction order.
    """

    best_idx: Optional[int] = None
    best_area = -1.0
    for i, contour in enumerate(contour_set):
        area = contour_area(contour)
        if area > best_area:
            best_area = area
            best_idx = i
    return best_idx
