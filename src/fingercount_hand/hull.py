from __future__ import annotations

from typing import Tuple

import cv2
import numpy as np

from .types import Contour, Defect, Hull


# OpenCV reports defect depth as fixed point with 8 fractional bits.
DEPTH_FIXED_POINT_SCALE = 256.0


def convex_hull(contour: Contour) -> Hull:
    """
    Convex hull of `contour` as indices into its points.

    Indices are returned ascending, i.e. in the contour's own traversal order, so the
    hull can be walked alongside the contour. Fewer than 3 points: all of them.
    """

    n = len(contour)
    if n < 3:
        return Hull(contour=contour, indices=tuple(range(n)))

    idx = cv2.convexHull(contour.as_cv(), returnPoints=False)
    if idx is None:
        return Hull(contour=contour, indices=tuple(range(n)))
    indices = sorted({int(i) for i in np.asarray(idx).ravel()})
    return Hull(contour=contour, indices=tuple(indices))


def convexity_defects(contour: Contour, hull: Hull) -> Tuple[Defect, ...]:
    """
    One defect per consecutive hull pair (wrapping) whose contour stretch dips inward.

    start/end are the hull-adjacent contour indices, far is the point of the stretch
    farthest from the start->end line and depth is that distance in pixels.
    """

    if hull.contour is not contour:
        raise ValueError("hull was computed for a different contour")
    if len(contour) < 4 or len(hull) < 3:
        return ()

    hull_idx = np.array(hull.indices, dtype=np.int32).reshape(-1, 1)
    raw = cv2.convexityDefects(contour.as_cv(), hull_idx)
    if raw is None:
        return ()

    defects = []
    for start, end, far, fixed_depth in raw.reshape(-1, 4):
        defects.append(
            Defect(
                start_index=int(start),
                end_index=int(end),
                far_index=int(far),
                depth=max(0.0, float(fixed_depth) / DEPTH_FIXED_POINT_SCALE),
                raw_depth=int(fixed_depth),
            )
        )
    return tuple(defects)
