from __future__ import annotations

import logging
from typing import List, Optional

from .config import DEFAULT_CONFIG, DEFAULT_STYLE, AnnotationStyle, FingerCountConfig
from .contours import biggest_contour_index, bounding_box, extract_contours
from .hull import convex_hull, convexity_defects
from .types import (
    BoundingBox,
    CircleCommand,
    Contour,
    ContourSet,
    Defect,
    DefectCandidate,
    DrawCommand,
    FrameResult,
    LineCommand,
    PolylineCommand,
)
from .utils import angle_at, distance

log = logging.getLogger(__name__)


def passes_depth(defect: Defect, config: FingerCountConfig = DEFAULT_CONFIG) -> bool:
    return defect.depth > config.depth_threshold


def classify_defect(
    defect: Defect,
    contour: Contour,
    bbox: BoundingBox,
    config: FingerCountConfig = DEFAULT_CONFIG,
) -> DefectCandidate:
    """Apply the geometric finger-valley test (sides, angle, wrist cutoff) to one defect."""

    start = contour.point(defect.start_index)
    end = contour.point(defect.end_index)
    far = contour.point(defect.far_index)

    start_far = distance(start, far)
    end_far = distance(end, far)
    angle = angle_at(start, end, far)

    min_side = bbox.height / config.side_divisor
    wrist_y = bbox.y + bbox.height - bbox.height / config.wrist_divisor

    is_finger = (
        passes_depth(defect, config)
        and start_far > min_side
        and end_far > min_side
        and angle < config.max_angle_deg
        and start.y <= wrist_y
        and end.y <= wrist_y
    )

    return DefectCandidate(
        defect=defect,
        start=start,
        end=end,
        far=far,
        start_far=start_far,
        end_far=end_far,
        angle_deg=angle,
        is_finger=is_finger,
    )


def _candidate_commands(candidate: DefectCandidate, style: AnnotationStyle) -> List[DrawCommand]:
    color = style.finger_color if candidate.is_finger else style.rejected_color
    w = style.defect_thickness
    return [
        LineCommand(candidate.start, candidate.end, color, w),
        LineCommand(candidate.start, candidate.far, color, w),
        LineCommand(candidate.end, candidate.far, color, w),
        CircleCommand(candidate.far, style.far_radius, color, w),
    ]


def _outline(contour: Contour, color, thickness: int) -> PolylineCommand:
    pts = tuple(contour.point(i) for i in range(len(contour)))
    return PolylineCommand(pts, color, thickness, closed=True)


def analyze_contours(
    contour_set: ContourSet,
    config: FingerCountConfig = DEFAULT_CONFIG,
    style: AnnotationStyle = DEFAULT_STYLE,
) -> FrameResult:
    """
    Count fingers on the biggest contour of `contour_set`.

    Only the biggest contour is analyzed; every other contour is just outlined.
    The count starts at `config.baseline_count`, grows by one per finger valley and
    stops at `config.max_fingers`. An empty set yields `config.no_hand_count` and
    no draw commands.
    """

    selected = biggest_contour_index(contour_set)
    if selected is None:
        log.debug("no contours in mask")
        return FrameResult(finger_count=config.no_hand_count)

    contour = contour_set[selected]
    bbox = bounding_box(contour)
    hull = convex_hull(contour)
    defects = convexity_defects(contour, hull)

    commands: List[DrawCommand] = [_outline(contour, style.selected_color, style.selected_thickness)]
    candidates: List[DefectCandidate] = []
    count = config.baseline_count

    for defect in defects:
        # Shallow dents are measurement noise: neither counted nor drawn.
        if not passes_depth(defect, config):
            continue
        candidate = classify_defect(defect, contour, bbox, config)
        candidates.append(candidate)
        if candidate.is_finger:
            if count < config.max_fingers:
                count += 1
            log.debug(
                "finger valley: start->far=%.1f end->far=%.1f angle=%.1f depth=%.1f",
                candidate.start_far,
                candidate.end_far,
                candidate.angle_deg,
                defect.depth,
            )
        commands.extend(_candidate_commands(candidate, style))

    commands.append(PolylineCommand(hull.points(), style.hull_color, style.hull_thickness, closed=True))
    for i, other in enumerate(contour_set):
        if i != selected:
            commands.append(_outline(other, style.other_color, style.other_thickness))

    log.debug(
        "contours=%d selected=%d defects=%d candidates=%d fingers=%d",
        len(contour_set),
        selected,
        len(defects),
        len(candidates),
        count,
    )
    return FrameResult(
        finger_count=count,
        commands=tuple(commands),
        candidates=tuple(candidates),
        selected_index=selected,
        bounding_box=bbox,
    )


def analyze_mask(
    mask,
    config: FingerCountConfig = DEFAULT_CONFIG,
    style: AnnotationStyle = DEFAULT_STYLE,
    frame_shape: Optional[tuple] = None,
) -> FrameResult:
    """
    Full pipeline: mask -> contours -> biggest -> hull -> defects -> count + annotations.

    If `frame_shape` is given, the mask must have the same height and width.
    """

    if frame_shape is not None:
        check_mask_matches_frame(mask, frame_shape)
    return analyze_contours(extract_contours(mask), config=config, style=style)


def check_mask_matches_frame(mask, frame_shape: tuple) -> None:
    mask_shape = getattr(mask, "shape", None)
    if mask_shape is None or len(mask_shape) != 2:
        raise ValueError(f"mask must be a 2-D array, got shape {mask_shape}")
    if len(frame_shape) not in (2, 3):
        raise ValueError(f"frame must be a 2-D or 3-D array, got shape {tuple(frame_shape)}")
    if tuple(mask_shape[:2]) != tuple(frame_shape[:2]):
        raise ValueError(
            f"mask size {mask_shape[1]}x{mask_shape[0]} does not match frame size "
            f"{frame_shape[1]}x{frame_shape[0]}"
        )
