from __future__ import annotations

from typing import Iterable, Tuple

import cv2
import numpy as np

from .types import CircleCommand, DrawCommand, LineCommand, PolylineCommand


def draw_text(frame, text: str, org: Tuple[int, int], color=(255, 255, 255), scale=0.6, thickness=2):
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, (0, 0, 0), thickness + 2, cv2.LINE_AA)
    cv2.putText(frame, text, org, cv2.FONT_HERSHEY_SIMPLEX, scale, color, thickness, cv2.LINE_AA)
    return frame


def count_label(finger_count: int) -> str:
    return f"{finger_count} finger(s) detected"


def draw_count_label(frame, finger_count: int, org: Tuple[int, int] = (12, 28)):
    return draw_text(frame, count_label(finger_count), org, scale=0.8)


def render(frame, commands: Iterable[DrawCommand], copy: bool = False):
    """Apply draw commands to `frame` (in place unless `copy`) and return it."""
    out = frame.copy() if copy else frame
    for cmd in commands:
        if isinstance(cmd, LineCommand):
            cv2.line(out, cmd.start.as_int(), cmd.end.as_int(), cmd.color, cmd.thickness)
        elif isinstance(cmd, CircleCommand):
            cv2.circle(out, cmd.center.as_int(), cmd.radius, cmd.color, cmd.thickness)
        elif isinstance(cmd, PolylineCommand):
            pts = np.array([p.as_int() for p in cmd.points], dtype=np.int32)
            if pts.shape[0] == 0:
                continue
            cv2.polylines(out, [pts.reshape(-1, 1, 2)], cmd.closed, cmd.color, cmd.thickness)
        else:
            raise TypeError(f"Unknown draw command: {type(cmd).__name__}")
    return out
