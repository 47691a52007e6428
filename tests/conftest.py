from __future__ import annotations

import cv2
import numpy as np
import pytest

SIZE = 400


def hand_polygon(notches: int) -> np.ndarray:
    """
    A palm with `notches` + 1 pointed fingers along the top.

    Finger tips sit on a downward-opening parabola so each tip is a strict hull
    vertex; valleys are deep (y=300) and narrow, well inside every finger threshold.
    """

    xs = np.linspace(60, 340, notches + 1)
    pts = [(60.0, 390.0)]
    for i, x in enumerate(xs):
        pts.append((x, 60.0 + 0.004 * (x - 200.0) ** 2))
        if i < notches:
            pts.append(((x + xs[i + 1]) / 2.0, 300.0))
    pts.append((340.0, 390.0))
    return np.round(np.array(pts)).astype(np.int32).reshape(-1, 1, 2)


def hand_mask(notches: int, size: int = SIZE) -> np.ndarray:
    mask = np.zeros((size, size), dtype=np.uint8)
    cv2.fillPoly(mask, [hand_polygon(notches)], 255)
    return mask


def disc_mask(radius: int = 100, size: int = SIZE) -> np.ndarray:
    mask = np.zeros((size, size), dtype=np.uint8)
    cv2.circle(mask, (size // 2, size // 2), radius, 255, -1)
    return mask


@pytest.fixture
def empty_mask() -> np.ndarray:
    return np.zeros((SIZE, SIZE), dtype=np.uint8)


@pytest.fixture
def disc() -> np.ndarray:
    return disc_mask()
