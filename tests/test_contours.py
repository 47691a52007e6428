import cv2
import numpy as np
import pytest

from fingercount_hand.contours import (
    as_binary_mask,
    biggest_contour_index,
    bounding_box,
    contour_area,
    extract_contours,
)
from fingercount_hand.types import Contour, ContourSet

from conftest import disc_mask, hand_mask


def test_empty_mask_gives_empty_set(empty_mask):
    cs = extract_contours(empty_mask)
    assert len(cs) == 0
    assert biggest_contour_index(cs) is None


def test_rectangle_is_compressed_to_corners():
    mask = np.zeros((100, 100), dtype=np.uint8)
    mask[20:60, 10:80] = 255
    cs = extract_contours(mask)
    assert len(cs) == 1
    pts = {tuple(p) for p in cs[0].points.tolist()}
    assert pts == {(10, 20), (79, 20), (79, 59), (10, 59)}
    assert contour_area(cs[0]) == pytest.approx(69 * 39)


def test_holes_are_not_returned_but_flagged():
    mask = np.zeros((100, 100), dtype=np.uint8)
    mask[10:90, 10:90] = 255
    mask[40:60, 40:60] = 0
    mask[70:80, 5:8] = 1  # separate blob, any non-zero value counts
    cs = extract_contours(mask)
    assert len(cs) == 2
    big = biggest_contour_index(cs)
    assert cs.has_children[big] is True
    assert cs.has_children[1 - big] is False


def test_region_inside_a_hole_is_not_external():
    mask = np.zeros((100, 100), dtype=np.uint8)
    mask[10:90, 10:90] = 255
    mask[30:70, 30:70] = 0
    mask[45:55, 45:55] = 255
    cs = extract_contours(mask)
    assert len(cs) == 1


def test_mask_is_not_mutated():
    mask = hand_mask(3)
    before = mask.copy()
    extract_contours(mask)
    assert np.array_equal(mask, before)


def test_extracted_points_are_read_only():
    mask = hand_mask(3)
    cs = extract_contours(mask)
    with pytest.raises(ValueError):
        cs[0].points[:] = 0
    with pytest.raises(ValueError):
        cs[0].points[0, 0] = 1


def test_contour_does_not_alias_caller_array():
    arr = np.array([[0, 0], [10, 0], [10, 10], [0, 10]], dtype=np.int32)
    contour = Contour.from_cv(arr)
    arr[:] = 99
    assert contour.point(1).x == 10.0
    assert contour.as_cv().shape == (4, 1, 2)


def test_bool_mask_accepted():
    mask = disc_mask() > 0
    assert len(extract_contours(mask)) == 1


def test_non_2d_mask_rejected():
    with pytest.raises(ValueError):
        extract_contours(np.zeros((10, 10, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        as_binary_mask(np.zeros(10, dtype=np.uint8))


def test_rerasterized_contour_matches_mask():
    for mask in (disc_mask(), hand_mask(4)):
        cs = extract_contours(mask)
        filled = np.zeros_like(mask)
        cv2.drawContours(filled, [c.as_cv() for c in cs], -1, 255, -1)
        drift = np.count_nonzero(filled != mask)
        assert drift <= 0.01 * np.count_nonzero(mask)


def test_biggest_is_deterministic_and_idempotent():
    mask = np.zeros((200, 200), dtype=np.uint8)
    mask[10:30, 10:30] = 255
    mask[100:180, 50:150] = 255
    mask[50:60, 150:190] = 255
    cs = extract_contours(mask)
    idx = biggest_contour_index(cs)
    assert idx == biggest_contour_index(cs)
    assert bounding_box(cs[idx]).width == 100


def test_tie_goes_to_first():
    square = np.array([[0, 0], [10, 0], [10, 10], [0, 10]])
    shifted = square + 50
    cs = ContourSet(contours=(Contour.from_cv(square), Contour.from_cv(shifted)), has_children=(False, False))
    assert biggest_contour_index(cs) == 0
    cs = ContourSet(contours=(Contour.from_cv(shifted), Contour.from_cv(square)), has_children=(False, False))
    assert biggest_contour_index(cs) == 0


def test_zero_area_contours_still_selectable():
    dot = Contour.from_cv(np.array([[5, 5]]))
    cs = ContourSet(contours=(dot,), has_children=(False,))
    assert contour_area(dot) == 0.0
    assert biggest_contour_index(cs) == 0


def test_bounding_box_matches_cv():
    cs = extract_contours(hand_mask(2))
    box = bounding_box(cs[0])
    assert box.x == 60
    assert abs(box.y - 60) <= 1
    assert abs(box.height - (390 - 60 + 1)) <= 1
