import math

import numpy as np
import pytest

from cronoscore.geometry import AABB


def box(lo, hi):
    return AABB(np.array(lo, dtype=float), np.array(hi, dtype=float))


def test_negative_infinity_is_replaced_by_enclose():
    b = AABB.negative_infinity()
    other = box([-1, -2, -3], [1, 2, 3])
    b.enclose(other)
    assert b == other


def test_from_points_bounds():
    pts = np.array([[1.0, 5.0, -2.0], [-3.0, 0.5, 4.0], [2.0, -1.0, 0.0]])
    b = AABB.from_points(pts)
    assert all(b.contains(p) for p in pts)
    for axis in range(3):
        assert b.min_point[axis] in pts[:, axis]
        assert b.max_point[axis] in pts[:, axis]


def test_from_no_points_is_empty():
    b = AABB.from_points([])
    assert b == AABB.negative_infinity()


def test_intersects_overlap():
    a = box([0, 0, 0], [2, 2, 2])
    b = box([1, 1, 1], [3, 3, 3])
    assert a.intersects(b) and b.intersects(a)


def test_touching_boxes_do_not_intersect():
    a = box([0, 0, 0], [1, 1, 1])
    b = box([1, 0, 0], [2, 1, 1])
    assert not a.intersects(b)


def test_contains_box_and_point():
    outer = box([0, 0, 0], [4, 4, 4])
    assert outer.contains(box([1, 1, 1], [4, 4, 4]))
    assert not outer.contains(box([1, 1, 1], [5, 4, 4]))
    assert outer.contains([0.0, 4.0, 2.0])
    assert not outer.contains([-0.1, 1.0, 1.0])


def test_enclose_point_and_empty_box():
    b = box([0, 0, 0], [1, 1, 1])
    b.enclose([3.0, -1.0, 0.5])
    assert b.contains([3.0, -1.0, 0.5])
    before = (b.min_point.copy(), b.max_point.copy())
    b.enclose(AABB.negative_infinity())
    assert np.array_equal(b.min_point, before[0])
    assert np.array_equal(b.max_point, before[1])


def test_enclose_bad_shape():
    with pytest.raises(ValueError):
        box([0, 0, 0], [1, 1, 1]).enclose([[1.0, 2.0]])


def test_center_and_size_invariants():
    b = box([-1, 2, 3], [5, 4, 9])
    assert np.allclose(b.min_point + b.size(), b.max_point)
    assert np.allclose(b.center() - b.size() / 2, b.min_point)


def test_corners_order():
    b = box([-1, -2, -3], [1, 2, 3])
    c = b.corners()
    assert c.shape == (8, 3)
    assert np.array_equal(c[0], b.min_point)
    assert np.array_equal(c[7], b.max_point)
    assert len({tuple(p) for p in c}) == 8
    assert AABB.from_points(c) == b


def test_transformed_translation():
    b = box([0, 0, 0], [1, 2, 3])
    offset = np.array([5.0, -1.0, 2.0])
    m = np.eye(4)
    m[:3, 3] = offset
    moved = b.transformed(m)
    assert np.allclose(moved.min_point, b.min_point + offset)
    assert np.allclose(moved.size(), b.size())


def test_transformed_rotation_swaps_extents():
    b = box([0, 0, 0], [1, 2, 3])
    c, s = math.cos(math.pi / 2), math.sin(math.pi / 2)
    m = np.eye(4)
    m[:2, :2] = [[c, -s], [s, c]]
    rotated = b.transformed(m)
    size = b.size()
    assert np.allclose(rotated.size(), [size[1], size[0], size[2]])


def test_transformed_empty_stays_empty():
    assert AABB.negative_infinity().transformed(np.eye(4)) == AABB.negative_infinity()


def test_bad_point_shape():
    with pytest.raises(ValueError):
        AABB([0.0, 0.0], [1.0, 1.0, 1.0])