import math

import pytest

from geometry import (Point, average, bounding_box, get_intersection, get_nearest_point,
                      get_nearest_segment, kind_of_random, lerp2d, normalize, point_on_z_plane,
                      translate)
from primitives import Segment


def test_points_compare_at_fixed_precision():
    assert Point(1.0004, 2) == Point(1.0, 2.0)
    assert Point(1.0004, 2).hash() == Point(1, 2).hash()
    assert Point(1.002, 2) != Point(1.0, 2.0)
    assert len({Point(0.1 + 0.2, 0), Point(0.3, 0)}) == 1


def test_negative_zero_hashes_like_zero():
    assert Point(-0.0001, 0).hash() == "(0.0,0.0)"


def test_point_dict_round_trip():
    p = Point(3.25, -7)
    assert Point.load(p.to_dict()) == p


def test_get_intersection_crossing():
    hit = get_intersection(Point(0, 0), Point(10, 0), Point(5, -5), Point(5, 5))
    assert hit is not None
    point, offset = hit
    assert point == Point(5, 0)
    assert offset == pytest.approx(0.5)


def test_get_intersection_parallel_is_none():
    assert get_intersection(Point(0, 0), Point(10, 0), Point(0, 1), Point(10, 1)) is None


def test_get_intersection_outside_segments_is_none():
    assert get_intersection(Point(0, 0), Point(10, 0), Point(20, -5), Point(20, 5)) is None


def test_get_intersection_at_endpoint():
    point, offset = get_intersection(Point(0, 0), Point(10, 0), Point(10, -5), Point(10, 5))
    assert point == Point(10, 0)
    assert offset == pytest.approx(1.0)


def test_vector_helpers():
    assert average(Point(0, 0), Point(4, 2)) == Point(2, 1)
    assert normalize(Point(3, 4)) == Point(0.6, 0.8)
    assert normalize(Point(0, 0)) == Point(0, 0)
    assert translate(Point(1, 1), math.pi / 2, 2) == Point(1, 3)
    assert lerp2d(Point(0, 0), Point(10, 20), 0.25) == Point(2.5, 5)


def test_point_on_z_plane_pushes_away_from_viewpoint():
    assert point_on_z_plane(Point(10, 0), Point(0, 0), 0.5) == Point(15, 0)
    assert point_on_z_plane(Point(10, 0), Point(10, 0), 0.5) == Point(10, 0)


def test_kind_of_random_is_deterministic_and_bounded():
    for v in (-1234.5, -12, 0, 3.3, 99999):
        r = kind_of_random(v)
        assert 0 <= r <= 1
        assert r == kind_of_random(v)
    # remainder keeps the sign of the dividend
    assert kind_of_random(-12, 11) == pytest.approx(math.cos(-1) ** 2)


def test_get_nearest_point_skips_equal_point():
    pts = [Point(0, 0), Point(3, 4), Point(10, 0)]
    point, d = get_nearest_point(Point(0, 0), pts)
    assert point == Point(3, 4)
    assert d == pytest.approx(5)
    assert get_nearest_point(Point(0, 0), pts, threshold=4) == (None, math.inf)


def test_get_nearest_segment_threshold():
    near = Segment(Point(0, 1), Point(10, 1))
    far = Segment(Point(0, 9), Point(10, 9))
    assert get_nearest_segment(Point(5, 0), [far, near]) is near
    assert get_nearest_segment(Point(5, 0), [far, near], threshold=0.5) is None


def test_bounding_box():
    assert bounding_box([]) is None
    assert bounding_box(iter([Point(1, 5), Point(-2, 3), Point(4, -1)])) == (-2, -1, 4, 5)
