import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from geometry import Point
from graph import Graph
from primitives import Polygon, Segment


def square(x, y, size):
    return Polygon([Point(x, y), Point(x + size, y), Point(x + size, y + size), Point(x, y + size)])


@pytest.fixture
def line_graph():
    p1 = Point(200, 200); p2 = Point(500, 200)
    return Graph([p1, p2], [Segment(p1, p2)])


@pytest.fixture
def cross_graph():
    c = Point(0, 0)
    ends = [Point(-800, 0), Point(800, 0), Point(0, -800), Point(0, 800)]
    return Graph([c, *ends], [Segment(c, e) for e in ends])
