import pygame
import pytest

from geometry import Point
from markings import MARKING_TYPES, Crossing, Start, Stop
from settings import DEBUG_COLOR, ConfigError
from world import World


@pytest.fixture
def world(line_graph):
    return World(line_graph, params={"TREES_ENABLED": False})


def test_marking_base_is_rectangle_around_center():
    m = Crossing(Point(0, 0), Point(1, 0), 100, 50)
    xs = sorted({p.x for p in m.base.points}); ys = sorted({p.y for p in m.base.points})
    assert xs == [-25, 25] and ys == [-50, 50]
    assert m.base.contains_point(Point(0, 0))


def test_crossing_borders_cross_the_direction():
    m = Crossing(Point(0, 0), Point(1, 0), 100, 50)
    assert m.borders == [m.base.segments[0], m.base.segments[2]]
    for b in m.borders:
        assert b.p1.x == b.p2.x
    assert sorted(b.p1.x for b in m.borders) == [-25, 25]


def test_kinds():
    assert set(MARKING_TYPES) == {"stop", "crossing", "start"}
    assert Stop(Point(0, 0), Point(0, 1), 10, 10).hash().startswith("stop:")


def test_stop_snaps_to_lane_guide(world):
    m = world.add_marking("stop", Point(300, 180))
    assert isinstance(m, Stop)
    assert m.center == Point(300, 175)
    assert m.width == 50 and m.height == 50
    assert world.markings == [m]


def test_crossing_snaps_to_graph_segment(world):
    m = world.add_marking("crossing", Point(350, 210))
    assert isinstance(m, Crossing)
    assert m.center == Point(350, 200)
    assert m.width == 100


def test_marking_out_of_reach(world):
    assert world.add_marking("start", Point(300, 600)) is None
    assert world.add_marking("crossing", Point(350, 240), threshold=20) is None
    assert world.markings == []


def test_unknown_marking_kind(world):
    with pytest.raises(ConfigError):
        world.add_marking("yield", Point(300, 175))


def test_remove_marking_at(world):
    world.add_marking("stop", Point(300, 175))
    world.add_marking("crossing", Point(400, 200))
    assert world.remove_marking_at(Point(400, 200)) == 1
    assert [m.kind for m in world.markings] == ["stop"]
    assert world.remove_marking_at(Point(0, 0)) == 0


def test_markings_draw():
    surface = pygame.Surface((200, 200))
    for cls in (Stop, Crossing, Start):
        cls(Point(100, 100), Point(1, 0), 80, 40).draw(surface)
    assert tuple(surface.get_at((100, 100)))[:3] != (0, 0, 0)


def test_debug_crossing_draws_borders(line_graph):
    world = World(line_graph, params={"TREES_ENABLED": False, "DEBUG": True})
    m = world.add_marking("crossing", Point(400, 200))
    assert m.debug
    assert world.add_marking("stop", Point(300, 175)) is not None
    surface = pygame.Surface((600, 400))
    m.draw(surface)
    column = {tuple(surface.get_at((x, 200)))[:3] for x in range(422, 429)}
    assert DEBUG_COLOR in column
