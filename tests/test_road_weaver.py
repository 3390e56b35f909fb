import json

import pytest

from geometry import Point
from graph import Graph, GraphDataError
from road_weaver import default_graph, fit_camera, load_world, save_world
from world import World


def test_default_world():
    world = load_world(None, seed=1)
    assert world.hash() == default_graph().hash()
    assert len(world.roads) == 1


def test_load_bare_graph_file(tmp_path, line_graph):
    path = tmp_path / "graph.json"
    path.write_text(json.dumps(line_graph.save()))
    world = load_world(str(path), seed=1)
    assert world.title == "My World"
    assert world.hash() == line_graph.hash()


def test_save_then_load(tmp_path, line_graph):
    path = tmp_path / "world.json"
    world = World(line_graph, params={"TREES_ENABLED": False}, title="Docks")
    save_world(world, str(path))
    again = load_world(str(path))
    assert again.title == "Docks"
    assert not again.trees_enabled
    assert again.hash() == world.hash()


def test_load_inconsistent_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"points": [], "segments": [{"p1": {"x": 0, "y": 0}, "p2": {"x": 1, "y": 1}}]}))
    with pytest.raises(GraphDataError):
        load_world(str(path))


def test_fit_camera():
    assert fit_camera(World(Graph()), (800, 600)) == ((0.0, 0.0), 1.0)
    world = World(default_graph(), params={"TREES_ENABLED": False})
    (ox, oy), zoom = fit_camera(world, (800, 600))
    assert zoom > 0
    # the road start lands inside the window
    sx = (150 - ox) * zoom; sy = (200 - oy) * zoom
    assert 0 <= sx <= 800 and 0 <= sy <= 600
    assert Point(ox, oy).x < 150
