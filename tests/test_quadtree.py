from quadtree import Quadtree


def diagonal_tree(n=10):
    qt = Quadtree((0, 0, 100, 100), max_objects=2, max_levels=4)
    for i in range(n):
        assert qt.insert((i * 10, i * 10, 2, 2), i)
    return qt


def test_query_finds_overlaps_only():
    qt = diagonal_tree()
    assert len(qt) == 10
    assert qt.children is not None
    assert sorted(qt.query((0, 0, 15, 15))) == [0, 1]
    assert sorted(qt.query((55, 0, 10, 40))) == []


def test_item_straddling_quadrants_is_found():
    qt = diagonal_tree()
    qt.insert((45, 45, 10, 10), "mid")
    assert "mid" in qt.query((54, 46, 1, 1))
    assert "mid" in qt.query((46, 54, 1, 1))
    assert "mid" not in qt.query((40, 40, 2, 2))


def test_insert_outside_bounds():
    qt = diagonal_tree()
    assert not qt.insert((500, 500, 1, 1), "far")
    assert len(qt) == 10


def test_query_radius():
    qt = diagonal_tree()
    assert sorted(qt.query_radius((31, 31), 5)) == [3]
    assert sorted(qt.query_radius((31, 31), 15)) == [2, 3, 4]


def test_from_box_pads_bounds():
    qt = Quadtree.from_box((0, 0, 10, 20), pad=5)
    assert (qt.x, qt.y, qt.w, qt.h) == (-5, -5, 20, 30)
    assert qt.insert((-4, -4, 1, 1), "corner")

