
import logging
import math
import random

from geometry import (Point, identity, add, bounding_box, distance, get_nearest_segment,
                      kind_of_random, lerp, scale)
from primitives import Polygon, Segment
from envelope import Envelope
from graph import Graph
from items import Building, Drawable, Road, Tree
from markings import MARKING_TYPES, Crossing
from quadtree import Quadtree
from settings import LANE_DASH_COLOR, ROAD_BORDER_COLOR, ConfigError, resolve_params

logger = logging.getLogger(__name__)


class World:
    """Procedural scene derived from a road :class:`Graph`.

    ``generate`` rebuilds roads, road borders, lane guides, buildings and
    trees whenever the graph hash differs from the one seen at the end of the
    previous cycle. Results are replaced wholesale on each cycle; callers
    must not hold on to them across regenerations.
    """

    def __init__(self, graph, params=None, seed=None, title="My World"):
        self.graph = graph
        self.params = resolve_params(params)
        self.title = title
        self.rng = random.Random(seed)
        self.trees_enabled = bool(self.params["TREES_ENABLED"])

        self.roads = []
        self.road_borders = []
        self.lane_guides = []
        self.buildings = []
        self.trees = []
        # tree index -> closest graph segment at placement time
        self.tree_parents = {}
        self.markings = []

        self._last_hash = None
        self._last_render = {"road_borders": set(), "buildings": set()}
        self._regenerate_all_trees = True
        self.generate()

    @property
    def road_width(self): return self.params["ROAD_WIDTH"]

    # ---- persistence ----
    @staticmethod
    def load(data, params=None, seed=None):
        graph = Graph.load(data.get("graph", {"points": [], "segments": []}))
        params = dict(params or {})
        params.setdefault("TREES_ENABLED", bool(data.get("trees_enabled", True)))
        return World(graph, params=params, seed=seed, title=data.get("title", "My World"))

    def save(self):
        return {"title": self.title, "trees_enabled": self.trees_enabled, "graph": self.graph.save()}

    def hash(self):
        return self.graph.hash()

    # ---- generation ----
    def enable_trees(self):
        self.trees_enabled = True
        self._regenerate_all_trees = True
        self.generate(force=True)

    def disable_trees(self):
        self.trees_enabled = False
        self._regenerate_all_trees = True
        self.generate(force=True)

    def generate(self, force=False):
        """Regenerate all derived geometry; returns False when skipped (graph unchanged)."""
        graph_hash = self.graph.hash()
        if not force and graph_hash == self._last_hash:
            return False
        p = self.params

        self.roads = [Road(seg, p["ROAD_WIDTH"], p["ROAD_ROUNDNESS"]) for seg in self.graph.segments]
        self.road_borders = Polygon.union([r.base for r in self.roads])
        self.buildings = self.generate_buildings()
        if self.trees_enabled:
            self.trees = self.generate_trees()
        else:
            self.trees = []; self.tree_parents = {}
        self.lane_guides = self.generate_lane_guides()

        self._last_render = {"road_borders": {s.hash() for s in self.road_borders},
                             "buildings": {b.base.hash() for b in self.buildings}}
        self._last_hash = graph_hash
        logger.debug("generated %d roads, %d borders, %d guides, %d buildings, %d trees",
                     len(self.roads), len(self.road_borders), len(self.lane_guides),
                     len(self.buildings), len(self.trees))
        return True

    def generate_lane_guides(self):
        w = self.params["ROAD_WIDTH"] / 2
        return Polygon.union([Envelope(seg, w, self.params["GUIDE_ROUNDNESS"]).poly for seg in self.graph.segments])

    def generate_buildings(self):
        if not self.graph.segments:
            return []
        p = self.params
        width = p["ROAD_WIDTH"] + p["BUILDING_WIDTH"] + p["BUILDING_SPACING"] * 2
        envs = [Envelope(seg, width, p["GUIDE_ROUNDNESS"]).poly for seg in self.graph.segments]
        guides = [g for g in Polygon.union(envs) if g.length() >= p["BUILDING_MIN_LENGTH"]]

        supports = []
        for guide in guides:
            supports.extend(self._supports_along(guide))

        bases = []
        for s in supports:
            w = p["BUILDING_WIDTH"] * (1 + kind_of_random(s.p1.x * s.p2.y, 11))
            bases.append(Envelope(s, w).poly)

        # collect every overlapping footprint first, then filter once
        overlapping = set()
        for i in range(len(bases)):
            for j in range(i + 1, len(bases)):
                if bases[i].intersects_poly(bases[j]):
                    overlapping.update((i, j))
        logger.debug("buildings: %d guides, %d supports, %d dropped for overlap",
                     len(guides), len(supports), len(overlapping))
        return [Building(b, p["BUILDING_HEIGHT"], p["BUILDING_ROOF_HEIGHT"])
                for i, b in enumerate(bases) if i not in overlapping]

    def _supports_along(self, guide):
        """Split ``guide`` into end-to-end building spines separated by the spacing."""
        spacing = self.params["BUILDING_SPACING"]
        total = guide.length() + spacing
        count = math.floor(total / (self.params["BUILDING_MIN_LENGTH"] + spacing))
        if count < 1:
            return []
        length = total / count - spacing
        d = guide.direction_vector()
        supports = []; q1 = guide.p1; q2 = None
        for i in range(count):
            if i: q1 = add(q2, scale(d, spacing))
            # deterministic jitter in [0.75, 1.25] from the start point
            adj = length * (1 - (kind_of_random(q1.x * q1.y, 11) * 0.5 - 0.25))
            q2 = add(q1, scale(d, adj))
            supports.append(Segment(q1, q2))
        return supports

    def _new_since_last(self, current, key):
        seen = self._last_render[key]
        return [c for c in current if c.hash() not in seen]

    def generate_trees(self):
        """Stagnation-bounded rejection sampling of tree positions.

        Candidates are drawn uniformly in a bounding box and accepted when
        clear of every road and building, near at least one of them, and at
        least TREE_RADIUS from every accepted tree. Sampling stops after
        100 * TREE_COUNT_SCALE_FACTOR consecutive rejections.
        """
        if not self.graph.segments:
            self.tree_parents = {}
            return []
        p = self.params
        radius = p["TREE_RADIUS"]; reach = radius * p["TREE_PAD_COUNT"]
        illegal = [b.base for b in self.buildings] + [r.base for r in self.roads]
        illegal = [(poly, bounding_box(poly.points)) for poly in illegal]

        if self._regenerate_all_trees:
            self._regenerate_all_trees = False
            box = bounding_box(pt for poly, _ in illegal for pt in poly.points)
        else:
            borders = self._new_since_last(self.road_borders, "road_borders")
            bases = self._new_since_last([b.base for b in self.buildings], "buildings")
            box = bounding_box([pt for s in borders for pt in (s.p1, s.p2)] +
                               [pt for b in bases for pt in b.points])

        full = bounding_box(pt for poly, _ in illegal for pt in poly.points)
        index = Quadtree.from_box(full, pad=reach, max_objects=p["QUADTREE_MAX_OBJECTS"],
                                  max_levels=p["QUADTREE_MAX_LEVELS"])
        trees = []; parents = {}

        kept = 0
        for old in self.trees:
            if self._valid_tree_location(old.center, illegal, index):
                self._place_tree(old, trees, parents, index); kept += 1

        accepted = samples = 0
        if box is not None:
            left, top, right, bottom = box
            limit = 100 * p["TREE_COUNT_SCALE_FACTOR"]
            fails = 0
            while fails < limit:
                pt = Point(lerp(left, right, self.rng.random()), lerp(top, bottom, self.rng.random()))
                samples += 1
                if self._valid_tree_location(pt, illegal, index):
                    tree = Tree(pt, radius, p["TREE_HEIGHT"], debug=p["DEBUG"])
                    self._place_tree(tree, trees, parents, index)
                    accepted += 1; fails = 0
                else:
                    fails += 1
        logger.debug("trees: kept %d, accepted %d of %d samples", kept, accepted, samples)
        self.tree_parents = parents
        return trees

    def _place_tree(self, tree, trees, parents, index):
        c = tree.center; r = self.params["TREE_RADIUS"]
        parents[len(trees)] = min(self.graph.segments, key=lambda s: s.distance_to_point(c))
        trees.append(tree)
        index.insert((c.x - r/2, c.y - r/2, r, r), tree)

    def _valid_tree_location(self, pt, illegal, index):
        radius = self.params["TREE_RADIUS"]; reach = radius * self.params["TREE_PAD_COUNT"]
        close = False
        for poly, (left, top, right, bottom) in illegal:
            # outside the padded box the polygon is farther than reach
            if pt.x < left - reach or pt.x > right + reach or pt.y < top - reach or pt.y > bottom + reach:
                continue
            d = poly.distance_to_point(pt)
            if d < radius / 2 or poly.contains_point(pt):
                return False
            if d < reach:
                close = True
        if not close:
            return False
        for other in index.query_radius((pt.x, pt.y), radius):
            if distance(other.center, pt) < radius:
                return False
        return True

    def parent_of(self, tree):
        """Graph segment closest to ``tree`` when it was placed, or None."""
        for i, t in enumerate(self.trees):
            if t is tree:
                return self.tree_parents.get(i)
        return None

    # ---- markings ----
    def add_marking(self, kind, location, threshold=None):
        """Snap a marking of ``kind`` onto the nearest target segment.

        Stops and starts attach to lane guides, crossings to graph segments.
        Returns the new marking, or None when nothing is within ``threshold``
        or the projection falls beyond the segment ends.
        """
        if kind not in MARKING_TYPES:
            raise ConfigError(f"unknown marking kind {kind!r}")
        w = self.road_width
        targets = self.graph.segments if kind == "crossing" else self.lane_guides
        seg = get_nearest_segment(location, targets, w / 2 if threshold is None else threshold)
        if seg is None:
            return None
        proj, offset = seg.project_point(location)
        if not 0 <= offset <= 1:
            return None
        width = w / 2 if kind == "stop" else w
        if kind == "crossing":
            marking = Crossing(proj, seg.direction_vector(), width, w / 2, debug=self.params["DEBUG"])
        else:
            marking = MARKING_TYPES[kind](proj, seg.direction_vector(), width, w / 2)
        self.markings.append(marking)
        return marking

    def remove_marking_at(self, location):
        before = len(self.markings)
        self.markings = [m for m in self.markings if not m.base.contains_point(location)]
        return before - len(self.markings)

    # ---- drawing ----
    def draw(self, screen, viewpoint, world_to_screen=None, cam_zoom=1.0):
        to_screen = world_to_screen or identity
        for road in self.roads:
            road.draw(screen, to_screen, cam_zoom)
        for seg in self.graph.segments:
            seg.draw(screen, to_screen, cam_zoom, width=3, color=LANE_DASH_COLOR, dash=[10, 10])
        for seg in self.road_borders:
            seg.draw(screen, to_screen, cam_zoom, width=4, color=ROAD_BORDER_COLOR)
        for m in self.markings:
            m.draw(screen, to_screen, cam_zoom)
        for item in self.depth_sorted(viewpoint):
            item.draw(screen, viewpoint, to_screen, cam_zoom)

    def depth_sorted(self, viewpoint) -> "list[Drawable]":
        """Buildings and trees, farthest from ``viewpoint`` first."""
        items = [*self.buildings, *self.trees]
        return sorted(items, key=lambda it: it.base.distance_to_point(viewpoint), reverse=True)
