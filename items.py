
"""Drawable scene items derived from the road graph.

Every item carries a footprint ``base`` Polygon and a ``draw`` method.
Buildings and trees fake height by pushing their upper outlines away from a
viewpoint (:func:`geometry.point_on_z_plane`), so they take that viewpoint
when drawn and the world paints them back to front.
"""
import math
from typing import Protocol

from geometry import distance, kind_of_random, lerp, lerp2d, point_on_z_plane, translate
from primitives import Polygon, Segment
from envelope import Envelope
from settings import (BUILDING_FILL, BUILDING_ROOF_SIDE, BUILDING_STROKE, DEBUG_COLOR,
                      DEFAULT_PARAMS, ROAD_COLOR, ROOF_COLORS)


class Drawable(Protocol):
    base: Polygon
    def draw(self, screen, *args, **kwargs) -> None: ...


class Road:
    def __init__(self, skeleton, width=DEFAULT_PARAMS["ROAD_WIDTH"], roundness=DEFAULT_PARAMS["ROAD_ROUNDNESS"]):
        self.skeleton = skeleton
        self.envelope = Envelope(skeleton, width, roundness)
        self.base = self.envelope.poly

    def hash(self):
        return self.base.hash()

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0):
        self.base.draw(screen, world_to_screen, cam_zoom, fill=ROAD_COLOR, stroke=ROAD_COLOR, width=15)


class Building:
    def __init__(self, base, height_coef=DEFAULT_PARAMS["BUILDING_HEIGHT"], roof_height=DEFAULT_PARAMS["BUILDING_ROOF_HEIGHT"]):
        self.base = base
        self.height_coef = height_coef
        self.roof_height = roof_height

    def hash(self):
        return self.base.hash()

    def draw(self, screen, viewpoint, world_to_screen=None, cam_zoom=1.0):
        pts = self.base.points
        ceiling = [point_on_z_plane(p, viewpoint, self.height_coef) for p in pts]
        sides = []
        for i in range(len(pts)):
            n = (i + 1) % len(pts)
            sides.append(Polygon([pts[i], pts[n], ceiling[n], ceiling[i]]))
        sides.sort(key=lambda s: s.distance_to_point(viewpoint), reverse=True)

        style = dict(fill=BUILDING_FILL, stroke=BUILDING_STROKE, width=2)
        self.base.draw(screen, world_to_screen, cam_zoom, **style)
        for side in sides:
            side.draw(screen, world_to_screen, cam_zoom, **style)
        self._draw_roof(screen, viewpoint, ceiling, world_to_screen, cam_zoom)

    def _draw_roof(self, screen, viewpoint, ceiling, world_to_screen, cam_zoom):
        pts = self.base.points
        if len(pts) != 4:
            Polygon(ceiling).draw(screen, world_to_screen, cam_zoom, fill=BUILDING_FILL, stroke=BUILDING_STROKE)
            return
        # ridge: the raised front edge pushed half the footprint length inwards
        z = self.height_coef + self.roof_height
        length = distance(pts[0], pts[3])
        ridge = Envelope(Segment(point_on_z_plane(pts[0], viewpoint, z),
                                 point_on_z_plane(pts[1], viewpoint, z)), length).poly.points
        top1, top2 = ridge[0], ridge[3]
        shingles = [Polygon([ceiling[0], ceiling[1], top2, top1]),
                    Polygon([ceiling[2], ceiling[3], top1, top2])]
        shingles.sort(key=lambda s: s.distance_to_point(viewpoint), reverse=True)

        idx = int(kind_of_random(top1.x * top2.y, 17) * len(ROOF_COLORS))
        color = ROOF_COLORS[min(idx, len(ROOF_COLORS) - 1)]
        # the ceiling painted in the gable color stands in for the triangle ends
        Polygon(ceiling).draw(screen, world_to_screen, cam_zoom, fill=BUILDING_ROOF_SIDE, stroke=BUILDING_STROKE)
        for s in shingles:
            s.draw(screen, world_to_screen, cam_zoom, fill=color, stroke=BUILDING_STROKE)


class Tree:
    LEVELS = 7
    RESOLUTION = 16
    TOP_SIZE = 40

    def __init__(self, center, radius=DEFAULT_PARAMS["TREE_RADIUS"], height_coef=DEFAULT_PARAMS["TREE_HEIGHT"], debug=False):
        self.center = center
        self.radius = radius
        self.height_coef = height_coef
        self.debug = debug
        self.base = self._level(center, radius)

    def _level(self, point, diameter):
        rad = diameter / 2; pts = []
        for k in range(self.RESOLUTION):
            a = k * 2 * math.pi / self.RESOLUTION
            noisy = rad * lerp(0.5, 1, kind_of_random((a + self.center.x) * diameter, 17))
            pts.append(translate(point, a, noisy))
        return Polygon(pts)

    def hash(self):
        return self.center.hash()

    def draw(self, screen, viewpoint, world_to_screen=None, cam_zoom=1.0):
        top = point_on_z_plane(self.center, viewpoint, self.height_coef)
        for level in range(self.LEVELS):
            t = level / (self.LEVELS - 1)
            color = (30, int(lerp(50, 200, t)), 70)
            poly = self._level(lerp2d(self.center, top, t), lerp(self.radius, self.TOP_SIZE, t))
            poly.draw(screen, world_to_screen, cam_zoom, fill=color, stroke=None)
        if self.debug:
            self.base.draw(screen, world_to_screen, cam_zoom, fill=None, stroke=DEBUG_COLOR)
