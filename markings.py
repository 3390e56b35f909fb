
from geometry import identity, add, angle, perpendicular, scale, translate
from primitives import Segment
from envelope import Envelope
from settings import DEBUG_COLOR, MARKING_COLOR


class Marking:
    """A road marking laid across ``direction`` at ``center``.

    ``base`` is a rectangular envelope ``width`` wide around a support of
    length ``height`` running along the direction vector.
    """
    kind = "marking"

    def __init__(self, center, direction, width, height):
        self.center = center; self.direction = direction
        self.width = width; self.height = height
        a = angle(direction)
        support = Segment(translate(center, a, height / 2), translate(center, a, -height / 2))
        self.base = Envelope(support, width, 1).poly

    def hash(self):
        return f"{self.kind}:{self.base.hash()}"

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0):
        self.base.draw(screen, world_to_screen, cam_zoom, fill=MARKING_COLOR, stroke=MARKING_COLOR)


class Stop(Marking):
    kind = "stop"

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0):
        # a solid bar across the lane
        perp = perpendicular(self.direction)
        Segment(add(self.center, scale(perp, self.width / 2)),
                add(self.center, scale(perp, -self.width / 2))).draw(
            screen, world_to_screen, cam_zoom, width=self.height * 0.25, color=MARKING_COLOR)


class Crossing(Marking):
    kind = "crossing"

    def __init__(self, center, direction, width, height, debug=False):
        super().__init__(center, direction, width, height)
        self.borders = [self.base.segments[0], self.base.segments[2]]
        self.debug = debug

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0):
        perp = perpendicular(self.direction)
        line = Segment(add(self.center, scale(perp, self.width / 2)),
                       add(self.center, scale(perp, -self.width / 2)))
        line.draw(screen, world_to_screen, cam_zoom, width=self.height, color=MARKING_COLOR, dash=[11, 11])
        if self.debug:
            for b in self.borders:
                b.draw(screen, world_to_screen, cam_zoom, color=DEBUG_COLOR)


class Start(Marking):
    kind = "start"

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0):
        import pygame
        to_screen = world_to_screen or identity
        a = angle(self.direction); r = min(self.width, self.height) / 2
        tip = translate(self.center, a, r)
        left = translate(self.center, a + 2.5, r); right = translate(self.center, a - 2.5, r)
        pygame.draw.polygon(screen, MARKING_COLOR, [to_screen(tuple(p)) for p in (tip, left, right)])


MARKING_TYPES = {"stop": Stop, "crossing": Crossing, "start": Start}
