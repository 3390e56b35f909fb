
import math
from geometry import angle, subtract, translate
from primitives import Polygon
from settings import ConfigError


class Envelope:
    """Rounded buffer (stadium) around a skeleton segment.

    ``roundness`` R sets the angular step (pi / R) of the two semicircular
    caps, giving 2*(R+1) outline points; R=1 degenerates to a rectangle.
    """

    def __init__(self, skeleton, width, roundness=1):
        if not roundness > 0:
            raise ConfigError(f"envelope roundness must be > 0, got {roundness!r}")
        if not width > 0:
            raise ConfigError(f"envelope width must be > 0, got {width!r}")
        if skeleton.is_degenerate():
            raise ConfigError(f"envelope skeleton has zero length: {skeleton!r}")
        self.skeleton = skeleton
        self.width = width
        self.roundness = roundness
        self.poly = self._generate_polygon(width, roundness)

    def _generate_polygon(self, width, roundness):
        p1, p2 = self.skeleton.p1, self.skeleton.p2
        radius = width / 2
        alpha = angle(subtract(p1, p2))
        alpha_cw = alpha + math.pi / 2
        alpha_ccw = alpha - math.pi / 2
        step = math.pi / roundness; eps = step / 2
        angles = []; k = 0
        while alpha_ccw + k*step <= alpha_cw + eps:
            angles.append(alpha_ccw + k*step); k += 1
        points = [translate(p1, a, radius) for a in angles]
        points += [translate(p2, math.pi + a, radius) for a in angles]
        return Polygon(points)

    def hash(self):
        return self.poly.hash()

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0, **style):
        self.poly.draw(screen, world_to_screen, cam_zoom, **style)
