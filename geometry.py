
import math

FLOATING_POINT_PRECISION = 3
INTERSECTION_EPS = 0.001


def _round(v):
    # + 0.0 folds -0.0 into 0.0 so equal points hash alike
    return round(float(v), FLOATING_POINT_PRECISION) + 0.0


class Point:
    """A 2D point stored at fixed decimal precision.

    Equality and hashing use the rounded coordinates, so two points produced
    by different float paths compare equal once they agree to
    ``FLOATING_POINT_PRECISION`` decimals.
    """
    __slots__ = ("x", "y")

    def __init__(self, x, y):
        self.x = _round(x); self.y = _round(y)

    @staticmethod
    def load(data):
        return Point(data["x"], data["y"])

    def to_dict(self):
        return {"x": self.x, "y": self.y}

    def equals(self, other):
        return self.x == other.x and self.y == other.y

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash((self.x, self.y))

    def __iter__(self):
        yield self.x; yield self.y

    def __repr__(self):
        return f"Point({self.x}, {self.y})"

    def hash(self):
        return f"({self.x},{self.y})"

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0, size=18, color=(0, 0, 0), outline=False, fill=False):
        import pygame
        to_screen = world_to_screen or identity
        c = to_screen((self.x, self.y)); rad = size * 0.5 * cam_zoom
        pygame.draw.circle(screen, color, c, max(1, int(rad)))
        if outline:
            pygame.draw.circle(screen, (255, 255, 0), c, max(1, int(rad*0.6)), 2)
        if fill:
            pygame.draw.circle(screen, (255, 255, 0), c, max(1, int(rad*0.4)))


def identity(pt): return pt

def distance(a, b): return math.hypot(a.x - b.x, a.y - b.y)
def add(a, b): return Point(a.x + b.x, a.y + b.y)
def subtract(a, b): return Point(a.x - b.x, a.y - b.y)
def average(a, b): return Point((a.x + b.x) / 2, (a.y + b.y) / 2)
def scale(p, s): return Point(p.x * s, p.y * s)
def dot(a, b): return a.x * b.x + a.y * b.y
def magnitude(p): return math.hypot(p.x, p.y)
def angle(p): return math.atan2(p.y, p.x)
def perpendicular(p): return Point(-p.y, p.x)
def lerp(a, b, t): return a + (b - a) * t
def lerp2d(a, b, t): return Point(lerp(a.x, b.x, t), lerp(a.y, b.y, t))


def normalize(p):
    m = magnitude(p)
    return Point(0, 0) if m == 0 else Point(p.x / m, p.y / m)


def translate(loc, ang, offset):
    return Point(loc.x + math.cos(ang) * offset, loc.y + math.sin(ang) * offset)


def point_on_z_plane(p, viewpoint, z):
    """Return ``p`` pushed away from ``viewpoint`` as if raised ``z`` units (fake 3D)."""
    return add(p, scale(subtract(p, viewpoint), z))


def kind_of_random(value, modulus=11):
    # fmod keeps the sign of value, which matters for negative coordinates
    return math.cos(math.fmod(value, modulus)) ** 2


# raw solve: (x, y, t, u) with t along AB and u along CD, or None
def segment_intersection(A, B, C, D):
    t_top = (D.x - C.x) * (A.y - C.y) - (D.y - C.y) * (A.x - C.x)
    u_top = (C.y - A.y) * (A.x - B.x) - (C.x - A.x) * (A.y - B.y)
    bottom = (D.y - C.y) * (B.x - A.x) - (D.x - C.x) * (B.y - A.y)
    if abs(bottom) <= INTERSECTION_EPS:
        return None
    t = t_top / bottom; u = u_top / bottom
    if 0 <= t <= 1 and 0 <= u <= 1:
        return (lerp(A.x, B.x, t), lerp(A.y, B.y, t), t, u)
    return None


def get_intersection(A, B, C, D):
    """Intersection of finite segments AB and CD.

    Returns ``(point, offset)`` where offset is the parameter along AB, or
    ``None`` for (near) parallel segments or when the crossing lies outside
    either segment.
    """
    hit = segment_intersection(A, B, C, D)
    if hit is None:
        return None
    x, y, t, _ = hit
    return Point(x, y), t


def get_nearest_point(loc, points, threshold=math.inf):
    """Closest point to ``loc`` (excluding points equal to it) within ``threshold``.

    Returns ``(point, distance)``; point is ``None`` when nothing qualifies.
    """
    best = None; best_d = math.inf
    for p in points:
        if p.equals(loc):
            continue
        d = distance(p, loc)
        if d < best_d and d < threshold:
            best_d = d; best = p
    return best, best_d


def get_nearest_segment(loc, segments, threshold=math.inf):
    best = None; best_d = math.inf
    for seg in segments:
        d = seg.distance_to_point(loc)
        if d < best_d and d < threshold:
            best_d = d; best = seg
    return best


def bounding_box(points):
    """(left, top, right, bottom) of an iterable of points, or None if empty."""
    left = top = math.inf; right = bottom = -math.inf
    for p in points:
        if p.x < left: left = p.x
        if p.x > right: right = p.x
        if p.y < top: top = p.y
        if p.y > bottom: bottom = p.y
    if left == math.inf:
        return None
    return (left, top, right, bottom)
