
import math
from geometry import (Point, identity, segment_intersection, average, distance,
                      get_intersection, normalize, subtract)

# fixed far-away ray target for parity tests; the odd slope keeps the ray off
# axis-aligned vertices in the common case
OUTER_POINT = Point(-1e6, -1.37e6)
BREAK_EPS = 1e-6


class Segment:
    __slots__ = ("p1", "p2")

    def __init__(self, p1, p2):
        self.p1 = p1; self.p2 = p2

    @staticmethod
    def load(data, points):
        """Build a segment whose endpoints are resolved against ``points``.

        Raises ``LookupError`` if either endpoint is not in the list.
        """
        ends = []
        for key in ("p1", "p2"):
            target = Point.load(data[key])
            match = next((p for p in points if p.equals(target)), None)
            if match is None:
                raise LookupError(f"segment endpoint {target!r} not in point list")
            ends.append(match)
        return Segment(*ends)

    def to_dict(self):
        return {"p1": self.p1.to_dict(), "p2": self.p2.to_dict()}

    def length(self):
        return distance(self.p1, self.p2)

    def direction_vector(self):
        return normalize(subtract(self.p2, self.p1))

    def includes(self, point):
        return self.p1.equals(point) or self.p2.equals(point)

    def equals(self, other):
        return self.includes(other.p1) and self.includes(other.p2)

    def __eq__(self, other):
        if not isinstance(other, Segment):
            return NotImplemented
        return self.equals(other)

    def __hash__(self):
        return hash(frozenset((self.p1, self.p2)))

    def __repr__(self):
        return f"Segment({self.p1!r}, {self.p2!r})"

    def is_degenerate(self):
        return self.p1.equals(self.p2)

    def project_point(self, point):
        """Project onto the supporting line.

        Returns ``(projected_point, offset)`` with offset 0 at p1 and 1 at p2.
        The offset is not clamped; values outside [0, 1] mean the projection
        falls on the line beyond the segment.
        """
        bx = self.p2.x - self.p1.x; by = self.p2.y - self.p1.y
        mag = math.hypot(bx, by)
        if mag == 0:
            return self.p1, 0.0
        # unit vector and scaler stay unrounded; only the result is a Point
        ux = bx / mag; uy = by / mag
        scaler = (point.x - self.p1.x) * ux + (point.y - self.p1.y) * uy
        return Point(self.p1.x + ux * scaler, self.p1.y + uy * scaler), scaler / mag

    def distance_to_point(self, point):
        proj, offset = self.project_point(point)
        if 0 < offset < 1:
            return distance(point, proj)
        return min(distance(point, self.p1), distance(point, self.p2))

    def hash(self):
        # undirected, like equality
        return "-".join(sorted((self.p1.hash(), self.p2.hash())))

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0, width=2, color=(0, 0, 0), dash=None):
        import pygame
        to_screen = world_to_screen or identity
        w = max(1, int(width * cam_zoom))
        if not dash:
            pygame.draw.line(screen, color, to_screen((self.p1.x, self.p1.y)), to_screen((self.p2.x, self.p2.y)), w)
            return
        L = self.length()
        if L == 0: return
        on, off = dash[0], dash[1] if len(dash) > 1 else dash[0]
        ux, uy = (self.p2.x - self.p1.x) / L, (self.p2.y - self.p1.y) / L
        d = 0.0
        while d < L:
            e = min(L, d + on)
            a = (self.p1.x + ux*d, self.p1.y + uy*d); b = (self.p1.x + ux*e, self.p1.y + uy*e)
            pygame.draw.line(screen, color, to_screen(a), to_screen(b), w)
            d = e + off


class Polygon:
    """Ordered ring of points with a derived closed boundary of segments.

    ``segments`` starts as one segment per consecutive point pair (wrapping
    around) and may later be split in place by :meth:`break_pair`.
    """

    def __init__(self, points):
        self.points = list(points)
        n = len(self.points)
        self.segments = [Segment(self.points[i - 1], self.points[i % n]) for i in range(1, n + 1)]

    def __repr__(self):
        return f"Polygon({len(self.points)} points)"

    # ---- boolean engine ----
    @staticmethod
    def union(polys):
        """Outer boundary of the union of ``polys`` as an unordered segment list.

        Mutates the segment lists of the input polygons (see :meth:`multi_break`).
        """
        Polygon.multi_break(polys)
        kept = []
        for i, poly in enumerate(polys):
            for seg in poly.segments:
                if not any(j != i and other.contains_segment(seg) for j, other in enumerate(polys)):
                    kept.append(seg)
        return kept

    @staticmethod
    def multi_break(polys):
        for i in range(len(polys) - 1):
            for j in range(i + 1, len(polys)):
                Polygon.break_pair(polys[i], polys[j])

    @staticmethod
    def break_pair(poly1, poly2):
        """Split both polygons' segments at every proper crossing between them.

        A crossing counts only when it lies strictly inside both segments; the
        split inserts the trailing half right after the split segment, so the
        loops re-read list lengths as they grow.
        """
        segs1 = poly1.segments; segs2 = poly2.segments
        i = 0
        while i < len(segs1):
            j = 0
            while j < len(segs2):
                s1 = segs1[i]; s2 = segs2[j]
                hit = segment_intersection(s1.p1, s1.p2, s2.p1, s2.p2)
                if hit is not None:
                    x, y, t, u = hit
                    if BREAK_EPS < t < 1 - BREAK_EPS and BREAK_EPS < u < 1 - BREAK_EPS:
                        point = Point(x, y)
                        if not (s1.includes(point) or s2.includes(point)):
                            aux = s1.p2; s1.p2 = point
                            segs1.insert(i + 1, Segment(point, aux))
                            aux = s2.p2; s2.p2 = point
                            segs2.insert(j + 1, Segment(point, aux))
                j += 1
            i += 1

    # ---- queries ----
    def intersects_poly(self, poly):
        for seg in self.segments:
            for other in poly.segments:
                if get_intersection(seg.p1, seg.p2, other.p1, other.p2):
                    return True
        return False

    def contained_by_poly(self, poly):
        return all(poly.contains_point(p) for p in self.points)

    def distance_to_point(self, point):
        return min((seg.distance_to_point(point) for seg in self.segments), default=math.inf)

    def distance_to_poly(self, poly):
        return min((self.distance_to_point(p) for p in poly.points), default=math.inf)

    def contains_segment(self, seg):
        return self.contains_point(average(seg.p1, seg.p2))

    def contains_point(self, point):
        # parity of crossings; a ray through a vertex counts twice (known limitation)
        count = 0
        for seg in self.segments:
            if get_intersection(point, OUTER_POINT, seg.p1, seg.p2):
                count += 1
        return count % 2 == 1

    def equals(self, other):
        return self.hash() == other.hash()

    def hash(self):
        return ",".join(sorted(seg.hash() for seg in self.segments))

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0, fill=(0, 0, 255), stroke=(0, 0, 255), width=2):
        import pygame
        if len(self.points) < 3: return
        to_screen = world_to_screen or identity
        pts = [to_screen((p.x, p.y)) for p in self.points]
        if fill is not None:
            pygame.draw.polygon(screen, fill, pts)
        if stroke is not None and width > 0:
            pygame.draw.polygon(screen, stroke, pts, max(1, int(width * cam_zoom)))
