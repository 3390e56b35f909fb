
import json
import logging
from geometry import Point
from primitives import Segment

logger = logging.getLogger(__name__)


class GraphDataError(ValueError):
    """Saved graph data that cannot be turned back into a Graph."""


class Graph:
    """Planar road graph: unique points plus undirected segments between them.

    All lookups are linear scans by value equality; graphs here are
    editor-sized.
    """

    def __init__(self, points=None, segments=None):
        self.points = list(points or [])
        self.segments = list(segments or [])

    # ---- persistence ----
    @staticmethod
    def load(data):
        try:
            points = [Point.load(p) for p in data["points"]]
            segments = [Segment.load(s, points) for s in data["segments"]]
        except (KeyError, TypeError, ValueError, LookupError) as e:
            raise GraphDataError(f"inconsistent graph data: {e}") from e
        if len(set(points)) != len(points):
            raise GraphDataError("inconsistent graph data: duplicate points")
        degenerate = next((s for s in segments if s.is_degenerate()), None)
        if degenerate is not None:
            raise GraphDataError(f"inconsistent graph data: degenerate segment {degenerate!r}")
        if len(set(segments)) != len(segments):
            raise GraphDataError("inconsistent graph data: duplicate segments")
        logger.debug("loaded graph: %d points, %d segments", len(points), len(segments))
        return Graph(points, segments)

    def save(self):
        return {"points": [p.to_dict() for p in self.points],
                "segments": [s.to_dict() for s in self.segments]}

    def hash(self):
        return json.dumps(self.save(), sort_keys=True, separators=(",", ":"))

    # ---- points ----
    def add_point(self, point):
        self.points.append(point)

    def try_add_point(self, point):
        if self.contains_point(point):
            return False
        self.add_point(point)
        return True

    def find_point(self, point):
        """Return the stored point equal to ``point``, or None."""
        return next((p for p in self.points if p.equals(point)), None)

    def contains_point(self, point):
        return self.find_point(point) is not None

    def remove_point(self, point):
        for seg in self.get_segments_with_point(point):
            self.remove_segment(seg)
        self.points.remove(point)

    # ---- segments ----
    def add_segment(self, seg):
        if seg.is_degenerate():
            raise ValueError(f"degenerate segment {seg!r}")
        self.segments.append(seg)

    def try_add_segment(self, seg):
        if self.contains_segment(seg) or seg.is_degenerate():
            return False
        self.add_segment(seg)
        return True

    def find_segment(self, seg):
        return next((s for s in self.segments if s.equals(seg)), None)

    def contains_segment(self, seg):
        return self.find_segment(seg) is not None

    def remove_segment(self, seg):
        self.segments.remove(seg)

    def get_segments_with_point(self, point):
        return [s for s in self.segments if s.includes(point)]

    def dispose(self):
        self.points.clear(); self.segments.clear()

    def draw(self, screen, world_to_screen=None, cam_zoom=1.0):
        for seg in self.segments:
            seg.draw(screen, world_to_screen, cam_zoom)
        for p in self.points:
            p.draw(screen, world_to_screen, cam_zoom)
