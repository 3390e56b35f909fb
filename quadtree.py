
QT_MAX_OBJECTS = 32
QT_MAX_LEVELS  = 10

class Quadtree:
    """Region quadtree over axis-aligned rects ``(x, y, w, h)``.

    An item sinks into a child only when its rect fits that child entirely,
    so a query visiting the intersecting nodes never misses an overlap.
    """
    def __init__(self, bounds, depth=0, max_objects=QT_MAX_OBJECTS, max_levels=QT_MAX_LEVELS):
        self.x,self.y,self.w,self.h = bounds
        self.depth = depth
        self.max_objects = max_objects; self.max_levels = max_levels
        self.items = []
        self.children = None
        self.count = 0

    @classmethod
    def from_box(cls, box, pad=0.0, **kw):
        left, top, right, bottom = box
        return cls((left-pad, top-pad, (right-left)+pad*2, (bottom-top)+pad*2), **kw)

    def __len__(self): return self.count

    @staticmethod
    def _intersects(a, b):
        ax,ay,aw,ah = a; bx,by,bw,bh = b
        return not (ax+aw<bx or bx+bw<ax or ay+ah<by or by+bh<ay)

    @staticmethod
    def _fits(rect, node):
        return (rect[0] >= node.x and rect[1] >= node.y and
                rect[0]+rect[2] <= node.x+node.w and rect[1]+rect[3] <= node.y+node.h)

    def _subdivide(self):
        hx,hy = self.w/2, self.h/2; x,y = self.x, self.y; d = self.depth+1
        kw = dict(max_objects=self.max_objects, max_levels=self.max_levels)
        self.children = [Quadtree((x,    y,    hx,hy), d, **kw), Quadtree((x+hx, y,    hx,hy), d, **kw),
                         Quadtree((x,    y+hy, hx,hy), d, **kw), Quadtree((x+hx, y+hy, hx,hy), d, **kw)]
        keep = []
        for rect, payload in self.items:
            child = self._child(rect)
            if child is None: keep.append((rect, payload))
            else: child._insert(rect, payload)
        self.items = keep

    def _child(self, rect):
        for c in self.children:
            if self._fits(rect, c): return c
        return None

    def insert(self, rect, payload):
        """Add ``payload`` under ``rect``; False if the rect misses the root bounds."""
        if not self._intersects(rect, (self.x,self.y,self.w,self.h)): return False
        self._insert(rect, payload)
        return True

    def _insert(self, rect, payload):
        self.count += 1
        if self.children is None:
            self.items.append((rect, payload))
            if len(self.items) > self.max_objects and self.depth < self.max_levels:
                self._subdivide()
            return
        child = self._child(rect)
        if child is None: self.items.append((rect, payload))
        else: child._insert(rect, payload)

    def query(self, rect, out=None):
        if out is None: out = []
        if not self._intersects(rect, (self.x,self.y,self.w,self.h)): return out
        for r,p in self.items:
            if self._intersects(r, rect): out.append(p)
        if self.children:
            for c in self.children: c.query(rect, out)
        return out

    def query_radius(self, center, radius):
        cx, cy = center
        return self.query((cx-radius, cy-radius, radius*2, radius*2))
