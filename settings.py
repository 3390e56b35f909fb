
class ConfigError(ValueError):
    """Invalid generation parameter (width, roundness, radius, ...)."""


DEFAULT_PARAMS = {
    "ROAD_WIDTH": 100,
    "ROAD_ROUNDNESS": 30,
    # large enough that guide caps never yield edges >= BUILDING_MIN_LENGTH
    "GUIDE_ROUNDNESS": 20,
    # depth of a building, perpendicular to the road
    "BUILDING_WIDTH": 150,
    # minimum length of a building, parallel to the road
    "BUILDING_MIN_LENGTH": 150,
    "BUILDING_SPACING": 100,
    "BUILDING_HEIGHT": 0.1,
    "BUILDING_ROOF_HEIGHT": 0.05,
    "TREE_RADIUS": 100,
    "TREE_HEIGHT": 0.15,
    # higher -> more trees; the sampler stops after 100*scale straight misses
    "TREE_COUNT_SCALE_FACTOR": 0.3,
    # trees must sit within TREE_RADIUS*TREE_PAD_COUNT of a road or building
    "TREE_PAD_COUNT": 2,
    "TREES_ENABLED": True,
    "QUADTREE_MAX_OBJECTS": 32,
    "QUADTREE_MAX_LEVELS": 10,
    "DEBUG": False,
}

_POSITIVE = ("ROAD_WIDTH", "ROAD_ROUNDNESS", "GUIDE_ROUNDNESS", "BUILDING_WIDTH",
             "BUILDING_MIN_LENGTH", "TREE_RADIUS", "TREE_COUNT_SCALE_FACTOR",
             "TREE_PAD_COUNT", "QUADTREE_MAX_OBJECTS", "QUADTREE_MAX_LEVELS")
_NON_NEGATIVE = ("BUILDING_SPACING", "BUILDING_HEIGHT", "BUILDING_ROOF_HEIGHT", "TREE_HEIGHT")

BG_COLOR         = (92, 160, 90)
ROAD_COLOR       = (187, 187, 187)
ROAD_BORDER_COLOR = (255, 255, 255)
LANE_DASH_COLOR  = (255, 255, 255)
BUILDING_FILL    = (255, 255, 255)
BUILDING_STROKE  = (170, 170, 170)
BUILDING_ROOF_SIDE = (252, 243, 215)
ROOF_COLORS = [(168, 74, 50), (119, 126, 181), (62, 112, 64), (156, 104, 2)]
MARKING_COLOR    = (255, 255, 255)
DEBUG_COLOR      = (0, 0, 255)


def resolve_params(overrides=None):
    """Return a validated copy of DEFAULT_PARAMS updated with ``overrides``.

    Raises ConfigError for unknown keys or out-of-range values.
    """
    params = dict(DEFAULT_PARAMS)
    for k, v in (overrides or {}).items():
        if k not in DEFAULT_PARAMS:
            raise ConfigError(f"unknown parameter {k!r}")
        params[k] = v
    for k in _POSITIVE:
        if not params[k] > 0:
            raise ConfigError(f"{k} must be > 0, got {params[k]!r}")
    for k in _NON_NEGATIVE:
        if params[k] < 0:
            raise ConfigError(f"{k} must be >= 0, got {params[k]!r}")
    return params
