import pytest

from settings import DEFAULT_PARAMS, ConfigError, resolve_params


def test_defaults_are_copied():
    params = resolve_params()
    assert params == DEFAULT_PARAMS
    params["ROAD_WIDTH"] = 1
    assert DEFAULT_PARAMS["ROAD_WIDTH"] == 100


def test_overrides_apply():
    params = resolve_params({"TREE_RADIUS": 50, "BUILDING_SPACING": 0})
    assert params["TREE_RADIUS"] == 50
    assert params["BUILDING_SPACING"] == 0


def test_unknown_key():
    with pytest.raises(ConfigError, match="unknown parameter"):
        resolve_params({"ROAD_WIDHT": 10})


@pytest.mark.parametrize("key, value", [
    ("ROAD_WIDTH", 0),
    ("ROAD_ROUNDNESS", 0),
    ("GUIDE_ROUNDNESS", -2),
    ("TREE_COUNT_SCALE_FACTOR", 0),
    ("BUILDING_SPACING", -1),
])
def test_out_of_range(key, value):
    with pytest.raises(ConfigError, match=key):
        resolve_params({key: value})


def test_config_error_is_value_error():
    assert issubclass(ConfigError, ValueError)
