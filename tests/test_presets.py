import pytest

from photosynth import SCENARIO_PRESETS, Factor, TemperatureDirection, compute_rate, get_preset, identify_limiting_factor


def test_catalog_contents():
    assert set(SCENARIO_PRESETS) == {"optimal", "climate2050", "drought", "greenhouse", "tropical_rainforest"}
    greenhouse = get_preset("greenhouse")
    assert greenhouse.factors.co2 == 600.0
    assert greenhouse.name == "Greenhouse Farming"


def test_catalog_is_read_only():
    with pytest.raises(TypeError):
        SCENARIO_PRESETS["custom"] = SCENARIO_PRESETS["optimal"]
    with pytest.raises(AttributeError):
        SCENARIO_PRESETS["optimal"].factors.light = 0


def test_unknown_preset():
    with pytest.raises(KeyError, match="desert"):
        get_preset("desert")


def test_drought_is_limited_by_heat():
    factors = get_preset("drought").factors
    report = identify_limiting_factor(compute_rate(factors).normalized, factors)
    assert report.factor is Factor.TEMPERATURE
    assert report.temperature_direction is TemperatureDirection.HOT
