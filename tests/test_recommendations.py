import pytest

from photosynth import (
    EnvironmentalFactors,
    Factor,
    NormalizedFactors,
    Priority,
    compute_rate,
    generate_priority_actions,
    recommend,
    validate_change,
)


def _factors(light=800.0, co2=400.0, temperature=25.0):
    return EnvironmentalFactors(light=light, co2=co2, temperature=temperature)


class TestRecommend:
    """Tiered actions keyed on raw readings."""

    @pytest.mark.parametrize(
        "light, priority, target, delta",
        [
            (100, Priority.CRITICAL, 600.0, "500"),
            (200, Priority.HIGH, 700.0, "500"),
            (300, Priority.HIGH, 700.0, "400"),
            (600, Priority.MEDIUM, 850.0, "250"),
        ],
    )
    def test_light_tiers(self, light, priority, target, delta):
        recommendation = recommend("light", _factors(light=light))
        assert recommendation.priority is priority
        assert recommendation.target_value == target
        assert recommendation.applies_to is Factor.LIGHT
        assert f"by {delta} " in recommendation.action

    def test_saturated_light_has_no_target(self):
        recommendation = recommend(Factor.LIGHT, _factors(light=900))
        assert recommendation.priority is Priority.LOW
        assert recommendation.target_value is None
        assert recommendation.warning is not None

    @pytest.mark.parametrize(
        "co2, priority, target, delta",
        [
            (150, Priority.CRITICAL, 500.0, "350"),
            (300, Priority.HIGH, 450.0, "150"),
            (500, Priority.MEDIUM, 700.0, "200"),
        ],
    )
    def test_co2_tiers(self, co2, priority, target, delta):
        recommendation = recommend("CO2", _factors(co2=co2))
        assert recommendation.priority is priority
        assert recommendation.target_value == target
        assert recommendation.applies_to is Factor.CO2
        assert f"by {delta} ppm" in recommendation.action

    def test_saturated_co2(self):
        recommendation = recommend("co2", _factors(co2=800))
        assert recommendation.priority is Priority.LOW
        assert recommendation.target_value is None

    @pytest.mark.parametrize(
        "temperature, priority, target, verb, delta",
        [
            (10, Priority.CRITICAL, 23.0, "Increase", "13"),
            (15, Priority.HIGH, 25.0, "Increase", "10"),
            (18, Priority.HIGH, 25.0, "Increase", "7"),
            (32, Priority.HIGH, 25.0, "Decrease", "7"),
            (35, Priority.HIGH, 25.0, "Decrease", "10"),
            (40, Priority.CRITICAL, 25.0, "Decrease", "15"),
        ],
    )
    def test_temperature_tiers(self, temperature, priority, target, verb, delta):
        recommendation = recommend("temperature", _factors(temperature=temperature))
        assert recommendation.priority is priority
        assert recommendation.target_value == target
        assert recommendation.action.startswith(f"{verb} temperature by {delta}°C")

    def test_comfortable_temperature_is_maintained(self):
        recommendation = recommend("temperature", _factors(temperature=25))
        assert recommendation.priority is Priority.LOW
        assert recommendation.target_value is None
        assert "Maintain" in recommendation.action

    def test_critical_tiers_carry_warnings(self):
        assert recommend("temperature", _factors(temperature=5)).warning
        assert recommend("temperature", _factors(temperature=42)).warning
        assert recommend("light", _factors(light=50)).warning

    def test_unknown_factor_is_rejected(self):
        with pytest.raises(ValueError, match="water"):
            recommend("water", _factors())


class TestValidateChange:
    def test_changing_a_sufficient_factor_cannot_help(self):
        result = validate_change("co2", 600, _factors(light=100, co2=400), "light")
        assert result.will_improve is False
        assert "light is the limiting factor" in result.reason

    def test_increasing_limiting_light_helps(self):
        current = _factors(light=100, co2=400)
        assert validate_change("light", 300, current, "light").will_improve is True
        assert validate_change("light", 100, current, "light").will_improve is False
        assert validate_change("light", 50, current, "light").will_improve is False

    def test_increasing_limiting_co2_helps(self):
        current = _factors(light=1500, co2=150)
        assert validate_change(Factor.CO2, 400, current, Factor.CO2).will_improve is True
        assert validate_change(Factor.CO2, 100, current, Factor.CO2).will_improve is False

    def test_temperature_improves_only_when_closer_to_optimum(self):
        cold = _factors(temperature=10)
        assert validate_change("temperature", 20, cold, "temperature").will_improve is True
        assert validate_change("temperature", 5, cold, "temperature").will_improve is False
        assert validate_change("temperature", 40, cold, "temperature").will_improve is False

        hot = _factors(temperature=35)
        assert validate_change("temperature", 30, hot, "temperature").will_improve is True
        assert validate_change("temperature", 38, hot, "temperature").will_improve is False

    @pytest.mark.parametrize("current, proposed", [(3, 5), (44.5, 42), (1, 2)])
    def test_warming_near_the_range_edge_raises_rate(self, current, proposed):
        factors = _factors(light=2000, co2=2000, temperature=current)
        validation = validate_change("temperature", proposed, factors, "temperature")
        assert validation.will_improve is True
        assert compute_rate(factors.with_value("temperature", proposed)).rate > compute_rate(factors).rate

    def test_proposed_value_must_be_numeric(self):
        with pytest.raises(TypeError):
            validate_change("light", "more", _factors(), "light")

    def test_validation_agrees_with_rate(self):
        current = _factors(light=100, co2=800)
        proposed = current.with_value("light", 400)
        assert validate_change("light", 400, current, "light").will_improve
        assert compute_rate(proposed).rate > compute_rate(current).rate


def test_priority_actions_are_ranked_from_most_limiting():
    raw = _factors(light=100, co2=800, temperature=25)
    actions = generate_priority_actions(compute_rate(raw).normalized, raw)
    assert [action.factor for action in actions] == [Factor.LIGHT, Factor.CO2, Factor.TEMPERATURE]
    assert [action.rank for action in actions] == [1, 2, 3]
    assert actions[0].recommendation.priority is Priority.CRITICAL
    assert actions[0].raw_value == 100.0


def test_priority_actions_break_ties_in_fixed_order():
    actions = generate_priority_actions(NormalizedFactors(light=0.5, co2=0.5, temperature=0.5), _factors())
    assert [action.factor for action in actions] == [Factor.TEMPERATURE, Factor.LIGHT, Factor.CO2]
