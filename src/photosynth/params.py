"""Tunable constants for the limiting-factor model."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from math import isinf

from .checks import require_number

# Divisors and curve scales; zero or negative values make the curves undefined.
POSITIVE_PARAMS = frozenset(
    {
        "optimal_light",
        "light_half_saturation_fraction",
        "max_light",
        "light_ceiling",
        "optimal_co2",
        "co2_ceiling",
        "temperature_spread",
    }
)


@dataclass(frozen=True)
class ModelParams:
    optimal_light: float = 800.0
    light_half_saturation_fraction: float = 0.3
    max_light: float = 1000.0
    light_ceiling: float = 10000.0

    optimal_co2: float = 400.0
    co2_ceiling: float = 10000.0

    optimal_temperature: float = 25.0
    temperature_spread: float = 8.0
    min_temperature: float = 0.0
    max_temperature: float = 45.0
    temperature_floor: float = 0.05
    temperature_lower_bound: float = -60.0
    temperature_upper_bound: float = 80.0

    reference_daily_growth: float = 0.05
    stress_threshold: float = 0.4
    stress_penalty_coefficient: float = 0.02
    max_stress_penalty: float = 0.3
    stress_penalty_scale: float = 0.01
    stress_recovery_step: float = 0.1
    default_initial_biomass: float = 100.0

    def __post_init__(self) -> None:
        for item in fields(self):
            value = require_number(getattr(self, item.name), item.name)
            if isinf(value):
                raise ValueError(f"{item.name} must be finite")
            if item.name in POSITIVE_PARAMS and value <= 0:
                raise ValueError(f"{item.name} must be positive, got {value}")
            object.__setattr__(self, item.name, value)
        if self.min_temperature >= self.max_temperature:
            raise ValueError("min_temperature must be below max_temperature")

    @property
    def light_half_saturation(self) -> float:
        return self.optimal_light * self.light_half_saturation_fraction


DEFAULT_PARAMS = ModelParams()

PARAM_NAMES = frozenset(item.name for item in fields(ModelParams))


def params_from_overrides(overrides: dict[str, float] | None, base: ModelParams = DEFAULT_PARAMS) -> ModelParams:
    """Return ``base`` with caller overrides applied.

    Unknown names and values that would leave a response curve undefined
    raise ``ValueError``; non-numeric values raise ``TypeError``.
    """

    if not overrides:
        return base
    unknown = sorted(set(overrides) - PARAM_NAMES)
    if unknown:
        raise ValueError(f"Unknown model parameter(s): {', '.join(unknown)}")
    return replace(base, **{key: require_number(value, key) for key, value in overrides.items()})
