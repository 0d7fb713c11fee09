"""Factor response curves and the minimum-of-factors rate law."""

from __future__ import annotations

import logging
from math import exp

from .models import EnvironmentalFactors, NormalizedFactors, RateResult, require_number
from .params import DEFAULT_PARAMS, ModelParams

logger = logging.getLogger(__name__)


def _clamp(value: float, lower: float, upper: float, name: str) -> float:
    if value < lower or value > upper:
        clamped = min(max(value, lower), upper)
        logger.debug("Clamped %s reading %s to %s", name, value, clamped)
        return clamped
    return value


def normalize_light(light: float, params: ModelParams = DEFAULT_PARAMS) -> float:
    """Saturating light response; 0 at darkness, approaching 1 well above the optimum."""

    value = _clamp(require_number(light, "light"), 0.0, params.light_ceiling, "light")
    if value <= 0:
        return 0.0
    return min(value / (value + params.light_half_saturation), 1.0)


def normalize_co2(co2: float, params: ModelParams = DEFAULT_PARAMS) -> float:
    """Linear ramp to the optimum combined with exponential saturation."""

    value = _clamp(require_number(co2, "co2"), 0.0, params.co2_ceiling, "co2")
    if value <= 0:
        return 0.0
    ratio = value / params.optimal_co2
    return min(min(ratio, 1.0) * (1.0 - exp(-ratio)), 1.0)


def normalize_temperature(temperature: float, params: ModelParams = DEFAULT_PARAMS) -> float:
    """Bell curve around the optimum, pinned to a small positive floor outside the viable range."""

    value = _clamp(
        require_number(temperature, "temperature"),
        params.temperature_lower_bound,
        params.temperature_upper_bound,
        "temperature",
    )
    if value <= params.min_temperature or value >= params.max_temperature:
        return params.temperature_floor
    spread = params.temperature_spread
    return min(exp(-((value - params.optimal_temperature) ** 2) / (2.0 * spread * spread)), 1.0)


def normalize_factors(factors: EnvironmentalFactors, params: ModelParams = DEFAULT_PARAMS) -> NormalizedFactors:
    return NormalizedFactors(
        light=normalize_light(factors.light, params),
        co2=normalize_co2(factors.co2, params),
        temperature=normalize_temperature(factors.temperature, params),
    )


def compute_rate(factors: EnvironmentalFactors, *, params: ModelParams = DEFAULT_PARAMS) -> RateResult:
    """Blackman's law: the scarcest normalized factor bounds the whole process."""

    normalized = normalize_factors(factors, params)
    return RateResult(rate=normalized.minimum, normalized=normalized)


def get_optimal_values(params: ModelParams = DEFAULT_PARAMS) -> dict[str, float]:
    return {
        "light": params.optimal_light,
        "co2": params.optimal_co2,
        "temperature": params.optimal_temperature,
    }


def get_temperature_range(params: ModelParams = DEFAULT_PARAMS) -> dict[str, float]:
    return {
        "min": params.min_temperature,
        "optimal": params.optimal_temperature,
        "max": params.max_temperature,
    }
