"""Limiting-factor attribution, severity buckets, and per-factor breakdowns."""

from __future__ import annotations

import logging
from typing import Optional

from .models import (
    TIE_BREAK_ORDER,
    EnvironmentalFactors,
    Factor,
    FactorAssessment,
    FactorBreakdown,
    FactorStatus,
    LimitingFactorReport,
    NormalizedFactors,
    Severity,
    TemperatureDirection,
)
from .params import DEFAULT_PARAMS, ModelParams

logger = logging.getLogger(__name__)

SEVERE_BELOW = 0.3
MODERATE_BELOW = 0.6
NEAR_OPTIMAL_ABOVE = 0.8

LIMITING_EXPLANATIONS: dict[tuple[Factor, Severity], str] = {
    (Factor.LIGHT, Severity.SEVERE): (
        "Light is severely limiting: insufficient photon capture halts light-dependent reactions, "
        "so ATP and NADPH production stalls regardless of the other factors."
    ),
    (Factor.LIGHT, Severity.MODERATE): (
        "Light is limiting: photosystems I and II are under-supplied with photons, "
        "slowing electron transport and the Calvin cycle downstream."
    ),
    (Factor.LIGHT, Severity.MILD): (
        "Light is the binding factor but close to saturation; more light would give a small gain."
    ),
    (Factor.CO2, Severity.SEVERE): (
        "CO2 is severely limiting: RuBisCO is starved of substrate and carbon fixation in the "
        "Calvin cycle nearly stops."
    ),
    (Factor.CO2, Severity.MODERATE): (
        "CO2 is limiting: the Calvin cycle is substrate-limited and RuBisCO cannot fix carbon "
        "faster than CO2 arrives."
    ),
    (Factor.CO2, Severity.MILD): (
        "CO2 is the binding factor but near saturation; enrichment would give a small gain."
    ),
}

TEMPERATURE_EXPLANATIONS: dict[tuple[Optional[TemperatureDirection], Severity], str] = {
    (TemperatureDirection.COLD, Severity.SEVERE): (
        "Temperature is severely limiting: enzymes such as RuBisCO and ATP synthase are nearly "
        "inactive in the cold and biochemical reactions crawl."
    ),
    (TemperatureDirection.COLD, Severity.MODERATE): (
        "Temperature is limiting: low kinetic energy reduces molecular collisions and slows "
        "enzyme-driven reactions."
    ),
    (TemperatureDirection.COLD, Severity.MILD): (
        "Temperature is slightly below optimum; enzyme activity is a little reduced."
    ),
    (TemperatureDirection.HOT, Severity.SEVERE): (
        "Temperature is severely limiting: excessive heat denatures photosynthetic enzymes and "
        "damages their catalytic sites."
    ),
    (TemperatureDirection.HOT, Severity.MODERATE): (
        "Temperature is limiting: heat is destabilising enzyme structure and efficiency drops as "
        "proteins approach denaturation."
    ),
    (TemperatureDirection.HOT, Severity.MILD): (
        "Temperature is slightly above optimum; enzymes are starting to lose efficiency."
    ),
    (None, Severity.SEVERE): (
        "Temperature is severely limiting: enzyme activity is far from its optimum."
    ),
    (None, Severity.MODERATE): (
        "Temperature is limiting: enzyme activity deviates noticeably from its optimum."
    ),
    (None, Severity.MILD): (
        "Temperature is the binding factor but enzymes are working close to peak efficiency."
    ),
}

ADEQUATE_EXPLANATIONS: dict[Factor, str] = {
    Factor.LIGHT: (
        "Light intensity is adequate. Photosystems I and II receive enough photons to drive "
        "electron transport and ATP/NADPH production."
    ),
    Factor.CO2: (
        "CO2 concentration is adequate. The Calvin cycle has enough substrate for RuBisCO to fix "
        "carbon efficiently."
    ),
    Factor.TEMPERATURE: (
        "Temperature is optimal. Enzymes work at peak efficiency with intact protein structures."
    ),
}

# (optimal_above, suboptimal_above) per factor.
STATUS_THRESHOLDS: dict[Factor, tuple[float, float]] = {
    Factor.LIGHT: (0.7, 0.4),
    Factor.CO2: (0.7, 0.4),
    Factor.TEMPERATURE: (0.85, 0.5),
}


def classify_severity(value: float) -> Severity:
    if value < SEVERE_BELOW:
        return Severity.SEVERE
    if value < MODERATE_BELOW:
        return Severity.MODERATE
    return Severity.MILD


def select_limiting_factor(normalized: NormalizedFactors) -> Factor:
    """Return the factor holding the minimum, preferring temperature, then light, then CO2."""

    minimum = normalized.minimum
    for factor in TIE_BREAK_ORDER:
        if normalized.get(factor) == minimum:
            return factor
    raise ValueError(f"No factor matches minimum {minimum!r}")


def temperature_direction(
    raw: Optional[EnvironmentalFactors], params: ModelParams = DEFAULT_PARAMS
) -> Optional[TemperatureDirection]:
    if raw is None or raw.temperature == params.optimal_temperature:
        return None
    if raw.temperature < params.optimal_temperature:
        return TemperatureDirection.COLD
    return TemperatureDirection.HOT


def identify_limiting_factor(
    normalized: NormalizedFactors,
    raw: Optional[EnvironmentalFactors] = None,
    *,
    params: ModelParams = DEFAULT_PARAMS,
) -> LimitingFactorReport:
    """Identify the binding factor and explain it.

    The temperature curve is symmetric, so cold and hot stress are told apart
    from the raw reading when one is supplied.
    """

    factor = select_limiting_factor(normalized)
    value = normalized.minimum
    severity = classify_severity(value)
    direction = None
    if factor is Factor.TEMPERATURE:
        direction = temperature_direction(raw, params)
        explanation = TEMPERATURE_EXPLANATIONS[(direction, severity)]
    else:
        explanation = LIMITING_EXPLANATIONS[(factor, severity)]
    logger.debug("Limiting factor %s (%s) at %.3f", factor.value, severity.value, value)
    return LimitingFactorReport(
        factor=factor,
        severity=severity,
        value=value,
        explanation=explanation,
        temperature_direction=direction,
    )


def _assess(
    factor: Factor,
    normalized: NormalizedFactors,
    raw: EnvironmentalFactors,
    params: ModelParams,
) -> FactorAssessment:
    value = normalized.get(factor)
    optimal_above, suboptimal_above = STATUS_THRESHOLDS[factor]
    if value > optimal_above:
        status = FactorStatus.OPTIMAL
    elif value > suboptimal_above:
        status = FactorStatus.SUBOPTIMAL
    else:
        status = FactorStatus.LIMITING

    if status is FactorStatus.OPTIMAL:
        explanation = ADEQUATE_EXPLANATIONS[factor]
    elif factor is Factor.TEMPERATURE:
        explanation = TEMPERATURE_EXPLANATIONS[(temperature_direction(raw, params), classify_severity(value))]
    else:
        explanation = LIMITING_EXPLANATIONS[(factor, classify_severity(value))]
    return FactorAssessment(
        factor=factor,
        value=value,
        raw_value=raw.get(factor),
        status=status,
        explanation=explanation,
    )


def analyze_all_factors(
    normalized: NormalizedFactors,
    raw: EnvironmentalFactors,
    *,
    params: ModelParams = DEFAULT_PARAMS,
) -> FactorBreakdown:
    limiting = identify_limiting_factor(normalized, raw, params=params)
    assessments = tuple(_assess(factor, normalized, raw, params) for factor in Factor)
    efficiency = normalized.minimum
    summary = f"Photosynthesis is operating at {round(efficiency * 100)}% efficiency. {limiting.explanation}"
    return FactorBreakdown(
        assessments=assessments,
        limiting=limiting,
        overall_efficiency=efficiency,
        summary=summary,
    )


def is_near_optimal(normalized: NormalizedFactors) -> bool:
    return all(value > NEAR_OPTIMAL_ABOVE for value in normalized.as_dict().values())
