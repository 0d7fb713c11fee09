"""Corrective actions for the limiting factor and validation of proposed changes."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from .models import (
    TIE_BREAK_ORDER,
    ChangeValidation,
    EnvironmentalFactors,
    Factor,
    NormalizedFactors,
    Priority,
    PriorityAction,
    Recommendation,
    as_factor,
    require_number,
)
from .params import DEFAULT_PARAMS, ModelParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Tier:
    """A raw-value band; readings below ``upper`` fall into it."""

    upper: float
    target: float
    priority: Priority
    template: str
    warning: Optional[str] = None


LIGHT_TIERS: tuple[Tier, ...] = (
    Tier(
        upper=200.0,
        target=600.0,
        priority=Priority.CRITICAL,
        template=(
            "Increase light intensity by {delta} µmol/m²/s to about {target} µmol/m²/s. "
            "Move the plant closer to a light source or add supplemental grow lights."
        ),
        warning="Light is far below the level needed to drive the light-dependent reactions.",
    ),
    Tier(
        upper=500.0,
        target=700.0,
        priority=Priority.HIGH,
        template=(
            "Increase light intensity by {delta} µmol/m²/s to about {target} µmol/m²/s. "
            "Add more lighting or extend the exposure duration."
        ),
    ),
    Tier(
        upper=800.0,
        target=850.0,
        priority=Priority.MEDIUM,
        template=(
            "Light is approaching optimal levels. Raise it by {delta} µmol/m²/s to about "
            "{target} µmol/m²/s to maximize the light-dependent reactions."
        ),
    ),
)

CO2_TIERS: tuple[Tier, ...] = (
    Tier(
        upper=200.0,
        target=500.0,
        priority=Priority.CRITICAL,
        template=(
            "Increase CO₂ concentration by {delta} ppm to about {target} ppm. "
            "Ensure adequate ventilation or add CO₂ supplementation."
        ),
        warning="CO₂ is below the level RuBisCO needs for sustained carbon fixation.",
    ),
    Tier(
        upper=400.0,
        target=450.0,
        priority=Priority.HIGH,
        template=(
            "Increase CO₂ by {delta} ppm to about {target} ppm, at or above atmospheric levels. "
            "Improve air circulation or add CO₂ enrichment."
        ),
    ),
    Tier(
        upper=600.0,
        target=700.0,
        priority=Priority.MEDIUM,
        template=(
            "CO₂ is near-optimal. Enrich by {delta} ppm to about {target} ppm for enhanced growth, "
            "as is common in greenhouses."
        ),
    ),
)

SATURATED_ACTIONS: dict[Factor, tuple[str, str]] = {
    Factor.LIGHT: (
        "Light intensity is already optimal. Further increases will not improve the photosynthesis rate.",
        "Light is not the limiting factor. Focus on other environmental conditions.",
    ),
    Factor.CO2: (
        "CO₂ concentration is already optimal. Further increases will have minimal effect.",
        "CO₂ is not the limiting factor. Check temperature and light conditions.",
    ),
    Factor.TEMPERATURE: (
        "Temperature is in the optimal range (20-30°C). Maintain current conditions.",
        "Temperature is not the limiting factor. Focus on light or CO₂.",
    ),
}

COLD_CRITICAL_BELOW = 15.0
COLD_BELOW = 20.0
HOT_CRITICAL_ABOVE = 35.0
HOT_ABOVE = 30.0


def _format_amount(value: float) -> str:
    return f"{round(value, 1):g}"


def _recommend_monotone(factor: Factor, value: float, tiers: tuple[Tier, ...]) -> Recommendation:
    for tier in tiers:
        if value < tier.upper:
            action = tier.template.format(
                delta=_format_amount(tier.target - value),
                target=_format_amount(tier.target),
            )
            return Recommendation(
                action=action,
                target_value=tier.target,
                priority=tier.priority,
                applies_to=factor,
                warning=tier.warning,
            )
    action, warning = SATURATED_ACTIONS[factor]
    return Recommendation(action=action, target_value=None, priority=Priority.LOW, applies_to=factor, warning=warning)


def _recommend_temperature(value: float) -> Recommendation:
    if value < COLD_CRITICAL_BELOW:
        target = 23.0
        return Recommendation(
            action=(
                f"Increase temperature by {_format_amount(target - value)}°C to about {_format_amount(target)}°C. "
                "Enzymes are too cold to function efficiently."
            ),
            target_value=target,
            priority=Priority.CRITICAL,
            applies_to=Factor.TEMPERATURE,
            warning="Below 15°C photosynthetic enzymes work very slowly. Heating is critical.",
        )
    if value < COLD_BELOW:
        target = 25.0
        return Recommendation(
            action=(
                f"Increase temperature by {_format_amount(target - value)}°C to about {_format_amount(target)}°C "
                "for peak photosynthetic efficiency."
            ),
            target_value=target,
            priority=Priority.HIGH,
            applies_to=Factor.TEMPERATURE,
        )
    if value > HOT_CRITICAL_ABOVE:
        target = 25.0
        return Recommendation(
            action=(
                f"Decrease temperature by {_format_amount(value - target)}°C to about {_format_amount(target)}°C. "
                "Enzymes are at risk of denaturation."
            ),
            target_value=target,
            priority=Priority.CRITICAL,
            applies_to=Factor.TEMPERATURE,
            warning="High temperatures can permanently damage photosynthetic machinery. Cooling is critical.",
        )
    if value > HOT_ABOVE:
        target = 25.0
        return Recommendation(
            action=(
                f"Decrease temperature by {_format_amount(value - target)}°C to about {_format_amount(target)}°C. "
                "Efficiency drops as enzymes approach denaturation."
            ),
            target_value=target,
            priority=Priority.HIGH,
            applies_to=Factor.TEMPERATURE,
        )
    action, warning = SATURATED_ACTIONS[Factor.TEMPERATURE]
    return Recommendation(
        action=action,
        target_value=None,
        priority=Priority.LOW,
        applies_to=Factor.TEMPERATURE,
        warning=warning,
    )


def recommend(limiting_factor: Union[Factor, str], raw_factors: EnvironmentalFactors) -> Recommendation:
    """Pick the tiered corrective action for ``limiting_factor`` at the current raw readings."""

    factor = as_factor(limiting_factor)
    if factor is Factor.LIGHT:
        recommendation = _recommend_monotone(factor, raw_factors.light, LIGHT_TIERS)
    elif factor is Factor.CO2:
        recommendation = _recommend_monotone(factor, raw_factors.co2, CO2_TIERS)
    else:
        recommendation = _recommend_temperature(raw_factors.temperature)
    logger.debug("Recommendation for %s: %s", factor.value, recommendation.priority.value)
    return recommendation


def validate_change(
    factor: Union[Factor, str],
    proposed_value: float,
    current_factors: EnvironmentalFactors,
    current_limiting_factor: Union[Factor, str],
    *,
    params: ModelParams = DEFAULT_PARAMS,
) -> ChangeValidation:
    """Tell whether moving ``factor`` to ``proposed_value`` can raise the rate."""

    changed = as_factor(factor)
    limiting = as_factor(current_limiting_factor)
    proposed = require_number(proposed_value, "proposed_value")

    if changed is not limiting:
        return ChangeValidation(
            will_improve=False,
            reason=(
                f"Changing {changed.value} will not improve photosynthesis because {limiting.value} is the "
                "limiting factor. Under the Law of Limiting Factors an already-sufficient factor cannot "
                "raise the rate; address the weakest link first."
            ),
        )

    current = current_factors.get(changed)
    if changed is Factor.TEMPERATURE:
        optimal = params.optimal_temperature
        if abs(proposed - optimal) < abs(current - optimal):
            return ChangeValidation(
                will_improve=True,
                reason=(
                    f"Moving temperature closer to the optimum ({_format_amount(optimal)}°C) improves enzyme "
                    "efficiency and increases the photosynthesis rate."
                ),
            )
        return ChangeValidation(
            will_improve=False,
            reason=(
                f"This temperature change does not move closer to the optimum. Move toward "
                f"{_format_amount(optimal)}°C instead."
            ),
        )

    if proposed > current:
        supply = "photon energy" if changed is Factor.LIGHT else "substrate for carbon fixation"
        return ChangeValidation(
            will_improve=True,
            reason=f"Increasing {changed.value} provides more {supply}, directly improving the photosynthesis rate.",
        )
    return ChangeValidation(
        will_improve=False,
        reason=(
            f"Not increasing {changed.value} cannot relieve the current limitation; "
            "the limiting factor needs an increase."
        ),
    )


def generate_priority_actions(normalized: NormalizedFactors, raw_factors: EnvironmentalFactors) -> list[PriorityAction]:
    """Rank every factor from most to least limiting with its recommendation."""

    ordered = sorted(Factor, key=lambda factor: (normalized.get(factor), TIE_BREAK_ORDER.index(factor)))
    return [
        PriorityAction(
            rank=rank,
            factor=factor,
            normalized_value=normalized.get(factor),
            raw_value=raw_factors.get(factor),
            recommendation=recommend(factor, raw_factors),
        )
        for rank, factor in enumerate(ordered, start=1)
    ]
