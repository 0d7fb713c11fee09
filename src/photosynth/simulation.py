"""Day-by-day growth and stress integration over the rate law."""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from math import pi, sin
from numbers import Integral
from typing import Callable, Mapping, Optional, Union

from .limiting import select_limiting_factor
from .models import (
    ComparisonReport,
    DayRecord,
    EnvironmentalFactors,
    GrowthTrajectory,
    SummaryStatistics,
    require_number,
)
from .params import DEFAULT_PARAMS, ModelParams
from .physiology import compute_rate

logger = logging.getLogger(__name__)

ENRICHED_CO2 = 500.0

ConditionSource = Union[EnvironmentalFactors, Mapping[str, float]]
DayConditionFn = Callable[[int], ConditionSource]


@dataclass(frozen=True)
class SimulationState:
    biomass: float
    stress: float = 0.0


def _require_days(days: object) -> int:
    if isinstance(days, bool) or not isinstance(days, Integral):
        raise TypeError(f"days must be an integer, got {type(days).__name__}")
    return max(0, int(days))


def _initial_state(initial_biomass: Optional[float], params: ModelParams) -> SimulationState:
    if initial_biomass is None:
        initial_biomass = params.default_initial_biomass
    return SimulationState(biomass=max(0.0, require_number(initial_biomass, "initial_biomass")))


def _coerce_conditions(value: ConditionSource) -> EnvironmentalFactors:
    if isinstance(value, EnvironmentalFactors):
        return value
    if isinstance(value, Mapping):
        return EnvironmentalFactors(light=value["light"], co2=value["co2"], temperature=value["temperature"])
    raise TypeError(f"Day conditions must be EnvironmentalFactors or a mapping, got {type(value).__name__}")


def advance_day(
    state: SimulationState,
    day: int,
    factors: EnvironmentalFactors,
    params: ModelParams = DEFAULT_PARAMS,
) -> tuple[SimulationState, DayRecord]:
    """Apply one day of growth, stress, and recovery and return the new state with its record."""

    result = compute_rate(factors, params=params)
    rate = result.rate

    biomass_gain = state.biomass * rate * params.reference_daily_growth
    biomass = state.biomass + biomass_gain
    stress = state.stress

    if rate < params.stress_threshold:
        stress += params.stress_threshold - rate
        penalty = min(stress * params.stress_penalty_coefficient, params.max_stress_penalty)
        biomass -= biomass * penalty * params.stress_penalty_scale
    else:
        stress = max(0.0, stress - params.stress_recovery_step)

    record = DayRecord(
        day=day,
        rate=round(rate, 3),
        biomass=round(biomass, 2),
        daily_gain=round(biomass_gain, 2),
        limiting_factor=select_limiting_factor(result.normalized),
        stress_level=round(stress, 2),
        efficiency_percent=int(round(rate * 100)),
        conditions=factors,
    )
    return SimulationState(biomass=biomass, stress=stress), record


def simulate_variable_conditions(
    day_condition_fn: DayConditionFn,
    days: int,
    initial_biomass: Optional[float] = None,
    *,
    params: ModelParams = DEFAULT_PARAMS,
) -> GrowthTrajectory:
    """Integrate growth with conditions supplied per 1-based day index."""

    total_days = _require_days(days)
    state = _initial_state(initial_biomass, params)
    start_biomass = state.biomass
    records: list[DayRecord] = []
    for day in range(1, total_days + 1):
        state, record = advance_day(state, day, _coerce_conditions(day_condition_fn(day)), params)
        records.append(record)
    logger.debug(
        "Simulated %d day(s): biomass %.2f -> %.2f, stress %.2f",
        total_days,
        start_biomass,
        state.biomass,
        state.stress,
    )
    return GrowthTrajectory(initial_biomass=start_biomass, records=tuple(records))


def simulate_growth(
    factors: EnvironmentalFactors,
    days: int,
    initial_biomass: Optional[float] = None,
    *,
    params: ModelParams = DEFAULT_PARAMS,
) -> GrowthTrajectory:
    conditions = _coerce_conditions(factors)
    return simulate_variable_conditions(lambda _day: conditions, days, initial_biomass, params=params)


def simulate_optimal_growth(
    days: int,
    initial_biomass: Optional[float] = None,
    *,
    params: ModelParams = DEFAULT_PARAMS,
) -> GrowthTrajectory:
    """Theoretical best trajectory: optimal light and temperature with enriched CO2."""

    conditions = EnvironmentalFactors(
        light=params.optimal_light,
        co2=ENRICHED_CO2,
        temperature=params.optimal_temperature,
    )
    return simulate_growth(conditions, days, initial_biomass, params=params)


def seasonal_conditions(
    base: EnvironmentalFactors,
    days_per_cycle: int = 365,
    temperature_amplitude: float = 10.0,
    light_amplitude: float = 0.0,
) -> Callable[[int], EnvironmentalFactors]:
    """Build a day-condition function that swings temperature and light sinusoidally."""

    if days_per_cycle <= 0:
        raise ValueError("days_per_cycle must be positive")
    temperature_amplitude = require_number(temperature_amplitude, "temperature_amplitude")
    light_amplitude = require_number(light_amplitude, "light_amplitude")

    def conditions_for(day: int) -> EnvironmentalFactors:
        phase = sin((2.0 * pi * day) / days_per_cycle)
        return EnvironmentalFactors(
            light=max(0.0, base.light + light_amplitude * phase),
            co2=base.co2,
            temperature=base.temperature + temperature_amplitude * phase,
        )

    return conditions_for


def analyze_trajectory(trajectory: GrowthTrajectory) -> Optional[SummaryStatistics]:
    """Summarize a finished run; returns None when no day was simulated."""

    records = trajectory.records
    if not records:
        return None

    rates = [record.rate for record in records]
    average_rate = sum(rates) / len(rates)

    # Counter keeps first-seen order, so max() resolves ties by first occurrence.
    counts = Counter(record.limiting_factor for record in records)
    most_common = max(counts, key=counts.__getitem__)

    initial = trajectory.initial_biomass
    final = records[-1].biomass
    total_growth = final - initial
    growth_percent = (total_growth / initial) * 100 if initial > 0 else 0.0

    return SummaryStatistics(
        days=len(records),
        average_efficiency=int(round(average_rate * 100)),
        min_efficiency=int(round(min(rates) * 100)),
        max_efficiency=int(round(max(rates) * 100)),
        initial_biomass=round(initial, 2),
        final_biomass=round(final, 2),
        total_growth=round(total_growth, 2),
        growth_percent=round(growth_percent, 1),
        most_common_limiting_factor=most_common,
        limiting_factor_distribution=dict(counts),
    )


def compare_scenarios(
    base_factors: EnvironmentalFactors,
    alt_factors: EnvironmentalFactors,
    days: int,
    initial_biomass: Optional[float] = None,
    *,
    params: ModelParams = DEFAULT_PARAMS,
) -> ComparisonReport:
    """Run two independent trajectories and report which ends with more biomass."""

    baseline = simulate_growth(base_factors, days, initial_biomass, params=params)
    alternative = simulate_growth(alt_factors, days, initial_biomass, params=params)

    base_final = baseline.final_biomass
    alt_final = alternative.final_biomass
    difference = alt_final - base_final
    percent = (difference / base_final) * 100 if base_final > 0 else 0.0

    if difference > 0:
        better: Optional[str] = "alternative"
    elif difference < 0:
        better = "baseline"
    else:
        better = None
    logger.debug("Compared scenarios over %d day(s): difference %.2f (%s)", len(baseline), difference, better)

    return ComparisonReport(
        baseline=baseline,
        alternative=alternative,
        baseline_final_biomass=base_final,
        alternative_final_biomass=alt_final,
        biomass_difference=round(difference, 2),
        percent_improvement=round(percent, 1),
        better_scenario=better,
    )
