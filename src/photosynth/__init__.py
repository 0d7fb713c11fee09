"""Limiting-factor photosynthesis and growth model."""

from .limiting import analyze_all_factors, identify_limiting_factor, is_near_optimal
from .models import (
    ChangeValidation,
    ComparisonReport,
    DayRecord,
    EnvironmentalFactors,
    Factor,
    FactorAssessment,
    FactorBreakdown,
    FactorStatus,
    GrowthTrajectory,
    LimitingFactorReport,
    NormalizedFactors,
    Priority,
    PriorityAction,
    RateResult,
    Recommendation,
    ScenarioPreset,
    Severity,
    SummaryStatistics,
    TemperatureDirection,
)
from .params import DEFAULT_PARAMS, ModelParams, params_from_overrides
from .physiology import (
    compute_rate,
    get_optimal_values,
    get_temperature_range,
    normalize_co2,
    normalize_factors,
    normalize_light,
    normalize_temperature,
)
from .presets import SCENARIO_PRESETS, get_preset
from .recommendations import generate_priority_actions, recommend, validate_change
from .simulation import (
    SimulationState,
    advance_day,
    analyze_trajectory,
    compare_scenarios,
    seasonal_conditions,
    simulate_growth,
    simulate_optimal_growth,
    simulate_variable_conditions,
)

__all__ = [
    "ChangeValidation",
    "ComparisonReport",
    "DEFAULT_PARAMS",
    "DayRecord",
    "EnvironmentalFactors",
    "Factor",
    "FactorAssessment",
    "FactorBreakdown",
    "FactorStatus",
    "GrowthTrajectory",
    "LimitingFactorReport",
    "ModelParams",
    "NormalizedFactors",
    "Priority",
    "PriorityAction",
    "RateResult",
    "Recommendation",
    "SCENARIO_PRESETS",
    "ScenarioPreset",
    "Severity",
    "SimulationState",
    "SummaryStatistics",
    "TemperatureDirection",
    "advance_day",
    "analyze_all_factors",
    "analyze_trajectory",
    "compare_scenarios",
    "compute_rate",
    "generate_priority_actions",
    "get_optimal_values",
    "get_preset",
    "get_temperature_range",
    "identify_limiting_factor",
    "is_near_optimal",
    "normalize_co2",
    "normalize_factors",
    "normalize_light",
    "normalize_temperature",
    "params_from_overrides",
    "recommend",
    "seasonal_conditions",
    "simulate_growth",
    "simulate_optimal_growth",
    "simulate_variable_conditions",
    "validate_change",
]
