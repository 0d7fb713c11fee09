"""FastAPI app exposing the limiting-factor model to the simulator UI."""

from __future__ import annotations

import logging
from typing import Literal, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from photosynth import (
    SCENARIO_PRESETS,
    EnvironmentalFactors,
    Factor,
    ModelParams,
    analyze_all_factors,
    analyze_trajectory,
    compare_scenarios,
    compute_rate,
    generate_priority_actions,
    get_optimal_values,
    get_preset,
    get_temperature_range,
    identify_limiting_factor,
    params_from_overrides,
    recommend,
    seasonal_conditions,
    simulate_growth,
    simulate_variable_conditions,
    validate_change,
)
from photosynth.serialization import (
    breakdown_to_dict,
    comparison_to_dict,
    factors_to_dict,
    limiting_to_dict,
    preset_to_dict,
    priority_action_to_dict,
    rate_to_dict,
    recommendation_to_dict,
    summary_to_dict,
    trajectory_to_dict,
    validation_to_dict,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Photosynthesis Limiting-Factor API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

MAX_SIMULATION_DAYS = 3650


class FactorsPayload(BaseModel):
    light: float = Field(default=800.0, allow_inf_nan=False)
    co2: float = Field(default=400.0, allow_inf_nan=False)
    temperature: float = Field(default=25.0, allow_inf_nan=False)
    light_unit: Literal["umol", "percent"] = Field(
        default="umol",
        description="'percent' treats light as a share of maximum light and converts it to umol/m2/s.",
    )
    preset: Optional[str] = Field(default=None, description="Scenario preset key; overrides the raw values.")


class ModelRequest(BaseModel):
    params: dict[str, float] | None = Field(
        default=None,
        description="Overrides for model parameters.",
    )


class RateRequest(ModelRequest):
    factors: FactorsPayload = Field(default_factory=FactorsPayload)


class ValidateChangeRequest(ModelRequest):
    factor: Factor
    proposed_value: float = Field(allow_inf_nan=False)
    factors: FactorsPayload = Field(default_factory=FactorsPayload)
    current_limiting_factor: Optional[Factor] = Field(
        default=None,
        description="Defaults to the limiting factor computed from the current factors.",
    )


class SimulationRequest(ModelRequest):
    factors: FactorsPayload = Field(default_factory=FactorsPayload)
    days: int = Field(default=30, ge=0, le=MAX_SIMULATION_DAYS)
    initial_biomass: float = Field(default=100.0, ge=0.0)


class SeasonalSimulationRequest(SimulationRequest):
    days: int = Field(default=365, ge=0, le=MAX_SIMULATION_DAYS)
    days_per_cycle: int = Field(default=365, ge=1)
    temperature_amplitude: float = 10.0
    light_amplitude: float = 0.0


class CompareRequest(ModelRequest):
    baseline: FactorsPayload = Field(default_factory=FactorsPayload)
    alternative: FactorsPayload = Field(default_factory=FactorsPayload)
    days: int = Field(default=30, ge=0, le=MAX_SIMULATION_DAYS)
    initial_biomass: float = Field(default=100.0, ge=0.0)


def _resolve_params(overrides: dict[str, float] | None) -> ModelParams:
    try:
        return params_from_overrides(overrides)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _to_factors(payload: FactorsPayload, params: ModelParams) -> EnvironmentalFactors:
    if payload.preset is not None:
        try:
            return get_preset(payload.preset).factors
        except KeyError as exc:
            raise HTTPException(status_code=404, detail=f"Scenario preset not found: {payload.preset}") from exc
    if payload.light_unit == "percent":
        return EnvironmentalFactors.from_light_percent(
            payload.light, payload.co2, payload.temperature, max_light=params.max_light
        )
    return EnvironmentalFactors(light=payload.light, co2=payload.co2, temperature=payload.temperature)


@app.get("/presets")
def list_presets() -> dict[str, object]:
    return {"presets": [preset_to_dict(preset) for preset in SCENARIO_PRESETS.values()]}


@app.get("/optimal")
def optimal_values() -> dict[str, object]:
    return {"optimal": get_optimal_values(), "temperature_range": get_temperature_range()}


@app.post("/rate")
def rate(request: RateRequest) -> dict[str, object]:
    params = _resolve_params(request.params)
    factors = _to_factors(request.factors, params)
    logger.info("Rate requested for %s", factors_to_dict(factors))
    return {"factors": factors_to_dict(factors), "result": rate_to_dict(compute_rate(factors, params=params))}


@app.post("/analysis")
def analysis(request: RateRequest) -> dict[str, object]:
    params = _resolve_params(request.params)
    factors = _to_factors(request.factors, params)
    result = compute_rate(factors, params=params)
    breakdown = analyze_all_factors(result.normalized, factors, params=params)
    logger.info("Analysis requested for %s: limiting=%s", factors_to_dict(factors), breakdown.limiting.factor.value)
    return {
        "factors": factors_to_dict(factors),
        "result": rate_to_dict(result),
        "limiting": limiting_to_dict(breakdown.limiting),
        "breakdown": breakdown_to_dict(breakdown),
        "recommendation": recommendation_to_dict(recommend(breakdown.limiting.factor, factors)),
        "priority_actions": [
            priority_action_to_dict(action) for action in generate_priority_actions(result.normalized, factors)
        ],
    }


@app.post("/validate-change")
def validate(request: ValidateChangeRequest) -> dict[str, object]:
    params = _resolve_params(request.params)
    factors = _to_factors(request.factors, params)
    limiting = request.current_limiting_factor
    if limiting is None:
        limiting = identify_limiting_factor(compute_rate(factors, params=params).normalized, factors, params=params).factor
    validation = validate_change(request.factor, request.proposed_value, factors, limiting, params=params)
    logger.info(
        "Validated change of %s to %s (limiting=%s): %s",
        request.factor.value,
        request.proposed_value,
        limiting.value,
        validation.will_improve,
    )
    return {"limiting_factor": limiting.value, "validation": validation_to_dict(validation)}


@app.post("/simulate")
def simulate(request: SimulationRequest) -> dict[str, object]:
    params = _resolve_params(request.params)
    factors = _to_factors(request.factors, params)
    trajectory = simulate_growth(factors, request.days, request.initial_biomass, params=params)
    logger.info("Simulated %d day(s) under %s", request.days, factors_to_dict(factors))
    return {"trajectory": trajectory_to_dict(trajectory), "summary": summary_to_dict(analyze_trajectory(trajectory))}


@app.post("/simulate/seasonal")
def simulate_seasonal(request: SeasonalSimulationRequest) -> dict[str, object]:
    params = _resolve_params(request.params)
    base = _to_factors(request.factors, params)
    generator = seasonal_conditions(
        base,
        days_per_cycle=request.days_per_cycle,
        temperature_amplitude=request.temperature_amplitude,
        light_amplitude=request.light_amplitude,
    )
    trajectory = simulate_variable_conditions(generator, request.days, request.initial_biomass, params=params)
    logger.info("Simulated %d seasonal day(s) around %s", request.days, factors_to_dict(base))
    return {"trajectory": trajectory_to_dict(trajectory), "summary": summary_to_dict(analyze_trajectory(trajectory))}


@app.post("/compare")
def compare(request: CompareRequest) -> dict[str, object]:
    params = _resolve_params(request.params)
    baseline = _to_factors(request.baseline, params)
    alternative = _to_factors(request.alternative, params)
    report = compare_scenarios(baseline, alternative, request.days, request.initial_biomass, params=params)
    logger.info("Compared scenarios over %d day(s): better=%s", request.days, report.better_scenario)
    return comparison_to_dict(report)
