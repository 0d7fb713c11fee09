"""Serialization helpers for API and UI clients."""

from __future__ import annotations

from typing import Optional

from .models import (
    ChangeValidation,
    ComparisonReport,
    DayRecord,
    EnvironmentalFactors,
    FactorBreakdown,
    GrowthTrajectory,
    LimitingFactorReport,
    PriorityAction,
    RateResult,
    Recommendation,
    ScenarioPreset,
    SummaryStatistics,
)


def factors_to_dict(factors: EnvironmentalFactors) -> dict[str, float]:
    return factors.as_dict()


def rate_to_dict(result: RateResult) -> dict[str, object]:
    return {
        "rate": result.rate,
        "normalized_factors": result.normalized.as_dict(),
    }


def limiting_to_dict(report: LimitingFactorReport) -> dict[str, object]:
    return {
        "factor": report.factor.value,
        "severity": report.severity.value,
        "value": report.value,
        "explanation": report.explanation,
        "temperature_direction": report.temperature_direction.value if report.temperature_direction else None,
    }


def breakdown_to_dict(breakdown: FactorBreakdown) -> dict[str, object]:
    return {
        "factors": {
            assessment.factor.value: {
                "value": assessment.value,
                "raw_value": assessment.raw_value,
                "status": assessment.status.value,
                "explanation": assessment.explanation,
            }
            for assessment in breakdown.assessments
        },
        "limiting": breakdown.limiting.factor.value,
        "overall_efficiency": breakdown.overall_efficiency,
        "summary": breakdown.summary,
    }


def recommendation_to_dict(recommendation: Recommendation) -> dict[str, object]:
    return {
        "action": recommendation.action,
        "target_value": recommendation.target_value,
        "priority": recommendation.priority.value,
        "applies_to": recommendation.applies_to.value,
        "warning": recommendation.warning,
    }


def priority_action_to_dict(action: PriorityAction) -> dict[str, object]:
    return {
        "rank": action.rank,
        "factor": action.factor.value,
        "normalized_value": action.normalized_value,
        "raw_value": action.raw_value,
        "recommendation": recommendation_to_dict(action.recommendation),
    }


def validation_to_dict(validation: ChangeValidation) -> dict[str, object]:
    return {"will_improve": validation.will_improve, "reason": validation.reason}


def day_record_to_dict(record: DayRecord) -> dict[str, object]:
    return {
        "day": record.day,
        "rate": record.rate,
        "biomass": record.biomass,
        "daily_gain": record.daily_gain,
        "limiting_factor": record.limiting_factor.value,
        "stress_level": record.stress_level,
        "efficiency_percent": record.efficiency_percent,
        "conditions": factors_to_dict(record.conditions),
    }


def trajectory_to_dict(trajectory: GrowthTrajectory) -> dict[str, object]:
    return {
        "initial_biomass": trajectory.initial_biomass,
        "final_biomass": trajectory.final_biomass,
        "days": [day_record_to_dict(record) for record in trajectory],
    }


def summary_to_dict(summary: Optional[SummaryStatistics]) -> Optional[dict[str, object]]:
    if summary is None:
        return None
    return {
        "days": summary.days,
        "average_efficiency": summary.average_efficiency,
        "min_efficiency": summary.min_efficiency,
        "max_efficiency": summary.max_efficiency,
        "initial_biomass": summary.initial_biomass,
        "final_biomass": summary.final_biomass,
        "total_growth": summary.total_growth,
        "growth_percent": summary.growth_percent,
        "most_common_limiting_factor": summary.most_common_limiting_factor.value,
        "limiting_factor_distribution": {
            factor.value: count for factor, count in summary.limiting_factor_distribution.items()
        },
    }


def comparison_to_dict(report: ComparisonReport) -> dict[str, object]:
    return {
        "baseline": trajectory_to_dict(report.baseline),
        "alternative": trajectory_to_dict(report.alternative),
        "comparison": {
            "baseline_final_biomass": report.baseline_final_biomass,
            "alternative_final_biomass": report.alternative_final_biomass,
            "biomass_difference": report.biomass_difference,
            "percent_improvement": report.percent_improvement,
            "better_scenario": report.better_scenario,
        },
    }


def preset_to_dict(preset: ScenarioPreset) -> dict[str, object]:
    return {
        "key": preset.key,
        "name": preset.name,
        "description": preset.description,
        "factors": factors_to_dict(preset.factors),
    }
