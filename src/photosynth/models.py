"""Core records for the limiting-factor photosynthesis model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from .checks import require_number
from .params import DEFAULT_PARAMS


class Factor(str, Enum):
    LIGHT = "light"
    CO2 = "co2"
    TEMPERATURE = "temperature"


# Order used when several factors share the minimum efficiency.
TIE_BREAK_ORDER: tuple[Factor, ...] = (Factor.TEMPERATURE, Factor.LIGHT, Factor.CO2)


class Severity(str, Enum):
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FactorStatus(str, Enum):
    OPTIMAL = "optimal"
    SUBOPTIMAL = "suboptimal"
    LIMITING = "limiting"


class TemperatureDirection(str, Enum):
    COLD = "cold"
    HOT = "hot"


def as_factor(value: Union[Factor, str]) -> Factor:
    if isinstance(value, Factor):
        return value
    try:
        return Factor(str(value).lower())
    except ValueError:
        raise ValueError(f"Unknown factor {value!r}; expected one of light, co2, temperature") from None


@dataclass(frozen=True)
class EnvironmentalFactors:
    """Raw readings: light in umol/m2/s, CO2 in ppm, temperature in degrees C."""

    light: float
    co2: float
    temperature: float

    def __post_init__(self) -> None:
        for name in ("light", "co2", "temperature"):
            object.__setattr__(self, name, require_number(getattr(self, name), name))

    @classmethod
    def from_light_percent(
        cls, light_percent: float, co2: float, temperature: float, max_light: float = DEFAULT_PARAMS.max_light
    ) -> "EnvironmentalFactors":
        """Build raw factors from a percent-of-maximum light reading (85% -> 850)."""

        percent = require_number(light_percent, "light_percent")
        return cls(light=percent / 100.0 * max_light, co2=co2, temperature=temperature)

    def get(self, factor: Union[Factor, str]) -> float:
        return getattr(self, as_factor(factor).value)

    def with_value(self, factor: Union[Factor, str], value: float) -> "EnvironmentalFactors":
        values = self.as_dict()
        values[as_factor(factor).value] = value
        return EnvironmentalFactors(**values)

    def as_dict(self) -> dict[str, float]:
        return {"light": self.light, "co2": self.co2, "temperature": self.temperature}


@dataclass(frozen=True)
class NormalizedFactors:
    light: float
    co2: float
    temperature: float

    @property
    def minimum(self) -> float:
        return min(self.light, self.co2, self.temperature)

    def get(self, factor: Union[Factor, str]) -> float:
        return getattr(self, as_factor(factor).value)

    def as_dict(self) -> dict[str, float]:
        return {"light": self.light, "co2": self.co2, "temperature": self.temperature}


@dataclass(frozen=True)
class RateResult:
    rate: float
    normalized: NormalizedFactors


@dataclass(frozen=True)
class LimitingFactorReport:
    factor: Factor
    severity: Severity
    value: float
    explanation: str
    temperature_direction: Optional[TemperatureDirection] = None


@dataclass(frozen=True)
class FactorAssessment:
    factor: Factor
    value: float
    raw_value: float
    status: FactorStatus
    explanation: str


@dataclass(frozen=True)
class FactorBreakdown:
    assessments: tuple[FactorAssessment, ...]
    limiting: LimitingFactorReport
    overall_efficiency: float
    summary: str


@dataclass(frozen=True)
class Recommendation:
    action: str
    target_value: Optional[float]
    priority: Priority
    applies_to: Factor
    warning: Optional[str] = None


@dataclass(frozen=True)
class ChangeValidation:
    will_improve: bool
    reason: str


@dataclass(frozen=True)
class PriorityAction:
    rank: int
    factor: Factor
    normalized_value: float
    raw_value: float
    recommendation: Recommendation


@dataclass(frozen=True)
class DayRecord:
    """One simulated day. Values are rounded for display; the run state is not."""

    day: int
    rate: float
    biomass: float
    daily_gain: float
    limiting_factor: Factor
    stress_level: float
    efficiency_percent: int
    conditions: EnvironmentalFactors


@dataclass(frozen=True)
class GrowthTrajectory:
    initial_biomass: float
    records: tuple[DayRecord, ...] = ()

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[DayRecord]:
        return iter(self.records)

    def __getitem__(self, index: int) -> DayRecord:
        return self.records[index]

    @property
    def final_biomass(self) -> float:
        if not self.records:
            return self.initial_biomass
        return self.records[-1].biomass


@dataclass(frozen=True)
class SummaryStatistics:
    days: int
    average_efficiency: int
    min_efficiency: int
    max_efficiency: int
    initial_biomass: float
    final_biomass: float
    total_growth: float
    growth_percent: float
    most_common_limiting_factor: Factor
    limiting_factor_distribution: dict[Factor, int]


@dataclass(frozen=True)
class ComparisonReport:
    baseline: GrowthTrajectory
    alternative: GrowthTrajectory
    baseline_final_biomass: float
    alternative_final_biomass: float
    biomass_difference: float
    percent_improvement: float
    better_scenario: Optional[str]


@dataclass(frozen=True)
class ScenarioPreset:
    key: str
    name: str
    description: str
    factors: EnvironmentalFactors
