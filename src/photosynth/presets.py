"""Read-only scenario presets for UI pickers."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from .models import EnvironmentalFactors, ScenarioPreset

_PRESETS = (
    ScenarioPreset(
        key="optimal",
        name="Optimal Conditions",
        description="Perfect greenhouse environment",
        factors=EnvironmentalFactors(light=850.0, co2=400.0, temperature=25.0),
    ),
    ScenarioPreset(
        key="climate2050",
        name="Climate Change 2050",
        description="Projected future atmospheric conditions: elevated CO₂ and heat",
        factors=EnvironmentalFactors(light=750.0, co2=500.0, temperature=32.0),
    ),
    ScenarioPreset(
        key="drought",
        name="Drought Conditions",
        description="Water scarcity and heat stress",
        factors=EnvironmentalFactors(light=850.0, co2=380.0, temperature=38.0),
    ),
    ScenarioPreset(
        key="greenhouse",
        name="Greenhouse Farming",
        description="Controlled agricultural environment with CO₂ enrichment",
        factors=EnvironmentalFactors(light=900.0, co2=600.0, temperature=26.0),
    ),
    ScenarioPreset(
        key="tropical_rainforest",
        name="Tropical Rainforest",
        description="Moderate understorey light, warm and humid",
        factors=EnvironmentalFactors(light=600.0, co2=380.0, temperature=26.0),
    ),
)

SCENARIO_PRESETS: Mapping[str, ScenarioPreset] = MappingProxyType({preset.key: preset for preset in _PRESETS})


def get_preset(key: str) -> ScenarioPreset:
    try:
        return SCENARIO_PRESETS[key]
    except KeyError:
        raise KeyError(f"Unknown scenario preset {key!r}") from None
