"""
Soil type catalog and soil parameter grading.

The catalog is loaded from data/soil_types.json and cached; grading
follows the thresholds shown on the soil analysis card.
"""
from typing import Dict, List, Union
from dataclasses import dataclass
import json
import os
import logging

from soilmix.schemas.soil_mix_schemas import SoilClassificationEnum, HealthLevelEnum
from soilmix.services.soil_mix_rules import (
    PH_OPTIMAL_RANGE,
    PH_GOOD_RANGE,
    NUTRIENT_HIGH_THRESHOLD,
    NUTRIENT_MEDIUM_THRESHOLD,
)

logger = logging.getLogger(__name__)

SOIL_TYPES_PATH = os.path.join(
    os.path.dirname(__file__), "..", "data", "soil_types.json"
)

_FALLBACK_SOIL_TYPES = {
    "soil_types": [
        {"type": "loamy", "name": "Loamy Soil", "description": "Well-balanced, ideal for most crops"},
        {"type": "sandy", "name": "Sandy Soil", "description": "Good drainage, needs more water retention"},
        {"type": "clay", "name": "Clay Soil", "description": "High nutrient retention, drainage issues"},
        {"type": "silt", "name": "Silt Soil", "description": "Fine particles, moderate drainage"},
    ],
    "unknown": {"name": "Unknown Soil", "description": ""},
}

_soil_types_cache = None


@dataclass(frozen=True)
class SoilTypeInfo:
    """Display data for a soil classification."""
    classification: SoilClassificationEnum
    name: str
    description: str


@dataclass(frozen=True)
class HealthStatus:
    """Grade of a measured soil parameter."""
    status: str
    level: HealthLevelEnum


def clear_soil_types_cache():
    """Clear the cache to reload the soil type catalog on next call."""
    global _soil_types_cache
    _soil_types_cache = None


def load_soil_types() -> Dict:
    """Load the soil type catalog from JSON file."""
    global _soil_types_cache
    if _soil_types_cache is not None:
        return _soil_types_cache

    try:
        with open(SOIL_TYPES_PATH, "r", encoding="utf-8") as f:
            _soil_types_cache = json.load(f)
            return _soil_types_cache
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Error loading soil types catalog, using built-in catalog: {e}")
        _soil_types_cache = _FALLBACK_SOIL_TYPES
        return _soil_types_cache


def list_soil_types() -> List[SoilTypeInfo]:
    """Get the soil types in catalog order."""
    catalog = load_soil_types()
    return [
        SoilTypeInfo(
            classification=SoilClassificationEnum(entry["type"]),
            name=entry.get("name", entry["type"]),
            description=entry.get("description", ""),
        )
        for entry in catalog.get("soil_types", [])
    ]


def get_soil_type_info(classification: Union[str, SoilClassificationEnum]) -> SoilTypeInfo:
    """
    Get display data for a classification.

    Anything not in the catalog (including 'unknown') resolves to the
    catalog's unknown entry.
    """
    key = classification.value if isinstance(classification, SoilClassificationEnum) else str(classification).strip().lower()

    for info in list_soil_types():
        if info.classification.value == key:
            return info

    unknown = load_soil_types().get("unknown", _FALLBACK_SOIL_TYPES["unknown"])
    return SoilTypeInfo(
        classification=SoilClassificationEnum.UNKNOWN,
        name=unknown.get("name", "Unknown Soil"),
        description=unknown.get("description", ""),
    )


def grade_ph(value: float) -> HealthStatus:
    """Grade a pH reading: Optimal 6.0-7.0, Good 5.5-7.5, else Needs Adjustment."""
    if PH_OPTIMAL_RANGE[0] <= value <= PH_OPTIMAL_RANGE[1]:
        return HealthStatus("Optimal", HealthLevelEnum.OPTIMAL)
    if PH_GOOD_RANGE[0] <= value <= PH_GOOD_RANGE[1]:
        return HealthStatus("Good", HealthLevelEnum.GOOD)
    return HealthStatus("Needs Adjustment", HealthLevelEnum.POOR)


def grade_nutrient(value: float) -> HealthStatus:
    """Grade an N/P/K reading: High >= 40, Medium >= 20, else Low."""
    if value >= NUTRIENT_HIGH_THRESHOLD:
        return HealthStatus("High", HealthLevelEnum.OPTIMAL)
    if value >= NUTRIENT_MEDIUM_THRESHOLD:
        return HealthStatus("Medium", HealthLevelEnum.GOOD)
    return HealthStatus("Low", HealthLevelEnum.POOR)
