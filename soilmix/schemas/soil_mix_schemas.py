"""
Pydantic schemas for the Soil Mix module.
Includes schemas for soil analysis readings and amendment mix calculations.
"""
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from enum import Enum


# ==================== ENUMS ====================

class SoilClassificationEnum(str, Enum):
    """Soil texture classifications."""
    LOAMY = "loamy"
    SANDY = "sandy"
    CLAY = "clay"
    SILT = "silt"
    UNKNOWN = "unknown"


class HealthLevelEnum(str, Enum):
    """Health level of a graded soil parameter."""
    OPTIMAL = "optimal"
    GOOD = "good"
    POOR = "poor"


# ==================== MIX CALCULATION SCHEMAS ====================

class SoilMixCalculateRequest(BaseModel):
    """Request to calculate amendment quantities for a plot."""
    classification: SoilClassificationEnum = Field(..., description="Soil classification")
    # Range checks are done by the calculator so every entry point rejects the same inputs
    area_m2: float = Field(..., description="Land area in square meters")
    depth_cm: float = Field(..., description="Cultivation depth in cm")

    @field_validator("classification", mode="before")
    @classmethod
    def fold_classification_case(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


class SoilMixResponse(BaseModel):
    """Amendment quantities and application steps."""
    classification: SoilClassificationEnum
    area_m2: float
    depth_cm: float
    bulking_agent_kg: float = Field(..., description="Cocopeat required (unrounded kg)")
    polymer_kg: float = Field(..., description="Hydrogel required (unrounded kg)")
    bulking_agent_display: str = Field(..., description="Cocopeat rounded to 1 decimal")
    polymer_display: str = Field(..., description="Hydrogel rounded to 2 decimals")
    instructions: List[str]


class SoilCoefficientsResponse(BaseModel):
    """Coefficients applied for a classification (kg/m2 at 30 cm)."""
    classification: SoilClassificationEnum
    bulking_coefficient: float
    polymer_coefficient: float


class SoilCoefficientsList(BaseModel):
    items: List[SoilCoefficientsResponse]
    reference_depth_cm: float


# ==================== SOIL ANALYSIS SCHEMAS ====================

class SoilAnalyzeRequest(BaseModel):
    """Raw land details as typed by the user."""
    land_area: Optional[str] = Field(None, description="Land area in m2 (text input)")
    soil_depth: Optional[str] = Field(None, description="Soil depth in cm (text input)")


class SoilTypeResponse(BaseModel):
    """Soil type catalog entry."""
    classification: SoilClassificationEnum
    name: str
    description: str


class SoilTypeList(BaseModel):
    items: List[SoilTypeResponse]
    total: int


class HealthStatusResponse(BaseModel):
    status: str
    level: HealthLevelEnum


class SoilParameterResponse(BaseModel):
    """A measured soil parameter and its grade."""
    value: float
    health: HealthStatusResponse


class SoilAnalysisResponse(BaseModel):
    """Reading returned by the soil classifier with graded parameters."""
    soil_type: SoilTypeResponse
    ph: SoilParameterResponse
    nitrogen: SoilParameterResponse
    phosphorus: SoilParameterResponse
    potassium: SoilParameterResponse
    organic_matter: float


class SoilAnalyzeResponse(BaseModel):
    """Combined soil analysis and mix recommendation."""
    analysis: SoilAnalysisResponse
    mix: SoilMixResponse
