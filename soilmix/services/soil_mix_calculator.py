"""
Soil Mix Calculator Service.

Calculates soil amendment requirements based on:
- Soil classification (clay, sandy, silt, loamy)
- Land area in square meters
- Cultivation depth in centimeters

Quantities scale linearly with area and with depth relative to the
30 cm reference the coefficients were calibrated against.
"""
from typing import Dict, List, Tuple, Union
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
import math
import logging

from soilmix.schemas.soil_mix_schemas import SoilClassificationEnum
from soilmix.services.soil_mix_rules import (
    REFERENCE_DEPTH_CM,
    CLAY_COEFFICIENTS,
    SANDY_COEFFICIENTS,
    DEFAULT_COEFFICIENTS,
    BULKING_AGENT_DECIMALS,
    POLYMER_DECIMALS,
    INSTRUCTION_TEMPLATES,
)

logger = logging.getLogger(__name__)


class InvalidInputError(ValueError):
    """Raised when a mix request cannot be computed."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


def normalize_classification(value: Union[str, SoilClassificationEnum]) -> SoilClassificationEnum:
    """
    Resolve a classification value to a known, computable classification.

    Accepts enum members or their string values (case-insensitive).
    'unknown' and anything outside the closed set are rejected.
    """
    if isinstance(value, SoilClassificationEnum):
        classification = value
    elif isinstance(value, str):
        try:
            classification = SoilClassificationEnum(value.strip().lower())
        except ValueError:
            raise InvalidInputError(f"Unrecognized soil classification: {value!r}", field="classification")
    else:
        raise InvalidInputError(f"Unrecognized soil classification: {value!r}", field="classification")

    if classification == SoilClassificationEnum.UNKNOWN:
        raise InvalidInputError("Soil classification is unknown; analyze the soil first", field="classification")
    return classification


def round_half_up(value: float, decimals: int) -> Decimal:
    """Round the exact binary value of a float, ties away from zero (as JS toFixed)."""
    return Decimal(value).quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP)


def format_amount(value: float, decimals: int) -> str:
    """Render an amount with a fixed number of decimals for display."""
    return str(round_half_up(value, decimals))


def _validate_measurement(value, field: str, label: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(f"{label} must be a number", field=field)
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(f"{label} must be a finite number", field=field)
    if value <= 0:
        raise InvalidInputError(f"{label} must be greater than zero", field=field)
    return value


@dataclass(frozen=True)
class MixRequest:
    """Plot details for a mix calculation."""
    classification: SoilClassificationEnum
    area_m2: float
    depth_cm: float


@dataclass(frozen=True)
class MixResult:
    """Amendment quantities and application steps for one request."""
    classification: SoilClassificationEnum
    area_m2: float
    depth_cm: float
    bulking_agent_kg: float
    polymer_kg: float
    instructions: Tuple[str, ...]

    @property
    def bulking_agent_display(self) -> str:
        return format_amount(self.bulking_agent_kg, BULKING_AGENT_DECIMALS)

    @property
    def polymer_display(self) -> str:
        return format_amount(self.polymer_kg, POLYMER_DECIMALS)

    def to_dict(self) -> Dict:
        return {
            "classification": self.classification.value,
            "area_m2": self.area_m2,
            "depth_cm": self.depth_cm,
            "bulking_agent_kg": self.bulking_agent_kg,
            "polymer_kg": self.polymer_kg,
            "bulking_agent_display": self.bulking_agent_display,
            "polymer_display": self.polymer_display,
            "instructions": list(self.instructions),
        }


class SoilMixCalculator:
    """
    Calculator for cocopeat and hydrogel amendment quantities.

    Methodology:
    1. Look up per-m2 coefficients for the soil classification
    2. Scale cultivation depth against the 30 cm reference
    3. Multiply area x coefficient x depth factor for each amendment
    4. Render the fixed instruction sequence with display-rounded amounts
    """

    COEFFICIENTS = {
        SoilClassificationEnum.CLAY: CLAY_COEFFICIENTS,
        SoilClassificationEnum.SANDY: SANDY_COEFFICIENTS,
    }

    def get_coefficients(self, classification: Union[str, SoilClassificationEnum]) -> Tuple[float, float]:
        """
        Get (bulking, polymer) coefficients in kg/m2 for a classification.

        Only clay and sandy have their own pair; silt and loamy share the default.
        """
        classification = normalize_classification(classification)
        return self.COEFFICIENTS.get(classification, DEFAULT_COEFFICIENTS)

    def get_coefficient_table(self) -> List[Dict]:
        """Get the coefficient pair for every computable classification."""
        table = []
        for classification in SoilClassificationEnum:
            if classification == SoilClassificationEnum.UNKNOWN:
                continue
            bulking, polymer = self.get_coefficients(classification)
            table.append({
                "classification": classification,
                "bulking_coefficient": bulking,
                "polymer_coefficient": polymer,
            })
        return table

    def build_instructions(self, bulking_agent_kg: float, polymer_kg: float) -> Tuple[str, ...]:
        bulking_text = format_amount(bulking_agent_kg, BULKING_AGENT_DECIMALS)
        polymer_text = format_amount(polymer_kg, POLYMER_DECIMALS)
        return tuple(
            template.format(bulking_agent=bulking_text, polymer=polymer_text)
            for template in INSTRUCTION_TEMPLATES
        )

    def compute_mix(self, request: MixRequest) -> MixResult:
        """
        Calculate amendment quantities for a plot.

        Args:
            request: Classification, area (m2) and depth (cm)

        Returns:
            MixResult with unrounded kg amounts and the application steps

        Raises:
            InvalidInputError: non-positive or non-finite area/depth, or an
                unknown/unrecognized classification
        """
        try:
            classification = normalize_classification(request.classification)
            area_m2 = _validate_measurement(request.area_m2, "area_m2", "Land area")
            depth_cm = _validate_measurement(request.depth_cm, "depth_cm", "Soil depth")
        except InvalidInputError as e:
            logger.info(f"Rejected mix request ({e.field}): {e}")
            raise

        bulking_coefficient, polymer_coefficient = self.get_coefficients(classification)
        depth_factor = depth_cm / REFERENCE_DEPTH_CM

        bulking_agent_kg = area_m2 * bulking_coefficient * depth_factor
        polymer_kg = area_m2 * polymer_coefficient * depth_factor

        logger.debug(
            f"Mix for {classification.value}: area={area_m2} m2, depth={depth_cm} cm "
            f"-> cocopeat={bulking_agent_kg:.3f} kg, hydrogel={polymer_kg:.3f} kg"
        )

        return MixResult(
            classification=classification,
            area_m2=area_m2,
            depth_cm=depth_cm,
            bulking_agent_kg=bulking_agent_kg,
            polymer_kg=polymer_kg,
            instructions=self.build_instructions(bulking_agent_kg, polymer_kg),
        )


# Singleton instance
soil_mix_calculator = SoilMixCalculator()


def compute_mix(request: MixRequest) -> MixResult:
    """Calculate a mix with the shared calculator."""
    return soil_mix_calculator.compute_mix(request)


def format_numbered_instructions(result: MixResult) -> List[str]:
    """Number the instructions for display ("1. Mix ...")."""
    return [f"{index}. {step}" for index, step in enumerate(result.instructions, start=1)]
