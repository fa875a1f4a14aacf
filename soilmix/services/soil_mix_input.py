"""
Parsing of user-entered land details into mix requests.
"""
from typing import Optional, Tuple, Union

from soilmix.schemas.soil_mix_schemas import SoilClassificationEnum
from soilmix.services.soil_mix_calculator import InvalidInputError, MixRequest

INPUT_REQUIRED_MESSAGE = "Please enter both land area and soil depth"


class InputRequiredError(InvalidInputError):
    """Raised when a required text field is blank."""


def _is_blank(raw: Optional[str]) -> bool:
    return raw is None or not str(raw).strip()


def parse_measurement(raw: Optional[str], field: str) -> float:
    """
    Parse a numeric text field.

    Args:
        raw: Text as typed by the user
        field: Field name reported on errors (area_m2, depth_cm)

    Returns:
        Parsed float; range checks are left to the calculator
    """
    if _is_blank(raw):
        raise InputRequiredError(INPUT_REQUIRED_MESSAGE, field=field)

    text = str(raw).strip()
    try:
        return float(text)
    except ValueError:
        raise InvalidInputError(f"'{text}' is not a valid number", field=field)


def parse_land_details(land_area: Optional[str], soil_depth: Optional[str]) -> Tuple[float, float]:
    """Parse the land area (m2) and soil depth (cm) text fields."""
    if _is_blank(land_area) or _is_blank(soil_depth):
        raise InputRequiredError(INPUT_REQUIRED_MESSAGE)
    return parse_measurement(land_area, "area_m2"), parse_measurement(soil_depth, "depth_cm")


def build_mix_request(
    classification: Union[str, SoilClassificationEnum],
    land_area: Optional[str],
    soil_depth: Optional[str],
) -> MixRequest:
    """Build a MixRequest from raw land area and soil depth text."""
    area_m2, depth_cm = parse_land_details(land_area, soil_depth)
    return MixRequest(classification=classification, area_m2=area_m2, depth_cm=depth_cm)
