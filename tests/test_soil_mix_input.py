"""
Tests for parsing user-entered land details.
"""
import pytest

from soilmix.schemas.soil_mix_schemas import SoilClassificationEnum
from soilmix.services.soil_mix_calculator import InvalidInputError, compute_mix
from soilmix.services.soil_mix_input import (
    INPUT_REQUIRED_MESSAGE,
    InputRequiredError,
    build_mix_request,
    parse_land_details,
    parse_measurement,
)


class TestParseMeasurement:

    def test_parses_trimmed_number(self):
        assert parse_measurement(" 12.5 ", "area_m2") == 12.5

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_blank_is_required(self, raw):
        with pytest.raises(InputRequiredError) as exc:
            parse_measurement(raw, "depth_cm")
        assert exc.value.field == "depth_cm"
        assert str(exc.value) == INPUT_REQUIRED_MESSAGE

    @pytest.mark.parametrize("raw", ["abc", "12kg", "1,5"])
    def test_non_numeric_rejected(self, raw):
        with pytest.raises(InvalidInputError) as exc:
            parse_measurement(raw, "area_m2")
        assert not isinstance(exc.value, InputRequiredError)

    def test_range_left_to_calculator(self):
        assert parse_measurement("-5", "area_m2") == -5.0


class TestBuildMixRequest:

    def test_builds_request(self):
        request = build_mix_request(SoilClassificationEnum.CLAY, "100", "30")
        assert request.area_m2 == 100.0
        assert request.depth_cm == 30.0
        assert compute_mix(request).bulking_agent_kg == 250.0

    @pytest.mark.parametrize("land_area, soil_depth", [("", "30"), ("100", ""), (None, None)])
    def test_both_fields_required(self, land_area, soil_depth):
        with pytest.raises(InputRequiredError, match="Please enter both land area and soil depth"):
            build_mix_request("clay", land_area, soil_depth)

    def test_negative_area_fails_in_calculator(self):
        request = build_mix_request("clay", "-5", "10")
        with pytest.raises(InvalidInputError):
            compute_mix(request)

    def test_parse_land_details(self):
        assert parse_land_details("50", "15") == (50.0, 15.0)
