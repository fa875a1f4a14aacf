"""
Tests for the mock soil classifier and the validation script.
"""
import asyncio
import os
import sys

from soilmix.schemas.soil_mix_schemas import SoilClassificationEnum
from soilmix.services.soil_classifier_service import (
    MockSoilClassifierService,
    get_soil_classifier_service,
)

sys.path.insert(0, os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "scripts"))

from validate_soil_mix import run_validation, generate_report


def test_classify_returns_mock_clay_reading():
    reading = MockSoilClassifierService(scan_delay_seconds=0).classify()
    assert reading.classification == SoilClassificationEnum.CLAY
    assert reading.to_dict() == {
        "classification": "clay",
        "ph": 6.2,
        "nitrogen": 45,
        "phosphorus": 32,
        "potassium": 28,
        "organic_matter": 3.2,
    }


def test_analyze_without_delay():
    reading = asyncio.run(MockSoilClassifierService(scan_delay_seconds=0).analyze())
    assert reading.classification == SoilClassificationEnum.CLAY


def test_negative_delay_clamped():
    assert MockSoilClassifierService(scan_delay_seconds=-1).scan_delay_seconds == 0.0


def test_singleton():
    assert get_soil_classifier_service() is get_soil_classifier_service()


def test_validation_script_passes():
    validation = run_validation(num_tests=50, seed=7)
    assert validation["stats"]["failed"] == 0
    assert validation["stats"]["accepted_invalid"] == 0
    assert "VALIDATION REPORT" in generate_report(validation)
