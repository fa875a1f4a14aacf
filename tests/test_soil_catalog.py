"""
Tests for the soil type catalog and soil parameter grading.
"""
import logging
import pytest

from soilmix.schemas.soil_mix_schemas import SoilClassificationEnum, HealthLevelEnum
from soilmix.services import soil_catalog
from soilmix.services.soil_catalog import (
    list_soil_types,
    get_soil_type_info,
    grade_ph,
    grade_nutrient,
    clear_soil_types_cache,
)


@pytest.fixture(autouse=True)
def fresh_cache():
    clear_soil_types_cache()
    yield
    clear_soil_types_cache()


class TestCatalog:

    def test_catalog_order(self):
        types = [info.classification for info in list_soil_types()]
        assert types == [
            SoilClassificationEnum.LOAMY,
            SoilClassificationEnum.SANDY,
            SoilClassificationEnum.CLAY,
            SoilClassificationEnum.SILT,
        ]

    def test_clay_entry(self):
        info = get_soil_type_info(SoilClassificationEnum.CLAY)
        assert info.name == "Clay Soil"
        assert info.description == "High nutrient retention, drainage issues"

    def test_lookup_by_string(self):
        assert get_soil_type_info("Sandy").name == "Sandy Soil"

    def test_unknown_falls_back(self):
        info = get_soil_type_info(SoilClassificationEnum.UNKNOWN)
        assert info.name == "Unknown Soil"
        assert info.classification == SoilClassificationEnum.UNKNOWN
        assert get_soil_type_info("peat").name == "Unknown Soil"

    def test_missing_file_uses_builtin_catalog(self, monkeypatch, tmp_path):
        monkeypatch.setattr(soil_catalog, "SOIL_TYPES_PATH", str(tmp_path / "missing.json"))
        types = list_soil_types()
        assert len(types) == 4
        assert get_soil_type_info("silt").description == "Fine particles, moderate drainage"

    def test_catalog_is_cached(self, monkeypatch, tmp_path):
        list_soil_types()
        monkeypatch.setattr(soil_catalog, "SOIL_TYPES_PATH", str(tmp_path / "missing.json"))
        assert get_soil_type_info("loamy").name == "Loamy Soil"


    def test_missing_file_logged_once(self, monkeypatch, tmp_path, caplog):
        monkeypatch.setattr(soil_catalog, "SOIL_TYPES_PATH", str(tmp_path / "missing.json"))
        with caplog.at_level(logging.ERROR, logger="soilmix.services.soil_catalog"):
            list_soil_types()
            get_soil_type_info("clay")
            list_soil_types()
        assert len([r for r in caplog.records if r.levelno == logging.ERROR]) == 1
        assert get_soil_type_info("clay").name == "Clay Soil"


class TestGrading:

    @pytest.mark.parametrize("value, status, level", [
        (6.0, "Optimal", HealthLevelEnum.OPTIMAL),
        (6.2, "Optimal", HealthLevelEnum.OPTIMAL),
        (7.0, "Optimal", HealthLevelEnum.OPTIMAL),
        (5.5, "Good", HealthLevelEnum.GOOD),
        (7.5, "Good", HealthLevelEnum.GOOD),
        (5.4, "Needs Adjustment", HealthLevelEnum.POOR),
        (8.1, "Needs Adjustment", HealthLevelEnum.POOR),
    ])
    def test_grade_ph(self, value, status, level):
        health = grade_ph(value)
        assert health.status == status
        assert health.level == level

    @pytest.mark.parametrize("value, status", [
        (45, "High"),
        (40, "High"),
        (32, "Medium"),
        (20, "Medium"),
        (19.9, "Low"),
        (0, "Low"),
    ])
    def test_grade_nutrient(self, value, status):
        assert grade_nutrient(value).status == status
