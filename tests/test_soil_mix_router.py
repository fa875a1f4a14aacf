"""
Tests for the Soil Mix API endpoints.
"""
import io
import pytest
from fastapi.testclient import TestClient
from openpyxl import load_workbook

from soilmix.main import app
from soilmix.services.soil_classifier_service import (
    MockSoilClassifierService,
    get_soil_classifier_service,
)


@pytest.fixture
def client():
    app.dependency_overrides[get_soil_classifier_service] = lambda: MockSoilClassifierService(scan_delay_seconds=0)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


class TestCalculateEndpoint:

    def test_clay_mix(self, client):
        response = client.post("/api/soil-mix/calculate", json={
            "classification": "clay", "area_m2": 100, "depth_cm": 30
        })
        assert response.status_code == 200
        data = response.json()
        assert data["bulking_agent_kg"] == 250.0
        assert data["polymer_kg"] == 15.0
        assert data["bulking_agent_display"] == "250.0"
        assert data["polymer_display"] == "15.00"
        assert data["instructions"][0] == "Mix 250.0kg cocopeat evenly throughout the soil"
        assert len(data["instructions"]) == 5

    def test_unknown_classification_is_400(self, client):
        response = client.post("/api/soil-mix/calculate", json={
            "classification": "unknown", "area_m2": 10, "depth_cm": 10
        })
        assert response.status_code == 400
        assert "unknown" in response.json()["detail"]

    def test_negative_area_is_400(self, client):
        response = client.post("/api/soil-mix/calculate", json={
            "classification": "clay", "area_m2": -5, "depth_cm": 10
        })
        assert response.status_code == 400
        assert "Land area" in response.json()["detail"]

    def test_classification_case_is_folded(self, client):
        response = client.post("/api/soil-mix/calculate", json={
            "classification": " Clay ", "area_m2": 100, "depth_cm": 30
        })
        assert response.status_code == 200
        assert response.json()["classification"] == "clay"
        assert response.json()["bulking_agent_kg"] == 250.0

    def test_classification_outside_enum_is_422(self, client):
        response = client.post("/api/soil-mix/calculate", json={
            "classification": "peat", "area_m2": 10, "depth_cm": 10
        })
        assert response.status_code == 422


class TestAnalyzeEndpoint:

    def test_analyze_returns_reading_and_mix(self, client):
        response = client.post("/api/soil-mix/analyze", json={"land_area": "100", "soil_depth": "30"})
        assert response.status_code == 200
        data = response.json()
        analysis = data["analysis"]
        assert analysis["soil_type"]["classification"] == "clay"
        assert analysis["soil_type"]["name"] == "Clay Soil"
        assert analysis["ph"] == {"value": 6.2, "health": {"status": "Optimal", "level": "optimal"}}
        assert analysis["nitrogen"]["health"]["status"] == "High"
        assert analysis["phosphorus"]["health"]["status"] == "Medium"
        assert analysis["potassium"]["health"]["status"] == "Medium"
        assert analysis["organic_matter"] == 3.2
        assert data["mix"]["bulking_agent_kg"] == 250.0

    def test_missing_fields_is_400(self, client):
        response = client.post("/api/soil-mix/analyze", json={"land_area": "100"})
        assert response.status_code == 400
        assert response.json()["detail"] == "Please enter both land area and soil depth"

    def test_non_numeric_is_400(self, client):
        response = client.post("/api/soil-mix/analyze", json={"land_area": "lots", "soil_depth": "30"})
        assert response.status_code == 400

    def test_zero_depth_is_400(self, client):
        response = client.post("/api/soil-mix/analyze", json={"land_area": "10", "soil_depth": "0"})
        assert response.status_code == 400


class TestCatalogEndpoints:

    def test_soil_types(self, client):
        response = client.get("/api/soil-mix/soil-types")
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 4
        assert [item["classification"] for item in data["items"]] == ["loamy", "sandy", "clay", "silt"]

    def test_coefficients(self, client):
        response = client.get("/api/soil-mix/coefficients")
        data = response.json()
        assert data["reference_depth_cm"] == 30.0
        by_type = {row["classification"]: row for row in data["items"]}
        assert by_type["clay"]["bulking_coefficient"] == 2.5
        assert by_type["sandy"]["polymer_coefficient"] == 0.3
        assert by_type["silt"] == {**by_type["loamy"], "classification": "silt"}

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestExportEndpoints:

    def test_pdf_export(self, client):
        response = client.post(
            "/api/soil-mix/pdf",
            params={"plot_name": "North Terrace"},
            json={"classification": "sandy", "area_m2": 50, "depth_cm": 15},
        )
        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="soil_mix_North_Terrace.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_excel_export(self, client):
        response = client.post(
            "/api/soil-mix/excel",
            json={"classification": "loamy", "area_m2": 200, "depth_cm": 60},
        )
        assert response.status_code == 200
        assert 'filename="soil_mix_loamy.xlsx"' in response.headers["content-disposition"]
        wb = load_workbook(io.BytesIO(response.content))
        assert wb.sheetnames == ["Summary", "Instructions"]

    def test_export_rejects_invalid_input(self, client):
        response = client.post(
            "/api/soil-mix/pdf",
            json={"classification": "clay", "area_m2": 0, "depth_cm": 15},
        )
        assert response.status_code == 400
