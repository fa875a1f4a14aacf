"""
Soil Mix Calculator Router.
Provides endpoints for soil analysis and amendment mix calculations.
"""
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
import io
import logging

from soilmix.schemas.soil_mix_schemas import (
    SoilMixCalculateRequest,
    SoilMixResponse,
    SoilCoefficientsList,
    SoilCoefficientsResponse,
    SoilAnalyzeRequest,
    SoilAnalyzeResponse,
    SoilAnalysisResponse,
    SoilParameterResponse,
    HealthStatusResponse,
    SoilTypeResponse,
    SoilTypeList,
)
from soilmix.services.soil_mix_calculator import (
    soil_mix_calculator,
    InvalidInputError,
    MixRequest,
    MixResult,
)
from soilmix.services.soil_mix_input import parse_land_details
from soilmix.services.soil_mix_rules import REFERENCE_DEPTH_CM
from soilmix.services.soil_catalog import (
    list_soil_types,
    get_soil_type_info,
    grade_ph,
    grade_nutrient,
    SoilTypeInfo,
    HealthStatus,
)
from soilmix.services.soil_classifier_service import (
    get_soil_classifier_service,
    MockSoilClassifierService,
)
from soilmix.services.soil_mix_pdf_service import create_soil_mix_pdf_report
from soilmix.services.soil_mix_excel_service import soil_mix_excel_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/soil-mix", tags=["soil-mix"])


def _compute_or_400(request: MixRequest) -> MixResult:
    try:
        return soil_mix_calculator.compute_mix(request)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


def _calculate_request_to_mix(request: SoilMixCalculateRequest) -> MixResult:
    return _compute_or_400(MixRequest(
        classification=request.classification,
        area_m2=request.area_m2,
        depth_cm=request.depth_cm,
    ))


def _soil_type_response(info: SoilTypeInfo) -> SoilTypeResponse:
    return SoilTypeResponse(
        classification=info.classification,
        name=info.name,
        description=info.description,
    )


def _parameter_response(value: float, health: HealthStatus) -> SoilParameterResponse:
    return SoilParameterResponse(
        value=value,
        health=HealthStatusResponse(status=health.status, level=health.level),
    )


def _safe_filename(name: Optional[str], fallback: str) -> str:
    label = (name or fallback).strip() or fallback
    return "".join(c if c.isalnum() or c in "-_" else "_" for c in label)


@router.post("/calculate", response_model=SoilMixResponse)
async def calculate_soil_mix(request: SoilMixCalculateRequest):
    """
    Calculate cocopeat and hydrogel requirements.

    Quantities are unrounded; display fields carry the rounded values.
    """
    result = _calculate_request_to_mix(request)
    return SoilMixResponse(**result.to_dict())


@router.post("/analyze", response_model=SoilAnalyzeResponse)
async def analyze_soil(
    request: SoilAnalyzeRequest,
    classifier: MockSoilClassifierService = Depends(get_soil_classifier_service)
):
    """
    Scan the soil and recommend a mix for the detected classification.

    Land details arrive as the raw text the user typed.
    """
    try:
        area_m2, depth_cm = parse_land_details(request.land_area, request.soil_depth)
    except InvalidInputError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    reading = await classifier.analyze()
    result = _compute_or_400(MixRequest(
        classification=reading.classification,
        area_m2=area_m2,
        depth_cm=depth_cm,
    ))

    analysis = SoilAnalysisResponse(
        soil_type=_soil_type_response(get_soil_type_info(reading.classification)),
        ph=_parameter_response(reading.ph, grade_ph(reading.ph)),
        nitrogen=_parameter_response(reading.nitrogen, grade_nutrient(reading.nitrogen)),
        phosphorus=_parameter_response(reading.phosphorus, grade_nutrient(reading.phosphorus)),
        potassium=_parameter_response(reading.potassium, grade_nutrient(reading.potassium)),
        organic_matter=reading.organic_matter,
    )
    logger.info(f"Soil analysis: {reading.classification.value}, {result.area_m2:g} m2 at {result.depth_cm:g} cm")

    return SoilAnalyzeResponse(analysis=analysis, mix=SoilMixResponse(**result.to_dict()))


@router.get("/soil-types", response_model=SoilTypeList)
async def get_soil_types():
    """Get the soil type catalog."""
    items = [_soil_type_response(info) for info in list_soil_types()]
    return SoilTypeList(items=items, total=len(items))


@router.get("/coefficients", response_model=SoilCoefficientsList)
async def get_coefficients():
    """Get the amendment coefficients (kg/m2 at the reference depth) per classification."""
    items = [SoilCoefficientsResponse(**row) for row in soil_mix_calculator.get_coefficient_table()]
    return SoilCoefficientsList(items=items, reference_depth_cm=REFERENCE_DEPTH_CM)


# ============== Report Export Endpoints ==============

@router.post("/pdf")
async def generate_soil_mix_pdf(
    request: SoilMixCalculateRequest,
    plot_name: Optional[str] = None,
    user_name: str = "Grower"
):
    """
    Generate a PDF report for a mix recommendation.

    Returns the PDF file as a downloadable response.
    """
    result = _calculate_request_to_mix(request)
    pdf_bytes = create_soil_mix_pdf_report(result, user_name=user_name, plot_name=plot_name)

    filename = f"soil_mix_{_safe_filename(plot_name, result.classification.value)}.pdf"
    logger.info(f"PDF export: {filename}")

    return StreamingResponse(
        io.BytesIO(pdf_bytes),
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )


@router.post("/excel")
async def generate_soil_mix_excel(
    request: SoilMixCalculateRequest,
    plot_name: Optional[str] = None,
    user_name: str = "Grower"
):
    """
    Generate an Excel workbook for a mix recommendation.
    """
    result = _calculate_request_to_mix(request)
    buffer = soil_mix_excel_service.generate_soil_mix_excel(result, user_name=user_name, plot_name=plot_name)

    filename = f"soil_mix_{_safe_filename(plot_name, result.classification.value)}.xlsx"
    logger.info(f"Excel export: {filename}")

    return StreamingResponse(
        buffer,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={
            "Content-Disposition": f'attachment; filename="{filename}"'
        }
    )
