"""
SoilMix API application.
"""
import logging

from fastapi import FastAPI

from soilmix.core.config import SOILMIX_LOG_LEVEL
from soilmix.routers.soil_mix import router as soil_mix_router

logging.basicConfig(
    level=getattr(logging, SOILMIX_LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="SoilMix", description="Soil analysis and amendment mix calculator")
app.include_router(soil_mix_router)


@app.get("/health")
async def health():
    return {"status": "ok"}
