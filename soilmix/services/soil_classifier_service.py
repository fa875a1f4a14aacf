"""
Soil classification provider.

Stand-in for the on-device/ML soil scan: returns a fixed reading after a
simulated scan delay. The mix calculator only consumes the classification.
"""
import asyncio
import logging
from typing import Dict, Any, Optional
from dataclasses import dataclass, asdict

from soilmix.core.config import SOILMIX_SCAN_DELAY_SECONDS
from soilmix.schemas.soil_mix_schemas import SoilClassificationEnum

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SoilReading:
    """Result of a soil scan."""
    classification: SoilClassificationEnum
    ph: float
    nitrogen: float
    phosphorus: float
    potassium: float
    organic_matter: float

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["classification"] = self.classification.value
        return data


class MockSoilClassifierService:
    """
    Mock soil classifier.

    Always reports clay soil, the most common type on hill terraces.
    """

    MOCK_READING = SoilReading(
        classification=SoilClassificationEnum.CLAY,
        ph=6.2,
        nitrogen=45,
        phosphorus=32,
        potassium=28,
        organic_matter=3.2,
    )

    def __init__(self, scan_delay_seconds: float = SOILMIX_SCAN_DELAY_SECONDS):
        self.scan_delay_seconds = max(0.0, scan_delay_seconds)

    def classify(self) -> SoilReading:
        return self.MOCK_READING

    async def analyze(self) -> SoilReading:
        """Run the simulated scan and return the reading."""
        if self.scan_delay_seconds:
            await asyncio.sleep(self.scan_delay_seconds)
        reading = self.classify()
        logger.info(f"Soil scan complete: {reading.classification.value}, pH {reading.ph}")
        return reading


# Singleton instance
_soil_classifier_service: Optional[MockSoilClassifierService] = None


def get_soil_classifier_service() -> MockSoilClassifierService:
    """Get or create the soil classifier singleton."""
    global _soil_classifier_service
    if _soil_classifier_service is None:
        _soil_classifier_service = MockSoilClassifierService()
    return _soil_classifier_service
