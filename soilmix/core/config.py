"""Runtime settings read from the environment."""
import os

SOILMIX_LOG_LEVEL = os.environ.get("SOILMIX_LOG_LEVEL", "INFO")

# Simulated duration of the soil scan performed by the mock classifier
SOILMIX_SCAN_DELAY_SECONDS = float(os.environ.get("SOILMIX_SCAN_DELAY_SECONDS", "2.0"))

SOILMIX_COMPANY_NAME = os.environ.get("SOILMIX_COMPANY_NAME", "SoilMix")
SOILMIX_COMPANY_TAGLINE = os.environ.get("SOILMIX_COMPANY_TAGLINE", "Precision farming for hilly terrain")
