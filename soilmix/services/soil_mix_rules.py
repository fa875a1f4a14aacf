"""
Deterministic agronomic rules and coefficients for soil amendment mixes.

This module centralizes constants so the mix calculation can remain
deterministic, auditable, and consistent across services and tests.
"""

REFERENCE_DEPTH_CM = 30.0

# kg per m2 at the reference depth: (bulking agent, polymer)
CLAY_COEFFICIENTS = (2.5, 0.15)
SANDY_COEFFICIENTS = (1.5, 0.30)
DEFAULT_COEFFICIENTS = (2.0, 0.20)

BULKING_AGENT_NAME = "cocopeat"
POLYMER_NAME = "hydrogel"

BULKING_AGENT_DECIMALS = 1
POLYMER_DECIMALS = 2

INSTRUCTION_TEMPLATES = (
    "Mix {bulking_agent}kg cocopeat evenly throughout the soil",
    "Distribute {polymer}kg hydrogel crystals uniformly",
    "Water thoroughly after mixing to activate hydrogel",
    "Allow 24-48 hours before planting",
    # Emitted for every classification, including sandy/silt/loamy.
    "Ideal for clay soil improvement in hilly terrain",
)

# Health grading thresholds used on the soil analysis card
PH_OPTIMAL_RANGE = (6.0, 7.0)
PH_GOOD_RANGE = (5.5, 7.5)
NUTRIENT_HIGH_THRESHOLD = 40
NUTRIENT_MEDIUM_THRESHOLD = 20
