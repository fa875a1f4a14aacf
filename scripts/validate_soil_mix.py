#!/usr/bin/env python3
"""
Soil Mix Calculator Validation Script
Runs randomized scenarios to validate calculation properties.
"""
import sys
import os
import random
import math
from typing import Dict, List

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from soilmix.schemas.soil_mix_schemas import SoilClassificationEnum
from soilmix.services.soil_mix_calculator import (
    soil_mix_calculator,
    InvalidInputError,
    MixRequest,
)
from soilmix.services.soil_mix_rules import REFERENCE_DEPTH_CM

CLASSIFICATIONS = [
    SoilClassificationEnum.CLAY,
    SoilClassificationEnum.SANDY,
    SoilClassificationEnum.SILT,
    SoilClassificationEnum.LOAMY,
]

AREA_M2_RANGE = (1.0, 20000.0)
DEPTH_CM_RANGE = (5.0, 120.0)

INVALID_REQUESTS = [
    {"classification": "unknown", "area_m2": 10, "depth_cm": 10},
    {"classification": "peat", "area_m2": 10, "depth_cm": 10},
    {"classification": "clay", "area_m2": -5, "depth_cm": 10},
    {"classification": "clay", "area_m2": 0, "depth_cm": 10},
    {"classification": "sandy", "area_m2": 10, "depth_cm": 0},
    {"classification": "silt", "area_m2": math.inf, "depth_cm": 10},
    {"classification": "loamy", "area_m2": 10, "depth_cm": math.nan},
]

REL_TOLERANCE = 1e-9


def _close(a: float, b: float) -> bool:
    return math.isclose(a, b, rel_tol=REL_TOLERANCE, abs_tol=1e-12)


def check_scenario(classification: SoilClassificationEnum, area_m2: float, depth_cm: float) -> List[str]:
    """Check one request against the calculator properties; returns the failed checks."""
    issues = []
    request = MixRequest(classification, area_m2, depth_cm)
    result = soil_mix_calculator.compute_mix(request)
    bulking, polymer = soil_mix_calculator.get_coefficients(classification)

    if result.bulking_agent_kg <= 0 or result.polymer_kg <= 0:
        issues.append("non-positive output")

    repeat = soil_mix_calculator.compute_mix(request)
    if repeat != result:
        issues.append("non-deterministic output")

    doubled = soil_mix_calculator.compute_mix(MixRequest(classification, area_m2 * 2, depth_cm))
    if not (_close(doubled.bulking_agent_kg, 2 * result.bulking_agent_kg)
            and _close(doubled.polymer_kg, 2 * result.polymer_kg)):
        issues.append("area scaling")

    half_depth = soil_mix_calculator.compute_mix(MixRequest(classification, area_m2, depth_cm / 2))
    if not (_close(half_depth.bulking_agent_kg * 2, result.bulking_agent_kg)
            and _close(half_depth.polymer_kg * 2, result.polymer_kg)):
        issues.append("depth linearity")

    reference = soil_mix_calculator.compute_mix(MixRequest(classification, area_m2, REFERENCE_DEPTH_CM))
    if reference.bulking_agent_kg != area_m2 * bulking or reference.polymer_kg != area_m2 * polymer:
        issues.append("reference depth identity")

    if len(result.instructions) != 5 or result.bulking_agent_display not in result.instructions[0]:
        issues.append("instruction text")

    return issues


def run_validation(num_tests: int = 100, seed: int = 42) -> Dict:
    random.seed(seed)

    stats = {
        "total_tests": num_tests,
        "successful": 0,
        "failed": 0,
        "by_classification": {c.value: 0 for c in CLASSIFICATIONS},
        "rejected_invalid": 0,
        "accepted_invalid": 0,
    }
    results = []
    anomalies = []

    for i in range(num_tests):
        classification = random.choice(CLASSIFICATIONS)
        area_m2 = round(random.uniform(*AREA_M2_RANGE), 2)
        depth_cm = round(random.uniform(*DEPTH_CM_RANGE), 1)

        try:
            issues = check_scenario(classification, area_m2, depth_cm)
        except InvalidInputError as e:
            issues = [f"rejected valid input: {e}"]

        stats["by_classification"][classification.value] += 1
        if issues:
            stats["failed"] += 1
            anomalies.append({
                "test_id": i + 1,
                "classification": classification.value,
                "area_m2": area_m2,
                "depth_cm": depth_cm,
                "issues": issues,
            })
        else:
            stats["successful"] += 1
            result = soil_mix_calculator.compute_mix(MixRequest(classification, area_m2, depth_cm))
            results.append({
                "test_id": i + 1,
                "classification": classification.value,
                "area_m2": area_m2,
                "depth_cm": depth_cm,
                "cocopeat_kg": result.bulking_agent_kg,
                "hydrogel_kg": result.polymer_kg,
            })

    for invalid in INVALID_REQUESTS:
        try:
            soil_mix_calculator.compute_mix(MixRequest(**invalid))
            stats["accepted_invalid"] += 1
            anomalies.append({"test_id": "invalid", "issues": ["accepted invalid input"], **invalid})
        except InvalidInputError:
            stats["rejected_invalid"] += 1

    return {
        "stats": stats,
        "results": results,
        "anomalies": anomalies,
    }


def generate_report(validation: Dict) -> str:
    stats = validation["stats"]
    results = validation["results"]
    anomalies = validation["anomalies"]

    report = []
    report.append("=" * 80)
    report.append("VALIDATION REPORT - SOIL MIX CALCULATOR")
    report.append("=" * 80)
    report.append("")

    report.append("## SUMMARY")
    report.append("-" * 40)
    report.append(f"Total scenarios: {stats['total_tests']}")
    report.append(f"Passed: {stats['successful']}")
    report.append(f"Failed: {stats['failed']}")
    report.append(f"Invalid inputs rejected: {stats['rejected_invalid']}/{len(INVALID_REQUESTS)}")
    report.append("")

    report.append("## SCENARIOS BY CLASSIFICATION")
    report.append("-" * 40)
    for name, count in stats["by_classification"].items():
        report.append(f"{name:<10} {count:>5}")
    report.append("")

    if anomalies:
        report.append("## ANOMALIES")
        report.append("-" * 40)
        for i, anom in enumerate(anomalies[:15]):
            report.append(f"{i+1}. Test #{anom.get('test_id', '?')}: {', '.join(anom['issues'])}")
            for k, v in anom.items():
                if k not in ["test_id", "issues"]:
                    report.append(f"   - {k}: {v}")
        if len(anomalies) > 15:
            report.append(f"   ... and {len(anomalies) - 15} more")
        report.append("")

    if results:
        report.append("## SAMPLE RESULTS (10 scenarios)")
        report.append("-" * 40)
        for r in random.sample(results, min(10, len(results))):
            report.append(
                f"Test #{r['test_id']}: {r['classification']}, {r['area_m2']} m2 at {r['depth_cm']} cm "
                f"-> cocopeat {r['cocopeat_kg']:.1f} kg, hydrogel {r['hydrogel_kg']:.2f} kg"
            )
        report.append("")

    report.append("## CONCLUSIONS")
    report.append("-" * 40)
    if stats["failed"] == 0:
        report.append("✓ All scenarios satisfy positivity, determinism, area scaling and depth linearity.")
    else:
        report.append(f"⚠️ {stats['failed']} scenarios failed property checks.")
    if stats["accepted_invalid"] == 0:
        report.append("✓ All invalid inputs were rejected.")
    else:
        report.append(f"⚠️ {stats['accepted_invalid']} invalid inputs were accepted.")

    report.append("")
    report.append("=" * 80)
    report.append("END OF REPORT")
    report.append("=" * 80)

    return "\n".join(report)


if __name__ == "__main__":
    print("Running soil mix validation (100 scenarios)...")
    print("")

    validation = run_validation(num_tests=100, seed=42)

    print(generate_report(validation))
    sys.exit(1 if validation["stats"]["failed"] or validation["stats"]["accepted_invalid"] else 0)
