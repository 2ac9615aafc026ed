# # Carbon Route Agent
# Estimates the road distance between two Brazilian cities and scores the trip's
# CO2 emissions, savings against driving, and carbon credits.

import os
import sys
import json
import logging
import math
from typing import Dict, Any, Optional

from config import LOG_LEVEL, BASELINE_MODE, get_transport_mode_meta
from carbon_calculator import CarbonCalculator, get_default_calculator
from distance_estimator import (
    RoadDistanceEstimator,
    METHOD_UNKNOWN,
    estimate_road_distance,
)
from shared_utils import log_structured

logger = logging.getLogger(__name__)

METHOD_MANUAL = "manual"


def parse_manual_distance(value) -> float:
    """
    Validate a user-supplied distance.

    Raises:
        ValueError: if the value is not a positive number
    """
    try:
        distance = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid distance: {value!r}. Enter a distance in km.")
    if not math.isfinite(distance) or distance <= 0:
        raise ValueError(f"Invalid distance: {value!r}. Distance must be a positive number of km.")
    return distance


def process_trip(
    origin: str,
    destination: str,
    transport_mode: str,
    manual_distance_km=None,
    estimator: Optional[RoadDistanceEstimator] = None,
    calculator: Optional[CarbonCalculator] = None,
    session_id: Optional[str] = None
) -> Dict[str, Any]:
    """
    Calculate emissions, mode comparison and carbon credits for a trip.

    Args:
        origin: Origin location ("City, UF")
        destination: Destination location ("City, UF")
        transport_mode: Transport mode key (bicycle, car, bus, truck)
        manual_distance_km: Optional distance entered by the user, skips estimation
        estimator: Road distance estimator (defaults to the built-in routes)
        calculator: Carbon calculator (defaults to the configured factors)
        session_id: Optional session identifier for structured logs

    Returns:
        Dict with the trip result. When no distance can be determined,
        success is False and error is "distance_unavailable".

    Raises:
        ValueError: on an unknown transport mode or invalid manual distance
    """
    calculator = calculator or get_default_calculator()

    if transport_mode not in calculator.emission_factors:
        raise ValueError(
            f"Invalid transport mode '{transport_mode}'. "
            f"Choose from: {list(calculator.emission_factors.keys())}"
        )

    origin = origin.strip() if isinstance(origin, str) else ""
    destination = destination.strip() if isinstance(destination, str) else ""

    if manual_distance_km is not None and manual_distance_km != "":
        distance_km = parse_manual_distance(manual_distance_km)
        method = METHOD_MANUAL
    else:
        if estimator is not None:
            estimation = estimator.estimate_road_distance(origin, destination)
        else:
            estimation = estimate_road_distance(origin, destination)
        distance_km = estimation.distance_km
        method = estimation.method

    log_structured('INFO', "Distance resolved", session_id=session_id, stage="distance",
                   origin=origin, destination=destination,
                   distance_km=distance_km, distance_method=method)

    if distance_km is None or method == METHOD_UNKNOWN:
        log_structured('WARNING', "Could not determine distance automatically",
                       session_id=session_id, stage="distance",
                       origin=origin, destination=destination)
        return {
            "success": False,
            "error": "distance_unavailable",
            "origin": origin,
            "destination": destination,
            "distance_km": None,
            "distance_method": METHOD_UNKNOWN,
            "transport_mode": transport_mode
        }

    emission = calculator.calculate_emission(distance_km, transport_mode)
    all_modes = calculator.calculate_all_modes(distance_km)

    # Savings against driving the same distance
    baseline_mode = calculator.config.baseline_mode or BASELINE_MODE
    baseline = calculator.calculate_emission(distance_km, baseline_mode)
    savings = calculator.calculate_savings(emission, baseline) if baseline is not None else None

    credits = calculator.calculate_carbon_credits(emission)
    price = calculator.estimate_credit_price(credits) if credits is not None else None

    meta = get_transport_mode_meta(transport_mode) or {}

    result = {
        "success": True,
        "origin": origin,
        "destination": destination,
        "distance_km": distance_km,
        "distance_method": method,
        "transport_mode": transport_mode,
        "transport_label": meta.get("label", transport_mode),
        "emission_kg": emission,
        "all_modes": [m.to_dict() for m in all_modes],
        "savings_vs_car": savings.to_dict() if savings else None,
        "carbon_credits": credits,
        "price_estimate": price.to_dict() if price else None,
        "currency": calculator.config.credit_policy.currency,
        "comparison": calculator.compare_modes(distance_km)
    }

    log_structured('INFO', "Trip processed", session_id=session_id, stage="emissions",
                   transport_mode=transport_mode, emission_kg=emission,
                   carbon_credits=credits)
    return result


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler()]
    )

    # Usage: python main.py "São Paulo, SP" "Rio de Janeiro, RJ" car [distance_km]
    if len(sys.argv) < 4:
        print(f"Usage: {os.path.basename(sys.argv[0])} ORIGIN DESTINATION MODE [DISTANCE_KM]")
        sys.exit(1)

    manual = sys.argv[4] if len(sys.argv) > 4 else None
    try:
        trip = process_trip(sys.argv[1], sys.argv[2], sys.argv[3], manual_distance_km=manual)
    except ValueError as e:
        logger.error(f"Error: {e}")
        sys.exit(1)

    print(json.dumps(trip, indent=2, ensure_ascii=False))
    if not trip["success"]:
        sys.exit(2)
