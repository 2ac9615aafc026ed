"""
Road distance estimation
==========================================================

Resolves the road distance between two locations from the curated
routes table, falling back to the great-circle distance scaled by a
road-detour factor.

Detour factors are a coarse, documented heuristic (not a regression fit):
short hops wind through urban streets, mid-range trips follow regional
roads, long trips run on straighter highways. Northern and equatorial
Brazil has a sparser road network, so any endpoint north of 5°S gets at
least a 1.25 factor.
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Iterable, Optional, Sequence, Union

from geodesic import great_circle_distance_km
from routes_data import RoutesRegistry, get_default_registry
from shared_utils import round_half_up

logger = logging.getLogger(__name__)

METHOD_DB = "db"
METHOD_ESTIMATE = "estimate"
METHOD_UNKNOWN = "unknown"


@dataclass(frozen=True)
class DetourRule:
    """Applies `factor` to straight-line distances below `upper_bound_km`"""
    upper_bound_km: float
    factor: float


@dataclass(frozen=True)
class RegionalOverride:
    """Raises the factor to `min_factor` when any endpoint lies north of the threshold"""
    latitude_threshold: float
    min_factor: float


# Evaluated in order; the first rule whose bound exceeds the distance wins
DETOUR_RULES = (
    DetourRule(20, 1.10),
    DetourRule(50, 1.12),
    DetourRule(200, 1.18),
    DetourRule(800, 1.12),
    DetourRule(math.inf, 1.08),
)

NORTHERN_OVERRIDE = RegionalOverride(latitude_threshold=-5.0, min_factor=1.25)


@dataclass(frozen=True)
class EstimationResult:
    """Road distance plus how it was obtained (db, estimate or unknown)"""
    distance_km: Optional[Union[int, float]]
    method: str

    def to_dict(self):
        return asdict(self)


def select_detour_factor(
    straight_km: float,
    latitudes: Iterable[float],
    rules: Sequence[DetourRule] = DETOUR_RULES,
    override: Optional[RegionalOverride] = NORTHERN_OVERRIDE
) -> float:
    """
    Pick the road-detour multiplier for a straight-line distance.

    Args:
        straight_km: Great-circle distance in km
        latitudes: Latitudes of the route endpoints
        rules: Ordered magnitude rules
        override: Regional minimum applied after the magnitude rule

    Returns:
        Multiplier to turn straight-line distance into road distance
    """
    factor = rules[-1].factor
    for rule in rules:
        if straight_km < rule.upper_bound_km:
            factor = rule.factor
            break

    if override is not None and any(lat > override.latitude_threshold for lat in latitudes):
        factor = max(factor, override.min_factor)

    return factor


class RoadDistanceEstimator:
    """
    Road distance lookup with geodesic fallback.

    Usage:
        estimator = RoadDistanceEstimator(RoutesRegistry())
        result = estimator.estimate_road_distance("Curitiba, PR", "Porto Alegre, RS")
        print(f"{result.distance_km} km ({result.method})")
    """

    def __init__(
        self,
        registry: RoutesRegistry,
        rules: Sequence[DetourRule] = DETOUR_RULES,
        override: Optional[RegionalOverride] = NORTHERN_OVERRIDE
    ):
        if registry is None:
            raise ValueError("RoadDistanceEstimator requires a routes registry")
        if not rules:
            raise ValueError("At least one detour rule is required")
        self.registry = registry
        self.rules = tuple(rules)
        self.override = override

    def estimate_road_distance(self, origin: str, destination: str) -> EstimationResult:
        """
        Estimate road distance between two locations.

        Priority: curated route, then haversine x detour factor. Returns
        method "unknown" with no distance when either location has no
        coordinates.
        """
        exact = self.registry.find_exact_distance(origin, destination)
        if exact is not None:
            logger.debug(f"Route found in database: {origin} -> {destination} = {exact} km")
            return EstimationResult(distance_km=exact, method=METHOD_DB)

        a = self.registry.coordinates_of(origin)
        b = self.registry.coordinates_of(destination)
        if a is None or b is None:
            logger.debug(f"No coordinates for {origin if a is None else destination}, distance unknown")
            return EstimationResult(distance_km=None, method=METHOD_UNKNOWN)

        straight = great_circle_distance_km(a, b)
        factor = select_detour_factor(straight, (a.latitude, b.latitude), self.rules, self.override)
        estimated = round_half_up(straight * factor, 0)

        logger.debug(
            f"Estimated {origin} -> {destination}: straight={straight:.1f} km, "
            f"factor={factor}, road={estimated} km"
        )
        return EstimationResult(distance_km=estimated, method=METHOD_ESTIMATE)


_default_estimator = RoadDistanceEstimator(get_default_registry())


def estimate_road_distance(origin: str, destination: str) -> EstimationResult:
    """Estimate road distance using the built-in routes registry."""
    return _default_estimator.estimate_road_distance(origin, destination)
