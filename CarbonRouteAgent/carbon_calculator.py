"""
Carbon Calculator for Transport Modes
Converts a road distance into CO2 emissions, savings and carbon credits
"""

import logging
import math
from dataclasses import dataclass, asdict
from typing import Dict, List, Optional, Any

from config import CalculatorConfig, load_calculator_config
from shared_utils import round_half_up

logger = logging.getLogger(__name__)


@dataclass
class ModeEmission:
    """Emission of one transport mode for a given distance"""
    mode: str
    emission: Optional[float]
    percentage_vs_car: Optional[float] = None

    def to_dict(self):
        return asdict(self)


@dataclass
class Savings:
    """CO2 avoided compared to a baseline emission"""
    saved_kg: float
    percentage: Optional[float]

    def to_dict(self):
        return asdict(self)


@dataclass
class PriceEstimate:
    """Price range for an amount of carbon credits"""
    min: float
    max: float
    average: float

    def to_dict(self):
        return asdict(self)


class CarbonCalculator:
    """
    Emission and carbon credit calculator

    Usage:
        calculator = CarbonCalculator()
        emission = calculator.calculate_emission(430, "car")      # 51.6 kg
        credits = calculator.calculate_carbon_credits(emission)   # 0.0516
        price = calculator.estimate_credit_price(credits)
    """

    def __init__(self, config: Optional[CalculatorConfig] = None):
        self.config = config if config is not None else load_calculator_config()

    @property
    def emission_factors(self):
        return self.config.emission_factors

    def calculate_emission(self, distance_km: float, mode: str) -> Optional[float]:
        """
        Calculate emission in kg CO2 for a distance and transport mode.

        Args:
            distance_km: Distance traveled in kilometers
            mode: Transport mode key (bicycle, car, bus, truck)

        Returns:
            Emission rounded to 2 decimals, or None for an unknown mode
        """
        factor = self.emission_factors.get(mode)
        if factor is None:
            logger.debug(f"No emission factor for mode '{mode}'")
            return None
        return round_half_up(distance_km * factor, 2)

    def calculate_all_modes(self, distance_km: float) -> List[ModeEmission]:
        """
        Calculate emissions for every configured mode, ranked lowest first.

        Each entry carries its emission as a percentage of the car
        emission. With a zero car emission the ratio is only defined for
        zero-emission modes (100%).
        """
        baseline_mode = self.config.baseline_mode
        results = []
        baseline = None

        for mode in self.emission_factors:
            emission = self.calculate_emission(distance_km, mode)
            if mode == baseline_mode:
                baseline = emission
            results.append(ModeEmission(mode=mode, emission=emission))

        for result in results:
            result.percentage_vs_car = self._percentage_vs(result.emission, baseline)

        # Sort by emissions (ascending), missing emissions last
        results.sort(key=lambda r: math.inf if r.emission is None else r.emission)
        return results

    @staticmethod
    def _percentage_vs(emission: Optional[float], baseline: Optional[float]) -> Optional[float]:
        if emission is None or baseline is None:
            return None
        if baseline == 0:
            return 100 if emission == 0 else None
        return round_half_up(emission / baseline * 100, 2)

    def calculate_savings(self, emission: float, baseline_emission: float) -> Savings:
        """
        Calculate CO2 saved by emitting `emission` instead of `baseline_emission`.

        Returns:
            Savings with saved kg and percentage of the baseline
            (percentage is None when the baseline is zero)
        """
        saved = round_half_up(baseline_emission - emission, 2)
        percentage = None
        if baseline_emission != 0:
            percentage = round_half_up(saved / baseline_emission * 100, 2)
        return Savings(saved_kg=saved, percentage=percentage)

    def calculate_carbon_credits(self, emission_kg: float) -> Optional[float]:
        """Convert kg CO2 into carbon credits (4 decimals), None without a credit size."""
        kg_per_credit = self.config.credit_policy.kg_per_credit
        if not kg_per_credit:
            return None
        return round_half_up(emission_kg / kg_per_credit, 4)

    def estimate_credit_price(self, credits: float) -> PriceEstimate:
        """
        Estimate the price range of an amount of carbon credits.

        The average is taken from the already-rounded min and max.
        """
        policy = self.config.credit_policy
        low = round_half_up(credits * policy.price_min, 2)
        high = round_half_up(credits * policy.price_max, 2)
        return PriceEstimate(min=low, max=high, average=round_half_up((low + high) / 2, 2))

    def compare_modes(self, distance_km: float) -> Dict[str, Any]:
        """
        Compare carbon emissions across transport modes and rank them.

        Args:
            distance_km: Distance in kilometers

        Returns:
            Dict with ranked emissions and lowest/highest mode summary
        """
        ranked = [r.to_dict() for r in self.calculate_all_modes(distance_km)]
        known = [r for r in ranked if r["emission"] is not None]

        if not known:
            return {
                "ranked_by_emissions": ranked,
                "lowest_emission_mode": None,
                "lowest_emission_kg": None,
                "highest_emission_mode": None,
                "highest_emission_kg": None,
                "total_options": 0
            }

        return {
            "ranked_by_emissions": ranked,
            "lowest_emission_mode": known[0]["mode"],
            "lowest_emission_kg": known[0]["emission"],
            "highest_emission_mode": known[-1]["mode"],
            "highest_emission_kg": known[-1]["emission"],
            "total_options": len(known)
        }


# ===================================================================
# HELPER FUNCTIONS
# ===================================================================

_default_calculator: Optional[CarbonCalculator] = None


def get_default_calculator() -> CarbonCalculator:
    """Calculator over the environment-aware default configuration."""
    global _default_calculator
    if _default_calculator is None:
        _default_calculator = CarbonCalculator()
    return _default_calculator


def calculate_emission(distance_km: float, mode: str) -> Optional[float]:
    return get_default_calculator().calculate_emission(distance_km, mode)


def calculate_all_modes(distance_km: float) -> List[ModeEmission]:
    return get_default_calculator().calculate_all_modes(distance_km)


def calculate_savings(emission: float, baseline_emission: float) -> Savings:
    return get_default_calculator().calculate_savings(emission, baseline_emission)


def calculate_carbon_credits(emission_kg: float) -> Optional[float]:
    return get_default_calculator().calculate_carbon_credits(emission_kg)


def estimate_credit_price(credits: float) -> PriceEstimate:
    return get_default_calculator().estimate_credit_price(credits)
