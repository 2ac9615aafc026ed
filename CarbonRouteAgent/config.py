"""
Configuration file for Carbon Route Agent
Contains emission factors, transport mode metadata and carbon credit policy
"""

import os
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Any, List, Mapping, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Logging level used by entrypoints (main / lambda_handler)
LOG_LEVEL = os.getenv("CARBON_ROUTE_LOG_LEVEL", "INFO").upper()

# Emission factors (kg CO2 per km)
EMISSION_FACTORS = {
    "bicycle": 0,
    "car": 0.12,
    "bus": 0.089,
    "truck": 0.96
}

# Mode used as baseline when comparing emissions
BASELINE_MODE = "car"

# Display metadata for each transport mode
TRANSPORT_MODES = {
    "bicycle": {"label": "Bicicleta", "icon": "🚴", "color": "#2ECC71"},
    "car": {"label": "Carro", "icon": "🚗", "color": "#1F8FFF"},
    "bus": {"label": "Ônibus", "icon": "🚌", "color": "#F39C12"},
    "truck": {"label": "Caminhão", "icon": "🚛", "color": "#A569BD"}
}

# Carbon credit parameters (1 credit = 1 tonne CO2)
CARBON_CREDIT = {
    "kg_per_credit": 1000,
    "price_min_brl": 50,
    "price_max_brl": 160,
    "currency": "BRL"
}


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    """Read a float from the environment, keeping the default on bad input."""
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid value for {name}: {raw!r}")
        return default


@dataclass(frozen=True)
class CreditPolicy:
    """Carbon credit conversion and pricing policy"""
    kg_per_credit: Optional[float]
    price_min: float
    price_max: float
    currency: str = "BRL"


@dataclass(frozen=True)
class CalculatorConfig:
    """Read-only configuration consumed by the carbon calculator"""
    emission_factors: Mapping[str, float]
    credit_policy: CreditPolicy
    baseline_mode: str = BASELINE_MODE


def get_credit_policy(overrides: Optional[Dict[str, Any]] = None) -> CreditPolicy:
    """
    Build the credit policy from defaults, environment and explicit overrides.

    Args:
        overrides: Optional dict with any of kg_per_credit, price_min_brl,
            price_max_brl, currency

    Returns:
        CreditPolicy instance
    """
    values = dict(CARBON_CREDIT)
    values["kg_per_credit"] = _env_float("CARBON_KG_PER_CREDIT", values["kg_per_credit"])
    values["price_min_brl"] = _env_float("CARBON_PRICE_MIN_BRL", values["price_min_brl"])
    values["price_max_brl"] = _env_float("CARBON_PRICE_MAX_BRL", values["price_max_brl"])
    if overrides:
        values.update(overrides)

    return CreditPolicy(
        kg_per_credit=values["kg_per_credit"],
        price_min=values["price_min_brl"] or 0,
        price_max=values["price_max_brl"] or 0,
        currency=values.get("currency") or "BRL"
    )


def load_calculator_config(
    emission_factors: Optional[Dict[str, float]] = None,
    credit_overrides: Optional[Dict[str, Any]] = None
) -> CalculatorConfig:
    """
    Load the calculator configuration.

    Args:
        emission_factors: Optional replacement factor table (mode -> kg/km)
        credit_overrides: Optional credit policy overrides

    Returns:
        Immutable CalculatorConfig
    """
    factors = dict(EMISSION_FACTORS if emission_factors is None else emission_factors)
    return CalculatorConfig(
        emission_factors=MappingProxyType(factors),
        credit_policy=get_credit_policy(credit_overrides)
    )


def get_supported_modes() -> List[str]:
    """Return the transport modes with a configured emission factor."""
    return list(EMISSION_FACTORS.keys())


def get_transport_mode_meta(mode: str) -> Optional[Dict[str, str]]:
    """
    Get display metadata for a transport mode.

    Args:
        mode: Transport mode key (bicycle, car, bus, truck)

    Returns:
        Dict with label, icon and color or None if not found
    """
    meta = TRANSPORT_MODES.get(mode)
    return dict(meta) if meta else None
