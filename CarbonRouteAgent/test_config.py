import os
import unittest
from unittest.mock import patch

from config import (
    CARBON_CREDIT,
    EMISSION_FACTORS,
    get_credit_policy,
    get_supported_modes,
    get_transport_mode_meta,
    load_calculator_config,
)

CREDIT_ENV_VARS = ("CARBON_KG_PER_CREDIT", "CARBON_PRICE_MIN_BRL", "CARBON_PRICE_MAX_BRL")


class TestCreditPolicy(unittest.TestCase):
    """Credit policy defaults, environment overrides and explicit overrides."""

    def setUp(self):
        patcher = patch.dict(os.environ, {})
        patcher.start()
        self.addCleanup(patcher.stop)
        for name in CREDIT_ENV_VARS:
            os.environ.pop(name, None)

    def test_defaults(self):
        policy = get_credit_policy()
        self.assertEqual(policy.kg_per_credit, CARBON_CREDIT["kg_per_credit"])
        self.assertEqual(policy.price_min, 50)
        self.assertEqual(policy.price_max, 160)
        self.assertEqual(policy.currency, "BRL")

    def test_environment_overrides(self):
        os.environ["CARBON_KG_PER_CREDIT"] = "500"
        os.environ["CARBON_PRICE_MAX_BRL"] = "200.5"
        policy = get_credit_policy()
        self.assertEqual(policy.kg_per_credit, 500.0)
        self.assertEqual(policy.price_max, 200.5)

    def test_invalid_environment_value_keeps_default(self):
        os.environ["CARBON_PRICE_MIN_BRL"] = "fifty"
        with self.assertLogs('config', level='WARNING'):
            policy = get_credit_policy()
        self.assertEqual(policy.price_min, 50)

    def test_explicit_overrides(self):
        policy = get_credit_policy({"kg_per_credit": 0, "price_min_brl": 10})
        self.assertEqual(policy.kg_per_credit, 0)
        self.assertEqual(policy.price_min, 10)


class TestCalculatorConfig(unittest.TestCase):

    def test_default_factors(self):
        config = load_calculator_config()
        self.assertEqual(dict(config.emission_factors), EMISSION_FACTORS)
        self.assertEqual(config.baseline_mode, "car")

    def test_factors_are_read_only(self):
        config = load_calculator_config()
        with self.assertRaises(TypeError):
            config.emission_factors["car"] = 1.0

    def test_replacement_factors(self):
        config = load_calculator_config(emission_factors={"car": 0.2})
        self.assertEqual(dict(config.emission_factors), {"car": 0.2})
        self.assertEqual(EMISSION_FACTORS["car"], 0.12)


class TestTransportModes(unittest.TestCase):

    def test_supported_modes(self):
        self.assertEqual(get_supported_modes(), ["bicycle", "car", "bus", "truck"])

    def test_mode_meta(self):
        self.assertEqual(get_transport_mode_meta("car")["label"], "Carro")
        self.assertIsNone(get_transport_mode_meta("rocket"))

    def test_mode_meta_is_a_copy(self):
        get_transport_mode_meta("bus")["label"] = "changed"
        self.assertEqual(get_transport_mode_meta("bus")["label"], "Ônibus")


if __name__ == '__main__':
    unittest.main()
