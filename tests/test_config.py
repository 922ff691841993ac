import json
import logging
import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from chembalance.config import BalancerConfiguration, configure_logging, load_configuration


class TestBalancerConfiguration(unittest.TestCase):
    def test_defaults(self):
        configuration = BalancerConfiguration()
        self.assertEqual(configuration.arithmetic, "exact")
        self.assertTrue(configuration.exact)
        self.assertEqual(configuration.max_denominator, 1000)
        self.assertAlmostEqual(configuration.denominator_tolerance, 1e-4)
        self.assertAlmostEqual(configuration.integer_tolerance, 1e-6)

    def test_invalid_values(self):
        invalid = [
            {"arithmetic": "symbolic"},
            {"zero_tolerance": -1.0},
            {"denominator_tolerance": 0.0},
            {"denominator_tolerance": 0.6},
            {"max_denominator": 0},
        ]
        for kwargs in invalid:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ValueError):
                    BalancerConfiguration(**kwargs)

    def test_from_mapping_converts_types(self):
        configuration = BalancerConfiguration.from_mapping(
            {"arithmetic": "FLOAT", "max_denominator": "50", "zero_tolerance": "1e-8"}
        )
        self.assertEqual(configuration.arithmetic, "float")
        self.assertFalse(configuration.exact)
        self.assertEqual(configuration.max_denominator, 50)
        self.assertAlmostEqual(configuration.zero_tolerance, 1e-8)

    def test_from_mapping_rejects_unknown_keys(self):
        with self.assertRaises(ValueError) as context:
            BalancerConfiguration.from_mapping({"precision": 3})
        self.assertIn("precision", str(context.exception))


class TestLoadConfiguration(unittest.TestCase):
    def test_load_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "balancer.json"
            path.write_text(json.dumps({"arithmetic": "float", "max_denominator": 20}))
            configuration = load_configuration(path)
        self.assertEqual(configuration.arithmetic, "float")
        self.assertEqual(configuration.max_denominator, 20)

    def test_load_rejects_non_object(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "balancer.json"
            path.write_text("[1, 2]")
            with self.assertRaises(ValueError):
                load_configuration(path)


class TestConfigureLogging(unittest.TestCase):
    def test_level_from_environment(self):
        with mock.patch.dict(os.environ, {"CHEMBALANCE_LOG_LEVEL": "debug"}):
            with mock.patch("logging.basicConfig") as basic_config:
                configure_logging()
        self.assertEqual(basic_config.call_args.kwargs["level"], logging.DEBUG)

    def test_explicit_level(self):
        with mock.patch("logging.basicConfig") as basic_config:
            configure_logging(logging.INFO)
        self.assertEqual(basic_config.call_args.kwargs["level"], logging.INFO)


if __name__ == '__main__':
    unittest.main()
