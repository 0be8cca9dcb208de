import os
import tempfile
import unittest
from pathlib import Path

from bracetopia.config import (
    ConfigError, GridConfig, PreferenceConfig, SimulationConfig,
    DEFAULT_DELAY_US, load_config, validate_config
)


class TestDefaults(unittest.TestCase):

    def test_defaults(self):
        config = SimulationConfig()
        self.assertEqual(config.grid.dimension, 15)
        self.assertEqual(config.preferences.strength, 50)
        self.assertEqual(config.preferences.vacancy, 20)
        self.assertEqual(config.preferences.endline, 60)
        self.assertEqual(config.delay_us, 900000)
        self.assertIsNone(config.cycle_limit)
        self.assertFalse(config.batch)


class TestValidation(unittest.TestCase):

    def test_valid_config_passes(self):
        config = SimulationConfig(cycle_limit=0)
        self.assertIs(validate_config(config), config)
        self.assertTrue(config.batch)

    def test_dimension_range(self):
        for bad in (4, 40):
            config = SimulationConfig(grid=GridConfig(dimension=bad))
            with self.assertRaises(ConfigError) as ctx:
                validate_config(config)
            self.assertEqual(str(ctx.exception),
                             f"dimension ({bad}) must be a value in [5...39]")
        validate_config(SimulationConfig(grid=GridConfig(dimension=5)))
        validate_config(SimulationConfig(grid=GridConfig(dimension=39)))

    def test_percentage_ranges(self):
        cases = [
            (PreferenceConfig(strength=0), "preference strength (0) must be a value in [1...99]"),
            (PreferenceConfig(vacancy=100), "vacancy (100) must be a value in [1...99]"),
            (PreferenceConfig(endline=0), "endline proportion (0) must be a value in [1...99]"),
        ]
        for prefs, message in cases:
            with self.assertRaises(ConfigError) as ctx:
                validate_config(SimulationConfig(preferences=prefs))
            self.assertEqual(str(ctx.exception), message)

    def test_negative_count_rejected(self):
        with self.assertRaises(ConfigError) as ctx:
            validate_config(SimulationConfig(cycle_limit=-1))
        self.assertIn("non-negative", str(ctx.exception))

    def test_negative_delay_falls_back(self):
        config = validate_config(SimulationConfig(delay_us=-5))
        self.assertEqual(config.delay_us, DEFAULT_DELAY_US)

    def test_config_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigError, ValueError))


class TestLoadConfig(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def write(self, text):
        path = Path(self.tmp.name) / 'config.yaml'
        path.write_text(text)
        return path

    def test_full_file(self):
        path = self.write(
            "grid:\n"
            "  dimension: 7\n"
            "preferences:\n"
            "  strength: 30\n"
            "  vacancy: 30\n"
            "  endline: 75\n"
            "simulation:\n"
            "  cycle_limit: 4\n"
            "  delay_us: 5000\n"
            "  seed: 42\n"
            "export:\n"
            "  csv: true\n"
        )
        config = load_config(path)
        self.assertEqual(config.grid.dimension, 7)
        self.assertEqual(config.preferences.strength, 30)
        self.assertEqual(config.preferences.vacancy, 30)
        self.assertEqual(config.preferences.endline, 75)
        self.assertEqual(config.cycle_limit, 4)
        self.assertEqual(config.delay_us, 5000)
        self.assertEqual(config.seed, 42)
        self.assertTrue(config.csv_enabled)
        self.assertFalse(config.gif_enabled)

    def test_empty_file_uses_defaults(self):
        config = load_config(self.write(""))
        self.assertEqual(config.grid.dimension, 15)
        self.assertIsNone(config.cycle_limit)

    def test_partial_file(self):
        config = load_config(self.write("preferences:\n  strength: 80\n"))
        self.assertEqual(config.preferences.strength, 80)
        self.assertEqual(config.preferences.vacancy, 20)

    def test_bad_section(self):
        with self.assertRaises(ConfigError):
            load_config(self.write("grid: 12\n"))

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            load_config(Path(self.tmp.name) / 'missing.yaml')

    def test_shipped_default_config(self):
        root = Path(__file__).resolve().parent.parent
        path = root / 'configs' / 'default.yaml'
        if not os.path.exists(path):
            self.skipTest("configs/default.yaml not present")
        config = validate_config(load_config(path))
        self.assertEqual(config.grid.dimension, 15)
        self.assertFalse(config.batch)


if __name__ == '__main__':
    unittest.main()
