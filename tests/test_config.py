from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from branchpicker import config


class ConfigBehaviorTests(unittest.TestCase):
    def test_missing_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("branchpicker.config.CONFIG_PATH", Path(tmp) / "missing.json"):
                settings = config.load_settings()

        self.assertEqual(settings, config.Settings())
        self.assertTrue(settings.stash_default)
        self.assertEqual(settings.recent_limit, 17)
        self.assertEqual(settings.min_width, 60)

    def test_malformed_config_yields_defaults(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text("{not json", encoding="utf-8")
            with mock.patch("branchpicker.config.CONFIG_PATH", config_path):
                self.assertEqual(config.load_config(), {})
                self.assertEqual(config.load_settings(), config.Settings())

    def test_values_are_validated_independently(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            config_path.write_text(
                json.dumps(
                    {
                        "theme": " ocean ",
                        "min_width": 5,
                        "recent_limit": True,
                        "allow_space": "yes",
                        "stash_default": False,
                    }
                ),
                encoding="utf-8",
            )
            with mock.patch("branchpicker.config.CONFIG_PATH", config_path):
                settings = config.load_settings()

        self.assertEqual(settings.theme, "ocean")
        self.assertEqual(settings.min_width, 20)
        self.assertEqual(settings.recent_limit, 17)
        self.assertFalse(settings.allow_space)
        self.assertFalse(settings.stash_default)

    def test_save_theme_name_preserves_other_keys(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "nested" / "config.json"
            with mock.patch("branchpicker.config.CONFIG_PATH", config_path):
                config.save_config({"recent_limit": 5})
                config.save_theme_name("ocean")
                config.save_theme_name("   ")

                saved = config.load_config()
                self.assertEqual(saved, {"recent_limit": 5, "theme": "ocean"})
                self.assertEqual(config.load_settings().recent_limit, 5)


if __name__ == "__main__":
    unittest.main()
