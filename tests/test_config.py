import os
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from ipv4check.core import config as config_module
from ipv4check.core.config import Config


class TestConfig(unittest.TestCase):

    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.tmp_path = Path(self.tmp_dir.name)
        self.user_config = self.tmp_path / "user" / "config.toml"

        # Keep the real user file and working directory out of every test.
        patchers = [
            patch.object(config_module, "USER_CONFIG_PATH", self.user_config),
            patch("ipv4check.core.config.Path.cwd", return_value=self.tmp_path),
            patch.dict(os.environ, {}, clear=False),
        ]
        for patcher in patchers:
            patcher.start()
            self.addCleanup(patcher.stop)
        for key in [k for k in os.environ if k.startswith("IPV4CHECK_")]:
            del os.environ[key]

    def tearDown(self):
        self.tmp_dir.cleanup()

    def _write(self, path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    def test_defaults(self):
        config = Config()

        self.assertTrue(config.get("colors"))
        self.assertFalse(config.get("verbose"))
        self.assertTrue(config.get("show_hints"))
        self.assertEqual(config.output_format(), "text")
        self.assertTrue(config.get("interactive.prompt_again"))
        self.assertIsNone(config.get("missing.key"))
        self.assertEqual(config.get("missing.key", 3), 3)

    def test_defaults_are_not_shared(self):
        config = Config()
        config.set("interactive.header", False)
        self.assertTrue(Config().get("interactive.header"))

    def test_user_file_overrides_project_file(self):
        """Test that the user file is applied after the project file."""
        self._write(self.tmp_path / "ipv4check.toml", 'output = "md"\nshow_hints = false\n')
        self._write(self.user_config, 'output = "json"\n')

        config = Config()

        self.assertEqual(config.get("output"), "json")
        self.assertFalse(config.get("show_hints"))

    def test_explicit_file_replaces_default_locations(self):
        self._write(self.user_config, 'output = "json"\n')
        custom = self._write(self.tmp_path / "custom.toml", '[interactive]\nheader = false\n')

        config = Config(config_path=custom)

        self.assertEqual(config.get("output"), "text")
        self.assertFalse(config.get("interactive.header"))
        self.assertTrue(config.get("interactive.prompt_again"))

    def test_environment_overrides_files(self):
        custom = self._write(self.tmp_path / "custom.toml", 'verbose = false\n')
        env = {
            "IPV4CHECK_VERBOSE": "yes",
            "IPV4CHECK_COLORS": "0",
            "IPV4CHECK_OUTPUT": "HTML",
            "IPV4CHECK_PROMPT_AGAIN": "off",
        }
        with patch.dict(os.environ, env):
            config = Config(config_path=custom)

        self.assertTrue(config.get("verbose"))
        self.assertFalse(config.get("colors"))
        self.assertEqual(config.get("output"), "html")
        self.assertFalse(config.get("interactive.prompt_again"))

    def test_invalid_output_format_is_ignored(self):
        with patch.dict(os.environ, {"IPV4CHECK_OUTPUT": "yaml"}), patch("sys.stderr"):
            config = Config()
        self.assertEqual(config.output_format(), "text")

    def test_broken_file_warns(self):
        """Test that an unparsable file is reported but not fatal."""
        broken = self._write(self.tmp_path / "broken.toml", "output = \n")
        with patch("builtins.print") as mock_print:
            config = Config(config_path=broken)

        self.assertEqual(config.get("output"), "text")
        self.assertIn("Could not load config", mock_print.call_args[0][0])

    def test_save_and_reset_user_config(self):
        config = Config()
        config.save_user_setting("show_hints", False)

        self.assertFalse(config.get("show_hints"))
        self.assertTrue(self.user_config.exists())
        self.assertFalse(Config().get("show_hints"))
        self.assertIn("show_hints = false", self.user_config.read_text(encoding="utf-8"))

        self.assertTrue(Config.reset_user_config())
        self.assertFalse(self.user_config.exists())
        self.assertFalse(Config.reset_user_config())

    def test_save_keeps_environment_and_project_values_out(self):
        """Test that only the saved key and existing user settings are written."""
        self._write(self.tmp_path / "ipv4check.toml", "colors = false\n")
        self._write(self.user_config, "[interactive]\nheader = false\n")
        with patch.dict(os.environ, {"IPV4CHECK_OUTPUT": "json"}):
            config = Config()
            config.save_user_setting("show_hints", False)

        content = self.user_config.read_text(encoding="utf-8")
        self.assertIn("show_hints = false", content)
        self.assertIn("header = false", content)
        self.assertNotIn("output", content)
        self.assertNotIn("colors", content)

    def test_set_replaces_plain_parent(self):
        config = Config()
        config.set("colors.x", 1)
        self.assertEqual(config.get("colors"), {"x": 1})

    def test_conflicting_parent(self):
        config = Config()
        self.assertEqual(config.conflicting_parent("colors.x"), "colors")
        self.assertEqual(config.conflicting_parent("output.a.b"), "output")
        self.assertIsNone(config.conflicting_parent("interactive.header"))
        self.assertIsNone(config.conflicting_parent("new.key"))

    def test_boolean_environment_values(self):
        """Test that false-like values switch off and unknown values warn."""
        with patch.dict(os.environ, {"IPV4CHECK_SHOW_HINTS": "Off"}):
            self.assertFalse(Config().get("show_hints"))

        with patch.dict(os.environ, {"IPV4CHECK_COLORS": "maybe"}), patch("builtins.print") as mock_print:
            config = Config()

        self.assertTrue(config.get("colors"))
        mock_print.assert_called_once()
        self.assertIn("Invalid boolean value for colors: maybe", mock_print.call_args[0][0])


if __name__ == '__main__':
    unittest.main()
