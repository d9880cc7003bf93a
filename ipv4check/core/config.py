"""Manages configuration for ipv4check.

This module is responsible for loading, managing, and saving the application's
configuration settings. It aggregates settings from default values, TOML files,
and environment variables, providing a unified interface for accessing them.

Configuration only affects how results are presented. It never changes the
verdict for a candidate address.
"""

import copy
import os
import sys
from pathlib import Path
from typing import Dict, Any, Optional

try:
    import tomllib  # Available in Python 3.11+
except ImportError:
    import tomli as tomllib  # Fallback for Python versions < 3.11

import tomli_w

# The default path for the user-specific global configuration file.
USER_CONFIG_PATH = Path.home() / ".config" / "ipv4check" / "config.toml"
PROJECT_CONFIG_NAME = "ipv4check.toml"

OUTPUT_FORMATS = ("text", "json", "md", "html")

BOOLEAN_KEYS = ("colors", "verbose", "show_hints", "header", "prompt_again")
TRUE_VALUES = ("true", "1", "yes", "on")
FALSE_VALUES = ("false", "0", "no", "off")


def _set_in(target: Dict[str, Any], key_path: str, value: Any) -> None:
    """Sets a dot-separated key, replacing non-table parents with tables."""
    keys = key_path.split('.')
    for key in keys[:-1]:
        if key not in target or not isinstance(target[key], dict):
            target[key] = {}
        target = target[key]
    target[keys[-1]] = value


class Config:
    """Handles the configuration for the ipv4check application.

    This class loads configuration from multiple sources with a defined
    precedence:
    1.  Default values (lowest precedence).
    2.  Project-specific `ipv4check.toml` file.
    3.  User-level `~/.config/ipv4check/config.toml` file.
    4.  A custom configuration file specified at runtime, which replaces
        the two file locations above.
    5.  Environment variables (highest precedence).

    Attributes:
        DEFAULT_CONFIG (Dict[str, Any]): A dictionary containing the default
            configuration values.
    """

    DEFAULT_CONFIG = {
        "colors": True,
        "verbose": False,  # Show the reason next to each INVALID verdict.
        "show_hints": True,  # Print the format note after an INVALID verdict.
        "output": "text",  # Can be "text", "json", "md" or "html".
        "interactive": {
            "header": True,
            "prompt_again": True,
        },
    }

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initializes the configuration manager.

        Args:
            config_path (Optional[Path]): An optional path to a specific
                configuration file to load. If provided, it takes precedence
                over default file locations.
        """
        self.config = copy.deepcopy(self.DEFAULT_CONFIG)
        self._load_config(config_path)

    def _load_config(self, config_path: Optional[Path] = None) -> None:
        if config_path:
            self._load_file_config(Path(config_path))
        else:
            self._load_default_configs()

        self._load_env_config()

    def _load_default_configs(self) -> None:
        """Loads configs from standard locations if they exist."""
        project_config = Path.cwd() / PROJECT_CONFIG_NAME
        if project_config.exists():
            self._load_file_config(project_config)

        if USER_CONFIG_PATH.exists():
            self._load_file_config(USER_CONFIG_PATH)

    def _merge_configs(self, base: Dict[str, Any], new: Dict[str, Any]) -> None:
        """Recursively merges a new config dict into a base dict.

        Args:
            base (Dict[str, Any]): The base configuration dictionary.
            new (Dict[str, Any]): The new configuration to merge in.
        """
        for key, value in new.items():
            if isinstance(value, dict) and key in base and isinstance(base[key], dict):
                self._merge_configs(base[key], value)
            else:
                base[key] = value

    def _load_file_config(self, config_path: Path) -> None:
        """Loads and merges configuration from a TOML file.

        Args:
            config_path (Path): The path to the TOML configuration file.
        """
        try:
            with open(config_path, "rb") as f:
                file_config = tomllib.load(f)
        except (OSError, ValueError) as e:
            print(f"Warning: Could not load config from {config_path}: {e}", file=sys.stderr)
            return
        self._merge_configs(self.config, file_config)

    def _load_env_config(self) -> None:
        """Loads and merges configuration from environment variables."""
        env_mapping = {
            "IPV4CHECK_COLORS": "colors",
            "IPV4CHECK_VERBOSE": "verbose",
            "IPV4CHECK_SHOW_HINTS": "show_hints",
            "IPV4CHECK_OUTPUT": "output",
            "IPV4CHECK_HEADER": "interactive.header",
            "IPV4CHECK_PROMPT_AGAIN": "interactive.prompt_again",
        }

        for env_var, config_key in env_mapping.items():
            value = os.getenv(env_var)
            if value is not None:
                self._set_nested_key(config_key, value)

    def _set_nested_key(self, key_path: str, value: str) -> None:
        """Sets a value in the config dict using a dot-separated path.

        This method parses and casts values from environment variables,
        which are always strings.

        Args:
            key_path (str): The dot-separated key (e.g., "interactive.header").
            value (str): The string value from the environment variable.
        """
        keys = key_path.split('.')
        target_config = self.config
        for key in keys[:-1]:
            if key not in target_config or not isinstance(target_config[key], dict):
                target_config[key] = {}
            target_config = target_config[key]

        leaf_key = keys[-1]

        if leaf_key in BOOLEAN_KEYS:
            if value.lower() in TRUE_VALUES:
                target_config[leaf_key] = True
            elif value.lower() in FALSE_VALUES:
                target_config[leaf_key] = False
            else:
                print(f"Warning: Invalid boolean value for {leaf_key}: {value}", file=sys.stderr)
        elif leaf_key == "output":
            if value.lower() in OUTPUT_FORMATS:
                target_config[leaf_key] = value.lower()
            else:
                print(f"Warning: Invalid output format: {value}", file=sys.stderr)
        else:
            target_config[leaf_key] = value

    def get(self, key: str, default: Any = None) -> Any:
        """Retrieves a configuration value using a dot-separated key.

        Args:
            key (str): The dot-separated key (e.g., "interactive.header").
            default (Any): The default value to return if the key is not found.

        Returns:
            Any: The configuration value or the default.
        """
        keys = key.split('.')
        value = self.config
        try:
            for k in keys:
                value = value[k]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, key: str, value: Any) -> None:
        """Sets a configuration value in memory.

        Args:
            key (str): The dot-separated key (e.g., "interactive.header").
            value (Any): The value to set.
        """
        _set_in(self.config, key, value)

    def conflicting_parent(self, key: str) -> Optional[str]:
        """Returns the first parent of a key that holds a plain value, if any.

        Setting "colors.x" would otherwise overwrite the boolean "colors"
        with a table.

        Args:
            key (str): The dot-separated key (e.g., "interactive.header").

        Returns:
            Optional[str]: The conflicting parent key, or None.
        """
        keys = key.split('.')
        for i in range(1, len(keys)):
            parent = '.'.join(keys[:i])
            value = self.get(parent)
            if value is not None and not isinstance(value, dict):
                return parent
        return None

    def output_format(self) -> str:
        """Returns the configured report format, falling back to "text"."""
        output = self.get("output", "text")
        return output if output in OUTPUT_FORMATS else "text"

    def _get_user_config(self) -> Dict[str, Any]:
        """Loads and returns the contents of the user config file.

        Returns:
            Dict[str, Any]: The user configuration dictionary, or an empty
            dict if the file doesn't exist or fails to parse.
        """
        if not USER_CONFIG_PATH.exists():
            return {}
        try:
            with open(USER_CONFIG_PATH, "rb") as f:
                return tomllib.load(f)
        except (OSError, ValueError):
            return {}

    def save_user_setting(self, key: str, value: Any) -> None:
        """Stores a single setting in the user config file.

        Only the user file is read and rewritten, so values that came from
        environment variables or a project file are never persisted. The
        in-memory configuration is updated as well.

        Args:
            key (str): The dot-separated key (e.g., "interactive.header").
            value (Any): The value to store.

        Raises:
            IOError: If the configuration file cannot be written.
        """
        user_config = self._get_user_config()
        _set_in(user_config, key, value)
        self.set(key, value)

        try:
            USER_CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
            with open(USER_CONFIG_PATH, "wb") as f:
                tomli_w.dump(user_config, f)
        except (OSError, TypeError) as e:
            raise IOError(f"Failed to save configuration to {USER_CONFIG_PATH}: {e}")

    @staticmethod
    def reset_user_config() -> bool:
        """Deletes the user config file.

        Returns:
            bool: True if a file was removed, False if there was none.
        """
        if not USER_CONFIG_PATH.exists():
            return False
        USER_CONFIG_PATH.unlink()
        return True

    def __str__(self) -> str:
        return f"Config({self.config})"
