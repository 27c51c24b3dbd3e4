"""Configuration loading and validation.

The command line belongs entirely to fizzy, so fizzy-md reads its own
settings from an optional JSON or YAML file and from environment variables,
in increasing order of precedence:

1. Built-in defaults
2. Configuration file named by FIZZY_MD_CONFIG
3. FIZZY_MD_* environment variables

Settings:
- delegate: Name of the executable looked up on PATH (FIZZY_MD_DELEGATE)
- temp_dir: Directory for temporary HTML files (FIZZY_MD_TEMP_DIR)
- keep_temp_files: Leave temporary files behind after fizzy exits
  (FIZZY_MD_KEEP_TEMP_FILES)
- log_level: debug, info, warning or error (FIZZY_MD_LOG_LEVEL)
- log_file: Write log records to this file instead of stderr (FIZZY_MD_LOG_FILE)
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from fizzy_md.core.exceptions import ConfigError

CONFIG_ENV_VAR = "FIZZY_MD_CONFIG"

DEFAULTS: dict[str, Any] = {
    "delegate": "fizzy",
    "temp_dir": None,
    "keep_temp_files": False,
    "log_level": "warning",
    "log_file": None,
}

ENV_VARS: dict[str, str] = {key: f"FIZZY_MD_{key.upper()}" for key in DEFAULTS}

LOG_LEVELS = ("debug", "info", "warning", "error")

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off", ""}


def load_config(path: Path) -> dict[str, Any]:
    """Load configuration from JSON or YAML file.

    Format is determined by file extension (.json, .yaml, .yml) or
    auto-detected if the extension is anything else.

    Args:
        path: Path to configuration file

    Returns:
        Configuration dictionary (empty for an empty YAML file)

    Raises:
        ConfigError: If file cannot be loaded, parsed, or is not a mapping

    Example:
        >>> from pathlib import Path
        >>> from fizzy_md.cli.config import load_config
        >>>
        >>> config = load_config(Path("fizzy-md.yaml"))
        >>> print(config["delegate"])  # "fizzy"
    """
    if not path.exists():
        raise ConfigError(f"Configuration file not found: {path}")

    try:
        content = path.read_text(encoding="utf-8")

        if path.suffix == ".json":
            data = json.loads(content)
        elif path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content)
        else:
            try:
                data = json.loads(content)
            except json.JSONDecodeError:
                data = yaml.safe_load(content)

    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration in {path} must be a mapping, got {type(data).__name__}")
    if not all(isinstance(key, str) for key in data):
        raise ConfigError(f"Configuration keys in {path} must be strings")
    return data


def config_from_env(environ: Mapping[str, str]) -> dict[str, Any]:
    """Collect settings given as FIZZY_MD_* environment variables.

    Args:
        environ: Environment mapping (usually os.environ)

    Returns:
        Raw string values keyed by setting name, only for variables that are set
    """
    return {key: environ[name] for key, name in ENV_VARS.items() if name in environ}


def merge_config(base: dict[str, Any], **overrides: Any) -> dict[str, Any]:
    """Merge overrides into base configuration.

    Only non-None override values are applied, so unset sources keep the
    values of lower-precedence ones.

    Args:
        base: Base configuration
        **overrides: Higher-precedence values

    Returns:
        New merged configuration dictionary

    Example:
        >>> from fizzy_md.cli.config import merge_config
        >>>
        >>> merge_config({"delegate": "fizzy"}, delegate="fizzy-dev")
        {'delegate': 'fizzy-dev'}
    """
    merged = base.copy()

    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def parse_bool(value: Any) -> bool:
    """Interpret a boolean setting given as bool or string.

    Raises:
        ValueError: If the value is not a recognized boolean spelling
    """
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def validate_config(config: dict[str, Any]) -> list[str]:
    """Validate configuration keys and values.

    Args:
        config: Configuration dictionary to validate

    Returns:
        List of validation error messages (empty list if valid)

    Example:
        >>> from fizzy_md.cli.config import validate_config
        >>>
        >>> validate_config({"log_level": "loud"})
        ["Invalid log_level 'loud' (expected one of: debug, info, warning, error)"]
    """
    errors = []

    for key in config:
        if key not in DEFAULTS:
            errors.append(f"Unknown configuration key: {key}")

    delegate = config.get("delegate")
    if delegate is not None and (not isinstance(delegate, str) or not delegate.strip()):
        errors.append(f"Invalid delegate {delegate!r} (expected a non-empty executable name)")

    log_level = config.get("log_level")
    if log_level is not None and str(log_level).lower() not in LOG_LEVELS:
        errors.append(
            f"Invalid log_level {log_level!r} (expected one of: {', '.join(LOG_LEVELS)})"
        )

    if "keep_temp_files" in config:
        try:
            parse_bool(config["keep_temp_files"])
        except ValueError as e:
            errors.append(f"Invalid keep_temp_files: {e}")

    for key in ("temp_dir", "log_file"):
        value = config.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"Invalid {key} {value!r} (expected a path string)")

    temp_dir = config.get("temp_dir")
    if temp_dir and isinstance(temp_dir, str) and not Path(temp_dir).is_dir():
        errors.append(f"temp_dir does not exist or is not a directory: {temp_dir}")

    return errors


def load_settings(environ: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Build the effective settings for one run.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings with every key from DEFAULTS, values normalized

    Raises:
        ConfigError: If the configuration file or any setting is invalid
    """
    if environ is None:
        environ = os.environ

    cfg = dict(DEFAULTS)

    config_path = environ.get(CONFIG_ENV_VAR)
    if config_path:
        file_config = load_config(Path(config_path))
        cfg = merge_config(cfg, **file_config)

    cfg = merge_config(cfg, **config_from_env(environ))

    errors = validate_config(cfg)
    if errors:
        raise ConfigError("Invalid configuration: " + "; ".join(errors))

    cfg["keep_temp_files"] = parse_bool(cfg["keep_temp_files"])
    cfg["log_level"] = str(cfg["log_level"]).lower()
    cfg["temp_dir"] = cfg["temp_dir"] or None
    cfg["log_file"] = cfg["log_file"] or None
    return cfg
