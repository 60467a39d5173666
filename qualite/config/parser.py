"""YAML config file parser.

Reads `.qualite.yml` style files and merges them with explicit settings
into a RunConfiguration.
"""

from pathlib import Path
from typing import Any, Optional, Union

import yaml

from ..errors import ConfigurationError
from .schema import (
    CONFIG_KEYS,
    DEFAULT_CONFIG_FILES,
    VALID_FILES,
    VALID_VERBOSITIES,
    Files,
    RunConfiguration,
    Verbosity,
)


def parse_files(value: Union[str, Files]) -> Files:
    """Resolve a strategy name such as 'staged' into a Files member."""
    if isinstance(value, Files):
        return value
    if isinstance(value, str) and value.lower() in VALID_FILES:
        return Files(value.lower())
    raise ConfigurationError(
        f"Unknown file selection '{value}', expected one of: {', '.join(sorted(VALID_FILES))}"
    )


def parse_verbosity(value: Union[str, Verbosity]) -> Verbosity:
    """Resolve a verbosity name such as 'errors' into a Verbosity member."""
    if isinstance(value, Verbosity):
        return value
    if isinstance(value, str) and value.lower() in VALID_VERBOSITIES:
        return Verbosity(value.lower())
    raise ConfigurationError(
        f"Unknown verbosity '{value}', expected one of: {', '.join(sorted(VALID_VERBOSITIES))}"
    )


def find_config_file(cwd: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Return the first default config file present in cwd, if any."""
    base = Path(cwd) if cwd is not None else Path.cwd()
    for name in DEFAULT_CONFIG_FILES:
        candidate = base / name
        if candidate.is_file():
            return candidate
    return None


def parse_config_file(file_path: Union[str, Path]) -> dict[str, Any]:
    """Parse a YAML config file into normalized settings.

    Args:
        file_path: Path to the YAML config file.

    Returns:
        Dictionary holding only the keys present in the file.

    Raises:
        ConfigurationError: If the file is missing, not YAML, or malformed.
    """
    file_path = Path(file_path)

    if not file_path.is_file():
        raise ConfigurationError(f"Config file not found: {file_path}")

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {file_path}: {e}") from e

    if data is None:
        return {}

    return parse_config_data(data, source=str(file_path))


def parse_config_data(data: Any, source: str = "<inline>") -> dict[str, Any]:
    """Normalize already loaded config data.

    Raises:
        ConfigurationError: On unknown keys or values of the wrong type.
    """
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config must be a YAML mapping, got {type(data).__name__} in {source}")

    unknown = sorted(set(data) - CONFIG_KEYS)
    if unknown:
        raise ConfigurationError(f"Unknown config key(s) {', '.join(unknown)} in {source}")

    settings: dict[str, Any] = {}

    if "command" in data:
        if not isinstance(data["command"], str):
            raise ConfigurationError(f"'command' must be a string in {source}")
        settings["command"] = data["command"]

    if "files" in data:
        settings["files"] = parse_files(data["files"])

    if "verbosity" in data:
        settings["verbosity"] = parse_verbosity(data["verbosity"])

    for key in ("whitelist", "blacklist"):
        if key in data:
            settings[key] = _pattern_list(data[key], key, source)

    if "max_parallel" in data:
        value = data["max_parallel"]
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigurationError(f"'max_parallel' must be an integer in {source}")
        settings["max_parallel"] = value

    return settings


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    cwd: Optional[Union[str, Path]] = None,
    **overrides: Any,
) -> RunConfiguration:
    """Build a RunConfiguration from a config file and explicit overrides.

    Overrides that are None (or empty sequences for patterns) fall back to
    the config file, then to the built-in defaults.

    Raises:
        ConfigurationError: If the result has no command or the file is bad.
    """
    path = Path(config_path) if config_path is not None else find_config_file(cwd)
    settings = parse_config_file(path) if path is not None else {}

    for key, value in overrides.items():
        if key not in CONFIG_KEYS:
            raise ConfigurationError(f"Unknown setting '{key}'")
        if value is None or (key in ("whitelist", "blacklist") and not value):
            continue
        if key == "files":
            value = parse_files(value)
        elif key == "verbosity":
            value = parse_verbosity(value)
        elif key in ("whitelist", "blacklist"):
            value = list(value)
        settings[key] = value

    if not settings.get("command"):
        raise ConfigurationError("A command to run on each file is required.")

    return RunConfiguration(source=str(path) if path is not None else None, **settings)


def _pattern_list(value: Any, key: str, source: str) -> list[str]:
    """Accept a single pattern string or a list of pattern strings."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise ConfigurationError(f"'{key}' must be a string or a list of strings in {source}")
