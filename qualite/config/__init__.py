"""Config module - run configuration and YAML config files."""

from .schema import (
    DEFAULT_CONFIG_FILES,
    Files,
    RunConfiguration,
    ValidationError,
    ValidationResult,
    Verbosity,
    default_max_parallel,
)
from .parser import (
    find_config_file,
    load_config,
    parse_config_data,
    parse_config_file,
    parse_files,
    parse_verbosity,
)
from .validator import ensure_valid, validate_config

__all__ = [
    "DEFAULT_CONFIG_FILES",
    "Files",
    "RunConfiguration",
    "ValidationError",
    "ValidationResult",
    "Verbosity",
    "default_max_parallel",
    "find_config_file",
    "load_config",
    "parse_config_data",
    "parse_config_file",
    "parse_files",
    "parse_verbosity",
    "ensure_valid",
    "validate_config",
]
