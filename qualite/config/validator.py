"""Configuration validator.

Validates a RunConfiguration before any file is selected or spawned.
"""

import logging
import re

from ..errors import ConfigurationError
from .schema import (
    Files,
    RunConfiguration,
    ValidationError,
    ValidationResult,
    Verbosity,
    default_max_parallel,
)

logger = logging.getLogger(__name__)


def validate_config(config: RunConfiguration) -> ValidationResult:
    """Validate a RunConfiguration.

    Checks:
    - Command is a non-empty string
    - Strategy and verbosity are known enum members
    - Parallelism is a positive integer
    - Every pattern compiles as a regular expression

    Args:
        config: Configuration to validate.

    Returns:
        ValidationResult with errors and warnings.
    """
    errors: list[ValidationError] = []
    warnings: list[ValidationError] = []

    if not isinstance(config.command, str) or not config.command.strip():
        errors.append(ValidationError(
            path="command",
            message="Command to run must be a non-empty string",
        ))

    if not isinstance(config.files, Files):
        errors.append(ValidationError(
            path="files",
            message=f"Unknown file selection: {config.files!r}",
        ))

    if not isinstance(config.verbosity, Verbosity):
        errors.append(ValidationError(
            path="verbosity",
            message=f"Unknown verbosity: {config.verbosity!r}",
        ))

    _validate_max_parallel(config, errors, warnings)

    for key in ("whitelist", "blacklist"):
        for i, pattern in enumerate(getattr(config, key)):
            _validate_pattern(pattern, f"{key}[{i}]", errors)

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def ensure_valid(config: RunConfiguration) -> RunConfiguration:
    """Raise ConfigurationError unless the configuration is valid.

    Warnings do not stop the run; they are logged.
    """
    result = validate_config(config)
    if not result.valid:
        raise ConfigurationError(str(result))
    for warning in result.warnings:
        logger.warning("Config %s", warning)
    return config


def _validate_max_parallel(
    config: RunConfiguration,
    errors: list[ValidationError],
    warnings: list[ValidationError],
) -> None:
    value = config.max_parallel
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        errors.append(ValidationError(
            path="max_parallel",
            message=f"Must be an integer >= 1, got {value!r}",
        ))
        return

    cpus = default_max_parallel()
    if value > cpus:
        warnings.append(ValidationError(
            path="max_parallel",
            message=f"{value} exceeds the {cpus} available processing units",
            severity="warning",
        ))


def _validate_pattern(pattern, path: str, errors: list[ValidationError]) -> None:
    if isinstance(pattern, re.Pattern):
        return
    if not isinstance(pattern, str):
        errors.append(ValidationError(path=path, message=f"Pattern must be a string, got {pattern!r}"))
        return
    try:
        re.compile(pattern)
    except re.error as e:
        errors.append(ValidationError(path=path, message=f"Invalid pattern '{pattern}': {e}"))
