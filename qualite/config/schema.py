"""Run configuration models.

Defines the enums and dataclasses describing a single qualite run.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Files(str, Enum):
    """How the files to process are selected."""
    ALL_IN_PWD = "all"
    INDEXED_IN_GIT = "indexed"
    STAGED_IN_GIT = "staged"
    MODIFIED_SINCE_UPSTREAM_IN_GIT = "modified"


class Verbosity(str, Enum):
    """Verbosity of the console report."""
    SILENT = "silent"
    LOG_ERRORS = "errors"
    LOG_EVERYTHING = "everything"


VALID_FILES = {e.value for e in Files}
VALID_VERBOSITIES = {e.value for e in Verbosity}
CONFIG_KEYS = {"command", "files", "whitelist", "blacklist", "verbosity", "max_parallel"}

DEFAULT_CONFIG_FILES = (".qualite.yml", ".qualite.yaml")


def default_max_parallel() -> int:
    """Number of processing units on the host."""
    return os.cpu_count() or 1


@dataclass
class RunConfiguration:
    """Everything a run needs, constant for its duration."""
    command: str
    files: Files = Files.STAGED_IN_GIT
    whitelist: list[str] = field(default_factory=list)
    blacklist: list[str] = field(default_factory=list)
    verbosity: Verbosity = Verbosity.LOG_ERRORS
    max_parallel: int = field(default_factory=default_max_parallel)
    source: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary for serialization."""
        return {
            "command": self.command,
            "files": self.files.value,
            "whitelist": list(self.whitelist),
            "blacklist": list(self.blacklist),
            "verbosity": self.verbosity.value,
            "max_parallel": self.max_parallel,
        }


@dataclass
class ValidationError:
    """A single validation error."""
    path: str
    message: str
    severity: str = "error"  # "error" or "warning"

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationError] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        return len(self.warnings)

    def __str__(self) -> str:
        if self.valid:
            msg = "Valid"
            if self.warnings:
                msg += f" ({self.warning_count} warnings)"
            return msg
        return "Invalid: " + "; ".join(str(e) for e in self.errors)
