"""Error taxonomy for qualite runs.

Per-file command failures are never raised; they are recorded as
results. Only misuse and selection failures abort a run.
"""


class QualiteError(Exception):
    """Base class for qualite failures."""


class ConfigurationError(QualiteError, ValueError):
    """Raised when run inputs are invalid. Always raised before any I/O."""


class SelectionError(QualiteError, RuntimeError):
    """Raised when the file list cannot be resolved (git or walk failure)."""

    def __init__(self, message: str, command: str = "", output: str = ""):
        super().__init__(message)
        self.command = command
        self.output = output


class SpawnError(QualiteError, OSError):
    """Raised when no process could be started for a shell command."""
