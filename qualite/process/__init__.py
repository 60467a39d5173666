"""Process module - shell command execution."""

from .shell import ProcessResult, SpawnFunction, run_shell

__all__ = ["ProcessResult", "SpawnFunction", "run_shell"]
