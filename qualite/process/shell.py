"""Shell command primitive.

Runs a shell command string and captures its whole output. There is no
buffer cap: quality tools can print a lot on large files.
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Union

from ..errors import SpawnError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessResult:
    """Exit code and captured, stripped output of a finished process."""
    code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def combined_output(self) -> str:
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


SpawnFunction = Callable[[str], ProcessResult]


def run_shell(
    command: str,
    cwd: Optional[Union[str, Path]] = None,
) -> ProcessResult:
    """Run a command through the system shell.

    Args:
        command: Shell command string.
        cwd: Working directory. Defaults to the current one.

    Returns:
        ProcessResult with the exit code and stripped stdout/stderr.

    Raises:
        SpawnError: If the shell itself could not be started.
    """
    logger.debug("spawn: %s", command)
    try:
        proc = subprocess.run(
            command,
            shell=True,
            cwd=str(cwd) if cwd is not None else None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as e:
        raise SpawnError(f"Failed to start '{command}': {e}") from e

    return ProcessResult(
        code=proc.returncode,
        stdout=(proc.stdout or "").strip(),
        stderr=(proc.stderr or "").strip(),
    )
