"""Bounded executor - runs the command once per file.

At most `max_parallel` processes are in flight. A worker that finishes
picks the next file of the queue; results are handed back in completion
order through a single queue, so the consumer is the only reader.
"""

import logging
import queue
import shlex
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from ..config.schema import default_max_parallel
from ..errors import ConfigurationError, SpawnError
from ..process.shell import SpawnFunction, run_shell

logger = logging.getLogger(__name__)

# Exit status used by POSIX shells when the command cannot be found
COMMAND_NOT_FOUND = 127


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of the command for a single file."""
    filename: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""
    failed_to_spawn: bool = False
    duration_ms: int = 0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0 and not self.failed_to_spawn

    @property
    def output(self) -> str:
        """Captured output; stderr is normally merged into stdout."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


class BoundedExecutor:
    """Runs a shell command on each file with a concurrency cap."""

    def __init__(
        self,
        command: str,
        max_parallel: Optional[int] = None,
        spawn: SpawnFunction = run_shell,
    ):
        """Initialize the executor.

        Args:
            command: Command template; the file path is appended to it.
            max_parallel: Maximum simultaneous processes. Defaults to the CPU count.
            spawn: Shell primitive.

        Raises:
            ConfigurationError: If command is empty or max_parallel < 1.
        """
        if max_parallel is None:
            max_parallel = default_max_parallel()
        if isinstance(max_parallel, bool) or not isinstance(max_parallel, int) or max_parallel < 1:
            raise ConfigurationError(f"max_parallel must be an integer >= 1, got {max_parallel!r}")
        if not command or not command.strip():
            raise ConfigurationError("Command to run must be a non-empty string")

        self.command = command
        self.max_parallel = max_parallel
        self.spawn = spawn

    def command_for(self, filename: str) -> str:
        """Shell command for one file, with stderr merged into stdout."""
        return f"{self.command} {shlex.quote(filename)} 2>&1"

    def run_one(self, filename: str) -> ExecutionResult:
        """Run the command on a single file. Never raises for command failures."""
        start_time = time.time()
        try:
            result = self.spawn(self.command_for(filename))
        except SpawnError as e:
            logger.debug("%s: spawn failed: %s", filename, e)
            return ExecutionResult(
                filename=filename,
                exit_code=COMMAND_NOT_FOUND,
                stdout=str(e),
                failed_to_spawn=True,
                duration_ms=int((time.time() - start_time) * 1000),
            )

        return ExecutionResult(
            filename=filename,
            exit_code=result.code,
            stdout=result.stdout,
            stderr=result.stderr,
            failed_to_spawn=self._command_not_found(result.code, result.combined_output),
            duration_ms=int((time.time() - start_time) * 1000),
        )

    def _command_not_found(self, code: int, output: str) -> bool:
        """Whether the shell reported that the program does not exist.

        A program that runs and exits 127 on its own is a plain failure.
        """
        if code != COMMAND_NOT_FOUND:
            return False
        program = self.command.split()[0]
        return any(
            (f"{program}: " in line and "not found" in line) or line.endswith(f"not found: {program}")
            for line in output.splitlines()
        )

    def run(self, files: Sequence[str]) -> Iterator[ExecutionResult]:
        """Run the command on every file, yielding results as they complete.

        Files are dispatched in the given order. Every file yields exactly
        one result; a failing file never stops the others.
        """
        files = list(files)
        if not files:
            return

        workers = min(self.max_parallel, len(files))
        logger.info("Running '%s' on %d file(s), %d at a time", self.command, len(files), workers)

        completed: "queue.Queue[Future]" = queue.Queue()
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="qualite") as pool:
            for filename in files:
                future = pool.submit(self.run_one, filename)
                future.add_done_callback(completed.put)

            for _ in range(len(files)):
                yield completed.get().result()
