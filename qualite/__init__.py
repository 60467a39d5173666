"""qualite - run a process on a selection of files.

Typical use is to run a quality tool such as a formatter or a linter on
the project files in CI or from a git pre-commit hook.
"""

from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from .config.schema import Files, RunConfiguration, Verbosity, default_max_parallel
from .errors import ConfigurationError, QualiteError, SelectionError, SpawnError
from .filtering.patterns import PatternLike
from .process.shell import SpawnFunction
from .reporting.console_reporter import ConsoleReporter
from .runner.executor import ExecutionResult
from .runner.pipeline import QualiteRunner
from .runner.result_collector import RunOutcome, RunStatus

__version__ = "0.1.0"


def qualite(
    process_to_run: str,
    files_to_process: Files = Files.STAGED_IN_GIT,
    pattern_whitelist: Iterable[PatternLike] = (),
    pattern_blacklist: Iterable[PatternLike] = (),
    verbosity: Verbosity = Verbosity.LOG_ERRORS,
    max_parallel: Optional[int] = None,
    *,
    spawn: Optional[SpawnFunction] = None,
    reporter: Optional[ConsoleReporter] = None,
    cwd: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> RunOutcome:
    """Run a process on each selected file.

    Args:
        process_to_run: Process to run on each file; the path is appended.
        files_to_process: How the files to process are selected.
        pattern_whitelist: Files not matching any of these are ignored.
        pattern_blacklist: Files matching any of these are ignored.
        verbosity: Verbosity of the console report.
        max_parallel: Maximum processes running at a time. Defaults to the CPU count.
        spawn: Shell primitive override.
        reporter: Console reporter override.
        cwd: Working directory for selection and commands.
        environ: Environment used to resolve the upstream branch.

    Returns:
        RunOutcome. The process is never exited; use outcome.exit_code.

    Raises:
        ConfigurationError: On invalid arguments, before any I/O.
        SelectionError: If the file list cannot be resolved.
    """
    config = RunConfiguration(
        command=process_to_run,
        files=files_to_process,
        whitelist=list(pattern_whitelist),
        blacklist=list(pattern_blacklist),
        verbosity=verbosity,
        max_parallel=default_max_parallel() if max_parallel is None else max_parallel,
    )
    runner = QualiteRunner(config, spawn=spawn, reporter=reporter, cwd=cwd, environ=environ)
    return runner.execute()


__all__ = [
    "qualite",
    "Files",
    "Verbosity",
    "RunConfiguration",
    "ExecutionResult",
    "RunOutcome",
    "RunStatus",
    "QualiteRunner",
    "ConsoleReporter",
    "QualiteError",
    "ConfigurationError",
    "SelectionError",
    "SpawnError",
]
