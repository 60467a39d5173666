"""Run pipeline - orchestrates a full qualite run.

Coordinates the run flow:
1. Validate configuration
2. Select candidate files
3. Filter them by patterns
4. Run the command on each file
5. Collect and report results
"""

import functools
import logging
import time
from pathlib import Path
from typing import Mapping, Optional, Union

from ..config.schema import RunConfiguration
from ..config.validator import ensure_valid
from ..filtering.patterns import PatternSet, filter_files
from ..process.shell import SpawnFunction, run_shell
from ..reporting.console_reporter import ConsoleReporter
from ..selection.file_selector import select_files
from .executor import BoundedExecutor
from .result_collector import ResultCollector, RunOutcome

logger = logging.getLogger(__name__)


class QualiteRunner:
    """Selects, filters and processes files for one configuration."""

    def __init__(
        self,
        config: RunConfiguration,
        spawn: Optional[SpawnFunction] = None,
        reporter: Optional[ConsoleReporter] = None,
        cwd: Optional[Union[str, Path]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ):
        """Initialize the runner.

        Args:
            config: Run configuration.
            spawn: Shell primitive. Defaults to run_shell in cwd.
            reporter: Console reporter. Defaults to one at config.verbosity.
            cwd: Working directory for selection and commands.
            environ: Environment used to resolve the upstream branch.

        Raises:
            ConfigurationError: If the configuration or a pattern is invalid.
        """
        self.config = ensure_valid(config)
        self.patterns = PatternSet.of(config.whitelist, config.blacklist)
        self.cwd = cwd
        self.environ = environ
        if spawn is None:
            spawn = functools.partial(run_shell, cwd=cwd) if cwd is not None else run_shell
        self.spawn = spawn
        self.reporter = reporter or ConsoleReporter(config.verbosity)
        self.duration_ms = 0

    def files_to_run_on(self) -> list[str]:
        """Selected files that survive the patterns, sorted.

        Raises:
            SelectionError: If the file list cannot be resolved.
        """
        candidates = select_files(self.config.files, self.spawn, cwd=self.cwd, environ=self.environ)
        files = filter_files(candidates, self.patterns)
        logger.info("%d of %d file(s) kept after filtering", len(files), len(candidates))
        return files

    def execute(self) -> RunOutcome:
        """Run the command on every selected file.

        Returns:
            RunOutcome with one result per processed file.
        """
        start_time = time.time()
        try:
            files = self.files_to_run_on()
            collector = ResultCollector.for_files(files)

            if not files:
                self.reporter.report_nothing_to_process()
            else:
                executor = BoundedExecutor(self.config.command, self.config.max_parallel, self.spawn)
                for result in executor.run(files):
                    collector.add(result)
                    self.reporter.report_result(result)

            outcome = collector.outcome()
        finally:
            self.duration_ms = int((time.time() - start_time) * 1000)

        if outcome.total_count:
            self.reporter.report_summary(outcome)
        self.reporter.report_exit(outcome.exit_code)
        return outcome
