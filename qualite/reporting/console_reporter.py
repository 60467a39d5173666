"""Console reporter - coloured per-file lines and run summary."""

from typing import Callable, Optional

import click

from ..config.schema import Verbosity
from ..runner.executor import ExecutionResult
from ..runner.result_collector import RunOutcome

SUCCESS_SYMBOL = "✓"
FAILURE_SYMBOL = "✗"
NOTHING_TO_PROCESS = "No file to process"


def message_for_one_file(
    filename: str,
    output: str,
    exit_code: int,
    verbosity: Verbosity,
    failed_to_spawn: bool = False,
) -> str:
    """Format the report line of one file.

    Failures always carry their exit code and full output; successes only
    show their output under LOG_EVERYTHING.
    """
    succeeded = exit_code == 0 and not failed_to_spawn
    if succeeded:
        header = click.style(f"  {SUCCESS_SYMBOL} {filename}", fg="green")
    elif failed_to_spawn:
        header = click.style(f"  {FAILURE_SYMBOL} {filename} (failed to start, exit code: {exit_code})", fg="red")
    else:
        header = click.style(f"  {FAILURE_SYMBOL} {filename} (exit code: {exit_code})", fg="red")

    if output and (not succeeded or verbosity is Verbosity.LOG_EVERYTHING):
        return f"{header}\n{output}"
    return header


def message_for_result(result: ExecutionResult, verbosity: Verbosity) -> str:
    return message_for_one_file(
        result.filename,
        result.output,
        result.exit_code,
        verbosity,
        failed_to_spawn=result.failed_to_spawn,
    )


def message_for_summary(outcome: RunOutcome, verbosity: Verbosity) -> str:
    """Format the summary, repeating every failure in completion order."""
    if not outcome.failures:
        return click.style(
            f"\nSummary: {outcome.succeeded_count}/{outcome.total_count} succeeded",
            fg="green",
        )

    lines = [click.style(f"\nSummary: {outcome.failed_count}/{outcome.total_count} failed", fg="red")]
    lines.extend(message_for_result(r, verbosity) for r in outcome.failures)
    return "\n".join(lines)


class ConsoleReporter:
    """Prints run progress. Prints nothing at all when SILENT."""

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.LOG_ERRORS,
        echo: Optional[Callable[[str], None]] = None,
    ):
        self.verbosity = verbosity
        self._echo = echo or click.echo

    @property
    def enabled(self) -> bool:
        return self.verbosity is not Verbosity.SILENT

    def _print(self, message: str) -> None:
        if self.enabled:
            self._echo(message)

    def report_nothing_to_process(self) -> None:
        self._print(message_for_one_file(NOTHING_TO_PROCESS, "", 0, self.verbosity))

    def report_result(self, result: ExecutionResult) -> None:
        self._print(message_for_result(result, self.verbosity))

    def report_summary(self, outcome: RunOutcome) -> None:
        self._print(message_for_summary(outcome, self.verbosity))

    def report_exit(self, exit_code: int) -> None:
        self._print(f"exit with code {exit_code}")
