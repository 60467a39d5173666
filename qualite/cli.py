"""CLI entry point for qualite.

Usage:
    qualite "<command>" [options]
    python -m qualite "<command>" [options]
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from . import __version__
from .config.parser import load_config
from .config.schema import VALID_FILES, VALID_VERBOSITIES
from .errors import ConfigurationError, SelectionError
from .reporting.json_reporter import JsonReporter
from .runner.pipeline import QualiteRunner

logger = logging.getLogger("qualite")


class _EchoHandler(logging.Handler):
    """Writes records to whatever stderr is current when they are emitted."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def _configure_logging(debug: bool) -> None:
    """Send qualite diagnostics to stderr when --debug is given."""
    if not debug:
        return
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return
    handler = _EchoHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(handler)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("command", required=False)
@click.option(
    "-f", "--files",
    type=click.Choice(sorted(VALID_FILES), case_sensitive=False),
    help="How files are selected (default: staged).",
)
@click.option("-w", "--whitelist", multiple=True, metavar="PATTERN",
              help="Only process files matching one of these regexes.")
@click.option("-b", "--blacklist", multiple=True, metavar="PATTERN",
              help="Skip files matching any of these regexes.")
@click.option(
    "-v", "--verbosity",
    type=click.Choice(sorted(VALID_VERBOSITIES), case_sensitive=False),
    help="Console output level (default: errors).",
)
@click.option("-j", "--max-parallel", type=click.IntRange(min=1),
              help="Maximum processes running at a time (default: CPU count).")
@click.option("-c", "--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              help="YAML config file (default: .qualite.yml if present).")
@click.option("--report-file", type=click.Path(dir_okay=False, path_type=Path),
              help="Write a JSON report of the run to this file.")
@click.option("--debug", is_flag=True, help="Log diagnostics to stderr.")
@click.version_option(__version__, prog_name="qualite")
def main(
    command: Optional[str],
    files: Optional[str],
    whitelist: tuple[str, ...],
    blacklist: tuple[str, ...],
    verbosity: Optional[str],
    max_parallel: Optional[int],
    config_path: Optional[Path],
    report_file: Optional[Path],
    debug: bool,
) -> None:
    """Run COMMAND once on each selected file, the path appended to it.

    Exits with 0 when the command succeeded on every file, 1 otherwise.
    """
    _configure_logging(debug)

    try:
        config = load_config(
            config_path,
            command=command,
            files=files,
            whitelist=whitelist,
            blacklist=blacklist,
            verbosity=verbosity,
            max_parallel=max_parallel,
        )
        runner = QualiteRunner(config)
    except ConfigurationError as e:
        raise click.UsageError(str(e)) from e

    try:
        outcome = runner.execute()
    except SelectionError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        sys.exit(1)
    except KeyboardInterrupt:
        click.echo("Interrupted by user", err=True)
        sys.exit(130)

    if report_file:
        reporter = JsonReporter()
        report = reporter.generate(outcome, config, duration_ms=runner.duration_ms)
        saved_path = reporter.save(report, report_file)
        logger.info("Report saved: %s", saved_path)

    sys.exit(outcome.exit_code)


if __name__ == "__main__":
    main()
