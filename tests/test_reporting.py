import json

import click

from qualite.config.schema import Files, RunConfiguration, Verbosity
from qualite.reporting import ConsoleReporter, JsonReporter, message_for_one_file, message_for_summary
from qualite.runner import ExecutionResult, RunOutcome, RunStatus


def _plain(message: str) -> str:
    return click.unstyle(message)


def test_success_with_empty_output() -> None:
    assert _plain(message_for_one_file("file1", "", 0, Verbosity.LOG_EVERYTHING)) == "  ✓ file1"


def test_success_output_shown_when_logging_everything() -> None:
    message = message_for_one_file("file1", "line1\nline2\nline3", 0, Verbosity.LOG_EVERYTHING)
    assert _plain(message) == "  ✓ file1\nline1\nline2\nline3"


def test_success_output_hidden_when_logging_errors() -> None:
    assert _plain(message_for_one_file("file1", "line1", 0, Verbosity.LOG_ERRORS)) == "  ✓ file1"


def test_failure_always_shows_exit_code_and_output() -> None:
    for verbosity in Verbosity:
        message = message_for_one_file("file1", "line1", 1, verbosity)
        assert _plain(message) == "  ✗ file1 (exit code: 1)\nline1"


def test_success_is_green_and_failure_red() -> None:
    assert message_for_one_file("f", "", 0, Verbosity.LOG_ERRORS) == click.style("  ✓ f", fg="green")
    assert message_for_one_file("f", "", 1, Verbosity.LOG_ERRORS) == click.style("  ✗ f (exit code: 1)", fg="red")


def test_spawn_failure_line() -> None:
    message = message_for_one_file("file1", "not found", 127, Verbosity.LOG_ERRORS, failed_to_spawn=True)
    assert _plain(message) == "  ✗ file1 (failed to start, exit code: 127)\nnot found"


def test_summary_all_succeeded() -> None:
    outcome = RunOutcome(tuple(ExecutionResult(f"file{i}", 0, "line1") for i in range(3)))
    assert _plain(message_for_summary(outcome, Verbosity.LOG_EVERYTHING)) == "\nSummary: 3/3 succeeded"


def test_summary_repeats_failures_in_completion_order() -> None:
    outcome = RunOutcome((
        ExecutionResult("c.txt", 2, "c broke"),
        ExecutionResult("a.txt", 0, "fine"),
        ExecutionResult("b.txt", 1, "b broke"),
    ))
    assert _plain(message_for_summary(outcome, Verbosity.LOG_ERRORS)) == (
        "\nSummary: 2/3 failed\n"
        "  ✗ c.txt (exit code: 2)\nc broke\n"
        "  ✗ b.txt (exit code: 1)\nb broke"
    )


def test_silent_reporter_prints_nothing(lines) -> None:
    reporter = ConsoleReporter(Verbosity.SILENT, echo=lines)
    reporter.report_result(ExecutionResult("a.txt", 1, "bad"))
    reporter.report_summary(RunOutcome((ExecutionResult("a.txt", 1, "bad"),)))
    reporter.report_nothing_to_process()
    reporter.report_exit(1)
    assert lines.messages == []


def test_nothing_to_process_line(lines) -> None:
    ConsoleReporter(echo=lines).report_nothing_to_process()
    assert lines.messages == ["  ✓ No file to process"]


def test_json_report(tmp_path) -> None:
    outcome = RunOutcome((
        ExecutionResult("b.txt", 1, "bad syntax", duration_ms=5),
        ExecutionResult("a.txt", 0, ""),
    ))
    config = RunConfiguration(command="lint", files=Files.INDEXED_IN_GIT, max_parallel=2)
    reporter = JsonReporter()

    report = reporter.generate(outcome, config, duration_ms=12)
    saved = reporter.save(report, tmp_path / "out" / "report.json")
    loaded = json.loads(saved.read_text(encoding="utf-8"))

    assert loaded["status"] == RunStatus.FAILURE.value
    assert loaded["exit_code"] == 1
    assert loaded["summary"] == {"total": 2, "succeeded": 1, "failed": 1, "duration_ms": 12}
    assert [f["file"] for f in loaded["files"]] == ["b.txt", "a.txt"]
    assert loaded["files"][0]["output"] == "bad syntax"
    assert loaded["config"]["files"] == "indexed"
