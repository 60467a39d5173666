import logging

import pytest

from conftest import FakeSpawn, staged
from qualite import ConsoleReporter, Files, RunStatus, Verbosity, qualite
from qualite.errors import ConfigurationError, SelectionError
from qualite.process.shell import ProcessResult
from qualite.selection.git import LS_FILES


def _run(spawn, lines, verbosity=Verbosity.LOG_ERRORS, **kwargs):
    return qualite(
        "lint",
        verbosity=verbosity,
        spawn=spawn,
        reporter=ConsoleReporter(verbosity, echo=lines),
        **kwargs,
    )


def test_all_files_succeed(lines) -> None:
    spawn = FakeSpawn(files={"a.txt": (0, "all good"), "b.txt": (0, "all good")}, commands=staged("a.txt", "b.txt"))
    outcome = _run(spawn, lines, max_parallel=2)

    assert outcome.status is RunStatus.SUCCESS
    assert outcome.exit_code == 0
    assert sorted(lines.messages[:2]) == ["  ✓ a.txt", "  ✓ b.txt"]
    assert "Summary: 2/2 succeeded" in lines.text
    assert "all good" not in lines.text
    assert lines.messages[-1] == "exit with code 0"


def test_one_file_fails(lines) -> None:
    spawn = FakeSpawn(files={"b.txt": (1, "bad syntax")}, commands=staged("a.txt", "b.txt"))
    outcome = _run(spawn, lines, max_parallel=2)

    assert outcome.status is RunStatus.FAILURE
    assert outcome.exit_code == 1
    assert [m for m in lines.messages if m.startswith("  ✗")] == ["  ✗ b.txt (exit code: 1)\nbad syntax"]
    summary = next(m for m in lines.messages if "Summary:" in m)
    assert summary == "\nSummary: 1/2 failed\n  ✗ b.txt (exit code: 1)\nbad syntax"
    assert "  ✗ a.txt" not in lines.text
    assert lines.messages[-1] == "exit with code 1"


def test_log_everything_shows_success_output(lines) -> None:
    spawn = FakeSpawn(files={"a.txt": (0, "fine output"), "b.txt": (3, "broken")}, commands=staged("a.txt", "b.txt"))
    _run(spawn, lines, verbosity=Verbosity.LOG_EVERYTHING, max_parallel=1)

    assert lines.messages[:2] == ["  ✓ a.txt\nfine output", "  ✗ b.txt (exit code: 3)\nbroken"]


def test_silent_run_still_computes_status(lines) -> None:
    spawn = FakeSpawn(files={"b.txt": (1, "bad")}, commands=staged("a.txt", "b.txt"))
    outcome = _run(spawn, lines, verbosity=Verbosity.SILENT)

    assert outcome.status is RunStatus.FAILURE
    assert lines.messages == []


def test_nothing_to_process(lines) -> None:
    spawn = FakeSpawn(commands=staged())
    outcome = _run(spawn, lines)

    assert outcome.status is RunStatus.SUCCESS
    assert outcome.total_count == 0
    assert spawn.file_calls == []
    assert lines.messages == ["  ✓ No file to process", "exit with code 0"]


def test_everything_filtered_out_spawns_nothing(lines) -> None:
    spawn = FakeSpawn(commands=staged("a.ts", "b.ts"))
    outcome = _run(spawn, lines, pattern_whitelist=[r"\.json$"])

    assert outcome.total_count == 0
    assert spawn.file_calls == []


def test_patterns_narrow_processed_files(lines) -> None:
    spawn = FakeSpawn(commands={LS_FILES: ProcessResult(0, "a.json\npack/b.json\nc.ts")})
    outcome = _run(
        spawn,
        lines,
        files_to_process=Files.INDEXED_IN_GIT,
        pattern_whitelist=[r"\.json$"],
        pattern_blacklist=[r"^pack"],
    )

    assert [r.filename for r in outcome.results] == ["a.json"]
    assert spawn.file_calls == ["lint a.json 2>&1"]


def test_result_count_matches_filtered_files(lines) -> None:
    paths = [f"src/m{i}.py" for i in range(25)]
    spawn = FakeSpawn(files={p: (i % 4, "") for i, p in enumerate(paths)}, commands=staged(*paths), delay=0.001)
    outcome = _run(spawn, lines, max_parallel=5)

    assert sorted(r.filename for r in outcome.results) == sorted(paths)
    assert outcome.failed_count == len([i for i in range(25) if i % 4])


def test_single_worker_results_follow_sorted_files(lines) -> None:
    spawn = FakeSpawn(commands=staged("c.txt", "a.txt", "b.txt"))
    outcome = _run(spawn, lines, max_parallel=1)
    assert [r.filename for r in outcome.results] == ["a.txt", "b.txt", "c.txt"]


def test_selection_failure_aborts_before_processing(lines) -> None:
    spawn = FakeSpawn(commands={LS_FILES: ProcessResult(128, "fatal: not a git repository")})
    with pytest.raises(SelectionError):
        _run(spawn, lines, files_to_process=Files.INDEXED_IN_GIT)
    assert spawn.file_calls == []
    assert lines.messages == []


@pytest.mark.parametrize(
    "kwargs",
    [
        {"files_to_process": "staged"},
        {"max_parallel": 0},
        {"pattern_whitelist": ["("]},
        {"verbosity": "loud"},
    ],
)
def test_misuse_fails_before_any_io(kwargs) -> None:
    spawn = FakeSpawn(commands=staged("a.txt"))
    with pytest.raises(ConfigurationError):
        qualite("lint", spawn=spawn, **kwargs)
    assert spawn.calls == []


def test_oversubscribed_parallelism_is_logged(lines, caplog, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("os.cpu_count", lambda: 2)
    spawn = FakeSpawn(commands=staged("a.txt"))
    with caplog.at_level(logging.WARNING, logger="qualite"):
        outcome = _run(spawn, lines, max_parallel=3)

    assert outcome.status is RunStatus.SUCCESS
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "max_parallel: 3 exceeds the 2 available processing units" in warnings[0].getMessage()
