"""Result collector - folds per-file results into the run outcome."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from .executor import ExecutionResult


class RunStatus(str, Enum):
    """Overall status of a run."""
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class RunOutcome:
    """Results of a run, in completion order."""
    results: tuple[ExecutionResult, ...] = ()

    @property
    def failures(self) -> tuple[ExecutionResult, ...]:
        return tuple(r for r in self.results if not r.succeeded)

    @property
    def succeeded_count(self) -> int:
        return sum(1 for r in self.results if r.succeeded)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def total_count(self) -> int:
        return len(self.results)

    @property
    def status(self) -> RunStatus:
        return RunStatus.FAILURE if self.failures else RunStatus.SUCCESS

    @property
    def exit_code(self) -> int:
        """Process exit status a caller should use: 0 on success, else 1."""
        return 0 if self.status is RunStatus.SUCCESS else 1


@dataclass
class ResultCollector:
    """Collects results as they complete.

    When the expected files are known, each of them must be reported
    exactly once before the outcome can be built.
    """
    expected: Optional[frozenset[str]] = None
    results: list[ExecutionResult] = field(default_factory=list)
    _seen: set[str] = field(default_factory=set, init=False, repr=False)

    @classmethod
    def for_files(cls, files: Iterable[str]) -> "ResultCollector":
        return cls(expected=frozenset(files))

    def add(self, result: ExecutionResult) -> None:
        """Add a completed result."""
        if self.expected is not None and result.filename not in self.expected:
            raise ValueError(f"Unexpected result for '{result.filename}'")
        if result.filename in self._seen:
            raise ValueError(f"Duplicate result for '{result.filename}'")
        self._seen.add(result.filename)
        self.results.append(result)

    @property
    def pending(self) -> frozenset[str]:
        """Expected files that have no result yet."""
        if self.expected is None:
            return frozenset()
        return self.expected - self._seen

    def outcome(self) -> RunOutcome:
        """Freeze collected results into a RunOutcome.

        Raises:
            RuntimeError: If some expected file has no result.
        """
        if self.pending:
            raise RuntimeError(f"Missing result(s) for: {', '.join(sorted(self.pending))}")
        return RunOutcome(results=tuple(self.results))
