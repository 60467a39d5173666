import shlex
import threading
import time
from typing import Optional

import click
import pytest

from qualite.errors import SpawnError
from qualite.process.shell import ProcessResult


class FakeSpawn:
    """Stands in for run_shell.

    Git commands are answered from `commands`; per-file commands from
    `files`, keyed by the path found before the trailing `2>&1`.
    """

    def __init__(
        self,
        files: Optional[dict] = None,
        commands: Optional[dict] = None,
        delay: float = 0.0,
        unstartable: frozenset = frozenset(),
    ):
        self.files = files or {}
        self.commands = commands or {}
        self.delay = delay
        self.unstartable = unstartable
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def __call__(self, command: str) -> ProcessResult:
        with self._lock:
            self.calls.append(command)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                time.sleep(self.delay)
            if command in self.commands:
                return self.commands[command]
            filename = shlex.split(command)[-2]
            if filename in self.unstartable:
                raise SpawnError(f"cannot start {command}")
            code, output = self.files.get(filename, (0, ""))
            return ProcessResult(code=code, stdout=output)
        finally:
            with self._lock:
                self.in_flight -= 1

    @property
    def file_calls(self) -> list[str]:
        return [c for c in self.calls if c not in self.commands]


class Lines:
    """Collects echoed report messages without colours."""

    def __init__(self):
        self.messages: list[str] = []

    def __call__(self, message: str) -> None:
        self.messages.append(click.unstyle(message))

    @property
    def text(self) -> str:
        return "\n".join(self.messages)


@pytest.fixture
def lines() -> Lines:
    return Lines()


def staged(*paths: str) -> dict:
    from qualite.selection.git import DIFF_STAGED

    return {DIFF_STAGED: ProcessResult(code=0, stdout="\n".join(paths))}
