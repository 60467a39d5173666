"""Selection module - candidate file listing."""

from .file_selector import select_files
from .git import (
    DEFAULT_TARGET_BRANCH,
    lines_from_stdout,
    target_branch,
)
from .walker import list_files

__all__ = [
    "select_files",
    "DEFAULT_TARGET_BRANCH",
    "lines_from_stdout",
    "target_branch",
    "list_files",
]
