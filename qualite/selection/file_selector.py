"""Resolves a file selection strategy into the set of candidate files."""

import logging
from pathlib import Path
from typing import Mapping, Optional, Union

from ..config.schema import Files
from ..errors import ConfigurationError
from ..process.shell import SpawnFunction, run_shell
from .git import indexed_in_git, modified_since_upstream_in_git, staged_in_git
from .walker import list_files

logger = logging.getLogger(__name__)


def select_files(
    files: Files,
    spawn: SpawnFunction = run_shell,
    cwd: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> frozenset[str]:
    """Resolve a strategy into a file set.

    Args:
        files: Selection strategy.
        spawn: Shell primitive used for git commands.
        cwd: Root for the 'all files' walk. Defaults to the current directory.
        environ: Environment consulted for the upstream target branch.

    Returns:
        Deduplicated file paths, possibly empty.

    Raises:
        ConfigurationError: If files is not a Files member. No I/O happens.
        SelectionError: If git or the directory walk fails.
    """
    if not isinstance(files, Files):
        raise ConfigurationError(f"Unknown file selection: {files!r}")

    if files is Files.ALL_IN_PWD:
        selected = list_files(cwd)
    elif files is Files.INDEXED_IN_GIT:
        selected = indexed_in_git(spawn)
    elif files is Files.STAGED_IN_GIT:
        selected = staged_in_git(spawn)
    elif files is Files.MODIFIED_SINCE_UPSTREAM_IN_GIT:
        selected = modified_since_upstream_in_git(spawn, environ)
    else:
        raise ConfigurationError(f"Unsupported file selection: {files.value}")

    logger.info("Selected %d file(s) (%s)", len(selected), files.value)
    return selected
