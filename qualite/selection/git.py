"""Git command surface used to list candidate files.

Only three git invocations are needed: tracked files, staged files and
files changed since the upstream target branch.
"""

import logging
import os
import re
from typing import Mapping, Optional

from ..errors import SelectionError, SpawnError
from ..process.shell import SpawnFunction, run_shell

logger = logging.getLogger(__name__)

LS_FILES = "git ls-files"
DIFF_STAGED = "git --no-pager diff --name-only --diff-filter=AM --staged"
DIFF_SINCE = "git --no-pager diff --name-only --diff-filter=AM {target}...HEAD"

# Pull request destination on Bitbucket Server (Stash) builds
STASH_DESTINATION_ENV = "STASH_PULL_REQUEST_BRANCH_DESTINATION"
# Change target on Jenkins multibranch builds
CHANGE_TARGET_ENV = "CHANGE_TARGET"
DEFAULT_TARGET_BRANCH = "origin/master"

_LINE_SPLIT = re.compile(r"\r?\n")


def target_branch(environ: Optional[Mapping[str, str]] = None) -> str:
    """Branch that local changes are compared against.

    Searches in order:
    1. STASH_PULL_REQUEST_BRANCH_DESTINATION (as stash/<branch>)
    2. CHANGE_TARGET (as upstream/<branch>)
    3. origin/master
    """
    env = os.environ if environ is None else environ

    stash_destination = env.get(STASH_DESTINATION_ENV)
    if stash_destination:
        return f"stash/{stash_destination}"

    change_target = env.get(CHANGE_TARGET_ENV)
    if change_target:
        return f"upstream/{change_target}"

    return DEFAULT_TARGET_BRANCH


def lines_from_stdout(stdout: str) -> frozenset[str]:
    """Parse newline separated paths. Empty output gives an empty set."""
    return frozenset(line for line in _LINE_SPLIT.split(stdout) if line.strip())


def git_lines(command: str, spawn: SpawnFunction = run_shell) -> frozenset[str]:
    """Run a git listing command and parse its output.

    Raises:
        SelectionError: If git could not be started or exited non-zero.
    """
    try:
        result = spawn(command)
    except SpawnError as e:
        raise SelectionError(f"Could not run '{command}': {e}", command=command) from e

    if result.code != 0:
        raise SelectionError(
            f"'{command}' failed with exit code {result.code}: {result.combined_output}",
            command=command,
            output=result.combined_output,
        )

    files = lines_from_stdout(result.stdout)
    logger.debug("%s listed %d file(s)", command, len(files))
    return files


def indexed_in_git(spawn: SpawnFunction = run_shell) -> frozenset[str]:
    """Files tracked by the git index."""
    return git_lines(LS_FILES, spawn)


def staged_in_git(spawn: SpawnFunction = run_shell) -> frozenset[str]:
    """Added or modified files staged for commit."""
    return git_lines(DIFF_STAGED, spawn)


def modified_since_upstream_in_git(
    spawn: SpawnFunction = run_shell,
    environ: Optional[Mapping[str, str]] = None,
) -> frozenset[str]:
    """Files added or modified since the target branch, plus staged ones."""
    target = target_branch(environ)
    logger.info("Comparing against %s", target)
    since_target = git_lines(DIFF_SINCE.format(target=target), spawn)
    return since_target | staged_in_git(spawn)
