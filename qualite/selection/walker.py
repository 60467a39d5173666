"""Recursive file listing for the 'all files' selection."""

import os
from pathlib import Path
from typing import Optional, Union

from ..errors import SelectionError


def list_files(root: Optional[Union[str, Path]] = None) -> frozenset[str]:
    """List every file below root, hidden and ignored ones included.

    Args:
        root: Directory to walk. Defaults to the current working directory.

    Returns:
        Absolute file paths.

    Raises:
        SelectionError: If root or one of its subdirectories cannot be read.
    """
    base = os.path.abspath(root if root is not None else os.getcwd())
    if not os.path.isdir(base):
        raise SelectionError(f"Not a directory: {base}")

    def _raise(error: OSError) -> None:
        raise SelectionError(f"Failed to list {error.filename}: {error.strerror}") from error

    files = set()
    for dirpath, _dirnames, filenames in os.walk(base, onerror=_raise):
        for name in filenames:
            files.add(os.path.join(dirpath, name))
    return frozenset(files)
