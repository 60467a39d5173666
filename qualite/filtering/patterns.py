"""Whitelist/blacklist filtering of candidate files."""

import re
from dataclasses import dataclass
from typing import Iterable, Pattern, Union

from ..errors import ConfigurationError

PatternLike = Union[str, Pattern[str]]


def compile_patterns(patterns: Iterable[PatternLike]) -> tuple[Pattern[str], ...]:
    """Compile pattern strings, leaving already compiled ones untouched.

    Raises:
        ConfigurationError: If a pattern is not a valid regular expression.
    """
    compiled = []
    for pattern in patterns:
        if isinstance(pattern, re.Pattern):
            compiled.append(pattern)
            continue
        try:
            compiled.append(re.compile(pattern))
        except (re.error, TypeError) as e:
            raise ConfigurationError(f"Invalid pattern {pattern!r}: {e}") from e
    return tuple(compiled)


@dataclass(frozen=True)
class PatternSet:
    """Inclusion and exclusion patterns for one run."""
    whitelist: tuple[Pattern[str], ...] = ()
    blacklist: tuple[Pattern[str], ...] = ()

    @classmethod
    def of(
        cls,
        whitelist: Iterable[PatternLike] = (),
        blacklist: Iterable[PatternLike] = (),
    ) -> "PatternSet":
        return cls(compile_patterns(whitelist), compile_patterns(blacklist))

    def is_whitelisted(self, path: str) -> bool:
        return not self.whitelist or any(p.search(path) for p in self.whitelist)

    def is_blacklisted(self, path: str) -> bool:
        return any(p.search(path) for p in self.blacklist)


def filter_files(files: Iterable[str], patterns: PatternSet) -> list[str]:
    """Narrow files by whitelist first, then drop blacklisted ones.

    A blacklisted file is never kept, whatever the whitelist says.

    Returns:
        Surviving paths, sorted.
    """
    kept = {f for f in files if patterns.is_whitelisted(f)}
    kept = {f for f in kept if not patterns.is_blacklisted(f)}
    return sorted(kept)
