"""Path matching for CODEOWNERS patterns.

CODEOWNERS patterns follow gitignore rules, so each pattern is translated to a
regex by pathspec's gitwildmatch implementation rather than fnmatch: fnmatch
has no notion of `**`, leading-slash anchoring or directory-only patterns,
and those decide who legally owns a file. Matching ignores case, so
``*.md`` also covers ``README.MD``.

The resolver only depends on the PathMatcher protocol, so the algorithm can be
swapped (e.g. for a stricter CODEOWNERS dialect) by changing build_matcher().
"""

from __future__ import annotations

import re
from typing import Protocol

from pathspec.patterns import GitWildMatchPattern

from prgate_core.errors import ConfigError


class PathMatcher(Protocol):
    def matches(self, path: str) -> bool: ...


class GitIgnoreMatcher:
    """Matches repository-relative paths against a single gitignore-style pattern.

    A pattern made only of a negation (``!docs/``) matches nothing: there is no
    earlier pattern for it to reverse.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        try:
            regex, include = GitWildMatchPattern.pattern_to_regex(pattern)
            self._regex = re.compile(regex, re.IGNORECASE) if regex is not None else None
        except (ValueError, re.error) as e:
            raise ConfigError(f"Invalid CODEOWNERS pattern {pattern!r}: {e}") from e
        self._include = bool(include)

    def matches(self, path: str) -> bool:
        relative = path[1:] if path.startswith("/") else path
        if not relative or self._regex is None or not self._include:
            return False
        return self._regex.match(relative) is not None

    def __repr__(self) -> str:
        return f"GitIgnoreMatcher({self.pattern!r})"


def build_matcher(pattern: str) -> PathMatcher:
    return GitIgnoreMatcher(pattern)
