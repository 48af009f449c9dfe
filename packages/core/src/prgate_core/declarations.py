"""Parsing of CODEOWNERS and CODETEAMS declaration files.

Both files share one line grammar:

    <pattern-or-label> <owner> <owner> ...   # trailing comment

Entries are returned in *reversed* file order so that the last declared line
is evaluated first — the same "later lines override earlier ones" precedence
GitHub applies to CODEOWNERS.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from prgate_core.matcher import PathMatcher, build_matcher

logger = logging.getLogger(__name__)

CODEOWNERS = "CODEOWNERS"
CODETEAMS = "CODETEAMS"

_LINE_SPLIT_RE = re.compile(r"\r\n|\r|\n")
_COMMENT_RE = re.compile(r"#.*")
_QUOTED_LABEL_RE = re.compile(r'^"([^"]+)"(\s.*)?$')


@dataclass(frozen=True)
class OwnershipEntry:
    """One CODEOWNERS line: a gitignore-style pattern and the owners it names.

    An entry with no owners marks the matched paths as explicitly unowned.
    """

    pattern: str
    owners: tuple[str, ...]
    matcher: PathMatcher = field(compare=False, repr=False)

    def matches(self, path: str) -> bool:
        return self.matcher.matches(path)


@dataclass(frozen=True)
class TeamRuleEntry:
    """One CODETEAMS line: a pull request label and the users who may approve it."""

    label: str
    users: tuple[str, ...]


def _tokenize(text: str, allow_quoted: bool = False) -> list[tuple[str, tuple[str, ...]]]:
    rows: list[tuple[str, tuple[str, ...]]] = []
    seen: set[str] = set()
    for line in _LINE_SPLIT_RE.split(text):
        if not line.strip() or line.startswith("#"):
            continue
        # A quoted label may contain "#", so comments are stripped after it.
        quoted = _QUOTED_LABEL_RE.match(line.strip()) if allow_quoted else None
        if quoted:
            key = quoted.group(1)
            rest = _COMMENT_RE.sub("", quoted.group(2) or "").split()
        else:
            line = _COMMENT_RE.sub("", line).strip()
            if not line:
                continue
            key, *rest = line.split()

        if key in seen:
            logger.debug("Ignoring duplicate declaration for %s", key)
            continue
        seen.add(key)
        rows.append((key, tuple(rest)))
    rows.reverse()
    return rows


def parse_code_owners(text: str) -> tuple[OwnershipEntry, ...]:
    """Parse CODEOWNERS content into entries in evaluation (reversed) order."""
    return tuple(
        OwnershipEntry(pattern=pattern, owners=owners, matcher=build_matcher(pattern))
        for pattern, owners in _tokenize(text)
    )


def parse_code_teams(text: str) -> tuple[TeamRuleEntry, ...]:
    """Parse CODETEAMS content into entries in evaluation (reversed) order.

    A label containing spaces or ``#`` must be double-quoted: ``"needs review" @alice``.
    """
    return tuple(TeamRuleEntry(label=label, users=users) for label, users in _tokenize(text, allow_quoted=True))
