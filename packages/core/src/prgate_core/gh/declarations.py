"""Locating and loading CODEOWNERS / CODETEAMS files from the pull request's base ref."""

from __future__ import annotations

import logging

from prgate_core.declarations import (
    CODEOWNERS,
    CODETEAMS,
    OwnershipEntry,
    TeamRuleEntry,
    parse_code_owners,
    parse_code_teams,
)
from prgate_core.gh.pull_request import get_file_content

logger = logging.getLogger(__name__)

_SEARCH_DIRS = ("", ".github/", ".gitlab/", "docs/")


def candidate_paths(name: str) -> list[str]:
    return [f"{directory}{name}" for directory in _SEARCH_DIRS]


def find_declarations(repo, name: str, ref: str) -> str | None:
    """Return the content of the first ``name`` file found at ``ref``, or None."""
    logger.info("Get %s file:", name)
    for path in candidate_paths(name):
        content = get_file_content(repo, path, ref)
        if content is not None:
            logger.info("- Found: %s", path)
            return content
        logger.info("- Not found: %s", path)
    return None


def load_code_owners(repo, ref: str) -> tuple[OwnershipEntry, ...]:
    content = find_declarations(repo, CODEOWNERS, ref)
    return parse_code_owners(content) if content else ()


def load_code_teams(repo, ref: str) -> tuple[TeamRuleEntry, ...]:
    content = find_declarations(repo, CODETEAMS, ref)
    return parse_code_teams(content) if content else ()
