"""Attribution of changed files to CODEOWNERS owners."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from prgate_core.declarations import OwnershipEntry

logger = logging.getLogger(__name__)


def _relative(path: str) -> str:
    return path[1:] if path.startswith("/") else path


def is_valid_owner(owner: str) -> bool:
    """Only individual users (``@login``) can be attributed; teams and bare names are skipped."""
    if "/" in owner:
        logger.warning("Owner %s is a team. This owner will be ignored.", owner)
        return False
    if not owner.startswith("@"):
        logger.warning("Owner %s doesn't start with @. This owner will be ignored.", owner)
        return False
    return True


def owners_by_file(files: Iterable[str], entries: Sequence[OwnershipEntry]) -> dict[str, list[str]]:
    """Return the valid owners of every matching entry, per changed file."""
    result: dict[str, list[str]] = {}
    for file in files:
        relative_path = _relative(file)
        owners: list[str] = []
        for entry in entries:
            if not entry.matches(relative_path):
                continue
            for owner in entry.owners:
                if is_valid_owner(owner) and owner not in owners:
                    logger.info("Owner %s is a code owner of %s.", owner, relative_path)
                    owners.append(owner)
        result[file] = owners
    return result


def collect_owners(files: Iterable[str], entries: Sequence[OwnershipEntry]) -> list[str]:
    """Return every user owner of the changed files, ordered by first appearance.

    Entries are consulted in precedence order and all matching entries
    contribute, not only the first.
    """
    owners: list[str] = []
    for file_owners in owners_by_file(files, entries).values():
        for owner in file_owners:
            if owner not in owners:
                owners.append(owner)
    return owners


def is_sole_owner(actor: str, files: Sequence[str], entries: Sequence[OwnershipEntry]) -> bool:
    """Return True if ``actor`` owns every changed file.

    Two different rules are applied per file:

    * unowned test — only the *first* matching entry (highest precedence) is
      consulted; if it lists no owners the file is unowned and nobody owns it.
    * ownership test — the actor may appear in *any* matching entry.

    Fails closed when the actor is not listed anywhere in CODEOWNERS. A pull
    request without changed files is vacuously owned.
    """
    if not files:
        return True

    handle = f"@{actor}"
    if not any(handle in entry.owners for entry in entries):
        logger.info("User %s is not a code owner.", actor)
        return False

    for file in files:
        relative_path = _relative(file)
        matching = [entry for entry in entries if entry.matches(relative_path)]
        if matching and not matching[0].owners:
            logger.info("The file %s has no code owners.", file)
            return False
        if not any(handle in entry.owners for entry in matching):
            logger.info("The file %s is not owned by %s.", file, actor)
            return False
        logger.info("The file %s is owned by %s.", file, actor)
    return True
