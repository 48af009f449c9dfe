"""Approval sufficiency checks over a pull request's reviews."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

APPROVED = "APPROVED"

# Passed as ``author`` when self-approval is allowed, e.g. a CODETEAMS rule with a single user.
SKIP_AUTHOR_CHECK = None


@dataclass(frozen=True)
class Review:
    reviewer_login: str | None
    state: str


def is_approved(reviews: Iterable[Review] | None, required_owners: Sequence[str], author: str | None) -> bool:
    """Return True as soon as one review satisfies the approval requirement.

    A review qualifies when it is APPROVED and either:
      - no owners are required (any approval will do),
      - exactly one owner is required and the reviewer is that owner (the sole
        owner may approve their own pull request), or
      - the reviewer is a required owner and is not the pull request author.

    Reviews are scanned in the order the API returned them and are not
    deduplicated per reviewer: a stale CHANGES_REQUESTED from earlier does not
    cancel a later APPROVED from the same person, and vice versa.
    """
    if not reviews:
        return False
    for review in reviews:
        if review.state != APPROVED:
            continue
        handle = f"@{review.reviewer_login}"
        if not required_owners:
            return True
        if len(required_owners) == 1 and handle in required_owners:
            return True
        if handle in required_owners and (author is SKIP_AUTHOR_CHECK or author != review.reviewer_login):
            return True
    return False
