"""CODETEAMS rule evaluation: labels on the pull request select which teams must approve."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from prgate_core.approvals import SKIP_AUTHOR_CHECK, Review, is_approved
from prgate_core.declarations import TeamRuleEntry
from prgate_core.results import CheckResult, FailureKind

logger = logging.getLogger(__name__)

CHECK_NAME = "require_code_team_review"


def evaluate_team_rules(
    entries: Sequence[TeamRuleEntry],
    labels: Iterable[str],
    reviews: Sequence[Review],
    author: str,
    pr_number: int,
) -> CheckResult:
    """Require an approval from each rule's users for every CODETEAMS rule.

    Every rule's label must be present on the pull request; the first rule
    whose label is missing or whose users have not approved fails the check.
    """
    if not entries:
        message = "No CODETEAMS rules found; the code team review requirement has no effect."
        logger.warning(message)
        return CheckResult.ok(CHECK_NAME, message)

    label_set = set(labels)
    for entry in entries:
        if entry.label not in label_set:
            return CheckResult.fail(
                CHECK_NAME,
                FailureKind.LABEL,
                f"Found required label {entry.label} in the CODETEAMS file. "
                f"Please add the label to pull request {pr_number} and request a review.",
            )
        logger.info("Found label %s in pull request %s.", entry.label, pr_number)

        # A single listed user may approve their own pull request.
        rule_author = SKIP_AUTHOR_CHECK if len(entry.users) == 1 else author
        if not is_approved(reviews, entry.users, rule_author):
            return CheckResult.fail(
                CHECK_NAME,
                FailureKind.APPROVAL,
                f"Pull request {pr_number} has not been approved by a {entry.label} "
                f"code team user ({','.join(entry.users)}).",
            )
    return CheckResult.ok(CHECK_NAME)
