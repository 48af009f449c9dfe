"""Interpretation of GitHub's mergeable / mergeable_state fields."""

from __future__ import annotations

from collections.abc import Collection

from prgate_core.results import CheckResult, FailureKind

CHECK_NAME = "required_mergeable_state"

MERGEABLE_STATE_PHRASES = {
    "clean": "is in a clean state",
    "has_hooks": "has a passing commit status with pre-receive hooks",
    "unstable": "has a non-passing commit status (unstable)",
    "behind": "has out of date head ref",
    "blocked": "is blocked",
    "dirty": "is dirty, the merge commit cannot be cleanly created",
    "draft": "is blocked due to the pull request being a draft",
}
_UNDETERMINED = "is in an undetermined state"


def describe_mergeable_state(state: str | None) -> str:
    return MERGEABLE_STATE_PHRASES.get(state or "", _UNDETERMINED)


def interpret_mergeable_state(
    merged: bool,
    mergeable: bool | None,
    mergeable_state: str | None,
    allowed_states: Collection[str],
    pr_number: int,
) -> CheckResult:
    """Classify the pull request's merge status against the allowed states.

    A merged pull request always passes. Unknown state strings are not
    rejected outright; they get the "undetermined" phrase and are still looked
    up in ``allowed_states``.
    """
    if merged:
        return CheckResult.ok(CHECK_NAME, f"Pull request {pr_number} is merged.")
    if mergeable is None:
        return CheckResult.fail(
            CHECK_NAME, FailureKind.MERGEABILITY, f"The mergeable state of pull request {pr_number} is unknown."
        )
    if mergeable:
        message = f"Pull request {pr_number} {describe_mergeable_state(mergeable_state)}."
        if mergeable_state in allowed_states:
            return CheckResult.ok(CHECK_NAME, message)
        return CheckResult.fail(CHECK_NAME, FailureKind.MERGEABILITY, message)
    return CheckResult.fail(CHECK_NAME, FailureKind.MERGEABILITY, f"Pull request {pr_number} is not mergeable.")
