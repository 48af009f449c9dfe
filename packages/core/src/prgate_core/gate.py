"""Gate orchestration: run the configured checks in order and stop at the first failure."""

from __future__ import annotations

import logging

from rich.console import Console

from prgate_core.approvals import is_approved
from prgate_core.gh.declarations import load_code_owners, load_code_teams
from prgate_core.gh.pull_request import get_changed_files, get_labels, get_pull_request, get_reviews
from prgate_core.mergeable import interpret_mergeable_state
from prgate_core.ownership import collect_owners, is_sole_owner
from prgate_core.results import CheckResult, FailureKind, GateResult
from prgate_core.teams import evaluate_team_rules

console = Console()
logger = logging.getLogger(__name__)

_CODEOWNERS_HELP = "About code owners: https://docs.github.com/articles/about-code-owners"


def _notice(result: GateResult, message: str) -> None:
    result.notices.append(message)
    console.print(message, style="yellow", markup=False)


def _record(result: GateResult, check: CheckResult) -> bool:
    """Record a check outcome on the gate result; return False if evaluation must stop."""
    if not check.passed:
        result.failure = check
        return False
    if check.message:
        console.print(check.message, markup=False)
    console.print(f"[green]Passed {check.check}[/green]")
    result.passed_checks.append(check.check)
    return True


def evaluate(repo, pr_number: int, actor: str | None, config: dict) -> GateResult:
    """Evaluate every enabled check against one pull request.

    Checks run in a fixed order — code owners file, actor ownership, owner (or
    plain) approval, code teams file, team approval, mergeable state — and the
    first failing one ends the evaluation. Rule violations are reported in the
    returned GateResult; only API failures (UpstreamFetchError) raise.
    """
    result = GateResult(pr_number=pr_number)

    pr = get_pull_request(repo, pr_number)
    if pr is None or not pr.base_ref or not pr.author_login:
        result.failure = CheckResult.fail(
            "pull_request", FailureKind.NOT_FOUND, f"Unable to get pull request {pr_number}."
        )
        return result
    author = pr.author_login

    owner_entries = ()
    files: list[str] = []
    if config["require_codeowners_file"] or config["require_code_owner"] or config["require_code_owner_review"]:
        owner_entries = load_code_owners(repo, pr.base_ref)

        if config["require_codeowners_file"]:
            console.print("Check require_codeowners_file")
            if not owner_entries:
                check = CheckResult.fail(
                    "require_codeowners_file",
                    FailureKind.CONFIGURATION,
                    f"Failed to get CODEOWNERS. This repository requires that a CODEOWNERS file exist "
                    f"in the {pr.base_ref} branch. {_CODEOWNERS_HELP}",
                )
            else:
                check = CheckResult.ok("require_codeowners_file")
            if not _record(result, check):
                return result

        files = get_changed_files(repo, pr_number)

        if config["require_code_owner"]:
            console.print("Check require_code_owner")
            if not owner_entries:
                _notice(
                    result,
                    f"Found no CODEOWNERS file in the {pr.base_ref} branch. Without a CODEOWNERS file, "
                    "require_code_owner and require_code_owner_review have no effect.",
                )
                check = CheckResult.ok("require_code_owner")
            elif not files:
                _notice(result, f"Could not find any changed files in pull request {pr_number}. This is unexpected.")
                check = CheckResult.ok("require_code_owner")
            elif actor and is_sole_owner(actor, files, owner_entries):
                check = CheckResult.ok("require_code_owner")
            else:
                check = CheckResult.fail(
                    "require_code_owner",
                    FailureKind.ATTRIBUTION,
                    f"User {actor} doesn't own all the changed files of pull request {pr_number}.",
                )
            if not _record(result, check):
                return result

    reviews = None
    if config["require_code_owner_review"] and owner_entries:
        console.print("Check require_code_owner_review")
        owners = collect_owners(files, owner_entries)
        reviews = get_reviews(repo, pr_number)
        if is_approved(reviews, owners, author):
            check = CheckResult.ok("require_code_owner_review")
        else:
            check = CheckResult.fail(
                "require_code_owner_review",
                FailureKind.APPROVAL,
                f"Pull request {pr_number} has not been approved by a code owner ({','.join(owners)}).",
            )
        if not _record(result, check):
            return result
    elif config["require_approved_review"]:
        console.print("Check require_approved_review")
        reviews = get_reviews(repo, pr_number)
        if is_approved(reviews, [], author):
            check = CheckResult.ok("require_approved_review")
        else:
            check = CheckResult.fail(
                "require_approved_review", FailureKind.APPROVAL, f"Pull request {pr_number} has not been approved."
            )
        if not _record(result, check):
            return result

    if config["require_codeteams_file"] or config["require_code_team_review"]:
        team_entries = load_code_teams(repo, pr.base_ref)

        if config["require_codeteams_file"]:
            console.print("Check require_codeteams_file")
            if not team_entries:
                check = CheckResult.fail(
                    "require_codeteams_file",
                    FailureKind.CONFIGURATION,
                    f"Failed to get CODETEAMS. This repository requires that a CODETEAMS file exist "
                    f"in the {pr.base_ref} branch.",
                )
            else:
                check = CheckResult.ok("require_codeteams_file")
            if not _record(result, check):
                return result

        if not team_entries:
            _notice(
                result,
                f"Found no CODETEAMS file in the {pr.base_ref} branch. Without a CODETEAMS file, "
                "require_code_team_review has no effect.",
            )
        elif config["require_code_team_review"]:
            console.print("Check require_code_team_review")
            labels = get_labels(repo, pr_number)
            if not labels:
                check = CheckResult.fail(
                    "require_code_team_review",
                    FailureKind.LABEL,
                    f"Pull request {pr_number} has no labels, but a code team review is required. "
                    "Please add a label according to the CODETEAMS file.",
                )
            else:
                if reviews is None:
                    reviews = get_reviews(repo, pr_number)
                check = evaluate_team_rules(team_entries, labels, reviews, author, pr_number)
            if not _record(result, check):
                return result

    allowed_states = config["required_mergeable_state"]
    if allowed_states:
        console.print("Check required_mergeable_state")
        check = interpret_mergeable_state(pr.merged, pr.mergeable, pr.mergeable_state, allowed_states, pr_number)
        if not _record(result, check):
            return result

    console.print("[bold]All checks completed.[/bold]")
    return result
