from __future__ import annotations

import logging
from dataclasses import dataclass

from github import Github, GithubException, UnknownObjectException

from prgate_core.approvals import Review
from prgate_core.errors import ConfigError, UpstreamFetchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PullRequestSummary:
    """The subset of a GitHub pull request the gate checks need."""

    number: int
    base_ref: str
    author_login: str | None
    merged: bool
    mergeable: bool | None
    mergeable_state: str | None


def get_repo(repo_name: str, token: str):
    try:
        return Github(token).get_repo(repo_name)
    except GithubException as e:
        raise UpstreamFetchError("get repository", repo_name, e) from e


def get_pull_request(repo, pr_number: int) -> PullRequestSummary | None:
    """Return a summary of the pull request, or None if it does not exist."""
    logger.info("Get pull request %s.", pr_number)
    try:
        pr = repo.get_pull(pr_number)
    except UnknownObjectException:
        return None
    except GithubException as e:
        raise UpstreamFetchError("get pull request", str(pr_number), e) from e
    return PullRequestSummary(
        number=pr.number,
        base_ref=pr.base.ref,
        author_login=pr.user.login if pr.user else None,
        merged=bool(pr.merged),
        mergeable=pr.mergeable,
        mergeable_state=pr.mergeable_state,
    )


def get_changed_files(repo, pr_number: int) -> list[str]:
    """Return the pull request's changed files, each prefixed with '/'."""
    logger.info("Get files in pull request %s.", pr_number)
    try:
        return [f"/{f.filename}" for f in repo.get_pull(pr_number).get_files()]
    except GithubException as e:
        raise UpstreamFetchError("get files in pull request", str(pr_number), e) from e


def get_reviews(repo, pr_number: int) -> list[Review]:
    """Return the pull request's reviews in the order GitHub lists them."""
    logger.info("Get reviews for pull request %s.", pr_number)
    try:
        return [
            Review(reviewer_login=r.user.login if r.user else None, state=r.state)
            for r in repo.get_pull(pr_number).get_reviews()
        ]
    except GithubException as e:
        raise UpstreamFetchError("get reviews for pull request", str(pr_number), e) from e


def get_labels(repo, pr_number: int) -> list[str]:
    logger.info("Get labels for issue %s.", pr_number)
    try:
        return [label.name for label in repo.get_issue(pr_number).get_labels()]
    except GithubException as e:
        raise UpstreamFetchError("get labels for issue", str(pr_number), e) from e


def get_file_content(repo, path: str, ref: str) -> str | None:
    """Return the UTF-8 text of ``path`` at ``ref``, or None if there is no such file.

    A leading byte order mark is dropped. Content that is not UTF-8 raises ConfigError.
    """
    try:
        contents = repo.get_contents(path, ref=ref)
    except UnknownObjectException:
        return None
    except GithubException as e:
        raise UpstreamFetchError("get file", f"{path}@{ref}", e) from e
    if isinstance(contents, list):
        # A directory with the requested name is not a declarations file.
        return None
    try:
        return contents.decoded_content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise ConfigError(f"{path}@{ref} is not valid UTF-8: {e}") from e
