"""check command — evaluate a pull request against the gate checks."""

from __future__ import annotations

import click
from rich.console import Console

from prgate_cli.actions import pull_number_from_event, set_output
from prgate_core.errors import ConfigError, UpstreamFetchError
from prgate_core.gate import evaluate
from prgate_core.gh.pull_request import get_repo

console = Console()


def _flag(name: str, help_text: str):
    option = name.replace("_", "-")
    return click.option(f"--{option}/--no-{option}", name, default=None, help=help_text)


def _fail(message: str) -> None:
    console.print(message, style="red", markup=False)
    set_output("message", message)
    raise click.exceptions.Exit(1)


@click.command("check")
@click.option("--repo", envvar="GITHUB_REPOSITORY", required=True, help="GitHub repository in owner/name format.")
@click.option(
    "--pr",
    "pr_number",
    type=int,
    default=None,
    help="Pull request number. Defaults to the pull request of the triggering workflow event.",
)
@click.option("--actor", envvar="GITHUB_ACTOR", default=None, help="User who must own the changed files.")
@click.option("--token", default=None, help="GitHub token. Defaults to GITHUB_TOKEN or the gh CLI session.")
@_flag("require_codeowners_file", "Require a CODEOWNERS file.")
@_flag("require_code_owner", "Check that the actor owns every changed file.")
@_flag("require_code_owner_review", "Check that a code owner has approved the pull request.")
@_flag("require_codeteams_file", "Require a CODETEAMS file.")
@_flag("require_code_team_review", "Check that a code team user has approved the pull request.")
@_flag("require_approved_review", "Check that at least one approved review exists.")
@click.option(
    "--required-mergeable-state",
    "required_mergeable_state",
    default=None,
    help='JSON list of allowed mergeable states, e.g. \'["clean","has_hooks"]\'. Use \'[]\' to skip the check.',
)
@click.pass_context
def check_cmd(ctx, repo: str, pr_number: int | None, actor: str | None, token: str | None, **overrides):
    """Check a pull request before another action is allowed, like auto merge.

    Exits with status 1 and writes a `message` step output when a check fails.

    \b
    Environment variables:
      GITHUB_TOKEN         GitHub token (or use --token / gh CLI)
      GITHUB_REPOSITORY    Default for --repo
      GITHUB_ACTOR         Default for --actor
      GITHUB_EVENT_PATH    Workflow event payload used to find the pull request
    """
    from prgate_cli.auth import resolve_github_token
    from prgate_core.config import load_config

    config_path = ctx.obj.get("config_path", ".prgate.yml") if ctx.obj else ".prgate.yml"
    try:
        config = load_config(config_path, cli_overrides=overrides)
    except ConfigError as e:
        raise click.UsageError(str(e))

    if pr_number is None:
        pr_number = pull_number_from_event()
    if pr_number is None:
        raise click.UsageError("This action requires a pull request or issue comment event.")

    actor = actor or config.get("github_actor")
    if config["require_code_owner"] and not actor:
        raise click.UsageError("require_code_owner needs an actor. Pass --actor or set GITHUB_ACTOR.")

    token = resolve_github_token(token)
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN, pass --token or run `gh auth login` first."
        )

    try:
        result = evaluate(get_repo(repo, token=token), pr_number, actor, config)
    except (UpstreamFetchError, ConfigError) as e:
        _fail(str(e))
    else:
        if not result.passed:
            _fail(f"{result.failure.check}: {result.failure.message}")
