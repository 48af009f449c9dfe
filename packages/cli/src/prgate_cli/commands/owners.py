"""owners command — show the CODEOWNERS attribution of a pull request's changed files."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from prgate_core.errors import UpstreamFetchError
from prgate_core.gh.declarations import load_code_owners
from prgate_core.gh.pull_request import get_changed_files, get_pull_request, get_repo
from prgate_core.ownership import owners_by_file

console = Console()


@click.command("owners")
@click.option("--repo", envvar="GITHUB_REPOSITORY", required=True, help="GitHub repository (owner/name).")
@click.option("--pr", "pr_number", type=int, required=True, help="Pull request number.")
@click.option("--token", default=None, help="GitHub token. Defaults to GITHUB_TOKEN or the gh CLI session.")
def owners_cmd(repo: str, pr_number: int, token: str | None):
    """List each changed file with the owners CODEOWNERS attributes it to.

    Reads CODEOWNERS from the pull request's base branch, the same file the
    `check` command evaluates. Team owners and owners without a leading @ are
    not attributed.
    """
    from prgate_cli.auth import resolve_github_token

    token = resolve_github_token(token)
    if not token:
        raise click.UsageError(
            "No GitHub token found. Set GITHUB_TOKEN, pass --token or run `gh auth login` first."
        )

    try:
        this_repo = get_repo(repo, token=token)
        pr = get_pull_request(this_repo, pr_number)
        if pr is None:
            raise click.ClickException(f"Unable to get pull request {pr_number}.")
        entries = load_code_owners(this_repo, pr.base_ref)
        files = get_changed_files(this_repo, pr_number)
    except UpstreamFetchError as e:
        raise click.ClickException(str(e))

    if not entries:
        console.print(f"[yellow]Found no CODEOWNERS file in the {pr.base_ref} branch.[/yellow]")
        return

    table = Table(title=f"Code owners — {repo}#{pr_number}", show_header=True, header_style="bold cyan")
    table.add_column("File")
    table.add_column("Owners")

    for file, owners in owners_by_file(files, entries).items():
        table.add_row(file, ", ".join(owners) if owners else "[dim]unowned[/dim]")

    console.print(table)
