"""CLI entry point for prgate.

Commands:
  check   — evaluate a pull request against the configured gate checks
  owners  — show which CODEOWNERS owners each changed file is attributed to
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.logging import RichHandler

from prgate_cli.commands.check import check_cmd
from prgate_cli.commands.owners import owners_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("prgate"),
    prog_name="prgate",
)
@click.option(
    "--config",
    "config_path",
    default=".prgate.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRGATE_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Log ownership and approval decisions.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Check a pull request against ownership, review and merge rules before automation proceeds."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(check_cmd)
main.add_command(owners_cmd)
