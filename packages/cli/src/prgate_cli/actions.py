"""GitHub Actions workflow integration: event payload and step outputs."""

from __future__ import annotations

import json
import logging
import os
import uuid
from pathlib import Path

logger = logging.getLogger(__name__)


def pull_number_from_event(event_path: str | None = None) -> int | None:
    """Return the pull request number of the triggering event, if any.

    Works for both ``pull_request`` events and ``issue_comment`` events on a
    pull request (where the number lives under ``issue``).
    """
    event_path = event_path or os.environ.get("GITHUB_EVENT_PATH")
    if not event_path or not Path(event_path).exists():
        return None
    with open(event_path, encoding="utf-8") as f:
        payload = json.load(f)
    for key in ("pull_request", "issue"):
        number = (payload.get(key) or {}).get("number")
        if number is not None:
            return int(number)
    return None


def set_output(name: str, value: str) -> None:
    """Write a step output to $GITHUB_OUTPUT; a no-op outside GitHub Actions."""
    output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return
    with open(output_path, "a", encoding="utf-8") as f:
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            f.write(f"{name}={value}\n")
    logger.debug("Wrote output %s to %s", name, output_path)
