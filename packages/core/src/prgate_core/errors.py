"""Exceptions raised by prgate.

Rule violations are not exceptions — they are returned as CheckResult values
so the orchestration can report the first failing check. Exceptions are
reserved for problems that make an evaluation impossible: a broken config or
an upstream API failure.
"""

from __future__ import annotations


class PrGateError(Exception):
    """Base class for all prgate errors."""


class ConfigError(PrGateError):
    """Raised when .prgate.yml or a declarations file holds an unusable value."""


class UpstreamFetchError(PrGateError):
    """Raised when the code-hosting API fails for a reason other than 'not found'.

    Carries which operation failed and on which resource so the CLI can report
    it without inspecting the underlying PyGithub exception.
    """

    def __init__(self, operation: str, resource: str, cause: Exception | None = None):
        self.operation = operation
        self.resource = resource
        self.cause = cause
        message = f"Failed to {operation} {resource}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
