"""Check outcomes passed between the evaluators and the orchestration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FailureKind(str, Enum):
    CONFIGURATION = "configuration"
    ATTRIBUTION = "attribution"
    APPROVAL = "approval"
    LABEL = "label"
    MERGEABILITY = "mergeability"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a single gate check.

    ``message`` is always human readable: on success it is an informational
    note (possibly empty), on failure it names the pull request and whatever
    actor, owners, label or state caused the failure.
    """

    check: str
    passed: bool
    message: str = ""
    kind: FailureKind | None = None

    @classmethod
    def ok(cls, check: str, message: str = "") -> CheckResult:
        return cls(check=check, passed=True, message=message)

    @classmethod
    def fail(cls, check: str, kind: FailureKind, message: str) -> CheckResult:
        return cls(check=check, passed=False, message=message, kind=kind)


@dataclass
class GateResult:
    """Result returned by evaluate() — the checks that passed and the first failure, if any."""

    pr_number: int
    passed_checks: list[str] = field(default_factory=list)
    notices: list[str] = field(default_factory=list)
    failure: CheckResult | None = None

    @property
    def passed(self) -> bool:
        return self.failure is None
