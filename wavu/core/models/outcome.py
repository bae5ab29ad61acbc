"""
TaskOutcome and InstallReport — the result contract of the pipeline.

Every requested runtime produces exactly one TaskOutcome, success or
failure.  Tasks never let errors escape: failures are captured here,
and the report aggregates them for the CLI summary.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class TaskOutcome(BaseModel):
    """Terminal result of one runtime's download + install."""

    name: str
    status: Literal["ok", "failed"] = "ok"

    started_at: str = Field(default_factory=now_iso)
    ended_at: str = Field(default_factory=now_iso)
    duration_ms: int = 0

    install_dir: str | None = None
    error: str | None = None
    error_kind: str | None = None                      # network, io, corrupt, ...
    phase: Literal["download", "install"] | None = None  # where it failed

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, name: str, install_dir: str | None = None, **kwargs: Any) -> TaskOutcome:
        """Create a success outcome."""
        return cls(name=name, status="ok", install_dir=install_dir, **kwargs)

    @classmethod
    def failure(
        cls,
        name: str,
        error: str,
        error_kind: str = "error",
        phase: Literal["download", "install"] | None = None,
        **kwargs: Any,
    ) -> TaskOutcome:
        """Create a failure outcome."""
        return cls(
            name=name,
            status="failed",
            error=error,
            error_kind=error_kind,
            phase=phase,
            **kwargs,
        )


class InstallReport(BaseModel):
    """Aggregate of all task outcomes for one pipeline run."""

    outcomes: dict[str, TaskOutcome] = Field(default_factory=dict)

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes.values() if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes.values() if o.failed)

    @property
    def all_ok(self) -> bool:
        return self.failed == 0

    @property
    def status(self) -> str:
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    @property
    def failed_names(self) -> list[str]:
        return sorted(name for name, o in self.outcomes.items() if o.failed)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "outcomes": {
                name: o.model_dump(mode="json")
                for name, o in sorted(self.outcomes.items())
            },
        }
