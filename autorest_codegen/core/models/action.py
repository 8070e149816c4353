"""
Receipt model — what happened to one project during a run.

The dispatcher never lets a launch failure escape as an exception;
it records it here and moves on to the next project.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field


def _now_iso() -> str:
    """Current UTC time as ISO string."""
    return datetime.now(UTC).isoformat()


class Receipt(BaseModel):
    """Outcome of cleaning and launching the generator for a project."""

    project: str
    launcher: str = ""
    status: Literal["ok", "skipped", "failed"] = "ok"

    started_at: str = Field(default_factory=_now_iso)
    duration_ms: int = 0

    command: str = ""
    pid: int | None = None
    return_code: int | None = None    # only known when the run waits
    cleaned_files: int = 0

    output: str = ""
    error: str | None = None

    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    @property
    def failed(self) -> bool:
        return self.status == "failed"

    @classmethod
    def success(cls, project: str, launcher: str, command: str, **kwargs: Any) -> Receipt:
        """Create a success receipt."""
        return cls(project=project, launcher=launcher, command=command, status="ok", **kwargs)

    @classmethod
    def failure(cls, project: str, launcher: str, error: str, **kwargs: Any) -> Receipt:
        """Create a failure receipt."""
        return cls(project=project, launcher=launcher, status="failed", error=error, **kwargs)

    @classmethod
    def skip(cls, project: str, launcher: str, reason: str = "", **kwargs: Any) -> Receipt:
        """Create a skip receipt."""
        return cls(project=project, launcher=launcher, status="skipped", output=reason, **kwargs)
