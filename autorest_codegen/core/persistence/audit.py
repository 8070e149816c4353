"""
Audit ledger — NDJSON history of codegen runs.

One line per ``codegen`` run: the projects dispatched, how each launch
went and the exact command every project was generated with, so
"what was azure-mgmt-dns last generated with?" is a file read away.

Lines are only ever appended.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

AUDIT_ENV_VAR = "CODEGEN_AUDIT_FILE"


class AuditEntry(BaseModel):
    """One recorded run."""

    timestamp: str = Field(default_factory=lambda: datetime.now(UTC).isoformat())
    operation_id: str = ""
    operation_type: str = ""           # codegen
    projects: list[str] = Field(default_factory=list)

    status: str = ""                   # ok, partial, failed, aborted
    launches_total: int = 0
    launches_succeeded: int = 0
    launches_failed: int = 0
    files_cleaned: int = 0
    duration_ms: int = 0
    errors: list[str] = Field(default_factory=list)

    # spec_root, autorest, per-project commands, ...
    context: dict[str, Any] = Field(default_factory=dict)

    def command_for(self, project: str) -> str | None:
        """Command ``project`` was launched with in this run, if recorded."""
        return self.context.get("commands", {}).get(project)


class AuditWriter:
    """Appends entries to a ledger file and reads them back."""

    def __init__(self, path: Path):
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def write(self, entry: AuditEntry) -> None:
        """Append ``entry``. An unwritable ledger is logged, not raised."""
        record = entry.model_dump_json() + "\n"
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("a", encoding="utf-8") as ledger:
                ledger.write(record)
        except OSError as e:
            logger.error("Failed to write audit entry to %s: %s", self._path, e)
            return
        logger.debug("Recorded %s in %s", entry.operation_id, self._path)

    def read_all(self) -> list[AuditEntry]:
        """Every readable entry, oldest first. Damaged lines are skipped."""
        try:
            lines = self._path.read_text(encoding="utf-8").splitlines()
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.error("Cannot read audit ledger %s: %s", self._path, e)
            return []

        entries: list[AuditEntry] = []
        for number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            try:
                entries.append(AuditEntry.model_validate_json(line))
            except ValidationError as e:
                logger.warning("%s:%d: skipping unreadable entry (%s)", self._path, number, e)
        return entries

    def read_recent(self, n: int = 20) -> list[AuditEntry]:
        return self.read_all()[-n:]

    def last_for_project(self, project: str) -> AuditEntry | None:
        """Most recent run that dispatched ``project``."""
        for entry in reversed(self.read_all()):
            if project in entry.projects:
                return entry
        return None
