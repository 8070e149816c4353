"""
Engine executor — the per-project dispatch loop.

For each selected project, in order:
    clean generated sources → build command → launch → collect receipt

Projects are processed one at a time. Unless the run waits, each
generator process is started and left running while the loop moves on,
so several generators can be alive at once.
"""

from __future__ import annotations

import logging
import time
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path

from autorest_codegen.adapters.base import Adapter, LaunchContext
from autorest_codegen.core.engine.command_builder import build_command
from autorest_codegen.core.errors import FileAccessError
from autorest_codegen.core.models.action import Receipt
from autorest_codegen.core.models.options import GENERATED_MARKER, GlobalOptions
from autorest_codegen.core.models.project import ProjectDescriptor
from autorest_codegen.core.persistence.audit import AuditEntry, AuditWriter
from autorest_codegen.core.services.cleanup import CleanupResult, clean_generated

logger = logging.getLogger(__name__)


@dataclass
class DispatchReport:
    """Result of dispatching a set of projects."""

    operation_id: str = ""
    receipts: list[Receipt] = field(default_factory=list)
    cleanups: dict[str, CleanupResult] = field(default_factory=dict)
    duration_ms: int = 0
    aborted: str | None = None         # cleanup error that stopped the loop

    @property
    def total(self) -> int:
        return len(self.receipts)

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.receipts if r.ok)

    @property
    def failed(self) -> int:
        return sum(1 for r in self.receipts if r.failed)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.receipts if r.status == "skipped")

    @property
    def status(self) -> str:
        if self.aborted:
            return "aborted"
        if self.failed == 0:
            return "ok"
        if self.succeeded > 0:
            return "partial"
        return "failed"

    def to_dict(self) -> dict:
        return {
            "operation_id": self.operation_id,
            "status": self.status,
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "skipped": self.skipped,
            "aborted": self.aborted,
            "receipts": [r.model_dump(mode="json") for r in self.receipts],
            "cleanups": {name: c.to_dict() for name, c in self.cleanups.items()},
        }


def dispatch(
    projects: list[ProjectDescriptor],
    options: GlobalOptions,
    launcher: Adapter,
    marker: str = GENERATED_MARKER,
    announce: Callable[[ProjectDescriptor, str], None] | None = None,
) -> DispatchReport:
    """Clean and launch the generator for each project.

    A package directory shared by several projects is cleaned once,
    before the first of them is launched, and never after a generator
    writing into it has started.

    Args:
        projects: Resolved projects, processed in this order.
        options: Run-wide options.
        launcher: Adapter that starts the generator process.
        marker: Provenance marker of generated files.
        announce: Called with each project and its rendered command
            right before launch.

    Returns:
        DispatchReport with one receipt per launched project. When
        cleanup cannot read or delete a file the loop stops there:
        ``aborted`` holds the error and the receipts cover only the
        projects launched before it.
    """
    report = DispatchReport(operation_id=generate_operation_id())
    start = time.monotonic()
    cleaned_targets: set[Path] = set()

    for project in projects:
        cleaned = 0
        if not options.preserve and not options.dry_run:
            target = project.cleanup_target(options.working_dir)
            if target in cleaned_targets:
                logger.debug("%s already cleaned in this run, skipping", target)
            else:
                cleaned_targets.add(target)
                try:
                    cleanup = clean_generated(target, marker)
                except FileAccessError as e:
                    logger.error("Cleanup failed for %s: %s", project.name, e)
                    report.aborted = str(e)
                    break
                report.cleanups[project.name] = cleanup
                cleaned = cleanup.deleted_count

        command = build_command(project, options)
        rendered = command.render()
        logger.info(
            'Generating "%s" from spec file %s/%s',
            project.name,
            options.spec_root,
            project.spec_source,
        )
        logger.info("Command: %s", rendered)
        if announce is not None:
            announce(project, rendered)

        context = LaunchContext(
            project=project.name,
            command=rendered,
            cwd=str(options.working_dir),
            wait=options.await_completion,
        )
        try:
            receipt = launcher.execute(context)
        except Exception as e:
            # one bad launch must not stop the rest
            logger.error("Launcher %s raised for %s: %s", launcher.name, project.name, e)
            receipt = Receipt.failure(
                project=project.name,
                launcher=launcher.name,
                error=f"Unexpected error: {e}",
                command=rendered,
            )

        receipt.cleaned_files = cleaned
        report.receipts.append(receipt)

        status_marker = "✓" if receipt.ok else "✗" if receipt.failed else "⊘"
        logger.info("%s %s → %s", status_marker, project.name, receipt.status)

    report.duration_ms = int((time.monotonic() - start) * 1000)
    return report


def write_audit_entry(
    report: DispatchReport,
    options: GlobalOptions,
    audit_writer: AuditWriter,
) -> None:
    """Record a dispatch in the audit ledger."""
    errors = [f"{r.project}: {r.error}" for r in report.receipts if r.error]
    if report.aborted:
        errors.append(report.aborted)
    entry = AuditEntry(
        operation_id=report.operation_id,
        operation_type="codegen",
        projects=[r.project for r in report.receipts],
        status=report.status,
        launches_total=report.total,
        launches_succeeded=report.succeeded,
        launches_failed=report.failed,
        files_cleaned=sum(r.cleaned_files for r in report.receipts),
        duration_ms=report.duration_ms,
        errors=errors,
        context={
            "spec_root": options.spec_root,
            "autorest": options.autorest,
            "preserve": options.preserve,
            "waited": options.await_completion,
            "commands": {r.project: r.command for r in report.receipts},
        },
    )
    audit_writer.write(entry)


def generate_operation_id() -> str:
    """Generate a unique operation ID."""
    now = datetime.now(UTC).strftime("%Y%m%d-%H%M%S")
    short = uuid.uuid4().hex[:6]
    return f"op-{now}-{short}"
