"""
Codegen use case — regenerate the selected SDK projects.

The full vertical slice: load the registry, resolve the project
selection, then clean and launch the generator per project, and
optionally record the run in the audit ledger.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from autorest_codegen.adapters.base import Adapter
from autorest_codegen.core.config.loader import RegistryError, load_registry
from autorest_codegen.core.engine.executor import DispatchReport, dispatch, write_audit_entry
from autorest_codegen.core.errors import FileAccessError, UnknownProject
from autorest_codegen.core.models.options import GlobalOptions
from autorest_codegen.core.models.project import ProjectDescriptor
from autorest_codegen.core.persistence.audit import AuditWriter
from autorest_codegen.core.services.cleanup import CleanupResult, clean_generated
from autorest_codegen.core.services.project_registry import ProjectRegistry, resolve_selection

logger = logging.getLogger(__name__)


@dataclass
class CodegenResult:
    """Result of a codegen run."""

    report: DispatchReport | None = None
    projects_selected: list[str] = field(default_factory=list)
    dry_run: bool = False
    error: str | None = None

    def to_dict(self) -> dict:
        result: dict = {}
        if self.error:
            result["error"] = self.error
            if self.report is None:
                return result

        result["projects_selected"] = self.projects_selected
        result["dry_run"] = self.dry_run
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def run_codegen(
    options: GlobalOptions,
    registry: ProjectRegistry | None = None,
    registry_path: Path | None = None,
    launcher: Adapter | None = None,
    audit_path: Path | None = None,
    announce: Callable[[ProjectDescriptor, str], None] | None = None,
) -> CodegenResult:
    """Clean and regenerate the selected projects.

    Args:
        options: Run-wide options, including the project selection.
        registry: Pre-loaded registry. Loaded from ``registry_path``
            (or the bundled table) when None.
        registry_path: Registry file to load when ``registry`` is None.
        launcher: Launch adapter. Defaults to the shell launcher, or a
            recording mock in dry-run mode.
        audit_path: Append a ledger entry to this file when given.
        announce: Progress callback, see ``dispatch``.

    Returns:
        CodegenResult. ``error`` is set, with no report and nothing
        launched, when the registry is invalid or a project name is
        unknown. When cleanup fails part way, ``error`` is set and
        ``report`` holds the receipts of the projects already launched.
    """
    result = CodegenResult(dry_run=options.dry_run)

    # ── Load registry ────────────────────────────────────────────
    if registry is None:
        try:
            registry = load_registry(registry_path)
        except RegistryError as e:
            result.error = str(e)
            return result

    # ── Resolve selection (all names checked before any work) ────
    try:
        projects = resolve_selection(registry, options.selected_projects)
    except UnknownProject as e:
        logger.error("%s", e)
        result.error = str(e)
        return result

    result.projects_selected = [p.name for p in projects]

    # ── Set up launcher ──────────────────────────────────────────
    if launcher is None:
        from autorest_codegen.adapters.mock import MockAdapter
        from autorest_codegen.adapters.shell.command import ShellCommandAdapter

        if options.dry_run:
            launcher = MockAdapter(adapter_name="dry-run", skip=True)
        else:
            launcher = ShellCommandAdapter()

    # ── Dispatch ─────────────────────────────────────────────────
    report = dispatch(
        projects, options, launcher, marker=registry.marker, announce=announce
    )
    result.report = report
    if report.aborted:
        result.error = report.aborted

    if audit_path is not None and not options.dry_run:
        write_audit_entry(report, options, AuditWriter(audit_path))

    return result


@dataclass
class CleanResult:
    """Result of a cleanup-only run."""

    cleanups: list[CleanupResult] = field(default_factory=list)
    error: str | None = None

    @property
    def deleted_count(self) -> int:
        return sum(c.deleted_count for c in self.cleanups)

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "deleted": self.deleted_count,
            "cleanups": [c.to_dict() for c in self.cleanups],
        }


def run_clean(
    names: list[str] | None,
    working_dir: Path,
    registry: ProjectRegistry | None = None,
    registry_path: Path | None = None,
) -> CleanResult:
    """Delete generated sources for the selected projects, nothing else.

    Projects sharing an output package are cleaned once.
    """
    result = CleanResult()

    try:
        if registry is None:
            registry = load_registry(registry_path)
        projects = resolve_selection(registry, names)
    except (RegistryError, UnknownProject) as e:
        result.error = str(e)
        return result

    seen: set[Path] = set()
    for project in projects:
        target = project.cleanup_target(working_dir)
        if target in seen:
            continue
        seen.add(target)
        try:
            result.cleanups.append(clean_generated(target, registry.marker))
        except FileAccessError as e:
            logger.error("Cleanup failed: %s", e)
            result.error = str(e)
            return result

    return result
