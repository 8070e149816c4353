"""
Registry check use case — lint projects.yml and report issues.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path, PureWindowsPath

from autorest_codegen.core.config.loader import RegistryError, load_registry
from autorest_codegen.core.services.project_registry import ProjectRegistry


@dataclass
class RegistryCheckResult:
    """Result of registry validation."""

    valid: bool = False
    registry: ProjectRegistry | None = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "valid": self.valid,
            "source": str(self.registry.source) if self.registry and self.registry.source else None,
            "project_count": len(self.registry) if self.registry else 0,
            "errors": self.errors,
            "warnings": self.warnings,
        }


def check_registry(
    registry: ProjectRegistry | None = None,
    registry_path: Path | None = None,
) -> RegistryCheckResult:
    """Validate the project registry and report issues.

    Args:
        registry: Pre-loaded registry; loaded from ``registry_path``
            (or the bundled table) when None.
        registry_path: Registry file to load.

    Returns:
        RegistryCheckResult with validation status and any issues.
    """
    result = RegistryCheckResult()

    if registry is None:
        try:
            registry = load_registry(registry_path)
        except RegistryError as e:
            result.errors.append(str(e))
            return result

    result.registry = registry

    if len(registry) == 0:
        result.warnings.append("No projects defined. Nothing to generate.")

    packages_by_dir: dict[str, set[str]] = {}
    for project in registry:
        packages_by_dir.setdefault(project.output_dir, set()).add(project.namespace)

        if project.declared_namespace:
            result.warnings.append(
                f"Project '{project.name}': namespace {project.declared_namespace!r} "
                f"carries option text; split into {project.namespace!r}"
                + (f" and tag {project.tag!r}" if project.tag else "")
            )

        if project.tag and project.extra_args and "--tag=" in project.extra_args:
            result.errors.append(
                f"Project '{project.name}' sets a tag twice (tag: and --tag= in args)"
            )

        if project.spec_source.startswith("/") or PureWindowsPath(project.spec_source).drive:
            result.warnings.append(
                f"Project '{project.name}' has an absolute spec source: {project.spec_source}"
            )

        if "\\" in project.spec_source:
            result.warnings.append(
                f"Project '{project.name}' spec source uses backslashes: {project.spec_source}"
            )

        if any(not part.isidentifier() for part in project.namespace.split(".")):
            result.errors.append(
                f"Project '{project.name}' namespace is not a valid Java package: {project.namespace}"
            )

    for directory, packages in sorted(packages_by_dir.items()):
        if len(packages) > 1:
            result.warnings.append(
                f"Output directory '{directory}' is shared by different packages: "
                f"{', '.join(sorted(packages))}"
            )

    result.valid = len(result.errors) == 0
    return result
