"""
Project registry — read-only name → descriptor table.

Built once at startup (usually by config.loader) and handed to the
selection and dispatch code. There is no way to add or remove entries
after construction, so tests can build their own small registry
without touching any shared state.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from types import MappingProxyType

from autorest_codegen.core.errors import UnknownProject
from autorest_codegen.core.models.options import GENERATED_MARKER
from autorest_codegen.core.models.project import ProjectDescriptor

logger = logging.getLogger(__name__)


class ProjectRegistry:
    """Immutable, insertion-ordered mapping of project names to descriptors."""

    def __init__(
        self,
        projects: Iterable[ProjectDescriptor],
        marker: str = GENERATED_MARKER,
        source: Path | None = None,
    ):
        table: dict[str, ProjectDescriptor] = {}
        for project in projects:
            if project.name in table:
                raise ValueError(f"Duplicate project name '{project.name}'")
            table[project.name] = project
        self._projects = MappingProxyType(table)
        self._marker = marker
        self._source = source

    @property
    def marker(self) -> str:
        """Provenance marker stamped on generated files."""
        return self._marker

    @property
    def source(self) -> Path | None:
        """File the registry was loaded from, if any."""
        return self._source

    def lookup(self, name: str) -> ProjectDescriptor:
        """Return the descriptor for ``name``.

        Raises:
            UnknownProject: If no project has that name.
        """
        try:
            return self._projects[name]
        except KeyError:
            raise UnknownProject(name) from None

    def all_names(self) -> list[str]:
        """Project names in registry order."""
        return list(self._projects.keys())

    def __contains__(self, name: object) -> bool:
        return name in self._projects

    def __iter__(self) -> Iterator[ProjectDescriptor]:
        return iter(self._projects.values())

    def __len__(self) -> int:
        return len(self._projects)

    def __repr__(self) -> str:
        return f"<ProjectRegistry projects={len(self)} source={self._source}>"


def parse_project_names(raw: str | None) -> list[str] | None:
    """Split a ``--projects`` value into names.

    Whitespace anywhere in a name is dropped. Empty fragments are kept
    as empty names, which the registry rejects. ``None`` (flag not
    given) stays ``None`` = all projects.
    """
    if raw is None:
        return None
    return ["".join(part.split()) for part in raw.split(",")]


def resolve_selection(
    registry: ProjectRegistry,
    names: list[str] | None = None,
) -> list[ProjectDescriptor]:
    """Resolve requested names to descriptors, in request order.

    Every name is checked before anything is returned, so one bad name
    means no project is processed at all.

    Args:
        registry: The project registry.
        names: Requested names, or None for every project.

    Returns:
        Descriptors to process.

    Raises:
        UnknownProject: For the first name that is not registered.
    """
    if names is None:
        return list(registry)

    selected = [registry.lookup(name) for name in names]
    logger.debug("Selected projects: %s", [p.name for p in selected])
    return selected
