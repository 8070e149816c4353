"""
Registry loader — reads projects.yml into a ProjectRegistry.

The bundled table ships inside the package (core/data/projects.yml).
A different table can be pointed at with --registry or the
CODEGEN_REGISTRY environment variable.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from autorest_codegen.core.data import BUNDLED_REGISTRY
from autorest_codegen.core.errors import CodegenError
from autorest_codegen.core.models.options import GENERATED_MARKER
from autorest_codegen.core.models.project import ProjectDescriptor
from autorest_codegen.core.services.project_registry import ProjectRegistry

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_FILE = BUNDLED_REGISTRY
REGISTRY_ENV_VAR = "CODEGEN_REGISTRY"


class RegistryError(CodegenError):
    """Raised when the project registry file is invalid or missing."""


def default_registry_path() -> Path:
    """Registry file to use when none is given explicitly."""
    override = os.environ.get(REGISTRY_ENV_VAR)
    if override:
        return Path(override)
    return DEFAULT_REGISTRY_FILE


def load_registry(path: Path | None = None) -> ProjectRegistry:
    """Load and validate a project registry.

    Args:
        path: Explicit registry file. If None, uses CODEGEN_REGISTRY or
            the bundled table.

    Returns:
        Validated, read-only ProjectRegistry.

    Raises:
        RegistryError: If the file is missing, unreadable or invalid.
    """
    if path is None:
        path = default_registry_path()

    if not path.is_file():
        raise RegistryError(f"Registry file not found: {path}")

    logger.debug("Loading project registry from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise RegistryError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise RegistryError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise RegistryError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    entries = data.get("projects")
    if not isinstance(entries, list):
        raise RegistryError(f"Expected a 'projects' list in {path}")

    marker = data.get("marker", GENERATED_MARKER)
    if not isinstance(marker, str) or not marker:
        raise RegistryError(f"'marker' must be a non-empty string in {path}")

    descriptors: list[ProjectDescriptor] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise RegistryError(f"Entry #{index + 1} in {path} is not a mapping")
        try:
            descriptors.append(ProjectDescriptor.model_validate(entry))
        except ValidationError as e:
            label = entry.get("name", f"#{index + 1}")
            raise RegistryError(f"Invalid project '{label}' in {path}: {e}") from e

    try:
        registry = ProjectRegistry(descriptors, marker=marker, source=path)
    except ValueError as e:
        raise RegistryError(f"{e} in {path}") from e

    logger.info("Loaded %d projects from %s", len(registry), path)
    return registry
