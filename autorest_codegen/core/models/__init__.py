"""
Domain models — Pydantic types for the orchestrator.

All models are re-exported here for convenient access:

    from autorest_codegen.core.models import ProjectDescriptor, GlobalOptions, Receipt
"""

from autorest_codegen.core.models.action import Receipt
from autorest_codegen.core.models.options import (
    DEFAULT_AUTOREST,
    DEFAULT_SPEC_ROOT,
    GENERATED_MARKER,
    GlobalOptions,
)
from autorest_codegen.core.models.project import GeneratorVariant, ProjectDescriptor

__all__ = [
    # action.py
    "Receipt",
    # options.py
    "DEFAULT_AUTOREST",
    "DEFAULT_SPEC_ROOT",
    "GENERATED_MARKER",
    "GlobalOptions",
    # project.py
    "GeneratorVariant",
    "ProjectDescriptor",
]
