"""
Domain errors — everything the core raises on purpose.

The CLI is the only layer that turns these into exit codes; the core
just raises and lets the caller decide.
"""

from __future__ import annotations

from pathlib import Path


class CodegenError(Exception):
    """Base class for all orchestrator errors."""


class UnknownProject(CodegenError):
    """Raised when a project name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Invalid project name "{name}"!')


class FileAccessError(CodegenError):
    """Raised when cleanup cannot read or delete a file."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Cannot clean {path}: {cause}")
