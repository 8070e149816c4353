"""Adapters — process launchers for the generator.

Public re-exports for convenient access.
"""

from autorest_codegen.adapters.base import Adapter, LaunchContext
from autorest_codegen.adapters.mock import MockAdapter
from autorest_codegen.adapters.shell.command import ShellCommandAdapter

__all__ = [
    "Adapter",
    "LaunchContext",
    "MockAdapter",
    "ShellCommandAdapter",
]
