"""
Helpers shared by the CLI commands.
"""

from __future__ import annotations

import sys

import click

from autorest_codegen.core.services.project_registry import ProjectRegistry


def load_registry_or_exit(ctx: click.Context) -> ProjectRegistry:
    """Load the registry selected by --registry, or exit 1 with a message."""
    from autorest_codegen.core.config.loader import RegistryError, load_registry

    try:
        return load_registry(ctx.obj.get("registry_path"))
    except RegistryError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)
