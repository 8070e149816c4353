"""
CLI commands for the project registry.

Thin wrappers over ``core.services.project_registry`` and
``core.use_cases.registry_check``.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from autorest_codegen.ui.cli.common import load_registry_or_exit


@click.group("projects")
def projects() -> None:
    """Projects — list, inspect and validate the registry."""


@projects.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_projects(ctx: click.Context, as_json: bool) -> None:
    """List registered projects in registry order."""
    registry = load_registry_or_exit(ctx)

    if as_json:
        click.echo(json.dumps([p.to_dict() for p in registry], indent=2))
        return

    click.secho(f"\n📦 {len(registry)} projects", fg="cyan", bold=True)
    if registry.source:
        click.echo(f"   from {registry.source}")
    click.echo()

    width = max((len(name) for name in registry.all_names()), default=0)
    for project in registry:
        labels = []
        if project.is_composite:
            labels.append("composite")
        if not project.fluent:
            labels.append("non-fluent")
        if project.tag:
            labels.append(f"tag {project.tag}")
        suffix = f"  [{', '.join(labels)}]" if labels else ""
        click.secho(f"   • {project.name:<{width}}", fg="magenta", nl=False)
        click.echo(f"  → {project.output_dir}{suffix}")

    click.echo()


@projects.command("show")
@click.argument("name")
@click.option("--spec-root", default=None, help="Spec root to show the resolved spec URL for.")
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    default=None,
    help="Ledger to look up the last run in (or set CODEGEN_AUDIT_FILE).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(
    ctx: click.Context,
    name: str,
    spec_root: str | None,
    audit_log: str | None,
    as_json: bool,
) -> None:
    """Show one project and the command that would regenerate it."""
    from autorest_codegen.core.engine.command_builder import build_command
    from autorest_codegen.core.errors import UnknownProject
    from autorest_codegen.core.models.options import GlobalOptions
    from autorest_codegen.core.persistence.audit import AUDIT_ENV_VAR, AuditWriter

    registry = load_registry_or_exit(ctx)
    try:
        project = registry.lookup(name)
    except UnknownProject as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    options = GlobalOptions(working_dir=Path.cwd())
    if spec_root:
        options = options.model_copy(update={"spec_root": spec_root.rstrip("/")})

    command = build_command(project, options).render()
    cleanup_target = project.cleanup_target(options.working_dir)

    ledger = audit_log or os.environ.get(AUDIT_ENV_VAR)
    last_run = AuditWriter(Path(ledger)).last_for_project(project.name) if ledger else None

    if as_json:
        data = project.to_dict()
        data["command"] = command
        data["cleanup_target"] = str(cleanup_target)
        if last_run is not None:
            data["last_run"] = {
                "operation_id": last_run.operation_id,
                "timestamp": last_run.timestamp,
                "command": last_run.command_for(project.name),
            }
        click.echo(json.dumps(data, indent=2))
        return

    click.secho(f"\n📦 {project.name}", fg="cyan", bold=True)
    click.echo(f"   Directory:  {project.output_dir}")
    click.echo(f"   Spec:       {options.spec_root}/{project.spec_source}")
    click.echo(f"   Namespace:  {project.namespace}")
    if project.tag:
        click.echo(f"   Tag:        {project.tag}")
    if project.extra_args:
        click.echo(f"   Args:       {project.extra_args}")
    click.echo(f"   Modeler:    {project.generator_variant.value}")
    click.echo(f"   Fluent:     {'yes' if project.fluent else 'no'}")
    click.echo(f"   Cleans:     {cleanup_target}")
    click.echo()
    click.secho("   Command:", fg="white", bold=True)
    click.echo(f"     {command}")
    if last_run is not None:
        click.echo()
        click.secho(f"   Last run:   {last_run.timestamp} ({last_run.operation_id})", fg="white")
        previous = last_run.command_for(project.name)
        if previous and previous != command:
            click.secho("     command has changed since then", fg="yellow")
    click.echo()


@projects.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, as_json: bool) -> None:
    """Validate the project registry."""
    from autorest_codegen.core.use_cases.registry_check import check_registry

    result = check_registry(registry_path=ctx.obj.get("registry_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.registry is not None
        click.secho("✅ Registry is valid", fg="green", bold=True)
        click.echo(f"   Projects: {len(result.registry)}")
    else:
        click.secho("❌ Registry errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()
