"""
AutoRest codegen — CLI entrypoint.

Usage:
    autorest-codegen                      # usage + registered projects
    autorest-codegen codegen --projects compute,network
    autorest-codegen clean --projects storage
    autorest-codegen projects list
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from autorest_codegen import __version__
from autorest_codegen.core.models.options import DEFAULT_AUTOREST, DEFAULT_SPEC_ROOT
from autorest_codegen.core.observability.logging_config import resolve_level, setup_logging
from autorest_codegen.ui.cli.common import load_registry_or_exit


def _print_usage(ctx: click.Context) -> None:
    """Usage text plus the full list of project names."""
    registry = load_registry_or_exit(ctx)

    click.echo(
        "Usage: autorest-codegen codegen [--spec-root <swagger specs root>] "
        "[--projects <project names>] [--autorest <autorest info>] "
        "[--autorest-args <AutoRest arguments>]\n"
    )
    click.echo("--spec-root")
    click.echo(
        f'\tRoot location of Swagger API specs, default value is "{DEFAULT_SPEC_ROOT}"'
    )
    click.echo(
        "--projects\n\tComma separated projects to regenerate, default is all. "
        "List of available project names:"
    )
    for name in registry.all_names():
        click.echo("\t" + click.style(name, fg="magenta"))
    click.echo(
        "--autorest\n\tThe version of AutoRest. E.g. 1.0.1-20170222-2300-nightly, "
        "or the location of AutoRest repo, E.g. E:\\repo\\autorest"
    )
    click.echo("--autorest-args\n\tPasses additional argument to AutoRest generator")
    click.echo("--autorest-java\n\tPath to an AutoRest Java generator, relative to --autorest")
    click.echo("--regenerate-manager\n\tRegenerate the fluent manager classes")
    click.echo("--preserve\n\tKeep previously generated sources instead of deleting them")
    click.echo()
    click.echo("Run 'autorest-codegen --help' for all commands.")


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="autorest-codegen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--registry",
    "registry_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to a projects.yml registry (default: bundled table).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    registry_path: str | None,
) -> None:
    """AutoRest codegen — regenerate Java SDK projects from API specs."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["registry_path"] = Path(registry_path) if registry_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        quiet_third_party=not debug,
    )

    if ctx.invoked_subcommand is None:
        _print_usage(ctx)


@cli.command()
@click.option(
    "--spec-root",
    default=DEFAULT_SPEC_ROOT,
    show_default=True,
    help="Root location of the API specs (URL or local path).",
)
@click.option("--projects", "projects", default=None, help="Comma separated project names.")
@click.option(
    "--autorest",
    default=DEFAULT_AUTOREST,
    show_default=True,
    help="AutoRest version, or the path of an AutoRest checkout.",
)
@click.option("--autorest-args", default="", help="Extra arguments for every AutoRest call.")
@click.option("--autorest-java", default=None, help="AutoRest Java generator path, relative to --autorest.")
@click.option("--regenerate-manager", is_flag=True, help="Regenerate the fluent manager classes.")
@click.option("--preserve", is_flag=True, help="Don't delete previously generated sources.")
@click.option("--wait", "await_completion", is_flag=True, help="Wait for each generator to finish.")
@click.option("--dry-run", is_flag=True, help="Print the commands without running anything.")
@click.option(
    "--audit-log",
    type=click.Path(dir_okay=False),
    default=None,
    help="Append a record of this run to an NDJSON file (or set CODEGEN_AUDIT_FILE).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def codegen(
    ctx: click.Context,
    spec_root: str,
    projects: str | None,
    autorest: str,
    autorest_args: str,
    autorest_java: str | None,
    regenerate_manager: bool,
    preserve: bool,
    await_completion: bool,
    dry_run: bool,
    audit_log: str | None,
    as_json: bool,
) -> None:
    """Clean and regenerate SDK projects with AutoRest.

    Examples:

        autorest-codegen codegen

        autorest-codegen codegen --projects compute,network --preserve

        autorest-codegen codegen --autorest 1.0.1-20170222-2300-nightly --wait
    """
    from autorest_codegen.core.models.options import GlobalOptions
    from autorest_codegen.core.persistence.audit import AUDIT_ENV_VAR
    from autorest_codegen.core.services.project_registry import parse_project_names
    from autorest_codegen.core.use_cases.codegen import run_codegen

    registry = load_registry_or_exit(ctx)
    options = GlobalOptions(
        spec_root=spec_root,
        selected_projects=parse_project_names(projects),
        autorest=autorest,
        autorest_args=autorest_args,
        autorest_java=autorest_java,
        preserve=preserve,
        regenerate_manager=regenerate_manager,
        await_completion=await_completion,
        dry_run=dry_run,
        working_dir=Path.cwd(),
    )

    audit_file = audit_log or os.environ.get(AUDIT_ENV_VAR)
    quiet = ctx.obj.get("quiet", False)

    def announce(project, command: str) -> None:
        if as_json or quiet:
            return
        click.echo(
            f'Generating "{project.name}" from spec file '
            f"{options.spec_root}/{project.spec_source}"
        )
        click.echo(f"Command: {command}")

    result = run_codegen(
        options,
        registry=registry,
        audit_path=Path(audit_file) if audit_file else None,
        announce=announce,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error or (await_completion and result.report and result.report.failed > 0):
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        if result.report is not None and result.report.receipts:
            launched = ", ".join(r.project for r in result.report.receipts)
            click.secho(f"   Already launched: {launched}", fg="yellow", err=True)
        sys.exit(1)

    report = result.report
    assert report is not None

    failures = [r for r in report.receipts if r.failed]
    for receipt in failures:
        click.secho(f"   ✗ {receipt.project}: {receipt.error}", fg="red", err=True)

    if not quiet:
        mode_label = "[dry-run] " if dry_run else ""
        verb = "finished" if await_completion else "dispatched"
        status_color = {"ok": "green", "partial": "yellow", "failed": "red"}.get(
            report.status, "white"
        )
        click.secho(
            f"\n⚡ {mode_label}{report.succeeded + report.skipped}/{report.total} {verb}",
            fg=status_color,
            bold=True,
        )
        cleaned = sum(r.cleaned_files for r in report.receipts)
        if cleaned:
            click.echo(f"   🧹 {cleaned} generated file(s) removed")

    if await_completion and failures:
        sys.exit(1)


@cli.command()
@click.option("--projects", "projects", default=None, help="Comma separated project names.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def clean(ctx: click.Context, projects: str | None, as_json: bool) -> None:
    """Delete generated sources without regenerating."""
    from autorest_codegen.core.services.project_registry import parse_project_names
    from autorest_codegen.core.use_cases.codegen import run_clean

    registry = load_registry_or_exit(ctx)
    result = run_clean(parse_project_names(projects), Path.cwd(), registry=registry)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        if result.error:
            sys.exit(1)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(1)

    for cleanup in result.cleanups:
        if not cleanup.existed:
            if ctx.obj.get("verbose"):
                click.echo(f"   ⊘ {cleanup.root} (missing)")
            continue
        click.secho(f"   ✓ {cleanup.root}", fg="green", nl=False)
        click.echo(f"  ({cleanup.deleted_count} deleted, {len(cleanup.kept)} kept)")

    click.secho(f"\n🧹 {result.deleted_count} generated file(s) removed", bold=True)


# ── Register sub-command groups from autorest_codegen/ui/cli/ ────

from autorest_codegen.ui.cli.projects import projects as projects_group

cli.add_command(projects_group)


if __name__ == "__main__":
    cli()
