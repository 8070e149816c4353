"""
Command builder — turns a project + run options into an AutoRest command.

The command is kept as an ordered list of fragments until it reaches
the process boundary, where render() joins it into the single shell
string the generator is launched with. Building never touches the
filesystem or spawns anything, so tests can compare fragments directly.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field

from autorest_codegen.core.models.options import DEFAULT_AUTOREST, GlobalOptions
from autorest_codegen.core.models.project import ProjectDescriptor

# "1.0.1-20170222-2300-nightly", "2.0.4283", ...
_VERSION_RE = re.compile(r"[0-9]+\.[0-9]+\.[0-9]+.*")

# Entry point inside an AutoRest source checkout
AUTOREST_CHECKOUT_ENTRY = "src/autorest-core/dist/app.js"

LICENSE_HEADER = "MICROSOFT_MIT_NO_CODEGEN"


@dataclass(frozen=True)
class CommandLine:
    """An AutoRest invocation as discrete fragments.

    ``executable`` holds the launcher tokens; ``arguments`` the flags in
    emission order. Raw pass-through strings (user args) are kept as a
    single fragment each and are not re-split.
    """

    executable: tuple[str, ...]
    arguments: tuple[str, ...] = field(default_factory=tuple)

    @property
    def fragments(self) -> tuple[str, ...]:
        return self.executable + self.arguments

    def has_flag(self, flag: str) -> bool:
        """Whether a ``--flag`` or ``--flag=value`` fragment is present."""
        return any(f == flag or f.startswith(f"{flag}=") for f in self.arguments)

    def flag_value(self, flag: str) -> str | None:
        """Value of the first ``--flag=value`` fragment, if any."""
        prefix = f"{flag}="
        for fragment in self.arguments:
            if fragment.startswith(prefix):
                return fragment[len(prefix):]
        return None

    def render(self) -> str:
        """Serialize to the shell string handed to the launcher."""
        return " ".join(f for f in self.fragments if f)

    def __str__(self) -> str:
        return self.render()


def is_version_spec(autorest: str) -> bool:
    """Whether ``autorest`` names a published version rather than a checkout."""
    return autorest == DEFAULT_AUTOREST or _VERSION_RE.match(autorest) is not None


def executable_for(autorest: str) -> tuple[str, ...]:
    """Launcher tokens for a version string or an AutoRest checkout path."""
    if is_version_spec(autorest):
        return ("autorest", f"---version={autorest}")
    return ("node", os.path.join(autorest, AUTOREST_CHECKOUT_ENTRY))


def spec_location(spec_root: str, spec_source: str) -> str:
    """Join root and source with '/'; the root may be a URL.

    Both parts are used as given. ``GlobalOptions`` already drops a
    trailing '/' from the root.
    """
    return f"{spec_root}/{spec_source}"


def output_folder(project: ProjectDescriptor, options: GlobalOptions) -> str:
    """Absolute output directory for a project."""
    return os.path.normpath(os.path.join(str(options.working_dir), project.output_dir))


def build_command(project: ProjectDescriptor, options: GlobalOptions) -> CommandLine:
    """Build the AutoRest command for one project.

    Args:
        project: The project to generate.
        options: Run-wide options.

    Returns:
        CommandLine ready to render.
    """
    args: list[str] = [
        spec_location(options.spec_root, project.spec_source),
        "--java",
        "--azure-arm",
    ]

    if project.fluent:
        args.append("--fluent")

    args.append(f"--namespace={project.namespace}")
    args.append(f"--output-folder={output_folder(project, options)}")
    args.append(f"--license-header={LICENSE_HEADER}")

    if options.autorest_java:
        plugin = os.path.normpath(
            os.path.join(str(options.working_dir), options.autorest, options.autorest_java)
        )
        args.append(f"--use={plugin}")

    if options.regenerate_manager:
        args.append("--regenerate-manager=true")

    if options.autorest_args.strip():
        args.append(options.autorest_args.strip())

    if project.tag:
        args.append(f"--tag={project.tag}")

    if project.extra_args:
        args.append(project.extra_args)

    return CommandLine(executable=executable_for(options.autorest), arguments=tuple(args))
