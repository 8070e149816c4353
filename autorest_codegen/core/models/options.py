"""
Global options — the per-invocation knobs shared by every project.

Built once by the CLI (or a test) and passed down explicitly.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SPEC_ROOT = "https://raw.githubusercontent.com/Azure/azure-rest-api-specs/current"
DEFAULT_AUTOREST = "latest"

# Header the generator stamps on every file it emits
GENERATED_MARKER = "Code generated by Microsoft (R) AutoRest Code Generator"


class GlobalOptions(BaseModel):
    """Options for one codegen run."""

    model_config = ConfigDict(frozen=True)

    spec_root: str = DEFAULT_SPEC_ROOT
    selected_projects: list[str] | None = None   # None = every project
    autorest: str = DEFAULT_AUTOREST             # version, "latest", or checkout path
    autorest_args: str = ""
    autorest_java: str | None = None             # alternate generator plugin
    preserve: bool = False                       # skip cleanup
    regenerate_manager: bool = False
    await_completion: bool = False
    dry_run: bool = False
    working_dir: Path = Field(default_factory=Path.cwd)

    @field_validator("spec_root")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") or value

    @field_validator("autorest")
    @classmethod
    def _autorest_not_blank(cls, value: str) -> str:
        value = value.strip()
        return value or DEFAULT_AUTOREST

    @field_validator("working_dir")
    @classmethod
    def _absolute_working_dir(cls, value: Path) -> Path:
        return value if value.is_absolute() else Path.cwd() / value
