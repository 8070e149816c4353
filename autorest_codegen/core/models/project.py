"""
Project descriptor — one generation target in the registry.

Each descriptor says where an SDK module lives, which API spec it is
generated from, and which Java package the generator should emit.
Loaded from projects.yml, never mutated afterwards.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

logger = logging.getLogger(__name__)

# Root of the Java source tree inside every SDK module
JAVA_SOURCE_ROOT = ("src", "main", "java")


class GeneratorVariant(str, Enum):
    """How the generator reads the input spec."""

    DEFAULT = "default"
    COMPOSITE = "composite"   # spec file merges several swagger documents


class ProjectDescriptor(BaseModel):
    """A named SDK project and everything needed to regenerate it.

    The YAML keys are the short legacy names (``dir``, ``source``,
    ``package``, ``args``, ``modeler``); the Python attribute names are
    the long forms.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(min_length=1)
    output_dir: str = Field(alias="dir", min_length=1)
    spec_source: str = Field(alias="source", min_length=1)
    namespace: str = Field(alias="package", min_length=1)
    extra_args: str | None = Field(default=None, alias="args")
    tag: str | None = None
    generator_variant: GeneratorVariant = Field(
        default=GeneratorVariant.DEFAULT, alias="modeler"
    )
    fluent: bool = True

    # Namespace text as declared, when it had to be split on load
    declared_namespace: str | None = Field(default=None, exclude=True, repr=False)

    @model_validator(mode="before")
    @classmethod
    def _normalize(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)

        modeler = data.get("modeler")
        if modeler == "CompositeSwagger":
            data["modeler"] = GeneratorVariant.COMPOSITE

        # Legacy tables embed "--tag=..." after the package name.
        package = data.get("package", data.get("namespace"))
        if isinstance(package, str) and " " in package.strip():
            identity, _, rest = package.strip().partition(" ")
            tag, leftover = _split_tag(rest)
            logger.warning(
                "Project '%s': namespace %r carries option text, using %r",
                data.get("name", "?"),
                package,
                identity,
            )
            data.pop("namespace", None)
            data["package"] = identity
            data["declared_namespace"] = package
            if tag and not data.get("tag"):
                data["tag"] = tag
            if leftover:
                args = data.pop("extra_args", None) or data.get("args")
                data["args"] = f"{args} {leftover}" if args else leftover
        return data

    @property
    def package_path(self) -> str:
        """Namespace as a relative directory (``com/example/foo``)."""
        return self.namespace.replace(".", "/")

    @property
    def is_composite(self) -> bool:
        return self.generator_variant is GeneratorVariant.COMPOSITE

    def cleanup_target(self, root: Path) -> Path:
        """Directory holding this project's generated Java sources."""
        return Path(root, self.output_dir, *JAVA_SOURCE_ROOT, *self.namespace.split("."))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "dir": self.output_dir,
            "source": self.spec_source,
            "package": self.namespace,
            "args": self.extra_args,
            "tag": self.tag,
            "modeler": self.generator_variant.value,
            "fluent": self.fluent,
        }


def _split_tag(fragment: str) -> tuple[str | None, str]:
    """Pull ``--tag=value`` out of an option fragment.

    Returns (tag, remaining text).
    """
    tag: str | None = None
    rest: list[str] = []
    for token in fragment.split():
        if token.startswith("--tag=") and tag is None:
            tag = token[len("--tag="):]
        else:
            rest.append(token)
    return tag, " ".join(rest)
