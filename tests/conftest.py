"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from autorest_codegen.core.models.options import GENERATED_MARKER, GlobalOptions
from autorest_codegen.core.models.project import ProjectDescriptor
from autorest_codegen.core.services.project_registry import ProjectRegistry

GENERATED_HEADER = (
    "/**\n"
    " * Copyright (c) Microsoft Corporation. All rights reserved.\n"
    " * Licensed under the MIT License.\n"
    " *\n"
    f" * {GENERATED_MARKER}.\n"
    " */\n"
)


@pytest.fixture
def alpha() -> ProjectDescriptor:
    """A single project under out/alpha."""
    return ProjectDescriptor(
        name="alpha",
        output_dir="out/alpha",
        spec_source="a.json",
        namespace="com.example.alpha",
    )


@pytest.fixture
def sample_registry(alpha: ProjectDescriptor) -> ProjectRegistry:
    """A small registry covering the descriptor variants."""
    return ProjectRegistry(
        [
            alpha,
            ProjectDescriptor(
                name="beta",
                output_dir="out/beta",
                spec_source="beta/composite.json",
                namespace="com.example.beta",
                extra_args="--payload-flattening-threshold=1",
                generator_variant="composite",
            ),
            ProjectDescriptor(
                name="gamma",
                output_dir="out/gamma",
                spec_source="gamma/gamma.json",
                namespace="com.example.gamma",
                fluent=False,
            ),
        ]
    )


@pytest.fixture
def options(tmp_path: Path) -> GlobalOptions:
    """Options rooted in a temp working directory."""
    return GlobalOptions(spec_root="https://spec.example/v1", working_dir=tmp_path)


def _write_generated(path: Path, body: str = "public class Generated {}\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(GENERATED_HEADER + body, encoding="utf-8")
    return path


def _write_handwritten(path: Path, body: str = "public class Custom {}\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("// Hand-written customization.\n" + body, encoding="utf-8")
    return path


@pytest.fixture
def write_generated():
    """Write a Java file carrying the generator header."""
    return _write_generated


@pytest.fixture
def write_handwritten():
    """Write a Java file without the generator header."""
    return _write_handwritten


@pytest.fixture(autouse=True)
def _isolate_logging():
    """Drop handlers installed by setup_logging() and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler).__module__.startswith("_pytest"):
            continue
        root.removeHandler(handler)
        handler.close()
    root.setLevel(level)
