"""
Bundled data files.

``projects.yml`` is the registry of every SDK project the repo
regenerates. It is read by ``core.config.loader``; nothing here
parses it.
"""

from __future__ import annotations

from pathlib import Path

_DATA_DIR = Path(__file__).parent

BUNDLED_REGISTRY = _DATA_DIR / "projects.yml"
