"""
Generated-source cleanup — remove stale generator output before a rerun.

Only files whose content carries the generator's provenance marker are
deleted. Hand-written files living in the same package tree survive,
and so do all directories, even when they end up empty.

A file that cannot be read or removed stops the cleanup with
FileAccessError: regenerating on top of a half-cleaned tree could mix
stale and fresh sources.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from autorest_codegen.core.errors import FileAccessError

logger = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    """Files removed and kept under one cleanup root."""

    root: Path
    deleted: list[Path] = field(default_factory=list)
    kept: list[Path] = field(default_factory=list)
    existed: bool = True

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "existed": self.existed,
            "deleted": [str(p) for p in self.deleted],
            "kept": len(self.kept),
        }


def is_generated(path: Path, marker: str) -> bool:
    """Whether the file at ``path`` contains the provenance marker.

    Raises:
        FileAccessError: If the file cannot be read.
    """
    try:
        content = path.read_bytes().decode("utf-8", errors="replace")
    except OSError as e:
        raise FileAccessError(path, e) from e
    return marker in content


def clean_generated(root: Path, marker: str) -> CleanupResult:
    """Delete every generated file under ``root``.

    Args:
        root: Directory to walk. A missing directory is not an error.
        marker: Text that identifies a generated file.

    Returns:
        CleanupResult with the deleted and kept files.

    Raises:
        FileAccessError: If a file cannot be read or deleted.
    """
    result = CleanupResult(root=root)

    if not root.exists():
        logger.debug("Nothing to clean, %s does not exist", root)
        result.existed = False
        return result

    _clean_dir(root, marker, result)
    logger.info(
        "Cleaned %s: %d deleted, %d kept",
        root,
        result.deleted_count,
        len(result.kept),
    )
    return result


def _clean_dir(directory: Path, marker: str, result: CleanupResult) -> None:
    try:
        entries = sorted(directory.iterdir())
    except OSError as e:
        raise FileAccessError(directory, e) from e

    for entry in entries:
        if entry.is_symlink() and entry.is_dir():
            # not followed
            result.kept.append(entry)
            continue

        if entry.is_dir():
            _clean_dir(entry, marker, result)
            continue

        if not is_generated(entry, marker):
            result.kept.append(entry)
            continue

        try:
            entry.unlink()
        except OSError as e:
            raise FileAccessError(entry, e) from e
        logger.debug("Deleted generated file %s", entry)
        result.deleted.append(entry)
