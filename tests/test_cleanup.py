"""
Tests for generated-source cleanup.
"""

import os
from pathlib import Path

import pytest

from autorest_codegen.core.errors import FileAccessError
from autorest_codegen.core.models.options import GENERATED_MARKER
from autorest_codegen.core.services.cleanup import clean_generated, is_generated


def _snapshot(root: Path) -> set[str]:
    return {str(p.relative_to(root)) for p in root.rglob("*")}


class TestIsGenerated:
    def test_marker_present(self, tmp_path: Path, write_generated):
        path = write_generated(tmp_path / "A.java")
        assert is_generated(path, GENERATED_MARKER)

    def test_marker_absent(self, tmp_path: Path, write_handwritten):
        path = write_handwritten(tmp_path / "B.java")
        assert not is_generated(path, GENERATED_MARKER)

    def test_marker_anywhere_in_file(self, tmp_path: Path):
        path = tmp_path / "late.txt"
        path.write_text("x\n" * 500 + GENERATED_MARKER + "\n")
        assert is_generated(path, GENERATED_MARKER)

    def test_binary_content_tolerated(self, tmp_path: Path):
        path = tmp_path / "blob.bin"
        path.write_bytes(b"\xff\xfe\x00" + GENERATED_MARKER.encode() + b"\x80")
        assert is_generated(path, GENERATED_MARKER)

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileAccessError) as exc:
            is_generated(tmp_path / "gone.java", GENERATED_MARKER)
        assert exc.value.path == tmp_path / "gone.java"


class TestCleanGenerated:
    def test_missing_root_is_noop(self, tmp_path: Path):
        result = clean_generated(tmp_path / "does" / "not" / "exist", GENERATED_MARKER)
        assert result.existed is False
        assert result.deleted == []
        assert list(tmp_path.iterdir()) == []

    def test_deletes_only_marked_files(self, tmp_path: Path, write_generated, write_handwritten):
        root = tmp_path / "pkg"
        gen = write_generated(root / "Client.java")
        custom = write_handwritten(root / "ClientExtensions.java")

        result = clean_generated(root, GENERATED_MARKER)

        assert not gen.exists()
        assert custom.exists()
        assert result.deleted == [gen]
        assert result.kept == [custom]

    def test_recurses_into_subdirectories(self, tmp_path: Path, write_generated, write_handwritten):
        root = tmp_path / "pkg"
        deep = write_generated(root / "implementation" / "inner" / "FooInner.java")
        models = write_generated(root / "models" / "Foo.java")
        keep = write_handwritten(root / "implementation" / "Helper.java")

        result = clean_generated(root, GENERATED_MARKER)

        assert not deep.exists()
        assert not models.exists()
        assert keep.exists()
        assert result.deleted_count == 2

    def test_directories_never_removed(self, tmp_path: Path, write_generated):
        root = tmp_path / "pkg"
        write_generated(root / "models" / "Only.java")

        clean_generated(root, GENERATED_MARKER)

        assert (root / "models").is_dir()
        assert list((root / "models").iterdir()) == []

    def test_unmarked_files_survive_any_name_or_depth(self, tmp_path: Path):
        root = tmp_path / "pkg"
        names = [
            "Generated.java",
            "package-info.java",
            "a/b/c/d/e/AutoRest.java",
            "README.md",
            "noext",
            ".hidden",
        ]
        for name in names:
            path = root / name
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("Code generated by something else entirely\n")

        clean_generated(root, GENERATED_MARKER)

        for name in names:
            assert (root / name).exists(), name

    def test_idempotent(self, tmp_path: Path, write_generated, write_handwritten):
        root = tmp_path / "pkg"
        write_generated(root / "A.java")
        write_generated(root / "sub" / "B.java")
        write_handwritten(root / "sub" / "C.java")

        first = clean_generated(root, GENERATED_MARKER)
        after_first = _snapshot(root)
        second = clean_generated(root, GENERATED_MARKER)

        assert first.deleted_count == 2
        assert second.deleted_count == 0
        assert _snapshot(root) == after_first

    def test_custom_marker(self, tmp_path: Path, write_generated):
        root = tmp_path / "pkg"
        autorest = write_generated(root / "A.java")
        other = root / "B.java"
        other.write_text("// @generated by tool-x\n")

        clean_generated(root, "@generated by tool-x")

        assert autorest.exists()
        assert not other.exists()

    def test_symlinked_directory_not_followed(self, tmp_path: Path, write_generated):
        outside = tmp_path / "outside"
        target = write_generated(outside / "Shared.java")
        root = tmp_path / "pkg"
        root.mkdir()
        (root / "link").symlink_to(outside, target_is_directory=True)

        result = clean_generated(root, GENERATED_MARKER)

        assert target.exists()
        assert result.deleted == []

    def test_root_is_a_file_raises(self, tmp_path: Path):
        path = tmp_path / "not-a-dir"
        path.write_text("x")
        with pytest.raises(FileAccessError):
            clean_generated(path, GENERATED_MARKER)

    @pytest.mark.skipif(
        os.name != "posix" or os.geteuid() == 0,
        reason="needs POSIX permissions and a non-root user",
    )
    def test_unreadable_file_aborts(self, tmp_path: Path, write_generated):
        root = tmp_path / "pkg"
        locked = write_generated(root / "Locked.java")
        locked.chmod(0o000)
        try:
            with pytest.raises(FileAccessError) as exc:
                clean_generated(root, GENERATED_MARKER)
            assert exc.value.path == locked
        finally:
            locked.chmod(0o644)

    def test_delete_failure_raises(self, tmp_path: Path, write_generated, monkeypatch):
        root = tmp_path / "pkg"
        path = write_generated(root / "A.java")

        def refuse(self, missing_ok=False):
            raise PermissionError("read-only filesystem")

        monkeypatch.setattr(Path, "unlink", refuse)

        with pytest.raises(FileAccessError, match="read-only filesystem"):
            clean_generated(root, GENERATED_MARKER)
        assert path.exists()

    def test_to_dict(self, tmp_path: Path, write_generated):
        root = tmp_path / "pkg"
        write_generated(root / "A.java")
        data = clean_generated(root, GENERATED_MARKER).to_dict()
        assert data["root"] == str(root)
        assert data["existed"] is True
        assert data["deleted"] == [str(root / "A.java")]
        assert data["kept"] == 0
