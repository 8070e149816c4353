"""
Tests for persistence — audit ledger.
"""

import json
from pathlib import Path

from autorest_codegen.core.persistence.audit import AuditEntry, AuditWriter


class TestAuditWriter:
    def test_write_and_read(self, tmp_path: Path):
        writer = AuditWriter(tmp_path / "audit.ndjson")
        writer.write(AuditEntry(operation_id="op-1", operation_type="codegen", projects=["dns"]))
        writer.write(AuditEntry(operation_id="op-2", operation_type="codegen", projects=["cdn"]))

        entries = writer.read_all()
        assert [e.operation_id for e in entries] == ["op-1", "op-2"]
        assert entries[1].projects == ["cdn"]

    def test_one_json_line_per_entry(self, tmp_path: Path):
        path = tmp_path / "audit.ndjson"
        writer = AuditWriter(path)
        writer.write(AuditEntry(operation_id="op-1"))
        writer.write(AuditEntry(operation_id="op-2"))

        lines = path.read_text().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[0])["operation_id"] == "op-1"

    def test_creates_parent_dirs(self, tmp_path: Path):
        path = tmp_path / "deep" / "nested" / "audit.ndjson"
        AuditWriter(path).write(AuditEntry(operation_id="op-1"))
        assert path.is_file()

    def test_read_missing(self, tmp_path: Path):
        assert AuditWriter(tmp_path / "none.ndjson").read_all() == []

    def test_corrupt_lines_skipped(self, tmp_path: Path):
        path = tmp_path / "audit.ndjson"
        writer = AuditWriter(path)
        writer.write(AuditEntry(operation_id="op-1"))
        with path.open("a") as f:
            f.write("not json {{{\n")
            f.write('{"launches_total": "many"}\n')
            f.write("\n")
        writer.write(AuditEntry(operation_id="op-2"))

        assert [e.operation_id for e in writer.read_all()] == ["op-1", "op-2"]

    def test_read_recent(self, tmp_path: Path):
        writer = AuditWriter(tmp_path / "audit.ndjson")
        for i in range(5):
            writer.write(AuditEntry(operation_id=f"op-{i}"))
        assert [e.operation_id for e in writer.read_recent(2)] == ["op-3", "op-4"]

    def test_write_failure_is_logged_not_raised(self, tmp_path: Path, caplog):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        writer = AuditWriter(blocker / "audit.ndjson")

        writer.write(AuditEntry(operation_id="op-1"))

        assert "Failed to write audit entry" in caplog.text

    def test_timestamp_default(self):
        assert AuditEntry().timestamp


class TestLedgerQueries:
    def _entry(self, op_id: str, commands: dict[str, str]) -> AuditEntry:
        return AuditEntry(
            operation_id=op_id,
            operation_type="codegen",
            projects=list(commands),
            context={"commands": commands},
        )

    def test_last_for_project(self, tmp_path: Path):
        writer = AuditWriter(tmp_path / "audit.ndjson")
        writer.write(self._entry("op-1", {"dns": "autorest old", "cdn": "autorest cdn"}))
        writer.write(self._entry("op-2", {"dns": "autorest new"}))

        assert writer.last_for_project("dns").operation_id == "op-2"
        assert writer.last_for_project("cdn").command_for("cdn") == "autorest cdn"
        assert writer.last_for_project("sql") is None

    def test_command_for_missing(self):
        assert AuditEntry().command_for("dns") is None
