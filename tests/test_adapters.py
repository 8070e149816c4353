"""
Tests for launch adapters — shell launcher and mock.
"""

import sys
from pathlib import Path

import pytest

from autorest_codegen.adapters.base import LaunchContext
from autorest_codegen.adapters.mock import MockAdapter
from autorest_codegen.adapters.shell.command import ShellCommandAdapter

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="uses POSIX shell commands")


class TestLaunchContext:
    def test_defaults(self):
        ctx = LaunchContext(project="dns", command="autorest x")
        assert ctx.cwd == "."
        assert ctx.wait is False


class TestMockAdapter:
    def test_default_success(self):
        mock = MockAdapter()
        receipt = mock.execute(LaunchContext(project="dns", command="autorest dns.json"))
        assert receipt.ok
        assert receipt.launcher == "mock"
        assert receipt.command == "autorest dns.json"
        assert receipt.metadata == {"mock": True}

    def test_skip_mode(self):
        mock = MockAdapter(adapter_name="dry-run", skip=True)
        receipt = mock.execute(LaunchContext(project="dns", command="autorest"))
        assert receipt.status == "skipped"
        assert receipt.launcher == "dry-run"
        assert "dry-run" in receipt.output

    def test_set_failure(self):
        mock = MockAdapter()
        mock.set_failure("dns", "nope")
        assert mock.execute(LaunchContext(project="dns", command="a")).error == "nope"
        assert mock.execute(LaunchContext(project="cdn", command="a")).ok

    def test_call_log(self):
        mock = MockAdapter()
        mock.execute(LaunchContext(project="dns", command="one"))
        mock.execute(LaunchContext(project="cdn", command="two"))
        assert mock.call_count == 2
        assert mock.commands == ["one", "two"]

    def test_reset(self):
        mock = MockAdapter()
        mock.set_failure("dns")
        mock.execute(LaunchContext(project="dns", command="one"))
        mock.reset()
        assert mock.call_count == 0
        assert mock.execute(LaunchContext(project="dns", command="one")).ok

    def test_is_available(self):
        assert MockAdapter().is_available()
        assert not MockAdapter(available=False).is_available()

    def test_repr(self):
        assert "mock" in repr(MockAdapter())


@posix_only
class TestShellCommandAdapter:
    def test_is_available(self):
        assert ShellCommandAdapter().is_available()

    def test_validate_empty_command(self, tmp_path: Path):
        ok, err = ShellCommandAdapter().validate(
            LaunchContext(project="dns", command="  ", cwd=str(tmp_path))
        )
        assert not ok
        assert "Empty command" in err

    def test_validate_bad_cwd(self, tmp_path: Path):
        ok, err = ShellCommandAdapter().validate(
            LaunchContext(project="dns", command="true", cwd=str(tmp_path / "missing"))
        )
        assert not ok
        assert "does not exist" in err

    def test_invalid_context_is_failure_receipt(self, tmp_path: Path):
        adapter = ShellCommandAdapter()
        receipt = adapter.execute(LaunchContext(project="dns", command=""))
        assert receipt.failed
        assert adapter.processes == []

    def test_wait_success(self, tmp_path: Path):
        adapter = ShellCommandAdapter()
        receipt = adapter.execute(
            LaunchContext(project="dns", command="touch done.txt", cwd=str(tmp_path), wait=True)
        )
        assert receipt.ok
        assert receipt.return_code == 0
        assert receipt.pid is not None
        assert (tmp_path / "done.txt").exists()

    def test_wait_nonzero_exit(self, tmp_path: Path):
        receipt = ShellCommandAdapter().execute(
            LaunchContext(project="dns", command="exit 3", cwd=str(tmp_path), wait=True)
        )
        assert receipt.failed
        assert receipt.return_code == 3
        assert "code 3" in receipt.error

    def test_command_goes_through_shell(self, tmp_path: Path):
        receipt = ShellCommandAdapter().execute(
            LaunchContext(
                project="dns",
                command="echo one > out.txt && echo two >> out.txt",
                cwd=str(tmp_path),
                wait=True,
            )
        )
        assert receipt.ok
        assert (tmp_path / "out.txt").read_text().split() == ["one", "two"]

    def test_no_wait_returns_immediately(self, tmp_path: Path):
        adapter = ShellCommandAdapter()
        receipt = adapter.execute(
            LaunchContext(project="dns", command="sleep 0.2", cwd=str(tmp_path))
        )
        assert receipt.ok
        assert receipt.return_code is None
        assert receipt.pid == adapter.processes[0].pid
        assert adapter.processes[0].wait() == 0

    def test_unknown_program_still_launches(self, tmp_path: Path):
        # the shell itself starts; the missing program shows up as its exit code
        receipt = ShellCommandAdapter().execute(
            LaunchContext(
                project="dns",
                command="definitely-not-a-real-program-xyz",
                cwd=str(tmp_path),
                wait=True,
            )
        )
        assert receipt.failed
        assert receipt.return_code == 127

    def test_popen_oserror(self, tmp_path: Path, monkeypatch):
        import subprocess

        def boom(*args, **kwargs):
            raise OSError("fork failed")

        monkeypatch.setattr(subprocess, "Popen", boom)
        receipt = ShellCommandAdapter().execute(
            LaunchContext(project="dns", command="true", cwd=str(tmp_path))
        )
        assert receipt.failed
        assert "Launch error" in receipt.error
