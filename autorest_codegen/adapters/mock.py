"""
Mock adapter — stands in for the shell launcher.

Records every launch instead of starting a process. Used by tests and
by --dry-run, where commands are printed but never executed.
"""

from __future__ import annotations

from autorest_codegen.adapters.base import Adapter, LaunchContext
from autorest_codegen.core.models.action import Receipt


class MockAdapter(Adapter):
    """Launch adapter that records calls and returns canned receipts.

    By default every launch succeeds (or is reported as skipped when
    ``skip`` is set). Individual projects can be configured to fail.
    """

    def __init__(
        self,
        adapter_name: str = "mock",
        available: bool = True,
        skip: bool = False,
    ):
        self._name = adapter_name
        self._available = available
        self._skip = skip
        self._failures: dict[str, str] = {}
        self._call_log: list[LaunchContext] = []

    @property
    def name(self) -> str:
        return self._name

    @property
    def call_log(self) -> list[LaunchContext]:
        """All launch contexts this mock has received."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    @property
    def commands(self) -> list[str]:
        return [ctx.command for ctx in self._call_log]

    def is_available(self) -> bool:
        return self._available

    def set_failure(self, project: str, error: str = "Mock failure") -> None:
        """Configure launches for ``project`` to fail."""
        self._failures[project] = error

    def validate(self, context: LaunchContext) -> tuple[bool, str]:
        return True, ""

    def execute(self, context: LaunchContext) -> Receipt:
        self._call_log.append(context)

        if context.project in self._failures:
            return Receipt.failure(
                project=context.project,
                launcher=self._name,
                error=self._failures[context.project],
                command=context.command,
            )

        if self._skip:
            return Receipt.skip(
                project=context.project,
                launcher=self._name,
                reason="[dry-run] not executed",
                command=context.command,
            )

        return Receipt.success(
            project=context.project,
            launcher=self._name,
            command=context.command,
            metadata={"mock": True},
        )

    def reset(self) -> None:
        """Clear call log and configured failures."""
        self._call_log.clear()
        self._failures.clear()
