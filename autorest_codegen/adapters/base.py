"""
Adapter base — the contract between the dispatcher and process launchers.

The dispatcher never spawns processes itself. It hands a LaunchContext
to an Adapter and gets a Receipt back; swapping the adapter is how
tests (and --dry-run) avoid starting the real generator.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel

from autorest_codegen.core.models.action import Receipt


class LaunchContext(BaseModel):
    """Everything an adapter needs to start one generator run."""

    project: str
    command: str
    cwd: str = "."
    wait: bool = False    # block until the process exits


class Adapter(ABC):
    """Abstract base class for launch adapters.

    Adapters perform the external side effect and return a receipt.
    They NEVER raise: launch failures are captured in the Receipt.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The adapter identifier (e.g., 'shell', 'mock')."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying tool is available. Never raises."""

    @abstractmethod
    def validate(self, context: LaunchContext) -> tuple[bool, str]:
        """Validate that the launch can happen.

        Returns:
            (is_valid, error_message). error_message is empty if valid.
        """

    @abstractmethod
    def execute(self, context: LaunchContext) -> Receipt:
        """Start the command and return a receipt. MUST never raise."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
