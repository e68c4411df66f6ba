"""Workflow runtime status values and their mapping to the engine's statuses."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Protocol


class OrchestrationStatus(enum.IntEnum):
    """Runtime status as reported by the orchestration engine."""

    RUNNING = 0
    COMPLETED = 1
    CONTINUED_AS_NEW = 2
    FAILED = 3
    CANCELED = 4
    TERMINATED = 5
    PENDING = 6
    SUSPENDED = 7


class Status(enum.IntEnum):
    """Runtime status of a workflow instance.

    Any integer outside the known range maps to ``UNKNOWN``.
    """

    RUNNING = 0
    COMPLETED = 1
    CONTINUED_AS_NEW = 2
    FAILED = 3
    CANCELED = 4
    TERMINATED = 5
    PENDING = 6
    SUSPENDED = 7
    UNKNOWN = 8

    @classmethod
    def _missing_(cls, value: object) -> "Status | None":
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.UNKNOWN
        return None

    def __str__(self) -> str:
        return self.name

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)

    def runtime_status(self) -> OrchestrationStatus:
        """Return the engine status matching this status.

        Raises ValueError for ``UNKNOWN``, which has no engine counterpart.
        """
        if self is Status.UNKNOWN:
            raise ValueError("status UNKNOWN has no runtime status")
        return OrchestrationStatus(self.value)


class _HasRuntimeStatus(Protocol):
    runtime_status: int


@dataclass
class WorkflowState:
    """The state of a workflow, wrapping the engine's metadata."""

    metadata: _HasRuntimeStatus

    def runtime_status(self) -> Status:
        """Return the status recorded in the metadata."""
        return Status(int(self.metadata.runtime_status))


def convert_status_list(statuses: Iterable[Status]) -> list[OrchestrationStatus]:
    """Map workflow statuses to engine statuses, preserving order."""
    return [status.runtime_status() for status in statuses]