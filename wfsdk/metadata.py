"""Workflow metadata as returned by the engine and as exposed to callers."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from wfsdk.state import Status

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class TaskFailureDetails:
    """Failure details as reported by the engine."""

    error_type: str = ""
    error_message: str = ""
    stack_trace: str | None = None
    inner_failure: TaskFailureDetails | None = None
    is_non_retriable: bool = False


@dataclass
class OrchestrationMetadata:
    """Orchestration metadata as reported by the engine."""

    instance_id: str = ""
    name: str = ""
    runtime_status: int = 0
    created_at: datetime | None = None
    last_updated_at: datetime | None = None
    input: str | None = None
    output: str | None = None
    custom_status: str | None = None
    failure_details: TaskFailureDetails | None = None


@dataclass
class FailureDetails:
    """Details of why a workflow failed."""

    type: str = ""
    message: str = ""
    stack_trace: str = ""
    inner_failure: FailureDetails | None = None
    is_non_retriable: bool = False


@dataclass
class Metadata:
    """Metadata of a workflow instance."""

    instance_id: str = ""
    name: str = ""
    runtime_status: Status = Status.RUNNING
    created_at: datetime = _EPOCH
    last_updated_at: datetime = _EPOCH
    serialized_input: str = ""
    serialized_output: str = ""
    serialized_custom_status: str = ""
    failure_details: FailureDetails | None = None


def _convert_inner(failure: TaskFailureDetails | None) -> FailureDetails | None:
    root: FailureDetails | None = None
    parent: FailureDetails | None = None
    while failure is not None:
        current = FailureDetails(
            type=failure.error_type,
            message=failure.error_message,
            stack_trace=failure.stack_trace or "",
        )
        if parent is None:
            root = current
        else:
            parent.inner_failure = current
        parent = current
        failure = failure.inner_failure
    return root


def convert_metadata(raw: OrchestrationMetadata) -> Metadata:
    """Convert engine metadata to workflow metadata.

    Missing timestamps become the Unix epoch and missing payloads become "".
    """
    metadata = Metadata(
        instance_id=raw.instance_id,
        name=raw.name,
        runtime_status=Status(int(raw.runtime_status)),
        created_at=raw.created_at or _EPOCH,
        last_updated_at=raw.last_updated_at or _EPOCH,
        serialized_input=raw.input or "",
        serialized_output=raw.output or "",
        serialized_custom_status=raw.custom_status or "",
    )
    details = raw.failure_details
    if details is not None:
        metadata.failure_details = FailureDetails(
            type=details.error_type,
            message=details.error_message,
            stack_trace=details.stack_trace or "",
            is_non_retriable=details.is_non_retriable,
            inner_failure=_convert_inner(details.inner_failure),
        )
    return metadata


def new_task_list(length: int) -> list[Any]:
    """Return a list of empty task slots to fill for parallel execution."""
    if length < 0:
        raise ValueError(f"length must not be negative: {length}")
    return [None] * length