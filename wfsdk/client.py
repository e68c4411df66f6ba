"""Client for scheduling and managing workflow instances."""

from __future__ import annotations

import contextlib
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from wfsdk.metadata import Metadata, OrchestrationMetadata, convert_metadata
from wfsdk.options import marshal_data
from wfsdk.state import OrchestrationStatus, Status, convert_status_list


class ClientError(RuntimeError):
    """Raised when a workflow client cannot be created."""


class CreateWorkflowAction(enum.IntEnum):
    """What to do when a workflow is scheduled with an ID already in use."""

    ERROR = 0
    IGNORE = 1
    TERMINATE = 2


@dataclass
class WorkflowIDReusePolicy:
    """Which existing workflow statuses allow an ID to be reused, and how."""

    operation_status: list[Status] = field(default_factory=list)
    action: CreateWorkflowAction = CreateWorkflowAction.ERROR


@dataclass(frozen=True)
class OrchestrationIDReusePolicy:
    """The reuse policy in the form the engine expects."""

    operation_status: list[OrchestrationStatus]
    action: CreateWorkflowAction


class _TaskHubClient(Protocol):
    def schedule_new_orchestration(
        self,
        name: str,
        *,
        instance_id: str | None,
        raw_input: str | None,
        start_time: datetime | None,
        reuse_policy: OrchestrationIDReusePolicy | None,
    ) -> str: ...

    def fetch_orchestration_metadata(
        self, instance_id: str, *, fetch_payloads: bool
    ) -> OrchestrationMetadata: ...

    def wait_for_orchestration_start(
        self, instance_id: str, *, fetch_payloads: bool
    ) -> OrchestrationMetadata: ...

    def wait_for_orchestration_completion(
        self, instance_id: str, *, fetch_payloads: bool
    ) -> OrchestrationMetadata: ...

    def terminate_orchestration(
        self, instance_id: str, *, raw_output: str | None, recursive: bool | None
    ) -> None: ...

    def raise_event(self, instance_id: str, event_name: str, *, raw_data: str | None) -> None: ...

    def suspend_orchestration(self, instance_id: str, reason: str) -> None: ...

    def resume_orchestration(self, instance_id: str, reason: str) -> None: ...

    def purge_orchestration_state(self, instance_id: str, *, recursive: bool | None) -> None: ...

    def close(self) -> None: ...


def _pick_payload(value: Any, raw: str | None, what: str) -> str | None:
    if value is not None and raw is not None:
        raise ValueError(f"give either a {what} or a raw {what}, not both")
    if raw is not None:
        return raw
    data = marshal_data(value)
    return data.decode("utf-8") if data is not None else None


def _require_id(instance_id: str) -> None:
    if not instance_id:
        raise ValueError("no workflow id specified")


class Client:
    """Schedules, queries and controls workflow instances."""

    def __init__(self, task_hub_client: _TaskHubClient | None) -> None:
        if task_hub_client is None:
            raise ClientError("failed to initialise client: no task hub connection")
        self._task_hub = task_hub_client

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def schedule_new_workflow(
        self,
        workflow: str,
        *,
        instance_id: str | None = None,
        input: Any = None,
        raw_input: str | None = None,
        start_time: datetime | None = None,
        reuse_id_policy: WorkflowIDReusePolicy | None = None,
    ) -> str:
        """Start a workflow and return its instance ID."""
        if not workflow:
            raise ValueError("no workflow specified")
        payload = _pick_payload(input, raw_input, "input")
        policy = None
        if reuse_id_policy is not None:
            policy = OrchestrationIDReusePolicy(
                operation_status=convert_status_list(reuse_id_policy.operation_status),
                action=CreateWorkflowAction(reuse_id_policy.action),
            )
        workflow_id = self._task_hub.schedule_new_orchestration(
            workflow,
            instance_id=instance_id,
            raw_input=payload,
            start_time=start_time,
            reuse_policy=policy,
        )
        return str(workflow_id)

    def fetch_workflow_metadata(self, instance_id: str, *, fetch_payloads: bool = False) -> Metadata:
        """Return the metadata of a workflow instance."""
        _require_id(instance_id)
        raw = self._task_hub.fetch_orchestration_metadata(
            instance_id, fetch_payloads=fetch_payloads
        )
        return convert_metadata(raw)

    def wait_for_workflow_start(self, instance_id: str, *, fetch_payloads: bool = False) -> Metadata:
        """Block until a workflow instance starts and return its metadata."""
        _require_id(instance_id)
        raw = self._task_hub.wait_for_orchestration_start(
            instance_id, fetch_payloads=fetch_payloads
        )
        return convert_metadata(raw)

    def wait_for_workflow_completion(
        self, instance_id: str, *, fetch_payloads: bool = False
    ) -> Metadata:
        """Block until a workflow instance completes and return its metadata."""
        _require_id(instance_id)
        raw = self._task_hub.wait_for_orchestration_completion(
            instance_id, fetch_payloads=fetch_payloads
        )
        return convert_metadata(raw)

    def terminate_workflow(
        self,
        instance_id: str,
        *,
        output: Any = None,
        raw_output: str | None = None,
        recursive: bool | None = None,
    ) -> None:
        """Stop a workflow instance, optionally with an output."""
        _require_id(instance_id)
        payload = _pick_payload(output, raw_output, "output")
        self._task_hub.terminate_orchestration(
            instance_id, raw_output=payload, recursive=recursive
        )

    def raise_event(
        self,
        instance_id: str,
        event_name: str,
        *,
        payload: Any = None,
        raw_data: str | None = None,
    ) -> None:
        """Send a named event to a workflow instance."""
        _require_id(instance_id)
        if not event_name:
            raise ValueError("no event name specified")
        data = _pick_payload(payload, raw_data, "payload")
        self._task_hub.raise_event(instance_id, event_name, raw_data=data)

    def suspend_workflow(self, instance_id: str, reason: str) -> None:
        """Pause a workflow instance."""
        _require_id(instance_id)
        self._task_hub.suspend_orchestration(instance_id, reason)

    def resume_workflow(self, instance_id: str, reason: str) -> None:
        """Resume a suspended workflow instance."""
        _require_id(instance_id)
        self._task_hub.resume_orchestration(instance_id, reason)

    def purge_workflow(self, instance_id: str, *, recursive: bool | None = None) -> None:
        """Remove a terminated or completed workflow instance's state."""
        _require_id(instance_id)
        self._task_hub.purge_orchestration_state(instance_id, recursive=recursive)

    def close(self) -> None:
        """Close the connection, ignoring errors."""
        with contextlib.suppress(Exception):
            self._task_hub.close()