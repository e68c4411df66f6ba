"""Contexts handed to workflow and activity functions while they run."""

from __future__ import annotations

import json
from datetime import datetime, timedelta
from typing import Any, Callable, Protocol

from wfsdk.options import (
    ActivityOption,
    ChildWorkflowOption,
    build_activity_options,
    build_child_workflow_options,
)


class _EngineActivityContext(Protocol):
    def get_input(self) -> Any: ...

    def context(self) -> Any: ...


class _EngineOrchestrationContext(Protocol):
    id: Any
    name: str
    current_time_utc: datetime
    is_replaying: bool
    raw_input: str | None

    def set_custom_status(self, status: str) -> None: ...

    def call_activity(self, activity: Any, **kwargs: Any) -> Any: ...

    def call_sub_orchestrator(self, workflow: Any, **kwargs: Any) -> Any: ...

    def create_timer(self, duration: timedelta) -> Any: ...

    def wait_for_single_event(self, event_name: str, timeout: timedelta) -> Any: ...

    def continue_as_new(self, new_input: Any, **kwargs: Any) -> None: ...


class ActivityContext:
    """The context an activity function receives."""

    def __init__(self, ctx: _EngineActivityContext) -> None:
        self._ctx = ctx

    def get_input(self) -> Any:
        """Return the decoded input of the activity."""
        return self._ctx.get_input()

    def context(self) -> Any:
        """Return the execution context of the activity."""
        return self._ctx.context()


class WorkflowContext:
    """The context a workflow function receives."""

    def __init__(self, orchestration_context: _EngineOrchestrationContext) -> None:
        self._ctx = orchestration_context

    def get_input(self) -> Any:
        """Return the decoded workflow input, or None when there is none."""
        raw = getattr(self._ctx, "raw_input", None)
        if not raw:
            return None
        return json.loads(raw)

    def name(self) -> str:
        """Return the name of the workflow."""
        return self._ctx.name

    def instance_id(self) -> str:
        """Return the ID of the running workflow instance."""
        return str(self._ctx.id)

    def current_utc_datetime(self) -> datetime:
        """Return the replay-safe current workflow time in UTC."""
        return self._ctx.current_time_utc

    def is_replaying(self) -> bool:
        """Return whether the workflow is being replayed."""
        return bool(self._ctx.is_replaying)

    def set_custom_status(self, status: str) -> None:
        """Set the custom status of the workflow."""
        self._ctx.set_custom_status(status)

    def call_activity(self, activity: Callable[..., Any] | str, *args: ActivityOption) -> Any:
        """Schedule an activity and return its task.

        Raises SerializationError if an input option cannot be encoded.
        """
        options = build_activity_options(*args)
        return self._ctx.call_activity(
            activity,
            raw_input=options.raw_input,
            retry_policy=options.retry_policy,
        )

    def call_child_workflow(
        self, workflow: Callable[..., Any] | str, *args: ChildWorkflowOption
    ) -> Any:
        """Schedule a child workflow and return its task."""
        options = build_child_workflow_options(*args)
        kwargs: dict[str, Any] = {
            "raw_input": options.raw_input,
            "retry_policy": options.retry_policy,
        }
        if options.instance_id:
            kwargs["instance_id"] = options.instance_id
        return self._ctx.call_sub_orchestrator(workflow, **kwargs)

    def create_timer(self, duration: timedelta) -> Any:
        """Return a task that completes after the given duration."""
        return self._ctx.create_timer(duration)

    def wait_for_external_event(self, event_name: str, timeout: timedelta) -> Any:
        """Return a task that completes when the named event arrives."""
        if not event_name:
            raise ValueError("no event name specified")
        return self._ctx.wait_for_single_event(event_name, timeout)

    def continue_as_new(self, new_input: Any, keep_events: bool) -> None:
        """Restart the workflow with a new input."""
        self._ctx.continue_as_new(new_input, keep_unprocessed_events=bool(keep_events))