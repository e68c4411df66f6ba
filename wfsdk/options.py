"""Options for calling activities and child workflows."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable


class SerializationError(ValueError):
    """Raised when an input cannot be encoded as JSON."""


@dataclass(frozen=True)
class RetryPolicy:
    """How a failed activity or child workflow is retried."""

    max_attempts: int = 0
    initial_retry_interval: timedelta = timedelta(0)
    backoff_coefficient: float = 0.0
    max_retry_interval: timedelta = timedelta(0)
    retry_timeout: timedelta = timedelta(0)


@dataclass
class CallActivityOptions:
    """Settings used when scheduling an activity."""

    raw_input: str | None = None
    retry_policy: RetryPolicy | None = None


@dataclass
class CallChildWorkflowOptions:
    """Settings used when scheduling a child workflow."""

    instance_id: str = ""
    raw_input: str | None = None
    retry_policy: RetryPolicy | None = None


ActivityOption = Callable[[CallActivityOptions], None]
ChildWorkflowOption = Callable[[CallChildWorkflowOptions], None]

_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def marshal_data(value: Any) -> bytes | None:
    """Encode a value as compact JSON bytes; ``None`` gives ``None``."""
    if value is None:
        return None
    try:
        text = json.dumps(
            value,
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
            sort_keys=True,
        )
    except (TypeError, ValueError) as exc:
        raise SerializationError(str(exc)) from exc
    for char, escaped in _ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def _as_text(data: bytes | None) -> str:
    return data.decode("utf-8") if data is not None else ""


def activity_input(value: Any) -> ActivityOption:
    """Option giving an activity a JSON-serializable input."""

    def configure(options: CallActivityOptions) -> None:
        options.raw_input = _as_text(marshal_data(value))

    return configure


def activity_raw_input(value: str) -> ActivityOption:
    """Option giving an activity an already serialized input."""

    def configure(options: CallActivityOptions) -> None:
        options.raw_input = value

    return configure


def activity_retry_policy(policy: RetryPolicy) -> ActivityOption:
    """Option setting the retry policy of an activity."""

    def configure(options: CallActivityOptions) -> None:
        options.retry_policy = policy

    return configure


def build_activity_options(*args: ActivityOption) -> CallActivityOptions:
    """Apply activity options in order and return the result."""
    options = CallActivityOptions()
    for configure in args:
        configure(options)
    return options


def child_workflow_input(value: Any) -> ChildWorkflowOption:
    """Option giving a child workflow a JSON-serializable input."""

    def configure(options: CallChildWorkflowOptions) -> None:
        try:
            data = marshal_data(value)
        except SerializationError as exc:
            raise SerializationError(
                f"failed to marshal input data to JSON: {exc}"
            ) from exc
        options.raw_input = _as_text(data)

    return configure


def child_workflow_raw_input(value: str) -> ChildWorkflowOption:
    """Option giving a child workflow an already serialized input."""

    def configure(options: CallChildWorkflowOptions) -> None:
        options.raw_input = value

    return configure


def child_workflow_instance_id(instance_id: str) -> ChildWorkflowOption:
    """Option setting the instance ID of a child workflow."""

    def configure(options: CallChildWorkflowOptions) -> None:
        options.instance_id = instance_id

    return configure


def child_workflow_retry_policy(policy: RetryPolicy) -> ChildWorkflowOption:
    """Option setting the retry policy of a child workflow."""

    def configure(options: CallChildWorkflowOptions) -> None:
        options.retry_policy = policy

    return configure


def build_child_workflow_options(*args: ChildWorkflowOption) -> CallChildWorkflowOptions:
    """Apply child workflow options in order and return the result."""
    options = CallChildWorkflowOptions()
    for configure in args:
        configure(options)
    return options