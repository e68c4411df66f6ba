"""Registration of workflows and activities and the worker that runs them."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Protocol

from wfsdk.context import ActivityContext, WorkflowContext

log = logging.getLogger(__name__)

Workflow = Callable[[WorkflowContext], Any]
Activity = Callable[[ActivityContext], Any]
Orchestrator = Callable[[Any], Any]
EngineActivity = Callable[[Any], Any]


class WorkerError(RuntimeError):
    """Raised when the worker cannot register a function or start."""


class ActivityError(RuntimeError):
    """Raised when a wrapped activity fails."""


class _WorkItemClient(Protocol):
    def start_work_item_listener(self, stop: threading.Event, registry: "TaskRegistry") -> None: ...


class TaskRegistry:
    """Named orchestrators and activities known to a worker."""

    def __init__(self) -> None:
        self.orchestrators: dict[str, Orchestrator] = {}
        self.activities: dict[str, EngineActivity] = {}

    def add_orchestrator(self, name: str, orchestrator: Orchestrator) -> None:
        """Register an orchestrator under a name that is not yet taken."""
        if name in self.orchestrators:
            raise WorkerError(f"orchestrator named '{name}' is already registered")
        self.orchestrators[name] = orchestrator

    def add_activity(self, name: str, activity: EngineActivity) -> None:
        """Register an activity under a name that is not yet taken."""
        if name in self.activities:
            raise WorkerError(f"activity named '{name}' is already registered")
        self.activities[name] = activity


def get_function_name(func: Any) -> str:
    """Return the name a function is registered under.

    Raises ValueError for None and for anonymous functions.
    """
    if func is None:
        raise ValueError("nil function name")
    name = getattr(func, "__name__", None)
    if not name or name == "<lambda>":
        raise ValueError("anonymous function name")
    return name.rsplit(".", 1)[-1]


def wrap_workflow(workflow: Workflow) -> Orchestrator:
    """Adapt a workflow function to the engine's orchestrator signature."""

    def orchestrator(ctx: Any) -> Any:
        return workflow(WorkflowContext(ctx))

    return orchestrator


def wrap_activity(activity: Activity) -> EngineActivity:
    """Adapt an activity function to the engine's activity signature."""

    def run(ctx: Any) -> Any:
        try:
            return activity(ActivityContext(ctx))
        except Exception as exc:
            try:
                name = get_function_name(activity)
            except ValueError:
                name = ""
            raise ActivityError(f"activity {name} failed: {exc}") from exc

    return run


class WorkflowWorker:
    """Runs registered workflows and activities for the workflow engine."""

    def __init__(
        self,
        client: _WorkItemClient | None = None,
        *,
        tasks: TaskRegistry | None = None,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.tasks = tasks if tasks is not None else TaskRegistry()
        self._client = client
        self._on_close = on_close
        self._stop: threading.Event | None = None

    def register_workflow(self, workflow: Workflow) -> None:
        """Register a workflow under its function name."""
        orchestrator = wrap_workflow(workflow)
        try:
            name = get_function_name(workflow)
        except ValueError as exc:
            raise WorkerError(f"failed to get workflow decorator: {exc}") from exc
        self.tasks.add_orchestrator(name, orchestrator)

    def register_activity(self, activity: Activity) -> None:
        """Register an activity under its function name."""
        wrapped = wrap_activity(activity)
        try:
            name = get_function_name(activity)
        except ValueError as exc:
            raise WorkerError(f"failed to get activity decorator: {exc}") from exc
        self.tasks.add_activity(name, wrapped)

    def start(self) -> None:
        """Start listening for work items without blocking."""
        if self._client is None:
            raise WorkerError("failed to start work stream: no client configured")
        stop = threading.Event()
        self._stop = stop
        try:
            self._client.start_work_item_listener(stop, self.tasks)
        except Exception as exc:
            raise WorkerError(f"failed to start work stream: {exc}") from exc
        log.info("work item listener started")

    def shutdown(self) -> None:
        """Stop listening for work items and close the connection."""
        if self._stop is None:
            raise WorkerError("worker has not been started")
        self._stop.set()
        if self._on_close is not None:
            self._on_close()
        log.info("work item listener shutdown")