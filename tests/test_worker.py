import threading

import pytest

from wfsdk.context import ActivityContext, WorkflowContext
from wfsdk.worker import (
    ActivityError,
    TaskRegistry,
    WorkerError,
    WorkflowWorker,
    get_function_name,
    wrap_activity,
    wrap_workflow,
)


def sample_workflow(ctx):
    return ctx.name()


def sample_activity(ctx):
    return ctx.get_input()


def failing_activity(ctx):
    raise RuntimeError("boom")


def _identity(ctx):
    return ctx


class FakeOrchestration:
    id = "wf-1"
    name = "my-workflow"
    is_replaying = False
    current_time_utc = None
    raw_input = None


class FakeActivityEngine:
    def get_input(self):
        return 42

    def context(self):
        return None


class FakeClient:
    def __init__(self, fail=False):
        self.fail = fail
        self.started = None

    def start_work_item_listener(self, stop, registry):
        if self.fail:
            raise ConnectionError("unreachable")
        self.started = (stop, registry)


def test_register_workflow():
    worker = WorkflowWorker()
    worker.register_workflow(sample_workflow)
    assert list(worker.tasks.orchestrators) == ["sample_workflow"]


def test_register_workflow_anonymous():
    worker = WorkflowWorker()
    with pytest.raises(WorkerError, match="anonymous function name"):
        worker.register_workflow(lambda ctx: None)
    assert worker.tasks.orchestrators == {}


def test_register_activity():
    worker = WorkflowWorker()
    worker.register_activity(sample_activity)
    assert list(worker.tasks.activities) == ["sample_activity"]


def test_register_activity_anonymous():
    worker = WorkflowWorker()
    with pytest.raises(WorkerError, match="failed to get activity decorator"):
        worker.register_activity(lambda ctx: None)


def test_register_duplicate_activity():
    worker = WorkflowWorker()
    worker.register_activity(sample_activity)
    with pytest.raises(WorkerError, match="already registered"):
        worker.register_activity(sample_activity)


def test_registry_duplicate_orchestrator():
    registry = TaskRegistry()
    registry.add_orchestrator("a", sample_workflow)
    with pytest.raises(WorkerError):
        registry.add_orchestrator("a", sample_workflow)
    assert registry.orchestrators == {"a": sample_workflow}


def test_wrap_workflow_passes_context():
    orchestrator = wrap_workflow(sample_workflow)
    assert orchestrator(FakeOrchestration()) == "my-workflow"


def test_wrap_workflow_gives_workflow_context():
    result = wrap_workflow(_identity)(FakeOrchestration())
    assert isinstance(result, WorkflowContext)
    assert result.instance_id() == "wf-1"


def test_wrap_activity_returns_result():
    assert wrap_activity(sample_activity)(FakeActivityEngine()) == 42


def test_wrap_activity_gives_activity_context():
    result = wrap_activity(_identity)(FakeActivityEngine())
    assert isinstance(result, ActivityContext)
    assert result.get_input() == 42


def test_wrap_activity_failure():
    with pytest.raises(ActivityError, match="activity failing_activity failed: boom"):
        wrap_activity(failing_activity)(FakeActivityEngine())


def test_get_function_name():
    assert get_function_name(sample_workflow) == "sample_workflow"


def test_get_function_name_none():
    with pytest.raises(ValueError, match="nil function name"):
        get_function_name(None)


def test_start_and_shutdown():
    client = FakeClient()
    closed = []
    worker = WorkflowWorker(client, on_close=lambda: closed.append(True))
    worker.start()
    stop, registry = client.started
    assert registry is worker.tasks
    assert not stop.is_set()
    worker.shutdown()
    assert stop.is_set()
    assert closed == [True]


def test_start_failure():
    worker = WorkflowWorker(FakeClient(fail=True))
    with pytest.raises(WorkerError, match="failed to start work stream: unreachable"):
        worker.start()


def test_start_without_client():
    with pytest.raises(WorkerError, match="failed to start work stream"):
        WorkflowWorker().start()


def test_shutdown_before_start():
    with pytest.raises(WorkerError, match="not been started"):
        WorkflowWorker(FakeClient()).shutdown()


def test_start_passes_event():
    client = FakeClient()
    worker = WorkflowWorker(client)
    worker.start()
    stop, registry = client.started
    assert isinstance(stop, threading.Event)
    assert registry is worker.tasks