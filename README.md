# wfsdk

Tools for writing and driving durable workflows: a client that schedules and
manages workflow instances, a worker that hosts workflow and activity
functions, and the contexts and options those functions work with.

## Installation

```
pip install wfsdk
```

For running the test suite:

```
pip install "wfsdk[test]"
pytest
```

## What is in the package

- `wfsdk.client` — `Client` wraps a task hub connection object and schedules
  workflows (`schedule_new_workflow`), inspects them
  (`fetch_workflow_metadata`, `wait_for_workflow_start`,
  `wait_for_workflow_completion`) and controls them (`terminate_workflow`,
  `raise_event`, `suspend_workflow`, `resume_workflow`, `purge_workflow`).
  `WorkflowIDReusePolicy` and `CreateWorkflowAction` decide what happens when
  an instance id is scheduled again. Every method that takes an instance id
  raises `ValueError` when the id is empty; `raise_event` also rejects an
  empty event name. Inputs, outputs and event payloads are given either as a
  value (encoded to JSON) or as a raw string, not both. `Client` is a context
  manager and calls `close` on exit.
- `wfsdk.worker` — `WorkflowWorker` registers workflow functions
  (`register_workflow`) and activity functions (`register_activity`) in a
  `TaskRegistry` under their own function names, then `start` and `shutdown`
  the listener for work items. Anonymous functions such as lambdas cannot be
  registered, and a name cannot be registered twice; both raise
  `WorkerError`. `get_function_name`, `wrap_workflow` and `wrap_activity`
  expose the naming rule and the adapters. A failing activity raises
  `ActivityError` naming the activity.
- `wfsdk.context` — `WorkflowContext` is what a workflow function receives:
  its JSON input, name, instance id, replay-safe current time
  (`current_utc_datetime`), replay flag, custom status, and the calls that
  produce tasks (`call_activity`, `call_child_workflow`, `create_timer`,
  `wait_for_external_event`, `continue_as_new`). `ActivityContext` is what an
  activity function receives.
- `wfsdk.options` — options for activity and child workflow calls:
  `activity_input`, `activity_raw_input`, `activity_retry_policy`,
  `child_workflow_input`, `child_workflow_raw_input`,
  `child_workflow_instance_id`, `child_workflow_retry_policy`, combined by
  `build_activity_options` and `build_child_workflow_options`, with
  `RetryPolicy` describing retries. Inputs are serialised to compact JSON by
  `marshal_data`, which raises `SerializationError` for values JSON cannot
  hold.
- `wfsdk.metadata` — `Metadata` and `FailureDetails`, the view of a workflow
  instance returned by the client, built from the engine's
  `OrchestrationMetadata` and `TaskFailureDetails` by `convert_metadata`.
  `new_task_list` makes a list of empty task slots.
- `wfsdk.state` — `Status`, the runtime status of a workflow instance. Its
  string form is one of `RUNNING`, `COMPLETED`, `CONTINUED_AS_NEW`, `FAILED`,
  `CANCELED`, `TERMINATED`, `PENDING`, `SUSPENDED`, or `UNKNOWN` for any
  other number. `WorkflowState` reads the status from engine metadata and
  `convert_status_list` maps statuses to `OrchestrationStatus`.

## A workflow and an activity

```python
from wfsdk.context import ActivityContext, WorkflowContext
from wfsdk.options import activity_input


def greet(ctx: ActivityContext):
    name = ctx.get_input()
    return f"Hello, {name}!"


def greeting_workflow(ctx: WorkflowContext):
    name = ctx.get_input()
    return ctx.call_activity(greet, activity_input(name))
```

Register both with a `WorkflowWorker` through `register_workflow` and
`register_activity`, call `start`, and schedule instances by name with
`Client.schedule_new_workflow("greeting_workflow", input="world")`.

## What the package does not do

The package holds no network transport of its own. `Client` must be given an
object that talks to the workflow engine (scheduling, querying and
controlling orchestrations), and `WorkflowWorker` must be given one that
provides `start_work_item_listener`; without them the client cannot be
created and the worker cannot start. Likewise the contexts delegate task
scheduling, timers and events to the engine context they wrap.

## Checking the linter version

The package ships a small command that compares the major and minor version
of the locally installed linter (the command named by
`wfsdk.lintcheck.LINTER_COMMAND`) with the version pinned in a CI workflow
file, under the key `wfsdk.lintcheck.VERSION_KEY` in `jobs.build.env`:

```
wfsdk-check-lint-version [WORKFLOW_FILE]
```

Without an argument it reads `wfsdk.lintcheck.DEFAULT_WORKFLOW_PATH`. It
prints either that the linter version is valid, that the version is invalid
together with the expected and current versions, or the error met while
reading the workflow file or querying the linter.