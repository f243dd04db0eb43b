"""Tests for the process engine: registry, catalog, run lifecycle."""

import pytest

from processes.base import BaseProcess, ProcessResult
from processes.context import ProcessServices
from processes.engine import ProcessEngine
from processes.errors import (
    JourneyNotFoundError,
    NotFoundError,
    ProcessNotFoundError,
    ValidationError,
)
from processes.recording import InMemoryExecutionStore, ProcessState
from processes.registry import PROCESS_REGISTRY, get_available_process_ids
from processes.schema import InputSchema
from testing.utils import JOURNEY_ID, USER_ID


class EchoProcess(BaseProcess):
    process_id = "echo"
    name = "Echo"
    description = "Returns its input"
    category = "Utility"

    def __init__(self, name: str = "Echo"):
        self.name = name
        self.seen_contexts = []

    def get_input_schema(self) -> InputSchema:
        return InputSchema().add_text_input("text", "What to echo")

    async def execute(self, context):
        self.seen_contexts.append(context)
        return ProcessResult.ok({"text": context.get_parameter("text")})


class ExplodingProcess(EchoProcess):
    process_id = "explode"

    async def execute(self, context):
        raise RuntimeError("boom")


class RejectingProcess(EchoProcess):
    process_id = "reject"

    def validate(self, context):
        return False


@pytest.fixture
def bare_engine(journey_store, execution_store):
    return ProcessEngine(ProcessServices(), journey_store, recorder=execution_store)


class TestRegistry:
    def test_empty_catalog(self, bare_engine):
        assert bare_engine.list_available() == []

    def test_register_and_list(self, bare_engine):
        bare_engine.register(EchoProcess())

        catalog = bare_engine.list_available()

        assert len(catalog) == 1
        descriptor = catalog[0]
        assert descriptor.process_id == "echo"
        assert descriptor.name == "Echo"
        assert descriptor.category == "Utility"
        assert descriptor.input_schema.required_names == ["text"]

    def test_reregistration_replaces(self, bare_engine):
        bare_engine.register(EchoProcess(name="First"))
        bare_engine.register(EchoProcess(name="Second"))

        catalog = bare_engine.list_available()

        assert [d.name for d in catalog] == ["Second"]

    def test_descriptor_is_immutable(self, bare_engine):
        bare_engine.register(EchoProcess())
        descriptor = bare_engine.list_available()[0]

        with pytest.raises(Exception):
            descriptor.name = "changed"

    def test_default_engine_catalog(self, engine):
        ids = [d.process_id for d in engine.list_available()]
        assert ids == get_available_process_ids()
        assert set(ids) == {"systematic-screening", "basic-constrained-composition"}
        assert set(PROCESS_REGISTRY) == set(ids)


class TestRun:
    async def test_unknown_process(self, bare_engine):
        with pytest.raises(ProcessNotFoundError) as exc_info:
            await bare_engine.run("nope", JOURNEY_ID, {})
        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.process_id == "nope"

    async def test_unknown_journey(self, bare_engine):
        bare_engine.register(EchoProcess())

        with pytest.raises(JourneyNotFoundError) as exc_info:
            await bare_engine.run("echo", "missing-journey", {"text": "hi"})
        assert isinstance(exc_info.value, ValidationError)
        assert exc_info.value.message == "Journey missing-journey not found"

    async def test_successful_run_builds_context(self, bare_engine, execution_store):
        process = EchoProcess()
        bare_engine.register(process)

        outcome = await bare_engine.run("echo", JOURNEY_ID, {"text": "hi"}, scope_id="scope-1")

        assert outcome.success
        assert outcome.data == {"text": "hi"}
        context = process.seen_contexts[0]
        assert context.execution_id == outcome.execution_id
        assert context.user_id == USER_ID
        assert context.journey_id == JOURNEY_ID
        assert context.scope_id == "scope-1"
        assert context.journey_context.purpose == "Review LLM-assisted screening"
        assert context.cancellation.cancelled is False

        record = execution_store.get(outcome.execution_id)
        assert record.state == ProcessState.COMPLETED
        assert record.inputs == {"text": "hi"}
        assert record.started_at is not None
        assert record.completed_at >= record.started_at
        assert record.result_data == {"text": "hi"}

    async def test_each_run_gets_fresh_context(self, bare_engine):
        process = EchoProcess()
        bare_engine.register(process)

        first = await bare_engine.run("echo", JOURNEY_ID, {"text": "a"})
        second = await bare_engine.run("echo", JOURNEY_ID, {"text": "b"})

        assert first.execution_id != second.execution_id
        assert process.seen_contexts[0] is not process.seen_contexts[1]

    async def test_missing_required_input(self, bare_engine, execution_store):
        process = EchoProcess()
        bare_engine.register(process)

        outcome = await bare_engine.run("echo", JOURNEY_ID, {})

        assert outcome.success is False
        assert outcome.result.status == "failed"
        assert "Missing required inputs: text" in outcome.error_message
        assert process.seen_contexts == []
        assert execution_store.get(outcome.execution_id).state == ProcessState.FAILED

    async def test_validate_false_without_missing_keys(self, bare_engine):
        bare_engine.register(RejectingProcess())

        outcome = await bare_engine.run("reject", JOURNEY_ID, {"text": "hi"})

        assert outcome.success is False
        assert outcome.error_message == "Process input validation failed"

    async def test_exception_becomes_failed_result(self, bare_engine, execution_store):
        bare_engine.register(ExplodingProcess())

        outcome = await bare_engine.run("explode", JOURNEY_ID, {"text": "hi"})

        assert outcome.success is False
        assert outcome.error_message == "boom"
        record = execution_store.get(outcome.execution_id)
        assert record.state == ProcessState.FAILED
        assert record.error_message == "boom"

    async def test_runs_without_recorder(self, journey_store):
        engine = ProcessEngine(ProcessServices(), journey_store)
        engine.register(EchoProcess())

        outcome = await engine.run("echo", JOURNEY_ID, {"text": "hi"})

        assert outcome.success

    async def test_failing_recorder_does_not_fail_run(self, journey_store):
        class BrokenRecorder(InMemoryExecutionStore):
            def finish(self, execution):
                raise OSError("disk full")

        engine = ProcessEngine(ProcessServices(), journey_store, recorder=BrokenRecorder())
        engine.register(EchoProcess())

        outcome = await engine.run("echo", JOURNEY_ID, {"text": "hi"})

        assert outcome.success


class TestExecutionStore:
    async def test_list_for_journey(self, bare_engine, execution_store):
        bare_engine.register(EchoProcess())
        await bare_engine.run("echo", JOURNEY_ID, {"text": "a"})
        await bare_engine.run("echo", JOURNEY_ID, {"text": "b"})

        records = execution_store.list_for_journey(JOURNEY_ID)

        assert len(records) == 2
        assert len(execution_store) == 2
        assert all(r.process_id == "echo" for r in records)
        assert all(r.duration_seconds is not None for r in records)
