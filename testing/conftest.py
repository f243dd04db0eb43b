"""
Pytest configuration for process tests.

Provides the per-module logging run plus fixtures wiring a scripted cognitive
adapter and in-memory collaborators into a ProcessEngine. No test talks to a
real LLM.

Usage:
    pytest testing/
    pytest testing/test_systematic_screening.py -k cancel
"""

from collections.abc import Generator

import pytest

from core.logging import end_run, start_run
from processes.recording import InMemoryExecutionStore
from processes.registry import build_default_engine
from processes.shared import InMemoryDocumentStore, InMemoryJourneyStore
from processes.types import Journey
from testing.utils import JOURNEY_ID, USER_ID, FakeCognitiveAdapter


@pytest.fixture(autouse=True)
def logging_run(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Rotate logs at test module boundaries.

    Each test module gets its own logging run, which triggers log rotation
    on first write to each module's log file.

    When running with pytest-xdist, each worker uses a separate log directory
    to prevent file corruption from concurrent writes.
    """
    import os

    worker_id = os.environ.get("PYTEST_XDIST_WORKER")
    if worker_id:
        os.environ["SCREENING_LOG_DIR"] = f"logs/test-{worker_id}"

    test_path = request.node.nodeid.split("::")[0]
    test_name = test_path.replace("/", "-").replace(".py", "")
    start_run(f"test-{test_name}")
    yield
    end_run()


@pytest.fixture
def adapter() -> FakeCognitiveAdapter:
    return FakeCognitiveAdapter()


@pytest.fixture
def document_store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def journey_store() -> InMemoryJourneyStore:
    return InMemoryJourneyStore(
        [Journey(id=JOURNEY_ID, user_id=USER_ID, purpose="Review LLM-assisted screening")]
    )


@pytest.fixture
def execution_store() -> InMemoryExecutionStore:
    return InMemoryExecutionStore()


@pytest.fixture
def engine(adapter, document_store, journey_store, execution_store):
    return build_default_engine(
        adapter,
        document_store,
        journey_store,
        writer=document_store,
        recorder=execution_store,
    )


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests requiring external services",
    )
