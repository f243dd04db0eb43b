"""Execution records for process runs.

The engine writes one ProcessExecution per run through an ExecutionRecorder:
start() when the run begins, finish() once its terminal state is known.
"""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class ProcessState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ProcessExecution(BaseModel):
    """Lifecycle record of a single process run."""

    execution_id: str
    process_id: str
    user_id: str
    journey_id: str
    state: ProcessState = ProcessState.PENDING
    inputs: dict[str, Any] = Field(default_factory=dict)
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    error_message: Optional[str] = None
    result_data: dict[str, Any] = Field(default_factory=dict)

    def mark_running(self) -> None:
        self.state = ProcessState.RUNNING
        self.started_at = _utcnow()

    def mark_finished(
        self,
        state: ProcessState,
        result_data: Optional[dict[str, Any]] = None,
        error_message: Optional[str] = None,
    ) -> None:
        self.state = state
        self.completed_at = _utcnow()
        self.result_data = result_data or {}
        self.error_message = error_message

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at is None or self.completed_at is None:
            return None
        return (self.completed_at - self.started_at).total_seconds()


@runtime_checkable
class ExecutionRecorder(Protocol):
    """Persists execution records. Implementations must not raise into the engine."""

    def start(self, execution: ProcessExecution) -> None:
        ...

    def finish(self, execution: ProcessExecution) -> None:
        ...


class InMemoryExecutionStore:
    """ExecutionRecorder that keeps records in a dict, keyed by execution id."""

    def __init__(self) -> None:
        self._executions: dict[str, ProcessExecution] = {}

    def start(self, execution: ProcessExecution) -> None:
        self._executions[execution.execution_id] = execution.model_copy(deep=True)
        logger.debug(f"Recorded start of {execution.process_id} [{execution.execution_id}]")

    def finish(self, execution: ProcessExecution) -> None:
        self._executions[execution.execution_id] = execution.model_copy(deep=True)
        logger.debug(
            f"Recorded {execution.state.value} for {execution.process_id} "
            f"[{execution.execution_id}]"
        )

    def get(self, execution_id: str) -> Optional[ProcessExecution]:
        return self._executions.get(execution_id)

    def list_for_journey(self, journey_id: str) -> list[ProcessExecution]:
        return [e for e in self._executions.values() if e.journey_id == journey_id]

    def __len__(self) -> int:
        return len(self._executions)
