"""Process engine: registry of analytical processes and the run entry point.

Usage:
    engine = ProcessEngine(services, journeys)
    engine.register(SystematicScreeningProcess())

    catalog = engine.list_available()
    outcome = await engine.run("systematic-screening", journey_id, parameters)
"""

import logging
import uuid
from typing import Any, Optional

from pydantic import BaseModel

from .base import BaseProcess, ProcessDescriptor, ProcessResult
from .collaborators import JourneyLookup
from .context import CancellationSignal, ExecutionContext, ProcessServices, ProgressSink
from .errors import InputValidationError, JourneyNotFoundError, ProcessNotFoundError
from .recording import ExecutionRecorder, ProcessExecution, ProcessState

logger = logging.getLogger(__name__)


class ProcessExecutionResult(BaseModel):
    """A process result together with the execution it came from."""

    execution_id: str
    process_id: str
    result: ProcessResult

    @property
    def success(self) -> bool:
        return self.result.success

    @property
    def data(self) -> dict[str, Any]:
        return self.result.data

    @property
    def error_message(self) -> Optional[str]:
        return self.result.error_message


class ProcessEngine:
    """Registry and executor for analytical processes.

    Runs one process at a time per call; there is no queue and no
    internal concurrency. Registering a process id twice replaces the
    earlier registration.
    """

    def __init__(
        self,
        services: ProcessServices,
        journeys: JourneyLookup,
        recorder: Optional[ExecutionRecorder] = None,
    ):
        self.services = services
        self.journeys = journeys
        self.recorder = recorder
        self._registry: dict[str, BaseProcess] = {}

    def register(self, process: BaseProcess) -> None:
        if process.process_id in self._registry:
            logger.warning(f"Replacing registered process: {process.process_id}")
        self._registry[process.process_id] = process
        logger.info(f"Registered process: {process.process_id} ({process.name})")

    def get_process(self, process_id: str) -> BaseProcess:
        """Look up a registered process.

        Raises:
            ProcessNotFoundError: If process_id is not registered
        """
        if process_id not in self._registry:
            available = ", ".join(self._registry) or "none"
            raise ProcessNotFoundError(
                f"Process {process_id} not registered. Available: {available}",
                process_id=process_id,
            )
        return self._registry[process_id]

    def list_available(self) -> list[ProcessDescriptor]:
        """Snapshot of the catalog, in registration order."""
        return [process.describe() for process in self._registry.values()]

    async def run(
        self,
        process_id: str,
        journey_id: str,
        parameters: dict[str, Any],
        cancellation: Optional[CancellationSignal] = None,
        progress: Optional[ProgressSink] = None,
        scope_id: Optional[str] = None,
    ) -> ProcessExecutionResult:
        """Run a process for a journey and return its result.

        Validation failures and errors raised by the process come back as
        failed results, never as exceptions.

        Raises:
            ProcessNotFoundError: If process_id is not registered
            JourneyNotFoundError: If the journey does not exist
        """
        process = self.get_process(process_id)

        journey = await self.journeys.get_journey(journey_id)
        if journey is None:
            raise JourneyNotFoundError(journey_id, process_id=process_id)

        execution = ProcessExecution(
            execution_id=str(uuid.uuid4()),
            process_id=process_id,
            user_id=journey.user_id,
            journey_id=journey_id,
            inputs=dict(parameters),
        )
        context = ExecutionContext(
            execution_id=execution.execution_id,
            user_id=journey.user_id,
            journey_id=journey_id,
            scope_id=scope_id,
            parameters=dict(parameters),
            services=self.services,
            journey_context=journey.to_context(),
            cancellation=cancellation or CancellationSignal(),
            progress_sink=progress,
        )

        execution.mark_running()
        self._record("start", execution)
        logger.info(
            f"Executing process {process_id} for journey {journey_id} "
            f"[{execution.execution_id}]"
        )

        result = await self._validate_and_execute(process, context)

        if not result.success:
            state = ProcessState.FAILED
        elif result.data.get("cancelled"):
            state = ProcessState.CANCELLED
        else:
            state = ProcessState.COMPLETED
        execution.mark_finished(state, result_data=result.data, error_message=result.error_message)
        self._record("finish", execution)

        if result.success:
            logger.info(
                f"Process {process_id} {state.value} in "
                f"{execution.duration_seconds:.1f}s [{execution.execution_id}]"
            )
        else:
            logger.warning(f"Process {process_id} failed: {result.error_message}")

        return ProcessExecutionResult(
            execution_id=execution.execution_id,
            process_id=process_id,
            result=result,
        )

    async def _validate_and_execute(
        self, process: BaseProcess, context: ExecutionContext
    ) -> ProcessResult:
        try:
            if not process.validate(context):
                missing = process.missing_inputs(context)
                message = "Process input validation failed"
                if missing:
                    message += f". Missing required inputs: {', '.join(missing)}"
                raise InputValidationError(
                    message, missing=missing, process_id=process.process_id
                )
            return await process.execute(context)
        except InputValidationError as e:
            logger.warning(f"{process.process_id}: {e.message}")
            return ProcessResult.failed(e.message, data={"missing_inputs": e.missing})
        except Exception as e:
            logger.error(f"Process {process.process_id} raised: {e}", exc_info=True)
            return ProcessResult.failed(str(e) or type(e).__name__)

    def _record(self, stage: str, execution: ProcessExecution) -> None:
        if self.recorder is None:
            return
        try:
            getattr(self.recorder, stage)(execution)
        except Exception as e:
            logger.error(f"Execution recorder failed on {stage}: {e}", exc_info=True)
