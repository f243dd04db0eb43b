"""Execution context handed to a process for exactly one run.

The context bundles identity (execution, user, journey, scope), the raw
parameter map, the collaborators the process may call, and the two channels
back to the caller: a cancellation signal and a progress sink.
"""

import asyncio
import logging
import signal
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Optional

from core.cognitive import CognitiveAdapter

from .collaborators import DocumentLookup, DocumentWriter, SemanticExtractor, TabularExporter
from .types import JourneyContext

logger = logging.getLogger(__name__)


class CancellationSignal:
    """Cooperative cancellation for a running process.

    Processes poll `cancelled` at safe points; nothing is interrupted
    mid-call by the first signal. A second SIGINT/SIGTERM raises
    KeyboardInterrupt so a stuck call can still be abandoned.

    Usage:
        cancellation = CancellationSignal()
        cancellation.install_signal_handlers()
        ...
        if cancellation.cancelled:
            break
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self.reason: Optional[str] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._handlers_installed = False

    @property
    def cancelled(self) -> bool:
        """Check if cancellation has been requested."""
        return self._event.is_set()

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. Idempotent; the first reason wins."""
        if not self._event.is_set():
            self.reason = reason
            logger.info(f"Cancellation requested{f': {reason}' if reason else ''}")
            self._event.set()

    def install_signal_handlers(self) -> None:
        """Cancel on SIGINT/SIGTERM.

        Must be called with a running event loop. No-op where the platform
        lacks loop.add_signal_handler (Windows).
        """
        if self._handlers_installed:
            return

        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("Cannot install signal handlers: no running event loop")
            return

        try:
            for sig in (signal.SIGINT, signal.SIGTERM):
                self._loop.add_signal_handler(sig, self._on_signal, sig)
            self._handlers_installed = True
            logger.debug("Signal handlers installed (SIGINT, SIGTERM)")
        except NotImplementedError:
            logger.warning("Signal handlers not supported on this platform; Ctrl+C will not cancel cleanly")

    def _on_signal(self, sig: signal.Signals) -> None:
        if self.cancelled:
            logger.warning(f"Received {sig.name} again, interrupting")
            self.remove_signal_handlers()
            raise KeyboardInterrupt
        self.cancel(f"received {sig.name}")

    def remove_signal_handlers(self) -> None:
        if not self._handlers_installed or not self._loop:
            return
        try:
            self._loop.remove_signal_handler(signal.SIGINT)
            self._loop.remove_signal_handler(signal.SIGTERM)
        except (NotImplementedError, ValueError):
            pass
        self._handlers_installed = False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class ProcessProgress:
    """Snapshot of a batch process's progress."""

    total_count: int
    current_document: str = ""
    current_index: int = 0
    processed_count: int = 0
    failed_count: int = 0
    must_read_count: int = 0
    start_time: datetime = field(default_factory=_utcnow)
    status_message: Optional[str] = None

    @property
    def percent_complete(self) -> int:
        if self.total_count <= 0:
            return 0
        return int((self.processed_count + self.failed_count) * 100 / self.total_count)

    @property
    def elapsed_time(self) -> timedelta:
        return _utcnow() - self.start_time

    @property
    def estimated_time_remaining(self) -> timedelta:
        if self.processed_count == 0:
            return timedelta(0)
        per_doc = self.elapsed_time.total_seconds() / self.processed_count
        remaining = self.total_count - self.processed_count - self.failed_count
        return timedelta(seconds=per_doc * max(remaining, 0))


ProgressSink = Callable[[ProcessProgress], None]


@dataclass
class ProcessServices:
    """The collaborators a process may call. Any of them may be absent."""

    cognitive_adapter: Optional[CognitiveAdapter] = None
    document_lookup: Optional[DocumentLookup] = None
    semantic_extractor: Optional[SemanticExtractor] = None
    tabular_exporter: Optional[TabularExporter] = None
    document_writer: Optional[DocumentWriter] = None

    def require(self, name: str) -> Any:
        """Return the named collaborator or raise if it was not provided."""
        service = getattr(self, name)
        if service is None:
            raise RuntimeError(f"Required service not configured: {name}")
        return service


@dataclass
class ExecutionContext:
    """Everything one process run needs. Never reused across runs."""

    execution_id: str
    user_id: str
    journey_id: str
    parameters: dict[str, Any] = field(default_factory=dict)
    services: ProcessServices = field(default_factory=ProcessServices)
    scope_id: Optional[str] = None
    journey_context: Optional[JourneyContext] = None
    cancellation: CancellationSignal = field(default_factory=CancellationSignal)
    progress_sink: Optional[ProgressSink] = None

    def get_parameter(self, key: str, default: Any = None) -> Any:
        return self.parameters.get(key, default)

    def report_progress(self, progress: ProcessProgress) -> None:
        """Forward a progress snapshot to the sink, if any.

        A failing sink is logged and ignored; progress display must not
        abort the run.
        """
        if self.progress_sink is None:
            return
        try:
            self.progress_sink(progress)
        except Exception as e:
            logger.warning(f"Progress sink failed: {e}")

