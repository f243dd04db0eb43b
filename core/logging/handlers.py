"""Logging handlers that split records into per-module files.

ModuleDispatchHandler writes each first-party record to the file chosen by
module_to_log_name(record.name). ThirdPartyHandler writes everything it
receives to run-3p.log. Both rotate their files once per run: the first write
of a run moves <name>.log to <name>.previous.log.

File I/O here is synchronous. A screening run logs a handful of lines per
document, so the blocking cost is negligible next to the LLM round trips.
"""

import logging
from pathlib import Path
from typing import TextIO


def _rotate_log_file(log_dir: Path, log_name: str, stream: TextIO | None) -> TextIO:
    """Close stream, shift <name>.log to <name>.previous.log, reopen <name>.log.

    Args:
        log_dir: Directory containing log files
        log_name: Base name of the log file (without .log extension)
        stream: Currently open stream for this log, or None

    Returns:
        Freshly opened append-mode handle for <name>.log
    """
    if stream:
        stream.close()

    current = log_dir / f"{log_name}.log"
    previous = log_dir / f"{log_name}.previous.log"
    previous.unlink(missing_ok=True)
    if current.exists():
        current.rename(previous)

    return current.open("a", encoding="utf-8")


class ModuleDispatchHandler(logging.Handler):
    """One handler, many files: routes records by logger name.

    Keeps its own cache of open streams rather than one FileHandler per
    module, so the number of open descriptors stays bounded by the number of
    distinct log names in MODULE_TO_LOG (plus "misc").

    Usage:
        handler = ModuleDispatchHandler(Path("logs"))
        handler.setFormatter(logging.Formatter("%(asctime)s - %(message)s"))
        logging.getLogger().addHandler(handler)
    """

    def __init__(self, log_dir: Path):
        super().__init__()
        self.log_dir = log_dir
        self._streams: dict[str, TextIO] = {}

    def emit(self, record: logging.LogRecord) -> None:
        try:
            from core.logging.run_manager import module_to_log_name, should_rotate

            log_name = module_to_log_name(record.name)
            if should_rotate(log_name):
                self._streams[log_name] = _rotate_log_file(
                    self.log_dir, log_name, self._streams.pop(log_name, None)
                )

            stream = self._stream_for(log_name)
            stream.write(self.format(record) + "\n")
            stream.flush()
        except Exception:
            self.handleError(record)

    def _stream_for(self, log_name: str) -> TextIO:
        """Return the cached stream for log_name, opening it lazily."""
        stream = self._streams.get(log_name)
        if stream is None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            stream = (self.log_dir / f"{log_name}.log").open("a", encoding="utf-8")
            self._streams[log_name] = stream
        return stream

    def close(self) -> None:
        self.acquire()
        try:
            for stream in self._streams.values():
                try:
                    stream.close()
                except OSError:
                    pass
            self._streams.clear()
        finally:
            self.release()
        super().close()


class ThirdPartyHandler(logging.FileHandler):
    """Collects library logs (httpx, anthropic, langchain...) in run-3p.log."""

    LOG_NAME = "run-3p"

    def __init__(self, log_dir: Path, **kwargs):
        self.log_dir = log_dir
        log_dir.mkdir(parents=True, exist_ok=True)
        super().__init__(
            log_dir / f"{self.LOG_NAME}.log", mode="a", encoding="utf-8", **kwargs
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            from core.logging.run_manager import should_rotate

            if should_rotate(self.LOG_NAME):
                self.stream = _rotate_log_file(self.log_dir, self.LOG_NAME, self.stream)
            super().emit(record)
        except Exception:
            self.handleError(record)
