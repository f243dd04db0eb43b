"""Run lifecycle for module-based logging.

A run is one logical unit of work: a process execution started from the CLI,
or one test module. The first record written to each log file inside a run
rotates that file.

Usage:
    from core.logging import start_run, end_run

    start_run("screening-7f3a")
    try:
        ...
    finally:
        end_run()
"""

from contextvars import ContextVar

# ContextVars so concurrent event-loop tasks never share rotation state
_current_run_id: ContextVar[str | None] = ContextVar("current_run_id", default=None)
_rotated_this_run: ContextVar[set[str] | None] = ContextVar("rotated_this_run", default=None)

_module_log_cache: dict[str, str] = {}

# Module path prefix -> log file name. Longest prefix wins; no match -> "misc".
MODULE_TO_LOG = {
    # Processes
    "processes.engine": "engine",
    "processes.recording": "engine",
    "processes.registry": "engine",
    "processes.systematic_screening": "screening",
    "processes.constrained_composition": "composition",
    "processes.shared": "processes-shared",
    "processes.cli": "cli",
    "processes": "processes",
    # Core
    "core.cognitive": "cognitive",
    "core.config": "config",
    "core.logging": "logging-internal",
    # Tests
    "testing": "testing",
}

_SORTED_PREFIXES = sorted(MODULE_TO_LOG.keys(), key=len, reverse=True)


def start_run(run_id: str) -> None:
    """Begin a run; each log file rotates on its first write afterwards.

    Calling again starts a fresh run and resets rotation tracking.
    """
    _current_run_id.set(run_id)
    _rotated_this_run.set(set())


def end_run() -> None:
    """End the current run.

    Rotation is driven by start_run(), so a missed end_run() after a crash
    does not leave logs in a bad state.
    """
    _current_run_id.set(None)
    _rotated_this_run.set(None)


def get_current_run_id() -> str | None:
    """Get the current run ID, if any."""
    return _current_run_id.get()


def should_rotate(log_name: str) -> bool:
    """Return True exactly once per run for each log name.

    Always False outside a run.
    """
    rotated = _rotated_this_run.get()
    if _current_run_id.get() is None or rotated is None or log_name in rotated:
        return False
    rotated.add(log_name)
    return True


def module_to_log_name(module_name: str) -> str:
    """Resolve a logger name such as "processes.systematic_screening.process" to a log name."""
    if module_name not in _module_log_cache:
        _module_log_cache[module_name] = _compute_log_name(module_name)
    return _module_log_cache[module_name]


def _compute_log_name(module_name: str) -> str:
    for prefix in _SORTED_PREFIXES:
        if module_name == prefix or module_name.startswith(prefix + "."):
            return MODULE_TO_LOG[prefix]
    return "misc"
