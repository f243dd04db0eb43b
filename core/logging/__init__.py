"""Module-based logging with run-based rotation.

Each first-party module logs to its own file under the log directory, picked
by longest-prefix match in MODULE_TO_LOG:
    - logs/engine.log, logs/screening.log, logs/cognitive.log, ...
    - logs/run-3p.log (all third-party libraries)
    - logs/*.previous.log (previous run's logs)

Modules keep the plain pattern:
    import logging
    logger = logging.getLogger(__name__)

Install the handlers once per entry point with core.config.configure_logging().
"""

from core.logging.handlers import ModuleDispatchHandler, ThirdPartyHandler
from core.logging.run_manager import (
    MODULE_TO_LOG,
    end_run,
    get_current_run_id,
    module_to_log_name,
    start_run,
)

__all__ = [
    "start_run",
    "end_run",
    "get_current_run_id",
    "module_to_log_name",
    "ModuleDispatchHandler",
    "ThirdPartyHandler",
    "MODULE_TO_LOG",
]
