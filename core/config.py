"""Configuration and environment setup.

This module provides centralized configuration for the process engine,
including development mode detection, LangSmith tracing setup, cognitive
service settings and log handler installation.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def is_dev_mode() -> bool:
    """Check if running in development mode.

    Returns:
        True if SCREENING_MODE is set to 'dev', False otherwise.
    """
    return os.getenv("SCREENING_MODE", "prod").lower() == "dev"


def configure_langsmith() -> None:
    """Configure LangSmith tracing based on SCREENING_MODE.

    When SCREENING_MODE=dev:
        - Enables LangSmith tracing
        - Sets project to 'screening-dev'

    When SCREENING_MODE=prod (or unset):
        - Disables LangSmith tracing

    This function is idempotent and safe to call multiple times.
    """
    if is_dev_mode():
        os.environ.setdefault("LANGSMITH_TRACING", "true")
        os.environ.setdefault("LANGSMITH_PROJECT", "screening-dev")
    else:
        os.environ["LANGSMITH_TRACING"] = "false"


@dataclass
class CognitiveConfig:
    """Configuration for the cognitive adapter.

    Environment Variables:
        COGNITIVE_PROVIDER: 'anthropic' or 'openai_compatible' (default: anthropic)
        COGNITIVE_MODEL_TIER: HAIKU, SONNET or OPUS (default: SONNET)
        COGNITIVE_MAX_TOKENS: Max output tokens per generation (default: 2000)
        LLM_URL: Base URL of an OpenAI-compatible server (default: http://localhost:1234/v1)
        LLM_MODEL: Model name for the OpenAI-compatible server (default: local-model)
        LLM_TIMEOUT: Request timeout in seconds (default: 300)
        EMBEDDING_PROVIDER: 'openai' or 'ollama' (default: openai)
        EMBEDDING_MODEL: Embedding model override
        OLLAMA_HOST: Ollama host (default: http://localhost:11434)
    """

    provider: str = field(
        default_factory=lambda: os.environ.get("COGNITIVE_PROVIDER", "anthropic")
    )
    model_tier: str = field(
        default_factory=lambda: os.environ.get("COGNITIVE_MODEL_TIER", "SONNET")
    )
    max_tokens: int = field(
        default_factory=lambda: int(os.environ.get("COGNITIVE_MAX_TOKENS", "2000"))
    )
    llm_url: str = field(
        default_factory=lambda: os.environ.get("LLM_URL", "http://localhost:1234/v1")
    )
    llm_model: str = field(
        default_factory=lambda: os.environ.get("LLM_MODEL", "local-model")
    )
    llm_timeout: float = field(
        default_factory=lambda: float(os.environ.get("LLM_TIMEOUT", "300"))
    )
    embedding_provider: str = field(
        default_factory=lambda: os.environ.get("EMBEDDING_PROVIDER", "openai")
    )
    embedding_model: str | None = field(
        default_factory=lambda: os.environ.get("EMBEDDING_MODEL")
    )
    ollama_host: str = field(
        default_factory=lambda: os.environ.get("OLLAMA_HOST", "http://localhost:11434")
    )

    @property
    def uses_openai_compatible(self) -> bool:
        """Check if text generation goes through an OpenAI-compatible server."""
        return self.provider.lower() == "openai_compatible"


_config: CognitiveConfig | None = None


def get_cognitive_config() -> CognitiveConfig:
    """Get global CognitiveConfig instance."""
    global _config
    if _config is None:
        _config = CognitiveConfig()
    return _config


def get_log_dir() -> Path:
    """Get the log directory from SCREENING_LOG_DIR (default: logs)."""
    return Path(os.environ.get("SCREENING_LOG_DIR", "logs"))


# Loggers owned by this repository; everything else is third-party
_FIRST_PARTY_PREFIXES = ("core", "processes", "testing", "__main__")


class _FirstPartyFilter(logging.Filter):
    def __init__(self, first_party: bool):
        super().__init__()
        self.first_party = first_party

    def filter(self, record: logging.LogRecord) -> bool:
        is_first_party = record.name.split(".")[0] in _FIRST_PARTY_PREFIXES
        return is_first_party == self.first_party


def configure_logging(run_name: str | None = None, level: int = logging.INFO) -> None:
    """Install module-dispatch file handlers on the root logger.

    First-party records go to per-module files (see MODULE_TO_LOG), third-party
    records go to run-3p.log. Calling again replaces previously installed
    handlers instead of stacking them.

    Args:
        run_name: Optional run identifier; starts a new logging run (rotation)
        level: Root log level
    """
    from core.logging import ModuleDispatchHandler, ThirdPartyHandler, start_run

    log_dir = get_log_dir()
    log_dir.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, (ModuleDispatchHandler, ThirdPartyHandler)):
            root.removeHandler(handler)
            handler.close()

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    module_handler = ModuleDispatchHandler(log_dir)
    module_handler.setFormatter(formatter)
    module_handler.addFilter(_FirstPartyFilter(first_party=True))

    third_party_handler = ThirdPartyHandler(log_dir)
    third_party_handler.setFormatter(formatter)
    third_party_handler.addFilter(_FirstPartyFilter(first_party=False))

    root.addHandler(module_handler)
    root.addHandler(third_party_handler)
    root.setLevel(level)

    if run_name:
        start_run(run_name)
