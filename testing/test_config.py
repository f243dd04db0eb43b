"""Tests for environment configuration, adapter selection and log installation."""

import logging
import os

import pytest

from core.cognitive import (
    LangChainCognitiveAdapter,
    OpenAICompatibleCognitiveAdapter,
    build_cognitive_adapter,
)
from core.cognitive.models import ModelTier, get_llm
from core.config import CognitiveConfig, configure_langsmith, configure_logging, is_dev_mode
from core.logging import ModuleDispatchHandler, ThirdPartyHandler


class TestCognitiveConfig:
    def test_defaults(self, monkeypatch):
        for name in ["COGNITIVE_PROVIDER", "COGNITIVE_MODEL_TIER", "LLM_URL", "LLM_TIMEOUT"]:
            monkeypatch.delenv(name, raising=False)

        config = CognitiveConfig()

        assert config.provider == "anthropic"
        assert config.model_tier == "SONNET"
        assert config.llm_url == "http://localhost:1234/v1"
        assert config.llm_timeout == 300.0
        assert not config.uses_openai_compatible

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("COGNITIVE_PROVIDER", "OpenAI_Compatible")
        monkeypatch.setenv("LLM_MODEL", "qwen")
        monkeypatch.setenv("COGNITIVE_MAX_TOKENS", "512")

        config = CognitiveConfig()

        assert config.uses_openai_compatible
        assert config.llm_model == "qwen"
        assert config.max_tokens == 512


class TestBuildCognitiveAdapter:
    async def test_openai_compatible(self):
        config = CognitiveConfig(
            provider="openai_compatible", llm_url="http://llm.test/v1/", llm_model="m"
        )

        adapter = build_cognitive_adapter(config)

        assert isinstance(adapter, OpenAICompatibleCognitiveAdapter)
        assert adapter.base_url == "http://llm.test/v1"
        await adapter.close()

    def test_anthropic_is_lazy(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)

        adapter = build_cognitive_adapter(CognitiveConfig(provider="anthropic"))

        assert isinstance(adapter, LangChainCognitiveAdapter)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="Unknown cognitive provider"):
            build_cognitive_adapter(CognitiveConfig(provider="carrier-pigeon"))


class TestModels:
    def test_tier_from_name(self):
        assert ModelTier.from_name("haiku") is ModelTier.HAIKU
        assert ModelTier.from_name(" Opus ") is ModelTier.OPUS

    def test_unknown_tier(self):
        with pytest.raises(ValueError, match="Unknown model tier"):
            ModelTier.from_name("large")

    def test_get_llm_requires_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            get_llm()


class TestModes:
    def test_dev_mode(self, monkeypatch):
        monkeypatch.setenv("SCREENING_MODE", "DEV")
        assert is_dev_mode()

        monkeypatch.setenv("SCREENING_MODE", "prod")
        assert not is_dev_mode()

    def test_langsmith_disabled_in_prod(self, monkeypatch):
        monkeypatch.delenv("SCREENING_MODE", raising=False)
        monkeypatch.setenv("LANGSMITH_TRACING", "true")

        configure_langsmith()

        assert os.environ["LANGSMITH_TRACING"] == "false"


class TestConfigureLogging:
    @pytest.fixture
    def installed(self, tmp_path, monkeypatch):
        monkeypatch.setenv("SCREENING_LOG_DIR", str(tmp_path / "logs"))
        root = logging.getLogger()
        previous_level = root.level
        yield tmp_path / "logs"
        for handler in list(root.handlers):
            if isinstance(handler, (ModuleDispatchHandler, ThirdPartyHandler)):
                root.removeHandler(handler)
                handler.close()
        root.setLevel(previous_level)

    def test_routes_first_and_third_party(self, installed):
        configure_logging()

        logging.getLogger("processes.systematic_screening.process").info("first party")
        logging.getLogger("httpx").info("third party")
        for handler in logging.getLogger().handlers:
            handler.flush()

        screening_log = (installed / "screening.log").read_text()
        third_party_log = (installed / "run-3p.log").read_text()
        assert "first party" in screening_log
        assert "third party" not in screening_log
        assert "third party" in third_party_log
        assert "first party" not in third_party_log

    def test_reconfigure_replaces_handlers(self, installed):
        configure_logging()
        configure_logging(level=logging.DEBUG)

        ours = [
            h
            for h in logging.getLogger().handlers
            if isinstance(h, (ModuleDispatchHandler, ThirdPartyHandler))
        ]
        assert len(ours) == 2
        assert logging.getLogger().level == logging.DEBUG
