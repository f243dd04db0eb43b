"""Cognitive adapters: the text/embedding capability processes consume.

Processes only see the CognitiveAdapter interface. Two implementations ship:

- LangChainCognitiveAdapter: Anthropic Claude through langchain for text,
  EmbeddingService (OpenAI or Ollama) for vectors.
- OpenAICompatibleCognitiveAdapter: any server speaking the OpenAI
  /chat/completions and /embeddings protocol (LM Studio, vLLM, llama.cpp).

Both raise TextGenerationError / EmbeddingGenerationError on failure. Neither
retries; a failed call is fatal to the run that made it.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from langchain_core.messages import HumanMessage, SystemMessage

from core.config import CognitiveConfig, get_cognitive_config

from .embedding import EmbeddingService
from .errors import EmbeddingGenerationError, TextGenerationError
from .response_parsing import extract_response_content

logger = logging.getLogger(__name__)


class CognitiveAdapter(ABC):
    """Abstraction over an LLM-backed text and embedding service."""

    @abstractmethod
    async def generate_text(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        """Generate a completion for prompt, optionally steered by system_prompt."""
        pass

    @abstractmethod
    async def create_embedding(self, text: str) -> list[float]:
        """Produce an embedding vector for text."""
        pass

    async def close(self) -> None:
        """Release network resources. Default: nothing to release."""
        return None


class LangChainCognitiveAdapter(CognitiveAdapter):
    """Claude via langchain-anthropic, embeddings via EmbeddingService.

    The chat model and embedding service are created on first use so an
    adapter can be built without credentials for a run that never calls it.
    """

    def __init__(
        self,
        llm: Any = None,
        embeddings: EmbeddingService | None = None,
        config: CognitiveConfig | None = None,
    ):
        self._config = config or get_cognitive_config()
        self._llm = llm
        self._embeddings = embeddings

    def _get_llm(self) -> Any:
        if self._llm is None:
            from .models import ModelTier, get_llm

            self._llm = get_llm(
                tier=ModelTier.from_name(self._config.model_tier),
                max_tokens=self._config.max_tokens,
            )
        return self._llm

    def _get_embeddings(self) -> EmbeddingService:
        if self._embeddings is None:
            self._embeddings = EmbeddingService(
                provider=self._config.embedding_provider,
                model=self._config.embedding_model,
                host=self._config.ollama_host,
            )
        return self._embeddings

    async def generate_text(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        messages: list[Any] = []
        if system_prompt:
            messages.append(SystemMessage(content=system_prompt))
        messages.append(HumanMessage(content=prompt))

        try:
            response = await self._get_llm().ainvoke(messages)
        except Exception as e:
            logger.error(f"Claude generation failed: {e}")
            raise TextGenerationError(prompt, str(e), provider="anthropic") from e

        return extract_response_content(response)

    async def create_embedding(self, text: str) -> list[float]:
        return await self._get_embeddings().embed_long(text)

    async def close(self) -> None:
        if self._embeddings is not None:
            await self._embeddings.close()


class OpenAICompatibleCognitiveAdapter(CognitiveAdapter):
    """Adapter for a local or remote OpenAI-compatible inference server."""

    provider = "openai_compatible"

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: float = 300.0,
        temperature: float = 0.7,
        max_tokens: int = 2000,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self._client = client or httpx.AsyncClient(base_url=self.base_url, timeout=timeout)

    async def generate_text(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        logger.info(f"Sending request to LLM at {self.base_url}/chat/completions")
        try:
            response = await self._client.post(
                "/chat/completions",
                json={
                    "model": self.model,
                    "messages": messages,
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                    "stream": False,
                },
            )
            response.raise_for_status()
            content = response.json()["choices"][0]["message"]["content"]
        except httpx.HTTPStatusError as e:
            logger.error(
                f"LLM generation failed: {e.response.status_code} - {e.response.text}"
            )
            raise TextGenerationError(
                prompt, f"HTTP {e.response.status_code}", provider=self.provider
            ) from e
        except httpx.TimeoutException as e:
            logger.error("LLM request timed out")
            raise TextGenerationError(prompt, "request timed out", provider=self.provider) from e
        except httpx.ConnectError as e:
            logger.error(f"Cannot connect to LLM at {self.base_url}")
            raise TextGenerationError(
                prompt, f"cannot connect to LLM at {self.base_url}", provider=self.provider
            ) from e
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Failed to parse LLM response: {e}")
            raise TextGenerationError(
                prompt, f"unexpected response: {e}", provider=self.provider
            ) from e

        if not isinstance(content, str) or not content.strip():
            raise TextGenerationError(prompt, "empty completion", provider=self.provider)
        return content

    async def create_embedding(self, text: str) -> list[float]:
        try:
            response = await self._client.post(
                "/embeddings",
                json={"model": self.model, "input": text},
            )
            response.raise_for_status()
            return [float(v) for v in response.json()["data"][0]["embedding"]]
        except httpx.HTTPStatusError as e:
            logger.error(f"Embedding generation failed: {e.response.status_code}")
            raise EmbeddingGenerationError(
                text, f"HTTP {e.response.status_code}", provider=self.provider
            ) from e
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as e:
            logger.error(f"Failed to generate embedding: {e}")
            raise EmbeddingGenerationError(text, str(e), provider=self.provider) from e

    async def close(self) -> None:
        await self._client.aclose()


def build_cognitive_adapter(config: CognitiveConfig | None = None) -> CognitiveAdapter:
    """Create the adapter selected by COGNITIVE_PROVIDER."""
    config = config or get_cognitive_config()
    if config.uses_openai_compatible:
        logger.info(f"Using OpenAI-compatible LLM at {config.llm_url} (model={config.llm_model})")
        return OpenAICompatibleCognitiveAdapter(
            base_url=config.llm_url,
            model=config.llm_model,
            timeout=config.llm_timeout,
            max_tokens=config.max_tokens,
        )
    if config.provider.lower() != "anthropic":
        raise ValueError(
            f"Unknown cognitive provider: {config.provider}. "
            "Use 'anthropic' or 'openai_compatible'."
        )
    logger.info(f"Using Claude via langchain (tier={config.model_tier})")
    return LangChainCognitiveAdapter(config=config)
