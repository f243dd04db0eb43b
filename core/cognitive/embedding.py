"""
Embedding generation for the cognitive adapter.

Supports OpenAI and Ollama providers.
"""

import logging
import os
import re
from abc import ABC, abstractmethod

import httpx
import numpy as np

from .errors import EmbeddingGenerationError

logger = logging.getLogger(__name__)

# ~4 chars per token against an 8192 token limit, with headroom
CHARS_PER_TOKEN_ESTIMATE = 4
SAFE_CHAR_LIMIT = (8192 - 200) * CHARS_PER_TOKEN_ESTIMATE


def chunk_text(text: str, max_chars: int = SAFE_CHAR_LIMIT) -> list[str]:
    """Split text into pieces no longer than max_chars.

    Splits on blank lines first and packs paragraphs greedily; a single
    paragraph longer than max_chars is hard-cut.
    """
    if len(text) <= max_chars:
        return [text]

    chunks: list[str] = []
    current = ""
    for para in re.split(r"\n\s*\n", text):
        para = para.strip()
        if not para:
            continue
        while len(para) > max_chars:
            if current:
                chunks.append(current)
                current = ""
            chunks.append(para[:max_chars])
            para = para[max_chars:]
        if current and len(current) + len(para) + 2 > max_chars:
            chunks.append(current)
            current = para
        else:
            current = f"{current}\n\n{para}" if current else para
    if current:
        chunks.append(current)
    return chunks


class EmbeddingProvider(ABC):
    """Abstract base class for embedding providers."""

    name: str = "unknown"

    @abstractmethod
    async def embed(self, text: str) -> list[float]:
        """Generate embedding for text."""
        pass

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple texts (sequential by default)."""
        return [await self.embed(text) for text in texts]

    @abstractmethod
    async def close(self) -> None:
        pass


class OpenAIEmbeddings(EmbeddingProvider):
    """OpenAI embeddings provider."""

    name = "openai"

    def __init__(
        self,
        model: str = "text-embedding-3-small",
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.model = model
        self.api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not self.api_key and client is None:
            raise EmbeddingGenerationError(
                "", "OPENAI_API_KEY not set", provider=self.name
            )
        self._client = client or httpx.AsyncClient(
            base_url="https://api.openai.com/v1",
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=60.0,
        )

    async def embed(self, text: str) -> list[float]:
        return (await self.embed_batch([text]))[0]

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        logger.debug(f"Generating {len(texts)} embeddings (model={self.model})")
        try:
            response = await self._client.post(
                "/embeddings",
                json={"input": texts, "model": self.model},
            )
            response.raise_for_status()
            data = sorted(response.json()["data"], key=lambda x: x["index"])
            return [item["embedding"] for item in data]
        except httpx.HTTPStatusError as e:
            logger.error(
                f"OpenAI API error: {e.response.status_code} - {e.response.text}"
            )
            raise EmbeddingGenerationError(
                texts[0] if texts else "",
                f"OpenAI API error: {e.response.status_code}",
                provider=self.name,
            ) from e
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(f"Failed to generate embeddings: {e}")
            raise EmbeddingGenerationError(
                texts[0] if texts else "", str(e), provider=self.name
            ) from e

    async def close(self) -> None:
        await self._client.aclose()


class OllamaEmbeddings(EmbeddingProvider):
    """Ollama local embeddings provider."""

    name = "ollama"

    def __init__(
        self,
        model: str = "nomic-embed-text",
        host: str = "http://localhost:11434",
        client: httpx.AsyncClient | None = None,
    ):
        self.model = model
        self.host = host
        self._client = client or httpx.AsyncClient(base_url=host, timeout=120.0)

    async def embed(self, text: str) -> list[float]:
        try:
            response = await self._client.post(
                "/api/embeddings",
                json={"model": self.model, "prompt": text},
            )
            response.raise_for_status()
            return response.json()["embedding"]
        except httpx.HTTPStatusError as e:
            logger.error(f"Ollama API error: {e.response.status_code}")
            raise EmbeddingGenerationError(
                text, f"Ollama API error: {e.response.status_code}", provider=self.name
            ) from e
        except httpx.ConnectError as e:
            logger.error(f"Cannot connect to Ollama at {self.host}")
            raise EmbeddingGenerationError(
                text,
                f"Cannot connect to Ollama at {self.host}. Is Ollama running?",
                provider=self.name,
            ) from e
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.error(f"Failed to generate embedding: {e}")
            raise EmbeddingGenerationError(text, str(e), provider=self.name) from e

    async def close(self) -> None:
        await self._client.aclose()


class EmbeddingService:
    """
    Configurable embedding service.

    Configuration via arguments or environment variables:
    - EMBEDDING_PROVIDER: 'openai' or 'ollama' (default: 'openai')
    - EMBEDDING_MODEL: model name (default depends on provider)
    - OPENAI_API_KEY: required for OpenAI provider
    - OLLAMA_HOST: Ollama host (default: http://localhost:11434)
    """

    def __init__(
        self,
        provider: str | None = None,
        model: str | None = None,
        host: str | None = None,
    ):
        provider = provider or os.environ.get("EMBEDDING_PROVIDER", "openai")
        self.provider_name = provider

        if provider == "openai":
            self.model = model or os.environ.get("EMBEDDING_MODEL", "text-embedding-3-small")
            self._provider: EmbeddingProvider = OpenAIEmbeddings(model=self.model)
            logger.info(f"Initialized OpenAI embeddings with model={self.model}")
        elif provider == "ollama":
            self.model = model or os.environ.get("EMBEDDING_MODEL", "nomic-embed-text")
            host = host or os.environ.get("OLLAMA_HOST", "http://localhost:11434")
            self._provider = OllamaEmbeddings(model=self.model, host=host)
            logger.info(f"Initialized Ollama embeddings with model={self.model}, host={host}")
        else:
            raise EmbeddingGenerationError(
                "", f"Unknown embedding provider: {provider}. Use 'openai' or 'ollama'."
            )

    @classmethod
    def from_provider(cls, provider: EmbeddingProvider) -> "EmbeddingService":
        """Wrap an already constructed provider."""
        service = cls.__new__(cls)
        service.provider_name = provider.name
        service.model = getattr(provider, "model", "")
        service._provider = provider
        return service

    async def embed(self, text: str) -> list[float]:
        """Generate embedding for text."""
        return await self._provider.embed(text)

    async def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple texts."""
        return await self._provider.embed_batch(texts)

    async def embed_long(self, text: str) -> list[float]:
        """
        Generate embedding for potentially long text.

        If text exceeds the provider's input limit, chunks it and averages
        the chunk embeddings.
        """
        if len(text) <= SAFE_CHAR_LIMIT:
            return await self.embed(text)

        chunks = chunk_text(text)
        logger.info(
            f"Text too long for single embedding ({len(text)} chars). "
            f"Chunking into {len(chunks)} parts and averaging."
        )
        embeddings = await self.embed_batch(chunks)
        return np.mean(embeddings, axis=0).tolist()

    async def close(self) -> None:
        """Close provider resources."""
        await self._provider.close()
