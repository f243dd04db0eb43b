"""Cognitive services: LLM text generation and embeddings.

Example:
    from core.cognitive import build_cognitive_adapter

    adapter = build_cognitive_adapter()
    text = await adapter.generate_text("Summarize...", system_prompt="You are...")
    vector = await adapter.create_embedding("some abstract")

Environment Variables:
    COGNITIVE_PROVIDER: 'anthropic' (default) or 'openai_compatible'
    ANTHROPIC_API_KEY: required for the anthropic provider
    LLM_URL / LLM_MODEL: endpoint and model for openai_compatible
    EMBEDDING_PROVIDER: 'openai' (default) or 'ollama'
"""

from .adapter import (
    CognitiveAdapter,
    LangChainCognitiveAdapter,
    OpenAICompatibleCognitiveAdapter,
    build_cognitive_adapter,
)
from .embedding import EmbeddingService, OllamaEmbeddings, OpenAIEmbeddings
from .errors import CognitiveServiceError, EmbeddingGenerationError, TextGenerationError
from .response_parsing import extract_json_object, extract_response_content

__all__ = [
    # Adapters
    "CognitiveAdapter",
    "LangChainCognitiveAdapter",
    "OpenAICompatibleCognitiveAdapter",
    "build_cognitive_adapter",
    # Embeddings
    "EmbeddingService",
    "OpenAIEmbeddings",
    "OllamaEmbeddings",
    # Errors
    "CognitiveServiceError",
    "TextGenerationError",
    "EmbeddingGenerationError",
    # Parsing
    "extract_json_object",
    "extract_response_content",
]
