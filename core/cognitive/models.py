"""Model tier definitions and LLM initialization."""

import os
from enum import Enum
from typing import Any, Optional

from dotenv import load_dotenv

load_dotenv()

from core.config import configure_langsmith

configure_langsmith()

from langchain_anthropic import ChatAnthropic


class ModelTier(Enum):
    """Model tiers for different task complexities.

    HAIKU: Quick tasks, high-volume screening calls
    SONNET: Standard tasks, assessment and semantic extraction
    OPUS: Complex tasks requiring deep analysis
    """
    HAIKU = "claude-haiku-4-5-20251001"
    SONNET = "claude-sonnet-4-5-20250929"
    OPUS = "claude-opus-4-5-20251101"

    @classmethod
    def from_name(cls, name: str) -> "ModelTier":
        """Look up a tier by name, case-insensitively ("sonnet" -> SONNET)."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            valid = ", ".join(t.name for t in cls)
            raise ValueError(f"Unknown model tier: {name}. Valid: {valid}") from None


def get_llm(
    tier: ModelTier = ModelTier.SONNET,
    max_tokens: int = 4096,
    temperature: Optional[float] = None,
) -> ChatAnthropic:
    """
    Get a configured Anthropic Claude LLM instance.

    Args:
        tier: Model tier selection (HAIKU, SONNET, OPUS)
        max_tokens: Maximum output tokens
        temperature: Optional sampling temperature

    Returns:
        ChatAnthropic instance configured for the specified tier

    Raises:
        ValueError: If ANTHROPIC_API_KEY is not set
    """
    api_key = os.getenv("ANTHROPIC_API_KEY")
    if not api_key:
        raise ValueError("ANTHROPIC_API_KEY not set")

    kwargs: dict[str, Any] = {
        "model": tier.value,
        "api_key": api_key,
        "max_tokens": max_tokens,
    }
    if temperature is not None:
        kwargs["temperature"] = temperature

    return ChatAnthropic(**kwargs)
