"""Exception classes for cognitive service failures.

Raised by concrete adapters when text or embedding generation cannot happen.
An adapter never returns an error string or a fabricated vector in place of
real model output.
"""


class CognitiveServiceError(Exception):
    """Base cognitive service exception."""

    def __init__(
        self,
        message: str,
        operation: str,
        impact: str,
        provider: str | None = None,
        user_id: str | None = None,
        journey_id: str | None = None,
    ):
        self.message = message
        self.operation = operation
        self.impact = impact
        self.provider = provider
        self.user_id = user_id
        self.journey_id = journey_id
        self.details: dict[str, object] = {}
        super().__init__(message)


def _preview(text: str, limit: int = 100) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class TextGenerationError(CognitiveServiceError):
    """Text generation failed; the assessment or analysis cannot continue."""

    def __init__(self, prompt: str, reason: str, provider: str | None = None, **kwargs):
        super().__init__(
            f"Text generation failed: {reason}",
            operation="Text Generation",
            impact="Assessment halted rather than treating an error as a model response.",
            provider=provider,
            **kwargs,
        )
        self.details["prompt_length"] = len(prompt)
        self.details["prompt_preview"] = _preview(prompt)


class EmbeddingGenerationError(CognitiveServiceError):
    """Embedding generation failed; no substitute vector is produced."""

    def __init__(self, text: str, reason: str, provider: str | None = None, **kwargs):
        super().__init__(
            f"Embedding generation failed: {reason}. "
            "Check embedding provider configuration and API keys.",
            operation="Embedding Generation",
            impact="Document processing halted to keep the vector space free of fake embeddings.",
            provider=provider,
            **kwargs,
        )
        self.details["text_length"] = len(text)
        self.details["text_preview"] = _preview(text)
