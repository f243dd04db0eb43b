"""
Scripted stand-ins for the cognitive adapter and corpus documents.

FakeCognitiveAdapter answers each prompt according to its kind (semantic
extraction, relevance, contribution, anything else) and records every call,
so tests can assert on call counts and order without a real LLM.
"""

import json
from typing import Callable, Optional, Union

from core.cognitive import CognitiveAdapter, TextGenerationError
from processes.types import Document, DocumentMetadata

Responder = Union[str, Callable[[str], str]]

DEFAULT_EXTRACTION = json.dumps(
    {
        "topics": ["systematic review", "screening"],
        "entities": ["LLM"],
        "keywords": ["automation", "screening"],
    }
)
DEFAULT_RELEVANCE = "Score: 0.8\nReasoning: The paper discusses the topic directly."
DEFAULT_CONTRIBUTION = "Score: 0.75\nReasoning: The paper reports findings on the question."
DEFAULT_GENERATION = "# Draft\n\nGenerated body text."

USER_ID = "user-1"
JOURNEY_ID = "journey-1"


def prompt_kind(prompt: str) -> str:
    """Classify a prompt by the instruction it opens with."""
    if prompt.startswith("Extract semantic information"):
        return "extraction"
    if prompt.startswith("Assess the RELEVANCE"):
        return "relevance"
    if prompt.startswith("Assess the CONTRIBUTION"):
        return "contribution"
    return "other"


def score_response(score: float, reasoning: str = "Scripted reasoning.") -> str:
    return f"Score: {score}\nReasoning: {reasoning}"


class FakeCognitiveAdapter(CognitiveAdapter):
    """CognitiveAdapter with scripted answers.

    Args:
        extraction / relevance / contribution / other: Either a fixed response
            or a callable receiving the prompt
        fail_on_call: 1-based call number that raises TextGenerationError
        on_call: Hook called with the running call count before answering
    """

    def __init__(
        self,
        extraction: Responder = DEFAULT_EXTRACTION,
        relevance: Responder = DEFAULT_RELEVANCE,
        contribution: Responder = DEFAULT_CONTRIBUTION,
        other: Responder = DEFAULT_GENERATION,
        fail_on_call: Optional[int] = None,
        on_call: Optional[Callable[[int], None]] = None,
    ):
        self._responders = {
            "extraction": extraction,
            "relevance": relevance,
            "contribution": contribution,
            "other": other,
        }
        self.fail_on_call = fail_on_call
        self.on_call = on_call
        self.calls: list[tuple[str, Optional[str]]] = []
        self.embedding_calls: list[str] = []
        self.closed = False

    @property
    def kinds(self) -> list[str]:
        return [prompt_kind(prompt) for prompt, _ in self.calls]

    def count(self, kind: str) -> int:
        return self.kinds.count(kind)

    async def generate_text(self, prompt: str, system_prompt: Optional[str] = None) -> str:
        self.calls.append((prompt, system_prompt))
        if self.on_call is not None:
            self.on_call(len(self.calls))
        if self.fail_on_call is not None and len(self.calls) == self.fail_on_call:
            raise TextGenerationError(prompt, "scripted failure", provider="fake")

        responder = self._responders[prompt_kind(prompt)]
        return responder(prompt) if callable(responder) else responder

    async def create_embedding(self, text: str) -> list[float]:
        self.embedding_calls.append(text)
        return [float(len(text)), 0.0, 1.0]

    async def close(self) -> None:
        self.closed = True


def make_document(
    doc_id: str,
    title: str = "Automated screening with language models",
    abstract: Optional[str] = "We evaluate LLM-assisted screening for systematic reviews.",
    user_id: str = USER_ID,
    **metadata,
) -> Document:
    """Build a corpus document; abstract=None yields a document without one."""
    return Document(
        id=doc_id,
        user_id=user_id,
        file_name=f"{doc_id}.pdf",
        metadata=DocumentMetadata(title=title, abstract=abstract, **metadata),
    )
