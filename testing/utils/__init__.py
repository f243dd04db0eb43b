"""
Shared testing utilities.

- fakes: scripted cognitive adapter and document builders
"""

from .fakes import (
    JOURNEY_ID,
    USER_ID,
    DEFAULT_CONTRIBUTION,
    DEFAULT_EXTRACTION,
    DEFAULT_RELEVANCE,
    FakeCognitiveAdapter,
    make_document,
    prompt_kind,
    score_response,
)

__all__ = [
    "USER_ID",
    "JOURNEY_ID",
    "FakeCognitiveAdapter",
    "make_document",
    "prompt_kind",
    "score_response",
    "DEFAULT_EXTRACTION",
    "DEFAULT_RELEVANCE",
    "DEFAULT_CONTRIBUTION",
]
