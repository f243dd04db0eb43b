"""Per-document screening: semantic extraction then per-question assessment."""

import logging
from typing import Optional

from core.cognitive import CognitiveAdapter

from ..collaborators import SemanticExtractor
from ..types import Document
from .parsing import parse_assessment_response
from .prompts import build_contribution_prompt, build_relevance_prompt
from .types import RQAssessment, ScreeningResult

logger = logging.getLogger(__name__)

# Indicator flags use a fixed cutoff; the run's thresholds only drive must_read.
INDICATOR_CUTOFF = 0.7


def merge_keywords(extracted: list[str], stored: Optional[list[str]]) -> list[str]:
    """Union of extracted then stored keywords, deduplicated in first-seen order."""
    return list(dict.fromkeys([*extracted, *(stored or [])]))


async def assess_question(
    adapter: CognitiveAdapter,
    question: str,
    question_index: int,
    title: str,
    abstract: str,
) -> RQAssessment:
    """Score one document against one research question.

    Two sequential generation calls: relevance first, then contribution.
    Adapter errors propagate.
    """
    relevance_response = await adapter.generate_text(build_relevance_prompt(question, title, abstract))
    contribution_response = await adapter.generate_text(
        build_contribution_prompt(question, title, abstract)
    )

    relevance_score, relevance_reasoning = parse_assessment_response(relevance_response)
    contribution_score, contribution_reasoning = parse_assessment_response(contribution_response)

    return RQAssessment(
        question_index=question_index,
        relevance_score=relevance_score,
        contribution_score=contribution_score,
        relevance_indicator=relevance_score >= INDICATOR_CUTOFF,
        contribution_indicator=contribution_score >= INDICATOR_CUTOFF,
        relevance_reasoning=relevance_reasoning,
        contribution_reasoning=contribution_reasoning,
    )


async def screen_document(
    document: Document,
    research_questions: list[str],
    adapter: CognitiveAdapter,
    extractor: SemanticExtractor,
    relevance_threshold: float,
    contribution_threshold: float,
) -> ScreeningResult:
    """Run both phases for a document that has an abstract."""
    metadata = document.metadata
    if metadata is None or not metadata.abstract:
        raise ValueError(f"Document {document.id} has no abstract to screen")
    title = document.display_title

    semantics = await extractor.extract_semantics(metadata.abstract)

    assessments = []
    for index, question in enumerate(research_questions):
        assessments.append(
            await assess_question(adapter, question, index, metadata.title or "", metadata.abstract)
        )

    must_read = any(a.meets(relevance_threshold, contribution_threshold) for a in assessments)
    logger.debug(
        f"Screened '{title[:60]}': must_read={must_read}, "
        f"scores={[(a.relevance_score, a.contribution_score) for a in assessments]}"
    )

    return ScreeningResult(
        document_id=document.id,
        title=title,
        abstract=metadata.abstract,
        authors="; ".join(metadata.authors),
        year=metadata.year,
        venue=metadata.venue or "",
        doi=metadata.doi or "",
        link=metadata.link,
        topics=semantics.topics,
        entities=semantics.entities,
        keywords=merge_keywords(semantics.keywords, metadata.keywords),
        assessments=assessments,
        must_read=must_read,
    )
