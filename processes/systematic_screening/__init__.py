"""Systematic literature screening process.

Usage:
    from processes.systematic_screening import SystematicScreeningProcess

    engine.register(SystematicScreeningProcess())
    outcome = await engine.run(
        "systematic-screening",
        journey_id,
        {
            "research_questions": "How do LLMs assist screening?\\nWhat are the risks?",
            "document_ids": '["doc-1", "doc-2"]',
            "relevance_threshold": "0.7",
        },
    )
"""

from .assessment import INDICATOR_CUTOFF, assess_question, merge_keywords, screen_document
from .inputs import DEFAULT_THRESHOLD, parse_document_ids, parse_research_questions, parse_threshold
from .parsing import parse_assessment_response
from .process import SystematicScreeningProcess
from .prompts import build_contribution_prompt, build_relevance_prompt
from .summary import build_summary, must_read_percentage
from .types import RQAssessment, ScreeningResult

__all__ = [
    # Process
    "SystematicScreeningProcess",
    # Types
    "RQAssessment",
    "ScreeningResult",
    # Assessment
    "INDICATOR_CUTOFF",
    "assess_question",
    "screen_document",
    "merge_keywords",
    # Inputs
    "DEFAULT_THRESHOLD",
    "parse_research_questions",
    "parse_document_ids",
    "parse_threshold",
    # Prompt/response protocol
    "build_relevance_prompt",
    "build_contribution_prompt",
    "parse_assessment_response",
    # Summary
    "build_summary",
    "must_read_percentage",
]
