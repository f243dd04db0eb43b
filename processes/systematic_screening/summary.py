"""Batch summary built once at the end of a screening run."""

import base64
from typing import Any

from .types import ScreeningResult


def must_read_percentage(must_read_count: int, processed_count: int) -> float:
    if processed_count == 0:
        return 0.0
    return must_read_count / processed_count * 100


def build_summary(
    *,
    total_documents: int,
    results: list[ScreeningResult],
    skipped_ids: list[str],
    research_questions: list[str],
    relevance_threshold: float,
    contribution_threshold: float,
    table: bytes,
    cancelled: bool,
) -> dict[str, Any]:
    must_read_count = sum(1 for r in results if r.must_read)
    return {
        "total_documents": total_documents,
        "processed_documents": len(results),
        "skipped_documents": len(skipped_ids),
        "skipped_document_ids": list(skipped_ids),
        "must_read_count": must_read_count,
        "must_read_percentage": must_read_percentage(must_read_count, len(results)),
        "research_questions": list(research_questions),
        "relevance_threshold": relevance_threshold,
        "contribution_threshold": contribution_threshold,
        "csv_output": base64.b64encode(table).decode("ascii"),
        "cancelled": cancelled,
        "results": [r.to_summary() for r in results],
    }
