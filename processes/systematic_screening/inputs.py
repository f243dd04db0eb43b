"""Parsing of screening parameters from the raw parameter map."""

import json
from typing import Any

from ..errors import InputValidationError

DEFAULT_THRESHOLD = 0.7


def parse_research_questions(raw: Any) -> list[str]:
    """Split newline-separated questions, trimming and dropping blanks."""
    text = "" if raw is None else str(raw)
    questions = [line.strip() for line in text.splitlines()]
    questions = [q for q in questions if q]
    if not questions:
        raise InputValidationError("No research questions provided")
    return questions


def parse_document_ids(raw: Any) -> list[str]:
    """Accept a JSON-encoded list or an already-decoded list of ids."""
    if isinstance(raw, str):
        try:
            raw = json.loads(raw) if raw.strip() else []
        except json.JSONDecodeError as e:
            raise InputValidationError(f"document_ids is not a valid JSON list: {e}") from e
    if raw is None:
        raw = []
    if not isinstance(raw, (list, tuple)):
        raise InputValidationError(
            f"document_ids must be a list of document identifiers, got {type(raw).__name__}"
        )

    # Repeated ids select the same document once, first occurrence wins
    document_ids = list(
        dict.fromkeys(str(doc_id) for doc_id in raw if doc_id is not None and str(doc_id).strip())
    )
    if not document_ids:
        raise InputValidationError("No documents selected from corpus")
    return document_ids


def parse_threshold(parameters: dict[str, Any], name: str) -> float:
    """Read an optional threshold in [0.0, 1.0], defaulting to DEFAULT_THRESHOLD."""
    raw = parameters.get(name)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return DEFAULT_THRESHOLD
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise InputValidationError(
            f"{name} must be a number between 0.0 and 1.0, got {raw!r}"
        ) from e
    if not 0.0 <= value <= 1.0:
        raise InputValidationError(f"{name} must be between 0.0 and 1.0, got {value}")
    return value
