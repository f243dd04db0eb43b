"""Topic, entity and keyword extraction from research abstracts."""

import logging

from core.cognitive import CognitiveAdapter, extract_json_object

from ..types import SemanticExtraction

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """Extract semantic information from this research abstract. Provide your response as valid JSON only.

Abstract: {abstract}

Extract:
1. Topics: 3-5 main research topics or themes
2. Entities: Key technical terms, methods, systems, or concepts mentioned
3. Keywords: Important domain-specific terms

Respond with JSON in this exact format:
{{
  "topics": ["topic1", "topic2", "topic3"],
  "entities": ["entity1", "entity2", "entity3"],
  "keywords": ["keyword1", "keyword2", "keyword3"]
}}

JSON Response:"""


def _clean_terms(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item).strip() for item in value if item is not None and str(item).strip()]


def parse_extraction_response(response: str) -> SemanticExtraction:
    """Parse the JSON object in an extraction response.

    Keys are matched case-insensitively; blank entries are dropped.

    Raises:
        ValueError: If the response holds no JSON object
        json.JSONDecodeError: If the object is malformed
    """
    parsed = {str(k).lower(): v for k, v in extract_json_object(response).items()}
    return SemanticExtraction(
        topics=_clean_terms(parsed.get("topics")),
        entities=_clean_terms(parsed.get("entities")),
        keywords=_clean_terms(parsed.get("keywords")),
    )


class SemanticExtractionService:
    """SemanticExtractor backed by one generation call per abstract.

    An unparseable response raises; the screening run treats that as fatal
    rather than screening a document with made-up semantics.
    """

    def __init__(self, adapter: CognitiveAdapter):
        self.adapter = adapter

    async def extract_semantics(self, abstract_text: str) -> SemanticExtraction:
        if not abstract_text or not abstract_text.strip():
            return SemanticExtraction()

        response = await self.adapter.generate_text(EXTRACTION_PROMPT.format(abstract=abstract_text))
        extraction = parse_extraction_response(response)
        logger.debug(
            f"Extracted {len(extraction.topics)} topics, {len(extraction.entities)} entities, "
            f"{len(extraction.keywords)} keywords"
        )
        return extraction
