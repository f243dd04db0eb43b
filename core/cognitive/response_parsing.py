"""LLM response parsing utilities."""

import json
from typing import Any


def extract_json_object(content: str) -> dict:
    """Extract the outermost JSON object from an LLM response.

    Takes the text between the first "{" and the last "}", which also strips
    markdown code fences and any chatter around the object.

    Raises:
        ValueError: If the response contains no JSON object
        json.JSONDecodeError: If the extracted text is not valid JSON
    """
    start = content.find("{")
    end = content.rfind("}")
    if start < 0 or end <= start:
        raise ValueError(f"No valid JSON found in LLM response: {content}")

    parsed = json.loads(content[start : end + 1])
    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object in LLM response: {content}")
    return parsed


def extract_response_content(response: Any) -> str:
    """Extract text content from various LLM response formats."""
    if isinstance(response.content, str):
        return response.content.strip()
    if isinstance(response.content, list) and response.content:
        first_block = response.content[0]
        if isinstance(first_block, dict):
            return first_block.get("text", "").strip()
        if hasattr(first_block, "text"):
            return first_block.text.strip()
        return str(first_block).strip()
    return str(response.content).strip()
