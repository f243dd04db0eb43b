"""Parsing of free-text assessment responses into score and reasoning."""

import logging
import re

logger = logging.getLogger(__name__)

SCORE_PATTERN = re.compile(r"Score:\s*(-?[0-9]*\.?[0-9]+)")
REASONING_PATTERN = re.compile(r"Reasoning:\s*(.+)", re.DOTALL)


def parse_assessment_response(response: str) -> tuple[float, str]:
    """Extract (score, reasoning) from an assessment response.

    The first "Score:" number is clamped to [0.0, 1.0]; without one the
    score is 0.0. Reasoning is everything after "Reasoning:" to the end,
    trimmed; without that label the whole response is the reasoning.
    Never raises.
    """
    score = 0.0
    reasoning = response

    score_match = SCORE_PATTERN.search(response)
    if score_match:
        try:
            score = max(0.0, min(1.0, float(score_match.group(1))))
        except ValueError:
            logger.warning(f"Unparseable score {score_match.group(1)!r}, defaulting to 0.0")
    else:
        logger.warning(f"No score in assessment response, defaulting to 0.0: {response[:100]!r}")

    reasoning_match = REASONING_PATTERN.search(response)
    if reasoning_match:
        reasoning = reasoning_match.group(1).strip()
    else:
        logger.warning("No reasoning label in assessment response, using raw response")

    return score, reasoning
