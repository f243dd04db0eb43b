"""CSV rendering of screening results, one row per screened document."""

import csv
import io
import logging

from ..systematic_screening.types import ScreeningResult

logger = logging.getLogger(__name__)

FIXED_COLUMNS = [
    "Authors",
    "Year",
    "Title",
    "DOI",
    "Link",
    "Abstract",
    "Topics",
    "Entities",
    "Keywords",
    "MustRead",
]

# Q: question text, RI/CI: indicators, RS/CS: scores, RR/CR: reasoning
QUESTION_COLUMN_SUFFIXES = ["Q", "RI", "CI", "RS", "CS", "RR", "CR"]


def header_row(research_questions: list[str]) -> list[str]:
    header = list(FIXED_COLUMNS)
    for number in range(1, len(research_questions) + 1):
        header.extend(f"RQ{number}_{suffix}" for suffix in QUESTION_COLUMN_SUFFIXES)
    return header


def _format_score(score: float) -> str:
    return f"{score:.1f}"


def data_row(result: ScreeningResult, research_questions: list[str]) -> list[str]:
    row = [
        result.authors,
        "" if result.year is None else str(result.year),
        result.title,
        result.doi,
        result.link,
        result.abstract,
        ";".join(result.topics),
        ";".join(result.entities),
        ";".join(result.keywords),
        str(result.must_read),
    ]
    for index, question in enumerate(research_questions):
        assessment = result.assessment_for(index)
        if assessment is None:
            row.extend([question, "False", "False", "0.0", "0.0", "", ""])
            continue
        row.extend(
            [
                question,
                str(assessment.relevance_indicator),
                str(assessment.contribution_indicator),
                _format_score(assessment.relevance_score),
                _format_score(assessment.contribution_score),
                assessment.relevance_reasoning,
                assessment.contribution_reasoning,
            ]
        )
    return row


class CsvScreeningExporter:
    """TabularExporter writing UTF-8 CSV with per-question column groups."""

    def write_to_table(self, results: list[ScreeningResult], research_questions: list[str]) -> bytes:
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\r\n")
        writer.writerow(header_row(research_questions))
        for result in results:
            writer.writerow(data_row(result, research_questions))

        logger.debug(f"Wrote {len(results)} screening rows for {len(research_questions)} questions")
        # No BOM; open in Excel via Data > From Text to keep UTF-8
        return buffer.getvalue().encode("utf-8")
