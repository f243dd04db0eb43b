"""Import of bibliographic CSV exports (Scopus, IEEE Xplore, generic) as documents."""

import csv
import logging
import re
import uuid
from enum import Enum
from typing import Iterable, Optional, TextIO

from ..types import Document, DocumentMetadata

logger = logging.getLogger(__name__)


class CorpusFormat(str, Enum):
    SCOPUS = "scopus"
    IEEE_XPLORE = "ieee_xplore"
    GENERIC = "generic"


# Fallback header names for generic exports, matched case-insensitively in order
GENERIC_COLUMNS = {
    "title": ["title", "document title", "paper title"],
    "abstract": ["abstract", "summary"],
    "authors": ["authors", "author", "author names"],
    "year": ["year", "publication year", "date"],
    "venue": ["venue", "source", "journal", "publication title", "source title"],
    "doi": ["doi"],
    "link": ["link", "url", "pdf link"],
    "keywords": ["keywords", "author keywords"],
}

_YEAR_PATTERN = re.compile(r"\b(\d{4})\b")


def detect_format(headers: Iterable[str]) -> CorpusFormat:
    names = set(headers)
    if {"Authors", "Source title", "EID"} <= names:
        return CorpusFormat.SCOPUS
    if {"Document Title", "Publication Title", "Document Identifier"} <= names:
        return CorpusFormat.IEEE_XPLORE
    return CorpusFormat.GENERIC


def parse_year(text: Optional[str]) -> Optional[int]:
    """Parse a bare year or pull the first four-digit year out of a date."""
    if not text or not text.strip():
        return None
    text = text.strip()
    if text.isdigit():
        return int(text)
    match = _YEAR_PATTERN.search(text)
    return int(match.group(1)) if match else None


def split_keywords(*fields: Optional[str]) -> list[str]:
    """Split keyword fields on ';' and ',', trimmed and deduplicated in order."""
    keywords: list[str] = []
    for value in fields:
        if not value:
            continue
        keywords.extend(k.strip() for k in re.split(r"[;,]", value))
    return list(dict.fromkeys(k for k in keywords if k))


def split_authors(value: Optional[str]) -> list[str]:
    if not value:
        return []
    separator = ";" if ";" in value else ","
    return [a.strip() for a in value.split(separator) if a.strip()]


def _find_column(headers: list[str], candidates: list[str]) -> Optional[str]:
    lowered = {h.lower(): h for h in headers}
    for candidate in candidates:
        if candidate in lowered:
            return lowered[candidate]
    return None


def _field(row: dict[str, Optional[str]], column: Optional[str]) -> str:
    if column is None:
        return ""
    return (row.get(column) or "").strip()


def _row_to_metadata(
    row: dict[str, Optional[str]], corpus_format: CorpusFormat, headers: list[str]
) -> DocumentMetadata:
    if corpus_format == CorpusFormat.SCOPUS:
        return DocumentMetadata(
            title=_field(row, "Title"),
            abstract=_field(row, "Abstract"),
            authors=split_authors(_field(row, "Authors")),
            year=parse_year(_field(row, "Year")),
            venue=_field(row, "Source title"),
            doi=_field(row, "DOI") or None,
            keywords=split_keywords(_field(row, "Author Keywords"), _field(row, "Index Keywords")),
            extended_metadata={"link": _field(row, "Link"), "source_format": corpus_format.value},
        )
    if corpus_format == CorpusFormat.IEEE_XPLORE:
        return DocumentMetadata(
            title=_field(row, "Document Title"),
            abstract=_field(row, "Abstract"),
            authors=split_authors(_field(row, "Authors")),
            year=parse_year(_field(row, "Publication Year")),
            venue=_field(row, "Publication Title"),
            doi=_field(row, "DOI") or None,
            keywords=split_keywords(_field(row, "Author Keywords"), _field(row, "IEEE Terms")),
            extended_metadata={"link": _field(row, "PDF Link"), "source_format": corpus_format.value},
        )

    columns = {key: _find_column(headers, names) for key, names in GENERIC_COLUMNS.items()}
    return DocumentMetadata(
        title=_field(row, columns["title"]),
        abstract=_field(row, columns["abstract"]),
        authors=split_authors(_field(row, columns["authors"])),
        year=parse_year(_field(row, columns["year"])),
        venue=_field(row, columns["venue"]),
        doi=_field(row, columns["doi"]) or None,
        keywords=split_keywords(_field(row, columns["keywords"])),
        extended_metadata={"link": _field(row, columns["link"]), "source_format": corpus_format.value},
    )


def parse_corpus_csv(stream: TextIO, user_id: Optional[str] = None) -> list[Document]:
    """Read a bibliographic CSV export into documents.

    Rows without a title or abstract are dropped. Each document gets a
    fresh id; file_name is the title.
    """
    reader = csv.DictReader(stream)
    headers = [h.lstrip("\ufeff").strip() for h in (reader.fieldnames or [])]
    reader.fieldnames = headers
    corpus_format = detect_format(headers)
    logger.info(f"Detected CSV format: {corpus_format.value}")

    documents: list[Document] = []
    dropped = 0
    for row in reader:
        metadata = _row_to_metadata(row, corpus_format, headers)
        if not metadata.title or not metadata.abstract:
            dropped += 1
            logger.debug(f"Dropping CSV row {reader.line_num}: missing title or abstract")
            continue
        documents.append(
            Document(
                id=str(uuid.uuid4()),
                user_id=user_id,
                file_name=metadata.title,
                metadata=metadata,
            )
        )

    logger.info(f"Parsed {len(documents)} articles from CSV ({dropped} rows dropped)")
    return documents
