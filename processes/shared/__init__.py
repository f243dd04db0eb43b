"""Services shared by processes: extraction, export, import, in-memory stores."""

from .corpus_import import CorpusFormat, detect_format, parse_corpus_csv
from .csv_export import CsvScreeningExporter
from .memory import InMemoryDocumentStore, InMemoryJourneyStore
from .semantic_extraction import SemanticExtractionService, parse_extraction_response

__all__ = [
    "SemanticExtractionService",
    "parse_extraction_response",
    "CsvScreeningExporter",
    "CorpusFormat",
    "detect_format",
    "parse_corpus_csv",
    "InMemoryDocumentStore",
    "InMemoryJourneyStore",
]
