"""Systematic literature screening over a user's corpus.

Each document with an abstract goes through two phases:

1. Semantic extraction: topics, entities and keywords from the abstract.
2. Assessment: for every research question, a relevance score (does the
   paper discuss related topics?) and a contribution score (does it directly
   research the question?), each with reasoning.

A document is must-read when, for at least one question, both scores meet
the run's thresholds. Documents are processed strictly one after another,
so a run makes D + 2*D*Q generation calls for D screened documents and Q
questions.
"""

import logging

from ..base import BaseProcess, ProcessCapabilities, ProcessResult
from ..context import ExecutionContext, ProcessProgress
from ..errors import InputValidationError
from ..schema import InputSchema
from .assessment import screen_document
from .inputs import parse_document_ids, parse_research_questions, parse_threshold
from .summary import build_summary, must_read_percentage
from .types import ScreeningResult

logger = logging.getLogger(__name__)


class SystematicScreeningProcess(BaseProcess):
    """Dual-phase relevance and contribution screening of corpus documents."""

    process_id = "systematic-screening"
    name = "Systematic Literature Screening"
    description = (
        "Screen corpus documents against research questions with dual "
        "relevance and contribution assessment"
    )
    category = "Research"

    def get_input_schema(self) -> InputSchema:
        return (
            InputSchema()
            .add_text_area("research_questions", "Research questions (one per line)")
            .add_multi_select("document_ids", "Select documents from corpus")
            .add_text_input(
                "relevance_threshold",
                "Relevance threshold (0.0-1.0, default: 0.7)",
                required=False,
                default_value="0.7",
            )
            .add_text_input(
                "contribution_threshold",
                "Contribution threshold (0.0-1.0, default: 0.7)",
                required=False,
                default_value="0.7",
            )
        )

    def get_capabilities(self) -> ProcessCapabilities:
        return ProcessCapabilities(
            supports_batch=True,
            supports_streaming=False,
            requires_cognitive_service=True,
            processes_corpus=True,
        )

    async def execute(self, context: ExecutionContext) -> ProcessResult:
        logger.info(f"Executing systematic screening for journey {context.journey_id}")
        try:
            return await self._screen(context)
        except InputValidationError as e:
            logger.warning(f"Systematic screening rejected input: {e.message}")
            return ProcessResult.failed(e.message)
        except Exception as e:
            logger.error(f"Systematic screening failed: {e}", exc_info=True)
            return ProcessResult.failed(str(e) or type(e).__name__)

    async def _screen(self, context: ExecutionContext) -> ProcessResult:
        research_questions = parse_research_questions(context.get_parameter("research_questions"))
        document_ids = parse_document_ids(context.get_parameter("document_ids"))
        relevance_threshold = parse_threshold(context.parameters, "relevance_threshold")
        contribution_threshold = parse_threshold(context.parameters, "contribution_threshold")

        services = context.services
        lookup = services.require("document_lookup")
        adapter = services.require("cognitive_adapter")
        extractor = services.require("semantic_extractor")
        exporter = services.require("tabular_exporter")

        documents = await lookup.get_documents_by_ids(document_ids, context.user_id)
        if not documents:
            raise InputValidationError("No documents found in corpus for the selected IDs")

        logger.info(
            f"Processing {len(documents)} documents with {len(research_questions)} research questions "
            f"(relevance >= {relevance_threshold}, contribution >= {contribution_threshold})"
        )

        results: list[ScreeningResult] = []
        skipped_ids: list[str] = []
        progress = ProcessProgress(total_count=len(documents))
        cancelled = False

        for index, document in enumerate(documents, start=1):
            if context.cancellation.cancelled:
                cancelled = True
                logger.info(
                    f"Screening cancelled after {len(results)} of {len(documents)} documents"
                )
                break

            progress.current_index = index
            progress.current_document = document.display_title
            logger.info(f"Processing document {index}/{len(documents)}: {document.display_title}")

            if document.metadata is None or not (document.metadata.abstract or "").strip():
                logger.warning(f"Skipping document {document.id} - no abstract available")
                skipped_ids.append(document.id)
                progress.failed_count += 1
                progress.status_message = f"Skipped {document.display_title}: no abstract"
                context.report_progress(progress)
                continue

            result = await screen_document(
                document,
                research_questions,
                adapter,
                extractor,
                relevance_threshold,
                contribution_threshold,
            )
            results.append(result)

            progress.processed_count += 1
            if result.must_read:
                progress.must_read_count += 1
            progress.status_message = f"Screened {document.display_title}"
            context.report_progress(progress)
            logger.info(
                f"Progress: {progress.percent_complete}% "
                f"({progress.processed_count + progress.failed_count}/{len(documents)})"
            )

        table = exporter.write_to_table(results, research_questions)
        summary = build_summary(
            total_documents=len(documents),
            results=results,
            skipped_ids=skipped_ids,
            research_questions=research_questions,
            relevance_threshold=relevance_threshold,
            contribution_threshold=contribution_threshold,
            table=table,
            cancelled=cancelled,
        )

        logger.info(
            f"Screening complete: {len(results)} documents, {summary['must_read_count']} must-read "
            f"({must_read_percentage(summary['must_read_count'], len(results)):.1f}%), "
            f"{len(skipped_ids)} skipped"
        )
        return ProcessResult.ok(summary, partial=cancelled)
