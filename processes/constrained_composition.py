"""Basic constrained composition: generate a document from an outline and constraints."""

import logging
import re
from datetime import datetime, timezone

from .base import BaseProcess, ProcessCapabilities, ProcessResult
from .context import ExecutionContext
from .errors import InputValidationError
from .schema import InputSchema

logger = logging.getLogger(__name__)

COMPOSITION_SYSTEM = "You are a professional writer. Follow the outline and constraints precisely."

COMPOSITION_PROMPT = """Generate a {document_type} document with the following outline:

{outline}

Apply these constraints:
{constraints}

Generate the complete document in markdown format."""


def generated_file_name(document_type: str, now: datetime | None = None) -> str:
    now = now or datetime.now(timezone.utc)
    slug = re.sub(r"\s+", "_", document_type.strip()).lower() or "document"
    return f"generated_{slug}_{now:%Y%m%d%H%M%S}.md"


class ConstrainedCompositionProcess(BaseProcess):
    process_id = "basic-constrained-composition"
    name = "Basic Constrained Composition"
    description = "Generate documents with specified constraints"
    category = "Writing"

    def get_input_schema(self) -> InputSchema:
        return (
            InputSchema()
            .add_text_input("document_type", "Type of document to generate")
            .add_text_area("constraints", "Composition constraints (JSON)")
            .add_text_area("outline", "Document outline")
        )

    def get_capabilities(self) -> ProcessCapabilities:
        return ProcessCapabilities(
            supports_batch=False,
            supports_streaming=True,
            requires_cognitive_service=True,
        )

    async def execute(self, context: ExecutionContext) -> ProcessResult:
        logger.info(f"Executing basic constrained composition for journey {context.journey_id}")
        try:
            document_type = str(context.get_parameter("document_type") or "").strip()
            if not document_type:
                raise InputValidationError("No document type provided")
            constraints = str(context.get_parameter("constraints") or "")
            outline = str(context.get_parameter("outline") or "")

            adapter = context.services.require("cognitive_adapter")
            generated_text = await adapter.generate_text(
                COMPOSITION_PROMPT.format(
                    document_type=document_type, outline=outline, constraints=constraints
                ),
                system_prompt=COMPOSITION_SYSTEM,
            )

            document_id = None
            writer = context.services.document_writer
            if writer is not None:
                document_id = await writer.save_generated_document(
                    user_id=context.user_id,
                    journey_id=context.journey_id,
                    file_name=generated_file_name(document_type),
                    content=generated_text,
                    metadata={"mime_type": "text/markdown", "created_by": self.process_id},
                )
            else:
                logger.debug("No document writer configured, generated text not stored")

            return ProcessResult.ok(
                {
                    "status": "completed",
                    "document_id": document_id,
                    "document_type": document_type,
                    "word_count": len(generated_text.split()),
                    "generated_text": generated_text,
                }
            )
        except InputValidationError as e:
            logger.warning(f"Constrained composition rejected input: {e.message}")
            return ProcessResult.failed(e.message)
        except Exception as e:
            logger.error(f"Constrained composition failed: {e}", exc_info=True)
            return ProcessResult.failed(str(e) or type(e).__name__)
