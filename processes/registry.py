"""Process registry: the processes this application ships.

Usage:
    from processes.registry import build_default_engine

    engine = build_default_engine(adapter, documents, journeys)
    for descriptor in engine.list_available():
        print(descriptor.process_id, descriptor.name)
"""

from typing import Optional

from core.cognitive import CognitiveAdapter

from .base import BaseProcess
from .collaborators import DocumentLookup, DocumentWriter, JourneyLookup
from .constrained_composition import ConstrainedCompositionProcess
from .context import ProcessServices
from .engine import ProcessEngine
from .recording import ExecutionRecorder
from .shared import CsvScreeningExporter, SemanticExtractionService
from .systematic_screening import SystematicScreeningProcess

# Registry mapping process_id -> process class
PROCESS_REGISTRY: dict[str, type[BaseProcess]] = {
    SystematicScreeningProcess.process_id: SystematicScreeningProcess,
    ConstrainedCompositionProcess.process_id: ConstrainedCompositionProcess,
}


def get_available_process_ids() -> list[str]:
    return list(PROCESS_REGISTRY.keys())


def build_services(
    adapter: CognitiveAdapter,
    documents: DocumentLookup,
    writer: Optional[DocumentWriter] = None,
) -> ProcessServices:
    """Wire the shared services around a cognitive adapter."""
    return ProcessServices(
        cognitive_adapter=adapter,
        document_lookup=documents,
        semantic_extractor=SemanticExtractionService(adapter),
        tabular_exporter=CsvScreeningExporter(),
        document_writer=writer,
    )


def build_default_engine(
    adapter: CognitiveAdapter,
    documents: DocumentLookup,
    journeys: JourneyLookup,
    writer: Optional[DocumentWriter] = None,
    recorder: Optional[ExecutionRecorder] = None,
) -> ProcessEngine:
    """Engine with every process in PROCESS_REGISTRY registered."""
    engine = ProcessEngine(build_services(adapter, documents, writer), journeys, recorder=recorder)
    for process_cls in PROCESS_REGISTRY.values():
        engine.register(process_cls())
    return engine
