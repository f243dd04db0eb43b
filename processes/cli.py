#!/usr/bin/env python3
"""
CLI for running analytical processes locally.

Usage:
    # Show registered processes
    python -m processes.cli list

    # Screen a Scopus / IEEE Xplore / generic CSV export
    python -m processes.cli screen corpus.csv --questions questions.txt
    python -m processes.cli screen corpus.csv --questions questions.txt \\
        --relevance-threshold 0.6 --contribution-threshold 0.8 --output screened.csv

Ctrl+C during screening stops after the current document; documents
screened so far are still written.
"""

import argparse
import asyncio
import base64
import json
import logging
import sys
from datetime import datetime
from pathlib import Path

from core.cognitive import build_cognitive_adapter
from core.config import configure_logging
from core.logging import end_run

from .context import CancellationSignal, ProcessProgress
from .recording import InMemoryExecutionStore
from .registry import PROCESS_REGISTRY, build_default_engine
from .shared import InMemoryDocumentStore, InMemoryJourneyStore, parse_corpus_csv
from .types import Journey

logger = logging.getLogger(__name__)

CLI_USER_ID = "local-user"
CLI_JOURNEY_ID = "local-journey"


def cmd_list(args):
    """Print the process catalog."""
    for process_cls in PROCESS_REGISTRY.values():
        process = process_cls()
        descriptor = process.describe()
        print(f"{descriptor.process_id}")
        print(f"  Name: {descriptor.name}")
        print(f"  Category: {descriptor.category}")
        print(f"  {descriptor.description}")
        for input_field in descriptor.input_schema.fields:
            marker = "*" if input_field.required else " "
            print(f"    {marker} {input_field.name} ({input_field.type.value}): {input_field.description}")
        if args.verbose:
            print(f"  Capabilities: {descriptor.capabilities.model_dump()}")
        print()


def _print_progress(progress: ProcessProgress) -> None:
    print(
        f"[{progress.percent_complete:3d}%] "
        f"{progress.processed_count + progress.failed_count}/{progress.total_count} "
        f"must-read={progress.must_read_count} "
        f"eta={int(progress.estimated_time_remaining.total_seconds())}s "
        f"{progress.current_document[:60]}",
        flush=True,
    )


async def _screen(args) -> int:
    corpus_path = Path(args.corpus)
    with corpus_path.open(encoding="utf-8-sig", newline="") as f:
        documents = parse_corpus_csv(f, user_id=CLI_USER_ID)
    if not documents:
        print(f"No usable documents in {corpus_path}")
        return 1

    questions = Path(args.questions).read_text(encoding="utf-8")
    logger.info(f"Loaded {len(documents)} documents from {corpus_path}")

    store = InMemoryDocumentStore(documents)
    journeys = InMemoryJourneyStore(
        [Journey(id=CLI_JOURNEY_ID, user_id=CLI_USER_ID, purpose=f"Screening {corpus_path.name}")]
    )
    adapter = build_cognitive_adapter()
    engine = build_default_engine(
        adapter, store, journeys, writer=store, recorder=InMemoryExecutionStore()
    )

    parameters = {
        "research_questions": questions,
        "document_ids": json.dumps([d.id for d in documents]),
    }
    if args.relevance_threshold is not None:
        parameters["relevance_threshold"] = args.relevance_threshold
    if args.contribution_threshold is not None:
        parameters["contribution_threshold"] = args.contribution_threshold

    cancellation = CancellationSignal()
    cancellation.install_signal_handlers()
    try:
        outcome = await engine.run(
            "systematic-screening",
            CLI_JOURNEY_ID,
            parameters,
            cancellation=cancellation,
            progress=_print_progress,
        )
    finally:
        cancellation.remove_signal_handlers()
        await adapter.close()

    if not outcome.success:
        print(f"Screening failed: {outcome.error_message}")
        return 1

    summary = outcome.data
    output_path = Path(args.output) if args.output else corpus_path.with_name(f"{corpus_path.stem}_screened.csv")
    output_path.write_bytes(base64.b64decode(summary["csv_output"]))
    logger.info(f"Wrote screening table to {output_path}")

    print()
    print(f"Execution: {outcome.execution_id}{' (cancelled)' if summary['cancelled'] else ''}")
    print(f"  Documents: {summary['total_documents']}")
    print(f"  Screened: {summary['processed_documents']}")
    print(f"  Skipped (no abstract): {summary['skipped_documents']}")
    print(
        f"  Must-read: {summary['must_read_count']} "
        f"({summary['must_read_percentage']:.1f}%)"
    )
    print(f"  Output: {output_path}")
    return 0


def cmd_screen(args):
    """Screen a CSV corpus against research questions."""
    configure_logging(run_name=f"screen-{datetime.now():%Y%m%d-%H%M%S}")
    try:
        exit_code = asyncio.run(_screen(args))
    except KeyboardInterrupt:
        print("\nInterrupted")
        exit_code = 130
    finally:
        end_run()
    sys.exit(exit_code)


def main():
    parser = argparse.ArgumentParser(
        description="Analytical process runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # list
    list_parser = subparsers.add_parser("list", help="List registered processes")
    list_parser.add_argument("-v", "--verbose", action="store_true", help="Show capabilities")
    list_parser.set_defaults(func=cmd_list)

    # screen
    screen_parser = subparsers.add_parser("screen", help="Screen a CSV corpus")
    screen_parser.add_argument("corpus", help="Scopus, IEEE Xplore or generic CSV export")
    screen_parser.add_argument(
        "-q", "--questions", required=True, help="Text file with one research question per line"
    )
    screen_parser.add_argument(
        "--relevance-threshold", help="Relevance threshold 0.0-1.0 (default: 0.7)"
    )
    screen_parser.add_argument(
        "--contribution-threshold", help="Contribution threshold 0.0-1.0 (default: 0.7)"
    )
    screen_parser.add_argument(
        "-o", "--output", help="Output CSV path (default: <corpus>_screened.csv)"
    )
    screen_parser.set_defaults(func=cmd_screen)

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    args.func(args)


if __name__ == "__main__":
    main()
