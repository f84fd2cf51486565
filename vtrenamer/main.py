import argparse
import asyncio
import sys
from pathlib import Path

from vtrenamer.aggregator.aggregator import ResultAggregator, Summary
from vtrenamer.config.settings import Settings
from vtrenamer.export.directory_exporter import DirectoryExporter
from vtrenamer.extraction.factory import ExtractionGatewayFactory
from vtrenamer.ingest.exceptions import DocumentLoadError
from vtrenamer.ingest.file_loader import FileLoader
from vtrenamer.items.collection import ItemCollection
from vtrenamer.items.models import ItemStatus
from vtrenamer.logging.logger import Log
from vtrenamer.rename.policy import RenamePolicy
from vtrenamer.scheduler.scheduler import BatchScheduler


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vtrenamer",
        description="Rename PDF trip sheets after the trip number read from each document",
    )
    p.add_argument("paths", nargs="+", type=Path, help="PDF files or directories of PDFs")
    p.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Directory to save renamed copies into (nothing is saved when omitted)",
    )
    p.add_argument("--batch-size", type=int, default=0, help="Override BATCH_SIZE")
    p.add_argument("--provider", default=None, help="Override EXTRACTION_PROVIDER")
    p.add_argument(
        "--retry-failed",
        type=int,
        default=0,
        help="Re-run the batch this many extra times for failed items",
    )
    p.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return p


def build_settings(args: argparse.Namespace) -> Settings:
    overrides: dict[str, object] = {}
    if args.batch_size:
        overrides["batch_size"] = args.batch_size
    if args.provider:
        overrides["extraction_provider"] = args.provider
    if args.log_level:
        overrides["log_level"] = args.log_level
    return Settings(**overrides)  # type: ignore[arg-type]


async def run(args: argparse.Namespace, settings: Settings) -> Summary:
    """Load -> batch (+ retries) -> download; returns the final summary."""
    collection = ItemCollection()
    collection.add_documents(FileLoader().load_paths(args.paths))

    scheduler = BatchScheduler(
        collection,
        ExtractionGatewayFactory.create(settings),
        batch_size=settings.batch_size,
        rename_policy=RenamePolicy(settings.default_extension),
    )
    aggregator = ResultAggregator(
        collection,
        scheduler,
        DirectoryExporter(args.output or Path.cwd()),
        stagger_seconds=settings.download_stagger_ms / 1000,
    )

    await aggregator.process_all()
    for attempt in range(args.retry_failed):
        if aggregator.summary().failed == 0:
            break
        Log.info(f"Retrying failed items (round {attempt + 1}/{args.retry_failed})")
        await aggregator.process_all()

    for item in collection:
        if item.status is ItemStatus.COMPLETED:
            print(f"OK    {item.original_name} -> {item.output_name}")
        else:
            print(f"FAIL  {item.original_name}: {item.failure_message}")

    if args.output is not None:
        await aggregator.download_all()

    summary = aggregator.summary()
    print(f"{summary.total} file(s): {summary.completed} completed, {summary.failed} failed")
    return summary


def main(argv: list[str] | None = None) -> int:
    """Entry point: settings -> logging -> run one batch session."""
    args = build_parser().parse_args(argv)
    settings = build_settings(args)
    Log.configure(settings.log_level)

    try:
        summary = asyncio.run(run(args, settings))
    except DocumentLoadError as exc:
        Log.error(f"Cannot load documents: {exc}")
        return 2
    return 0 if summary.failed == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
