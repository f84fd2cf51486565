"""Summary counts and the bulk actions they enable."""

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass

from vtrenamer.export.base import BaseExporter
from vtrenamer.items.collection import ItemCollection
from vtrenamer.items.exceptions import InvalidTransitionError
from vtrenamer.items.models import Item, ItemStatus
from vtrenamer.logging.logger import Log
from vtrenamer.scheduler.scheduler import BatchReport, BatchScheduler

DEFAULT_STAGGER_SECONDS = 0.2


@dataclass(frozen=True)
class Summary:
    total: int = 0
    completed: int = 0
    failed: int = 0
    processing: int = 0
    pending: int = 0


def summarize(items: Iterable[Item]) -> Summary:
    counts = {status: 0 for status in ItemStatus}
    total = 0
    for item in items:
        counts[item.status] += 1
        total += 1
    return Summary(
        total=total,
        completed=counts[ItemStatus.COMPLETED],
        failed=counts[ItemStatus.FAILED],
        processing=counts[ItemStatus.PROCESSING],
        pending=counts[ItemStatus.PENDING],
    )


def can_process_all(collection: ItemCollection) -> bool:
    return not collection.batch_active and any(item.is_eligible for item in collection)


def can_download_all(collection: ItemCollection) -> bool:
    return any(item.status is ItemStatus.COMPLETED for item in collection)


def can_clear(collection: ItemCollection) -> bool:
    return (
        not collection.batch_active and not collection.has_processing and len(collection) > 0
    )


class ResultAggregator:
    """Drives process-all, download-all and clear from the current items."""

    def __init__(
        self,
        collection: ItemCollection,
        scheduler: BatchScheduler,
        exporter: BaseExporter,
        *,
        stagger_seconds: float = DEFAULT_STAGGER_SECONDS,
    ) -> None:
        self._collection = collection
        self._scheduler = scheduler
        self._exporter = exporter
        self._stagger_seconds = stagger_seconds

    def summary(self) -> Summary:
        return summarize(self._collection)

    async def process_all(self) -> BatchReport | None:
        """Start a batch run, or return None when the action is disabled."""
        if not can_process_all(self._collection):
            Log.debug("Process-all skipped: nothing eligible or a batch is running")
            return None
        return await self._scheduler.run_batch()

    async def download_all(self) -> list[Item]:
        """Export every completed item in collection order, staggering triggers."""
        completed = [item for item in self._collection if item.status is ItemStatus.COMPLETED]
        for index, item in enumerate(completed):
            if index:
                await asyncio.sleep(self._stagger_seconds)
            self._exporter.export(item.content, item.output_name)
        if completed:
            Log.info(f"Downloaded {len(completed)} document(s)")
        return completed

    def download(self, item_id: str) -> Item:
        """Export a single completed item.

        Raises:
            InvalidTransitionError: if the item has not completed.
        """
        item = self._collection.get(item_id)
        if item.status is not ItemStatus.COMPLETED:
            raise InvalidTransitionError(f"Item {item_id} has no output to download yet")
        self._exporter.export(item.content, item.output_name)
        return item

    def clear(self) -> None:
        """Remove every item.

        Raises:
            BatchActiveError: while a batch runs.
            ItemBusyError: while any item is processing.
        """
        self._collection.clear()
