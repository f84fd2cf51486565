"""Concurrency-bounded extraction over the item collection."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field

from vtrenamer.extraction.base import BaseExtractionGateway
from vtrenamer.extraction.messages import failure_message
from vtrenamer.extraction.models import ExtractionResult, FailureReason
from vtrenamer.items.collection import ItemCollection
from vtrenamer.items.exceptions import ItemBusyError, ItemError
from vtrenamer.items.models import Item, ItemStatus
from vtrenamer.logging.logger import Log
from vtrenamer.rename.policy import RenamePolicy

DEFAULT_BATCH_SIZE = 10


@dataclass
class BatchReport:
    """What one batch run touched, by item id."""

    groups: int = 0
    attempted: list[str] = field(default_factory=list)
    completed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


def partition(items: Sequence[Item], size: int) -> list[list[Item]]:
    """Split items into consecutive groups of at most `size`."""
    return [list(items[start : start + size]) for start in range(0, len(items), size)]


class BatchScheduler:
    """Runs extraction for eligible items in sequential, fixed-size groups.

    Items inside a group are extracted concurrently; the next group starts
    only after every call of the current one has settled. Each item's outcome
    is recorded on the item alone and never stops the run.
    """

    def __init__(
        self,
        collection: ItemCollection,
        gateway: BaseExtractionGateway,
        *,
        batch_size: int = DEFAULT_BATCH_SIZE,
        rename_policy: RenamePolicy | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError("batch_size must be >= 1")
        self._collection = collection
        self._gateway = gateway
        self._batch_size = batch_size
        self._rename_policy = rename_policy or RenamePolicy()
        self._queued: set[str] = set()

    @property
    def batch_size(self) -> int:
        return self._batch_size

    def select_eligible(self) -> list[Item]:
        """Pending and failed items, in collection order."""
        return [item for item in self._collection if item.is_eligible]

    async def run_batch(self) -> BatchReport:
        """Process every eligible item.

        Raises:
            BatchActiveError: if another batch run is already active.
        """
        self._collection.begin_batch()
        report = BatchReport()
        try:
            eligible = self.select_eligible()
            self._queued = {item.id for item in eligible}
            groups = partition(eligible, self._batch_size)
            Log.info(
                f"Batch started: {len(eligible)} item(s) in {len(groups)} group(s)",
                batch_size=self._batch_size,
            )
            for number, group in enumerate(groups, start=1):
                started = self._start_group(group)
                report.groups += 1
                report.attempted.extend(item.id for item in started)
                Log.debug(f"Group {number}/{len(groups)}: {len(started)} item(s)")
                settled = await asyncio.gather(*(self._settle(item) for item in started))
                for item in settled:
                    self._queued.discard(item.id)
                    if item.status is ItemStatus.COMPLETED:
                        report.completed.append(item.id)
                    else:
                        report.failed.append(item.id)
        finally:
            self._queued.clear()
            self._collection.end_batch()
        Log.info(
            f"Batch finished: {len(report.completed)} completed, {len(report.failed)} failed"
        )
        return report

    async def retry_item(self, item_id: str) -> Item:
        """Re-run extraction for a single pending or failed item.

        Raises:
            ItemBusyError: if the item is processing or queued in the active batch.
            InvalidTransitionError: if the item is already completed.
            ItemNotFoundError: if the item does not exist.
        """
        if item_id in self._queued:
            raise ItemBusyError(f"Item {item_id} is queued in the active batch")
        item = self._collection.mark_processing(item_id)
        Log.info(f"Retrying item {item.original_name}", item_id=item_id)
        return await self._settle(item)

    def _start_group(self, group: list[Item]) -> list[Item]:
        started: list[Item] = []
        for item in group:
            try:
                started.append(self._collection.mark_processing(item.id))
            except ItemError as exc:
                # removed or settled elsewhere since selection
                self._queued.discard(item.id)
                Log.debug(f"Skipping item: {exc}", item_id=item.id)
        return started

    async def _settle(self, item: Item) -> Item:
        try:
            result = await self._gateway.extract(item.content)
        except Exception as exc:
            Log.exception(f"Unexpected gateway fault for {item.original_name}", item_id=item.id)
            result = ExtractionResult.failure(FailureReason.UNKNOWN, str(exc))
        return self._apply(item, result)

    def _apply(self, item: Item, result: ExtractionResult) -> Item:
        if result.ok:
            output_name = self._rename_policy.output_name(result.identifier, item.original_name)
            if output_name is not None:
                value = (result.identifier or "").strip()
                Log.info(
                    f"Completed {item.original_name} -> {output_name}", item_id=item.id
                )
                return self._collection.mark_completed(item.id, value, output_name)
            result = ExtractionResult.failure(FailureReason.NOT_FOUND, "empty identifier")

        reason = result.failure_reason or FailureReason.UNKNOWN
        Log.warning(
            f"Failed {item.original_name}: {reason.value}",
            item_id=item.id,
            detail=result.detail,
        )
        return self._collection.mark_failed(item.id, reason, failure_message(reason))
