"""Owned, ordered item state and the only place item status may change."""

import uuid
from collections.abc import Callable, Iterable, Iterator
from dataclasses import replace

from vtrenamer.extraction.models import FailureReason
from vtrenamer.items.exceptions import (
    BatchActiveError,
    InvalidTransitionError,
    ItemBusyError,
    ItemNotFoundError,
)
from vtrenamer.items.models import DocumentInput, Item, ItemStatus
from vtrenamer.logging.logger import Log

IdGenerator = Callable[[], str]
Listener = Callable[["ItemCollection"], None]


def random_id() -> str:
    """Short random identifier, unique enough within one session."""
    return uuid.uuid4().hex[:9]


class ItemCollection:
    """Ordered collection of items plus the batch-active flag.

    All mutations go through the transition methods below. Every change
    notifies subscribed listeners with the collection itself so summaries can
    be recomputed.
    """

    def __init__(self, id_generator: IdGenerator | None = None) -> None:
        self._id_generator = id_generator or random_id
        self._items: list[Item] = []
        self._batch_active = False
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Item]:
        return iter(tuple(self._items))

    @property
    def items(self) -> tuple[Item, ...]:
        return tuple(self._items)

    @property
    def batch_active(self) -> bool:
        return self._batch_active

    @property
    def has_processing(self) -> bool:
        return any(item.status is ItemStatus.PROCESSING for item in self._items)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get(self, item_id: str) -> Item:
        return self._items[self._index_of(item_id)]

    def add_documents(self, documents: Iterable[DocumentInput]) -> list[Item]:
        """Append one pending item per document, keeping the given order."""
        added: list[Item] = []
        for document in documents:
            item = Item(
                id=self._next_id(),
                original_name=document.name,
                content=document.content,
                size_bytes=document.size_bytes,
            )
            self._items.append(item)
            added.append(item)
        if added:
            Log.info(f"Added {len(added)} document(s)", total=len(self._items))
            self._notify()
        return added

    def remove(self, item_id: str) -> Item:
        """Drop an item. Items with an extraction in flight cannot be removed."""
        index = self._index_of(item_id)
        item = self._items[index]
        if item.status is ItemStatus.PROCESSING:
            raise ItemBusyError(f"Item {item_id} is being processed and cannot be removed")
        del self._items[index]
        self._notify()
        return item

    def clear(self) -> None:
        """Remove every item. Not allowed while a batch runs or any item is processing."""
        if self._batch_active:
            raise BatchActiveError("Cannot clear the list while a batch is running")
        if self.has_processing:
            raise ItemBusyError("Cannot clear the list while an item is processing")
        self._items.clear()
        self._notify()

    def begin_batch(self) -> None:
        if self._batch_active:
            raise BatchActiveError("A batch run is already active")
        self._batch_active = True
        self._notify()

    def end_batch(self) -> None:
        self._batch_active = False
        self._notify()

    def mark_processing(self, item_id: str) -> Item:
        index = self._index_of(item_id)
        item = self._items[index]
        if item.status is ItemStatus.PROCESSING:
            raise ItemBusyError(f"Item {item_id} already has an extraction in flight")
        if item.status is ItemStatus.COMPLETED:
            raise InvalidTransitionError(f"Item {item_id} is already completed")
        return self._swap(
            index,
            replace(
                item,
                status=ItemStatus.PROCESSING,
                failure_reason=None,
                failure_message=None,
            ),
        )

    def mark_completed(self, item_id: str, extracted_value: str, output_name: str) -> Item:
        index = self._index_of(item_id)
        item = self._require_processing(index)
        return self._swap(
            index,
            replace(
                item,
                status=ItemStatus.COMPLETED,
                extracted_value=extracted_value,
                output_name=output_name,
                failure_reason=None,
                failure_message=None,
            ),
        )

    def mark_failed(self, item_id: str, reason: FailureReason, message: str) -> Item:
        index = self._index_of(item_id)
        item = self._require_processing(index)
        return self._swap(
            index,
            replace(
                item,
                status=ItemStatus.FAILED,
                extracted_value=None,
                output_name=item.original_name,
                failure_reason=reason,
                failure_message=message,
            ),
        )

    def _require_processing(self, index: int) -> Item:
        item = self._items[index]
        if item.status is not ItemStatus.PROCESSING:
            raise InvalidTransitionError(
                f"Item {item.id} must be processing to settle, not {item.status.value}"
            )
        return item

    def _swap(self, index: int, item: Item) -> Item:
        self._items[index] = item
        self._notify()
        return item

    def _index_of(self, item_id: str) -> int:
        for index, item in enumerate(self._items):
            if item.id == item_id:
                return index
        raise ItemNotFoundError(f"Item {item_id} not found")

    def _next_id(self) -> str:
        taken = {item.id for item in self._items}
        item_id = self._id_generator()
        while item_id in taken:
            item_id = self._id_generator()
        return item_id

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception as exc:
                Log.warning(f"Collection listener failed: {exc}")
