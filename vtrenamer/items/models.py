from dataclasses import dataclass, field
from enum import Enum

from vtrenamer.extraction.models import FailureReason


class ItemStatus(str, Enum):
    """Lifecycle states of a tracked document."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


ELIGIBLE_STATUSES = frozenset({ItemStatus.PENDING, ItemStatus.FAILED})


@dataclass(frozen=True)
class DocumentInput:
    """A document handed over by the ingestion side: name plus raw bytes."""

    name: str
    content: bytes = field(repr=False)
    size_bytes: int = -1

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            object.__setattr__(self, "size_bytes", len(self.content))


@dataclass(frozen=True)
class Item:
    """One document tracked through extraction and renaming.

    Instances are immutable; status changes go through ItemCollection,
    which swaps in a new value at the same position.
    """

    id: str
    original_name: str
    content: bytes = field(repr=False)
    size_bytes: int
    output_name: str = ""
    extracted_value: str | None = None
    status: ItemStatus = ItemStatus.PENDING
    failure_reason: FailureReason | None = None
    failure_message: str | None = None

    def __post_init__(self) -> None:
        if not self.output_name:
            object.__setattr__(self, "output_name", self.original_name)

    @property
    def is_eligible(self) -> bool:
        """Pending or failed items are candidates for (re)processing."""
        return self.status in ELIGIBLE_STATUSES
