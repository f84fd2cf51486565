from abc import ABC, abstractmethod

from vtrenamer.extraction.models import ExtractionResult


class BaseExtractionGateway(ABC):
    """Contract for anything that reads an identifier out of a document."""

    @abstractmethod
    async def extract(self, content: bytes) -> ExtractionResult:
        """Extract the identifier from raw document bytes.

        Args:
            content: Raw document payload, never modified.

        Returns:
            ExtractionResult carrying either the identifier or a FailureReason.
            Expected failure modes are returned, not raised.
        """
