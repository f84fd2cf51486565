from abc import ABC, abstractmethod
from pathlib import Path


class BaseExporter(ABC):
    """Contract for whatever saves a renamed document for the user."""

    @abstractmethod
    def export(self, content: bytes, output_name: str) -> Path | None:
        """Save `content` as `output_name`.

        Returns:
            Where the document ended up, when the exporter knows.

        Raises:
            ExportError: if the document cannot be saved.
        """
