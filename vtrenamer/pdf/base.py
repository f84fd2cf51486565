from abc import ABC, abstractmethod


class BasePdfTextReader(ABC):
    """Contract for local PDF text readers used before a text-only provider call."""

    def __init__(self, max_pages: int | None = None) -> None:
        self._max_pages = max_pages

    @abstractmethod
    def read_text(self, pdf_bytes: bytes) -> str:
        """Return the text of the leading pages, joined by newlines.

        Only the first `max_pages` pages are read when a limit is set; trip
        sheets carry their identifier on the first page.

        Raises:
            PdfExtractionError: if the payload cannot be parsed.
        """

    def _page_limit(self, page_count: int) -> int:
        if self._max_pages is None:
            return page_count
        return min(page_count, self._max_pages)
