import io

import pdfplumber

from vtrenamer.pdf.base import BasePdfTextReader
from vtrenamer.pdf.exceptions import PdfExtractionError


class PdfPlumberReader(BasePdfTextReader):
    """Reads PDF text with pdfplumber."""

    def read_text(self, pdf_bytes: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                limit = self._page_limit(len(pdf.pages))
                texts = [page.extract_text() or "" for page in pdf.pages[:limit]]
        except Exception as exc:
            raise PdfExtractionError(f"pdfplumber could not read document: {exc}") from exc
        return "\n".join(texts).strip()
