import pymupdf

from vtrenamer.pdf.base import BasePdfTextReader
from vtrenamer.pdf.exceptions import PdfExtractionError


class PyMuPdfReader(BasePdfTextReader):
    """Reads PDF text with PyMuPDF."""

    def read_text(self, pdf_bytes: bytes) -> str:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                limit = self._page_limit(doc.page_count)
                texts = [doc[index].get_text() for index in range(limit)]
        except Exception as exc:
            raise PdfExtractionError(f"pymupdf could not read document: {exc}") from exc
        return "\n".join(texts).strip()
