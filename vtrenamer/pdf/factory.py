from vtrenamer.config.settings import Settings
from vtrenamer.pdf.base import BasePdfTextReader
from vtrenamer.pdf.pdfplumber_adapter import PdfPlumberReader
from vtrenamer.pdf.pymupdf_adapter import PyMuPdfReader


class PdfTextReaderFactory:
    """Creates the PDF text reader named by `pdf_engine`."""

    READERS: dict[str, type[BasePdfTextReader]] = {
        "pdfplumber": PdfPlumberReader,
        "pymupdf": PyMuPdfReader,
    }

    @classmethod
    def create(cls, settings: Settings) -> BasePdfTextReader:
        engine = settings.pdf_engine.lower()
        reader_cls = cls.READERS.get(engine)
        if reader_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.READERS)}"
            )
        return reader_cls(max_pages=settings.pdf_max_pages or None)
