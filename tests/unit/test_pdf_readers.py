import pytest

from vtrenamer.config.settings import Settings
from vtrenamer.pdf.base import BasePdfTextReader
from vtrenamer.pdf.exceptions import PdfExtractionError
from vtrenamer.pdf.factory import PdfTextReaderFactory
from vtrenamer.pdf.pdfplumber_adapter import PdfPlumberReader
from vtrenamer.pdf.pymupdf_adapter import PyMuPdfReader

READERS = [PdfPlumberReader, PyMuPdfReader]


@pytest.mark.parametrize("reader_cls", READERS)
class TestPdfTextReaders:
    def test_reads_trip_sheet(
        self, reader_cls: type[BasePdfTextReader], trip_sheet_pdf_bytes: bytes
    ) -> None:
        assert "VT-4471" in reader_cls().read_text(trip_sheet_pdf_bytes)

    def test_reads_all_pages_without_limit(
        self, reader_cls: type[BasePdfTextReader], multi_page_pdf_bytes: bytes
    ) -> None:
        text = reader_cls().read_text(multi_page_pdf_bytes)
        assert "Page one content" in text
        assert "Page four content" in text

    def test_respects_page_limit(
        self, reader_cls: type[BasePdfTextReader], multi_page_pdf_bytes: bytes
    ) -> None:
        text = reader_cls(max_pages=2).read_text(multi_page_pdf_bytes)
        assert "Page two content" in text
        assert "Page three content" not in text

    def test_blank_page_gives_empty_text(
        self, reader_cls: type[BasePdfTextReader], empty_pdf_bytes: bytes
    ) -> None:
        assert reader_cls().read_text(empty_pdf_bytes) == ""

    def test_invalid_bytes_raise(self, reader_cls: type[BasePdfTextReader]) -> None:
        with pytest.raises(PdfExtractionError):
            reader_cls().read_text(b"definitely not a pdf")


class TestPdfTextReaderFactory:
    def test_default_engine(self) -> None:
        assert isinstance(PdfTextReaderFactory.create(Settings()), PdfPlumberReader)

    def test_pymupdf_engine(self) -> None:
        reader = PdfTextReaderFactory.create(Settings(pdf_engine="PyMuPDF"))
        assert isinstance(reader, PyMuPdfReader)

    def test_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown PDF engine"):
            PdfTextReaderFactory.create(Settings(pdf_engine="ocr"))

    def test_zero_max_pages_means_unlimited(self, multi_page_pdf_bytes: bytes) -> None:
        reader = PdfTextReaderFactory.create(Settings(pdf_max_pages=0))
        assert "Page four content" in reader.read_text(multi_page_pdf_bytes)
