import io

import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from vtrenamer.items.collection import ItemCollection


def _pdf(*pages: str) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        if text:
            c.drawString(72, 720, text)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def trip_sheet_pdf_bytes() -> bytes:
    """Single-page PDF carrying a trip number line."""
    return _pdf("Trip number: VT-4471")


@pytest.fixture()
def multi_page_pdf_bytes() -> bytes:
    """Four pages, each with known text."""
    return _pdf("Page one content", "Page two content", "Page three content", "Page four content")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Valid PDF with a blank page."""
    return _pdf("")


@pytest.fixture()
def counter_ids():
    """Deterministic id generator: item-1, item-2, ..."""
    state = {"n": 0}

    def generate() -> str:
        state["n"] += 1
        return f"item-{state['n']}"

    return generate


@pytest.fixture()
def collection(counter_ids) -> ItemCollection:
    return ItemCollection(id_generator=counter_ids)

