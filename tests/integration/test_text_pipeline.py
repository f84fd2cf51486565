"""Real PDFs through the text-mode gateway and the scheduler, provider faked."""

import io
import json
import re

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from vtrenamer.extraction.client_base import BaseExtractionClient, DocumentAttachment
from vtrenamer.extraction.exceptions import ExtractionQuotaError
from vtrenamer.extraction.gateway import ExtractionGateway
from vtrenamer.extraction.models import FailureReason
from vtrenamer.items.collection import ItemCollection
from vtrenamer.items.models import DocumentInput, ItemStatus
from vtrenamer.pdf.pdfplumber_adapter import PdfPlumberReader
from vtrenamer.scheduler.scheduler import BatchScheduler

_TRIP = re.compile(r"Trip number:\s*(\S+)")


def _trip_sheet(trip_number: str | None) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    c.drawString(72, 740, "Transport sheet")
    if trip_number:
        c.drawString(72, 720, f"Trip number: {trip_number}")
    c.save()
    return buf.getvalue()


class RegexClient(BaseExtractionClient):
    """Answers like a provider would, by reading the trip number from the prompt."""

    def __init__(self, quota_failures: int = 0) -> None:
        self.quota_failures = quota_failures

    async def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
        attachment: DocumentAttachment | None = None,
    ) -> str:
        if self.quota_failures:
            self.quota_failures -= 1
            raise ExtractionQuotaError("429")
        match = _TRIP.search(user_prompt)
        return json.dumps({"trip_number": match.group(1) if match else None})


def _scheduler(collection: ItemCollection, client: BaseExtractionClient) -> BatchScheduler:
    gateway = ExtractionGateway(client=client, model="m", text_reader=PdfPlumberReader())
    return BatchScheduler(collection, gateway, batch_size=2)


class TestTextPipeline:
    async def test_renames_from_document_text(self) -> None:
        collection = ItemCollection()
        collection.add_documents(
            [
                DocumentInput(name="a.pdf", content=_trip_sheet("VT-4471")),
                DocumentInput(name="b.pdf", content=_trip_sheet(None)),
                DocumentInput(name="c.pdf", content=_trip_sheet("VT-0002")),
            ]
        )

        await _scheduler(collection, RegexClient()).run_batch()

        a, b, c = collection.items
        assert (a.status, a.output_name) == (ItemStatus.COMPLETED, "VT-4471.pdf")
        assert (b.status, b.failure_reason) == (ItemStatus.FAILED, FailureReason.NOT_FOUND)
        assert b.output_name == "b.pdf"
        assert c.output_name == "VT-0002.pdf"

    async def test_quota_failure_recovered_by_retry(self) -> None:
        collection = ItemCollection()
        (item,) = collection.add_documents(
            [DocumentInput(name="scan1.pdf", content=_trip_sheet("X9"))]
        )
        scheduler = _scheduler(collection, RegexClient(quota_failures=1))

        await scheduler.run_batch()
        assert collection.get(item.id).failure_reason is FailureReason.QUOTA_EXCEEDED

        retried = await scheduler.retry_item(item.id)
        assert retried.status is ItemStatus.COMPLETED
        assert retried.output_name == "X9.pdf"
