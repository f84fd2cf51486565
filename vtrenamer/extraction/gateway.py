"""AI-backed trip number extraction gateway."""

import asyncio
import json
import re
from pathlib import Path

from vtrenamer.extraction.base import BaseExtractionGateway
from vtrenamer.extraction.client_base import BaseExtractionClient, DocumentAttachment
from vtrenamer.extraction.encoding import pdf_attachment
from vtrenamer.extraction.exceptions import (
    ExtractionAuthError,
    ExtractionError,
    ExtractionNetworkError,
    ExtractionQuotaError,
    ExtractionResponseError,
)
from vtrenamer.extraction.models import ExtractionResult, FailureReason
from vtrenamer.extraction.prompt_loader import load_json_schema, load_prompt_template
from vtrenamer.logging.logger import Log
from vtrenamer.pdf.base import BasePdfTextReader
from vtrenamer.pdf.exceptions import PdfExtractionError

DEFAULT_SYSTEM_PROMPT = (
    "You read scanned transport documents and return structured JSON only."
)
ATTACHED_DOCUMENT_NOTE = "(attached as a PDF file)"
RESULT_KEY = "trip_number"

_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class ExtractionGateway(BaseExtractionGateway):
    """Reads the trip number from a document through an AI provider.

    The document goes to the provider as an inline base64 PDF, or as text
    read locally when a text reader is configured. Provider and parsing
    failures come back as tagged results; only faults outside the known
    taxonomy propagate to the caller.
    """

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.0,
        text_reader: BasePdfTextReader | None = None,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._text_reader = text_reader
        self._system_prompt = system_prompt
        self._prompt_template = load_prompt_template(prompt_template_path)
        self._json_schema_dict = json.loads(load_json_schema(json_schema_path))

    async def extract(self, content: bytes) -> ExtractionResult:
        try:
            return await self._extract(content)
        except ExtractionAuthError as exc:
            return self._failed(FailureReason.AUTH_ERROR, exc)
        except ExtractionQuotaError as exc:
            return self._failed(FailureReason.QUOTA_EXCEEDED, exc)
        except ExtractionNetworkError as exc:
            return self._failed(FailureReason.CONNECTION_FAILURE, exc)
        except ExtractionResponseError as exc:
            Log.warning(f"Unexpected response shape from provider: {exc}")
            return self._failed(FailureReason.MALFORMED_RESPONSE, exc)
        except (ExtractionError, PdfExtractionError) as exc:
            return self._failed(FailureReason.UNKNOWN, exc)

    async def _extract(self, content: bytes) -> ExtractionResult:
        document, attachment = await self._prepare_document(content)
        if attachment is None and not document:
            Log.debug("Document has no text layer, skipping provider call")
            return ExtractionResult.failure(FailureReason.NOT_FOUND, "document has no text")

        raw_response = await self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=self._prompt_template.format(document=document),
            json_schema=self._json_schema_dict,
            attachment=attachment,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        value = self._read_value(self._parse_json(raw_response))
        if not value:
            return ExtractionResult.failure(FailureReason.NOT_FOUND, "no trip number in response")
        return ExtractionResult.success(value)

    async def _prepare_document(self, content: bytes) -> tuple[str, DocumentAttachment | None]:
        if self._text_reader is None:
            return ATTACHED_DOCUMENT_NOTE, pdf_attachment(content)
        text = await asyncio.to_thread(self._text_reader.read_text, content)
        return text, None

    @staticmethod
    def _read_value(parsed: dict[str, object]) -> str:
        if RESULT_KEY not in parsed:
            raise ExtractionResponseError(f"Response is missing '{RESULT_KEY}'")
        value = parsed[RESULT_KEY]
        if value is None:
            return ""
        if isinstance(value, (bool, dict, list)):
            raise ExtractionResponseError(f"'{RESULT_KEY}' must be a string, number or null")
        return str(value).strip()

    @staticmethod
    def _parse_json(raw: str) -> dict[str, object]:
        cleaned = raw.replace("```json", "").replace("```", "").strip()
        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError:
            match = _JSON_OBJECT.search(raw)
            if match is None:
                raise ExtractionResponseError("No JSON object found in response") from None
            try:
                parsed = json.loads(match.group(0))
            except json.JSONDecodeError as exc:
                raise ExtractionResponseError(f"Invalid JSON response: {exc}") from exc

        if not isinstance(parsed, dict):
            raise ExtractionResponseError("JSON response must be an object")
        return parsed

    @staticmethod
    def _failed(reason: FailureReason, exc: Exception) -> ExtractionResult:
        Log.info(f"Extraction failed ({reason.value}): {exc}")
        return ExtractionResult.failure(reason, str(exc))
