from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from vtrenamer.extraction.client_base import DocumentAttachment
from vtrenamer.extraction.exceptions import (
    ExtractionAuthError,
    ExtractionError,
    ExtractionNetworkError,
    ExtractionQuotaError,
    ExtractionResponseError,
)
from vtrenamer.extraction.openai_client_adapter import OpenAIClientAdapter

_REQUEST = httpx.Request("POST", "https://api.example.com/v1/chat/completions")


def _make_mock_response(content: str | None) -> MagicMock:
    choice = MagicMock()
    choice.message.content = content
    response = MagicMock()
    response.choices = [choice]
    return response


def _status_error(cls: type[openai.APIStatusError], status: int) -> openai.APIStatusError:
    return cls("rejected", response=httpx.Response(status, request=_REQUEST), body=None)


def _make_adapter(create: AsyncMock) -> OpenAIClientAdapter:
    mock_client = MagicMock()
    mock_client.chat.completions.create = create
    with patch(
        "vtrenamer.extraction.openai_client_adapter.openai.AsyncOpenAI",
        return_value=mock_client,
    ):
        return OpenAIClientAdapter(api_key="k", timeout_seconds=30, base_url=None)


async def _call(
    adapter: OpenAIClientAdapter, attachment: DocumentAttachment | None = None
) -> str:
    return await adapter.create_completion(
        model="m",
        temperature=0.0,
        system_prompt="system",
        user_prompt="user",
        json_schema={"type": "object"},
        attachment=attachment,
    )


class TestOpenAIClientAdapter:
    async def test_returns_content(self) -> None:
        create = AsyncMock(return_value=_make_mock_response('{"trip_number": "A"}'))
        adapter = _make_adapter(create)
        assert await _call(adapter) == '{"trip_number": "A"}'

    async def test_plain_prompt_without_attachment(self) -> None:
        create = AsyncMock(return_value=_make_mock_response("{}"))
        await _call(_make_adapter(create))
        messages = create.call_args.kwargs["messages"]
        assert messages[1] == {"role": "user", "content": "user"}
        assert create.call_args.kwargs["response_format"]["json_schema"]["strict"] is True

    async def test_attachment_sent_as_file_part(self) -> None:
        create = AsyncMock(return_value=_make_mock_response("{}"))
        attachment = DocumentAttachment(
            filename="doc.pdf", mime_type="application/pdf", data_base64="QUJD"
        )
        await _call(_make_adapter(create), attachment)
        parts = create.call_args.kwargs["messages"][1]["content"]
        assert parts[0] == {
            "type": "file",
            "file": {"filename": "doc.pdf", "file_data": "data:application/pdf;base64,QUJD"},
        }
        assert parts[1] == {"type": "text", "text": "user"}

    async def test_raises_response_error_for_empty_content(self) -> None:
        create = AsyncMock(return_value=_make_mock_response(None))
        with pytest.raises(ExtractionResponseError, match="empty response"):
            await _call(_make_adapter(create))

    async def test_raises_response_error_for_no_choices(self) -> None:
        response = MagicMock()
        response.choices = []
        with pytest.raises(ExtractionResponseError, match="no choices"):
            await _call(_make_adapter(AsyncMock(return_value=response)))

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (_status_error(openai.AuthenticationError, 401), ExtractionAuthError),
            (_status_error(openai.PermissionDeniedError, 403), ExtractionAuthError),
            (_status_error(openai.RateLimitError, 429), ExtractionQuotaError),
            (openai.APIConnectionError(request=_REQUEST), ExtractionNetworkError),
            (httpx.TimeoutException("timeout"), ExtractionNetworkError),
            (_status_error(openai.InternalServerError, 500), ExtractionError),
        ],
    )
    async def test_maps_provider_errors(
        self, error: Exception, expected: type[Exception]
    ) -> None:
        create = AsyncMock(side_effect=error)
        with pytest.raises(expected):
            await _call(_make_adapter(create))

    async def test_generic_api_error_is_not_network(self) -> None:
        error = openai.APIError(message="server error", request=_REQUEST, body=None)
        create = AsyncMock(side_effect=error)
        with pytest.raises(ExtractionError, match="API error") as info:
            await _call(_make_adapter(create))
        assert not isinstance(info.value, ExtractionNetworkError)
