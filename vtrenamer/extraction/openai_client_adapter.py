import httpx
import openai

from vtrenamer.extraction.client_base import BaseExtractionClient, DocumentAttachment
from vtrenamer.extraction.exceptions import (
    ExtractionAuthError,
    ExtractionError,
    ExtractionNetworkError,
    ExtractionQuotaError,
    ExtractionResponseError,
)


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction AI client adapter built on the async OpenAI-compatible chat API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.AsyncOpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        try:
            response = await self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "trip_number_extraction",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": self._user_content(user_prompt, attachment)},
                ],
            )
        except (openai.AuthenticationError, openai.PermissionDeniedError) as exc:
            raise ExtractionAuthError(f"AI provider rejected credentials: {exc}") from exc
        except openai.RateLimitError as exc:
            raise ExtractionQuotaError(f"AI provider quota exceeded: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionResponseError("AI returned no choices")
        content = response.choices[0].message.content
        if not content:
            raise ExtractionResponseError("AI returned empty response")
        return content

    @staticmethod
    def _user_content(
        user_prompt: str, attachment: DocumentAttachment | None
    ) -> str | list[dict[str, object]]:
        if attachment is None:
            return user_prompt
        return [
            {
                "type": "file",
                "file": {
                    "filename": attachment.filename,
                    "file_data": attachment.data_url,
                },
            },
            {"type": "text", "text": user_prompt},
        ]
