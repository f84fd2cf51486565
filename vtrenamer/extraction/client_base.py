from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class DocumentAttachment:
    """Document sent inline with a prompt, already base64-encoded."""

    filename: str
    mime_type: str
    data_base64: str = field(repr=False)

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data_base64}"


class BaseExtractionClient(ABC):
    """Contract for provider-specific extraction AI clients."""

    @abstractmethod
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
        """Return provider response as plain text.

        Raises:
            ExtractionError or one of its subclasses on provider failure.
        """
