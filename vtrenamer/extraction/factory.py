from typing import ClassVar

from vtrenamer.config.settings import Settings
from vtrenamer.extraction.base import BaseExtractionGateway
from vtrenamer.extraction.example_client_adapter import ExampleClientAdapter
from vtrenamer.extraction.gateway import ExtractionGateway
from vtrenamer.extraction.openai_client_adapter import OpenAIClientAdapter
from vtrenamer.pdf.base import BasePdfTextReader
from vtrenamer.pdf.factory import PdfTextReaderFactory


class ExtractionGatewayFactory:
    """Creates the configured extraction gateway."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }
    INPUT_MODES: ClassVar[tuple[str, ...]] = ("file", "text")

    @classmethod
    def create(cls, settings: Settings) -> BaseExtractionGateway:
        """Create a gateway for `extraction_provider` and `extraction_input`."""
        provider = settings.extraction_provider.lower()
        text_reader = cls._resolve_text_reader(settings)
        if provider == "example":
            return ExtractionGateway(
                client=ExampleClientAdapter(),
                model="example",
                text_reader=text_reader,
            )
        client = OpenAIClientAdapter(
            api_key=cls._api_key(provider, settings),
            timeout_seconds=cls._timeout_seconds(provider, settings),
            base_url=cls._resolve_base_url(provider, settings),
        )
        return ExtractionGateway(
            client=client,
            model=cls._model_name(provider, settings),
            temperature=settings.extraction_temperature,
            text_reader=text_reader,
        )

    @classmethod
    def supported_providers(cls) -> list[str]:
        return ["example", "openai", "openai_compatible", *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS)]

    @classmethod
    def _resolve_text_reader(cls, settings: Settings) -> BasePdfTextReader | None:
        mode = settings.extraction_input.lower()
        if mode not in cls.INPUT_MODES:
            raise ValueError(
                f"Unknown extraction input '{mode}'. Choose from: {list(cls.INPUT_MODES)}"
            )
        if mode == "file":
            return None
        return PdfTextReaderFactory.create(settings)

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.extraction_openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "extraction_openai_compatible_base_url is required for "
                    "extraction_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        raise ValueError(
            f"Unknown extraction provider '{provider}'. Choose from: {cls.supported_providers()}"
        )

    @staticmethod
    def _api_key(provider: str, settings: Settings) -> str:
        return getattr(settings, f"extraction_{provider}_api_key", "") or ""

    @staticmethod
    def _model_name(provider: str, settings: Settings) -> str:
        return getattr(settings, f"extraction_{provider}_model_name", "") or ""

    @staticmethod
    def _timeout_seconds(provider: str, settings: Settings) -> int:
        return getattr(settings, f"extraction_{provider}_timeout_seconds", 30) or 30
