from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    batch_size: int = Field(default=10, ge=1)
    download_stagger_ms: int = Field(default=200, ge=0)
    default_extension: str = "pdf"

    pdf_engine: str = "pdfplumber"
    pdf_max_pages: int = Field(default=3, ge=0)

    extraction_provider: str = "openai"
    extraction_input: str = "file"
    extraction_temperature: float = 0.0

    extraction_openai_api_key: str = ""
    extraction_openai_model_name: str = "gpt-4o-mini"
    extraction_openai_timeout_seconds: int = 30

    extraction_openai_compatible_api_key: str = ""
    extraction_openai_compatible_model_name: str = ""
    extraction_openai_compatible_timeout_seconds: int = 30
    extraction_openai_compatible_base_url: str = ""

    extraction_openrouter_api_key: str = ""
    extraction_openrouter_model_name: str = ""
    extraction_openrouter_timeout_seconds: int = 30

    extraction_groq_api_key: str = ""
    extraction_groq_model_name: str = ""
    extraction_groq_timeout_seconds: int = 30

    extraction_together_api_key: str = ""
    extraction_together_model_name: str = ""
    extraction_together_timeout_seconds: int = 30

    extraction_deepseek_api_key: str = ""
    extraction_deepseek_model_name: str = ""
    extraction_deepseek_timeout_seconds: int = 30

    extraction_ollama_api_key: str = "ollama"
    extraction_ollama_model_name: str = ""
    extraction_ollama_timeout_seconds: int = 60
