"""
Configuration management for the AI PDF Reader Backend.
Handles environment variables and application settings.
"""

from typing import List
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    app_name: str = Field(default="AI PDF Reader Backend")
    app_version: str = Field(default="1.0.0")
    debug: bool = Field(default=False)

    # Server Configuration
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5001)
    allowed_origin: str = Field(default="http://localhost:5173")

    # Google AI Configuration
    google_api_key: str = Field(...)
    google_chat_model: str = Field(default="gemini-1.5-flash")
    google_temperature: float = Field(default=0.3)
    google_max_tokens: int = Field(default=1024)

    # Question Answering Configuration
    truncation_budget: int = Field(default=4000, ge=1)
    preview_chars: int = Field(default=1500, ge=0)
    request_timeout_seconds: float = Field(default=30.0, gt=0)

    # File Processing Configuration
    max_file_size_mb: int = Field(default=20)
    allowed_file_types: List[str] = Field(default=["pdf"])

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra fields from environment


class QAConfig(BaseModel):
    """Parameters of the question answering pipeline."""

    truncation_budget: int = 4000
    model_name: str = "gemini-1.5-flash"
    temperature: float = 0.3
    max_tokens: int = 1024
    timeout_seconds: float = 30.0

    @classmethod
    def from_settings(cls, settings: Settings) -> "QAConfig":
        return cls(
            truncation_budget=settings.truncation_budget,
            model_name=settings.google_chat_model,
            temperature=settings.google_temperature,
            max_tokens=settings.google_max_tokens,
            timeout_seconds=settings.request_timeout_seconds,
        )


# Global settings instance
settings = Settings()


def validate_required_settings() -> None:
    """Validate that all required settings are present."""
    required_settings = [
        ("google_api_key", settings.google_api_key),
    ]

    missing_settings = []
    for setting_name, setting_value in required_settings:
        if not setting_value or not setting_value.strip():
            missing_settings.append(setting_name)

    if missing_settings:
        raise ValueError(
            f"Missing required environment variables: {', '.join(s.upper() for s in missing_settings)}. "
            "Please check your .env file."
        )
