"""Relay configuration with environment variable loading.

Pydantic-based settings for the chat relay and the chat page.
Values come from the process environment, with a .env file loaded first.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_MODEL = "claude-haiku-4-5-20251001"
DEFAULT_API_URL = "https://api.anthropic.com/v1/messages"
DEFAULT_API_VERSION = "2023-06-01"
STATIC_DIR = Path(__file__).parent / "static"


class Settings(BaseModel):
    """Configuration for the chat relay.

    The API key is optional: without it the relay answers every message
    with a scripted notice instead of calling the provider.

    Attributes:
        api_key: Anthropic API key ("" when not configured).
        model: Model identifier sent upstream and reported by /health.
        api_url: Messages endpoint of the provider.
        api_version: Value of the anthropic-version header.
        max_tokens: Output length cap for each reply.
        upstream_timeout: Seconds to wait on upstream I/O (None waits forever).
        clinic_data_path: Text file with the clinic information for the prompt.
        log_dir: Directory holding the request and upstream error logs.
        static_dir: Directory served under /static.
        api_base_url: Base URL the chat page uses to reach the API.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="API key for the LLM provider",
    )
    model: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_MODEL") or DEFAULT_MODEL,
        description="Model to use",
    )
    api_url: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_URL") or DEFAULT_API_URL,
        description="Provider messages endpoint",
    )
    api_version: str = Field(default=DEFAULT_API_VERSION)
    max_tokens: int = Field(
        default_factory=lambda: os.getenv("MAX_TOKENS", "1024"),
        validate_default=True,
        ge=1,
        le=64000,
        description="Maximum tokens in generated response",
    )
    upstream_timeout: float | None = Field(
        default_factory=lambda: os.getenv("UPSTREAM_TIMEOUT"),
        validate_default=True,
        gt=0,
        description="Upstream I/O timeout in seconds, unset for no timeout",
    )
    clinic_data_path: Path = Field(
        default_factory=lambda: Path(os.getenv("CLINIC_DATA_PATH", "clinic_data.txt")),
    )
    log_dir: Path = Field(default_factory=lambda: Path(os.getenv("LOG_DIR", "logs")))
    static_dir: Path = Field(default=STATIC_DIR)
    api_base_url: str = Field(
        default_factory=lambda: os.getenv("API_BASE_URL", "http://localhost:8000"),
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Treat a whitespace-only key as missing."""
        return v.strip()

    @field_validator("upstream_timeout", mode="before")
    @classmethod
    def blank_timeout_is_unset(cls, v: object) -> object:
        """An empty UPSTREAM_TIMEOUT means no timeout."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)


def get_settings() -> Settings:
    """Create settings from the environment.

    Returns:
        Configured Settings instance.
    """
    return Settings()
