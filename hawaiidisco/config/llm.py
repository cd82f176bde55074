"""Generation boundary configuration."""

from __future__ import annotations

from pydantic import Field

from hawaiidisco.config.base import BaseConfig
from hawaiidisco.config.utils import resolve_env_reference

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"
DEFAULT_BASE_URL = "https://api.anthropic.com"


class LLMConfig(BaseConfig):
    """Settings for the Anthropic Messages endpoint used to write digests."""

    model: str = Field(DEFAULT_MODEL, description="Model identifier sent with every request")
    api_key: str = Field(
        "env:ANTHROPIC_API_KEY",
        description="API key, can use 'env:VAR_NAME' format",
    )
    base_url: str = Field(DEFAULT_BASE_URL, description="API base URL; 'stub://' selects the offline client")
    anthropic_version: str = Field("2023-06-01", description="Value of the anthropic-version header")
    max_tokens: int = Field(4096, ge=1, description="Upper bound on generated tokens")
    timeout: float = Field(120.0, gt=0, description="HTTP timeout in seconds")

    @property
    def api_key_secret(self) -> str:
        """Return the resolved API key, or an empty string when it is not configured."""

        return resolve_env_reference(self.api_key, required=False) or ""


__all__ = ["LLMConfig", "DEFAULT_MODEL", "DEFAULT_BASE_URL"]
