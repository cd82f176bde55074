"""Digest pipeline configuration models."""

from __future__ import annotations

from pydantic import Field

from hawaiidisco.config.base import BaseConfig


class DigestConfig(BaseConfig):
    """Defaults used when selecting articles for a digest."""

    period_days: int = Field(7, ge=1, description="Trailing window summarised by a digest")
    max_articles: int = Field(20, ge=1, description="Maximum articles included in the prompt")


class NotesConfig(BaseConfig):
    """Formatting toggles for generated notes."""

    folder: str = Field("hawaii-disco", description="Folder inside the vault for created notes")
    tags_prefix: str = Field("hawaiidisco", description="Prefix for tags on created notes")
    include_insight: bool = Field(True, description="Include the AI insight section in article notes")
    include_translation: bool = Field(True, description="Include the translation section in article notes")


__all__ = ["DigestConfig", "NotesConfig"]
