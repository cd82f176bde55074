"""Application-level configuration models."""

from __future__ import annotations

from pydantic import Field

from hawaiidisco.config.base import BaseConfig
from hawaiidisco.config.digest import DigestConfig, NotesConfig
from hawaiidisco.config.llm import LLMConfig

DEFAULT_DB_PATH = "~/.local/share/hawaiidisco/hawaiidisco.db"


class AppConfig(BaseConfig):
    """Top-level runtime configuration."""

    db_path: str = Field(DEFAULT_DB_PATH, description="Path to the Hawaii Disco SQLite database")
    logging_level: str = Field("INFO", description="Log level: DEBUG, INFO, WARNING, ERROR")
    llm: LLMConfig = Field(default_factory=LLMConfig, description="Generation boundary settings")
    digest: DigestConfig = Field(default_factory=DigestConfig, description="Digest defaults")
    notes: NotesConfig = Field(default_factory=NotesConfig, description="Note formatting options")


__all__ = ["AppConfig", "DEFAULT_DB_PATH"]
