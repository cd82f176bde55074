"""Configuration namespace for hawaiidisco."""

from __future__ import annotations

from .app import AppConfig
from .base import BaseConfig, load_config
from .digest import DigestConfig, NotesConfig
from .llm import LLMConfig
from .utils import MissingCredentialError, env_reference_name, resolve_env_reference

__all__ = [
    "BaseConfig",
    "AppConfig",
    "load_config",
    "DigestConfig",
    "NotesConfig",
    "LLMConfig",
    "MissingCredentialError",
    "env_reference_name",
    "resolve_env_reference",
]
