"""Digest pipeline package."""

from __future__ import annotations

from .client import AnthropicClient, CompletionClient, DigestGenerationError, StubClient, build_client
from .generator import DigestGenerator, generate_digest
from .prompt import DIGEST_PROMPT, build_digest_prompt, format_article_item

__all__ = [
    "AnthropicClient",
    "CompletionClient",
    "DIGEST_PROMPT",
    "DigestGenerationError",
    "DigestGenerator",
    "StubClient",
    "build_client",
    "build_digest_prompt",
    "format_article_item",
    "generate_digest",
]
