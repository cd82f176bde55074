"""Clients for the remote text-generation boundary."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol

import requests
from loguru import logger

from hawaiidisco.config.llm import LLMConfig

MESSAGES_PATH = "/v1/messages"


class DigestGenerationError(RuntimeError):
    """Raised when the generation boundary fails to produce usable text."""


class CompletionClient(Protocol):
    def complete(self, prompt: str, *, max_tokens: int) -> str:
        """Return the generated text for ``prompt``."""
        ...


def build_client(config: LLMConfig, *, session: requests.Session | None = None) -> CompletionClient:
    """Pick the HTTP client, or the offline stub for ``stub://`` base URLs."""

    if config.base_url.strip().lower().startswith("stub://"):
        logger.debug("Using stub generation client for model {}", config.model)
        return StubClient(config)
    api_key = config.api_key_secret
    if not api_key:
        raise ValueError("Anthropic API key not configured")
    if session is None:
        return AnthropicClient(config, api_key=api_key)
    return AnthropicClient(config, api_key=api_key, session=session)


@dataclass(slots=True)
class AnthropicClient:
    """Single-shot client for the Anthropic Messages API."""

    config: LLMConfig
    api_key: str = field(repr=False)
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    url: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.api_key:
            raise ValueError("Anthropic API key not configured")
        self.url = self.config.base_url.rstrip("/") + MESSAGES_PATH

    def complete(self, prompt: str, *, max_tokens: int) -> str:
        headers = {
            "x-api-key": self.api_key,
            "anthropic-version": self.config.anthropic_version,
            "content-type": "application/json",
        }
        body = {
            "model": self.config.model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        logger.debug("Requesting digest from {} (model {}, max_tokens {})", self.url, self.config.model, max_tokens)
        try:
            response = self.session.post(self.url, json=body, headers=headers, timeout=self.config.timeout)
        except requests.RequestException as exc:
            raise DigestGenerationError(f"Anthropic API request failed: {exc}") from exc

        if response.status_code != 200:
            raise DigestGenerationError(f"Anthropic API error: {response.status_code} {response.text}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise DigestGenerationError("Anthropic API returned a malformed body") from exc

        return _extract_text(payload)


@dataclass(slots=True)
class StubClient:
    """Deterministic offline stand-in for the remote boundary."""

    config: LLMConfig
    calls: list[str] = field(default_factory=list, repr=False)

    def complete(self, prompt: str, *, max_tokens: int) -> str:
        self.calls.append(prompt)
        titles = [
            line.split(":", 1)[1].strip()
            for line in prompt.splitlines()
            if line.startswith("- Title:")
        ]
        bullets = "\n".join(f"- {title}" for title in titles) or "- No articles."
        return (
            f"## Digest ({self.config.model})\n\n"
            f"{len(titles)} articles reviewed.\n\n"
            f"### Top Highlights\n{bullets}"
        )


def _extract_text(payload: Any) -> str:
    if not isinstance(payload, dict):
        raise DigestGenerationError("Anthropic API returned a malformed body")
    content = payload.get("content")
    if content is not None and not isinstance(content, list):
        raise DigestGenerationError("Anthropic API returned a malformed body")
    if not content:
        raise DigestGenerationError("Empty response from Anthropic API")
    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str):
        raise DigestGenerationError("Anthropic API returned a content fragment without text")
    return text.strip()


__all__ = [
    "AnthropicClient",
    "CompletionClient",
    "DigestGenerationError",
    "StubClient",
    "build_client",
]
