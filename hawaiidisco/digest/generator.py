"""Digest generation on top of the prompt builder and the generation boundary."""

from __future__ import annotations

from typing import Sequence

from loguru import logger

from hawaiidisco.config import AppConfig
from hawaiidisco.config.llm import LLMConfig
from hawaiidisco.store.models import Article

from .client import CompletionClient, build_client
from .prompt import build_digest_prompt


class DigestGenerator:
    """Turn a sequence of articles into digest text using a real or stubbed client."""

    def __init__(
        self,
        llm_config: LLMConfig,
        *,
        default_period_days: int,
        client: CompletionClient | None = None,
    ) -> None:
        self._llm_config = llm_config
        self._default_period_days = default_period_days
        self._client = client

    @classmethod
    def from_config(cls, config: AppConfig, *, client: CompletionClient | None = None) -> "DigestGenerator":
        return cls(config.llm, default_period_days=config.digest.period_days, client=client)

    def prompt_for(self, articles: Sequence[Article], period_days: int | None = None) -> str:
        days = period_days if period_days is not None else self._default_period_days
        return build_digest_prompt(articles, days)

    def generate(self, articles: Sequence[Article], *, period_days: int | None = None) -> str:
        if not articles:
            raise ValueError("No articles to generate digest from")
        prompt = self.prompt_for(articles, period_days)
        client = self._client or build_client(self._llm_config)
        logger.info(
            "Generating digest from {} articles with {}",
            len(articles),
            self._llm_config.model,
        )
        return client.complete(prompt, max_tokens=self._llm_config.max_tokens)


def generate_digest(
    articles: Sequence[Article],
    config: AppConfig,
    period_days: int | None = None,
    *,
    client: CompletionClient | None = None,
) -> str:
    """Generate digest text for ``articles`` using the settings in ``config``."""

    return DigestGenerator.from_config(config, client=client).generate(articles, period_days=period_days)


__all__ = ["DigestGenerator", "generate_digest"]
