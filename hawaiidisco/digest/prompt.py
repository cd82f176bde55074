"""Deterministic prompt assembly for digests."""

from __future__ import annotations

from typing import Sequence

from hawaiidisco.utils import format_date
from hawaiidisco.store.models import Article

DIGEST_PROMPT = (
    "You are a senior tech editor creating a weekly digest of notable articles.\n"
    "Below are the articles from the past {period_days} days.\n\n"
    "<articles>\n{articles}\n</articles>\n\n"
    "Please create a concise, well-structured digest in English:\n"
    "1. **Key Themes**: Identify 2-4 major themes or trends across these articles\n"
    "2. **Top Highlights**: Summarize the 3-5 most important articles with why they matter\n"
    "3. **What to Watch**: Briefly note emerging topics or implications for engineers\n\n"
    "Keep the digest focused and actionable. Use markdown formatting."
)

MISSING = "(none)"


def format_article_item(article: Article) -> str:
    """Render one article as the five-line block used inside the prompt."""

    date = format_date(article.published_at or article.fetched_at)
    lines = [
        f"- Title: {article.title}",
        f"  Feed: {article.feed_name}",
        f"  Date: {date}",
        f"  Description: {article.description if article.description is not None else MISSING}",
        f"  Insight: {article.insight if article.insight is not None else MISSING}",
    ]
    return "\n".join(lines)


def build_digest_prompt(articles: Sequence[Article], period_days: int) -> str:
    """Embed the article blocks, in input order, into the editor instructions."""

    articles_text = "\n".join(format_article_item(article) for article in articles)
    # Substitute sequentially so braces inside article text are left alone.
    return DIGEST_PROMPT.replace("{period_days}", str(period_days), 1).replace("{articles}", articles_text, 1)


__all__ = ["DIGEST_PROMPT", "build_digest_prompt", "format_article_item"]
