"""Markdown rendering for article and digest notes."""

from __future__ import annotations

from typing import Iterable

from jinja2 import BaseLoader, Environment

from hawaiidisco.config.digest import NotesConfig
from hawaiidisco.store.models import Article
from hawaiidisco.utils import escape_yaml, format_date, sanitize_feed_name

_ARTICLE_TEMPLATE = """---
title: "{{ title | yaml }}"
link: "{{ link | yaml }}"
feed: "{{ feed | yaml }}"
published: {{ published }}
tags:
{% for tag in tags %}
  - "{{ tag | yaml }}"
{% endfor %}
---

# {{ title }}

[Original article]({{ link }})

{% if description %}
## Description

{{ description.strip() }}

{% endif %}
{% if insight %}
## AI Insight

{{ insight.strip() }}

{% endif %}
{% if translated_title or translated_desc or translated_body %}
## Translation

{% if translated_title %}
**{{ translated_title.strip() }}**

{% endif %}
{% if translated_desc %}
{{ translated_desc.strip() }}

{% endif %}
{% if translated_body %}
{{ translated_body.strip() }}

{% endif %}
{% endif %}
{% if memo %}
## Memo

{{ memo.strip() }}
{% endif %}
"""

_DIGEST_TEMPLATE = """---
type: digest
created: {{ created }}
period_days: {{ period_days }}
article_count: {{ article_count }}
tags:
  - "{{ tags_prefix | yaml }}/digest"
---

# Digest {{ created }} ({{ period_days }} days, {{ article_count }} articles)

{{ content.strip() }}
"""


def _environment() -> Environment:
    env = Environment(loader=BaseLoader(), autoescape=False, trim_blocks=True, lstrip_blocks=True)
    env.filters["yaml"] = escape_yaml
    return env


class NoteRenderer:
    """Render notes into Markdown strings with YAML front matter."""

    def __init__(self, config: NotesConfig) -> None:
        env = _environment()
        self._config = config
        self._article_template = env.from_string(_ARTICLE_TEMPLATE)
        self._digest_template = env.from_string(_DIGEST_TEMPLATE)

    def article_tags(self, article: Article, bookmark_tags: Iterable[str] = ()) -> list[str]:
        prefix = self._config.tags_prefix
        tags = [f"{prefix}/{sanitize_feed_name(article.feed_name)}"]
        for tag in bookmark_tags:
            cleaned = "-".join(tag.split())
            if cleaned and cleaned not in tags:
                tags.append(cleaned)
        return tags

    def render_article(self, article: Article, *, tags: Iterable[str] = (), memo: str | None = None) -> str:
        include_translation = self._config.include_translation
        return self._article_template.render(
            title=article.title,
            link=article.link,
            feed=article.feed_name,
            published=format_date(article.published_at or article.fetched_at),
            tags=self.article_tags(article, tags),
            description=article.description,
            insight=article.insight if self._config.include_insight else None,
            translated_title=article.translated_title if include_translation else None,
            translated_desc=article.translated_desc if include_translation else None,
            translated_body=article.translated_body if include_translation else None,
            memo=memo,
        ).strip() + "\n"

    def render_digest(self, *, content: str, article_count: int, period_days: int, created: str) -> str:
        return self._digest_template.render(
            content=content,
            article_count=article_count,
            period_days=period_days,
            created=created,
            tags_prefix=self._config.tags_prefix,
        ).strip() + "\n"


__all__ = ["NoteRenderer"]
