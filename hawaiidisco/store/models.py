"""Row models for the article archive."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Any, Literal, Mapping

ArticleFilter = Literal["all", "bookmarked", "unread"]

ARTICLE_FILTERS: tuple[str, ...] = ("all", "bookmarked", "unread")


def _get(row: sqlite3.Row | Mapping[str, Any], key: str) -> Any:
    # Older archives predate some optional columns.
    keys = row.keys()
    return row[key] if key in keys else None


def parse_tags(raw: str | None) -> list[str]:
    """Split a comma separated tag field, dropping blanks and keeping order."""

    if not raw:
        return []
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


@dataclass(slots=True)
class Article:
    """A single archived article."""

    id: str
    feed_name: str
    title: str
    link: str
    fetched_at: str
    description: str | None = None
    published_at: str | None = None
    is_read: bool = False
    is_bookmarked: bool = False
    insight: str | None = None
    translated_title: str | None = None
    translated_desc: str | None = None
    translated_body: str | None = None

    @property
    def effective_timestamp(self) -> str:
        """Publication time when known, otherwise the ingestion time."""
        return self.published_at or self.fetched_at

    @classmethod
    def from_row(cls, row: sqlite3.Row | Mapping[str, Any]) -> "Article":
        return cls(
            id=str(row["id"]),
            feed_name=row["feed_name"] or "",
            title=row["title"] or "",
            link=row["link"] or "",
            fetched_at=row["fetched_at"],
            description=_get(row, "description"),
            published_at=_get(row, "published_at"),
            is_read=bool(_get(row, "is_read")),
            is_bookmarked=bool(_get(row, "is_bookmarked")),
            insight=_get(row, "insight"),
            translated_title=_get(row, "translated_title"),
            translated_desc=_get(row, "translated_desc"),
            translated_body=_get(row, "translated_body"),
        )


@dataclass(slots=True)
class BookmarkRow:
    """Bookmark metadata attached to an article."""

    id: int
    article_id: str
    bookmarked_at: str | None = None
    tags: str | None = None
    memo: str | None = None

    @property
    def tag_list(self) -> list[str]:
        return parse_tags(self.tags)

    @classmethod
    def from_row(cls, row: sqlite3.Row | Mapping[str, Any]) -> "BookmarkRow":
        return cls(
            id=int(row["id"]),
            article_id=str(row["article_id"]),
            bookmarked_at=_get(row, "bookmarked_at"),
            tags=_get(row, "tags"),
            memo=_get(row, "memo"),
        )


@dataclass(slots=True)
class Digest:
    """A previously generated digest stored in the archive."""

    id: int
    created_at: str
    period_days: int
    article_count: int
    content: str

    @classmethod
    def from_row(cls, row: sqlite3.Row | Mapping[str, Any]) -> "Digest":
        return cls(
            id=int(row["id"]),
            created_at=row["created_at"],
            period_days=int(row["period_days"]),
            article_count=int(row["article_count"] or 0),
            content=row["content"] or "",
        )


@dataclass(frozen=True, slots=True)
class ArchiveCounts:
    """Aggregate counters shown above article listings."""

    total: int = 0
    unread: int = 0
    bookmarked: int = 0


__all__ = [
    "ARTICLE_FILTERS",
    "ArchiveCounts",
    "Article",
    "ArticleFilter",
    "BookmarkRow",
    "Digest",
    "parse_tags",
]
