"""Pytest helpers for path configuration and archive fixtures."""

from __future__ import annotations

import sqlite3
import sys
from pathlib import Path
from typing import Any, Callable, Iterable, Mapping

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))


SCHEMA = """
CREATE TABLE articles (
    id TEXT PRIMARY KEY,
    feed_name TEXT NOT NULL,
    title TEXT NOT NULL,
    link TEXT NOT NULL,
    description TEXT,
    published_at TEXT,
    fetched_at TEXT NOT NULL,
    is_read INTEGER NOT NULL DEFAULT 0,
    is_bookmarked INTEGER NOT NULL DEFAULT 0,
    insight TEXT,
    translated_title TEXT,
    translated_desc TEXT,
    translated_body TEXT
);
CREATE TABLE bookmarks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    article_id TEXT NOT NULL UNIQUE,
    bookmarked_at TEXT NOT NULL,
    tags TEXT,
    memo TEXT
);
CREATE TABLE digests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    created_at TEXT NOT NULL,
    period_days INTEGER NOT NULL,
    article_count INTEGER NOT NULL,
    content TEXT NOT NULL
);
"""

SAMPLE_ARTICLES: list[dict[str, Any]] = [
    {
        "id": "a1",
        "feed_name": "Tech Blog",
        "title": "Rust 2024 roadmap",
        "link": "https://example.com/rust",
        "description": "What is next for Rust",
        "published_at": "2024-01-03T09:00:00",
        "fetched_at": "2024-01-03 10:00:00",
        "is_read": 0,
        "is_bookmarked": 1,
        "insight": "Ownership keeps winning",
    },
    {
        "id": "a2",
        "feed_name": "Data Weekly",
        "title": "Growth hits 50% in Q4",
        "link": "https://example.com/growth",
        "description": "Numbers are up",
        "published_at": "2024-01-02T08:00:00",
        "fetched_at": "2024-01-02 09:00:00",
        "is_read": 1,
    },
    {
        "id": "a3",
        "feed_name": "Data Weekly",
        "title": "50 articles on pipelines",
        "link": "https://example.com/pipelines",
        "description": "A reading list",
        "published_at": None,
        "fetched_at": "2024-01-04 12:00:00",
        "is_read": 0,
    },
    {
        "id": "a4",
        "feed_name": "Tech Blog",
        "title": "snake_case naming",
        "link": "https://example.com/snake",
        "description": "Style guide",
        "published_at": "2023-12-01T00:00:00",
        "fetched_at": "2023-12-01 01:00:00",
        "is_read": 1,
        "translated_title": "스네이크 케이스 이름",
        "translated_desc": "스타일 가이드",
    },
    {
        "id": "a5",
        "feed_name": "Tech Blog",
        "title": "snakeXcase considered",
        "link": "https://example.com/snakex",
        "description": "Alternative naming",
        "published_at": "2023-11-15T00:00:00",
        "fetched_at": "2023-11-15 01:00:00",
        "is_read": 1,
    },
    {
        "id": "a6",
        "feed_name": "Essays",
        "title": "Paths like C:\\temp",
        "link": "https://example.com/paths",
        "description": "Backslash\\handling explained",
        "published_at": "2023-10-01T00:00:00",
        "fetched_at": "2023-10-01 01:00:00",
        "is_read": 1,
    },
]

SAMPLE_BOOKMARKS: list[dict[str, Any]] = [
    {"article_id": "a1", "bookmarked_at": "2024-01-03 11:00:00", "tags": "a, b ,,c", "memo": "Read later"},
    {"article_id": "a4", "bookmarked_at": "2023-12-02 11:00:00", "tags": None, "memo": None},
]

SAMPLE_DIGESTS: list[dict[str, Any]] = [
    {"created_at": "2024-01-01 10:00:00", "period_days": 7, "article_count": 3, "content": "Week one"},
    {"created_at": "2024-01-08 10:00:00", "period_days": 7, "article_count": 5, "content": "Week two"},
    {"created_at": "2024-01-05 10:00:00", "period_days": 30, "article_count": 10, "content": "Month"},
]

_ARTICLE_COLUMNS = (
    "id",
    "feed_name",
    "title",
    "link",
    "description",
    "published_at",
    "fetched_at",
    "is_read",
    "is_bookmarked",
    "insight",
    "translated_title",
    "translated_desc",
    "translated_body",
)


def write_archive(
    path: Path,
    *,
    articles: Iterable[Mapping[str, Any]] = (),
    bookmarks: Iterable[Mapping[str, Any]] = (),
    digests: Iterable[Mapping[str, Any]] = (),
) -> Path:
    """Create a SQLite archive at ``path`` using the ingestion schema."""

    conn = sqlite3.connect(path)
    try:
        conn.executescript(SCHEMA)
        for article in articles:
            row = {column: article.get(column) for column in _ARTICLE_COLUMNS}
            row["is_read"] = row["is_read"] or 0
            row["is_bookmarked"] = row["is_bookmarked"] or 0
            conn.execute(
                f"INSERT INTO articles ({', '.join(_ARTICLE_COLUMNS)}) "
                f"VALUES ({', '.join('?' for _ in _ARTICLE_COLUMNS)})",
                [row[column] for column in _ARTICLE_COLUMNS],
            )
        for bookmark in bookmarks:
            conn.execute(
                "INSERT INTO bookmarks (article_id, bookmarked_at, tags, memo) VALUES (?, ?, ?, ?)",
                (bookmark["article_id"], bookmark["bookmarked_at"], bookmark.get("tags"), bookmark.get("memo")),
            )
        for digest in digests:
            conn.execute(
                "INSERT INTO digests (created_at, period_days, article_count, content) VALUES (?, ?, ?, ?)",
                (digest["created_at"], digest["period_days"], digest["article_count"], digest["content"]),
            )
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture()
def make_archive(tmp_path: Path) -> Callable[..., Path]:
    """Factory building archives under ``tmp_path``; defaults to the sample data."""

    def _make(
        name: str = "hawaiidisco.db",
        *,
        articles: Iterable[Mapping[str, Any]] | None = None,
        bookmarks: Iterable[Mapping[str, Any]] | None = None,
        digests: Iterable[Mapping[str, Any]] | None = None,
    ) -> Path:
        return write_archive(
            tmp_path / name,
            articles=SAMPLE_ARTICLES if articles is None else articles,
            bookmarks=SAMPLE_BOOKMARKS if bookmarks is None else bookmarks,
            digests=SAMPLE_DIGESTS if digests is None else digests,
        )

    return _make


@pytest.fixture()
def archive_path(make_archive: Callable[..., Path]) -> Path:
    return make_archive()
