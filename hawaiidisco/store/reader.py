"""Read-only access to an in-memory copy of the Hawaii Disco database."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, TypeVar

from loguru import logger

from .models import ArchiveCounts, Article, ArticleFilter, BookmarkRow, Digest, parse_tags
from .query import SelectQuery

T = TypeVar("T")

DEFAULT_ARTICLE_LIMIT = 200
SEARCH_COLUMNS: tuple[str, ...] = (
    "title",
    "description",
    "insight",
    "translated_title",
    "translated_desc",
)
# Blank publication times fall back to the fetch time, matching Article.effective_timestamp.
_RECENT_FIRST = "COALESCE(NULLIF(published_at, ''), fetched_at) DESC, fetched_at DESC"
_SQLITE_TIMESTAMP = "%Y-%m-%d %H:%M:%S"
_MISSING_SCHEMA = ("no such table", "no such column")


class ArchiveOpenError(RuntimeError):
    """Raised when the snapshot file exists but cannot be loaded."""


def resolve_db_path(db_path: str | Path) -> Path:
    """Expand a leading ``~`` against the current user's home directory."""
    return Path(db_path).expanduser()


class ArchiveReader:
    """Parameterized read accessors over the ``articles``, ``bookmarks`` and ``digests`` tables.

    The snapshot is copied wholesale into memory on :meth:`open`, so the file on
    disk can be rewritten by the ingestion process while the reader is in use.
    Every accessor returns an empty value while the reader is closed.
    """

    def __init__(self) -> None:
        self._conn: sqlite3.Connection | None = None
        self._db_path: Path | None = None
        self._lock = threading.RLock()

    def __enter__(self) -> "ArchiveReader":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # ------------------------------------------------------------------
    @property
    def is_open(self) -> bool:
        return self._conn is not None

    @property
    def db_path(self) -> Path | None:
        return self._db_path

    def open(self, db_path: str | Path) -> None:
        resolved = resolve_db_path(db_path)
        with self._lock:
            self._close_locked()
            if not resolved.exists():
                raise FileNotFoundError(f"Database not found: {resolved}")
            self._conn = _load_snapshot(resolved)
            self._db_path = resolved
        logger.debug("Loaded archive snapshot from {}", resolved)

    def reload(self, db_path: str | Path) -> None:
        """Replace the loaded snapshot; the reader ends closed if loading fails."""
        with self._lock:
            self._close_locked()
            self.open(db_path)

    def close(self) -> None:
        with self._lock:
            self._close_locked()

    def _close_locked(self) -> None:
        if self._conn is not None:
            self._conn.close()
            logger.debug("Closed archive snapshot {}", self._db_path)
        self._conn = None
        self._db_path = None

    # ------------------------------------------------------------------
    def get_articles(
        self,
        *,
        filter: ArticleFilter = "all",  # noqa: A002 - mirrors the filter vocabulary
        feed_name: str | None = None,
        search: str | None = None,
        limit: int = DEFAULT_ARTICLE_LIMIT,
    ) -> list[Article]:
        """List articles newest first.

        ``search`` is matched literally as a substring of the title, description,
        insight and translated fields. Matching follows SQLite's default LIKE, so
        it ignores case for ASCII letters only.
        """
        query = SelectQuery("articles")
        if filter == "bookmarked":
            query.where("is_bookmarked = 1")
        elif filter == "unread":
            query.where("is_read = 0")
        elif filter != "all":
            raise ValueError(f"Unknown article filter: {filter!r}")
        if feed_name:
            query.where("feed_name = ?", feed_name)
        if search:
            query.where_any_like(SEARCH_COLUMNS, search)
        query.order_by(_RECENT_FIRST).limit(limit)

        sql, params = query.build()
        return self._fetch_models(Article.from_row, sql, params)

    def get_article(self, article_id: str) -> Article | None:
        sql, params = SelectQuery("articles").where("id = ?", article_id).build()
        return _first(self._fetch_models(Article.from_row, sql, params))

    def get_feed_names(self) -> list[str]:
        rows = self._fetchall("SELECT DISTINCT feed_name FROM articles ORDER BY feed_name", ())
        return [row["feed_name"] for row in rows]

    def get_bookmark(self, article_id: str) -> BookmarkRow | None:
        sql, params = SelectQuery("bookmarks").where("article_id = ?", article_id).build()
        return _first(self._fetch_models(BookmarkRow.from_row, sql, params))

    def get_bookmark_tags(self, article_id: str) -> list[str]:
        bookmark = self.get_bookmark(article_id)
        if bookmark is None:
            return []
        return parse_tags(bookmark.tags)

    def get_digests(self, period_days: int | None = None) -> list[Digest]:
        query = SelectQuery("digests")
        if period_days is not None:
            query.where("period_days = ?", period_days)
        sql, params = query.order_by("created_at DESC").build()
        return self._fetch_models(Digest.from_row, sql, params)

    def get_latest_digest(self, period_days: int) -> Digest | None:
        sql, params = (
            SelectQuery("digests")
            .where("period_days = ?", period_days)
            .order_by("created_at DESC")
            .limit(1)
            .build()
        )
        return _first(self._fetch_models(Digest.from_row, sql, params))

    def get_recent_articles(self, days: int, limit: int, *, now: datetime | None = None) -> list[Article]:
        """Articles published or fetched within the last ``days`` days, newest first."""
        current = now or datetime.now(timezone.utc)
        if current.tzinfo is not None:
            current = current.astimezone(timezone.utc)
        cutoff = (current - timedelta(days=days)).strftime(_SQLITE_TIMESTAMP)
        sql, params = (
            SelectQuery("articles")
            .where("(NULLIF(published_at, '') >= ? OR fetched_at >= ?)", cutoff, cutoff)
            .order_by(_RECENT_FIRST)
            .limit(limit)
            .build()
        )
        return self._fetch_models(Article.from_row, sql, params)

    def get_article_count(self) -> int:
        return self._count("SELECT COUNT(*) AS cnt FROM articles")

    def get_unread_count(self) -> int:
        return self._count("SELECT COUNT(*) AS cnt FROM articles WHERE is_read = 0")

    def get_bookmarked_count(self) -> int:
        return self._count("SELECT COUNT(*) AS cnt FROM articles WHERE is_bookmarked = 1")

    def get_counts(self) -> ArchiveCounts:
        return ArchiveCounts(
            total=self.get_article_count(),
            unread=self.get_unread_count(),
            bookmarked=self.get_bookmarked_count(),
        )

    # ------------------------------------------------------------------
    def _count(self, sql: str) -> int:
        row = _first(self._fetchall(sql, ()))
        return int(row["cnt"]) if row is not None else 0

    def _fetch_models(
        self,
        factory: Callable[[sqlite3.Row], T],
        sql: str,
        params: list[Any] | tuple[Any, ...],
    ) -> list[T]:
        return [factory(row) for row in self._fetchall(sql, params)]

    def _fetchall(self, sql: str, params: list[Any] | tuple[Any, ...]) -> list[sqlite3.Row]:
        with self._lock:
            if self._conn is None:
                return []
            try:
                return self._conn.execute(sql, params).fetchall()
            except sqlite3.OperationalError as exc:
                if not str(exc).startswith(_MISSING_SCHEMA):
                    raise
                logger.warning("Archive {} predates this query: {}", self._db_path, exc)
                return []


def _first(items: list[T]) -> T | None:
    return items[0] if items else None


def _load_snapshot(path: Path) -> sqlite3.Connection:
    memory = sqlite3.connect(":memory:", check_same_thread=False)
    try:
        source = sqlite3.connect(f"{path.resolve().as_uri()}?mode=ro", uri=True)
        try:
            source.backup(memory)
        finally:
            source.close()
    except sqlite3.DatabaseError as exc:
        memory.close()
        raise ArchiveOpenError(f"Cannot read database {path}: {exc}") from exc
    memory.row_factory = sqlite3.Row
    return memory


__all__ = ["ArchiveOpenError", "ArchiveReader", "DEFAULT_ARTICLE_LIMIT", "SEARCH_COLUMNS", "resolve_db_path"]
