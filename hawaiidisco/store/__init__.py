"""Archive access package."""

from __future__ import annotations

from .models import ARTICLE_FILTERS, ArchiveCounts, Article, ArticleFilter, BookmarkRow, Digest, parse_tags
from .query import SelectQuery, escape_like
from .reader import ArchiveOpenError, ArchiveReader, resolve_db_path

__all__ = [
    "ARTICLE_FILTERS",
    "ArchiveCounts",
    "ArchiveOpenError",
    "ArchiveReader",
    "Article",
    "ArticleFilter",
    "BookmarkRow",
    "Digest",
    "SelectQuery",
    "escape_like",
    "parse_tags",
    "resolve_db_path",
]
