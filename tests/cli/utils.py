"""Shared helpers for CLI tests."""

from __future__ import annotations

import sys
from contextlib import contextmanager
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from loguru import logger


@contextmanager
def logger_to_stderr(level: str = "INFO"):
    """Temporarily route Loguru output to stderr for assertion."""

    handler_id = logger.add(sys.stderr, level=level)
    try:
        yield
    finally:
        logger.remove(handler_id)


def write_config(path: Path, db_path: Path, *, base_url: str = "stub://", extra: str = "") -> Path:
    """Write a TOML config pointing at ``db_path`` with the offline client selected."""

    path.write_text(
        f'db_path = "{db_path.as_posix()}"\n'
        'logging_level = "INFO"\n\n'
        "[llm]\n"
        'model = "stub-model"\n'
        f'base_url = "{base_url}"\n'
        f"{extra}",
        encoding="utf-8",
    )
    return path


def fresh_articles(now: datetime | None = None) -> list[dict[str, Any]]:
    """Two articles fetched within the last day, relative to ``now``."""

    current = now or datetime.now(timezone.utc)
    stamp = "%Y-%m-%d %H:%M:%S"
    return [
        {
            "id": "n1",
            "feed_name": "Tech Blog",
            "title": "Fresh compiler release",
            "link": "https://example.com/compiler",
            "description": "Faster builds",
            "published_at": None,
            "fetched_at": (current - timedelta(hours=2)).strftime(stamp),
        },
        {
            "id": "n2",
            "feed_name": "Data Weekly",
            "title": "Streaming joins explained",
            "link": "https://example.com/joins",
            "published_at": None,
            "fetched_at": (current - timedelta(hours=20)).strftime(stamp),
            "insight": "Watermarks matter",
        },
    ]
