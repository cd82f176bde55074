"""Small text helpers shared by the digest pipeline and the note writer."""

from __future__ import annotations

import re

# Word characters, Hangul (compatibility jamo through syllables) and hyphens.
_UNSAFE = re.compile(r"[^\w\u3131-\ud79d-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def slugify(text: str, max_len: int = 50) -> str:
    slug = _WHITESPACE.sub("-", text.strip())
    slug = _UNSAFE.sub("", slug)
    return slug[:max_len] or "untitled"


def sanitize_feed_name(name: str) -> str:
    return _UNSAFE.sub("", _WHITESPACE.sub("-", name.strip())) or "unknown"


def escape_yaml(text: str) -> str:
    """Escape backslashes and double quotes for a double-quoted YAML scalar."""
    return text.replace("\\", "\\\\").replace('"', '\\"')


def format_date(value: str | None) -> str:
    """Calendar-date portion of an ISO-like timestamp."""
    if not value:
        return "unknown"
    return value[:10]


__all__ = ["escape_yaml", "format_date", "sanitize_feed_name", "slugify"]
