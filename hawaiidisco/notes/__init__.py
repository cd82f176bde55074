"""Note creation package."""

from __future__ import annotations

from .renderer import NoteRenderer
from .writer import DigestNote, NoteWriter

__all__ = ["DigestNote", "NoteRenderer", "NoteWriter"]
