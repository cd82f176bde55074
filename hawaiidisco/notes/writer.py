"""Filesystem sink for article and digest notes."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterable, Mapping

from loguru import logger

from hawaiidisco.config.digest import NotesConfig
from hawaiidisco.store.models import Article
from hawaiidisco.utils import sanitize_feed_name, slugify

from .renderer import NoteRenderer


@dataclass(slots=True)
class DigestNote:
    """The subset of a digest persisted as a note."""

    content: str
    article_count: int
    period_days: int

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "DigestNote":
        return cls(
            content=str(data["content"]),
            article_count=int(data["article_count"]),  # type: ignore[arg-type]
            period_days=int(data["period_days"]),  # type: ignore[arg-type]
        )


class NoteWriter:
    """Create Markdown notes under ``<vault_root>/<notes folder>``."""

    def __init__(self, config: NotesConfig, vault_root: Path) -> None:
        self._config = config
        self._root = (Path(vault_root).expanduser() / config.folder).resolve()
        self._renderer = NoteRenderer(config)

    @property
    def root(self) -> Path:
        return self._root

    def article_note_path(self, article: Article) -> Path:
        feed_dir = self._root / "articles" / sanitize_feed_name(article.feed_name)
        return feed_dir / f"{slugify(article.title)}.md"

    def create_article_note(
        self,
        article: Article,
        tags: Iterable[str] = (),
        memo: str | None = None,
    ) -> Path:
        """Write the note for ``article``, or return the existing one untouched."""

        path = self.article_note_path(article)
        if path.exists():
            logger.debug("Reusing existing note {}", path)
            return path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self._renderer.render_article(article, tags=tags, memo=memo), encoding="utf-8")
        logger.info("Article note created: {}", path)
        return path

    def create_digest_note(
        self,
        digest: DigestNote | Mapping[str, object],
        *,
        today: date | None = None,
    ) -> Path:
        note = digest if isinstance(digest, DigestNote) else DigestNote.from_mapping(digest)
        created = (today or date.today()).isoformat()
        directory = self._root / "digests"
        directory.mkdir(parents=True, exist_ok=True)

        stem = f"digest-{created}-{note.period_days}d"
        path = directory / f"{stem}.md"
        counter = 2
        while path.exists():
            path = directory / f"{stem}-{counter}.md"
            counter += 1

        markdown = self._renderer.render_digest(
            content=note.content,
            article_count=note.article_count,
            period_days=note.period_days,
            created=created,
        )
        path.write_text(markdown, encoding="utf-8")
        logger.info("Digest note created: {}", path)
        return path


__all__ = ["DigestNote", "NoteWriter"]
