"""Command line interface for browsing the archive and generating digests."""

from __future__ import annotations

import json
import sys
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
from loguru import logger

from .config import AppConfig, load_config
from .config.inspector import check_config
from .digest import DigestGenerationError, build_digest_prompt, generate_digest
from .notes import NoteWriter
from .store import ARTICLE_FILTERS, ArchiveOpenError, ArchiveReader, Article, Digest
from .utils import format_date

_LOG_HANDLER_ID: int | None = None


@dataclass(slots=True)
class CLIState:
    """Holds shared state between Typer commands."""

    config_path: Path
    db_override: Path | None = None
    _config: AppConfig | None = None

    def ensure_config(self) -> AppConfig:
        if self._config is None:
            if self.config_path.exists():
                logger.debug("Loading configuration from {}", self.config_path)
                config = load_config(AppConfig, self.config_path)
            else:
                logger.debug("No configuration at {}; using defaults", self.config_path)
                config = AppConfig()
            if self.db_override is not None:
                config = config.model_copy(update={"db_path": str(self.db_override)})
            self._config = config
        return self._config


app = typer.Typer(help="Hawaii Disco archive reader")
config_app = typer.Typer(help="Validate configuration files")
app.add_typer(config_app, name="config")


def _default_config_path() -> Path:
    return Path.home() / ".config" / "hawaiidisco" / "config.toml"


def _normalize_format(value: str) -> str:
    return value.lower()


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):  # pragma: no cover - defensive guard
        raise RuntimeError("CLI context is not initialised")
    return state


def _exit(code: int) -> None:
    raise typer.Exit(code)


def _configure_logging(level: str) -> None:
    global _LOG_HANDLER_ID
    if _LOG_HANDLER_ID is not None:
        with suppress(ValueError):
            logger.remove(_LOG_HANDLER_ID)
    else:
        with suppress(ValueError):
            logger.remove(0)
    _LOG_HANDLER_ID = logger.add(sys.stderr, level=level.upper())


def _open_reader(config: AppConfig) -> ArchiveReader:
    reader = ArchiveReader()
    try:
        reader.open(config.db_path)
    except (FileNotFoundError, ArchiveOpenError) as exc:
        logger.error("Cannot open archive: {}", exc)
        _exit(1)
    return reader


def _resolve_vault(vault: Path | None) -> Path:
    return (vault or Path.cwd()).expanduser().resolve()


def _article_line(article: Article) -> str:
    unread = "*" if not article.is_read else " "
    bookmarked = "+" if article.is_bookmarked else " "
    date = format_date(article.published_at or article.fetched_at)
    return f"{unread}{bookmarked} {date}  [{article.feed_name}] {article.title}  ({article.id})"


def _digest_header(digest: Digest) -> str:
    return f"{format_date(digest.created_at)} · {digest.article_count} articles · {digest.period_days}d"


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    config: Path = typer.Option(
        _default_config_path(),
        help="Path to the TOML configuration file",
    ),
    db: Path | None = typer.Option(
        None,
        "--db",
        help="Override the database path from the configuration",
    ),
) -> None:
    """Initialise CLI state."""

    state = CLIState(config_path=config.expanduser().resolve(), db_override=db)
    ctx.obj = state
    if ctx.invoked_subcommand == "config":
        return

    try:
        config_obj = state.ensure_config()
    except Exception as exc:  # noqa: BLE001 - surfaced as a CLI error
        logger.error("Failed to load configuration {}: {}", state.config_path, exc)
        _exit(2)
        return
    _configure_logging(config_obj.logging_level)

    if ctx.invoked_subcommand is None:
        logger.warning("No command provided. Try 'status' or 'articles'.")
        _exit(0)


@app.command(help="Show database, counts and digest settings")
def status(ctx: typer.Context) -> None:
    config = _get_state(ctx).ensure_config()
    _report_status(config)


@app.command(help="List archived articles")
def articles(
    ctx: typer.Context,
    filter: str = typer.Option(  # noqa: A002 - match CLI option name
        "all",
        "--filter",
        case_sensitive=False,
        help="One of: all, bookmarked, unread",
        callback=_normalize_format,
    ),
    feed: str | None = typer.Option(None, "--feed", help="Only show articles from this feed"),
    search: str | None = typer.Option(None, "--search", help="Literal text to look for"),
    limit: int = typer.Option(200, min=1, help="Maximum number of articles"),
) -> None:
    config = _get_state(ctx).ensure_config()
    if filter not in ARTICLE_FILTERS:
        logger.error("Unknown filter '{}'; expected one of {}", filter, ", ".join(ARTICLE_FILTERS))
        _exit(2)

    with _open_reader(config) as reader:
        counts = reader.get_counts()
        logger.info(
            "Total: {} · Unread: {} · Bookmarked: {}",
            counts.total,
            counts.unread,
            counts.bookmarked,
        )
        found = reader.get_articles(filter=filter, feed_name=feed, search=search, limit=limit)

    if not found:
        logger.info("No articles found")
        return
    for article in found:
        typer.echo(_article_line(article))


@app.command(help="Show a single article with its bookmark data")
def show(ctx: typer.Context, article_id: str = typer.Argument(..., help="Article id")) -> None:
    config = _get_state(ctx).ensure_config()
    with _open_reader(config) as reader:
        article = reader.get_article(article_id)
        bookmark = reader.get_bookmark(article_id)

    if article is None:
        logger.error("Article not found: {}", article_id)
        _exit(1)
        return

    typer.echo(article.title)
    typer.echo(f"Feed: {article.feed_name}")
    typer.echo(f"Date: {format_date(article.published_at or article.fetched_at)}")
    typer.echo(f"Link: {article.link}")
    if article.description:
        typer.echo(f"\n{article.description}")
    if article.insight:
        typer.echo(f"\nInsight: {article.insight}")
    if bookmark is not None:
        if bookmark.tag_list:
            typer.echo(f"\nTags: {', '.join(bookmark.tag_list)}")
        if bookmark.memo:
            typer.echo(f"Memo: {bookmark.memo}")


@app.command(help="List distinct feed names")
def feeds(ctx: typer.Context) -> None:
    config = _get_state(ctx).ensure_config()
    with _open_reader(config) as reader:
        names = reader.get_feed_names()
    for name in names:
        typer.echo(name)


@app.command(help="Show cached digests stored in the archive")
def digests(
    ctx: typer.Context,
    period_days: int | None = typer.Option(None, "--period-days", min=1, help="Only digests for this window"),
    latest: bool = typer.Option(False, "--latest", help="Only the newest digest for the window"),
    save: bool = typer.Option(False, "--save", help="Save the latest digest as a note"),
    vault: Path | None = typer.Option(None, "--vault", help="Vault directory for saved notes"),
) -> None:
    config = _get_state(ctx).ensure_config()
    if save and not latest:
        logger.error("--save requires --latest")
        _exit(1)
        return

    with _open_reader(config) as reader:
        if latest:
            newest = reader.get_latest_digest(period_days or config.digest.period_days)
            found = [newest] if newest is not None else []
        else:
            found = reader.get_digests(period_days)

    if not found:
        logger.info("No cached digests found")
        return

    for digest in found:
        typer.echo(_digest_header(digest))
        typer.echo(digest.content.strip())
        typer.echo("")

    if save:
        writer = NoteWriter(config.notes, _resolve_vault(vault))
        path = writer.create_digest_note(
            {
                "content": found[0].content,
                "article_count": found[0].article_count,
                "period_days": found[0].period_days,
            }
        )
        logger.info("Digest saved: {}", path)


@app.command(help="Generate a new digest from recent articles")
def digest(
    ctx: typer.Context,
    period_days: int | None = typer.Option(None, "--period-days", min=1, help="Trailing window in days"),
    max_articles: int | None = typer.Option(None, "--max-articles", min=1, help="Maximum articles in the prompt"),
    save: bool = typer.Option(False, "--save/--no-save", help="Save the generated digest as a note"),
    vault: Path | None = typer.Option(None, "--vault", help="Vault directory for saved notes"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the prompt without calling the API"),
) -> None:
    config = _get_state(ctx).ensure_config()
    days = period_days or config.digest.period_days
    limit = max_articles or config.digest.max_articles

    with _open_reader(config) as reader:
        recent = reader.get_recent_articles(days, limit)

    if not recent:
        logger.warning("No articles found in the last {} days", days)
        return

    if dry_run:
        typer.echo(build_digest_prompt(recent, days))
        logger.info("[Dry Run] Digest prompt built from {} articles", len(recent))
        return

    logger.info("Generating digest from {} articles...", len(recent))
    try:
        content = generate_digest(recent, config, days)
    except (ValueError, DigestGenerationError) as exc:
        logger.error("Digest generation failed: {}", exc)
        _exit(1)
        return

    typer.echo(f"{len(recent)} articles · {days} days\n")
    typer.echo(content)

    if save:
        writer = NoteWriter(config.notes, _resolve_vault(vault))
        path = writer.create_digest_note(
            {"content": content, "article_count": len(recent), "period_days": days}
        )
        logger.info("Digest saved: {}", path)


@app.command(help="Create (or reuse) a note for an article")
def note(
    ctx: typer.Context,
    article_id: str = typer.Argument(..., help="Article id"),
    vault: Path | None = typer.Option(None, "--vault", help="Vault directory for notes"),
) -> None:
    config = _get_state(ctx).ensure_config()
    with _open_reader(config) as reader:
        article = reader.get_article(article_id)
        bookmark = reader.get_bookmark(article_id)
        tags = reader.get_bookmark_tags(article_id)

    if article is None:
        logger.error("Article not found: {}", article_id)
        _exit(1)
        return

    writer = NoteWriter(config.notes, _resolve_vault(vault))
    path = writer.create_article_note(article, tags, bookmark.memo if bookmark else None)
    typer.echo(str(path))


@config_app.command(help="Validate the configuration file")
def check(
    ctx: typer.Context,
    format: str = typer.Option(  # noqa: A002 - match CLI option name
        "text",
        "--format",
        case_sensitive=False,
        help="Output format for validation results",
        callback=_normalize_format,
    ),
) -> None:
    state = _get_state(ctx)
    result, exit_code, _ = check_config(state.config_path)

    if format == "json":
        print(json.dumps(result, indent=2, ensure_ascii=False, default=str))
        _exit(exit_code)

    if result["status"] == "ok":
        logger.info("Configuration OK: {}", result["config_path"])
        for warning in result["warnings"]:
            logger.warning(warning)
    else:
        error: dict[str, Any] = result["error"]
        logger.error(
            "Configuration error ({}) for {}: {}",
            error["type"],
            result["config_path"],
            error["message"],
        )
        for detail in error.get("details", []):
            location = detail["loc"] or "<root>"
            logger.error("  - {}: {} ({})", location, detail["message"], detail["type"])

    _exit(exit_code)


def _report_status(config: AppConfig) -> None:
    """Print database state and digest settings."""
    logger.info("=== Database ===")
    logger.info("Path: {}", config.db_path)
    reader = ArchiveReader()
    try:
        reader.open(config.db_path)
    except (FileNotFoundError, ArchiveOpenError) as exc:
        logger.info("Not connected: {}", exc)
    else:
        with reader:
            counts = reader.get_counts()
            logger.info("Articles: {} (unread {}, bookmarked {})", counts.total, counts.unread, counts.bookmarked)
            feed_names = reader.get_feed_names()
            logger.info("Feeds ({}): {}", len(feed_names), ", ".join(feed_names) or "none")
            latest = reader.get_latest_digest(config.digest.period_days)
            logger.info("Latest {}d digest: {}", config.digest.period_days, _digest_header(latest) if latest else "none")

    logger.info("\n=== Digest ===")
    logger.info("Model: {}", config.llm.model)
    logger.info("API key configured: {}", bool(config.llm.api_key_secret))
    logger.info("Period days: {}, Max articles: {}", config.digest.period_days, config.digest.max_articles)

    logger.info("\n=== Notes ===")
    logger.info("Folder: {}, Tags prefix: {}", config.notes.folder, config.notes.tags_prefix)
    logger.info("Include insight: {}, Include translation: {}", config.notes.include_insight, config.notes.include_translation)


def main(argv: list[str] | None = None) -> int:
    """Entry point compatible with setuptools console scripts."""

    try:
        result = app(args=argv, standalone_mode=False)
    except typer.Exit as exc:  # pragma: no cover - Typer translates exit codes
        return exc.exit_code
    if isinstance(result, int):
        return result
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
