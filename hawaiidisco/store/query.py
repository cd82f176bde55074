"""Incremental SELECT builder that keeps caller values out of SQL text."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

LIKE_ESCAPE = "\\"


def escape_like(text: str) -> str:
    """Escape ``LIKE`` metacharacters so ``text`` matches literally.

    The escape character is replaced first so the escapes added for ``%`` and
    ``_`` are not doubled.
    """

    return (
        text.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains_pattern(text: str) -> str:
    """Return a ``LIKE`` pattern matching ``text`` as a substring."""
    return f"%{escape_like(text)}%"


@dataclass(slots=True)
class SelectQuery:
    """Ordered collection of ``(fragment, params)`` predicates.

    Fragments are fixed strings owned by the caller's code; every value goes
    through ``params`` and is bound by the driver.
    """

    table: str
    columns: str = "*"
    _predicates: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    _order_by: str | None = None
    _limit: int | None = None

    def where(self, fragment: str, *params: Any) -> "SelectQuery":
        expected = fragment.count("?")
        if expected != len(params):
            raise ValueError(f"Predicate expects {expected} parameters, got {len(params)}: {fragment}")
        self._predicates.append((fragment, params))
        return self

    def where_any_like(self, columns: tuple[str, ...], text: str) -> "SelectQuery":
        """Match ``text`` as a literal substring of any of ``columns``."""
        pattern = contains_pattern(text)
        fragment = " OR ".join(f"{column} LIKE ? ESCAPE '{LIKE_ESCAPE}'" for column in columns)
        return self.where(f"({fragment})", *([pattern] * len(columns)))

    def order_by(self, clause: str) -> "SelectQuery":
        self._order_by = clause
        return self

    def limit(self, count: int) -> "SelectQuery":
        self._limit = int(count)
        return self

    def build(self) -> tuple[str, list[Any]]:
        parts = [f"SELECT {self.columns} FROM {self.table}"]
        params: list[Any] = []
        if self._predicates:
            parts.append("WHERE " + " AND ".join(fragment for fragment, _ in self._predicates))
            for _, values in self._predicates:
                params.extend(values)
        if self._order_by:
            parts.append(f"ORDER BY {self._order_by}")
        if self._limit is not None:
            parts.append("LIMIT ?")
            params.append(self._limit)
        return " ".join(parts), params


__all__ = ["LIKE_ESCAPE", "SelectQuery", "contains_pattern", "escape_like"]
