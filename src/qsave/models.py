"""Data model for the query store."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Query:
    """A named block of saved text (one row of the queries table)."""

    id: int
    name: str
    body: str
    created_at: str = ""         # SQLite CURRENT_TIMESTAMP, UTC

    @classmethod
    def from_row(cls, row: Any) -> Query:
        return cls(
            id=int(row["id"]),
            name=row["name"],
            body=row["body"],
            created_at=row["created_at"] or "",
        )

    def render(self) -> str:
        """Display block used by show and search."""
        return f"--- NAME: {self.name} ---\n{self.body}\n"


def is_blank(body: str | None) -> bool:
    """True when a body is empty or whitespace only (never persisted)."""
    return not body or not body.strip()
