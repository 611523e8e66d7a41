"""SQLite-backed query store.

One table, created on first open:

    queries(id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL UNIQUE,
            created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
            body TEXT NOT NULL)

QueryStore is the public API:
    with open_store(Path.home() / "qsave.db") as store:
        store.insert("greet", "SELECT 1;")
        store.get("greet")
        store.search("SELECT")

Every statement is committed immediately; there are no multi-statement
transactions.
"""

from __future__ import annotations

import contextlib
import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from qsave.models import Query, is_blank

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger("qsave.store")

_SCHEMA = """
CREATE TABLE IF NOT EXISTS queries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    body TEXT NOT NULL
);
"""

_COLUMNS = "id, name, created_at, body"


class QueryStoreError(Exception):
    """Base class for store failures."""


class DuplicateQueryError(QueryStoreError):
    """A query with this name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"a query named {name} already exists")
        self.name = name


class QueryNotFoundError(QueryStoreError):
    """No query with this name."""

    def __init__(self, name: str) -> None:
        super().__init__(f"no query found with name {name}")
        self.name = name


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def _require_body(body: str) -> None:
    if is_blank(body):
        msg = "query body must not be empty"
        raise ValueError(msg)


class QueryStore:
    """Named-query table in a single SQLite file."""

    def __init__(self, db_path: Path | str) -> None:
        self.db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> QueryStore:
        """Open the database file, creating it and the schema if absent."""
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path))
        except (OSError, sqlite3.Error) as exc:
            msg = f"could not open query store at {self.db_path}: {exc}"
            raise QueryStoreError(msg) from exc
        try:
            conn.row_factory = sqlite3.Row
            conn.executescript(_SCHEMA)
            conn.commit()
        except sqlite3.Error as exc:
            conn.close()
            msg = f"could not create schema in {self.db_path}: {exc}"
            raise QueryStoreError(msg) from exc
        self._conn = conn
        logger.debug("opened %s (%d queries)", self.db_path, self.count())
        return self

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            msg = f"query store {self.db_path} is not open"
            raise QueryStoreError(msg)
        return self._conn

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert(self, name: str, body: str) -> Query:
        """Add a new query. Raises DuplicateQueryError if name is taken."""
        _require_body(body)
        try:
            with self.conn:
                self.conn.execute("INSERT INTO queries (name, body) VALUES (?, ?)", (name, body))
        except sqlite3.IntegrityError as exc:
            raise DuplicateQueryError(name) from exc
        logger.debug("inserted %s (%d chars)", name, len(body))
        return self.require(name)

    def update_body(self, name: str, new_body: str) -> Query:
        """Replace the body of an existing query. Raises QueryNotFoundError if absent."""
        _require_body(new_body)
        with self.conn:
            cur = self.conn.execute("UPDATE queries SET body = ? WHERE name = ?", (new_body, name))
        if cur.rowcount == 0:
            raise QueryNotFoundError(name)
        logger.debug("updated %s (%d chars)", name, len(new_body))
        return self.require(name)

    def delete(self, name: str) -> bool:
        """Remove a query by name. Returns False when nothing matched."""
        with self.conn:
            cur = self.conn.execute("DELETE FROM queries WHERE name = ?", (name,))
        logger.debug("delete %s: %d row(s)", name, cur.rowcount)
        return cur.rowcount > 0

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def get(self, name: str) -> Query | None:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM queries WHERE name = ?", (name,)
        ).fetchone()
        return Query.from_row(row) if row is not None else None

    def require(self, name: str) -> Query:
        query = self.get(name)
        if query is None:
            raise QueryNotFoundError(name)
        return query

    def search(self, substring: str) -> list[Query]:
        """Queries whose body contains substring literally, ordered by name.

        LIKE wildcards in substring are escaped; matching is ASCII
        case-insensitive (SQLite's LIKE default).
        """
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM queries WHERE body LIKE ? ESCAPE '\\' ORDER BY name",
            (f"%{_escape_like(substring)}%",),
        ).fetchall()
        return [Query.from_row(r) for r in rows]

    def list_names(self) -> list[str]:
        rows = self.conn.execute("SELECT name FROM queries ORDER BY name").fetchall()
        return [r["name"] for r in rows]

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM queries").fetchone()[0]


@contextlib.contextmanager
def open_store(db_path: Path | str) -> Iterator[QueryStore]:
    """Open a QueryStore for the duration of a with-block."""
    store = QueryStore(db_path).open()
    try:
        yield store
    finally:
        store.close()
