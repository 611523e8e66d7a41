"""qsave: named text snippets ("queries") in a local SQLite file.

Layout:
    ~/qsave.db                      # the store (override with --db or $QSAVE_DB)
    ~/.config/qsave/config.toml     # optional config (override with $QSAVE_CONFIG)

Schema:
    queries(id, name UNIQUE, created_at, body)

The editor comes from $EDITOR (vim / notepad by default); `show` copies the
body to the clipboard with pbcopy, clip, wl-copy, xclip or xsel.
"""

from qsave.config import QSaveConfig, load_config
from qsave.models import Query
from qsave.store import DuplicateQueryError, QueryNotFoundError, QueryStore, QueryStoreError, open_store

__all__ = [
    "DuplicateQueryError",
    "Query",
    "QueryNotFoundError",
    "QueryStore",
    "QueryStoreError",
    "QSaveConfig",
    "load_config",
    "open_store",
]
