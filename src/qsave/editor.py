"""Run the user's text editor on a temporary file and read the result back.

Editor resolution: $EDITOR > config `editor` > platform default
(notepad on Windows, vim elsewhere). The editor string is split on
whitespace; "--wait" / "-w" are dropped since we already block on the
child process.
"""

from __future__ import annotations

import contextlib
import logging
import os
import subprocess
import sys
import tempfile
from pathlib import Path

logger = logging.getLogger("qsave.editor")

_WAIT_FLAGS = frozenset({"--wait", "-w"})


class EditorError(Exception):
    """The editor could not be run or its file could not be read back."""


def default_editor() -> str:
    return "notepad" if sys.platform == "win32" else "vim"


def resolve_editor(config_editor: str | None = None) -> str:
    env_editor = os.environ.get("EDITOR", "").strip()
    return env_editor or (config_editor or "").strip() or default_editor()


def editor_command(editor: str, path: Path | str) -> list[str]:
    """Build argv for editing path: program, its flags (minus wait flags), path."""
    parts = editor.split()
    if not parts:
        msg = "editor command is empty"
        raise EditorError(msg)
    args = [a for a in parts[1:] if a not in _WAIT_FLAGS]
    return [parts[0], *args, str(path)]


def edit(initial_content: str = "", editor: str | None = None) -> str:
    """Open initial_content in the editor, block until it exits, return the new text.

    The temp file is removed on every path. KeyboardInterrupt propagates
    untouched so the caller never persists a half-finished edit.
    """
    try:
        fd, name = tempfile.mkstemp(prefix="qsave-", suffix=".txt")
    except OSError as exc:
        msg = f"could not create temp file: {exc}"
        raise EditorError(msg) from exc

    path = Path(name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            if initial_content:
                f.write(initial_content)

        cmd = editor_command(resolve_editor(editor), path)
        logger.debug("running editor: %s", " ".join(cmd))
        subprocess.run(cmd, check=True)

        return path.read_text(encoding="utf-8")
    except subprocess.CalledProcessError as exc:
        msg = f"editor {exc.cmd[0]!r} exited with status {exc.returncode}"
        raise EditorError(msg) from exc
    except UnicodeDecodeError as exc:
        msg = f"edited text is not valid UTF-8: {exc}"
        raise EditorError(msg) from exc
    except OSError as exc:
        raise EditorError(str(exc)) from exc
    finally:
        with contextlib.suppress(FileNotFoundError):
            path.unlink()
