"""Copy text to the system clipboard via the platform's clipboard command."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys

logger = logging.getLogger("qsave.clipboard")

# Linux/BSD providers in order of preference (first one on PATH wins)
_X11_COMMANDS = (
    ["xclip", "-selection", "clipboard"],
    ["xsel", "--clipboard", "--input"],
)


class ClipboardError(Exception):
    """No clipboard provider, or the provider failed."""


def clipboard_command() -> list[str] | None:
    """Return argv for the clipboard writer on this host, or None."""
    if sys.platform == "darwin":
        return ["pbcopy"]
    if sys.platform == "win32":
        return ["clip"]
    if os.environ.get("WAYLAND_DISPLAY") and shutil.which("wl-copy"):
        return ["wl-copy"]
    for cmd in _X11_COMMANDS:
        if shutil.which(cmd[0]):
            return list(cmd)
    return None


def copy(text: str) -> None:
    """Place text on the clipboard. Raises ClipboardError on failure."""
    cmd = clipboard_command()
    if cmd is None:
        msg = "no clipboard provider found (install wl-clipboard, xclip or xsel)"
        raise ClipboardError(msg)

    # clip reads UTF-16 (with BOM); everything else takes UTF-8
    encoding = "utf-16" if cmd[0] == "clip" else "utf-8"
    logger.debug("copying %d chars with %s", len(text), cmd[0])
    # xclip, xsel and wl-copy fork a child that keeps serving the selection;
    # capturing its output would block until that child exits
    try:
        result = subprocess.run(
            cmd,
            input=text.encode(encoding),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        msg = f"could not run {cmd[0]}: {exc}"
        raise ClipboardError(msg) from exc

    if result.returncode != 0:
        msg = f"{cmd[0]} exited with status {result.returncode}"
        raise ClipboardError(msg)
