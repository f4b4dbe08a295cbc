"""Side effects performed after a successful caption.

Copies the image URL to the system clipboard and opens it in the browser
or, for a downloaded copy, in the default image viewer.
"""

from __future__ import annotations

import webbrowser
from pathlib import Path

import pyperclip
import typer


def copy_to_clipboard(text: str) -> bool:
    """Copy *text* to the clipboard, returning ``False`` when no clipboard is available."""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException:
        return False
    return True


def open_url(url: str) -> None:
    webbrowser.open(url)


def open_file(path: Path) -> None:
    """Open *path* with the platform's default application."""
    typer.launch(str(path))
