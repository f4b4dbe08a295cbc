"""Login command -- store Imgflip credentials.

Prompts for a username and a hidden password and replaces the stored
credentials file wholesale. Nothing is sent to Imgflip; the credentials
are checked the next time a caption is requested.
"""

from __future__ import annotations

import typer

from memey.output import error, success, suggest


def login_command() -> None:
    """Login to Imgflip."""
    from memey.credentials import CredentialStore

    try:
        username = typer.prompt("username")
        password = typer.prompt(
            "password", default="", hide_input=True, show_default=False
        )
    except (KeyboardInterrupt, typer.Abort):
        error("Login cancelled.")
        raise typer.Exit(code=1) from None

    username = username.strip()
    if not username:
        error("A username is required.")
        raise typer.Exit(code=2)

    store = CredentialStore()
    try:
        store.save(username, password)
    except OSError as exc:
        error(f"Cannot save credentials to {store.path}: {exc}")
        raise typer.Exit(code=1) from None

    success(f'Logged in as "{username}".')
    suggest('Try it: memey "y u no work"')
