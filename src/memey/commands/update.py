"""Update command -- merge the remote template catalog into the local one."""

from __future__ import annotations

import typer

from memey.exceptions import MemeyError
from memey.output import error, print_data


def update_command() -> None:
    """Updates meme list.

    Fetches ``/get_memes`` once, appends templates whose id is not known
    locally, and rewrites the local catalog sorted by id.
    """
    from memey.catalog import update_catalog
    from memey.client import ImgflipClient
    from memey.config import resolve_settings
    from memey.store import load_templates

    try:
        settings = resolve_settings()
        store = load_templates()
        with ImgflipClient(settings) as client:
            remote = client.get_memes()
        added = update_catalog(store, remote)
    except MemeyError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    if added:
        print_data("Updated!")
    else:
        print_data("Already up-to-date.")
