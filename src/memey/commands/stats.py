"""Stats command -- report the size of the local catalogs."""

from __future__ import annotations

import typer

from memey.exceptions import MemeyError
from memey.output import error, print_data


def stats_command() -> None:
    """Show how many templates and shorthand expressions are known."""
    from memey.store import load_expressions, load_templates

    try:
        store = load_templates()
        expressions = load_expressions()
    except MemeyError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    print_data(f"Saved Memes: {len(store)}")
    print_data(f"Known Expressions: {len(expressions)}")
