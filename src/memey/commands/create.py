"""Create command -- resolve a template and caption it.

Implements ``memey create``, which is also what runs when no sub-command
is named::

    memey "y u no work"                       # shorthand phrase
    memey -s "y u no"                         # list matching templates
    memey -s "y u no" -t WHY -b "JUST WHY"    # caption the first match
    memey -s "spongebob" -t "you" -b "can't" -a

Loading happens once here; the resolver, client and side-effect helpers
receive everything they need as arguments.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from memey.exceptions import (
    CaptionError,
    DownloadError,
    MemeyError,
    NoInputError,
    NotLoggedInError,
    ResponseParseError,
)
from memey.models import CaptionResult, CompiledExpression, Credentials, Settings
from memey.output import debug, error, print_data, warning
from memey.resolver import CandidateList, resolve
from memey.store import TemplateStore

NOT_LOGGED_IN = 'You need to log in first. Run "memey login" and provide your Imgflip credentials.'
INPUT_REQUIRED = "An input is required."


def has_input(
    phrase: Optional[str],
    query: Optional[str],
    top: Optional[str],
    bottom: Optional[str],
) -> bool:
    """Whether at least one of the recognised text inputs is non-empty."""
    return any(bool(value) for value in (phrase, query, top, bottom))


def create_meme(
    *,
    store: TemplateStore,
    expressions: list[CompiledExpression],
    credentials: Credentials,
    settings: Settings,
    phrase: Optional[str] = None,
    query: Optional[str] = None,
    top: Optional[str] = None,
    bottom: Optional[str] = None,
    alternating: bool = False,
    open_in_browser: bool = False,
    open_locally: bool = False,
    cache_dir: Optional[Path] = None,
) -> Optional[CaptionResult]:
    """Run the resolve-then-caption flow.

    Returns:
        The successful :class:`~memey.models.CaptionResult`, or ``None``
        when the query only listed candidate templates.

    Raises:
        NotLoggedInError: If no username is stored.
        NoInputError: If no phrase, query, top or bottom text was given.
        NoMatchError: If nothing matched.
        CaptionError: If Imgflip rejected the caption.
        ConnectionError_: On network or response parsing failures.
    """
    from memey import actions
    from memey.client import ImgflipClient, alternating_case

    debug("Parsing Input...")
    if not credentials.is_logged_in:
        raise NotLoggedInError(NOT_LOGGED_IN)
    if not has_input(phrase, query, top, bottom):
        raise NoInputError(INPUT_REQUIRED)

    debug("Expanded Input Format" if query is not None else "Shorthand Input Format")
    resolution = resolve(store, expressions, phrase=phrase, query=query, top=top, bottom=bottom)

    if isinstance(resolution, CandidateList):
        for template in resolution.templates:
            print_data(f"{template.name} - {template.url}")
        return None

    debug(f"Meme Found: {resolution.template_id}")
    top_text, bottom_text = resolution.top, resolution.bottom
    if alternating:
        top_text, bottom_text = alternating_case(top_text), alternating_case(bottom_text)

    debug("Creating Meme...")
    with ImgflipClient(settings) as client:
        result = client.caption(
            resolution.template_id,
            top_text,
            bottom_text,
            credentials,
            structured=alternating,
        )
        if not result.success:
            raise CaptionError(f"Conversion Failed: {result.error_message}")

        if not result.url:
            raise ResponseParseError("Caption response did not include an image URL")
        print_data(result.url)
        if not actions.copy_to_clipboard(result.url):
            warning("Could not copy the URL to the clipboard.")

        if open_in_browser:
            actions.open_url(result.url)

        if open_locally:
            from memey.config import get_cache_dir

            try:
                path = client.download(result.url, cache_dir or get_cache_dir())
            except DownloadError as exc:
                error(str(exc))
            else:
                actions.open_file(path)

    return result


def create_command(
    phrase: Optional[str] = typer.Argument(
        None, help='Shorthand phrase, e.g. "y u no work".'
    ),
    search: Optional[str] = typer.Option(
        None, "--search", "-s", help="Selects a meme by name."
    ),
    top: Optional[str] = typer.Option(None, "--top", "-t", help="Input top text."),
    bottom: Optional[str] = typer.Option(
        None, "--bottom", "-b", help="Input bottom text."
    ),
    alternating: bool = typer.Option(
        False, "--alternating-case", "-a", help="aLtErNaTiNg CaSe text."
    ),
    open_in_browser: bool = typer.Option(
        False, "--open", "-o", help="Open the image URL after creating it."
    ),
    open_locally: bool = typer.Option(
        False, "--open-locally", "-l", help="Download the image and open the file."
    ),
) -> None:
    """(Optional/default) creates a meme."""
    from memey.config import resolve_settings
    from memey.credentials import CredentialStore
    from memey.store import load_expressions, load_templates

    try:
        settings = resolve_settings()
        credentials = CredentialStore().load()
        store = load_templates()
        expressions = load_expressions()
        create_meme(
            store=store,
            expressions=expressions,
            credentials=credentials,
            settings=settings,
            phrase=phrase,
            query=search,
            top=top,
            bottom=bottom,
            alternating=alternating,
            open_in_browser=open_in_browser,
            open_locally=open_locally,
        )
    except MemeyError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None
