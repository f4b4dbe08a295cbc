"""memey -- caption meme templates from the command line.

Matches a short phrase against a library of Imgflip meme templates and a
table of shorthand expressions, captions the chosen template through the
Imgflip API, and copies the resulting image URL to the clipboard.

Typical workflow::

    memey login                      # store Imgflip credentials
    memey "y u no work"              # shorthand phrase
    memey -s "y u no" -t WHY -b WORK # explicit template search
    memey update                     # refresh the template catalog

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the package.
    config: XDG-aware paths, settings and atomic writes.
    store: Template store and expression table loading.
    resolver: Query and shorthand template resolution.
    client: Imgflip HTTP client.
    catalog: Template catalog updater.
    credentials: Persisted Imgflip credentials.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "1.3.0"
