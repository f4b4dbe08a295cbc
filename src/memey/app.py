"""Typer application and CLI entry point for memey.

This module wires together the root Typer application and registers the
built-in commands (``create``, ``update``, ``login``, ``stats``).

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. It installs signal handlers, registers commands, routes
bare invocations such as ``memey "y u no work"`` to ``create``, and finally
invokes the Typer app. Unhandled exceptions are written to a crash log
under the data directory.

See Also:
    :mod:`memey.output`: Output formatting initialised in :func:`main_callback`.
"""

from __future__ import annotations

import signal
import sys
import traceback
from datetime import datetime
from typing import Any, Optional

import typer

from memey import __version__
from memey.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="memey",
    help="Create Imgflip memes from the command line.",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog='Example: memey "y u no work"',
)

COMMAND_NAMES = ("create", "update", "login", "stats")
DEFAULT_COMMAND = "create"

# Root options that take no value and are accepted anywhere on the command line.
_ROOT_FLAGS = ("-d", "--debug", "--no-color", "-v", "--version")
_HELP_FLAGS = ("-h", "--help")


def _version_callback(value: bool) -> None:
    """Print version and exit when --version is passed."""
    if value:
        typer.echo(f"Memey Version {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version number.",
    ),
    debug: bool = typer.Option(
        False, "--debug", "-d", help="Enable debug output."
    ),
    no_color: bool = typer.Option(
        False, "--no-color", help="Disable color output."
    ),
) -> None:
    """Root callback executed before every command.

    Initialises the global :class:`~memey.output.OutputManager` from CLI
    flags and stores them in the Typer context.

    Args:
        ctx: Typer invocation context.
        version: If ``True``, print the version string and exit.
        debug: Enable ``[debug]`` tracing on stderr.
        no_color: Disable all colour and Rich markup.
    """
    from memey.output import OutputManager, set_output

    set_output(OutputManager(no_color=no_color, verbose=debug))
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug

    if debug:
        from memey.output import debug as debug_message

        debug_message("Debugging enabled...")


def register_commands() -> None:
    """Attach the built-in commands to :data:`app` (idempotent)."""
    if getattr(app, "_memey_registered", False):
        return
    from memey.commands.create import create_command
    from memey.commands.login import login_command
    from memey.commands.stats import stats_command
    from memey.commands.update import update_command

    app.command("create")(create_command)
    app.command("update")(update_command)
    app.command("login")(login_command)
    app.command("stats")(stats_command)
    app._memey_registered = True  # type: ignore[attr-defined]


def route_args(argv: list[str]) -> list[str]:
    """Hoist root flags and insert the default ``create`` command.

    ``-d``, ``--no-color`` and ``-v`` may appear anywhere on the command
    line; they are moved in front of the command name so the root callback
    sees them. Tokens after ``--`` are left alone. Unless the first
    remaining token is a known command or a help flag, ``create`` is
    inserted.

    Example::

        >>> route_args(["y u no work", "-d"])
        ['-d', 'create', 'y u no work']
    """
    root: list[str] = []
    rest: list[str] = []
    for position, token in enumerate(argv):
        if token == "--":
            rest.extend(argv[position:])
            break
        if token in _ROOT_FLAGS:
            root.append(token)
        else:
            rest.append(token)
    if rest and (rest[0] in COMMAND_NAMES or rest[0] in _HELP_FLAGS):
        return [*root, *rest]
    return [*root, DEFAULT_COMMAND, *rest]


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path."""
    from memey.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point invoked by the ``memey`` console script.

    Unhandled :class:`~memey.exceptions.MemeyError` instances cause a clean
    exit with the error's ``exit_code``. All other exceptions produce a
    crash log and a generic failure exit.

    Raises:
        SystemExit: Always raised (either by Typer or explicitly).
    """
    _setup_signal_handlers()
    args = route_args(sys.argv[1:] if argv is None else argv)
    try:
        register_commands()
        app(args=args, prog_name="memey")
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from memey.exceptions import MemeyError
        from memey.output import error

        if isinstance(exc, MemeyError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
