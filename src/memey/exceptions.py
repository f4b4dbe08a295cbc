"""Exception hierarchy for memey.

All exceptions inherit from :class:`MemeyError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`memey.exit_codes`.
The top-level error handler in :func:`memey.app.main` catches
``MemeyError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    MemeyError (exit 1)
    +-- NoInputError        (exit 2)
    +-- NotLoggedInError    (exit 3)
    +-- NoMatchError        (exit 4)
    +-- ApiError            (exit 5)
    |   +-- CaptionError    (exit 5)
    +-- ConnectionError_    (exit 6)
    |   +-- ResponseParseError (exit 6)
    +-- DownloadError       (exit 1)
    +-- ConfigError         (exit 1)
"""

from memey.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NO_MATCH,
    EXIT_NOT_LOGGED_IN,
    EXIT_REMOTE_FAILURE,
)


class MemeyError(Exception):
    """Base exception for all memey errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`memey.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class NoInputError(MemeyError):
    """Raised when none of the recognised inputs (phrase, search, top, bottom) was given."""

    exit_code = EXIT_INVALID_USAGE


class NotLoggedInError(MemeyError):
    """Raised when a caption is requested but no Imgflip username is stored."""

    exit_code = EXIT_NOT_LOGGED_IN


class NoMatchError(MemeyError):
    """Raised when a search query or shorthand phrase matches no template."""

    exit_code = EXIT_NO_MATCH


class ApiError(MemeyError):
    """Raised when the Imgflip API reports ``success: false``."""

    exit_code = EXIT_REMOTE_FAILURE


class CaptionError(ApiError):
    """Raised when a caption request is rejected by the Imgflip API."""


class ConnectionError_(MemeyError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ResponseParseError(ConnectionError_):
    """Raised when an API response body is not valid JSON."""


class DownloadError(MemeyError):
    """Raised when a captioned image cannot be downloaded for local viewing."""


class ConfigError(MemeyError):
    """Raised for configuration problems (invalid settings file, unreadable data files)."""

    exit_code = EXIT_GENERIC_FAILURE
