"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~memey.exceptions.MemeyError` subclass, so shell
wrappers can tell a missing template from a rejected caption without
parsing stderr.

Example::

    $ memey -s "no such meme" -t hi
    $ echo $?
    4   # EXIT_NO_MATCH -- nothing matched the query
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked without any usable input."""

EXIT_NOT_LOGGED_IN = 3
"""No Imgflip username is stored; ``memey login`` must be run first."""

EXIT_NO_MATCH = 4
"""The query or shorthand phrase matched no template."""

EXIT_REMOTE_FAILURE = 5
"""The Imgflip API answered with ``success: false``."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred or the response could not be parsed."""
