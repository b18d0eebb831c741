"""Numeric process exit codes used by the ``rbauth`` command line.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~rbauth.exceptions.RbAuthError` subclass.  Shell
wrappers can inspect the exit code to tell a rejected login from an
unreachable server without parsing stderr.

Example::

    $ rbauth check
    $ echo $?
    3   # EXIT_AUTH_FAILURE -- no cached session or token rejected
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an invalid action."""

EXIT_AUTH_FAILURE = 3
"""Authentication or authorisation failed."""

EXIT_HTTP_ERROR = 5
"""The auth endpoint answered with a non-success HTTP status."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""
