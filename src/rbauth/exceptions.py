"""Exception hierarchy for rbauth.

All exceptions inherit from :class:`RbAuthError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`rbauth.exit_codes`.
The provider itself only raises these; the command line in
:func:`rbauth.app.main` catches ``RbAuthError`` and exits with the
appropriate code.

Subclass hierarchy::

    RbAuthError (exit 1)
    +-- UnauthorizedError   (exit 3)
    +-- ForbiddenError      (exit 3)
    +-- InvalidActionError  (exit 2)
    +-- HttpError           (exit 5)
    +-- NetworkError        (exit 6)
    +-- ConfigError         (exit 1)
"""

from rbauth.exit_codes import (
    EXIT_AUTH_FAILURE,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_HTTP_ERROR,
    EXIT_INVALID_USAGE,
)

ERR_UNAUTHORIZED = "Unauthorized"
ERR_FORBIDDEN = "Forbidden"
ERR_INVALID_ACTION = "Invalid action"


class RbAuthError(Exception):
    """Base exception for all rbauth errors.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class UnauthorizedError(RbAuthError):
    """Raised when no credentials or token are available, or ``can()`` gets no user."""

    exit_code = EXIT_AUTH_FAILURE

    def __init__(self, message: str = ERR_UNAUTHORIZED, exit_code: int | None = None):
        super().__init__(message, exit_code)


class ForbiddenError(RbAuthError):
    """Raised when the configured policy callback denies an action."""

    exit_code = EXIT_AUTH_FAILURE

    def __init__(self, message: str = ERR_FORBIDDEN, exit_code: int | None = None):
        super().__init__(message, exit_code)


class InvalidActionError(RbAuthError):
    """Raised when ``can()`` is called without an action."""

    exit_code = EXIT_INVALID_USAGE

    def __init__(self, message: str = ERR_INVALID_ACTION, exit_code: int | None = None):
        super().__init__(message, exit_code)


class HttpError(RbAuthError):
    """Raised when the auth endpoint answers with a non-success status.

    Also raised once the retry budget is spent on a retryable status.

    Attributes:
        status: The HTTP status code of the last response.
        status_text: The reason phrase of the last response.
    """

    exit_code = EXIT_HTTP_ERROR

    def __init__(self, status: int, status_text: str = "", exit_code: int | None = None):
        message = f"HTTP {status}: {status_text}" if status_text else f"HTTP {status}"
        super().__init__(message, exit_code)
        self.status = status
        self.status_text = status_text


class NetworkError(RbAuthError):
    """Raised on transport-level failures (timeout, DNS resolution, connection refused)."""

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(RbAuthError):
    """Raised for configuration problems (missing auth URL, invalid JSON, bad credential sources)."""

    exit_code = EXIT_GENERIC_FAILURE
