"""Custom exception classes for keyring-ctl."""

from typing import Optional

from keyring_ctl.constants import (
    EXIT_CONFIG,
    EXIT_FAILURE,
    EXIT_IOERR,
    EXIT_USAGE,
)


class KeyringCtlError(Exception):
    """Base class for all custom exceptions in keyring-ctl.

    ``exit_code`` is the process status the CLI exits with when the error
    reaches the top level.
    """

    exit_code = EXIT_FAILURE


class ConfigurationError(KeyringCtlError):
    """Raised when loading or validating the configuration file fails."""

    exit_code = EXIT_CONFIG


class SecretNotFoundError(KeyringCtlError):
    """Raised when no secret exists for a service/user pair."""

    def __init__(self, service: str, user: str):
        self.service = service
        self.user = user
        super().__init__("secret not found in keyring")


class StreamIOError(KeyringCtlError):
    """
    Raised when reading from or writing to a stream fails, or when the
    terminal cannot be switched into or out of raw mode.
    """

    exit_code = EXIT_IOERR

    def __init__(self, message: str, orig_exc: Optional[BaseException] = None):
        self.orig_exc = orig_exc
        full_msg = message
        if orig_exc is not None:
            full_msg += f": {orig_exc}"
        super().__init__(full_msg)


class ConfirmationRequiredError(KeyringCtlError):
    """
    Raised when an overwrite or deletion needs confirmation but stdin is
    not a terminal and ``--yes`` was not given.
    """

    exit_code = EXIT_USAGE

    def __init__(self) -> None:
        super().__init__("confirmation required")


class AbortedError(KeyringCtlError):
    """Raised when the user declines an interactive confirmation."""

    def __init__(self) -> None:
        super().__init__("operation aborted")


class BackendError(KeyringCtlError):
    """Raised when the keyring backend fails for a reason other than a missing entry."""

    def __init__(self, message: str, orig_exc: Optional[BaseException] = None):
        self.orig_exc = orig_exc
        full_msg = f"keyring error: {message}"
        if orig_exc is not None:
            full_msg += f" (original error: {type(orig_exc).__name__})"
        super().__init__(full_msg)
