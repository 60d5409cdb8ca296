"""The store, retrieve and remove operations.

Each operation runs once per invocation and either completes or raises a
:class:`~keyring_ctl.errors.KeyringCtlError`.  Confirmation always happens
before the keyring is modified, so a failed or declined confirmation leaves
the stored secret untouched.
"""

from __future__ import annotations

import logging

from keyring_ctl.constants import (
    DELETE_QUESTION,
    OVERWRITE_QUESTION,
    SECRET_CREATED_MSG,
    SECRET_DELETED_MSG,
    SECRET_UPDATED_MSG,
)
from keyring_ctl.display.logging_config import secret_redaction_filter
from keyring_ctl.errors import AbortedError, ConfirmationRequiredError, StreamIOError
from keyring_ctl.secrets.store import SecretStore
from keyring_ctl.terminal.confirm import ConfirmationRequest, ConfirmationResult, confirm
from keyring_ctl.terminal.console import Console
from keyring_ctl.terminal.secret_io import read_secret, write_secret

logger = logging.getLogger(__name__)


class SecretOperations:
    """Runs the user-facing verbs against a store using a console."""

    def __init__(self, store: SecretStore, console: Console) -> None:
        self._store = store
        self._console = console

    def _confirm(self, question: str, assume_yes: bool) -> None:
        request = ConfirmationRequest(question=question, auto_confirm=assume_yes)
        result = confirm(request, self._console.stdin, self._console.stdout, self._console.modes)
        if result is ConfirmationResult.UNAVAILABLE:
            raise ConfirmationRequiredError()
        if result is ConfirmationResult.DENIED:
            raise AbortedError()

    def store(self, service: str, user: str, *, assume_yes: bool = False) -> str:
        """Read a secret from stdin and save it.  Returns the status line."""
        raw = read_secret(self._console.stdin, self._console.stdout, self._console.modes)
        try:
            secret = raw.decode("utf-8")
        except UnicodeDecodeError:
            # Decoder errors quote the offending bytes.
            raise StreamIOError("secret is not valid UTF-8") from None
        secret_redaction_filter.register(secret)

        if self._store.exists(service, user):
            self._confirm(OVERWRITE_QUESTION, assume_yes)
            msg = SECRET_UPDATED_MSG
        else:
            msg = SECRET_CREATED_MSG

        self._store.set(service, user, secret)
        logger.info("%s: %s/%s", msg, service, user)
        return msg

    def retrieve(self, service: str, user: str) -> None:
        """Write the stored secret to stdout."""
        secret = self._store.get(service, user)
        secret_redaction_filter.register(secret)
        write_secret(self._console.stdout, secret.encode("utf-8"))
        logger.debug("Secret for %s/%s written to stdout", service, user)

    def remove(self, service: str, user: str, *, assume_yes: bool = False) -> str:
        """Delete a stored secret after confirmation.  Returns the status line."""
        self._store.get(service, user)
        self._confirm(DELETE_QUESTION, assume_yes)
        self._store.delete(service, user)
        logger.info("%s: %s/%s", SECRET_DELETED_MSG, service, user)
        return SECRET_DELETED_MSG
