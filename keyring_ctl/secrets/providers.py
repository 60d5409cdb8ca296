"""Secret storage backends addressed by a service/user pair.

Backends implement a simple interface::

    class SecretBackend:
        def get(self, service: str, user: str) -> str: ...
        def set(self, service: str, user: str, secret: str) -> None: ...
        def delete(self, service: str, user: str) -> None: ...

``get`` and ``delete`` raise :class:`SecretNotFoundError` for a missing
entry.  ``set`` overwrites unconditionally.

Built-in backends:

* ``KeyringBackend`` - OS keyring (via the ``keyring`` package)
* ``MemoryBackend`` - process-local dictionary
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Dict, Optional, Tuple

import keyring
import keyring.backend
import keyring.core
import keyring.errors

from keyring_ctl.errors import BackendError, SecretNotFoundError

logger = logging.getLogger(__name__)


class SecretBackend(ABC):
    """Abstract base class for secret storage backends."""

    name = "abstract"

    @abstractmethod
    def get(self, service: str, user: str) -> str:
        """Return the secret, or raise :class:`SecretNotFoundError`."""

    @abstractmethod
    def set(self, service: str, user: str, secret: str) -> None:
        """Create or overwrite a secret."""

    @abstractmethod
    def delete(self, service: str, user: str) -> None:
        """Remove a secret, or raise :class:`SecretNotFoundError`."""


# ── OS keyring backend ──────────────────────────────────────────────────


class KeyringBackend(SecretBackend):
    """Uses the OS keyring (macOS Keychain, Secret Service, Windows Credential Locker).

    Parameters
    ----------
    keyring_class:
        Dotted path of a ``keyring`` backend class to use instead of the
        one ``keyring`` selects on its own.
    backend:
        An already constructed ``keyring`` backend instance; takes
        precedence over *keyring_class*.
    """

    name = "keyring"

    def __init__(
        self,
        keyring_class: Optional[str] = None,
        backend: Optional[keyring.backend.KeyringBackend] = None,
    ) -> None:
        self._keyring_class = keyring_class
        self._keyring: Optional[keyring.backend.KeyringBackend] = backend

    def _ensure_keyring(self) -> keyring.backend.KeyringBackend:
        if self._keyring is not None:
            return self._keyring
        try:
            if self._keyring_class:
                self._keyring = keyring.core.load_keyring(self._keyring_class)
            else:
                self._keyring = keyring.get_keyring()
        except (ImportError, AttributeError, ValueError, keyring.errors.KeyringError) as exc:
            raise BackendError(
                f"cannot load keyring backend {self._keyring_class or '(default)'}", exc
            ) from exc
        logger.debug("Using keyring backend %s", type(self._keyring).__name__)
        return self._keyring

    def get(self, service: str, user: str) -> str:
        kr = self._ensure_keyring()
        try:
            secret = kr.get_password(service, user)
        except keyring.errors.KeyringError as exc:
            raise BackendError(str(exc) or "read failed", exc) from exc
        if secret is None:
            raise SecretNotFoundError(service, user)
        return secret

    def set(self, service: str, user: str, secret: str) -> None:
        kr = self._ensure_keyring()
        try:
            kr.set_password(service, user, secret)
        except keyring.errors.KeyringError as exc:
            raise BackendError(str(exc) or "write failed", exc) from exc

    def delete(self, service: str, user: str) -> None:
        kr = self._ensure_keyring()
        try:
            kr.delete_password(service, user)
        except keyring.errors.PasswordDeleteError as exc:
            raise SecretNotFoundError(service, user) from exc
        except keyring.errors.KeyringError as exc:
            raise BackendError(str(exc) or "delete failed", exc) from exc


# ── In-memory backend ───────────────────────────────────────────────────


class MemoryBackend(SecretBackend):
    """Keeps secrets in a dictionary for the lifetime of the process."""

    name = "memory"

    def __init__(self, initial: Optional[Dict[Tuple[str, str], str]] = None) -> None:
        self._data: Dict[Tuple[str, str], str] = dict(initial or {})

    def get(self, service: str, user: str) -> str:
        try:
            return self._data[(service, user)]
        except KeyError:
            raise SecretNotFoundError(service, user) from None

    def set(self, service: str, user: str, secret: str) -> None:
        self._data[(service, user)] = secret

    def delete(self, service: str, user: str) -> None:
        if self._data.pop((service, user), None) is None:
            raise SecretNotFoundError(service, user)


def create_backend(backend_type: str = "keyring", **kwargs: Optional[str]) -> SecretBackend:
    """Factory for secret backends."""
    if backend_type == "keyring":
        return KeyringBackend(keyring_class=kwargs.get("keyring_class"))
    if backend_type == "memory":
        return MemoryBackend()
    raise ValueError(f"Unknown secret backend type: {backend_type!r}")
