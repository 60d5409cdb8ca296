"""Secret store - high-level API over a :class:`SecretBackend`."""

from __future__ import annotations

import logging
from typing import Any, Optional

from keyring_ctl.errors import SecretNotFoundError

from .providers import SecretBackend, create_backend

logger = logging.getLogger(__name__)


class SecretStore:
    """Unified secret management facade.

    Parameters
    ----------
    backend:
        The backend to use.  When omitted one is built from *backend_type*.
    backend_type:
        One of ``keyring``, ``memory``.
    kwargs:
        Extra keyword arguments forwarded to :func:`create_backend`
        (e.g. ``keyring_class``).
    """

    def __init__(
        self,
        backend: Optional[SecretBackend] = None,
        backend_type: str = "keyring",
        **kwargs: Optional[str],
    ) -> None:
        self._backend: SecretBackend = backend or create_backend(backend_type, **kwargs)

    @property
    def backend_name(self) -> str:
        return self._backend.name

    def get(self, service: str, user: str) -> str:
        """Retrieve a secret; raises :class:`SecretNotFoundError` if absent."""
        return self._backend.get(service, user)

    def set(self, service: str, user: str, secret: str) -> None:
        """Store or overwrite a secret."""
        self._backend.set(service, user, secret)
        # nosemgrep: python-logger-credential-disclosure (logs names, not value)
        logger.debug("Secret for %s/%s stored via %s backend", service, user, self.backend_name)

    def delete(self, service: str, user: str) -> None:
        """Delete a secret; raises :class:`SecretNotFoundError` if absent."""
        self._backend.delete(service, user)
        logger.debug("Secret for %s/%s deleted via %s backend", service, user, self.backend_name)

    def exists(self, service: str, user: str) -> bool:
        """Check whether a secret exists.  Backend failures propagate."""
        try:
            self._backend.get(service, user)
        except SecretNotFoundError:
            return False
        return True

    @classmethod
    def from_config(cls, config: Any) -> "SecretStore":
        """Create a SecretStore from a :class:`BackendConfig`."""
        return cls(backend_type=config.type, keyring_class=config.keyring_class)
