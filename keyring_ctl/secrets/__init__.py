"""Keyring access.

Provides a small backend interface addressed by service/user pairs and a
:class:`SecretStore` facade used by the command implementations.
"""

from keyring_ctl.secrets.providers import (
    KeyringBackend,
    MemoryBackend,
    SecretBackend,
    create_backend,
)
from keyring_ctl.secrets.store import SecretStore

__all__ = [
    "KeyringBackend",
    "MemoryBackend",
    "SecretBackend",
    "SecretStore",
    "create_backend",
]
