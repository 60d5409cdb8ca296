"""Configuration loading for keyring-ctl."""

from keyring_ctl.config.loader import load_config
from keyring_ctl.config.schema import BackendConfig, CtlConfig

__all__ = [
    "BackendConfig",
    "CtlConfig",
    "load_config",
]
