"""
keyring-ctl - store, read and delete secrets in the operating system keyring.

Secrets are read from a pipe byte for byte, or typed at a terminal without
echo. Overwrites and deletions ask for a single-keystroke confirmation and
refuse to proceed when no terminal is available unless ``--yes`` is given.
"""

from keyring_ctl.constants import APP_NAME, APP_VERSION

__version__ = APP_VERSION
__app_name__ = APP_NAME

__all__ = [
    "APP_NAME",
    "APP_VERSION",
    "__version__",
    "__app_name__",
]
