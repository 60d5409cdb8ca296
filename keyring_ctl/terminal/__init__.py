"""Terminal-aware input and output.

Reading and writing secrets, and asking yes/no questions, behave
differently depending on whether stdin/stdout are terminals or pipes.
"""

from keyring_ctl.terminal.confirm import ConfirmationRequest, ConfirmationResult, confirm
from keyring_ctl.terminal.console import Console
from keyring_ctl.terminal.modes import (
    PosixTerminalModes,
    TerminalMode,
    TerminalModes,
    TerminalModeToken,
)
from keyring_ctl.terminal.secret_io import read_secret, write_secret
from keyring_ctl.terminal.streams import StreamHandle, classify

__all__ = [
    "ConfirmationRequest",
    "ConfirmationResult",
    "Console",
    "PosixTerminalModes",
    "StreamHandle",
    "TerminalMode",
    "TerminalModeToken",
    "TerminalModes",
    "classify",
    "confirm",
    "read_secret",
    "write_secret",
]
