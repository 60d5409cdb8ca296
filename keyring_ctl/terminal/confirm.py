"""Yes/no confirmation for overwrites and deletions.

The outcome is three-valued: the user can agree, the user can decline, or
there may be nobody to ask because stdin is not a terminal.  Callers must
not treat the last two the same way.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from keyring_ctl.constants import CONFIRM_SUFFIX
from keyring_ctl.errors import StreamIOError
from keyring_ctl.terminal.modes import TerminalMode, TerminalModes
from keyring_ctl.terminal.streams import StreamHandle

logger = logging.getLogger(__name__)

_AFFIRMATIVE = (b"y", b"Y")


class ConfirmationResult(enum.Enum):
    """Result of a confirmation prompt."""

    PROCEED = "proceed"
    DENIED = "denied"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ConfirmationRequest:
    question: str
    auto_confirm: bool = False


def confirm(
    request: ConfirmationRequest,
    in_handle: StreamHandle,
    out_handle: StreamHandle,
    modes: TerminalModes,
) -> ConfirmationResult:
    """Ask *request.question* and wait for a single keystroke.

    ``auto_confirm`` proceeds without touching either stream.  A non-terminal
    stdin yields ``UNAVAILABLE``.  Otherwise only ``y``/``Y`` proceeds; any
    other key, end of input, or a failed read is ``DENIED``.  Failing to
    enter raw mode raises :class:`StreamIOError`.
    """
    if request.auto_confirm:
        logger.debug("Auto-confirmed: %s", request.question)
        return ConfirmationResult.PROCEED

    if not in_handle.is_terminal:
        logger.debug("Cannot confirm '%s': stdin is not a terminal", request.question)
        return ConfirmationResult.UNAVAILABLE

    out_handle.write_text(f"{request.question}{CONFIRM_SUFFIX}")
    try:
        with modes.scoped(in_handle, TerminalMode.RAW):
            key = _read_char(in_handle)
    finally:
        out_handle.write(b"\n")

    result = ConfirmationResult.PROCEED if key in _AFFIRMATIVE else ConfirmationResult.DENIED
    logger.debug("Confirmation for '%s': %s", request.question, result.value)
    return result


def _read_char(in_handle: StreamHandle) -> bytes:
    """Read one UTF-8 encoded character; ``b""`` on end of input or read error."""
    try:
        lead = in_handle.read_byte()
        if not lead:
            return b""
        char = bytearray(lead)
        for _ in range(_continuation_count(lead[0])):
            nxt = in_handle.read_byte()
            if not nxt:
                break
            char += nxt
        return bytes(char)
    except StreamIOError:
        logger.debug("Read failed during confirmation; treating as denial", exc_info=True)
        return b""


def _continuation_count(lead: int) -> int:
    if lead >= 0xF0:
        return 3
    if lead >= 0xE0:
        return 2
    if lead >= 0xC0:
        return 1
    return 0
