"""Reading secrets from stdin and writing them to stdout."""

from __future__ import annotations

import logging

from keyring_ctl.constants import SECRET_PROMPT
from keyring_ctl.errors import StreamIOError
from keyring_ctl.terminal.modes import TerminalMode, TerminalModes
from keyring_ctl.terminal.streams import StreamHandle

logger = logging.getLogger(__name__)

_ERASE = (b"\x08", b"\x7f")
_LINE_END = (b"\n", b"\r")


def read_secret(in_handle: StreamHandle, out_handle: StreamHandle, modes: TerminalModes) -> bytes:
    """Read a secret from *in_handle*.

    From a pipe or file every byte up to end of stream is returned as is,
    trailing newline included.  From a terminal the user is prompted on
    *out_handle* and one line is read with echo disabled.
    """
    if not in_handle.is_terminal:
        data = in_handle.read_all()
        logger.debug("Read %d byte secret from non-terminal input", len(data))
        return data

    out_handle.write_text(SECRET_PROMPT)
    try:
        with modes.scoped(in_handle, TerminalMode.NO_ECHO):
            secret = _read_line(in_handle)
    finally:
        out_handle.write(b"\n")
    logger.debug("Read %d byte secret from terminal", len(secret))
    return secret


def _read_line(in_handle: StreamHandle) -> bytes:
    buf = bytearray()
    while True:
        ch = in_handle.read_byte()
        if not ch:
            if buf:
                return bytes(buf)
            raise StreamIOError("unexpected end of input while reading secret")
        if ch in _LINE_END:
            return bytes(buf)
        if ch in _ERASE:
            if buf:
                del buf[-1]
            continue
        buf += ch


def write_secret(out_handle: StreamHandle, secret: bytes) -> None:
    """Write *secret* to *out_handle*.

    A newline is appended only for terminals so piped output matches the
    stored bytes exactly.
    """
    if out_handle.is_terminal:
        out_handle.write(secret + b"\n")
    else:
        out_handle.write(secret)
