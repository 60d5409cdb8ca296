"""Stream classification and byte-level stream handles.

A :class:`StreamHandle` pairs a stream with an ``is_terminal`` flag that is
decided once, when the handle is created.  Production code builds handles
with :meth:`StreamHandle.wrap`, which asks the OS; tests build them directly
around ``io.BytesIO`` and choose the flag themselves.
"""

from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from typing import IO, Any

from keyring_ctl.errors import StreamIOError

logger = logging.getLogger(__name__)


def classify(stream: Any) -> bool:
    """Return ``True`` if *stream* is backed by a terminal device.

    Never reads from the stream.  Anything that cannot answer the question
    (no ``fileno``, closed, detached) is treated as non-interactive.
    """
    try:
        fd = stream.fileno()
    except (AttributeError, OSError, ValueError):
        return False
    try:
        return os.isatty(fd)
    except (OSError, ValueError):
        return False


@dataclass(frozen=True)
class StreamHandle:
    """A readable or writable stream plus its terminal capability flag."""

    stream: Any
    is_terminal: bool = False

    @classmethod
    def wrap(cls, stream: Any) -> "StreamHandle":
        is_terminal = classify(stream)
        logger.debug("Classified %r as %s", stream, "terminal" if is_terminal else "non-terminal")
        return cls(stream=stream, is_terminal=is_terminal)

    @property
    def binary(self) -> IO[bytes]:
        """The underlying byte stream (``sys.stdin.buffer`` for ``sys.stdin``).

        Python leaves ``sys.stdin``/``sys.stdout`` as ``None`` when the
        descriptor was already closed at startup.
        """
        if self.stream is None:
            raise OSError(errno.EBADF, "stream is closed")
        return getattr(self.stream, "buffer", self.stream)

    def fileno(self) -> int:
        return self.stream.fileno()

    def read_all(self) -> bytes:
        """Read until end of stream and return the bytes unchanged."""
        try:
            data = self.binary.read()
        except (OSError, ValueError) as exc:
            raise StreamIOError("failed to read from input", exc) from exc
        return data if data is not None else b""

    def read_byte(self) -> bytes:
        """Read at most one byte; ``b""`` means end of input.

        Terminals are read through the file descriptor so no bytes are held
        back in a Python-level buffer after the read.
        """
        try:
            fd = self.fileno()
        except (AttributeError, OSError, ValueError):
            fd = None
        try:
            if self.is_terminal and fd is not None:
                return os.read(fd, 1)
            return self.binary.read(1) or b""
        except (OSError, ValueError) as exc:
            raise StreamIOError("failed to read from input", exc) from exc

    def write(self, data: bytes) -> None:
        """Write *data* and flush it through to the device."""
        try:
            if self.binary is not self.stream:
                # Text layer may hold earlier output.
                self.stream.flush()
            self.binary.write(data)
            self.binary.flush()
        except (OSError, ValueError) as exc:
            raise StreamIOError("failed to write to output", exc) from exc

    def write_text(self, text: str) -> None:
        self.write(text.encode("utf-8"))
