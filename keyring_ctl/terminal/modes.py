"""Terminal mode switching with guaranteed restoration.

Two modes are used:

* ``NO_ECHO`` - line editing stays on, typed characters are not echoed.
  Used for secret entry.
* ``RAW`` - no line editing, no echo, no signal keys.  Used for
  single-keystroke confirmation.

Mode changes always go through :meth:`TerminalModes.scoped`, which restores
the saved settings on every exit path::

    with console.modes.scoped(console.stdin, TerminalMode.RAW):
        key = console.stdin.read_byte()
"""

from __future__ import annotations

import contextlib
import enum
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from keyring_ctl.errors import StreamIOError
from keyring_ctl.terminal.streams import StreamHandle

logger = logging.getLogger(__name__)


class TerminalMode(enum.Enum):
    NO_ECHO = "no-echo"
    RAW = "raw"


@dataclass(frozen=True)
class TerminalModeToken:
    """Saved terminal settings, the only thing that can undo a mode change."""

    fd: int
    mode: TerminalMode
    saved: Any


class TerminalModes(ABC):
    """Switches a terminal into a mode and back.

    Subclasses implement :meth:`acquire` and :meth:`release`; callers use
    :meth:`scoped`.  At most one acquisition is active at a time since the
    mode belongs to the device, not to a stream object.
    """

    def __init__(self) -> None:
        self._active: Optional[TerminalModeToken] = None

    @property
    def active(self) -> Optional[TerminalModeToken]:
        return self._active

    @abstractmethod
    def acquire(self, handle: StreamHandle, mode: TerminalMode) -> TerminalModeToken:
        """Save the current settings of *handle*'s terminal and apply *mode*."""

    @abstractmethod
    def release(self, token: TerminalModeToken) -> None:
        """Restore the settings saved in *token*."""

    @contextlib.contextmanager
    def scoped(self, handle: StreamHandle, mode: TerminalMode) -> Iterator[TerminalModeToken]:
        if self._active is not None:
            raise StreamIOError(
                f"terminal already in {self._active.mode.value} mode; "
                f"cannot enter {mode.value} mode"
            )
        token = self.acquire(handle, mode)
        self._active = token
        logger.debug("Terminal fd %s entered %s mode", token.fd, mode.value)
        body_failed = False
        try:
            yield token
        except BaseException:
            body_failed = True
            raise
        finally:
            self._active = None
            try:
                self.release(token)
            except StreamIOError:
                if not body_failed:
                    raise
                # The body's exception takes precedence.
                logger.warning(
                    "Could not restore terminal fd %s from %s mode",
                    token.fd,
                    mode.value,
                    exc_info=True,
                )
            else:
                logger.debug("Terminal fd %s restored from %s mode", token.fd, mode.value)


class PosixTerminalModes(TerminalModes):
    """termios/tty implementation for POSIX terminals."""

    def acquire(self, handle: StreamHandle, mode: TerminalMode) -> TerminalModeToken:
        import termios
        import tty

        try:
            fd = handle.fileno()
            saved = termios.tcgetattr(fd)
            if mode is TerminalMode.RAW:
                tty.setraw(fd, termios.TCSANOW)
            else:
                attrs = termios.tcgetattr(fd)
                attrs[0] |= termios.ICRNL
                attrs[3] &= ~termios.ECHO
                attrs[3] |= termios.ICANON | termios.ISIG
                termios.tcsetattr(fd, termios.TCSANOW, attrs)
        except (termios.error, OSError, ValueError, AttributeError) as exc:
            raise StreamIOError(
                f"failed to put terminal into {mode.value} mode", exc
            ) from exc
        return TerminalModeToken(fd=fd, mode=mode, saved=saved)

    def release(self, token: TerminalModeToken) -> None:
        import termios

        try:
            termios.tcsetattr(token.fd, termios.TCSANOW, token.saved)
        except (termios.error, OSError) as exc:
            raise StreamIOError("failed to restore terminal state", exc) from exc
