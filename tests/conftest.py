"""Shared fakes for the keyring-ctl tests."""

from __future__ import annotations

import io
import logging
import os
from typing import List

import pytest

from keyring_ctl.display.logging_config import secret_redaction_filter
from keyring_ctl.errors import StreamIOError
from keyring_ctl.secrets.providers import MemoryBackend
from keyring_ctl.secrets.store import SecretStore
from keyring_ctl.terminal.console import Console
from keyring_ctl.terminal.modes import TerminalMode, TerminalModes, TerminalModeToken
from keyring_ctl.terminal.streams import StreamHandle

TEST_SERVICE = "the-service"
TEST_USER = "the-user"
TEST_SECRET = "the-secret"


class CountingModes(TerminalModes):
    """Mode controller that records acquisitions instead of touching a tty."""

    def __init__(self, fail_acquire: bool = False, fail_release: bool = False) -> None:
        super().__init__()
        self.fail_acquire = fail_acquire
        self.fail_release = fail_release
        self.acquired: List[TerminalModeToken] = []
        self.released: List[TerminalModeToken] = []

    def acquire(self, handle: StreamHandle, mode: TerminalMode) -> TerminalModeToken:
        if self.fail_acquire:
            raise StreamIOError(f"failed to put terminal into {mode.value} mode")
        token = TerminalModeToken(fd=-1, mode=mode, saved=None)
        self.acquired.append(token)
        return token

    def release(self, token: TerminalModeToken) -> None:
        self.released.append(token)
        if self.fail_release:
            raise StreamIOError("failed to restore terminal state")


class BrokenPipe:
    """Stream whose reads and writes always fail."""

    def read(self, *_args: object) -> bytes:
        raise BrokenPipeError("io: read/write on closed pipe")

    def write(self, _data: bytes) -> int:
        raise BrokenPipeError("io: read/write on closed pipe")

    def flush(self) -> None:
        pass


def make_console(
    stdin: bytes = b"",
    *,
    stdin_tty: bool = False,
    stdout_tty: bool = False,
    modes: TerminalModes | None = None,
) -> Console:
    return Console(
        stdin=StreamHandle(io.BytesIO(stdin), is_terminal=stdin_tty),
        stdout=StreamHandle(io.BytesIO(), is_terminal=stdout_tty),
        modes=modes if modes is not None else CountingModes(),
    )


def output_of(console: Console) -> bytes:
    return console.stdout.stream.getvalue()


def make_store(**entries: str) -> SecretStore:
    """Memory-backed store; keyword ``svc__user="secret"`` seeds an entry."""
    initial = {}
    for key, value in entries.items():
        service, user = key.split("__", 1)
        initial[(service, user)] = value
    return SecretStore(backend=MemoryBackend(initial))


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Keep real config files and env overrides out of every test."""
    monkeypatch.delenv("KEYRING_CTL_CONFIG", raising=False)
    monkeypatch.delenv("KEYRING_CTL_LOG_LEVEL", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    root = logging.getLogger()
    root_handlers, root_level = list(root.handlers), root.level
    yield
    root.handlers[:] = root_handlers
    root.setLevel(root_level)
    secret_redaction_filter.clear()
    # setup_logging() turns propagation off; caplog relies on it.
    for name in ("keyring_ctl", "keyring"):
        lg = logging.getLogger(name)
        lg.handlers.clear()
        lg.propagate = True
        lg.setLevel(logging.NOTSET)


@pytest.fixture()
def pty_pair():
    """A real pseudo-terminal: (master fd, unbuffered slave file)."""
    pty = pytest.importorskip("pty")
    pytest.importorskip("termios")
    try:
        master, slave = pty.openpty()
    except OSError as exc:
        pytest.skip(f"no pseudo-terminal available: {exc}")
    slave_file = os.fdopen(slave, "r+b", buffering=0)
    try:
        yield master, slave_file
    finally:
        slave_file.close()
        os.close(master)
