"""The streams and terminal controller used by a single invocation."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field

from keyring_ctl.terminal.modes import PosixTerminalModes, TerminalModes
from keyring_ctl.terminal.streams import StreamHandle


@dataclass
class Console:
    """stdin/stdout handles classified once, plus the mode controller."""

    stdin: StreamHandle
    stdout: StreamHandle
    modes: TerminalModes = field(default_factory=PosixTerminalModes)

    @classmethod
    def from_sys(cls) -> "Console":
        return cls(
            stdin=StreamHandle.wrap(sys.stdin),
            stdout=StreamHandle.wrap(sys.stdout),
        )
