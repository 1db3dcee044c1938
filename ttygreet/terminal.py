"""
Raw mode terminal driver.

Example:
    >>> term = Terminal()
    >>> term.open()
    >>> with term.raw():
    ...     codes = term.read_key_sequence()
"""

from __future__ import annotations

import logging
import os
import select
import sys
import termios
import tty
from contextlib import contextmanager
from typing import Iterator, List, Optional, Tuple

from .banner import TermSize
from .errors import TerminalClosed, TerminalError
from .utils import write_all

logger = logging.getLogger(__name__)

_READ_SIZE = 64


class Terminal:
    """
    Owns the controlling terminal: saved cooked state, raw mode, reads and writes.

    The cooked state is captured once by `open()` and is what `restore()`
    puts back, however many times raw mode was entered in between.
    """

    def __init__(self, fd: Optional[int] = None, out_fd: Optional[int] = None):
        """
        Initialize the driver.

        Args:
            fd: Input file descriptor (default: stdin)
            out_fd: Output file descriptor (default: stdout)
        """
        self._fd = int(fd) if fd is not None else sys.stdin.fileno()
        self._out_fd = int(out_fd) if out_fd is not None else sys.stdout.fileno()
        self._escape_timeout = 0.03
        self._saved_attrs: Optional[List] = None
        self._raw_applied = False

    @property
    def is_raw(self) -> bool:
        return self._raw_applied

    def open(self) -> None:
        """Capture the pre-raw terminal state. Fails if stdin is not a terminal."""
        try:
            if not os.isatty(self._fd):
                raise TerminalError(f"fd {self._fd} is not a terminal")
            self._saved_attrs = termios.tcgetattr(self._fd)
        except termios.error as e:
            raise TerminalError(f"cannot read terminal state: {e}") from e
        self.size()

    def size(self) -> TermSize:
        try:
            sz = os.get_terminal_size(self._fd)
        except OSError as e:
            raise TerminalError(f"cannot read terminal size: {e}") from e
        return TermSize(lines=sz.lines, cols=sz.columns)

    def enter_raw(self) -> None:
        if self._saved_attrs is None:
            self.open()
        tty.setraw(self._fd, when=termios.TCSANOW)
        self._raw_applied = True

    def restore(self) -> None:
        if self._saved_attrs is None:
            return
        try:
            termios.tcsetattr(self._fd, termios.TCSANOW, self._saved_attrs)
        finally:
            self._raw_applied = False

    @contextmanager
    def raw(self) -> Iterator["Terminal"]:
        """Raw mode for the duration of the block, cooked state restored on every exit path."""
        self.enter_raw()
        try:
            yield self
        finally:
            self.restore()

    @contextmanager
    def cooked(self) -> Iterator["Terminal"]:
        """Temporarily hand back the cooked terminal, raw mode re-entered afterwards."""
        self.restore()
        try:
            yield self
        finally:
            self.enter_raw()

    def _read_available(self, timeout: Optional[float]) -> bytes:
        ready, _, _ = select.select([self._fd], [], [], timeout)
        if not ready:
            return b""
        data = os.read(self._fd, _READ_SIZE)
        if not data:
            raise TerminalClosed("end of input")
        return data

    def read_key_sequence(self) -> Tuple[int, ...]:
        """
        Block until input arrives and return the bytes read.

        The result may hold several keys; split it with
        `keys.split_sequences`. A read ending in ESC gets a short grace
        period for the rest of an escape sequence, since some terminals
        split it across reads.

        Raises:
            TerminalClosed: on end of input
            OSError: on read failure
        """
        data = self._read_available(None)
        if data.endswith(b"\x1b"):
            data += self._read_available(self._escape_timeout)
        return tuple(data)

    def write(self, text: str) -> None:
        write_all(self._out_fd, text.encode("utf-8", errors="replace"))
