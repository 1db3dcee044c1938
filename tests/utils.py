from __future__ import annotations

from typing import Iterable, List, Union

from ttygreet.banner import TermSize
from ttygreet.errors import TerminalClosed
from ttygreet.terminal import Terminal

UP = b"\x1b[A"
DOWN = b"\x1b[B"
LEFT = b"\x1b[D"
RIGHT = b"\x1b[C"
TAB = b"\t"
ENTER = b"\r"
BACKSPACE = b"\x7f"
CTRL_C = b"\x03"


class FakeTerminal(Terminal):
    """Terminal driver fed from a script of key sequences.

    Records every raw/restore transition and every frame written.
    Items in ``keys`` that are exceptions are raised from the read.
    """

    def __init__(self, keys: Iterable[Union[bytes, BaseException]] = (), size: TermSize = TermSize(24, 80)):
        super().__init__(fd=0, out_fd=1)
        self.keys: List[Union[bytes, BaseException]] = list(keys)
        self.term_size = size
        self.events: List[str] = []
        self.frames: List[str] = []
        self.opened = False
        self.raw_mode = False

    def open(self) -> None:
        self.opened = True

    def size(self) -> TermSize:
        return self.term_size

    def enter_raw(self) -> None:
        self.raw_mode = True
        self.events.append("raw")

    def restore(self) -> None:
        self.raw_mode = False
        self.events.append("restore")

    def read_key_sequence(self):
        if not self.keys:
            raise TerminalClosed("script exhausted")
        item = self.keys.pop(0)
        if isinstance(item, BaseException):
            raise item
        return tuple(item)

    def write(self, text: str) -> None:
        self.frames.append(text)


def typed(text: str) -> List[bytes]:
    return [ch.encode("utf-8") for ch in text]
