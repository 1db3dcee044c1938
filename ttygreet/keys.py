"""
Decoding of raw key sequences into logical key events.

All knowledge of terminal escape sequences lives here; the rest of the
package only sees `KeyEvent` values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Sequence, Tuple


class Key(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    TAB = "tab"
    ENTER = "enter"
    BACKSPACE = "backspace"
    INTERRUPT = "interrupt"
    CHAR = "char"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    text: str = ""
    codes: Tuple[int, ...] = ()


ESC = 0x1B

_CONTROL_KEYS = {
    (0x09,): Key.TAB,
    (0x0D,): Key.ENTER,
    (0x0A,): Key.ENTER,
    (0x7F,): Key.BACKSPACE,
    (0x08,): Key.BACKSPACE,
    (0x03,): Key.INTERRUPT,
}

_ARROWS = {
    "A": Key.UP,
    "B": Key.DOWN,
    "C": Key.RIGHT,
    "D": Key.LEFT,
}

# CSI with optional modifiers (ESC [ 1 ; 2 B) or SS3 (ESC O B)
_ARROW_SEQ = re.compile(r"^\x1b(?:\[[0-9;]*|O)([ABCD])$")


def is_printable(ch: str) -> bool:
    """
    Check if character is printable.

    Args:
        ch: Character to check

    Returns:
        True if printable
    """
    if len(ch) != 1:
        return False
    code = ord(ch)
    return 32 <= code <= 126 or code >= 160


def decode(codes: Sequence[int]) -> KeyEvent:
    """
    Map one key sequence read from the terminal to a `KeyEvent`.

    Args:
        codes: Byte values of the sequence, as read in one go

    Returns:
        The decoded event. Sequences that are neither a known key nor
        printable text come back as ``Key.UNKNOWN`` with the raw codes.
    """
    seq = tuple(int(c) & 0xFF for c in codes)
    if not seq:
        return KeyEvent(Key.UNKNOWN, codes=seq)

    key = _CONTROL_KEYS.get(seq)
    if key is not None:
        return KeyEvent(key, codes=seq)

    if seq[0] == ESC:
        m = _ARROW_SEQ.match(bytes(seq).decode("latin-1"))
        if m:
            return KeyEvent(_ARROWS[m.group(1)], codes=seq)
        return KeyEvent(Key.UNKNOWN, codes=seq)

    try:
        text = bytes(seq).decode("utf-8")
    except UnicodeDecodeError:
        return KeyEvent(Key.UNKNOWN, codes=seq)

    if text and all(is_printable(ch) for ch in text):
        return KeyEvent(Key.CHAR, text=text, codes=seq)
    return KeyEvent(Key.UNKNOWN, codes=seq)


def _utf8_length(lead: int) -> int:
    if 0xC0 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF7:
        return 4
    return 1


def split_sequences(codes: Sequence[int]) -> Iterator[Tuple[int, ...]]:
    """
    Split one read into the key sequences it holds.

    A single read can carry several keys (fast typing, a held arrow key,
    pasted text, input queued while the terminal was cooked). Each CSI or
    SS3 sequence, control byte and UTF-8 character is yielded on its own.

    Args:
        codes: Byte values as returned by the terminal driver

    Yields:
        Byte tuples suitable for `decode`
    """
    seq = tuple(int(c) & 0xFF for c in codes)
    i, n = 0, len(seq)
    while i < n:
        b = seq[i]
        if b == ESC:
            end = i + 1
            if end < n and seq[end] == 0x5B:  # CSI: parameters then one final byte
                end += 1
                while end < n and 0x20 <= seq[end] <= 0x3F:
                    end += 1
                if end < n and 0x40 <= seq[end] <= 0x7E:
                    end += 1
            elif end < n and seq[end] == 0x4F:  # SS3
                end = min(end + 2, n)
            elif end < n and seq[end] != ESC:  # Alt+key
                end += 1
        elif b < 0x20 or b == 0x7F:
            end = i + 1
        else:
            end = min(i + _utf8_length(b), n)
        yield seq[i:end]
        i = end


def decode_all(codes: Sequence[int]) -> List[KeyEvent]:
    """Decode every key sequence contained in one read, in order."""
    return [decode(part) for part in split_sequences(codes)]
