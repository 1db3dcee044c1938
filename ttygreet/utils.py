"""
Display-width helpers and raw fd output.
"""

import os
import unicodedata

from .ansi import strip_ansi


def write_all(fd: int, data: bytes) -> None:
    if not data:
        return
    mv = memoryview(data)
    total = 0
    while total < len(data):
        n = os.write(fd, mv[total:])
        if n <= 0:
            raise OSError("os.write returned 0")
        total += n


def char_width(ch: str) -> int:
    """
    Terminal cells taken by a single character.

    Wide and fullwidth characters take two cells, combining marks and
    control characters take none.
    """
    o = ord(ch)
    if 0x20 <= o <= 0x7E:
        return 1
    if o < 0x20 or o == 0x7F:
        return 0
    if unicodedata.east_asian_width(ch) in ("W", "F"):
        return 2
    if unicodedata.category(ch).startswith("M"):
        return 0
    return 1


def display_width(text: str) -> int:
    """
    Get the visible width of text in terminal cells (excluding ANSI codes).

    Args:
        text: Text to measure

    Returns:
        Number of columns the text occupies
    """
    return sum(char_width(ch) for ch in strip_ansi(text))


def slice_columns(text: str, start: int, width: int) -> str:
    """
    Cut the columns ``start .. start + width`` out of plain text.

    A wide character straddling either edge is dropped rather than split,
    so the result never exceeds ``width`` columns.

    Args:
        text: Plain text (no ANSI codes)
        start: First column to keep (0-indexed)
        width: Maximum number of columns to return

    Returns:
        The visible excerpt
    """
    if width <= 0:
        return ""
    out = []
    col = 0
    end = start + width
    for ch in text:
        w = char_width(ch)
        if col >= end:
            break
        if col >= start and col + w <= end:
            out.append(ch)
        col += w
    return "".join(out)


def tail_columns(text: str, width: int) -> str:
    """Return the rightmost characters of ``text`` that fit in ``width`` columns."""
    if width <= 0:
        return ""
    out = []
    used = 0
    for ch in reversed(text):
        w = char_width(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(reversed(out))


def pad_string(text: str, width: int, justify: str = "left", fillchar: str = " ") -> str:
    """
    Pad a string to a specific width, preserving ANSI codes.

    Args:
        text: Text to pad
        width: Target width
        justify: Justification ("left", "center", "right")
        fillchar: Character to use for padding

    Returns:
        Padded string
    """
    visible_len = display_width(text)
    if visible_len >= width:
        return text

    padding_needed = width - visible_len

    if justify == "left":
        return text + (fillchar * padding_needed)
    elif justify == "right":
        return (fillchar * padding_needed) + text
    elif justify == "center":
        left_pad = padding_needed // 2
        right_pad = padding_needed - left_pad
        return (fillchar * left_pad) + text + (fillchar * right_pad)
    else:
        return text
