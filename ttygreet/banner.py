"""
ASCII-art banner with best-effort centering.

The art is parsed once; `Banner.layout()` recomputes the placement for the
current screen on every redraw. When the art is bigger than the screen in
either direction the visible excerpt is taken from the middle of the art.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, NamedTuple, Tuple

from .utils import display_width, slice_columns


class TermSize(NamedTuple):
    lines: int
    cols: int


@dataclass(frozen=True)
class BannerLine:
    row: int
    col: int
    text: str


@dataclass(frozen=True)
class Banner:
    lines: Tuple[str, ...]
    cols: int

    @classmethod
    def parse(cls, art: str) -> "Banner":
        if not art:
            return cls(lines=(), cols=0)
        lines = tuple(line.rstrip("\r") for line in art.split("\n"))
        return cls(lines=lines, cols=max(display_width(line) for line in lines))

    @property
    def rows(self) -> int:
        return len(self.lines)

    def layout(self, size: TermSize) -> List[BannerLine]:
        """
        Place the banner centered in an area of ``size``.

        Args:
            size: Area available to the banner (lines, cols)

        Returns:
            Lines to draw with 0-indexed row/col offsets inside the area.
            Never more than ``size.lines`` lines, none wider than ``size.cols``.
        """
        lines_skip = max((self.rows - size.lines) // 2, 0)
        cols_skip = max((self.cols - size.cols) // 2, 0)

        start_line = max((size.lines - self.rows) // 2, 0)
        start_col = max((size.cols - self.cols) // 2, 0)

        out: List[BannerLine] = []
        for i in range(min(size.lines, self.rows - lines_skip)):
            text = slice_columns(self.lines[i + lines_skip], cols_skip, size.cols)
            out.append(BannerLine(row=start_line + i, col=start_col, text=text))
        return out
