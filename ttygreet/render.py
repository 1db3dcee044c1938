"""
Frame composition for the login screen.

Layout, top to bottom: the banner centered in the space left above the
form, one blank row, one row per field, one blank row, the status message.
"""

from __future__ import annotations

from typing import List

from .ansi import (
    CLEAR_LINE,
    CLEAR_SCREEN,
    CURSOR_HOME,
    HIDE_CURSOR,
    RESET,
    SHOW_CURSOR,
    goto_xy,
)
from .banner import Banner, TermSize
from .config import ThemeColors
from .forms import FormState
from .utils import display_width, pad_string, slice_columns


def form_rows(form: FormState) -> int:
    return len(form) + 3


class Renderer:
    def __init__(self, colors: ThemeColors, field_width: int = 24):
        self.colors = colors
        self.field_width = max(1, int(field_width))

    def frame(
        self,
        size: TermSize,
        banner: Banner,
        form: FormState,
        message: str,
        full: bool,
    ) -> str:
        """
        Build one complete frame.

        Args:
            size: Terminal size
            banner: Banner to center above the form
            form: Fields and focus
            message: Status line text
            full: Clear the whole screen first instead of only the rows written

        Returns:
            The escape-coded frame, starting from the top-left corner
        """
        out: List[str] = [CLEAR_SCREEN if full else CURSOR_HOME, HIDE_CURSOR]

        block = form_rows(form)
        art_area = TermSize(lines=max(size.lines - block, 0), cols=size.cols)
        for line in banner.layout(art_area):
            out.append(goto_xy(line.col + 1, line.row + 1))
            out.append(f"{self.colors.banner}{line.text}{RESET}")

        form_top = art_area.lines + 1
        label_w = max(display_width(f.label) for f in form.fields)
        value_w = max(min(self.field_width, size.cols - label_w - 2), 0)
        left = max((size.cols - (label_w + 2 + value_w)) // 2, 0) + 1
        value_col = left + label_w + 2

        cursor = None
        for i, f in enumerate(form.fields):
            row = form_top + 1 + i
            if row > size.lines:
                break
            focused = i == form.focus
            label = slice_columns(pad_string(f.label, label_w, "right") + ": ", 0, size.cols)
            view_w = value_w
            # the focused text input keeps its last column free for the cursor
            if focused and value_w > 1 and f.cursor_offset(value_w) is not None:
                view_w = value_w - 1
            value = pad_string(f.render(view_w), value_w, "left")
            input_color = self.colors.input_focused if focused else self.colors.input
            if not full:
                out.append(goto_xy(1, row) + CLEAR_LINE)
            out.append(goto_xy(left, row))
            out.append(f"{self.colors.label}{label}{RESET}")
            if value_w > 0:
                out.append(f"{input_color}{value}{RESET}")
            if focused:
                offset = f.cursor_offset(view_w)
                if offset is not None:
                    cursor = (value_col + min(offset, max(value_w - 1, 0)), row)

        status_row = form_top + len(form) + 2
        if 0 < status_row <= size.lines:
            text = slice_columns(" ".join(message.split()), 0, size.cols)
            col = max((size.cols - display_width(text)) // 2, 0) + 1
            if not full:
                out.append(goto_xy(1, status_row) + CLEAR_LINE)
            out.append(goto_xy(col, status_row))
            out.append(f"{self.colors.status}{text}{RESET}")

        if cursor is not None:
            out.append(goto_xy(*cursor))
            out.append(SHOW_CURSOR)
        return "".join(out)
