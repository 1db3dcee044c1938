"""
ANSI escape codes used to paint the login screen.

Every helper returns the sequence as a string so a whole frame can be
composed before it is written to the terminal in one go.
"""

import re

RESET = "\x1b[0m"
YELLOW = "\x1b[33m"
CYAN = "\x1b[36m"
WHITE = "\x1b[37m"

BRIGHT_WHITE = "\x1b[97m"

BG_BLUE = "\x1b[44m"

BOLD = "\x1b[1m"

CLEAR_SCREEN = "\x1b[2J\x1b[H"
CLEAR_LINE = "\x1b[2K"
CURSOR_HOME = "\x1b[H"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"

_ANSI_ESCAPE = re.compile(r'\x1b\[[0-9;?]*[a-zA-Z]')


def goto_xy(x: int, y: int) -> str:
    """
    Cursor position sequence (1-indexed).

    Args:
        x: Column (1-indexed)
        y: Row (1-indexed)
    """
    return f"\x1b[{int(y)};{int(x)}H"


def strip_ansi(text: str) -> str:
    """
    Remove ANSI codes from text.

    Args:
        text: Text containing ANSI codes

    Returns:
        Text with ANSI codes removed
    """
    return _ANSI_ESCAPE.sub('', text)
