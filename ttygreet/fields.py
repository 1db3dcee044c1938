"""
Form fields: a session picker and a single-line text input.
"""

from __future__ import annotations

from typing import List, Sequence

from .keys import Key, KeyEvent, is_printable
from .utils import char_width, slice_columns, tail_columns


class Field:
    """
    One selectable or editable element of the login form.

    Subclasses implement the four operations the form drives: ``render``,
    ``handle_key``, ``get_text`` and ``reset``.
    """

    def __init__(self, name: str, label: str = ""):
        self.name = name
        self.label = label or name

    def render(self, width: int) -> str:
        raise NotImplementedError

    def handle_key(self, event: KeyEvent) -> None:
        raise NotImplementedError

    def get_text(self) -> str:
        raise NotImplementedError

    def reset(self) -> None:
        raise NotImplementedError

    def cursor_offset(self, width: int) -> int | None:
        """Column of the text cursor inside the rendered value, or None to hide it."""
        return None


class Picker(Field):
    """
    Cycles through a fixed list of option labels with Left/Right.

    Example:
        >>> picker = Picker("session", ["gnome", "sway"], selected=1)
        >>> picker.get_text()
        'sway'
    """

    def __init__(self, name: str, options: Sequence[str], selected: int = 0, label: str = ""):
        """
        Initialize picker.

        Args:
            name: Field name used to look the field up in a form
            options: Option labels, at least one
            selected: Initial (and default) selection index
            label: Text shown in front of the field
        """
        super().__init__(name, label)
        if not options:
            raise ValueError("Picker needs at least one option")
        self.options: List[str] = list(options)
        if not 0 <= selected < len(self.options):
            raise ValueError(f"selected index {selected} out of range")
        self.default = selected
        self.selected = selected

    def render(self, width: int) -> str:
        text = self.get_text()
        if len(self.options) > 1:
            text = f"< {text} >"
        return slice_columns(text, 0, width)

    def handle_key(self, event: KeyEvent) -> None:
        if event.key == Key.RIGHT:
            self.selected = (self.selected + 1) % len(self.options)
        elif event.key == Key.LEFT:
            self.selected = (self.selected - 1) % len(self.options)

    def get_text(self) -> str:
        return self.options[self.selected]

    def reset(self) -> None:
        self.selected = self.default


class TextInput(Field):
    """
    Single-line text buffer, optionally masked for passwords.

    Example:
        >>> pw = TextInput("password", masked=True)
        >>> pw.handle_key(KeyEvent(Key.CHAR, text="hunter2"))
        >>> pw.render(20)
        '*******'
    """

    def __init__(
        self,
        name: str,
        masked: bool = False,
        contents: str = "",
        max_length: int = 255,
        mask_char: str = "*",
        label: str = "",
    ):
        super().__init__(name, label)
        self.masked = masked
        self.max_length = max_length
        self.mask_char = mask_char or "*"
        self.buffer: List[str] = list(contents[:max_length])

    def _shown(self) -> str:
        if self.masked:
            return self.mask_char * len(self.buffer)
        return "".join(self.buffer)

    def render(self, width: int) -> str:
        return tail_columns(self._shown(), width)

    def cursor_offset(self, width: int) -> int | None:
        return sum(char_width(ch) for ch in self.render(width))

    def handle_key(self, event: KeyEvent) -> None:
        if event.key == Key.CHAR:
            for ch in event.text:
                if len(self.buffer) >= self.max_length:
                    break
                if is_printable(ch):
                    self.buffer.append(ch)
        elif event.key == Key.BACKSPACE:
            if self.buffer:
                self.buffer.pop()

    def get_text(self) -> str:
        return "".join(self.buffer)

    def reset(self) -> None:
        self.buffer.clear()
