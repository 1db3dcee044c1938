from __future__ import annotations

import random

import pytest

from ttygreet.fields import Picker, TextInput
from ttygreet.keys import Key, KeyEvent


def char(text: str) -> KeyEvent:
    return KeyEvent(Key.CHAR, text=text)


BACKSPACE = KeyEvent(Key.BACKSPACE)


def test_picker_cycles_both_ways():
    picker = Picker("session", ["gnome", "sway", "xfce"])
    picker.handle_key(KeyEvent(Key.RIGHT))
    assert picker.get_text() == "sway"
    picker.handle_key(KeyEvent(Key.RIGHT))
    picker.handle_key(KeyEvent(Key.RIGHT))
    assert picker.get_text() == "gnome"
    picker.handle_key(KeyEvent(Key.LEFT))
    assert picker.get_text() == "xfce"


def test_picker_ignores_other_keys():
    picker = Picker("session", ["gnome", "sway"], selected=1)
    picker.handle_key(char("x"))
    picker.handle_key(BACKSPACE)
    picker.handle_key(KeyEvent(Key.UNKNOWN, codes=(27, 91, 51, 126)))
    assert picker.get_text() == "sway"


def test_picker_reset_restores_default():
    picker = Picker("session", ["gnome", "sway"], selected=1)
    picker.handle_key(KeyEvent(Key.RIGHT))
    assert picker.get_text() == "gnome"
    picker.reset()
    assert picker.get_text() == "sway"


def test_picker_requires_options():
    with pytest.raises(ValueError):
        Picker("session", [])
    with pytest.raises(ValueError):
        Picker("session", ["gnome"], selected=3)


def test_picker_render_fits_width():
    picker = Picker("session", ["a-very-long-session-name", "b"])
    assert picker.render(30) == "< a-very-long-session-name >"
    assert picker.render(8) == "< a-very"
    assert Picker("session", ["only"]).render(10) == "only"


def test_text_input_append_and_backspace():
    field = TextInput("username")
    field.handle_key(char("al"))
    field.handle_key(char("ice"))
    assert field.get_text() == "alice"
    field.handle_key(BACKSPACE)
    assert field.get_text() == "alic"


def test_backspace_on_empty_buffer_is_noop():
    field = TextInput("username")
    field.handle_key(BACKSPACE)
    assert field.get_text() == ""


def test_buffer_length_tracks_effective_edits():
    rng = random.Random(1234)
    field = TextInput("username")
    expected = 0
    for _ in range(500):
        if rng.random() < 0.55:
            field.handle_key(char("x"))
            expected += 1
        else:
            field.handle_key(BACKSPACE)
            expected = max(expected - 1, 0)
        assert len(field.get_text()) == expected


def test_max_length_is_enforced():
    field = TextInput("username", max_length=3)
    field.handle_key(char("abcdef"))
    assert field.get_text() == "abc"


def test_non_printable_characters_are_dropped():
    field = TextInput("username")
    field.handle_key(char("a\x07b"))
    assert field.get_text() == "ab"


def test_masked_render_never_shows_contents():
    field = TextInput("password", masked=True)
    field.handle_key(char("hunter2"))
    shown = field.render(20)
    assert shown == "*******"
    assert "hunter2" not in shown
    assert field.get_text() == "hunter2"


def test_masked_render_uses_configured_char():
    field = TextInput("password", masked=True, mask_char="•")
    field.handle_key(char("abc"))
    assert field.render(10) == "•••"


def test_text_render_shows_tail_when_too_long():
    field = TextInput("username", contents="abcdefghij")
    assert field.render(4) == "ghij"
    assert field.cursor_offset(4) == 4


def test_reset_clears_text_input():
    field = TextInput("password", masked=True, contents="secret")
    field.reset()
    assert field.get_text() == ""
    assert field.render(10) == ""
