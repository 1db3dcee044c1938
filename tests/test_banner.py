from __future__ import annotations

import pytest

from ttygreet.banner import Banner, TermSize
from ttygreet.utils import display_width


def block(rows: int, cols: int) -> str:
    # each line is distinct so excerpts can be identified
    return "\n".join("".join(chr(ord("a") + (r + c) % 26) for c in range(cols)) for r in range(rows))


def test_parse_measures_display_columns():
    banner = Banner.parse("ab\n日本語\nx")
    assert banner.rows == 3
    assert banner.cols == 6


def test_parse_uses_longest_line_not_first():
    banner = Banner.parse("a\nabcdef\nabc")
    assert banner.cols == 6


def test_empty_banner_draws_nothing():
    assert Banner.parse("").layout(TermSize(24, 80)) == []


@pytest.mark.parametrize(
    "term, art",
    [
        (TermSize(24, 80), (5, 30)),
        (TermSize(25, 81), (4, 10)),
        (TermSize(10, 10), (10, 10)),
        (TermSize(7, 3), (2, 2)),
    ],
)
def test_centered_when_banner_fits(term, art):
    banner = Banner.parse(block(*art))
    lines = banner.layout(term)
    assert len(lines) == art[0]
    assert lines[0].row == (term.lines - art[0]) // 2
    assert all(line.col == (term.cols - art[1]) // 2 for line in lines)
    assert [line.text for line in lines] == list(banner.lines)


def test_clipped_symmetrically_when_banner_is_larger():
    art = block(10, 20)
    banner = Banner.parse(art)
    lines = banner.layout(TermSize(4, 6))
    assert len(lines) == 4
    assert lines[0].row == 0
    assert all(line.col == 0 for line in lines)
    source = art.split("\n")
    # skip (10 - 4) // 2 = 3 lines and (20 - 6) // 2 = 7 columns
    assert [line.text for line in lines] == [source[3 + i][7:13] for i in range(4)]


def test_never_exceeds_terminal():
    banner = Banner.parse(block(50, 200))
    for term in (TermSize(1, 1), TermSize(3, 17), TermSize(24, 80)):
        lines = banner.layout(term)
        assert len(lines) <= term.lines
        assert all(line.col + display_width(line.text) <= term.cols for line in lines)


def test_zero_sized_area():
    assert Banner.parse(block(3, 3)).layout(TermSize(0, 80)) == []


def test_wide_characters_are_not_split():
    banner = Banner.parse("日本語日本語")
    lines = banner.layout(TermSize(1, 5))
    # 12 columns into 5: skip 3 columns, which starts mid-character
    assert display_width(lines[0].text) <= 5
    assert lines[0].text == "語日"
