"""Small scanning primitives for the line-oriented text of procfs and sysfs files.

Every ``advance_*`` function takes the text and a start position. On success it
returns the position after what it matched, or a ``(value, position)`` pair for
the functions that capture a value. On failure it returns ``None``. A returned
position may be ``0``, so callers must test with ``is None``.
"""

from __future__ import annotations

_TOKEN_PUNCT = "()_"


def _is_alpha(ch: str) -> bool:
    return ch.isascii() and ch.isalpha()


def _is_alnum(ch: str) -> bool:
    return ch.isascii() and ch.isalnum()


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _is_token_char(ch: str) -> bool:
    return _is_alnum(ch) or ch in _TOKEN_PUNCT


def is_ws(ch: str) -> bool:
    """Return True for a space or a tab."""
    return ch in (" ", "\t")


def is_nl(ch: str) -> bool:
    """Return True for a line feed."""
    return ch == "\n"


def skip_ws(text: str, pos: int) -> int:
    """Return the position of the first character at or after ``pos`` that is not a space or tab."""
    end = len(text)
    while pos < end and is_ws(text[pos]):
        pos += 1
    return pos


def advance_ws1n(text: str, pos: int) -> int | None:
    """Match one or more spaces or tabs."""
    if pos >= len(text) or not is_ws(text[pos]):
        return None
    return skip_ws(text, pos + 1)


def advance_ws0n(text: str, pos: int) -> int | None:
    """Match zero or more spaces or tabs; fails only at the end of the text."""
    if pos >= len(text):
        return None
    if not is_ws(text[pos]):
        return pos
    return skip_ws(text, pos + 1)


def advance_nl(text: str, pos: int) -> int | None:
    """Match exactly one line feed."""
    if pos >= len(text) or text[pos] != "\n":
        return None
    return pos + 1


def advance_nl_or_end(text: str, pos: int) -> int | None:
    """Match one line feed, or succeed without moving at the end of the text."""
    if pos >= len(text):
        return pos
    if text[pos] != "\n":
        return None
    return pos + 1


def advance_nl1n(text: str, pos: int) -> int | None:
    """Match one or more line feeds."""
    end = len(text)
    if pos >= end or text[pos] != "\n":
        return None
    pos += 1
    while pos < end and text[pos] == "\n":
        pos += 1
    return pos


def advance_until_nl(text: str, pos: int) -> int | None:
    """Move up to the next line feed or the end; fails only when already at the end."""
    end = len(text)
    if pos >= end:
        return None
    found = text.find("\n", pos)
    return end if found < 0 else found


def advance_token(text: str, pos: int) -> int | None:
    """Skip letters, digits, parentheses and underscores; succeeds only if the end is not reached."""
    end = len(text)
    if pos >= end:
        return None
    while pos < end and _is_token_char(text[pos]):
        pos += 1
    return pos if pos < end else None


def advance_word(text: str, pos: int) -> int | None:
    """Match a letter followed by letters, digits, parentheses or underscores."""
    end = len(text)
    if pos >= end or not _is_alpha(text[pos]):
        return None
    pos += 1
    while pos < end and _is_token_char(text[pos]):
        pos += 1
    return pos


def _advance_char(text: str, pos: int, ch: str) -> int | None:
    if pos >= len(text) or text[pos] != ch:
        return None
    return pos + 1


def advance_colon(text: str, pos: int) -> int | None:
    """Match a single ``:``."""
    return _advance_char(text, pos, ":")


def advance_assign(text: str, pos: int) -> int | None:
    """Match a single ``=``."""
    return _advance_char(text, pos, "=")


def advance_decimal_digits(text: str, pos: int) -> int | None:
    """Match one or more decimal digits."""
    end = len(text)
    if pos >= end or not _is_digit(text[pos]):
        return None
    pos += 1
    while pos < end and _is_digit(text[pos]):
        pos += 1
    return pos


def _capture(text: str, pos: int, new_pos: int | None) -> tuple[str, int] | None:
    if new_pos is None:
        return None
    return text[pos:new_pos], new_pos


def advance_key(text: str, pos: int) -> tuple[str, int] | None:
    """Capture a word used as a record key."""
    return _capture(text, pos, advance_word(text, pos))


def advance_decimal_digits_value(text: str, pos: int) -> tuple[str, int] | None:
    """Capture a run of decimal digits."""
    return _capture(text, pos, advance_decimal_digits(text, pos))


def advance_unparsed_value(text: str, pos: int) -> tuple[str, int] | None:
    """Capture everything up to the next line feed or the end."""
    return _capture(text, pos, advance_until_nl(text, pos))


def advance_units(text: str, pos: int) -> tuple[str, int]:
    """Capture an optional units word; without one, return an empty string and ``pos``."""
    captured = _capture(text, pos, advance_word(text, pos))
    return captured if captured is not None else ("", pos)