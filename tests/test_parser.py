import pytest

from ionikmetrics import parser


@pytest.mark.parametrize("ch, expected", [(" ", True), ("\t", True), ("\n", False), ("a", False)])
def test_is_ws(ch, expected):
    assert parser.is_ws(ch) is expected


def test_is_nl():
    assert parser.is_nl("\n") is True
    assert parser.is_nl(" ") is False


def test_skip_ws():
    text = "  \tab"
    pos = parser.skip_ws(text, 0)
    assert text[pos:] == "ab"
    assert parser.skip_ws("", 0) == 0


def test_advance_ws1n():
    text = "  \tx"
    pos = parser.advance_ws1n(text, 0)
    assert text[pos:] == "x"
    assert parser.advance_ws1n("x", 0) is None
    assert parser.advance_ws1n("", 0) is None


def test_advance_ws0n():
    assert parser.advance_ws0n("", 0) is None
    assert parser.advance_ws0n("x", 0) == 0
    text = " \t x"
    assert text[parser.advance_ws0n(text, 0):] == "x"


def test_advance_nl():
    text = "\nx"
    assert text[parser.advance_nl(text, 0):] == "x"
    assert parser.advance_nl("x", 0) is None
    assert parser.advance_nl("", 0) is None


def test_advance_nl_or_end():
    assert parser.advance_nl_or_end("", 0) == 0
    assert parser.advance_nl_or_end("x", 0) is None
    text = "\n\nx"
    assert text[parser.advance_nl_or_end(text, 0):] == "\nx"


def test_advance_nl1n():
    text = "\n\n\nx"
    assert text[parser.advance_nl1n(text, 0):] == "x"
    assert parser.advance_nl1n("x", 0) is None


def test_advance_until_nl():
    text = "abc\ndef"
    assert text[parser.advance_until_nl(text, 0):] == "\ndef"
    assert parser.advance_until_nl("abc", 0) == len("abc")
    assert parser.advance_until_nl("", 0) is None


def test_advance_token():
    text = "ab_(1) rest"
    assert text[parser.advance_token(text, 0):] == " rest"
    assert parser.advance_token("abc", 0) is None
    assert parser.advance_token("", 0) is None
    assert parser.advance_token(" x", 0) == 0


def test_advance_word():
    text = "cpu0 100"
    assert text[parser.advance_word(text, 0):] == " 100"
    assert parser.advance_word("1abc", 0) is None
    assert parser.advance_word("", 0) is None


def test_advance_colon_and_assign():
    assert ":x"[parser.advance_colon(":x", 0):] == "x"
    assert parser.advance_colon("=x", 0) is None
    assert "=x"[parser.advance_assign("=x", 0):] == "x"
    assert parser.advance_assign(":x", 0) is None


def test_advance_decimal_digits():
    text = "12345 kB"
    assert text[parser.advance_decimal_digits(text, 0):] == " kB"
    assert parser.advance_decimal_digits("kB", 0) is None


def test_advance_key():
    text = "MemTotal:  123 kB\n"
    key, pos = parser.advance_key(text, 0)
    assert key == "MemTotal"
    assert text[pos:] == ":  123 kB\n"
    assert parser.advance_key(":x", 0) is None


def test_advance_decimal_digits_value():
    text = "123 kB"
    value, pos = parser.advance_decimal_digits_value(text, 0)
    assert value == "123"
    assert text[pos:] == " kB"


def test_advance_unparsed_value():
    text = '"Ubuntu 22.04"\nNAME=x'
    value, pos = parser.advance_unparsed_value(text, 0)
    assert value == '"Ubuntu 22.04"'
    assert text[pos:] == "\nNAME=x"


def test_advance_units():
    text = "kB\n"
    units, pos = parser.advance_units(text, 0)
    assert units == "kB"
    assert text[pos:] == "\n"
    start = 0
    assert parser.advance_units("\n", start) == ("", start)


def test_full_meminfo_line():
    text = "MemFree:   456 kB\n\nNext"
    key, pos = parser.advance_key(text, 0)
    pos = parser.advance_colon(text, pos)
    pos = parser.advance_ws0n(text, pos)
    value, pos = parser.advance_decimal_digits_value(text, pos)
    pos = parser.advance_ws0n(text, pos)
    units, pos = parser.advance_units(text, pos)
    pos = parser.advance_ws0n(text, pos)
    pos = parser.advance_nl1n(text, pos)
    assert (key, value, units) == ("MemFree", "456", "kB")
    assert text[pos:] == "Next"