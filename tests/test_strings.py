import pytest

from pdfsyntax.primitive import EndOfInput, HexDecodeError
from pdfsyntax.strings import HexStringLexer, StringLexer


def lex(data: bytes) -> bytes:
    return bytes(StringLexer(data))


def hexlex(data: bytes) -> bytes:
    return bytes(HexStringLexer(data))


def test_escapes():
    assert lex(b"a\\nb\\rc\\td\\(f/)\\\\hei)") == b"a\nb\rc\td(f/"


@pytest.mark.parametrize(
    "data",
    [
        b"These \\\ntwo strings \\\nare the same.)",
        b"These \\\rtwo strings \\\rare the same.)",
        b"These \\\r\ntwo strings \\\r\nare the same.)",
    ],
)
def test_string_split_lines(data):
    assert lex(data) == b"These two strings are the same."


@pytest.mark.parametrize(
    "data, expected",
    [
        (
            b"This string contains\\245two octal characters\\307.)",
            b"This string contains\xa5two octal characters\xc7.",
        ),
        (b"\\0053)", b"\x053"),
        (b"\\053)", b"+"),
        (b"\\53)", b"+"),
        (b"\\541)", b"a"),
    ],
)
def test_octal_escape(data, expected):
    assert lex(data) == expected


def test_backspace_and_formfeed_escapes():
    assert lex(b"\\b\\f)") == b"\x08\x0c"


def test_unknown_escape_yields_zero_then_character():
    assert lex(b"\\x)") == b"\x00x"


def test_nested_parentheses_are_kept():
    assert lex(b"a(b)c)") == b"a(b)c"


def test_offset_points_past_closing_parenthesis():
    lexer = StringLexer(b"abc)def")
    assert bytes(lexer) == b"abc"
    assert lexer.offset == 4


def test_next_lexeme_returns_none_at_end():
    lexer = StringLexer(b"x)")
    assert lexer.next_lexeme() == ord("x")
    assert lexer.next_lexeme() is None


def test_unterminated_string_raises():
    with pytest.raises(EndOfInput):
        lex(b"abc")


def test_trailing_backslash_raises():
    with pytest.raises(EndOfInput):
        lex(b"abc\\")


def test_hex_even():
    assert hexlex(b"901FA3>") == b"\x90\x1f\xa3"


def test_hex_odd_is_padded():
    assert hexlex(b"901FA>") == b"\x90\x1f\xa0"


def test_hex_whitespace_ignored():
    assert hexlex(b"1 9F\t5\r\n4\x0c62a>") == b"\x19\xf5\x46\x2a"


def test_hex_offset_after_closing_bracket():
    lexer = HexStringLexer(b"41>rest")
    assert bytes(lexer) == b"A"
    assert lexer.offset == 3


def test_hex_next_hex_byte_none_at_end():
    lexer = HexStringLexer(b">")
    assert lexer.next_hex_byte() is None


def test_hex_invalid_first_digit():
    with pytest.raises(HexDecodeError) as info:
        hexlex(b"zz>")
    assert info.value.bytes == b"zz"
    assert info.value.pos == 1


def test_hex_invalid_second_digit():
    with pytest.raises(HexDecodeError) as info:
        hexlex(b"4g>")
    assert info.value.bytes == b"4g"


def test_hex_unterminated_raises():
    with pytest.raises(EndOfInput):
        hexlex(b"4142")