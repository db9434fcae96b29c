"""Decoding the bodies of literal ``(...)`` and hexadecimal ``<...>`` strings."""

from __future__ import annotations

from typing import Iterator, Optional

from .primitive import EndOfInput, HexDecodeError

_ESCAPES = {
    ord("n"): ord("\n"),
    ord("r"): ord("\r"),
    ord("t"): ord("\t"),
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("("): ord("("),
    ord(")"): ord(")"),
    ord("\\"): ord("\\"),
}

_OCTAL_DIGITS = b"01234567"
_HEX_WHITESPACE = b" \t\n\r\x0c"


class _ByteCursor:
    """A read position over a byte buffer."""

    def __init__(self, buf: bytes) -> None:
        self.buf = bytes(buf)
        self.pos = 0

    @property
    def offset(self) -> int:
        """Number of bytes consumed from the start of the buffer."""
        return self.pos

    def _next_byte(self) -> int:
        if self.pos >= len(self.buf):
            raise EndOfInput()
        self.pos += 1
        return self.buf[self.pos - 1]

    def _peek_byte(self) -> int:
        if self.pos >= len(self.buf):
            raise EndOfInput()
        return self.buf[self.pos]

    def _back(self) -> None:
        if self.pos == 0:
            raise EndOfInput()
        self.pos -= 1


class StringLexer(_ByteCursor):
    """Yields the bytes of a literal string, resolving escapes and nesting.

    ``buf`` starts right after the opening ``(``; iteration stops at the
    matching ``)``, after which :attr:`offset` tells how many bytes were read.
    """

    def __init__(self, buf: bytes) -> None:
        super().__init__(buf)
        self.nested = 0

    def next_lexeme(self) -> Optional[int]:
        """Return the next byte of the string, or None at its closing parenthesis."""
        while True:
            c = self._next_byte()
            if c == ord("\\"):
                c = self._next_byte()
                if c in _ESCAPES:
                    return _ESCAPES[c]
                if c in (ord("\n"), ord("\r")):
                    # A backslash before an end-of-line joins the lines.
                    partner = ord("\r") if c == ord("\n") else ord("\n")
                    try:
                        if self._peek_byte() == partner:
                            self._next_byte()
                    except EndOfInput:
                        pass
                    continue
                self._back()
                code = 0
                for _ in range(3):
                    d = self._peek_byte()
                    if d not in _OCTAL_DIGITS:
                        break
                    self._next_byte()
                    code = code * 8 + (d - ord("0"))
                return code & 0xFF
            if c == ord("("):
                self.nested += 1
                return c
            if c == ord(")"):
                self.nested -= 1
                return None if self.nested < 0 else c
            return c

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        value = self.next_lexeme()
        if value is None:
            raise StopIteration
        return value


def _nibble(c: int) -> Optional[int]:
    if ord("0") <= c <= ord("9"):
        return c - ord("0")
    if ord("A") <= c <= ord("F"):
        return c - ord("A") + 10
    if ord("a") <= c <= ord("f"):
        return c - ord("a") + 10
    return None


class HexStringLexer(_ByteCursor):
    """Yields the bytes of a hexadecimal string.

    ``buf`` starts right after the opening ``<``; iteration stops at ``>``.
    Whitespace is ignored and an odd final digit is padded with zero.
    """

    def _next_non_whitespace(self) -> int:
        byte = self._next_byte()
        while byte in _HEX_WHITESPACE:
            byte = self._next_byte()
        return byte

    def next_hex_byte(self) -> Optional[int]:
        """Return the next decoded byte, or None at the closing ``>``."""
        c1 = self._next_non_whitespace()
        if c1 == ord(">"):
            return None
        high = _nibble(c1)
        if high is None:
            try:
                following = self._peek_byte()
            except EndOfInput:
                following = 0
            raise HexDecodeError(self.pos, bytes([c1, following]))
        c2 = self._next_non_whitespace()
        if c2 == ord(">"):
            self._back()
            low = 0
        else:
            low = _nibble(c2)
            if low is None:
                raise HexDecodeError(self.pos, bytes([c1, c2]))
        return (high << 4) | low

    def __iter__(self) -> Iterator[int]:
        return self

    def __next__(self) -> int:
        value = self.next_hex_byte()
        if value is None:
            raise StopIteration
        return value