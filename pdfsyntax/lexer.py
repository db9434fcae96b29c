"""Splitting PDF data into lexemes at whitespace and delimiters."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar, Union

from .primitive import (
    DecodeError,
    EndOfInput,
    Name,
    NotFoundError,
    PdfError,
    UnexpectedLexemeError,
)

T = TypeVar("T")

_WHITESPACE = b" \r\n\t"
_DELIMITERS = b"()<>[]{}/%"

_INT_SYNTAX = re.compile(r"[+-]?[0-9]+")
_FLOAT_SYNTAX = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def is_whitespace(b: int) -> bool:
    """Whether byte ``b`` separates lexemes."""
    return b in _WHITESPACE


def boundary(data: bytes, pos: int, condition: Callable[[int], bool]) -> int:
    """First position at or after ``pos`` whose byte fails ``condition``."""
    for offset, b in enumerate(data[pos:]):
        if not condition(b):
            return pos + offset
    return len(data)


def boundary_rev(data: bytes, pos: int, condition: Callable[[int], bool]) -> int:
    """Start of the run of bytes before ``pos`` that all satisfy ``condition``."""
    for i in range(pos - 1, -1, -1):
        if not condition(data[i]):
            return i + 1
    return 0


def _not(condition: Callable[[int], bool]) -> Callable[[int], bool]:
    return lambda b: not condition(b)


def _is_digits(data: bytes) -> bool:
    return all(0x30 <= b <= 0x39 for b in data)


def _as_bytes(value: Union[bytes, bytearray, str, "Substr"]) -> bytes:
    if isinstance(value, Substr):
        return value.data
    if isinstance(value, str):
        return value.encode("utf-8")
    return bytes(value)


@dataclass(frozen=True, eq=False)
class Substr:
    """A lexeme: a slice of the input together with its offset in the file."""

    data: bytes
    file_offset: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", _as_bytes(self.data))

    def to_string(self) -> str:
        """Decode as UTF-8, replacing invalid bytes."""
        return self.data.decode("utf-8", errors="replace")

    def to_name(self) -> Name:
        """Return the lexeme as a name."""
        return Name(self.as_str())

    def to(self, kind: Callable[[str], T]) -> T:
        """Parse the lexeme with ``kind`` (such as ``int`` or ``float``)."""
        text = self.as_str()
        if kind is int and not _INT_SYNTAX.fullmatch(text):
            raise PdfError(f"cannot parse {text!r} as an integer")
        if kind is float and not _FLOAT_SYNTAX.fullmatch(text):
            raise PdfError(f"cannot parse {text!r} as a number")
        try:
            return kind(text)
        except (ValueError, TypeError) as exc:
            raise PdfError(f"cannot parse {text!r}: {exc}") from exc

    def is_integer(self) -> bool:
        """Whether the lexeme is an optionally negative run of digits."""
        data = self.data
        if not data:
            return False
        if data[0] == ord("-"):
            if len(data) < 2:
                return False
            data = data[1:]
        return _is_digits(data)

    def is_real_number(self) -> bool:
        """Whether the lexeme starts with a real number."""
        return self.real_number() is not None

    def real_number(self) -> Optional["Substr"]:
        """Return the leading real number of the lexeme, or None."""
        rest = self.data
        if not rest:
            return None
        if rest[0] == ord("-"):
            if len(rest) < 2:
                return None
            rest = rest[1:]
        dot = rest.find(b".")
        if dot >= 0:
            if not _is_digits(rest[:dot]):
                return None
            rest = rest[dot + 1:]
        for length, b in enumerate(rest):
            if not 0x30 <= b <= 0x39:
                if length == 0:
                    return None
                end = len(self.data) - len(rest) + length
                return Substr(self.data[:end], self.file_offset)
        return self

    def as_str(self) -> str:
        """Decode as UTF-8, raising DecodeError on invalid bytes."""
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8 data: {exc}") from exc

    def equals(self, other: Union[bytes, str, "Substr"]) -> bool:
        """Whether the lexeme consists of exactly these bytes."""
        return self.data == _as_bytes(other)

    def reslice(self, start: int) -> "Substr":
        """Return the lexeme from ``start`` on."""
        return Substr(self.data[start:], self.file_offset + start)

    def file_range(self) -> range:
        """Positions of the lexeme in the file."""
        return range(self.file_offset, self.file_offset + len(self.data))

    def __eq__(self, other: object) -> bool:
        if isinstance(other, (Substr, bytes, bytearray, str)):
            return self.equals(other)
        return NotImplemented

    def __bytes__(self) -> bytes:
        return self.data

    def __len__(self) -> int:
        return len(self.data)


class Lexer:
    """Walks forward and backward over the lexemes of a byte buffer."""

    def __init__(self, buf: bytes, file_offset: int = 0) -> None:
        self.buf = bytes(buf)
        self.pos = 0
        self.file_offset = file_offset

    def next(self) -> Substr:
        """Return the next lexeme and move past it."""
        lexeme, pos = self._next_word()
        self.pos = pos
        return lexeme

    def next_stream(self) -> None:
        """Consume the ``stream`` keyword and the end-of-line after it."""
        pos = self._skip_whitespace(self.pos)
        if pos + 6 >= len(self.buf):
            raise EndOfInput()
        b0 = self.buf[pos + 6]
        if b0 == ord("\n"):
            self.pos = pos + 7
        elif b0 == ord("\r"):
            if pos + 7 >= len(self.buf):
                raise EndOfInput()
            if self.buf[pos + 7] != ord("\n"):
                raise PdfError("invalid whitespace following 'stream'")
            self.pos = pos + 8
        else:
            raise PdfError("invalid whitespace")

    def back(self) -> Substr:
        """Return the previous lexeme and move to its first byte."""
        end_pos = boundary_rev(self.buf, self.pos, is_whitespace)
        start_pos = boundary_rev(self.buf, end_pos, _not(is_whitespace))
        self.pos = start_pos
        return self.new_substr(start_pos, end_pos)

    def peek(self) -> Substr:
        """Return the next lexeme without moving; empty at the end of input."""
        try:
            return self._next_word()[0]
        except EndOfInput:
            return self.new_substr(self.pos, self.pos)

    def next_expect(self, expected: str) -> None:
        """Consume the next lexeme, raising if it is not ``expected``."""
        word = self.next()
        if not word.equals(expected):
            raise UnexpectedLexemeError(self.pos, word.to_string(), expected)

    def next_as(self, kind: Callable[[str], T]) -> T:
        """Consume the next lexeme and parse it with ``kind``."""
        return self.next().to(kind)

    def new_substr(self, start: int, end: int) -> Substr:
        """Return the bytes between two positions; a backward range is flipped."""
        if start > end:
            start, end = end + 1, start + 1
        return Substr(self.buf[start:end], self.file_offset + start)

    def _seek(self, wanted: int) -> Substr:
        if self.pos < wanted:
            start, end = self.pos, wanted
        else:
            start, end = wanted, self.pos
        self.pos = wanted
        return self.new_substr(start, end)

    def set_pos(self, new_pos: int) -> Substr:
        """Move to ``new_pos``; return the bytes between old and new position."""
        return self._seek(new_pos)

    def set_pos_from_end(self, new_pos: int) -> Substr:
        """Move to ``new_pos`` counted back from the last byte."""
        return self._seek(len(self.buf) - new_pos - 1)

    def offset_pos(self, offset: int) -> Substr:
        """Move forward by ``offset`` bytes."""
        return self._seek(self.pos + offset)

    def _incr_pos(self) -> bool:
        if self.pos >= len(self.buf) - 1:
            return False
        self.pos += 1
        return True

    def seek_newline(self) -> Substr:
        """Move to the start of the next line; return the skipped bytes."""
        if self.pos >= len(self.buf):
            raise EndOfInput()
        start = self.pos
        while self.buf[self.pos] != ord("\n") and self._incr_pos():
            pass
        self._incr_pos()
        return self.new_substr(start, self.pos)

    def seek_substr(self, substr: Union[bytes, str]) -> Optional[Substr]:
        """Move past the next occurrence of ``substr``; return the bytes before it.

        Returns None, leaving the position unchanged, if it does not occur.
        """
        needle = _as_bytes(substr)
        start = self.pos
        matched = 0
        pos = self.pos
        while pos < len(self.buf):
            matched = matched + 1 if self.buf[pos] == needle[matched] else 0
            if matched == len(needle):
                self.pos = pos + 1
                return self.new_substr(start, self.pos - len(needle))
            pos += 1
        return None

    def seek_substr_back(self, substr: Union[bytes, str]) -> Substr:
        """Search backward for ``substr`` and move to just after it."""
        needle = _as_bytes(substr)
        end = self.pos
        found = self.buf.rfind(needle, 0, end)
        if found < 0:
            raise NotFoundError(needle.decode("utf-8", errors="replace"))
        self.pos = found + len(needle)
        return self.new_substr(self.pos, end)

    def read_n(self, n: int) -> Substr:
        """Read at most ``n`` bytes, stopping before the last byte of the buffer."""
        start = self.pos
        self.pos += n
        if self.pos >= len(self.buf):
            self.pos = max(len(self.buf) - 1, 0)
        if start < len(self.buf):
            return self.new_substr(start, self.pos)
        return self.new_substr(0, 0)

    def remaining(self) -> bytes:
        """The bytes from the current position to the end."""
        return self.buf[self.pos:]

    def context(self) -> str:
        """Text around the current position, for error messages."""
        window = self.buf[max(self.pos - 40, 0):min(len(self.buf), self.pos + 40)]
        return window.decode("utf-8", errors="replace")

    def _skip_whitespace(self, pos: int) -> int:
        pos = boundary(self.buf, pos, is_whitespace)
        if pos >= len(self.buf):
            raise EndOfInput()
        return pos

    def _is_whitespace_at(self, pos: int) -> bool:
        return pos < len(self.buf) and is_whitespace(self.buf[pos])

    def _is_delimiter_at(self, pos: int) -> bool:
        return pos < len(self.buf) and self.buf[pos] in _DELIMITERS

    def _word_end(self, pos: int) -> int:
        while (
            pos < len(self.buf)
            and not self._is_whitespace_at(pos)
            and not self._is_delimiter_at(pos)
        ):
            pos += 1
        return pos

    def _next_word(self) -> tuple[Substr, int]:
        if self.pos == len(self.buf):
            raise EndOfInput()
        pos = self._skip_whitespace(self.pos)
        while self.buf[pos] == ord("%"):
            pos += 1
            newline = self.buf.find(b"\n", pos)
            if newline >= 0:
                pos = newline + 1
            pos = self._skip_whitespace(pos)

        start = pos
        if self._is_delimiter_at(pos):
            if self.buf[pos] == ord("/"):
                pos = self._word_end(pos + 1)
                return self.new_substr(start, pos), pos
            if self.buf[pos:pos + 2] in (b"<<", b">>"):
                pos += 1
            pos += 1
            return self.new_substr(start, pos), pos

        pos = self._word_end(pos)
        return self.new_substr(start, pos), pos