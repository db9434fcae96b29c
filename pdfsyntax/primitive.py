"""PDF primitive objects: names, strings, streams, dictionaries and references.

A primitive is one of ``None`` (null), ``bool``, ``int``, ``float``,
:class:`PdfString`, :class:`PdfStream`, :class:`Dictionary`, ``list``
(array), :class:`PlainRef` (reference) or :class:`Name`.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Union


class PdfError(Exception):
    """Base class for errors raised while reading or writing PDF syntax."""


class EndOfInput(PdfError):
    """The input ended before a complete token or object was read."""

    def __init__(self, message: str = "unexpected end of input") -> None:
        super().__init__(message)


class UnexpectedPrimitiveError(PdfError):
    """A primitive of another kind than the expected one was found."""

    def __init__(self, expected: str, found: str) -> None:
        self.expected = expected
        self.found = found
        super().__init__(f"expected primitive {expected}, found {found}")


class MissingEntryError(PdfError):
    """A required dictionary entry is absent."""

    def __init__(self, typ: str, field: str) -> None:
        self.typ = typ
        self.field = field
        super().__init__(f"missing entry {field!r} in {typ}")


class KeyValueMismatchError(PdfError):
    """A dictionary entry holds another name than the expected one."""

    def __init__(self, key: str, value: str, found: str) -> None:
        self.key = key
        self.value = value
        self.found = found
        super().__init__(f"expected /{key} to be /{value}, found /{found}")


class UnexpectedLexemeError(PdfError):
    """The lexer produced a token other than the expected one."""

    def __init__(self, pos: int, lexeme: str, expected: str) -> None:
        self.pos = pos
        self.lexeme = lexeme
        self.expected = expected
        super().__init__(f"unexpected lexeme {lexeme!r} at {pos}, expected {expected}")


class HexDecodeError(PdfError):
    """Two bytes that should form a hex-encoded byte are not hex digits."""

    def __init__(self, pos: int, data: bytes) -> None:
        self.pos = pos
        self.bytes = bytes(data)
        super().__init__(f"invalid hex bytes {self.bytes!r} at {pos}")


class NotFoundError(PdfError):
    """A searched-for word does not occur in the input."""

    def __init__(self, word: str) -> None:
        self.word = word
        super().__init__(f"{word!r} not found")


class DecodeError(PdfError):
    """Bytes could not be decoded as text."""


@dataclass(frozen=True, order=True)
class PlainRef:
    """Reference to an indirect object: object number and generation."""

    id: int
    gen: int


@functools.total_ordering
class Name:
    """A PDF name; compares and hashes like the plain string it holds."""

    __slots__ = ("value",)

    def __init__(self, value: Union[str, "Name"]) -> None:
        if isinstance(value, Name):
            value = value.value
        if not isinstance(value, str):
            raise TypeError(f"a name holds text, not {type(value).__name__}")
        self.value = value

    def __str__(self) -> str:
        return f"/{self.value}"

    def __repr__(self) -> str:
        return f"Name({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Name):
            return self.value == other.value
        if isinstance(other, str):
            return self.value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Name):
            return self.value < other.value
        if isinstance(other, str):
            return self.value < other
        return NotImplemented


def utf16be_to_string(data: bytes) -> str:
    """Decode UTF-16BE bytes strictly, raising DecodeError on invalid input."""
    if len(data) % 2:
        raise DecodeError("UTF-16BE data has an odd number of bytes")
    try:
        return bytes(data).decode("utf-16-be")
    except UnicodeDecodeError as exc:
        raise DecodeError(f"invalid UTF-16BE data: {exc}") from exc


def utf16be_to_string_lossy(data: bytes) -> str:
    """Decode UTF-16BE bytes, replacing unpaired surrogates with U+FFFD."""
    if len(data) % 2:
        raise DecodeError("UTF-16BE data has an odd number of bytes")
    return bytes(data).decode("utf-16-be", errors="replace")


_UTF16BE_BOM = b"\xfe\xff"


@dataclass(frozen=True, repr=False)
class PdfString:
    """A PDF string: raw bytes without encoding information."""

    data: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", bytes(self.data))

    def serialize(self) -> str:
        """Return the string in PDF syntax, hex-encoded if it holds non-ASCII bytes."""
        if any(b >= 0x80 for b in self.data):
            return "<" + self.data.hex() + ">"
        body = "".join(
            ("\\" + chr(b)) if b in b"\\()" else chr(b) for b in self.data
        )
        return f"({body})"

    def to_string_lossy(self) -> str:
        """Decode as UTF-16BE (with byte-order mark) or UTF-8, replacing bad input."""
        if self.data.startswith(_UTF16BE_BOM):
            return utf16be_to_string_lossy(self.data[2:])
        return self.data.decode("utf-8", errors="replace")

    def to_string(self) -> str:
        """Decode as UTF-16BE (with byte-order mark) or UTF-8, raising on bad input."""
        if self.data.startswith(_UTF16BE_BOM):
            return utf16be_to_string(self.data[2:])
        try:
            return self.data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8 data: {exc}") from exc

    def __repr__(self) -> str:
        parts = []
        for b in self.data:
            if b == 0x22:
                parts.append('\\"')
            elif 0x20 <= b <= 0x7E:
                parts.append(chr(b))
            elif b <= 7:
                parts.append(f"\\{b}")
            else:
                parts.append(f"\\x{b:02x}")
        return '"' + "".join(parts) + '"'

    def __bytes__(self) -> bytes:
        return self.data


def _key(key: Any) -> str:
    if isinstance(key, Name):
        return key.value
    if isinstance(key, str):
        return key
    raise TypeError(f"dictionary keys are names, not {type(key).__name__}")


class Dictionary(MutableMapping):
    """A PDF dictionary whose keys are names, iterated in sorted order."""

    def __init__(self, entries: Union[Mapping, Iterable, None] = None) -> None:
        self._entries: dict[str, Any] = {}
        if entries is not None:
            items = entries.items() if isinstance(entries, Mapping) else entries
            for key, value in items:
                self[key] = value

    def __getitem__(self, key: Any) -> Any:
        return self._entries[_key(key)]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._entries[_key(key)] = value

    def __delitem__(self, key: Any) -> None:
        del self._entries[_key(key)]

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        try:
            return _key(key) in self._entries
        except TypeError:
            return False

    def require(self, typ: str, key: str) -> Any:
        """Remove and return the entry, raising MissingEntryError if it is absent."""
        try:
            return self._entries.pop(_key(key))
        except KeyError:
            raise MissingEntryError(typ, _key(key)) from None

    def expect(self, typ: str, key: str, value: str, required: bool) -> None:
        """Check that the entry is the name ``value``, or absent when not required."""
        key = _key(key)
        if key in self._entries:
            entry = self._entries[key]
            if not isinstance(entry, Name):
                raise UnexpectedPrimitiveError("Name", debug_name(entry))
            if entry.value != value:
                raise KeyValueMismatchError(key, value, entry.value)
        elif required:
            raise MissingEntryError(typ, key)

    def serialize(self, level: int = 0) -> str:
        """Return the dictionary in PDF syntax, indented for nesting ``level``."""
        lines = ["<<\n"]
        indent = " " * (2 * level + 2)
        for key, value in self.items():
            lines.append(f"{indent}/{key} {_serialize_primitive(value, level + 2)}\n")
        lines.append(" " * (2 * level) + ">>\n")
        return "".join(lines)

    def __str__(self) -> str:
        inner = ", ".join(f"/{k}={_format_primitive(v)}" for k, v in self.items())
        return f"<{inner}>"

    def __repr__(self) -> str:
        lines = ["{"]
        lines.extend(f"{'/' + k:>15}: {_format_primitive(v)}" for k, v in self.items())
        return "\n".join(lines) + "\n}"


@dataclass
class PdfStream:
    """A stream object: its dictionary and where its data lies in the file."""

    info: Dictionary = field(default_factory=Dictionary)
    id: PlainRef = PlainRef(0, 0)
    file_range: range = range(0)


Primitive = Union[
    None, bool, int, float, PdfString, PdfStream, Dictionary, list, PlainRef, Name
]


def debug_name(primitive: Any) -> str:
    """Return the kind of a primitive, for error messages."""
    if primitive is None:
        return "Null"
    if isinstance(primitive, bool):
        return "Boolean"
    if isinstance(primitive, int):
        return "Integer"
    if isinstance(primitive, float):
        return "Number"
    for kind, name in (
        (PdfString, "String"),
        (PdfStream, "Stream"),
        (Dictionary, "Dictionary"),
        (list, "Array"),
        (PlainRef, "Reference"),
        (Name, "Name"),
    ):
        if isinstance(primitive, kind):
            return name
    raise TypeError(f"{type(primitive).__name__} is not a PDF primitive")


def _format_number(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "inf" if x > 0 else "-inf"
    if x.is_integer():
        return ("-" if x == 0 and math.copysign(1.0, x) < 0 else "") + str(int(x))
    return format(Decimal(repr(x)), "f")


def _format_primitive(p: Any) -> str:
    if p is None:
        return "null"
    if isinstance(p, bool):
        return "true" if p else "false"
    if isinstance(p, int):
        return str(p)
    if isinstance(p, float):
        return _format_number(p)
    if isinstance(p, PdfString):
        return repr(p)
    if isinstance(p, PdfStream):
        return "stream"
    if isinstance(p, Dictionary):
        return str(p)
    if isinstance(p, list):
        return "[" + ", ".join(_format_primitive(e) for e in p) + "]"
    if isinstance(p, PlainRef):
        return f"@{p.id}"
    if isinstance(p, Name):
        return str(p)
    raise TypeError(f"{type(p).__name__} is not a PDF primitive")


def _serialize_name(name: Union[str, Name]) -> str:
    text = name.value if isinstance(name, Name) else name
    out = ["/"]
    for ch in text:
        if ch in "\\()":
            out.append("\\")
        elif ch > "~":
            raise PdfError("only ASCII names can be serialized")
        out.append(ch)
    return "".join(out)


def _serialize_primitive(p: Any, level: int) -> str:
    if p is None:
        return "null"
    if isinstance(p, bool):
        return "true" if p else "false"
    if isinstance(p, int):
        return str(p)
    if isinstance(p, float):
        return _format_number(p)
    if isinstance(p, PdfString):
        return p.serialize()
    if isinstance(p, PdfStream):
        raise PdfError("stream data is not held in memory and cannot be serialized")
    if isinstance(p, Dictionary):
        return p.serialize(level)
    if isinstance(p, list):
        body = " ".join(_serialize_primitive(e, level + 1) for e in p)
        return " " * (2 * level) + "[" + body + "]"
    if isinstance(p, PlainRef):
        return f"{p.id} {p.gen} R"
    if isinstance(p, Name):
        return _serialize_name(p)
    raise TypeError(f"{type(p).__name__} is not a PDF primitive")