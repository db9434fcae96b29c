"""Typed access to primitives, formatting and serialization, and PDF dates."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Protocol

from .primitive import (
    DecodeError,
    Dictionary,
    Name,
    PdfError,
    PdfStream,
    PdfString,
    PlainRef,
    UnexpectedPrimitiveError,
    _format_primitive,
    _serialize_name,
    _serialize_primitive,
    debug_name,
)

_UINT = re.compile(rb"\+?[0-9]+")


class Resolver(Protocol):
    """Anything that can look up an indirect object."""

    def resolve(self, ref: PlainRef) -> Any:
        ...


def _parse_uint(text: bytes, maximum: int) -> Optional[int]:
    if not _UINT.fullmatch(text):
        return None
    value = int(text)
    return value if value <= maximum else None


def _parse_or(data: bytes, start: int, end: int, default: int) -> int:
    if end > len(data):
        return default
    value = _parse_uint(data[start:end], 0xFF)
    return default if value is None else value


@dataclass(frozen=True)
class Date:
    """A date as written in PDF strings of the form ``D:YYYYMMDDHHmmSS``."""

    year: int
    month: int = 1
    day: int = 1
    hour: int = 0
    minute: int = 0
    second: int = 0
    tz_hour: int = 0
    tz_minute: int = 0

    @classmethod
    def from_primitive(cls, primitive: Any) -> "Date":
        """Parse a date from a string primitive; missing parts take defaults."""
        if not isinstance(primitive, PdfString):
            raise UnexpectedPrimitiveError("String", debug_name(primitive))
        data = primitive.data
        try:
            data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"invalid UTF-8 data: {exc}") from exc
        if not (len(data) > 2 and data.startswith(b"D:")):
            raise PdfError("Failed parsing date")
        if len(data) < 6:
            raise PdfError("Missing obligatory year in date")
        year = _parse_uint(data[2:6], 0xFFFF)
        if year is None:
            raise PdfError(f"invalid year {data[2:6]!r} in date")
        return cls(
            year=year,
            month=_parse_or(data, 6, 8, 1),
            day=_parse_or(data, 8, 10, 1),
            hour=_parse_or(data, 10, 12, 0),
            minute=_parse_or(data, 12, 14, 0),
            second=_parse_or(data, 14, 16, 0),
            tz_hour=_parse_or(data, 16, 18, 0),
            tz_minute=_parse_or(data, 19, 21, 0),
        )


def format_primitive(primitive: Any) -> str:
    """Return a short human-readable rendering of a primitive."""
    return _format_primitive(primitive)


def serialize(primitive: Any, level: int = 0) -> str:
    """Return a primitive in PDF syntax, indented for nesting ``level``."""
    return _serialize_primitive(primitive, level)


def serialize_name(name: Any) -> str:
    """Return a name in PDF syntax; only ASCII names are allowed."""
    return _serialize_name(name)


def _is_int(primitive: Any) -> bool:
    return isinstance(primitive, int) and not isinstance(primitive, bool)


def as_integer(primitive: Any) -> int:
    """Return the value of an integer primitive."""
    if _is_int(primitive):
        return primitive
    raise UnexpectedPrimitiveError("Integer", debug_name(primitive))


def as_u32(primitive: Any) -> int:
    """Return the value of a non-negative integer primitive."""
    value = as_integer(primitive)
    if value < 0:
        raise PdfError("negative integer")
    return value


def as_number(primitive: Any) -> float:
    """Return an integer or real primitive as a float."""
    if _is_int(primitive) or isinstance(primitive, float):
        return float(primitive)
    raise UnexpectedPrimitiveError("Number", debug_name(primitive))


def as_bool(primitive: Any) -> bool:
    """Return the value of a boolean primitive."""
    if isinstance(primitive, bool):
        return primitive
    raise UnexpectedPrimitiveError("Boolean", debug_name(primitive))


def as_name(primitive: Any) -> str:
    """Return the text of a name primitive."""
    if isinstance(primitive, Name):
        return primitive.value
    raise UnexpectedPrimitiveError("Name", debug_name(primitive))


def as_string(primitive: Any) -> PdfString:
    """Return a string primitive."""
    if isinstance(primitive, PdfString):
        return primitive
    raise UnexpectedPrimitiveError("String", debug_name(primitive))


def as_array(primitive: Any) -> list:
    """Return an array primitive."""
    if isinstance(primitive, list):
        return primitive
    raise UnexpectedPrimitiveError("Array", debug_name(primitive))


def as_dictionary(primitive: Any) -> Dictionary:
    """Return a dictionary primitive."""
    if isinstance(primitive, Dictionary):
        return primitive
    raise UnexpectedPrimitiveError("Dictionary", debug_name(primitive))


def as_reference(primitive: Any) -> PlainRef:
    """Return a reference primitive."""
    if isinstance(primitive, PlainRef):
        return primitive
    raise UnexpectedPrimitiveError("Reference", debug_name(primitive))


def as_stream(primitive: Any) -> PdfStream:
    """Return a stream primitive."""
    if isinstance(primitive, PdfStream):
        return primitive
    raise UnexpectedPrimitiveError("Stream", debug_name(primitive))


def as_text(primitive: Any) -> str:
    """Return a name as its text, or a string decoded lossily."""
    if isinstance(primitive, Name):
        return primitive.value
    if isinstance(primitive, PdfString):
        return primitive.to_string_lossy()
    raise UnexpectedPrimitiveError("Name or String", debug_name(primitive))


def to_string_lossy(primitive: Any) -> str:
    """Decode a string primitive, replacing invalid input."""
    return as_string(primitive).to_string_lossy()


def to_string(primitive: Any) -> str:
    """Decode a string primitive, raising on invalid input."""
    return as_string(primitive).to_string()


def resolve(primitive: Any, resolver: Resolver) -> Any:
    """Look up a reference through ``resolver``; other primitives are returned as is."""
    if isinstance(primitive, PlainRef):
        return resolver.resolve(primitive)
    return primitive