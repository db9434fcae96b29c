"""Cross-reference tables: where each object of a file can be found."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Optional, Union

from .accessors import as_array, as_integer, as_u32
from .primitive import Dictionary, Name, PdfError


class UnspecifiedXRefEntryError(PdfError):
    """The table holds no entry for the requested object number."""

    def __init__(self, id: int) -> None:
        self.id = id
        super().__init__(f"no xref entry for object {id}")


@dataclass(frozen=True)
class Free:
    """An object number not currently in use."""

    next_obj_nr: int
    gen_nr: int


@dataclass(frozen=True)
class Raw:
    """An object in use, stored at a byte position of the file."""

    pos: int
    gen_nr: int


@dataclass(frozen=True)
class InStream:
    """An object in use, compressed inside an object stream."""

    stream_id: int
    index: int


@dataclass(frozen=True)
class Promised:
    """An object number reserved for an object still to be written."""


@dataclass(frozen=True)
class Invalid:
    """An entry that has not been specified."""


XRef = Union[Free, Raw, InStream, Promised, Invalid]


def gen_nr(entry: XRef) -> int:
    """Return the generation number of an entry; objects in streams have 0."""
    if isinstance(entry, (Free, Raw)):
        return entry.gen_nr
    if isinstance(entry, InStream):
        return 0
    raise PdfError(f"{entry!r} has no generation number")


def byte_len(n: int) -> int:
    """Number of bytes needed to store ``n`` big-endian; at least one."""
    if not 0 <= n < 1 << 64:
        raise ValueError(f"{n} does not fit in 64 bits")
    return max(1, (n.bit_length() + 7) // 8)


@dataclass
class XRefSection:
    """A run of consecutive entries as found in a file."""

    first_id: int
    entries: list = field(default_factory=list)

    def add_free_entry(self, next_obj_nr: int, gen_nr: int) -> None:
        self.entries.append(Free(next_obj_nr, gen_nr))

    def add_inuse_entry(self, pos: int, gen_nr: int) -> None:
        self.entries.append(Raw(pos, gen_nr))

    def numbered_entries(self) -> Iterator[tuple[int, XRef]]:
        """Yield each entry with its object number."""
        for offset, entry in enumerate(self.entries):
            yield self.first_id + offset, entry


def _uint_list(primitive: Any) -> list:
    if primitive is None:
        return []
    if isinstance(primitive, list):
        return [as_u32(p) for p in as_array(primitive)]
    return [as_u32(primitive)]


@dataclass
class XRefInfo:
    """The dictionary of a cross-reference stream."""

    size: int
    index: list
    prev: Optional[int] = None
    w: list = field(default_factory=list)

    @classmethod
    def from_dictionary(cls, dictionary: Dictionary) -> "XRefInfo":
        """Read the entries of an ``/XRef`` dictionary."""
        entries = Dictionary(dictionary)
        entries.expect("XRefInfo", "Type", "XRef", True)
        if "Size" not in entries:
            raise _missing("Size")
        size = as_u32(entries.require("XRefInfo", "Size"))
        index = (
            _uint_list(entries.require("XRefInfo", "Index"))
            if "Index" in entries
            else [0, size]
        )
        prev_value = entries.get("Prev")
        prev = None if prev_value is None else as_integer(prev_value)
        w = _uint_list(entries.get("W"))
        return cls(size=size, index=index, prev=prev, w=w)

    def to_dictionary(self) -> Dictionary:
        """Write the entries as an ``/XRef`` dictionary."""
        d = Dictionary()
        d["Type"] = Name("XRef")
        d["Size"] = self.size
        d["Index"] = list(self.index)
        if self.prev is not None:
            d["Prev"] = self.prev
        d["W"] = list(self.w)
        return d


def _missing(key: str) -> PdfError:
    from .primitive import MissingEntryError

    return MissingEntryError("XRefInfo", key)


class XRefTable:
    """Lookup table from object numbers to cross-reference entries."""

    def __init__(self, num_objects: int = 0) -> None:
        self.entries: list = [Invalid()] * num_objects

    def __iter__(self) -> Iterator[int]:
        """Yield the numbers of objects that are in use."""
        for i, entry in enumerate(self.entries):
            if isinstance(entry, (Raw, InStream)):
                yield i

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, obj_id: int) -> XRef:
        if 0 <= obj_id < len(self.entries):
            return self.entries[obj_id]
        raise UnspecifiedXRefEntryError(obj_id)

    def set(self, obj_id: int, entry: XRef) -> None:
        if not 0 <= obj_id < len(self.entries):
            raise IndexError(f"object number {obj_id} outside the table")
        self.entries[obj_id] = entry

    def push(self, entry: XRef) -> None:
        self.entries.append(entry)

    def max_field_widths(self) -> tuple[int, int]:
        """Largest values of the two numeric fields over all valid entries."""
        max_a = max_b = 0
        for entry in self.entries:
            fields = _fields(entry)
            if fields is None:
                continue
            _, a, b = fields
            max_a = max(max_a, a)
            max_b = max(max_b, b)
        return max_a, max_b

    def add_entries_from(self, section: XRefSection) -> None:
        """Take entries from a section where they are newer than the ones held."""
        for i, entry in section.numbered_entries():
            if i >= len(self.entries):
                continue
            dst = self.entries[i]
            if isinstance(dst, (Raw, Free)):
                update = gen_nr(entry) > dst.gen_nr
            elif isinstance(dst, (InStream, Invalid)):
                update = True
            else:
                raise PdfError(f"found {dst!r}")
            if update:
                self.entries[i] = entry

    def write_stream(self, size: int) -> tuple[XRefInfo, bytes]:
        """Encode the first ``size`` entries as cross-reference stream data."""
        max_a, max_b = self.max_field_widths()
        a_w, b_w = byte_len(max_a), byte_len(max_b)
        data = bytearray()
        for entry in self.entries[:size]:
            fields = _fields(entry)
            if fields is None:
                raise PdfError(f"invalid xref entry: {entry!r}")
            kind, a, b = fields
            data.append(kind)
            data += a.to_bytes(a_w, "big")
            data += b.to_bytes(b_w, "big")
        info = XRefInfo(size=size, index=[0, size], prev=None, w=[1, a_w, b_w])
        return info, bytes(data)

    def __str__(self) -> str:
        lines = []
        for i, entry in enumerate(self.entries):
            if isinstance(entry, Free):
                lines.append(f"{i:4}: {entry.next_obj_nr:010} {entry.gen_nr:05} f")
            elif isinstance(entry, Raw):
                lines.append(f"{i:4}: {entry.pos:010} {entry.gen_nr:05} n")
            elif isinstance(entry, InStream):
                lines.append(f"{i:4}: in stream {entry.stream_id}, index {entry.index}")
            elif isinstance(entry, Promised):
                lines.append(f"{i:4}: Promised?")
            else:
                lines.append(f"{i:4}: Invalid!")
        return "".join(line + "\n" for line in lines)


def _fields(entry: XRef) -> Optional[tuple[int, int, int]]:
    if isinstance(entry, Free):
        return 0, entry.next_obj_nr, entry.gen_nr
    if isinstance(entry, Raw):
        return 1, entry.pos, entry.gen_nr
    if isinstance(entry, InStream):
        return 2, entry.stream_id, entry.index
    return None