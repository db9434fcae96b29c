import pytest

from pdfsyntax.accessors import (
    Date,
    as_array,
    as_bool,
    as_dictionary,
    as_integer,
    as_name,
    as_number,
    as_reference,
    as_stream,
    as_string,
    as_text,
    as_u32,
    format_primitive,
    resolve,
    serialize,
    serialize_name,
    to_string,
    to_string_lossy,
)
from pdfsyntax.primitive import (
    DecodeError,
    Dictionary,
    Name,
    PdfError,
    PdfStream,
    PdfString,
    PlainRef,
    UnexpectedPrimitiveError,
)


class _Table:
    def __init__(self, objects):
        self.objects = objects

    def resolve(self, ref):
        return self.objects[ref]


def test_as_integer():
    assert as_integer(42) == 42
    with pytest.raises(UnexpectedPrimitiveError) as info:
        as_integer(Name("x"))
    assert info.value.found == "Name"
    assert info.value.expected == "Integer"


def test_as_integer_rejects_bool():
    with pytest.raises(UnexpectedPrimitiveError) as info:
        as_integer(True)
    assert info.value.found == "Boolean"


def test_as_u32():
    assert as_u32(7) == 7
    with pytest.raises(PdfError):
        as_u32(-1)


def test_as_number():
    assert as_number(3) == 3.0
    assert as_number(2.5) == 2.5
    with pytest.raises(UnexpectedPrimitiveError):
        as_number(None)


def test_as_bool():
    assert as_bool(False) is False
    with pytest.raises(UnexpectedPrimitiveError):
        as_bool(1)


def test_container_accessors():
    d = Dictionary({"A": 1})
    s = PdfStream()
    ref = PlainRef(4, 0)
    arr = [1, 2]
    assert as_dictionary(d) is d
    assert as_stream(s) is s
    assert as_reference(ref) == ref
    assert as_array(arr) is arr
    with pytest.raises(UnexpectedPrimitiveError):
        as_array(d)
    with pytest.raises(UnexpectedPrimitiveError):
        as_dictionary(arr)
    with pytest.raises(UnexpectedPrimitiveError):
        as_reference(4)
    with pytest.raises(UnexpectedPrimitiveError):
        as_stream(d)


def test_as_name_and_string():
    assert as_name(Name("Type")) == "Type"
    s = PdfString(b"abc")
    assert as_string(s) is s
    with pytest.raises(UnexpectedPrimitiveError):
        as_name(s)
    with pytest.raises(UnexpectedPrimitiveError):
        as_string(Name("abc"))


def test_as_text():
    assert as_text(Name("Helvetica")) == "Helvetica"
    assert as_text(PdfString(b"mit\xc3\xa4")) == "mitä"
    with pytest.raises(UnexpectedPrimitiveError) as info:
        as_text(3)
    assert info.value.expected == "Name or String"


def test_string_conversions():
    good = PdfString(b"\xfe\xff\x00\xe4")
    assert to_string(good) == "ä"
    assert to_string_lossy(good) == "ä"
    bad = PdfString(b"mit\xe4")
    assert to_string_lossy(bad) == "mit\ufffd"
    with pytest.raises(DecodeError):
        to_string(bad)
    with pytest.raises(UnexpectedPrimitiveError):
        to_string(Name("x"))


def test_resolve():
    ref = PlainRef(1, 0)
    table = _Table({ref: 99})
    assert resolve(ref, table) == 99
    assert resolve(5, table) == 5


def test_format_primitive():
    assert format_primitive(None) == "null"
    assert format_primitive(True) == "true"
    assert format_primitive(PlainRef(12, 0)) == "@12"
    assert format_primitive(Name("A")) == "/A"


def test_serialize_values():
    assert serialize(PlainRef(3, 0)) == "3 0 R"
    assert serialize([1, Name("A")]) == "[1 /A]"
    assert serialize(PdfString(b"a(b")) == "(a\\(b)"
    assert serialize(False) == "false"


def test_serialize_dictionary():
    d = Dictionary({"A": 1})
    assert serialize(d) == "<<\n  /A 1\n>>\n"


def test_serialize_stream_fails():
    with pytest.raises(PdfError):
        serialize(PdfStream())


def test_serialize_name():
    assert serialize_name(Name("a(b")) == "/a\\(b"
    with pytest.raises(PdfError):
        serialize_name("ä")


def test_date_full():
    date = Date.from_primitive(PdfString(b"D:19990209153925"))
    assert (date.year, date.month, date.day) == (1999, 2, 9)
    assert (date.hour, date.minute, date.second) == (15, 39, 25)


def test_date_defaults():
    date = Date.from_primitive(PdfString(b"D:2023"))
    assert date == Date(year=2023)
    assert (date.month, date.day, date.hour) == (1, 1, 0)


def test_date_errors():
    with pytest.raises(PdfError):
        Date.from_primitive(PdfString(b"2023"))
    with pytest.raises(PdfError):
        Date.from_primitive(PdfString(b"D:20"))
    with pytest.raises(PdfError):
        Date.from_primitive(PdfString(b"D:abcd"))
    with pytest.raises(UnexpectedPrimitiveError):
        Date.from_primitive(Name("D:2023"))
    with pytest.raises(DecodeError):
        Date.from_primitive(PdfString(b"D:2023\xff"))