import pytest

from pdfsyntax.primitive import (
    DecodeError,
    Dictionary,
    KeyValueMismatchError,
    MissingEntryError,
    Name,
    PdfError,
    PdfStream,
    PdfString,
    PlainRef,
    UnexpectedPrimitiveError,
    debug_name,
    utf16be_to_string,
    utf16be_to_string_lossy,
)

REPLACEMENT = "\ufffd"


def test_name_hash_matches_str():
    s = "Hello World!"
    assert hash(Name(s)) == hash(s)
    assert Name(s) == s
    assert {Name(s): 1}[s] == 1


def test_name_display_and_order():
    assert str(Name("Type")) == "/Type"
    assert Name("A") < Name("B")
    assert sorted([Name("b"), Name("a")]) == ["a", "b"]


def test_utf16be_string():
    s = PdfString(bytes([0xFE, 0xFF, 0x20, 0x09]))
    assert s.to_string_lossy() == "\u2009"


def test_utf16be_invalid_string():
    s = PdfString(bytes([0xFE, 0xFF, 0xD8, 0x34]))
    assert s.to_string_lossy() == REPLACEMENT


def test_utf16be_invalid_bytelen():
    s = PdfString(bytes([0xFE, 0xFF, 0xD8, 0x34, 0x20]))
    with pytest.raises(DecodeError):
        s.to_string_lossy()


def test_pdfstring_lossy_vs_ascii():
    s = PdfString(bytes([0xFE, 0xFF, 0xD8, 0x34]))
    with pytest.raises(DecodeError):
        s.to_string()

    s = PdfString(bytes([0xFE, 0xFF, 0x00, 0xE4]))
    assert s.to_string_lossy() == "ä"
    assert s.to_string() == "ä"

    s = PdfString(b"mit\xc3\xa4")
    assert s.to_string_lossy() == "mitä"
    assert s.to_string() == "mitä"

    s = PdfString(b"mit\xe4")
    assert s.to_string_lossy() == "mit" + REPLACEMENT
    with pytest.raises(DecodeError):
        s.to_string()


def test_utf16be_helpers():
    assert utf16be_to_string(b"\x00A\x00B") == "AB"
    assert utf16be_to_string_lossy(b"\xd8\x34") == REPLACEMENT
    with pytest.raises(DecodeError):
        utf16be_to_string(b"\xd8\x34")
    with pytest.raises(DecodeError):
        utf16be_to_string_lossy(b"\x00")


def test_pdfstring_serialize_literal_escapes():
    assert PdfString(b"a(b)\\").serialize() == "(a\\(b\\)\\\\)"


def test_pdfstring_serialize_hex_for_high_bytes():
    assert PdfString(b"\xff\x01").serialize() == "<ff01>"


def test_pdfstring_repr_and_bytes():
    s = PdfString(b'a"\x01\xff')
    assert repr(s) == '"a\\"\\1\\xff"'
    assert bytes(s) == b'a"\x01\xff'


def test_dictionary_sorted_iteration_and_access():
    d = Dictionary()
    d["Type"] = Name("XRef")
    d[Name("Size")] = 3
    assert list(d) == ["Size", "Type"]
    assert d["Size"] == 3
    assert d[Name("Type")] == "XRef"
    assert len(d) == 2
    del d["Size"]
    assert "Size" not in d
    with pytest.raises(KeyError):
        d["Size"]


def test_dictionary_serialize():
    d = Dictionary({"Type": Name("XRef"), "Size": 3})
    assert d.serialize(0) == "<<\n  /Size 3\n  /Type /XRef\n>>\n"


def test_dictionary_serialize_nested_array_and_ref():
    d = Dictionary({"Kids": [PlainRef(4, 0), None, True]})
    assert d.serialize(0) == "<<\n  /Kids     [4 0 R null true]\n>>\n"


def test_dictionary_str():
    d = Dictionary({"Type": Name("XRef"), "Size": 3, "Kids": [1, PlainRef(7, 0)]})
    assert str(d) == "</Kids=[1, @7], /Size=3, /Type=/XRef>"


def test_dictionary_require():
    d = Dictionary({"Length": 10})
    assert d.require("Stream", "Length") == 10
    assert len(d) == 0
    with pytest.raises(MissingEntryError) as info:
        d.require("Stream", "Length")
    assert info.value.typ == "Stream"
    assert info.value.field == "Length"


def test_dictionary_expect():
    d = Dictionary({"Type": Name("XRef"), "Size": 3})
    assert d.expect("XRefInfo", "Type", "XRef", True) is None
    assert d.expect("XRefInfo", "Subtype", "Image", False) is None
    with pytest.raises(KeyValueMismatchError) as info:
        d.expect("XRefInfo", "Type", "Page", True)
    assert info.value.found == "XRef"
    with pytest.raises(UnexpectedPrimitiveError) as info2:
        d.expect("XRefInfo", "Size", "Three", True)
    assert info2.value.found == "Integer"
    with pytest.raises(MissingEntryError):
        d.expect("XRefInfo", "Subtype", "Image", True)


def test_dictionary_equality():
    assert Dictionary({"A": 1}) == Dictionary({Name("A"): 1})
    assert Dictionary({"A": 1}) != Dictionary({"A": 2})


@pytest.mark.parametrize(
    "value, name",
    [
        (None, "Null"),
        (True, "Boolean"),
        (3, "Integer"),
        (1.5, "Number"),
        (PdfString(b"x"), "String"),
        (PdfStream(), "Stream"),
        (Dictionary(), "Dictionary"),
        ([], "Array"),
        (PlainRef(1, 0), "Reference"),
        (Name("x"), "Name"),
    ],
)
def test_debug_name(value, name):
    assert debug_name(value) == name


def test_debug_name_rejects_other_types():
    with pytest.raises(TypeError):
        debug_name(object())


def test_stream_cannot_be_serialized_without_data():
    d = Dictionary({"S": PdfStream(Dictionary({"Length": 0}))})
    with pytest.raises(PdfError):
        d.serialize(0)


def test_non_ascii_name_cannot_be_serialized():
    d = Dictionary({"N": Name("ä")})
    with pytest.raises(PdfError):
        d.serialize(0)