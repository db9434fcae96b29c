# pdfsyntax

A small, dependency-free library for the low-level syntax of PDF files:
splitting PDF bytes into lexemes, decoding literal and hexadecimal strings,
holding and serializing primitive values, building cross-reference tables
and writing path operators for content streams.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `pdfsyntax.primitive`: the primitive value types `Name`, `PdfString`,
  `PdfStream`, `Dictionary` and `PlainRef`, the UTF-16BE helpers
  `utf16be_to_string` and `utf16be_to_string_lossy`, `debug_name`, and the
  exception hierarchy rooted at `PdfError` (`EndOfInput`,
  `UnexpectedPrimitiveError`, `MissingEntryError`, `KeyValueMismatchError`,
  `UnexpectedLexemeError`, `HexDecodeError`, `NotFoundError`,
  `DecodeError`). Null, booleans, integers, reals and arrays are plain
  `None`, `bool`, `int`, `float` and `list`.
- `pdfsyntax.accessors`: typed access to primitives (`as_integer`,
  `as_u32`, `as_number`, `as_bool`, `as_name`, `as_string`, `as_array`,
  `as_dictionary`, `as_reference`, `as_stream`, `as_text`), decoding
  (`to_string`, `to_string_lossy`), `resolve` for references,
  serialization (`serialize`, `serialize_name`), display
  (`format_primitive`) and `Date.from_primitive` for `D:YYYYMMDDHHmmSS`
  strings.
- `pdfsyntax.lexer`: `Lexer`, which walks forward and backward over the
  lexemes of a byte buffer, and `Substr`, a lexeme with its file offset.
- `pdfsyntax.strings`: `StringLexer` and `HexStringLexer`, iterators over
  the bytes of `(...)` and `<...>` string bodies.
- `pdfsyntax.xref`: the entry types `Free`, `Raw`, `InStream`, `Promised`
  and `Invalid`, `XRefSection`, `XRefTable` (including `write_stream`,
  which encodes entries as cross-reference stream data) and `XRefInfo`,
  which reads and writes `/XRef` stream dictionaries.
- `pdfsyntax.path`: `PathBuilder`, which writes `m`, `l`, `c`, `v`, `y`,
  `h` and fill operators to a text stream, and `FillMode`.

## Examples

Lexing:

```python
from pdfsyntax.lexer import Lexer

lx = Lexer(b"<</Count 3/Kids[4 0 R]>>")
print(lx.next().to_string())   # <<
print(lx.next().to_string())   # /Count
print(lx.next().to_string())   # 3
print(lx.peek().to_string())   # /Kids
```

Decoding a literal string body (starting after the opening parenthesis):

```python
from pdfsyntax.strings import StringLexer

print(bytes(StringLexer(b"a\\nb(c))rest")))   # b'a\nb(c)'
```

Building and serializing a dictionary:

```python
from pdfsyntax.primitive import Dictionary, Name

d = Dictionary()
d["Type"] = Name("Page")
d["Count"] = 3
print(d.serialize(), end="")
# <<
#   /Count 3
#   /Type /Page
# >>
```

Writing path operators:

```python
import io
from pdfsyntax.path import PathBuilder, FillMode

out = io.StringIO()
path = PathBuilder(out, (0, 0))
path.move_to((0, 0))
path.line_to((10, 0))
path.close()
path.fill(FillMode.EVEN_ODD)
print(out.getvalue(), end="")
# 0 0 m
# 10 0 l
# h
# f*
```

Errors are reported by raising subclasses of
`pdfsyntax.primitive.PdfError`, for example `EndOfInput` when input runs
out or `UnexpectedPrimitiveError` when a value has the wrong type.

## What it does not do

- It does not turn lexemes into primitive objects: there is a lexer and
  string decoders, but no function that reads a whole dictionary, array or
  indirect object from bytes.
- It does not read cross-reference tables, cross-reference streams or
  trailers out of a file; `XRefTable` and `XRefSection` are filled by the
  caller.
- It does not open PDF files, decrypt them, or hold or decode stream
  data: a `PdfStream` records only its dictionary and the byte range of
  its data, and serializing one raises `PdfError`.
- There is no command-line program.