"""Low-level PDF syntax: lexer, string decoding, primitives, cross-reference tables and path operators."""

__version__ = "0.1.0"