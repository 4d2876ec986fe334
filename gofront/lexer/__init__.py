"""
gofront Lexer Package

Implements the tokenizer for the gofront source language.

Key Features:
- Pull-based API: one token per next_token() call
- Reads any forward-only text stream, one character at a time
- Two-character operators (<=, >=, :=) and // line comments
- Verbatim string literals and permissive number literals
- Source location tracking for diagnostics
"""

from .tokens import Token, TokenKind, SourceLocation, KEYWORDS
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import Diagnostic, LexerError

__all__ = [
    "Lexer",
    "Token",
    "TokenKind",
    "SourceLocation",
    "KEYWORDS",
    "Diagnostic",
    "LexerError",
    "tokenize_string",
    "tokenize_file",
]
