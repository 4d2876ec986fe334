"""
Token definitions for the gofront lexer.

This module defines every token kind the lexer can produce:
- Keywords (var, const, func, ...)
- Punctuation and operators, including the two-character forms (<=, >=, :=)
- Literals (names, strings, numbers)
- Comments, which the parser's lookahead buffer filters out
"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Dict


class TokenKind(Enum):
    """
    Closed enumeration of token kinds.

    Organized by category for clarity.
    """

    # ========================================================================
    # Special Tokens
    # ========================================================================
    EOF = auto()                    # End of input
    UNKNOWN = auto()                # Only ever attached to a lexer error
    COMMENT = auto()                # // line comment

    # ========================================================================
    # Literals
    # ========================================================================
    NAME = auto()                   # foo, _bar, x1
    STRING = auto()                 # "verbatim text"
    NUMBER = auto()                 # 42, .5, 1.5e10

    # ========================================================================
    # Keywords
    # ========================================================================
    VAR = auto()                    # var
    CONST = auto()                  # const
    FUNC = auto()                   # func
    STRUCT = auto()                 # struct
    TYPE = auto()                   # type
    IF = auto()                     # if
    ELSE = auto()                   # else
    FOR = auto()                    # for
    PACKAGE = auto()                # package
    IMPORT = auto()                 # import
    INTERFACE = auto()              # interface

    # ========================================================================
    # Operators
    # ========================================================================
    ASSIGN = auto()                 # =
    DEFINE = auto()                 # :=
    PLUS = auto()                   # +
    MINUS = auto()                  # -
    ASTERISK = auto()               # *
    SLASH = auto()                  # /
    PERCENT = auto()                # %
    LT = auto()                     # <
    GT = auto()                     # >
    LE = auto()                     # <=
    GE = auto()                     # >=

    # ========================================================================
    # Punctuation and Delimiters
    # ========================================================================
    LPAREN = auto()                 # (
    RPAREN = auto()                 # )
    LBRACKET = auto()               # [
    RBRACKET = auto()               # ]
    LBRACE = auto()                 # {
    RBRACE = auto()                 # }
    COMMA = auto()                  # ,
    DOT = auto()                    # .
    COLON = auto()                  # :
    SEMICOLON = auto()              # ;


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for diagnostics; never part of token or AST equality.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"

    def __repr__(self) -> str:
        return f"SourceLocation({self.filename!r}, {self.line}, {self.column}, {self.offset})"


NO_LOCATION = SourceLocation("<unknown>", 0, 0, 0)


@dataclass(frozen=True)
class Token:
    """
    A lexical token: its kind and the literal text it was read from.

    For names, strings, numbers and comments `text` is the lexeme (strings
    without quotes, comments without the leading //). For fixed tokens it is
    the canonical spelling.
    """
    kind: TokenKind
    text: str
    location: SourceLocation = field(default=NO_LOCATION, compare=False)

    def __str__(self) -> str:
        if self.text:
            return f"{self.kind.name}({self.text!r})"
        return self.kind.name

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.location!r})"


# Lookup tables, built once at import time

KEYWORDS: Dict[str, TokenKind] = {
    "var": TokenKind.VAR,
    "const": TokenKind.CONST,
    "func": TokenKind.FUNC,
    "struct": TokenKind.STRUCT,
    "type": TokenKind.TYPE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "for": TokenKind.FOR,
    "package": TokenKind.PACKAGE,
    "import": TokenKind.IMPORT,
    "interface": TokenKind.INTERFACE,
}

# Single-character punctuation that never starts a longer token
PUNCTUATION: Dict[str, TokenKind] = {
    "=": TokenKind.ASSIGN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "[": TokenKind.LBRACKET,
    "]": TokenKind.RBRACKET,
    "%": TokenKind.PERCENT,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    ";": TokenKind.SEMICOLON,
    "*": TokenKind.ASTERISK,
}

# Characters that may be followed by '=' to form a two-character operator:
# first char -> (kind alone, kind with '=')
TWO_CHAR_OPERATORS = {
    "<": (TokenKind.LT, TokenKind.LE),
    ">": (TokenKind.GT, TokenKind.GE),
    ":": (TokenKind.COLON, TokenKind.DEFINE),
}

WHITESPACE = frozenset(" \t\n\r")
