"""
Error handling for the gofront parser.

Syntax errors are never raised. Grammar routines report a Diagnostic through
the parser and return None; the factories below build those diagnostics so
message wording stays consistent across the grammar.

Error codes:
    P001  unexpected token
    P002  expected token not found
    P003  unsupported construct
    P004  unrecognized top-level token
    P005  lexical error surfaced through the lookahead buffer
"""

from ..lexer.tokens import Token, TokenKind
from ..lexer.errors import Diagnostic, LexerError


def describe(token: Token) -> str:
    """Human-readable description of a token for error messages."""
    if token.kind == TokenKind.EOF:
        return "end of input"
    if token.text:
        return f"'{token.text}'"
    return token.kind.name


def create_expected_token_error(expected: TokenKind, found: Token) -> Diagnostic:
    """Create the error recorded when a required token is missing."""
    return Diagnostic(
        message=f"expected next token to be {expected.name}, got {found.kind.name} instead",
        location=found.location,
        severity="error",
        code="P002",
    )


def create_unexpected_token_error(expected: str, found: Token) -> Diagnostic:
    """Create an error for a token that cannot appear at this position."""
    return Diagnostic(
        message=f"expected {expected} but found {describe(found)}",
        location=found.location,
        severity="error",
        code="P001",
    )


def create_message_error(message: str, found: Token, code: str = "P001") -> Diagnostic:
    """Create an error with a fixed message located at the given token."""
    return Diagnostic(
        message=message,
        location=found.location,
        severity="error",
        code=code,
    )


def create_unsupported_error(construct: str, found: Token) -> Diagnostic:
    """Create the error recorded by grammar productions that are not implemented."""
    return Diagnostic(
        message=f"{construct} parsing not implemented",
        location=found.location,
        severity="error",
        code="P003",
        help_text="This construct is recognized but the parser does not support it yet.",
    )


def create_unrecognized_token_error(found: Token) -> Diagnostic:
    """Create the fatal error for a token that cannot start a top-level item."""
    return Diagnostic(
        message=f"unrecognized token {describe(found)}",
        location=found.location,
        severity="error",
        code="P004",
    )


def create_lexical_error(error: LexerError) -> Diagnostic:
    """Wrap a lexer error surfaced while the parser was filling its lookahead."""
    return Diagnostic(
        message=error.message,
        location=error.location,
        severity="error",
        code="P005",
        help_text=error.diagnostic.help_text,
    )
