"""
Error handling for the gofront lexer.

Provides the shared Diagnostic record used by both the lexer and the parser,
and the exception raised when the lexer cannot produce a token.

Error codes:
    L001  invalid character
    L002  unterminated string literal
    L003  input is not valid UTF-8
"""

from typing import Optional
from dataclasses import dataclass

from .tokens import SourceLocation, Token, TokenKind


@dataclass(frozen=True)
class Diagnostic:
    """A single reported problem (error or warning) with its location."""
    message: str
    location: SourceLocation
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.severity.upper()}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        return result


class LexerError(Exception):
    """
    Exception raised when the lexer cannot produce a token.

    Contains detailed diagnostic information for error reporting.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        text: str = "",
    ):
        super().__init__(message)
        self.message = message
        # The UNKNOWN token that stands in for the unreadable input
        self.token = Token(TokenKind.UNKNOWN, text, location)
        self.diagnostic = Diagnostic(
            message=message,
            location=location,
            severity="error",
            code=code,
            help_text=help_text,
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return self.message


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for a character that cannot start any token."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in source code."
    else:
        help_text = f"Non-printable character (U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"unknown token '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
        text=char,
    )


def create_unterminated_string_error(location: SourceLocation) -> LexerError:
    """Create an error for a string literal that reaches end of input."""
    return LexerError(
        message="unterminated string",
        location=location,
        code="L002",
        help_text='String literals must be closed with a matching " quote.',
    )


def create_invalid_encoding_error(location: SourceLocation) -> LexerError:
    """Create an error for input bytes that do not decode as UTF-8."""
    return LexerError(
        message="invalid UTF-8 encoding",
        location=location,
        code="L003",
        help_text="Source files must be UTF-8; lexing stops at the first undecodable byte.",
    )
