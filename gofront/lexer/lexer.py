"""
gofront lexer - turns a character stream into tokens.

The lexer reads its input strictly forward, one character at a time, keeping
a single character of lookahead. It knows nothing about the grammar: comments
come out as COMMENT tokens and it is up to the consumer to skip them.
"""

import io
from typing import Iterator, List, TextIO, Union

from .tokens import (
    Token, TokenKind, SourceLocation, KEYWORDS, PUNCTUATION, TWO_CHAR_OPERATORS,
    WHITESPACE
)
from .errors import (
    LexerError, create_invalid_character_error, create_invalid_encoding_error,
    create_unterminated_string_error
)


Source = Union[str, bytes, TextIO]


class Lexer:
    """
    Lexical analyzer.

    Call next_token() repeatedly; each call returns exactly one token, the EOF
    token once input is exhausted, or raises LexerError. The offending input
    is consumed before the error is raised, so a caller may keep going.
    """

    def __init__(self, source: Source, filename: str = "<unknown>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source text, UTF-8 bytes, or a readable text stream
            filename: Name of source file for error reporting
        """
        # Set once input stops at bytes that are not UTF-8; reported as a
        # LexerError at the point where the readable text runs out
        self._undecodable = False
        self._undecodable_reported = False

        if isinstance(source, bytes):
            try:
                source = source.decode("utf-8")
            except UnicodeDecodeError as e:
                source = source[:e.start].decode("utf-8")
                self._undecodable = True
        if isinstance(source, str):
            source = io.StringIO(source)

        self.stream = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self.errors: List[LexerError] = []

        # '' marks end of input
        self.current = self._read_char()
        self.next_char = self._read_char() if self.current else ""

    def next_token(self) -> Token:
        """Read and return the next token from the input."""
        self._skip_whitespace()

        location = self.location()
        char = self.current

        if not char:
            self._check_encoding()
            return Token(TokenKind.EOF, "", location)

        if char in TWO_CHAR_OPERATORS:
            single, double = TWO_CHAR_OPERATORS[char]
            self._advance()
            if self.current == "=":
                self._advance()
                return Token(double, char + "=", location)
            return Token(single, char, location)

        if char == "/":
            self._advance()
            if self.current == "/":
                self._advance()
                return Token(TokenKind.COMMENT, self._read_line_comment(), location)
            return Token(TokenKind.SLASH, "/", location)

        if char == '"':
            return self._read_string(location)

        # A leading '.' only starts a number when a digit follows
        if _is_digit(char) or (char == "." and _is_digit(self.next_char)):
            return self._read_number(location)

        if char in PUNCTUATION:
            self._advance()
            return Token(PUNCTUATION[char], char, location)

        if _is_identifier_start(char):
            return self._read_identifier_or_keyword(location)

        self._advance()
        raise create_invalid_character_error(char, location)

    def __iter__(self) -> Iterator[Token]:
        """Lazily yield tokens up to and including EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind == TokenKind.EOF:
                return

    def tokenize(self) -> List[Token]:
        """
        Tokenize the rest of the input.

        Lexer errors are collected in self.errors and lexing resumes after
        the offending input.

        Returns:
            List of tokens ending with the EOF token
        """
        tokens: List[Token] = []
        self.errors.clear()

        while True:
            try:
                token = self.next_token()
            except LexerError as e:
                self.errors.append(e)
                continue

            tokens.append(token)
            if token.kind == TokenKind.EOF:
                return tokens

    def _read_line_comment(self) -> str:
        """Read comment text up to, but not including, the newline."""
        chars = []
        while self.current and self.current != "\n":
            chars.append(self.current)
            self._advance()
        return "".join(chars)

    def _read_string(self, location: SourceLocation) -> Token:
        """Read a string literal verbatim; there are no escape sequences."""
        self._advance()  # Skip opening quote

        chars = []
        while self.current and self.current != '"':
            chars.append(self.current)
            self._advance()

        if not self.current:
            self._check_encoding()
            raise create_unterminated_string_error(location)

        self._advance()  # Skip closing quote
        return Token(TokenKind.STRING, "".join(chars), location)

    def _read_number(self, location: SourceLocation) -> Token:
        """
        Read a number literal.

        Only the character class is checked (digits, '.', 'e', 'E'); forms
        such as 1..2 are accepted here and left for a later stage to reject.
        """
        chars = []
        while _is_digit(self.current) or self.current in (".", "e", "E"):
            chars.append(self.current)
            self._advance()
        return Token(TokenKind.NUMBER, "".join(chars), location)

    def _read_identifier_or_keyword(self, location: SourceLocation) -> Token:
        """Read an identifier and resolve it against the keyword table."""
        chars = []
        while self.current and _is_identifier_continue(self.current):
            chars.append(self.current)
            self._advance()

        lexeme = "".join(chars)
        return Token(KEYWORDS.get(lexeme, TokenKind.NAME), lexeme, location)

    def _skip_whitespace(self):
        while self.current in WHITESPACE:
            self._advance()

    def _advance(self):
        """Advance position by one character, updating line/column."""
        if not self.current:
            return

        if self.current == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.pos += 1

        self.current = self.next_char
        self.next_char = self._read_char() if self.current else ""

    def _read_char(self) -> str:
        """Read one character from the stream; '' at end of input."""
        try:
            return self.stream.read(1)
        except UnicodeDecodeError:
            # Nothing past an undecodable chunk is read
            self._undecodable = True
            self.stream = io.StringIO()
            return ""

    def _check_encoding(self):
        """Raise the encoding error once if input ended at undecodable bytes."""
        if self._undecodable and not self._undecodable_reported:
            self._undecodable_reported = True
            raise create_invalid_encoding_error(self.location())

    def location(self) -> SourceLocation:
        """Location of the next unread character."""
        return SourceLocation(self.filename, self.line, self.column, self.pos)

    def has_errors(self) -> bool:
        """Check if tokenize() encountered any errors."""
        return len(self.errors) > 0


def _is_digit(char: str) -> bool:
    return len(char) == 1 and "0" <= char <= "9"


def _is_identifier_start(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def _is_identifier_continue(char: str) -> bool:
    return _is_identifier_start(char) or _is_digit(char)


def tokenize_string(source: Union[str, bytes], filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code, as text or UTF-8 bytes
        filename: Filename for error reporting

    Returns:
        List of tokens, comments included, ending with EOF

    Raises:
        LexerError: If lexing fails
    """
    lexer = Lexer(source, filename)
    tokens = lexer.tokenize()

    if lexer.has_errors():
        # Raise the first error encountered
        raise lexer.errors[0]

    return tokens


def tokenize_file(filepath: str) -> List[Token]:
    """
    Convenience function to tokenize a source file.

    Raises:
        LexerError: If lexing fails
        OSError: If file cannot be read
    """
    with open(filepath, "rb") as f:
        source = f.read()

    return tokenize_string(source, filepath)
