"""
Bounded lookahead over the lexer's token stream.

The parser never talks to the lexer directly: it peeks into a window of at
most `depth` upcoming tokens and consumes them one at a time. Comment tokens
are dropped while refilling, so grammar routines never see them.
"""

import logging
from collections import deque
from typing import Callable, Deque, Optional

from ..lexer.lexer import Lexer
from ..lexer.tokens import Token, TokenKind
from ..lexer.errors import Diagnostic, LexerError
from .errors import create_expected_token_error, create_lexical_error


logger = logging.getLogger(__name__)

DEFAULT_LOOKAHEAD = 5


class TokenBuffer:
    """
    Fixed-capacity queue of upcoming tokens.

    Once the lexer reports EOF, or raises a LexerError, the buffer stops
    pulling and every position past the buffered tokens reads as EOF. A lexer
    error is handed to `report` and its UNKNOWN token is queued, so the
    grammar rejects it at the point where the bad input appeared.
    """

    def __init__(self, lexer: Lexer, report: Callable[[Diagnostic], None],
                 depth: int = DEFAULT_LOOKAHEAD):
        if depth < 1:
            raise ValueError(f"lookahead depth must be positive, got {depth}")

        self.lexer = lexer
        self.report = report
        self.depth = depth
        self._queue: Deque[Token] = deque()
        self._exhausted = False
        self._eof: Optional[Token] = None

    def peek(self, index: int = 0) -> Token:
        """Return the token `index` positions ahead without consuming it."""
        if not 0 <= index < self.depth:
            raise ValueError(f"lookahead index {index} outside 0..{self.depth - 1}")

        self._fill(index + 1)
        if index < len(self._queue):
            return self._queue[index]
        return self._eof_token()

    def peek_type(self, index: int = 0) -> TokenKind:
        return self.peek(index).kind

    def advance(self) -> Token:
        """Consume and return the front token (EOF stays put at end of input)."""
        self._fill(1)
        if not self._queue:
            return self._eof_token()

        token = self._queue.popleft()
        logger.debug("consumed %s", token)
        return token

    def expect(self, kind: TokenKind) -> bool:
        """Consume the next token if it is of `kind`; never records an error."""
        if self.peek_type() != kind:
            return False
        self.advance()
        return True

    def expect_sequence(self, *kinds: TokenKind) -> bool:
        """Consume the next len(kinds) tokens only if all of them match, in order."""
        if len(kinds) + 1 > self.depth:
            raise ValueError(
                f"cannot match {len(kinds)} tokens with lookahead depth {self.depth}"
            )

        for index, kind in enumerate(kinds):
            if self.peek_type(index) != kind:
                return False

        for _ in kinds:
            self.advance()
        return True

    def require(self, kind: TokenKind, message: Optional[str] = None) -> bool:
        """
        Like expect(), but a mismatch is reported as an error.

        Args:
            kind: Token kind that must come next
            message: Extra message reported after the standard one
        """
        if self.expect(kind):
            return True

        found = self.peek()
        self.report(create_expected_token_error(kind, found))
        if message:
            self.report(Diagnostic(message, found.location, "error", "P002"))
        return False

    def _fill(self, count: int):
        """Pull from the lexer until `count` tokens are buffered or input ends."""
        while len(self._queue) < count and not self._exhausted:
            try:
                token = self.lexer.next_token()
            except LexerError as e:
                # The UNKNOWN token is the last thing the grammar sees;
                # everything after it reads as EOF
                logger.debug("lexer error during refill: %s", e)
                self.report(create_lexical_error(e))
                self._queue.append(e.token)
                self._exhausted = True
                break

            if token.kind == TokenKind.COMMENT:
                continue
            if token.kind == TokenKind.EOF:
                self._eof = token
                self._exhausted = True
                break

            self._queue.append(token)

    def _eof_token(self) -> Token:
        if self._eof is None:
            self._eof = Token(TokenKind.EOF, "", self.lexer.location())
        return self._eof
