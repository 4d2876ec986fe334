"""
Tests for the parser's bounded lookahead buffer.
"""

import os
import sys

import pytest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from gofront.lexer import Lexer, TokenKind
from gofront.parser import TokenBuffer


def make_buffer(source, depth=5):
    errors = []
    return TokenBuffer(Lexer(source), errors.append, depth), errors


class TestPeekAndAdvance:

    def test_comments_are_invisible(self):
        buffer, errors = make_buffer("first // comment\n second")
        assert buffer.peek_type(0) == TokenKind.NAME
        assert buffer.peek_type(1) == TokenKind.NAME
        assert buffer.advance().text == "first"
        assert buffer.peek().text == "second"
        assert buffer.peek_type(1) == TokenKind.EOF
        assert errors == []

    def test_comment_only_input(self):
        buffer, _ = make_buffer("// one\n// two\n")
        assert buffer.peek_type() == TokenKind.EOF

    def test_peek_past_end_is_eof(self):
        buffer, _ = make_buffer("a")
        assert buffer.peek_type(3) == TokenKind.EOF
        assert buffer.peek_type(0) == TokenKind.NAME

    def test_advance_at_end_keeps_returning_eof(self):
        buffer, _ = make_buffer("")
        assert buffer.advance().kind == TokenKind.EOF
        assert buffer.advance().kind == TokenKind.EOF
        assert buffer.peek_type() == TokenKind.EOF

    def test_index_beyond_depth_is_rejected(self):
        buffer, _ = make_buffer("a b c", depth=3)
        buffer.peek(2)
        with pytest.raises(ValueError):
            buffer.peek(3)
        with pytest.raises(ValueError):
            buffer.peek(-1)

    def test_depth_must_be_positive(self):
        with pytest.raises(ValueError):
            make_buffer("a", depth=0)

    def test_refill_is_lazy(self):
        buffer, errors = make_buffer("a ?")
        assert buffer.peek_type(0) == TokenKind.NAME
        # The bad character has not been read yet
        assert errors == []


class TestExpect:

    def test_expect_consumes_on_match(self):
        buffer, errors = make_buffer("( x")
        assert buffer.expect(TokenKind.LPAREN)
        assert buffer.peek_type() == TokenKind.NAME
        assert errors == []

    def test_expect_leaves_buffer_on_mismatch(self):
        buffer, errors = make_buffer("x")
        assert not buffer.expect(TokenKind.LPAREN)
        assert buffer.peek_type() == TokenKind.NAME
        assert errors == []

    def test_expect_sequence_success(self):
        buffer, _ = make_buffer("{ } x")
        assert buffer.expect_sequence(TokenKind.LBRACE, TokenKind.RBRACE)
        assert buffer.peek().text == "x"

    def test_expect_sequence_failure_consumes_nothing(self):
        buffer, errors = make_buffer("{ x }")
        assert not buffer.expect_sequence(TokenKind.LBRACE, TokenKind.RBRACE)
        assert buffer.peek_type() == TokenKind.LBRACE
        assert errors == []

    def test_expect_sequence_longer_than_window(self):
        buffer, _ = make_buffer("a b c", depth=3)
        assert buffer.expect_sequence(TokenKind.NAME, TokenKind.NAME)
        with pytest.raises(ValueError):
            buffer.expect_sequence(TokenKind.NAME, TokenKind.NAME, TokenKind.NAME)

    def test_require_reports_mismatch(self):
        buffer, errors = make_buffer("x")
        assert not buffer.require(TokenKind.RPAREN)
        assert [e.message for e in errors] == [
            "expected next token to be RPAREN, got NAME instead"
        ]
        assert buffer.peek_type() == TokenKind.NAME

    def test_require_with_extra_message(self):
        buffer, errors = make_buffer("(")
        assert not buffer.require(TokenKind.NAME, "expected name of function")
        assert [e.message for e in errors] == [
            "expected next token to be NAME, got LPAREN instead",
            "expected name of function",
        ]


class TestLexerErrors:

    def test_lexer_error_is_reported_and_input_ends(self):
        buffer, errors = make_buffer("a ? b")
        assert buffer.peek_type(0) == TokenKind.NAME
        assert buffer.peek_type(1) == TokenKind.UNKNOWN
        assert buffer.peek_type(2) == TokenKind.EOF
        assert [e.message for e in errors] == ["unknown token '?'"]
        assert errors[0].code == "P005"

    def test_unterminated_string_surfaces_once(self):
        buffer, errors = make_buffer('"abc')
        assert buffer.advance().kind == TokenKind.UNKNOWN
        assert buffer.peek_type() == TokenKind.EOF
        assert buffer.peek_type() == TokenKind.EOF
        assert [e.message for e in errors] == ["unterminated string"]
