"""
Tests for the gofront lexer.
"""

import io
import os
import sys

import pytest

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from gofront.lexer import Lexer, LexerError, TokenKind, tokenize_string


def kinds(source):
    return [token.kind for token in tokenize_string(source)]


class TestSingleTokens:
    """Every fixed spelling lexes to exactly one token followed by EOF."""

    PUNCTUATION = [
        ("=", TokenKind.ASSIGN),
        ("{", TokenKind.LBRACE),
        ("}", TokenKind.RBRACE),
        ("(", TokenKind.LPAREN),
        (")", TokenKind.RPAREN),
        ("[", TokenKind.LBRACKET),
        ("]", TokenKind.RBRACKET),
        ("%", TokenKind.PERCENT),
        ("+", TokenKind.PLUS),
        ("-", TokenKind.MINUS),
        (",", TokenKind.COMMA),
        (".", TokenKind.DOT),
        (":", TokenKind.COLON),
        (";", TokenKind.SEMICOLON),
        ("*", TokenKind.ASTERISK),
        ("/", TokenKind.SLASH),
        ("<", TokenKind.LT),
        (">", TokenKind.GT),
        ("<=", TokenKind.LE),
        (">=", TokenKind.GE),
        (":=", TokenKind.DEFINE),
    ]

    KEYWORDS = [
        ("var", TokenKind.VAR),
        ("const", TokenKind.CONST),
        ("func", TokenKind.FUNC),
        ("struct", TokenKind.STRUCT),
        ("type", TokenKind.TYPE),
        ("if", TokenKind.IF),
        ("else", TokenKind.ELSE),
        ("for", TokenKind.FOR),
        ("package", TokenKind.PACKAGE),
        ("import", TokenKind.IMPORT),
        ("interface", TokenKind.INTERFACE),
    ]

    @pytest.mark.parametrize("text,kind", PUNCTUATION + KEYWORDS)
    def test_fixed_token(self, text, kind):
        tokens = tokenize_string(text)
        assert [t.kind for t in tokens] == [kind, TokenKind.EOF]
        assert tokens[0].text == text

    def test_empty_input_is_eof(self):
        assert kinds("") == [TokenKind.EOF]
        assert kinds(" \t\r\n ") == [TokenKind.EOF]

    def test_two_char_operators_split_from_neighbours(self):
        assert kinds("a<b") == [TokenKind.NAME, TokenKind.LT, TokenKind.NAME, TokenKind.EOF]
        assert kinds("a<=b") == [TokenKind.NAME, TokenKind.LE, TokenKind.NAME, TokenKind.EOF]
        assert kinds("x:=1") == [TokenKind.NAME, TokenKind.DEFINE, TokenKind.NUMBER, TokenKind.EOF]
        assert kinds("x: =") == [TokenKind.NAME, TokenKind.COLON, TokenKind.ASSIGN, TokenKind.EOF]


class TestLiterals:

    def test_identifiers(self):
        tokens = tokenize_string("_foo1 variable Println")
        assert [t.kind for t in tokens[:-1]] == [TokenKind.NAME] * 3
        assert [t.text for t in tokens[:-1]] == ["_foo1", "variable", "Println"]

    @pytest.mark.parametrize("text", [".5", "5.5e10", "42", "1E5", "1..2"])
    def test_number_is_one_token(self, text):
        tokens = tokenize_string(text)
        assert [t.kind for t in tokens] == [TokenKind.NUMBER, TokenKind.EOF]
        assert tokens[0].text == text

    def test_dot_before_name_is_punctuation(self):
        tokens = tokenize_string("a.b")
        assert [t.kind for t in tokens] == [
            TokenKind.NAME, TokenKind.DOT, TokenKind.NAME, TokenKind.EOF
        ]

    def test_string_is_verbatim(self):
        tokens = tokenize_string('"hello world" "a\\n"')
        assert tokens[0].kind == TokenKind.STRING
        assert tokens[0].text == "hello world"
        assert tokens[1].text == "a\\n"

    def test_unterminated_string(self):
        lexer = Lexer('"abc')
        with pytest.raises(LexerError) as info:
            lexer.next_token()
        assert str(info.value) == "unterminated string"
        assert info.value.diagnostic.code == "L002"
        assert info.value.token.kind == TokenKind.UNKNOWN

    def test_line_comment(self):
        tokens = tokenize_string("x // a note\ny")
        assert [t.kind for t in tokens] == [
            TokenKind.NAME, TokenKind.COMMENT, TokenKind.NAME, TokenKind.EOF
        ]
        assert tokens[1].text == " a note"

    def test_comment_at_end_of_input(self):
        tokens = tokenize_string("//done")
        assert tokens[0].kind == TokenKind.COMMENT
        assert tokens[0].text == "done"
        assert tokens[1].kind == TokenKind.EOF


class TestErrors:

    def test_unknown_character(self):
        lexer = Lexer("? x")
        with pytest.raises(LexerError) as info:
            lexer.next_token()
        assert str(info.value) == "unknown token '?'"
        assert info.value.diagnostic.code == "L001"
        assert info.value.token.kind == TokenKind.UNKNOWN
        assert info.value.token.text == "?"

        # The bad character was consumed
        assert lexer.next_token().text == "x"

    def test_tokenize_recovers(self):
        lexer = Lexer("a ? b")
        tokens = lexer.tokenize()
        assert [t.kind for t in tokens] == [TokenKind.NAME, TokenKind.NAME, TokenKind.EOF]
        assert lexer.has_errors()
        assert len(lexer.errors) == 1

    def test_tokenize_string_raises_first_error(self):
        with pytest.raises(LexerError):
            tokenize_string("a @ b")

    def test_identifiers_are_ascii_only(self):
        lexer = Lexer("é x")
        with pytest.raises(LexerError) as info:
            lexer.next_token()
        assert str(info.value) == "unknown token 'é'"
        assert lexer.next_token().text == "x"

    def test_non_ascii_letter_ends_identifier(self):
        lexer = Lexer("naïve")
        assert lexer.next_token().text == "na"
        with pytest.raises(LexerError):
            lexer.next_token()


class TestEncoding:

    def test_invalid_utf8_bytes(self):
        lexer = Lexer(b"package \xff")
        assert lexer.next_token().kind == TokenKind.PACKAGE

        with pytest.raises(LexerError) as info:
            lexer.next_token()
        assert str(info.value) == "invalid UTF-8 encoding"
        assert info.value.diagnostic.code == "L003"
        assert info.value.location.column == 9

        # Reported once, then input reads as ended
        assert lexer.next_token().kind == TokenKind.EOF

    def test_invalid_utf8_inside_string(self):
        lexer = Lexer(b'"ab\xfe"')
        with pytest.raises(LexerError) as info:
            lexer.next_token()
        assert info.value.diagnostic.code == "L003"

    def test_undecodable_stream(self):
        stream = io.TextIOWrapper(io.BytesIO(b"var \xff"), encoding="utf-8")
        lexer = Lexer(stream)
        with pytest.raises(LexerError) as info:
            lexer.next_token()
        assert info.value.diagnostic.code == "L003"
        assert lexer.next_token().kind == TokenKind.EOF

    def test_tokenize_collects_encoding_error(self):
        lexer = Lexer(b"a \xff\xfe b")
        tokens = lexer.tokenize()
        assert [t.kind for t in tokens] == [TokenKind.NAME, TokenKind.EOF]
        assert [e.diagnostic.code for e in lexer.errors] == ["L003"]


class TestSources:

    def test_locations(self):
        tokens = tokenize_string("a\n  bb c", "demo.src")
        assert (tokens[1].location.line, tokens[1].location.column) == (2, 3)
        assert (tokens[2].location.line, tokens[2].location.column) == (2, 6)
        assert tokens[1].location.filename == "demo.src"
        assert str(tokens[0].location) == "demo.src:1:1"

    def test_location_not_part_of_equality(self):
        first = tokenize_string("x")[0]
        second = tokenize_string("\n\n   x")[0]
        assert first == second

    def test_stream_input(self):
        lexer = Lexer(io.StringIO("var x"))
        assert [t.kind for t in lexer] == [TokenKind.VAR, TokenKind.NAME, TokenKind.EOF]

    def test_bytes_input(self):
        lexer = Lexer(b"const y")
        assert [t.kind for t in lexer] == [TokenKind.CONST, TokenKind.NAME, TokenKind.EOF]

    def test_eof_repeats(self):
        lexer = Lexer("a")
        lexer.next_token()
        assert lexer.next_token().kind == TokenKind.EOF
        assert lexer.next_token().kind == TokenKind.EOF
