"""
Scanner Test Suite
==================

Tests for turning Lox source text into tokens, with emphasis on the
newline handling the parser's terminator rule depends on.
"""

import pytest

from loxparse.errors import InvalidCharacterError, LoxSyntaxError, UnterminatedStringError
from loxparse.scanner import Scanner, scan_tokens
from loxparse.tokens import TokenType


def types_of(source):
    return [token.type for token in scan_tokens(source)]


# =============================================================================
# Basic Tokens
# =============================================================================

class TestBasicTokens:
    """Tests for punctuation, operators and keywords."""

    def test_empty_source(self):
        """Empty source should produce only EOF."""
        tokens = scan_tokens("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_tokenize_generator_ends_with_eof(self):
        """The generator form also ends with a single EOF token."""
        tokens = list(Scanner("print 1", "t.lox").tokenize())
        assert tokens[-1].type == TokenType.EOF
        assert [t.type for t in tokens].count(TokenType.EOF) == 1

    def test_simple_statement(self):
        assert types_of("print 1;") == [
            TokenType.PRINT,
            TokenType.NUMBER,
            TokenType.SEMICOLON,
            TokenType.EOF,
        ]

    def test_punctuation(self):
        assert types_of("(){},.-+;/*") == [
            TokenType.LEFT_PAREN,
            TokenType.RIGHT_PAREN,
            TokenType.LEFT_BRACE,
            TokenType.RIGHT_BRACE,
            TokenType.COMMA,
            TokenType.DOT,
            TokenType.MINUS,
            TokenType.PLUS,
            TokenType.SEMICOLON,
            TokenType.SLASH,
            TokenType.STAR,
            TokenType.EOF,
        ]

    def test_one_and_two_character_operators(self):
        assert types_of("! != = == < <= > >=") == [
            TokenType.BANG,
            TokenType.BANG_EQUAL,
            TokenType.EQUAL,
            TokenType.EQUAL_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.EOF,
        ]

    def test_keywords_and_identifiers(self):
        """Keywords are exact matches; longer names are identifiers."""
        tokens = scan_tokens("var variable _x orchid or")
        assert [t.type for t in tokens] == [
            TokenType.VAR,
            TokenType.IDENTIFIER,
            TokenType.IDENTIFIER,
            TokenType.IDENTIFIER,
            TokenType.OR,
            TokenType.EOF,
        ]
        assert tokens[2].lexeme == "_x"

    def test_columns(self):
        tokens = scan_tokens("var x")
        assert tokens[0].column == 1
        assert tokens[1].column == 5


# =============================================================================
# Newlines and Comments
# =============================================================================

class TestNewlines:
    """Newlines are significant and become EOL tokens."""

    def test_newline_is_eol(self):
        tokens = scan_tokens("a\nb")
        assert [t.type for t in tokens] == [
            TokenType.IDENTIFIER,
            TokenType.EOL,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]
        assert tokens[2].line == 2
        assert tokens[2].column == 1

    def test_blank_lines_give_one_eol_each(self):
        assert types_of("a\n\n") == [
            TokenType.IDENTIFIER,
            TokenType.EOL,
            TokenType.EOL,
            TokenType.EOF,
        ]

    def test_carriage_return_is_whitespace(self):
        assert types_of("a\r\nb") == [
            TokenType.IDENTIFIER,
            TokenType.EOL,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_comment_keeps_newline(self):
        """A comment runs to end of line but the newline still counts."""
        assert types_of("// hello\nprint") == [
            TokenType.EOL,
            TokenType.PRINT,
            TokenType.EOF,
        ]

    def test_comment_at_end_of_input(self):
        assert types_of("1 // trailing") == [TokenType.NUMBER, TokenType.EOF]

    def test_slash_is_not_comment(self):
        assert types_of("a / b") == [
            TokenType.IDENTIFIER,
            TokenType.SLASH,
            TokenType.IDENTIFIER,
            TokenType.EOF,
        ]

    def test_eof_line_after_trailing_newline(self):
        tokens = scan_tokens("a\n")
        assert tokens[-1].line == 2


# =============================================================================
# Literals
# =============================================================================

class TestLiterals:
    """Tests for number and string literals."""

    def test_integer_number_is_float(self):
        token = scan_tokens("123")[0]
        assert token.type == TokenType.NUMBER
        assert token.lexeme == "123"
        assert token.literal == 123.0
        assert isinstance(token.literal, float)

    def test_fractional_number(self):
        assert scan_tokens("3.25")[0].literal == 3.25

    def test_trailing_dot_is_separate(self):
        """A '.' with no digit after it is not part of the number."""
        assert types_of("1.") == [TokenType.NUMBER, TokenType.DOT, TokenType.EOF]

    def test_string(self):
        token = scan_tokens('"hi there"')[0]
        assert token.type == TokenType.STRING
        assert token.lexeme == '"hi there"'
        assert token.literal == "hi there"

    def test_multiline_string(self):
        """Strings may span lines without producing EOL tokens."""
        tokens = scan_tokens('"a\nb" x')
        assert tokens[0].literal == "a\nb"
        assert tokens[1].type == TokenType.IDENTIFIER
        assert tokens[1].line == 2

    def test_keyword_tokens_have_no_literal(self):
        assert scan_tokens("true")[0].literal is None


# =============================================================================
# Scanner Errors
# =============================================================================

class TestScannerErrors:
    """Tests for lexical errors."""

    def test_unterminated_string(self):
        with pytest.raises(UnterminatedStringError) as exc_info:
            scan_tokens('print "abc', "t.lox")
        error = exc_info.value
        assert error.message == "Unterminated string."
        assert error.location.line == 1
        assert error.location.column == 7
        assert "t.lox:1:7: error: Unterminated string." in str(error)

    def test_invalid_character(self):
        with pytest.raises(InvalidCharacterError) as exc_info:
            scan_tokens("a @ b", "t.lox")
        error = exc_info.value
        assert error.char == "@"
        assert error.location.column == 3
        assert "a @ b" in str(error)

    def test_scanner_errors_are_syntax_errors(self):
        with pytest.raises(LoxSyntaxError):
            scan_tokens("#")
