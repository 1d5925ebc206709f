"""
Lox Scanner (Tokenizer)
=======================

This module converts Lox source text into the token stream consumed by
the parser.

Newlines are significant in this dialect: a line break may end a
statement, so every newline becomes an EOL token instead of being
skipped as whitespace. Blank lines therefore produce runs of EOL tokens,
which the parser collapses into a single terminator.

Lexical Rules
-------------
- Whitespace: spaces, tabs and carriage returns are skipped
- Comments: // to end of line (the newline itself is still an EOL)
- Numbers: 123 or 1.5, always stored as float literals
- Strings: "double quoted", may span lines, no escape sequences
- Identifiers: letter or underscore, then letters, digits, underscores

Example Usage
-------------
>>> from loxparse.scanner import scan_tokens
>>> for token in scan_tokens("print 1;"):
...     print(token)
Token(PRINT, 'print', 1:1)
Token(NUMBER, '1', 1.0, 1:7)
Token(SEMICOLON, ';', 1:8)
Token(EOF, '', 1:9)
"""

import logging
import string
from typing import Iterator

from loxparse.errors import (
    InvalidCharacterError,
    SourceLocation,
    UnterminatedStringError,
)
from loxparse.tokens import KEYWORDS, LiteralValue, Token, TokenType

logger = logging.getLogger(__name__)


# Operators that may be followed by '=' to form a two-character token
_EQUAL_PAIRS: dict[str, tuple[TokenType, TokenType]] = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

_SINGLE_TOKENS: dict[str, TokenType] = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "/": TokenType.SLASH,
    "*": TokenType.STAR,
}


class Scanner:
    """
    Tokenizes Lox source code.

    Usage:
        scanner = Scanner(source_text, filename)
        tokens = list(scanner.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    IDENT_START = string.ascii_letters + "_"
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1

        # Track line start position for error reporting
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, always ending with a single EOF token

        Raises:
            LoxSyntaxError: If invalid syntax is encountered
        """
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()

        yield Token(TokenType.EOF, "", None, self._line, self._column)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look ahead without advancing; empty string past end of source."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume the current character, updating line and column tracking."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        """Skip blanks and // comments, stopping in front of a newline."""
        while not self._at_end():
            char = self._peek()

            if char in " \t\r":
                self._advance()
                continue

            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start_pos = self._pos
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char == "\n":
            self._advance()
            return Token(TokenType.EOL, "\n", None, start_line, start_column)

        if char in self.IDENT_START:
            return self._scan_identifier(start_pos, start_line, start_column)

        if char.isascii() and char.isdigit():
            return self._scan_number(start_pos, start_line, start_column)

        if char == '"':
            return self._scan_string(start_pos, start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _make_token(
        self,
        token_type: TokenType,
        start_pos: int,
        start_line: int,
        start_column: int,
        literal: LiteralValue = None,
    ) -> Token:
        """Create a token whose lexeme runs from start_pos to the current position."""
        return Token(
            type=token_type,
            lexeme=self.source[start_pos:self._pos],
            literal=literal,
            line=start_line,
            column=start_column,
        )

    def _scan_identifier(self, start_pos: int, start_line: int, start_column: int) -> Token:
        """Scan an identifier or keyword."""
        while self._peek() and self._peek() in self.IDENT_CHARS:
            self._advance()

        name = self.source[start_pos:self._pos]
        token_type = KEYWORDS.get(name, TokenType.IDENTIFIER)
        return self._make_token(token_type, start_pos, start_line, start_column)

    def _scan_number(self, start_pos: int, start_line: int, start_column: int) -> Token:
        """
        Scan a numeric literal.

        A fractional part needs at least one digit after the '.', so "1."
        scans as NUMBER followed by DOT.
        """
        while self._peek().isascii() and self._peek().isdigit():
            self._advance()

        if self._peek() == "." and self._peek(1).isascii() and self._peek(1).isdigit():
            self._advance()  # consume .
            while self._peek().isascii() and self._peek().isdigit():
                self._advance()

        value = float(self.source[start_pos:self._pos])
        return self._make_token(TokenType.NUMBER, start_pos, start_line, start_column, value)

    def _scan_string(self, start_pos: int, start_line: int, start_column: int) -> Token:
        """Scan a double-quoted string; the literal excludes the quotes."""
        start_line_text = self._get_current_line()
        self._advance()  # consume opening "

        while not self._at_end() and self._peek() != '"':
            self._advance()

        if self._at_end():
            raise UnterminatedStringError(
                SourceLocation(self.filename, start_line, start_column),
                start_line_text,
            )

        self._advance()  # consume closing "
        value = self.source[start_pos + 1:self._pos - 1]
        return self._make_token(TokenType.STRING, start_pos, start_line, start_column, value)

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """Scan punctuation and one or two character operators."""
        start_pos = self._pos
        char = self._advance()

        if char in _EQUAL_PAIRS:
            single, double = _EQUAL_PAIRS[char]
            token_type = double if self._match("=") else single
            return self._make_token(token_type, start_pos, start_line, start_column)

        if char in _SINGLE_TOKENS:
            return self._make_token(_SINGLE_TOKENS[char], start_pos, start_line, start_column)

        raise InvalidCharacterError(
            char,
            SourceLocation(self.filename, start_line, start_column),
            self._get_current_line(),
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]


# =============================================================================
# Convenience Functions
# =============================================================================

def scan_tokens(source: str, filename: str = "<input>") -> list[Token]:
    """
    Scan Lox source code into a complete token list.

    Args:
        source: The Lox source code
        filename: Source filename for error messages

    Returns:
        List of tokens ending with EOF

    Raises:
        LoxSyntaxError: If the source contains an invalid character or
            an unterminated string
    """
    tokens = list(Scanner(source, filename).tokenize())
    logger.debug(f"Scanned {len(tokens)} tokens from {filename}")
    return tokens
