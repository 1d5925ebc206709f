"""
Lox Token Definitions
=====================

Token types and the immutable Token value shared by the scanner and the
parser.

Token Categories
----------------
- Single-character punctuation: ( ) { } , . - + ; / *
- One or two character operators: ! != = == > >= < <=
- Literals: identifiers, strings, numbers
- Keywords: and class else false fun for if nil or print return super
  this true var while
- Structural: EOL (end of line, significant as a statement terminator)
  and EOF (always the last token of a stream)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from loxparse.errors import SourceLocation


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the Lox language.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Single-character tokens ===
    LEFT_PAREN = auto()     # (
    RIGHT_PAREN = auto()    # )
    LEFT_BRACE = auto()     # {
    RIGHT_BRACE = auto()    # }
    COMMA = auto()          # ,
    DOT = auto()            # .
    MINUS = auto()          # -
    PLUS = auto()           # +
    SEMICOLON = auto()      # ;
    SLASH = auto()          # /
    STAR = auto()           # *

    # === One or two character tokens ===
    BANG = auto()           # !
    BANG_EQUAL = auto()     # !=
    EQUAL = auto()          # =
    EQUAL_EQUAL = auto()    # ==
    GREATER = auto()        # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()           # <
    LESS_EQUAL = auto()     # <=

    # === Literals ===
    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()

    # === Keywords ===
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FUN = auto()
    FOR = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # === Structural ===
    EOL = auto()            # End of line
    EOF = auto()            # End of file


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    "and": TokenType.AND,
    "class": TokenType.CLASS,
    "else": TokenType.ELSE,
    "false": TokenType.FALSE,
    "for": TokenType.FOR,
    "fun": TokenType.FUN,
    "if": TokenType.IF,
    "nil": TokenType.NIL,
    "or": TokenType.OR,
    "print": TokenType.PRINT,
    "return": TokenType.RETURN,
    "super": TokenType.SUPER,
    "this": TokenType.THIS,
    "true": TokenType.TRUE,
    "var": TokenType.VAR,
    "while": TokenType.WHILE,
}

# Keywords that begin a statement; recovery resumes in front of these
STATEMENT_KEYWORDS = frozenset({
    TokenType.CLASS,
    TokenType.FUN,
    TokenType.VAR,
    TokenType.FOR,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.RETURN,
})


LiteralValue = Union[str, float, bool, None]


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single lexical unit.

    Attributes:
        type: The TokenType classification
        lexeme: The exact source text of the token
        literal: Runtime value for STRING and NUMBER tokens, else None
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed, 0 when unknown)
    """
    type: TokenType
    lexeme: str
    literal: LiteralValue
    line: int
    column: int = 0

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.literal is not None:
            return f"Token({self.type.name}, {self.lexeme!r}, {self.literal!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.lexeme!r}, {self.line}:{self.column})"

    def location(self, filename: str = "<input>") -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(filename, self.line, self.column)

    def is_statement_keyword(self) -> bool:
        """Return True if this token begins a statement."""
        return self.type in STATEMENT_KEYWORDS
