"""
loxparse Error Hierarchy
========================

This module defines the exception hierarchy for the loxparse front end.
All exceptions inherit from LoxError, allowing callers to catch every
error raised by the package with a single except clause.

Exception Hierarchy
-------------------
LoxError (base)
├── LoxSyntaxError - scanner and parser syntax errors
│   ├── UnterminatedStringError - missing closing quote
│   ├── InvalidCharacterError - unexpected character
│   └── ParseError - error detected by the parser at a token
│       ├── MissingTokenError - required token not found
│       ├── MissingTerminatorError - no ';', EOL, EOF or '}' after a statement
│       ├── ExpectExpressionError - nothing parseable at primary position
│       └── InvalidAssignmentError - '=' after a non-variable (never raised)
└── LoxCompilationError - aggregate report of several errors

Error Message Format
--------------------
All errors include source location information and follow this format:

    filename:line:column: error: description
        source_line_text
            ^ (pointer to error location)
    hint: suggestion for fixing

Example:
    script.lox:2:9: error: Expect expression. (at ';')
        print 1 +;
                 ^
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from loxparse.tokens import Token


# =============================================================================
# Base Exception Class
# =============================================================================

class LoxError(Exception):
    """
    Base exception for all loxparse errors.

        try:
            parse_source(text).raise_if_errors()
        except LoxError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 when unknown)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for error messages."""
        return f"{self.filename}:{self.line}:{self.column}"


# =============================================================================
# Syntax Errors
# =============================================================================

class LoxSyntaxError(LoxError):
    """
    Syntax error in Lox source code.

    This class provides common functionality for error messages including
    source location tracking, source line context, and helpful hints.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
        hint: A suggestion for fixing the error
        source_line: The actual source text at the error location
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

            script.lox:5:12: error: Expect ')' after expression. (at end of line)
                print (1 + 2
                           ^
        """
        parts = []

        # Location prefix: filename:line:column: error: message
        if self.location:
            parts.append(f"{self.location}: error: {self._describe()}")
        else:
            parts.append(f"error: {self._describe()}")

        # Source context with caret pointer
        if self.source_line is not None and self.location is not None:
            parts.append(f"    {self.source_line}")
            if self.location.column > 0:
                padding = " " * (4 + self.location.column - 1)
                parts.append(f"{padding}^")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)

    def _describe(self) -> str:
        """Return the one-line description used after 'error:'."""
        return self.message


class UnterminatedStringError(LoxSyntaxError):
    """
    Unterminated string literal.

    Raised when the scanner reaches end of input inside a string.
    Strings may span lines, so only end of input terminates the search.
    """

    def __init__(
        self,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "Unterminated string.",
            location=location,
            hint="add closing '\"' to complete the string",
            source_line=source_line,
        )


class InvalidCharacterError(LoxSyntaxError):
    """Character that cannot start any token."""

    def __init__(
        self,
        char: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.char = char
        super().__init__(
            f"Unexpected character '{char}'.",
            location=location,
            source_line=source_line,
        )


# =============================================================================
# Parser Errors
# =============================================================================

class ParseError(LoxSyntaxError):
    """
    Error detected by the parser at a specific token.

    The token is kept so reporting hooks receive the exact offending token,
    and the formatted message names it the way Lox diagnostics do:
    "at end" for end of input, "at end of line" for an EOL token, and
    "at 'lexeme'" otherwise.

    Attributes:
        token: The token at which the error was detected
    """

    def __init__(
        self,
        message: str,
        token: "Token",
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.token = token
        super().__init__(
            message,
            location=location,
            hint=hint,
            source_line=source_line,
        )

    @property
    def line(self) -> int:
        """Line number of the offending token."""
        return self.token.line

    @property
    def where(self) -> str:
        """Lox-style description of where the error occurred."""
        from loxparse.tokens import TokenType

        if self.token.type == TokenType.EOF:
            return "at end"
        if self.token.type == TokenType.EOL:
            return "at end of line"
        return f"at '{self.token.lexeme}'"

    def _describe(self) -> str:
        return f"{self.message} ({self.where})"


class MissingTokenError(ParseError):
    """
    Required token is missing.

    Raised for an unmatched '(' or '{', or a 'var' without a name.
    """
    pass


class MissingTerminatorError(ParseError):
    """
    No statement terminator after a statement.

    A statement ends at ';', at end of line, at end of input, or at the
    closing '}' of an enclosing block.
    """

    def __init__(
        self,
        message: str,
        token: "Token",
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            message,
            token,
            location=location,
            hint="end the statement with ';' or a newline",
            source_line=source_line,
        )


class ExpectExpressionError(ParseError):
    """No literal, identifier or parenthesized expression where one is required."""
    pass


class InvalidAssignmentError(ParseError):
    """
    Assignment to something that is not a variable.

    This error is reported but never raised: the expression on both sides
    of the '=' is well formed, so no recovery is needed.
    """

    def __init__(
        self,
        token: "Token",
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        super().__init__(
            "Invalid assignment target.",
            token,
            location=location,
            hint="only a variable name may appear on the left of '='",
            source_line=source_line,
        )


class LoxCompilationError(LoxError):
    """
    Aggregate error containing multiple errors.

    The message is already a formatted report from ErrorCollector and is
    passed through unchanged.
    """

    def __init__(self, report: str, errors: Optional[List[LoxSyntaxError]] = None):
        self.errors = errors or []
        super().__init__(report)


# =============================================================================
# Error Collection (for multi-error reporting)
# =============================================================================

class ErrorCollector:
    """
    Collects multiple errors for batch reporting.

    The parser uses this to keep going after a syntax error, collecting
    every error before they are reported together.

    Example:
        collector = ErrorCollector(max_errors=100)

        while not at_end:
            try:
                parse_declaration()
            except LoxSyntaxError as e:
                collector.add(e)
                if collector.should_stop():
                    break

        if collector.has_errors():
            print(collector.report())
    """

    def __init__(self, max_errors: int = 100):
        """
        Initialize the error collector.

        Args:
            max_errors: Maximum errors to collect before stopping (0 = no limit)
        """
        self.errors: List[LoxSyntaxError] = []
        self.warnings: List[str] = []
        self.max_errors = max_errors

    def add(self, error: LoxSyntaxError) -> None:
        """Add an error to the collection."""
        self.errors.append(error)

    def add_warning(self, message: str, location: Optional[SourceLocation] = None) -> None:
        """Add a warning message."""
        if location:
            self.warnings.append(f"{location}: warning: {message}")
        else:
            self.warnings.append(f"warning: {message}")

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return len(self.errors) > 0

    def should_stop(self) -> bool:
        """Return True if max_errors has been reached."""
        return self.max_errors > 0 and len(self.errors) >= self.max_errors

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self.errors)

    def warning_count(self) -> int:
        """Return the number of collected warnings."""
        return len(self.warnings)

    def report(self) -> str:
        """Format all errors and warnings for display."""
        lines = []

        for error in self.errors:
            lines.append(str(error))
            lines.append("")  # Blank line between errors

        for warning in self.warnings:
            lines.append(warning)

        error_word = "error" if len(self.errors) == 1 else "errors"
        warning_word = "warning" if len(self.warnings) == 1 else "warnings"
        lines.append(
            f"\n{len(self.errors)} {error_word}, {len(self.warnings)} {warning_word}"
        )

        return "\n".join(lines)

    def clear(self) -> None:
        """Clear all collected errors and warnings."""
        self.errors.clear()
        self.warnings.clear()

    def raise_if_errors(self) -> None:
        """Raise a LoxCompilationError if any errors were collected."""
        if self.has_errors():
            raise LoxCompilationError(self.report(), list(self.errors))
