"""
Lox Recursive Descent Parser
============================

This module implements a recursive descent parser for Lox. It takes the
token stream from the scanner and builds a list of statement nodes,
recovering from syntax errors so that a single run reports every
malformed statement instead of stopping at the first one.

Grammar (Simplified EBNF)
-------------------------
program         ::= EOL* declaration* EOF
declaration     ::= var_decl | statement
var_decl        ::= 'var' IDENTIFIER ('=' expression)? terminator
statement       ::= print_stmt | block | expr_stmt
print_stmt      ::= 'print' expression terminator
block           ::= '{' EOL* declaration* '}' terminator
expr_stmt       ::= expression terminator
terminator      ::= EOF | EOL+ | ';' EOL* | <'}' inside a block, not consumed>

Expression Precedence (lowest to highest)
-----------------------------------------
1. assignment     =              (right-associative)
2. equality       == !=
3. comparison     > >= < <=
4. term           + -
5. factor         * /
6. unary          ! -            (prefix)
7. primary        NUMBER, STRING, true, false, nil, IDENTIFIER, '(' expr ')'

Error Recovery
--------------
Grammar rules raise ParseError when the input does not fit. The error is
recorded (and handed to the optional reporting hook) at the point of
detection, then caught by the nearest parse_declaration, which discards
the statement, returns None in its place and resynchronizes the cursor
at the next statement boundary.

"Invalid assignment target" is the exception to the rule: it is recorded
but not raised, because both sides of the '=' parsed cleanly.

Example Usage
-------------
>>> from loxparse.parser import parse_source
>>> result = parse_source("print 1 + 2 * 3")
>>> result.statements
[PrintStatement(expression=BinaryExpression(...))]
"""

from dataclasses import dataclass, field
import logging
from typing import Callable, Optional, Sequence

from loxparse.ast import (
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    Expression,
    ExpressionStatement,
    GroupingExpression,
    Literal,
    PrintStatement,
    Statement,
    Stmt,
    UnaryExpression,
    VarDeclaration,
    VariableExpression,
)
from loxparse.config import ParserOptions
from loxparse.errors import (
    ErrorCollector,
    ExpectExpressionError,
    InvalidAssignmentError,
    MissingTerminatorError,
    MissingTokenError,
    ParseError,
)
from loxparse.scanner import scan_tokens
from loxparse.tokens import Token, TokenType

logger = logging.getLogger(__name__)

# Reporting hook: called once per error with (line, token, message)
ErrorReporter = Callable[[int, Token, str], None]


class Parser:
    """
    Recursive descent parser for Lox.

    A Parser instance parses one token stream once. All of its state (the
    cursor and the block depth) lives on the instance, so separate parsers
    can run independently.

    Attributes:
        tokens: Token stream, terminated by an EOF token
        errors: Every error detected so far
        block_depth: Number of currently open blocks
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        reporter: Optional[ErrorReporter] = None,
        options: Optional[ParserOptions] = None,
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: Tokens from the scanner, ending with EOF
            reporter: Optional hook called as reporter(line, token, message)
                for every error
            options: Parser configuration (defaults if None)
            source_lines: Original source lines for error context

        Raises:
            ValueError: If the token stream does not end with EOF
        """
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token stream must end with an EOF token")

        self.tokens = tokens
        self.reporter = reporter
        self.options = options or ParserOptions()
        self.filename = self.options.filename
        self.source_lines = source_lines or []

        # Current position in token stream; never moves backwards
        self._current = 0

        # Open blocks; a '}' only terminates a statement while this is > 0
        self.block_depth = 0

        self.errors = ErrorCollector(self.options.max_errors)

    def parse(self) -> list[Optional[Stmt]]:
        """
        Parse the whole token stream.

        Returns:
            The top-level statements in source order, with None in place of
            each statement discarded during error recovery. Syntax errors
            never propagate out of this method; inspect self.errors.
        """
        statements: list[Optional[Stmt]] = []

        # Blank and comment-only lines before the first statement
        while self._match(TokenType.EOL):
            pass

        while not self._at_end():
            statements.append(self.parse_declaration())

            if self.errors.should_stop():
                token = self._peek()
                logger.warning(
                    f"Too many errors ({self.errors.error_count()}), "
                    f"stopped parsing at line {token.line}"
                )
                self.errors.add_warning(
                    f"too many errors ({self.errors.error_count()}), parsing stopped",
                    token.location(self.filename),
                )
                break

        logger.debug(
            f"Parsed {len(statements)} statements from {self.filename} "
            f"with {self.errors.error_count()} errors"
        )
        return statements

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self) -> Token:
        return self.tokens[self._current]

    def _previous(self) -> Token:
        return self.tokens[self._current - 1]

    def _advance(self) -> Token:
        """Consume and return the current token; EOF is never consumed."""
        if not self._at_end():
            self._current += 1
        return self._previous()

    def _check(self, token_type: TokenType) -> bool:
        if self._at_end():
            return False
        return self._peek().type == token_type

    def _match(self, *types: TokenType) -> bool:
        """Consume the current token if it is one of the given types."""
        for token_type in types:
            if self._check(token_type):
                self._advance()
                return True
        return False

    def _consume(self, token_type: TokenType, message: str) -> Token:
        """
        Expect and consume a specific token type.

        Raises:
            MissingTokenError: If the current token is of another type
        """
        if self._check(token_type):
            return self._advance()
        raise self._error(self._peek(), message, MissingTokenError)

    # =========================================================================
    # Error Reporting and Recovery
    # =========================================================================

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    def _error(
        self,
        token: Token,
        message: str,
        error_class: type[ParseError] = ParseError,
    ) -> ParseError:
        """
        Record an error at token and return it for the caller to raise.

        The error is added to self.errors and passed to the reporting hook
        before this returns, so it is reported exactly once whether or not
        the caller raises it.
        """
        error = error_class(
            message,
            token,
            location=token.location(self.filename),
            source_line=self._get_source_line(token.line),
        )
        self._report(error)
        return error

    def _report(self, error: ParseError) -> None:
        self.errors.add(error)
        logger.debug(f"Syntax error: {error.message} ({error.where}, line {error.line})")
        if self.reporter is not None:
            self.reporter(error.line, error.token, error.message)

    def synchronize(self) -> None:
        """
        Skip tokens until a safe place to resume parsing.

        If the cursor already sits on a statement terminator it is consumed
        and recovery ends there. Otherwise the offending token is skipped,
        then tokens are discarded until a statement keyword (left in place)
        or a terminator (consumed) is found, or the input ends.
        """
        if self.match_terminator():
            self._log_sync_point()
            return

        self._advance()

        while not self._at_end():
            if self._peek().is_statement_keyword():
                break
            if self.match_terminator():
                break
            self._advance()

        self._log_sync_point()

    def _log_sync_point(self) -> None:
        token = self._peek()
        logger.debug(f"Sync point: {token!r} on line {token.line}")

    # =========================================================================
    # Statement Terminators
    # =========================================================================

    def match_terminator(self) -> bool:
        """
        Match a statement terminator, consuming it where it has tokens.

        A terminator is any of:
        - end of input (nothing consumed)
        - one or more EOL tokens (all consumed)
        - ';' optionally followed by EOL tokens (all consumed)
        - '}' closing an enclosing block (not consumed; the block needs it)
        """
        if self._at_end():
            return True

        if self._match(TokenType.EOL):
            while self._match(TokenType.EOL):
                pass
            return True

        if self._match(TokenType.SEMICOLON):
            while self._match(TokenType.EOL):
                pass
            return True

        if self._check(TokenType.RIGHT_BRACE) and self.block_depth > 0:
            return True

        return False

    def consume_terminator(self, message: str) -> None:
        """
        Require a statement terminator.

        Raises:
            MissingTerminatorError: If the current position cannot end a statement
        """
        if self.match_terminator():
            return
        raise self._error(self._peek(), message, MissingTerminatorError)

    # =========================================================================
    # Statement Parsing
    # =========================================================================

    def parse_declaration(self) -> Optional[Stmt]:
        """
        Parse one declaration or statement.

        Returns:
            The statement node, or None if it was malformed and discarded
        """
        try:
            if self._match(TokenType.VAR):
                return self._parse_var_declaration()
            return self._parse_statement()
        except ParseError:
            self.synchronize()
            return None

    def _parse_statement(self) -> Statement:
        if self._match(TokenType.PRINT):
            return self._parse_print_statement()
        if self._match(TokenType.LEFT_BRACE):
            return self._parse_block_statement()
        return self._parse_expression_statement()

    def _parse_var_declaration(self) -> VarDeclaration:
        """Parse the rest of a 'var' declaration."""
        name = self._consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self._match(TokenType.EQUAL):
            initializer = self.parse_expression()

        self.consume_terminator("Expect ';' or EOL after variable declaration.")
        return VarDeclaration(name=name, initializer=initializer)

    def _parse_print_statement(self) -> PrintStatement:
        value = self.parse_expression()
        self.consume_terminator("Expect ';' or EOL after value.")
        return PrintStatement(expression=value)

    def _parse_expression_statement(self) -> ExpressionStatement:
        expr = self.parse_expression()
        self.consume_terminator("Expect ';' or EOL after expression.")
        return ExpressionStatement(expression=expr)

    def _parse_block_statement(self) -> BlockStatement:
        """
        Parse a block after its opening '{'.

        The block depth is raised for the whole block, including the
        terminator after the closing '}', and restored even when an error
        unwinds out of the block.
        """
        self.block_depth += 1
        try:
            while self._match(TokenType.EOL):
                pass
            statements = self._parse_block()
        finally:
            self.block_depth -= 1
        return BlockStatement(statements=tuple(statements))

    def _parse_block(self) -> list[Statement]:
        statements = []

        while not self._check(TokenType.RIGHT_BRACE) and not self._at_end():
            stmt = self.parse_declaration()
            # Discarded statements were already reported
            if stmt is not None:
                statements.append(stmt)

        self._consume(TokenType.RIGHT_BRACE, "Expect '}' after block.")
        self.consume_terminator("Expect statement terminator after block.")
        return statements

    # =========================================================================
    # Expression Parsing (Operator Precedence)
    # =========================================================================

    def parse_expression(self) -> Expression:
        """
        Parse an expression at the lowest precedence level.

        Raises:
            ParseError: If the tokens do not form an expression
        """
        return self._parse_assignment()

    def _parse_assignment(self) -> Expression:
        """Parse assignment expression (right-associative)."""
        expr = self._parse_equality()

        if self._match(TokenType.EQUAL):
            equals = self._previous()
            value = self._parse_assignment()

            if isinstance(expr, VariableExpression):
                return AssignmentExpression(name=expr.name, value=value)

            # Reported only: both sides are well-formed expressions
            self._report(InvalidAssignmentError(
                equals,
                location=equals.location(self.filename),
                source_line=self._get_source_line(equals.line),
            ))

        return expr

    def _parse_equality(self) -> Expression:
        """Parse equality expression (== !=)."""
        return self._parse_binary(
            self._parse_comparison,
            (TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL),
        )

    def _parse_comparison(self) -> Expression:
        """Parse comparison expression (> >= < <=)."""
        return self._parse_binary(
            self._parse_term,
            (
                TokenType.GREATER,
                TokenType.GREATER_EQUAL,
                TokenType.LESS,
                TokenType.LESS_EQUAL,
            ),
        )

    def _parse_term(self) -> Expression:
        """Parse additive expression (+ -)."""
        return self._parse_binary(
            self._parse_factor,
            (TokenType.MINUS, TokenType.PLUS),
        )

    def _parse_factor(self) -> Expression:
        """Parse multiplicative expression (* /)."""
        return self._parse_binary(
            self._parse_unary,
            (TokenType.SLASH, TokenType.STAR),
        )

    def _parse_binary(
        self,
        operand_parser: Callable[[], Expression],
        operators: tuple[TokenType, ...],
    ) -> Expression:
        """
        Generic left-associative binary expression parser.

        Args:
            operand_parser: Parser for the next-higher precedence level
            operators: Token types of the operators at this level
        """
        expr = operand_parser()

        while self._match(*operators):
            operator = self._previous()
            right = operand_parser()
            expr = BinaryExpression(left=expr, operator=operator, right=right)

        return expr

    def _parse_unary(self) -> Expression:
        """Parse prefix ! and - (right-associative)."""
        if self._match(TokenType.BANG, TokenType.MINUS):
            operator = self._previous()
            right = self._parse_unary()
            return UnaryExpression(operator=operator, right=right)

        return self._parse_primary()

    def _parse_primary(self) -> Expression:
        """Parse primary expression (literals, identifiers, parenthesized)."""
        if self._match(TokenType.FALSE):
            return Literal(False)
        if self._match(TokenType.TRUE):
            return Literal(True)
        if self._match(TokenType.NIL):
            return Literal(None)

        if self._match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self._previous().literal)

        if self._match(TokenType.IDENTIFIER):
            return VariableExpression(name=self._previous())

        if self._match(TokenType.LEFT_PAREN):
            expr = self.parse_expression()
            self._consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return GroupingExpression(expression=expr)

        raise self._error(self._peek(), "Expect expression.", ExpectExpressionError)


# =============================================================================
# Parse Results
# =============================================================================

@dataclass
class ParseResult:
    """
    Outcome of a parse run.

    Attributes:
        statements: Parsed statements; None marks a discarded statement
            unless placeholders were disabled in ParserOptions
        errors: Every error reported during the run
    """
    statements: list[Optional[Stmt]] = field(default_factory=list)
    errors: ErrorCollector = field(default_factory=ErrorCollector)

    def has_errors(self) -> bool:
        return self.errors.has_errors()

    def valid_statements(self) -> list[Stmt]:
        """Statements that parsed cleanly, placeholders skipped."""
        return [stmt for stmt in self.statements if stmt is not None]

    def raise_if_errors(self) -> None:
        """
        Raise if the run reported any error.

        Raises:
            LoxCompilationError: With the formatted report of every error
        """
        self.errors.raise_if_errors()


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_tokens(
    tokens: Sequence[Token],
    options: Optional[ParserOptions] = None,
    reporter: Optional[ErrorReporter] = None,
    source_lines: Optional[list[str]] = None,
) -> ParseResult:
    """
    Parse a token stream.

    Args:
        tokens: Tokens ending with EOF
        options: Parser configuration (defaults if None)
        reporter: Optional hook called as reporter(line, token, message)
        source_lines: Original source lines for error context

    Returns:
        ParseResult with the statements and collected errors
    """
    options = options or ParserOptions()
    parser = Parser(tokens, reporter=reporter, options=options, source_lines=source_lines)
    statements = parser.parse()
    if not options.keep_placeholders:
        statements = [stmt for stmt in statements if stmt is not None]
    return ParseResult(statements=statements, errors=parser.errors)


def parse_source(
    source: str,
    options: Optional[ParserOptions] = None,
    reporter: Optional[ErrorReporter] = None,
) -> ParseResult:
    """
    Scan and parse Lox source code.

    Args:
        source: The Lox source code
        options: Parser configuration (defaults if None)
        reporter: Optional hook called as reporter(line, token, message)

    Returns:
        ParseResult with the statements and collected errors

    Raises:
        LoxSyntaxError: If the scanner rejects the source
    """
    options = options or ParserOptions()
    tokens = scan_tokens(source, options.filename)
    return parse_tokens(
        tokens,
        options=options,
        reporter=reporter,
        source_lines=source.splitlines(),
    )
