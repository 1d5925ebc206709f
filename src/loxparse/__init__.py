"""
loxparse - Parser Front End for a Newline-Terminated Lox Dialect
================================================================

This package turns Lox source text into an abstract syntax tree. The
dialect ends statements at a ';', at the end of a line, at end of input,
or at the closing '}' of an enclosing block, so semicolons are optional.

Main Components
---------------
- **scanner**: Source text to tokens (newlines kept as EOL tokens)
- **parser**: Recursive descent parser with panic-mode error recovery
- **ast**: Immutable AST node types, visitor and pretty printer
- **errors**: Exception hierarchy and multi-error collection
- **config**: Parser options (programmatic or from the environment)

Quick Start
-----------
Parse a program:
    >>> from loxparse import parse_source
    >>> result = parse_source("var a = 1\\nprint a + 2")
    >>> result.has_errors()
    False

Keep going after errors:
    >>> result = parse_source("1 + ; print 2;")
    >>> print(result.errors.report())

Or use the command-line tool:
    $ loxp script.lox
    $ loxp --sexpr script.lox
"""

__version__ = "1.0.0"

from loxparse.ast import (
    ASTNode,
    ASTPrinter,
    ASTVisitor,
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    Expr,
    ExpressionStatement,
    GroupingExpression,
    Literal,
    PrintStatement,
    Stmt,
    UnaryExpression,
    VarDeclaration,
    VariableExpression,
)
from loxparse.config import ParserOptions
from loxparse.errors import (
    ErrorCollector,
    LoxCompilationError,
    LoxError,
    LoxSyntaxError,
    ParseError,
    SourceLocation,
)
from loxparse.parser import ParseResult, Parser, parse_source, parse_tokens
from loxparse.scanner import Scanner, scan_tokens
from loxparse.tokens import Token, TokenType

__all__ = [
    "__version__",
    # Front end
    "Scanner",
    "scan_tokens",
    "Parser",
    "ParseResult",
    "parse_source",
    "parse_tokens",
    "ParserOptions",
    # Tokens
    "Token",
    "TokenType",
    # AST
    "ASTNode",
    "ASTPrinter",
    "ASTVisitor",
    "Expr",
    "Stmt",
    "Literal",
    "VariableExpression",
    "AssignmentExpression",
    "UnaryExpression",
    "BinaryExpression",
    "GroupingExpression",
    "ExpressionStatement",
    "PrintStatement",
    "VarDeclaration",
    "BlockStatement",
    # Errors
    "LoxError",
    "LoxSyntaxError",
    "ParseError",
    "LoxCompilationError",
    "ErrorCollector",
    "SourceLocation",
]
