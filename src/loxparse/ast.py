"""
Lox Abstract Syntax Tree (AST) Definitions
==========================================

This module defines the AST node types produced by the parser.

Node Hierarchy
--------------
ASTNode (base)
├── Expressions (Expression)
│   ├── Literal - number, string, true, false, nil
│   ├── VariableExpression - variable reference
│   ├── AssignmentExpression - name = value
│   ├── UnaryExpression - prefix ! and -
│   ├── BinaryExpression - == != > >= < <= + - * /
│   └── GroupingExpression - parenthesized expression
└── Statements (Statement)
    ├── ExpressionStatement - expression evaluated for its effect
    ├── PrintStatement - print expression
    ├── VarDeclaration - var name (= initializer)?
    └── BlockStatement - { declarations }

A program is a plain list of statements in source order. Statements the
parser discarded during error recovery appear as None placeholders.

Design Notes
------------
- All nodes are frozen dataclasses: the tree is immutable once built
- Every child is owned by exactly one parent; there is no sharing
- The node set is closed: Expr and Stmt name the complete unions, and
  ASTVisitor rejects anything outside them
"""

from dataclasses import dataclass
from typing import Any, Optional, Sequence, Union

from loxparse.tokens import LiteralValue, Token


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class Statement(ASTNode):
    """Base class for all statement nodes."""
    pass


# =============================================================================
# Expression Nodes
# =============================================================================

@dataclass(frozen=True)
class Literal(Expression):
    """
    Literal value.

    Attributes:
        value: float for numbers, str for strings, True/False, or None for nil
    """
    value: LiteralValue


@dataclass(frozen=True)
class VariableExpression(Expression):
    """
    Reference to a variable.

    Attributes:
        name: The IDENTIFIER token
    """
    name: Token


@dataclass(frozen=True)
class AssignmentExpression(Expression):
    """
    Assignment to a variable (right-associative).

    Attributes:
        name: The IDENTIFIER token of the target variable
        value: The assigned expression
    """
    name: Token
    value: Expression


@dataclass(frozen=True)
class UnaryExpression(Expression):
    """
    Prefix operator application.

    Attributes:
        operator: The BANG or MINUS token
        right: The operand
    """
    operator: Token
    right: Expression


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Binary operator application.

    Attributes:
        left: Left operand
        operator: The operator token
        right: Right operand
    """
    left: Expression
    operator: Token
    right: Expression


@dataclass(frozen=True)
class GroupingExpression(Expression):
    """Parenthesized expression."""
    expression: Expression


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class ExpressionStatement(Statement):
    """Expression evaluated for its side effects."""
    expression: Expression


@dataclass(frozen=True)
class PrintStatement(Statement):
    """print expression"""
    expression: Expression


@dataclass(frozen=True)
class VarDeclaration(Statement):
    """
    Variable declaration.

    Attributes:
        name: The IDENTIFIER token
        initializer: Optional initialization expression
    """
    name: Token
    initializer: Optional[Expression] = None


@dataclass(frozen=True)
class BlockStatement(Statement):
    """
    Block of statements { ... }.

    Attributes:
        statements: The block's statements in source order; statements
            discarded by error recovery are not included
    """
    statements: tuple[Statement, ...] = ()


# Closed unions of every node type
Expr = Union[
    Literal,
    VariableExpression,
    AssignmentExpression,
    UnaryExpression,
    BinaryExpression,
    GroupingExpression,
]
Stmt = Union[ExpressionStatement, PrintStatement, VarDeclaration, BlockStatement]

# A parsed program; None marks a statement dropped during error recovery
Program = list[Optional[Stmt]]

NODE_TYPES: tuple[type, ...] = (
    Literal,
    VariableExpression,
    AssignmentExpression,
    UnaryExpression,
    BinaryExpression,
    GroupingExpression,
    ExpressionStatement,
    PrintStatement,
    VarDeclaration,
    BlockStatement,
)


# =============================================================================
# AST Visitor Pattern
# =============================================================================

class ASTVisitor:
    """
    Base class for AST visitors.

    Subclasses override visit_* methods for the node types they care about;
    the rest fall through to generic_visit, which visits children.

    Usage:
        class VariableCollector(ASTVisitor):
            def __init__(self):
                self.names = []

            def visit_VariableExpression(self, node):
                self.names.append(node.name.lexeme)

        collector = VariableCollector()
        collector.visit_program(statements)
    """

    def visit(self, node: ASTNode) -> Any:
        """
        Visit a node by dispatching to the appropriate method.

        Raises:
            TypeError: If node is not one of the AST node types
        """
        if type(node) not in NODE_TYPES:
            raise TypeError(f"not an AST node: {node!r}")
        method_name = f"visit_{node.__class__.__name__}"
        return getattr(self, method_name)(node)

    def visit_program(self, program: Sequence[Optional[Stmt]]) -> list[Any]:
        """Visit each statement of a program, skipping recovery placeholders."""
        return [self.visit(stmt) for stmt in program if stmt is not None]

    def generic_visit(self, node: ASTNode) -> None:
        """Visit all child nodes."""
        for field_value in node.__dict__.values():
            if isinstance(field_value, ASTNode):
                self.visit(field_value)
            elif isinstance(field_value, tuple):
                for item in field_value:
                    if isinstance(item, ASTNode):
                        self.visit(item)

    def visit_Literal(self, node: Literal): return self.generic_visit(node)
    def visit_VariableExpression(self, node: VariableExpression): return self.generic_visit(node)
    def visit_AssignmentExpression(self, node: AssignmentExpression): return self.generic_visit(node)
    def visit_UnaryExpression(self, node: UnaryExpression): return self.generic_visit(node)
    def visit_BinaryExpression(self, node: BinaryExpression): return self.generic_visit(node)
    def visit_GroupingExpression(self, node: GroupingExpression): return self.generic_visit(node)
    def visit_ExpressionStatement(self, node: ExpressionStatement): return self.generic_visit(node)
    def visit_PrintStatement(self, node: PrintStatement): return self.generic_visit(node)
    def visit_VarDeclaration(self, node: VarDeclaration): return self.generic_visit(node)
    def visit_BlockStatement(self, node: BlockStatement): return self.generic_visit(node)


# =============================================================================
# AST Pretty Printer
# =============================================================================

class ASTPrinter(ASTVisitor):
    """
    Pretty printer for AST debugging.

    Statements print one per line, indented by nesting; expressions print
    in fully parenthesized prefix form, e.g. (+ 1 (* 2 3)).

    Usage:
        printer = ASTPrinter()
        output = printer.print(statements)
        print(output)
    """

    def __init__(self):
        self.output: list[str] = []
        self.indent_level = 0

    def print(self, program: Union[ASTNode, Sequence[Optional[Stmt]]]) -> str:
        """Print a program (or a single node) and return it as a string."""
        self.output = []
        self.indent_level = 0
        if isinstance(program, ASTNode):
            self.visit(program)
        else:
            self._emit("Program")
            self._indent()
            for stmt in program:
                if stmt is None:
                    self._emit("<error>")
                else:
                    self.visit(stmt)
            self._dedent()
        return "\n".join(self.output)

    def _emit(self, text: str) -> None:
        indent = "  " * self.indent_level
        self.output.append(f"{indent}{text}")

    def _indent(self) -> None:
        self.indent_level += 1

    def _dedent(self) -> None:
        self.indent_level = max(0, self.indent_level - 1)

    def visit_ExpressionStatement(self, node: ExpressionStatement):
        self._emit(f"Expr {self.expr_str(node.expression)}")

    def visit_PrintStatement(self, node: PrintStatement):
        self._emit(f"Print {self.expr_str(node.expression)}")

    def visit_VarDeclaration(self, node: VarDeclaration):
        init = f" = {self.expr_str(node.initializer)}" if node.initializer is not None else ""
        self._emit(f"Var {node.name.lexeme}{init}")

    def visit_BlockStatement(self, node: BlockStatement):
        self._emit("Block")
        self._indent()
        for stmt in node.statements:
            self.visit(stmt)
        self._dedent()

    def _expression_line(self, node: Expression):
        self._emit(self.expr_str(node))

    visit_Literal = _expression_line
    visit_VariableExpression = _expression_line
    visit_AssignmentExpression = _expression_line
    visit_UnaryExpression = _expression_line
    visit_BinaryExpression = _expression_line
    visit_GroupingExpression = _expression_line

    def expr_str(self, expr: Expression) -> str:
        """Convert an expression to its parenthesized prefix form."""
        if isinstance(expr, Literal):
            return format_literal(expr.value)
        if isinstance(expr, VariableExpression):
            return expr.name.lexeme
        if isinstance(expr, AssignmentExpression):
            return f"(= {expr.name.lexeme} {self.expr_str(expr.value)})"
        if isinstance(expr, UnaryExpression):
            return f"({expr.operator.lexeme} {self.expr_str(expr.right)})"
        if isinstance(expr, BinaryExpression):
            return (
                f"({expr.operator.lexeme} "
                f"{self.expr_str(expr.left)} {self.expr_str(expr.right)})"
            )
        if isinstance(expr, GroupingExpression):
            return f"(group {self.expr_str(expr.expression)})"
        raise TypeError(f"not an expression node: {expr!r}")

    def sexpr_lines(self, program: Sequence[Optional[Stmt]]) -> list[str]:
        """One prefix-form line per top-level statement, placeholders skipped."""
        return [self.stmt_str(stmt) for stmt in program if stmt is not None]

    def stmt_str(self, stmt: Stmt) -> str:
        """Convert a statement to prefix form, e.g. (print (+ 1 2))."""
        if isinstance(stmt, ExpressionStatement):
            return f"(expr {self.expr_str(stmt.expression)})"
        if isinstance(stmt, PrintStatement):
            return f"(print {self.expr_str(stmt.expression)})"
        if isinstance(stmt, VarDeclaration):
            if stmt.initializer is None:
                return f"(var {stmt.name.lexeme})"
            return f"(var {stmt.name.lexeme} {self.expr_str(stmt.initializer)})"
        if isinstance(stmt, BlockStatement):
            inner = " ".join(self.stmt_str(s) for s in stmt.statements)
            return f"(block {inner})" if inner else "(block)"
        raise TypeError(f"not a statement node: {stmt!r}")


def format_literal(value: LiteralValue) -> str:
    """Render a literal value the way Lox source would spell it."""
    if value is None:
        return "nil"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)
