"""
AST Test Suite
==============

Tests for the AST node types, the visitor and the pretty printer.
"""

import dataclasses

import pytest

from loxparse.ast import (
    ASTPrinter,
    ASTVisitor,
    BlockStatement,
    Literal,
    PrintStatement,
    VarDeclaration,
    format_literal,
)
from loxparse.parser import parse_source
from loxparse.tokens import Token, TokenType


def parse(source):
    return parse_source(source).statements


class TestFormatLiteral:
    """Tests for literal rendering."""

    @pytest.mark.parametrize("value,text", [
        (None, "nil"),
        (True, "true"),
        (False, "false"),
        (3.0, "3"),
        (2.5, "2.5"),
        ("hi", '"hi"'),
    ])
    def test_format(self, value, text):
        assert format_literal(value) == text


class TestASTPrinter:
    """Tests for ASTPrinter output."""

    def test_tree_with_placeholder(self):
        program = parse("var a = 1\n{ print a }\n1 +;")
        assert ASTPrinter().print(program) == "\n".join([
            "Program",
            "  Var a = 1",
            "  Block",
            "    Print a",
            "  <error>",
        ])

    def test_nested_block_indentation(self):
        output = ASTPrinter().print(parse("{ { var b } }"))
        assert output.split("\n") == [
            "Program",
            "  Block",
            "    Block",
            "      Var b",
        ]

    def test_empty_program(self):
        assert ASTPrinter().print([]) == "Program"

    def test_single_node(self):
        assert ASTPrinter().print(PrintStatement(Literal(None))) == "Print nil"

    def test_expression_statement(self):
        assert ASTPrinter().print(parse("a = -b")) == "Program\n  Expr (= a (- b))"

    def test_printer_is_reusable(self):
        printer = ASTPrinter()
        first = printer.print(parse("print 1"))
        second = printer.print(parse("print 1"))
        assert first == second

    def test_sexpr_lines(self):
        program = parse('var a\nprint ;\n{ print "x" }\n(1)')
        assert ASTPrinter().sexpr_lines(program) == [
            "(var a)",
            '(block (print "x"))',
            "(expr (group 1))",
        ]

    def test_expr_str_rejects_statements(self):
        with pytest.raises(TypeError):
            ASTPrinter().expr_str(BlockStatement())


class TestVisitor:
    """Tests for ASTVisitor dispatch."""

    class NameCollector(ASTVisitor):
        def __init__(self):
            self.names = []

        def visit_VariableExpression(self, node):
            self.names.append(node.name.lexeme)

    def test_generic_visit_reaches_children(self):
        collector = self.NameCollector()
        collector.visit_program(parse("a = b + c\n{ print x }"))
        assert collector.names == ["b", "c", "x"]

    def test_visit_program_skips_placeholders(self):
        collector = self.NameCollector()
        results = collector.visit_program([None, PrintStatement(Literal(1.0)), None])
        assert len(results) == 1

    def test_visit_rejects_non_nodes(self):
        with pytest.raises(TypeError):
            ASTVisitor().visit("not a node")

    def test_visit_rejects_base_classes(self):
        from loxparse.ast import Expression
        with pytest.raises(TypeError):
            ASTVisitor().visit(Expression())


class TestNodes:
    """Tests for AST node values."""

    def test_nodes_are_frozen(self):
        node = Literal(1.0)
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.value = 2.0

    def test_structural_equality(self):
        name = Token(TokenType.IDENTIFIER, "a", None, 1, 5)
        assert VarDeclaration(name, Literal(1.0)) == VarDeclaration(name, Literal(1.0))

    def test_block_defaults_to_empty(self):
        assert BlockStatement().statements == ()
