"""
Tests for loxp - Lox Parser Command-Line Tool
=============================================

These tests drive the click command with CliRunner inside an isolated
filesystem.
"""

from pathlib import Path

import pytest
from click.testing import CliRunner

from loxparse import __version__
from loxparse.cli.errors import ExitCode
from loxparse.cli.loxp import main


@pytest.fixture
def runner(monkeypatch):
    for name in ("LOXPARSE_FILENAME", "LOXPARSE_MAX_ERRORS", "LOXPARSE_KEEP_PLACEHOLDERS"):
        monkeypatch.delenv(name, raising=False)
    return CliRunner()


def write(name, text):
    Path(name).write_text(text, encoding="utf-8")
    return name


class TestLoxpSuccess:
    """Tests for successful parses."""

    def test_tree_output(self, runner):
        with runner.isolated_filesystem():
            write("ok.lox", "var a = 1\nprint a + 2\n")
            result = runner.invoke(main, ["ok.lox"])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "Program\n  Var a = 1\n  Print (+ a 2)\n"

    def test_sexpr_output(self, runner):
        with runner.isolated_filesystem():
            write("ok.lox", "var a = 1\nprint a + 2\n")
            result = runner.invoke(main, ["--sexpr", "ok.lox"])
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "(var a 1)\n(print (+ a 2))\n"

    def test_stdin(self, runner):
        result = runner.invoke(main, ["--sexpr", "-"], input="print 1\n")
        assert result.exit_code == ExitCode.SUCCESS
        assert result.output == "(print 1)\n"

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestLoxpErrors:
    """Tests for error reporting and exit codes."""

    def test_syntax_errors(self, runner):
        with runner.isolated_filesystem():
            write("bad.lox", "1 + ;\nprint 2;\n")
            result = runner.invoke(main, ["--sexpr", "bad.lox"])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "(print 2)" in result.output
        assert "bad.lox:1:5: error: Expect expression. (at ';')" in result.output
        assert "1 error, 0 warnings" in result.output

    def test_placeholder_in_tree(self, runner):
        with runner.isolated_filesystem():
            write("bad.lox", "print ;\n")
            result = runner.invoke(main, ["bad.lox"])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "<error>" in result.output

    def test_scanner_error(self, runner):
        with runner.isolated_filesystem():
            write("bad.lox", 'print "abc')
            result = runner.invoke(main, ["bad.lox"])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "Unterminated string." in result.output

    def test_max_errors(self, runner):
        with runner.isolated_filesystem():
            write("bad.lox", "print ;\nprint ;\nprint ;\n")
            result = runner.invoke(main, ["--max-errors", "1", "bad.lox"])
        assert result.exit_code == ExitCode.SYNTAX_ERROR
        assert "1 error, 1 warning" in result.output

    def test_missing_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["missing.lox"])
        assert result.exit_code == ExitCode.INVALID_ARGS

    def test_negative_max_errors(self, runner):
        result = runner.invoke(main, ["--max-errors", "-1", "-"], input="print 1\n")
        assert result.exit_code == ExitCode.INVALID_ARGS
