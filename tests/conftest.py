"""
Shared fixtures for the loxparse test suite.

- run_parser: scan and parse source text, capturing reporting-hook calls
- make_tokens: build a hand-written token stream ending in EOF
"""

from dataclasses import dataclass, field

import pytest

from loxparse.ast import ASTPrinter
from loxparse.config import ParserOptions
from loxparse.parser import Parser
from loxparse.scanner import scan_tokens
from loxparse.tokens import Token, TokenType


@dataclass
class ParseRun:
    """Outcome of one parse in a test."""
    statements: list
    parser: Parser
    reported: list = field(default_factory=list)

    @property
    def errors(self):
        return self.parser.errors.errors

    @property
    def messages(self):
        return [error.message for error in self.errors]

    def sexpr(self):
        return ASTPrinter().sexpr_lines(self.statements)


@pytest.fixture
def run_parser():
    """Parse source text with the reporting hook recording every call."""
    def _run(source, **option_kwargs):
        reported = []

        def reporter(line, token, message):
            reported.append((line, token, message))

        options = ParserOptions(filename="test.lox", **option_kwargs)
        parser = Parser(
            scan_tokens(source, "test.lox"),
            reporter=reporter,
            options=options,
            source_lines=source.splitlines(),
        )
        statements = parser.parse()
        return ParseRun(statements, parser, reported)

    return _run


@pytest.fixture
def make_tokens():
    """Build a token stream from token types; EOF is appended."""
    def _make(*types):
        tokens = [
            Token(token_type, token_type.name.lower(), None, 1, index + 1)
            for index, token_type in enumerate(types)
        ]
        tokens.append(Token(TokenType.EOF, "", None, 1, len(types) + 1))
        return tokens

    return _make
