"""
loxparse Command-Line Interface
===============================

- **loxp**: parse a Lox file and print its syntax tree

Implemented with Click.
"""

__all__ = ["loxp"]
