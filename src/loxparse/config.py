"""
Parser Configuration
====================

Options controlling a parse run. Configuration can come from:
- Default values (defined here)
- Explicit keyword arguments
- Environment variables (ParserOptions.from_env)
"""

from dataclasses import dataclass
import logging
import os

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class ParserOptions:
    """
    Configuration for a parse run.

    Attributes:
        filename: Source name used in every reported location
        max_errors: Stop parsing after this many errors (0 = no limit)
        keep_placeholders: Keep the None entries for discarded statements
            in ParseResult.statements
    """
    filename: str = "<input>"
    max_errors: int = 100
    keep_placeholders: bool = True

    def __post_init__(self):
        if self.max_errors < 0:
            raise ValueError(f"max_errors must be >= 0, got {self.max_errors}")

    @classmethod
    def from_env(cls) -> "ParserOptions":
        """
        Create ParserOptions from environment variables.

        Environment variables (all optional):
            LOXPARSE_FILENAME: Source name for diagnostics
            LOXPARSE_MAX_ERRORS: Error budget (non-negative integer)
            LOXPARSE_KEEP_PLACEHOLDERS: 1/true/yes/on or 0/false/no/off

        Malformed values are ignored with a warning.
        """
        options = cls()

        if filename := os.environ.get("LOXPARSE_FILENAME"):
            options.filename = filename

        if max_errors := os.environ.get("LOXPARSE_MAX_ERRORS"):
            try:
                value = int(max_errors)
            except ValueError:
                value = -1
            if value >= 0:
                options.max_errors = value
            else:
                logger.warning(f"Ignoring invalid LOXPARSE_MAX_ERRORS={max_errors!r}")

        if keep := os.environ.get("LOXPARSE_KEEP_PLACEHOLDERS"):
            normalized = keep.strip().lower()
            if normalized in _TRUE_VALUES:
                options.keep_placeholders = True
            elif normalized in _FALSE_VALUES:
                options.keep_placeholders = False
            else:
                logger.warning(f"Ignoring invalid LOXPARSE_KEEP_PLACEHOLDERS={keep!r}")

        return options
