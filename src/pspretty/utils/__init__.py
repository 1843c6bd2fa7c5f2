"""Utility modules for pspretty.

Provides:
- text: quoting and escaping for string literals and variable names
- logger: get_logger for logging
"""

from pspretty.utils.logger import get_logger
from pspretty.utils.text import (
    escape_double_quoted,
    format_variable_name,
    here_string,
    quote_double,
    quote_single,
)

__all__ = [
    "escape_double_quoted",
    "format_variable_name",
    "get_logger",
    "here_string",
    "quote_double",
    "quote_single",
]
