"""Locale-agnostic decimal number formatting.

The zero-configuration Formatter groups digits with commas every three
digits and uses a period between integer and fraction parts:

    >>> Formatter().format("1234.56789")
    '1,234.56789'
"""

from .formatter import FormatOptions, Formatter, format_number
from .presets import new_percent_formatter, new_usd_formatter
from .template import CompiledTemplate, compile_template
from .template_func import (
    InvalidIntegerError,
    TemplateFuncError,
    UnknownKeyError,
    template_func,
)
from .utils.grouping import group_digits

__all__ = [
    "CompiledTemplate",
    "FormatOptions",
    "Formatter",
    "InvalidIntegerError",
    "TemplateFuncError",
    "UnknownKeyError",
    "compile_template",
    "format_number",
    "group_digits",
    "new_percent_formatter",
    "new_usd_formatter",
    "template_func",
]
