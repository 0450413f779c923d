"""Decimal number formatting.

This module turns decimal values into display strings: it shifts the
decimal point, rounds half away from zero, pads the fraction, groups the
integer digits and lays the result out through a template.

Formatting is best-effort. Values that cannot be parsed as a decimal are
returned as their plain string form instead of raising.
"""

import logging
import re
import threading
from dataclasses import dataclass
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    ROUND_HALF_UP,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)
from typing import Any, Optional, Tuple

from .template import CompiledTemplate, add_implicit_sign, compile_template


logger = logging.getLogger(__name__)


DEFAULT_TEMPLATE = "n"

# Plain decimal literal: optional sign, digits with an optional point, optional exponent
DECIMAL_LITERAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


# ============================================================================
# Options
# ============================================================================


@dataclass(frozen=True)
class FormatOptions:
    """Formatting options.

    Attributes:
        group_separator: Separator between digit groups. Empty disables grouping.
        group_size: Digits per group. Zero disables grouping.
        decimal_separator: Separator between integer and fraction parts
        round_places: Places to round to, None for no rounding. Negative
            values round to the left of the decimal point.
        shift: Places to move the decimal point right before rounding.
            Negative values move it left. 2 turns a fraction into a percentage.
        min_decimal_places: Fraction is zero-padded to at least this length
        template: Layout template, see numfmt.template
        negative_template: Layout used instead of template for negative
            values when non-empty
    """

    group_separator: str = ","
    group_size: int = 3
    decimal_separator: str = "."
    round_places: Optional[int] = None
    shift: int = 0
    min_decimal_places: int = 0
    template: str = DEFAULT_TEMPLATE
    negative_template: str = ""

    def __post_init__(self) -> None:
        """Validate options after initialization."""
        self._validate_strings()
        self._validate_integers()
        self._validate_min_decimal_places()

    def _validate_strings(self) -> None:
        """Validate that text options are strings."""
        for name in (
            "group_separator",
            "decimal_separator",
            "template",
            "negative_template",
        ):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ValueError(f"{name} must be a string, got {value!r}")

    def _validate_integers(self) -> None:
        """Validate that numeric options are integers."""
        for name in ("group_size", "shift", "min_decimal_places", "round_places"):
            value = getattr(self, name)
            if name == "round_places" and value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be an integer, got {value!r}")

    def _validate_min_decimal_places(self) -> None:
        """Validate that the minimum number of decimal places is non-negative."""
        if self.min_decimal_places < 0:
            raise ValueError(
                f"Minimum decimal places cannot be negative, "
                f"got {self.min_decimal_places}"
            )


# ============================================================================
# Decimal Helpers
# ============================================================================


def to_decimal(value: Any) -> Optional[Decimal]:
    """Convert a number-like value to a finite Decimal.

    Integers convert exactly and floats through their shortest
    round-trip representation. Anything else is parsed from str(value).

    Args:
        value: Decimal, int, float, string or any object whose string
            form is a decimal literal

    Returns:
        Decimal, or None if value is not a finite number
    """
    if isinstance(value, Decimal):
        d = value
    elif isinstance(value, int) and not isinstance(value, bool):
        d = Decimal(value)
    elif isinstance(value, float):
        d = Decimal(repr(value))
    else:
        text = str(value)
        if not DECIMAL_LITERAL.fullmatch(text):
            return None
        try:
            d = Decimal(text)
        except (InvalidOperation, ValueError):
            return None

    if not d.is_finite():
        return None
    return d


def shift_decimal(d: Decimal, places: int) -> Decimal:
    """Move the decimal point places to the right (left if negative).

    The coefficient is kept as is, so the result is exact.
    """
    sign, digits, exponent = d.as_tuple()
    return Decimal((sign, digits, exponent + places))


def round_decimal(d: Decimal, places: int) -> Decimal:
    """Round to places decimal places, ties away from zero.

    Args:
        d: Value to round
        places: Decimal places. Negative rounds to tens, hundreds, ...

    Returns:
        Rounded value

    Examples:
        >>> round_decimal(Decimal("1234.5"), 0)
        Decimal('1235')
        >>> str(round_decimal(Decimal("1234.5678"), -2))
        '1.2E+3'
    """
    quantum = Decimal((0, (1,), -places))
    # Own context: the caller's precision, exponent limits and traps do not apply
    ctx = Context(
        prec=min(MAX_PREC, max(28, d.adjusted() + places + 2)),
        rounding=ROUND_HALF_UP,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[],
    )
    with localcontext(ctx):
        return d.quantize(quantum)


def split_decimal(d: Decimal) -> Tuple[bool, str, str]:
    """Split a decimal into sign, integer digits and fraction digits.

    Uses plain notation with trailing fraction zeros trimmed. Zero is
    never negative.

    Returns:
        Tuple of (negative, integer digits, fraction digits)

    Examples:
        >>> split_decimal(Decimal("-12345.6780"))
        (True, '12345', '678')
        >>> split_decimal(Decimal("1.2E+3"))
        (False, '1200', '')
    """
    if d.is_zero():
        d = d.copy_abs()

    text = format(d, "f")
    negative = text.startswith("-")
    if negative:
        text = text[1:]

    int_part, _, frac_part = text.partition(".")
    return negative, int_part, frac_part.rstrip("0")


# ============================================================================
# Formatter
# ============================================================================


class Formatter:
    """Formatter of decimal numbers.

    A formatter is configured once and reused. It is safe to share
    between threads: templates are compiled once, on first use, and
    never change afterwards.

    Examples:
        >>> Formatter().format("1234.56789")
        '1,234.56789'
        >>> Formatter(FormatOptions(round_places=2)).format("1234.56789")
        '1,234.57'
    """

    def __init__(self, options: Optional[FormatOptions] = None) -> None:
        """Initialize formatter.

        Args:
            options: Formatting options. If None, defaults are used.
        """
        self._options = options if options is not None else FormatOptions()
        self._templates: Optional[Tuple[CompiledTemplate, Optional[CompiledTemplate]]] = None
        self._compile_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Formatter({self._options!r})"

    def __call__(self, value: Any) -> str:
        return self.format(value)

    @property
    def options(self) -> FormatOptions:
        """Formatting options."""
        return self._options

    def format(self, value: Any) -> str:
        """Format value.

        Args:
            value: Decimal, int, float, or anything whose string form is
                a decimal literal

        Returns:
            Formatted string, or str(value) if value is not a number
        """
        d = to_decimal(value)
        if d is None:
            logger.debug(f"Not a number, passing through: {value!r}")
            return str(value)
        return self.format_decimal(d)

    def format_decimal(self, d: Decimal) -> str:
        """Format a finite Decimal.

        Pipeline: shift, round, split, pad fraction, render template.
        """
        template, negative_template = self._compiled_templates()
        options = self._options

        if options.shift:
            d = shift_decimal(d, options.shift)
        # Rounding after the shift rounds percentages in percent units
        if options.round_places is not None:
            d = round_decimal(d, options.round_places)

        negative, int_part, frac_part = split_decimal(d)

        if len(frac_part) < options.min_decimal_places:
            frac_part = frac_part.ljust(options.min_decimal_places, "0")

        if negative and negative_template is not None:
            template = negative_template

        return template.render(
            negative,
            int_part,
            frac_part,
            group_separator=options.group_separator,
            group_size=options.group_size,
            decimal_separator=options.decimal_separator,
        )

    def _compiled_templates(
        self,
    ) -> Tuple[CompiledTemplate, Optional[CompiledTemplate]]:
        """Return the compiled (template, negative template) pair.

        Compiles on first call. Concurrent first callers wait for the
        one compilation and all see its result.
        """
        templates = self._templates
        if templates is not None:
            return templates

        with self._compile_lock:
            if self._templates is None:
                self._templates = self._compile_templates()
            return self._templates

    def _compile_templates(
        self,
    ) -> Tuple[CompiledTemplate, Optional[CompiledTemplate]]:
        """Compile the template pair from the options."""
        options = self._options
        template = add_implicit_sign(
            compile_template(options.template or DEFAULT_TEMPLATE)
        )

        negative_template = None
        if options.negative_template:
            negative_template = compile_template(options.negative_template)

        logger.debug(
            f"Compiled template {options.template!r} into "
            f"{len(template.steps)} steps, negative template "
            f"{options.negative_template!r}"
        )
        return template, negative_template


def format_number(value: Any, **options: Any) -> str:
    """Format value once with the given options.

    Args:
        value: Value to format
        **options: FormatOptions fields

    Returns:
        Formatted string

    Raises:
        ValueError: If an option value is invalid
        TypeError: If an option name is unknown

    Examples:
        >>> format_number("1234.5", decimal_separator=",", group_separator=".")
        '1.234,5'
    """
    return Formatter(FormatOptions(**options)).format(value)
