"""Ready-made formatters for common number styles."""

from typing import Dict

from .formatter import FormatOptions, Formatter


CURRENCY_OPTIONS = FormatOptions(min_decimal_places=2, template="-$n")
PERCENT_OPTIONS = FormatOptions(shift=2, template="-n%")

PRESETS: Dict[str, FormatOptions] = {
    "currency": CURRENCY_OPTIONS,
    "percent": PERCENT_OPTIONS,
}


def preset_options(name: str) -> FormatOptions:
    """Get options of a named preset.

    Args:
        name: Preset name ("currency" or "percent")

    Returns:
        Preset options

    Raises:
        ValueError: If preset is unknown
    """
    if name not in PRESETS:
        raise ValueError(
            f"Preset must be one of {sorted(PRESETS)}, got '{name}'"
        )
    return PRESETS[name]


def new_usd_formatter() -> Formatter:
    """Create a formatter for US dollars.

    Examples:
        >>> new_usd_formatter().format("-123")
        '-$123.00'
        >>> new_usd_formatter().format("123.456")
        '$123.456'
    """
    return Formatter(CURRENCY_OPTIONS)


def new_percent_formatter() -> Formatter:
    """Create a formatter that turns a fraction such as 0.75 into 75%.

    Examples:
        >>> new_percent_formatter().format("0.781")
        '78.1%'
    """
    return Formatter(PERCENT_OPTIONS)
