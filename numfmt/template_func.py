"""Keyed-argument entry point for template engines.

Template engines usually call helpers with positional arguments only.
template_func takes alternating key/value pairs naming formatter
options and either returns a reusable formatter or, when one extra
trailing argument is given, formats that value right away.
"""

import logging
from typing import Any, Dict, List, Optional, Union

from .formatter import FormatOptions, Formatter


logger = logging.getLogger(__name__)


TEXT_KEYS: Dict[str, str] = {
    "GroupSeparator": "group_separator",
    "DecimalSeparator": "decimal_separator",
    "Template": "template",
    "NegativeTemplate": "negative_template",
}

INTEGER_KEYS: Dict[str, str] = {
    "GroupSize": "group_size",
    "RoundPlaces": "round_places",
    "Shift": "shift",
    "MinDecimalPlaces": "min_decimal_places",
}

NON_NEGATIVE_KEYS = ["MinDecimalPlaces"]


class TemplateFuncError(ValueError):
    """Base exception for keyed configuration errors."""

    def __init__(self, message: str, key: Optional[Any] = None):
        """Initialize TemplateFuncError.

        Args:
            message: Error message
            key: Configuration key that caused the error
        """
        super().__init__(message)
        self.key = key


class UnknownKeyError(TemplateFuncError):
    """Raised when a configuration key is not recognized."""


class InvalidIntegerError(TemplateFuncError):
    """Raised when a numeric key gets a value that is not an integer."""


def template_func(*args: Any) -> Union[Formatter, str]:
    """Configure a formatter from key/value pairs.

    Keys: GroupSeparator, GroupSize, DecimalSeparator, RoundPlaces,
    Shift, MinDecimalPlaces, Template, NegativeTemplate. Values are
    converted with str(); numeric keys need integer strings.

    Args:
        *args: Key/value pairs, optionally followed by a value to format

    Returns:
        Formatter (callable) if len(args) is even, otherwise the last
        argument formatted

    Raises:
        UnknownKeyError: If a key is not recognized
        InvalidIntegerError: If a numeric key has a non-integer value, or
            MinDecimalPlaces is negative

    Examples:
        >>> template_func("GroupSeparator", " ", "DecimalSeparator", ",", "1234.56789")
        '1 234,56789'
        >>> usd = template_func("Template", "$n", "RoundPlaces", 2, "MinDecimalPlaces", 2)
        >>> usd("1234.56789")
        '$1,234.57'
    """
    pairs: List[Any] = list(args[:len(args) - len(args) % 2])
    options = _parse_pairs(pairs)
    formatter = Formatter(FormatOptions(**options))

    if len(args) % 2 == 1:
        return formatter.format(args[-1])

    return formatter


def _parse_pairs(pairs: List[Any]) -> Dict[str, Any]:
    """Map key/value pairs onto FormatOptions keyword arguments.

    Args:
        pairs: Flat list of alternating keys and values

    Returns:
        FormatOptions keyword arguments
    """
    options: Dict[str, Any] = {}

    for i in range(0, len(pairs), 2):
        key, value = pairs[i], pairs[i + 1]
        text = str(value)

        if isinstance(key, str) and key in TEXT_KEYS:
            options[TEXT_KEYS[key]] = text
        elif isinstance(key, str) and key in INTEGER_KEYS:
            options[INTEGER_KEYS[key]] = _parse_integer(key, text)
            if key in NON_NEGATIVE_KEYS and options[INTEGER_KEYS[key]] < 0:
                raise InvalidIntegerError(
                    f"invalid integer for {key}: {text!r} is negative", key
                )
        else:
            logger.warning(f"Rejected unknown formatter key: {key!r}")
            raise UnknownKeyError(f"unknown key: {key}", key)

    return options


def _parse_integer(key: str, text: str) -> int:
    """Parse an integer option value.

    Args:
        key: Option key, for error reporting
        text: Value as text

    Returns:
        Parsed integer

    Raises:
        InvalidIntegerError: If text is not a base-10 integer
    """
    try:
        return int(text, 10)
    except ValueError as exc:
        raise InvalidIntegerError(
            f"invalid integer for {key}: {text!r}", key
        ) from exc
