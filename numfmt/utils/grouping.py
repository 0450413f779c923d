"""Digit grouping for the integer part of a formatted number.

This module inserts a separator between fixed-size runs of digits,
counted from the least-significant end, in a locale-independent way.
"""


def group_digits(digits: str, separator: str = ",", size: int = 3) -> str:
    """Insert separator every size digits, counted from the right.

    Args:
        digits: Integer-part digits without sign
        separator: Group separator. Empty string disables grouping.
        size: Digits per group. Zero or negative disables grouping.

    Returns:
        Grouped digit string

    Examples:
        >>> group_digits("1234567")
        '1,234,567'
        >>> group_digits("1234", ",", 1)
        '1,2,3,4'
        >>> group_digits("1234", " ")
        '1 234'
    """
    if not separator or size <= 0 or len(digits) <= size:
        return digits

    # Leftmost group holds the remainder, or a full group if evenly divisible
    head = len(digits) % size or size
    groups = [digits[:head]]
    groups.extend(
        digits[start:start + size]
        for start in range(head, len(digits), size)
    )
    return separator.join(groups)
