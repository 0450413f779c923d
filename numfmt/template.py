"""Template mini-language for laying out a formatted number.

A template is a short string where three bare characters are verbs:

    n    the number (grouped integer part, decimal separator, fraction)
    -    optional sign: "-" for negative values, nothing otherwise
    +    forced sign: "-" for negative values, "+" otherwise

Every other character is passed through as literal text. A backslash
escapes the next character so a verb can be written literally; a
trailing backslash with nothing to escape is dropped.

Examples:
    "-n"     => -9.45
    "+n"     => +9.45
    "n -"    => 9.45 -
    "-$n"    => -$9.45
    "n%"     => 9.45%
    "(n)"    => (9.45)
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from .utils.grouping import group_digits


ESCAPE = "\\"
NUMBER_VERB = "n"
OPTIONAL_SIGN_VERB = "-"
FORCED_SIGN_VERB = "+"


# ============================================================================
# Render Steps
# ============================================================================


@dataclass(frozen=True)
class Literal:
    """Text copied verbatim into the output."""

    text: str


@dataclass(frozen=True)
class Number:
    """The grouped integer part, then separator and fraction if any."""


@dataclass(frozen=True)
class OptionalSign:
    """A minus sign for negative values, nothing otherwise."""


@dataclass(frozen=True)
class ForcedSign:
    """A minus sign for negative values, a plus sign otherwise."""


RenderStep = Union[Literal, Number, OptionalSign, ForcedSign]

_VERB_STEPS = {
    NUMBER_VERB: Number(),
    OPTIONAL_SIGN_VERB: OptionalSign(),
    FORCED_SIGN_VERB: ForcedSign(),
}


@dataclass(frozen=True)
class CompiledTemplate:
    """Ordered, immutable sequence of render steps.

    Attributes:
        steps: Render steps in output order
    """

    steps: Tuple[RenderStep, ...] = ()

    @property
    def has_sign(self) -> bool:
        """Whether any step renders a sign."""
        return any(
            isinstance(step, (OptionalSign, ForcedSign)) for step in self.steps
        )

    def render(
        self,
        negative: bool,
        int_part: str,
        frac_part: str,
        group_separator: str = ",",
        group_size: int = 3,
        decimal_separator: str = ".",
    ) -> str:
        """Render the steps against an already split number.

        Args:
            negative: Whether the value is negative
            int_part: Unsigned integer digits
            frac_part: Fraction digits, empty if none
            group_separator: Separator between digit groups
            group_size: Digits per group
            decimal_separator: Separator between integer and fraction

        Returns:
            Rendered string
        """
        out: List[str] = []
        for step in self.steps:
            if isinstance(step, Literal):
                out.append(step.text)
            elif isinstance(step, Number):
                out.append(group_digits(int_part, group_separator, group_size))
                if frac_part:
                    out.append(decimal_separator)
                    out.append(frac_part)
            elif isinstance(step, OptionalSign):
                if negative:
                    out.append("-")
            elif isinstance(step, ForcedSign):
                out.append("-" if negative else "+")
            else:
                raise TypeError(f"Unknown render step: {step!r}")
        return "".join(out)


# ============================================================================
# Compilation
# ============================================================================


def compile_template(template: str) -> CompiledTemplate:
    """Compile a template string into render steps.

    Compilation never fails: anything that is not a verb is literal text.

    Args:
        template: Template string

    Returns:
        Compiled template

    Examples:
        >>> compile_template("-$n").steps
        (OptionalSign(), Literal(text='$'), Number())
        >>> compile_template(r"\\n").steps
        (Literal(text='n'),)
    """
    steps: List[RenderStep] = []
    literal: List[str] = []
    escape = False

    for char in template:
        if escape:
            literal.append(char)
            escape = False
        elif char == ESCAPE:
            escape = True
        elif char in _VERB_STEPS:
            if literal:
                steps.append(Literal("".join(literal)))
                literal = []
            steps.append(_VERB_STEPS[char])
        else:
            literal.append(char)

    if literal:
        steps.append(Literal("".join(literal)))

    return CompiledTemplate(tuple(steps))


def add_implicit_sign(compiled: CompiledTemplate) -> CompiledTemplate:
    """Put an optional sign in front of every number step.

    Templates that already render a sign are returned unchanged, so a
    template without sign verbs still shows negative values.

    Args:
        compiled: Compiled template

    Returns:
        Compiled template that renders a sign for negative values
    """
    if compiled.has_sign:
        return compiled

    steps: List[RenderStep] = []
    for step in compiled.steps:
        if isinstance(step, Number):
            steps.append(OptionalSign())
        steps.append(step)
    return CompiledTemplate(tuple(steps))
