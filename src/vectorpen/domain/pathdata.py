"""Conversion between command lists and path-description text.

The path language is the absolute subset of SVG path data:

    M x y              move to
    L x y              line to
    C x1 y1 x2 y2 x y  cubic curve to
    Z                  close

``serialize`` writes one space-joined token per command. ``parse`` reads the
same language back; it forgives junk between numbers and drops commands that
are short of coordinates, but refuses any other path command (relative
commands, arcs, quadratics, shorthand curves) instead of approximating it.
"""

import math
import re
from collections.abc import Iterable
from decimal import Decimal

from vectorpen.domain.commands import COMMAND_FIELDS, Command, make_command
from vectorpen.exceptions import PathParseError

SUPPORTED_COMMANDS = frozenset("MLCZ")

# Supported letters always start a command. Other SVG command letters only
# count when they stand apart from other letters, so words in junk text stay junk.
_UNSUPPORTED_LETTERS = "mzlhvcsqtaHVSQTA"
_COMMAND_START = re.compile(
    f"[MLCZ]|(?<![A-Za-z])[{_UNSUPPORTED_LETTERS}](?![A-Za-z])"
)
_VALUE_SPLIT = re.compile(r"[\s,]+")
_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def format_number(value: float) -> str:
    """Format a coordinate as a plain decimal that parses back to the same float.

    Integral values are written without a fractional part and exponents are
    expanded, so the output never uses scientific notation.

    Args:
        value: Finite coordinate value

    Returns:
        Decimal string

    Raises:
        ValueError: If value is NaN or infinite

    Examples:
        >>> format_number(10.0)
        '10'
        >>> format_number(9.9)
        '9.9'
        >>> format_number(1e-7)
        '0.0000001'
    """
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite coordinate {value!r}")
    if value == 0:
        return "0"

    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if text.endswith(".0"):
        text = text[:-2]
    return text


def serialize(commands: Iterable[Command]) -> str:
    """Convert a command list to path-description text.

    Args:
        commands: Commands in path order

    Returns:
        Space-joined path text, empty for an empty list

    Examples:
        >>> from vectorpen.domain.commands import LineTo, MoveTo
        >>> serialize([MoveTo(0, 0), LineTo(30, 0)])
        'M 0 0 L 30 0'
    """
    parts: list[str] = []
    for command in commands:
        values = [getattr(command, name) for name in COMMAND_FIELDS[command.letter]]
        parts.append(" ".join([command.letter, *(format_number(v) for v in values)]))
    return " ".join(parts)


def _read_numbers(text: str) -> list[float]:
    """Extract the numeric values of one token, skipping anything else."""
    numbers: list[float] = []
    for item in _VALUE_SPLIT.split(text.strip()):
        if not _NUMBER.match(item):
            continue
        value = float(item)
        if math.isfinite(value):
            numbers.append(value)
    return numbers


def parse(text: str) -> list[Command]:
    """Parse path-description text into commands.

    The text is split immediately before every command letter. Tokens for
    M, L, C and Z are decoded; a token with fewer numbers than its command
    needs is dropped and surplus numbers are ignored. Letters that sit inside
    a word, such as the ones in "abc", are junk and are skipped.

    Args:
        text: Path-description text

    Returns:
        Non-empty list of commands

    Raises:
        PathParseError: If the text uses an unsupported path command or
            no command could be recovered
    """
    commands: list[Command] = []

    # Text before the first command letter is ignored
    starts = list(_COMMAND_START.finditer(text))
    for index, match in enumerate(starts):
        end = starts[index + 1].start() if index + 1 < len(starts) else len(text)
        letter = match.group()
        if letter not in SUPPORTED_COMMANDS:
            raise PathParseError(
                text,
                reason=f"unsupported command {letter!r} (only absolute M, L, C, Z)",
            )

        arity = len(COMMAND_FIELDS[letter])
        numbers = _read_numbers(text[match.end() : end])
        if len(numbers) < arity:
            continue
        commands.append(make_command(letter, numbers[:arity]))

    if not commands:
        raise PathParseError(text)

    return commands
