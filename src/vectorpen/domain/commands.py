"""Core command types for path representation.

This module defines the structured form of a path:
- Point: A 2D point in pointer coordinates
- MoveTo, LineTo, CurveTo, Close: The four supported path commands
- Command: Union of the four command types
- HandleKind: Enum naming the editable points of a command

Every command type carries exactly the fields it needs, so a curve without
both control points cannot be constructed.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Union


class HandleKind(str, Enum):
    """Editable point of a command.

    - ANCHOR: the on-curve end point (x, y)
    - HANDLE1: the first control point of a curve (x1, y1)
    - HANDLE2: the second control point of a curve (x2, y2)
    """

    ANCHOR = "anchor"
    HANDLE1 = "handle1"
    HANDLE2 = "handle2"


@dataclass(frozen=True, slots=True)
class Point:
    """A point in 2D space.

    Immutable and hashable for use in sets/dicts.

    Attributes:
        x: X coordinate in pointer space
        y: Y coordinate in pointer space
    """

    x: float
    y: float

    def to_tuple(self) -> tuple[float, float]:
        """Convert to simple (x, y) tuple."""
        return (self.x, self.y)

    def distance_to(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Point":
        """Deserialize from dictionary.

        Args:
            data: Dictionary with x and y fields

        Returns:
            Point instance
        """
        return cls(x=float(data["x"]), y=float(data["y"]))


@dataclass(frozen=True, slots=True)
class MoveTo:
    """Start of a new, disconnected point."""

    x: float
    y: float

    letter: ClassVar[str] = "M"

    @property
    def anchor(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"cmd": self.letter, "x": self.x, "y": self.y}


@dataclass(frozen=True, slots=True)
class LineTo:
    """Straight segment ending at (x, y)."""

    x: float
    y: float

    letter: ClassVar[str] = "L"

    @property
    def anchor(self) -> Point:
        return Point(self.x, self.y)

    def to_dict(self) -> dict[str, Any]:
        return {"cmd": self.letter, "x": self.x, "y": self.y}


@dataclass(frozen=True, slots=True)
class CurveTo:
    """Cubic Bezier segment.

    Attributes:
        x1: X of the first control point
        y1: Y of the first control point
        x2: X of the second control point
        y2: Y of the second control point
        x: X of the end anchor
        y: Y of the end anchor
    """

    x1: float
    y1: float
    x2: float
    y2: float
    x: float
    y: float

    letter: ClassVar[str] = "C"

    @property
    def anchor(self) -> Point:
        return Point(self.x, self.y)

    @property
    def handle1(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def handle2(self) -> Point:
        return Point(self.x2, self.y2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "cmd": self.letter,
            "x1": self.x1,
            "y1": self.y1,
            "x2": self.x2,
            "y2": self.y2,
            "x": self.x,
            "y": self.y,
        }


@dataclass(frozen=True, slots=True)
class Close:
    """Closes the current sub-figure."""

    letter: ClassVar[str] = "Z"

    @property
    def anchor(self) -> None:
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"cmd": self.letter}


Command = Union[MoveTo, LineTo, CurveTo, Close]

# Coordinate fields required per command letter, in path-data order
COMMAND_FIELDS: dict[str, tuple[str, ...]] = {
    "M": ("x", "y"),
    "L": ("x", "y"),
    "C": ("x1", "y1", "x2", "y2", "x", "y"),
    "Z": (),
}

_COMMAND_TYPES: dict[str, type] = {
    "M": MoveTo,
    "L": LineTo,
    "C": CurveTo,
    "Z": Close,
}


def make_command(letter: str, values: list[float]) -> Command:
    """Build a command from its letter and coordinates in path-data order.

    Args:
        letter: One of M, L, C, Z
        values: Exactly as many coordinates as the command needs

    Returns:
        Command instance

    Raises:
        ValueError: If the letter is unknown or the value count is wrong
    """
    if letter not in _COMMAND_TYPES:
        raise ValueError(f"Unknown command {letter!r}")
    fields = COMMAND_FIELDS[letter]
    if len(values) != len(fields):
        raise ValueError(f"Command {letter} takes {len(fields)} values, got {len(values)}")
    return _COMMAND_TYPES[letter](*values)


def command_from_dict(data: dict[str, Any]) -> Command:
    """Deserialize a command from its export record.

    Args:
        data: Dictionary such as {"cmd": "L", "x": 1, "y": 2}

    Returns:
        Command instance

    Raises:
        ValueError: If the record has an unknown command or misses a field
    """
    letter = data.get("cmd")
    if letter not in COMMAND_FIELDS:
        raise ValueError(f"Unknown command {letter!r}")
    try:
        values = [float(data[name]) for name in COMMAND_FIELDS[letter]]
    except KeyError as e:
        raise ValueError(f"Command {letter} is missing field {e.args[0]!r}") from e
    except TypeError as e:
        raise ValueError(f"Command {letter} has a non-numeric field") from e
    return make_command(letter, values)
