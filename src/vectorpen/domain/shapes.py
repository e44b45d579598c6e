"""Shape records held by a document.

Shapes are immutable; edits produce new records via ``dataclasses.replace``
or the ``with_*`` helpers. Every record serializes to the document export
shape used for JSON import/export.
"""

from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Union

from vectorpen.domain.commands import Command, Point, command_from_dict
from vectorpen.domain.pathdata import serialize


@dataclass(frozen=True, kw_only=True)
class BaseShape:
    """Fields common to every shape.

    Attributes:
        id: Unique identifier within a document
        fill: Fill colour (or "none")
        stroke: Stroke colour
        stroke_width: Stroke width in pointer units
        selected: Whether the shape is the current selection
    """

    shape_type: ClassVar[str] = ""

    id: str
    fill: str = "#3B82F6"
    stroke: str = "#1E40AF"
    stroke_width: float = 2.0
    selected: bool = False

    def _style_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.shape_type,
            "fill": self.fill,
            "stroke": self.stroke,
            "strokeWidth": self.stroke_width,
            "selected": self.selected,
        }

    @staticmethod
    def _style_kwargs(data: dict[str, Any]) -> dict[str, Any]:
        kwargs: dict[str, Any] = {"id": str(data["id"])}
        if "fill" in data:
            kwargs["fill"] = str(data["fill"])
        if "stroke" in data:
            kwargs["stroke"] = str(data["stroke"])
        if "strokeWidth" in data:
            kwargs["stroke_width"] = float(data["strokeWidth"])
        kwargs["selected"] = bool(data.get("selected", False))
        return kwargs


@dataclass(frozen=True, kw_only=True)
class RectShape(BaseShape):
    """Axis-aligned rectangle anchored at its top-left corner."""

    shape_type: ClassVar[str] = "rect"

    x: float
    y: float
    width: float
    height: float

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._style_dict(),
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RectShape":
        return cls(
            **cls._style_kwargs(data),
            x=float(data["x"]),
            y=float(data["y"]),
            width=float(data["width"]),
            height=float(data["height"]),
        )


@dataclass(frozen=True, kw_only=True)
class CircleShape(BaseShape):
    """Circle given by centre and radius."""

    shape_type: ClassVar[str] = "circle"

    cx: float
    cy: float
    r: float

    def to_dict(self) -> dict[str, Any]:
        return {**self._style_dict(), "cx": self.cx, "cy": self.cy, "r": self.r}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "CircleShape":
        return cls(
            **cls._style_kwargs(data),
            cx=float(data["cx"]),
            cy=float(data["cy"]),
            r=float(data["r"]),
        )


@dataclass(frozen=True, kw_only=True)
class EllipseShape(BaseShape):
    """Axis-aligned ellipse given by centre and radii."""

    shape_type: ClassVar[str] = "ellipse"

    cx: float
    cy: float
    rx: float
    ry: float

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._style_dict(),
            "cx": self.cx,
            "cy": self.cy,
            "rx": self.rx,
            "ry": self.ry,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EllipseShape":
        return cls(
            **cls._style_kwargs(data),
            cx=float(data["cx"]),
            cy=float(data["cy"]),
            rx=float(data["rx"]),
            ry=float(data["ry"]),
        )


@dataclass(frozen=True, kw_only=True)
class PolygonShape(BaseShape):
    """Closed polygon; also used for stars."""

    shape_type: ClassVar[str] = "polygon"

    points: tuple[Point, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", tuple(self.points))

    def with_vertex(self, index: int, point: Point) -> "PolygonShape":
        """Return a copy with one vertex moved; unchanged for a bad index."""
        if not 0 <= index < len(self.points):
            return self
        points = list(self.points)
        points[index] = point
        return replace(self, points=tuple(points))

    def to_dict(self) -> dict[str, Any]:
        return {**self._style_dict(), "points": [p.to_dict() for p in self.points]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PolygonShape":
        return cls(
            **cls._style_kwargs(data),
            points=tuple(Point.from_dict(p) for p in data["points"]),
        )


@dataclass(frozen=True, kw_only=True)
class PathShape(BaseShape):
    """Editable vector path.

    ``d`` is not a constructor argument: it is always regenerated from
    ``commands``, so the two representations cannot drift apart. Build a
    changed path with ``with_commands`` (or ``dataclasses.replace``).

    Attributes:
        commands: Structured commands, authoritative
        d: Path-description text derived from commands
    """

    shape_type: ClassVar[str] = "path"

    fill: str = "none"
    stroke: str = "#3B82F6"
    commands: tuple[Command, ...] = ()
    d: str = field(init=False, default="")

    def __post_init__(self) -> None:
        commands = tuple(self.commands)
        object.__setattr__(self, "commands", commands)
        object.__setattr__(self, "d", serialize(commands))

    @property
    def is_empty(self) -> bool:
        """A path without commands cannot be rendered."""
        return not self.commands

    def with_commands(self, commands: "list[Command] | tuple[Command, ...]") -> "PathShape":
        """Return a copy with new commands and the matching description text."""
        return replace(self, commands=tuple(commands))

    def to_dict(self) -> dict[str, Any]:
        return {
            **self._style_dict(),
            "d": self.d,
            "commands": [c.to_dict() for c in self.commands],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PathShape":
        """Deserialize from the export record.

        The structured commands are authoritative; any supplied ``d`` is
        ignored and regenerated.
        """
        return cls(
            **cls._style_kwargs(data),
            commands=tuple(command_from_dict(c) for c in data["commands"]),
        )


Shape = Union[RectShape, CircleShape, EllipseShape, PolygonShape, PathShape]

SHAPE_TYPES: dict[str, type] = {
    RectShape.shape_type: RectShape,
    CircleShape.shape_type: CircleShape,
    EllipseShape.shape_type: EllipseShape,
    PolygonShape.shape_type: PolygonShape,
    PathShape.shape_type: PathShape,
}


def shape_from_dict(data: dict[str, Any]) -> Shape:
    """Deserialize any shape record by its ``type`` tag.

    Raises:
        ValueError: If the type is unknown or a field is malformed
        KeyError: If a required field is missing
    """
    shape_cls = SHAPE_TYPES.get(data.get("type", ""))
    if shape_cls is None:
        raise ValueError(f"Unknown shape type {data.get('type')!r}")
    return shape_cls.from_dict(data)
