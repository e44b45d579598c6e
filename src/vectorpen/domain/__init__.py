"""Domain models for vectorpen.

This module contains the models representing path commands, shapes, the
document and the input events. All models are designed to be:

- Immutable (frozen dataclasses); edits return new values
- Serializable to the document export shape
- Independent of any rendering surface

Key classes:
- Point: A 2D point
- MoveTo, LineTo, CurveTo, Close: Path commands
- PathShape: A path holding commands and their description text
- RectShape, CircleShape, EllipseShape, PolygonShape: Simple shapes
- Document: The ordered shape collection
- PointerEvent, KeyEvent, ToolChange: Editor input
"""

from vectorpen.domain.commands import (
    Close,
    Command,
    CurveTo,
    HandleKind,
    LineTo,
    MoveTo,
    Point,
    command_from_dict,
)
from vectorpen.domain.document import Document
from vectorpen.domain.events import (
    Event,
    KeyEvent,
    PointerAction,
    PointerEvent,
    Tool,
    ToolChange,
)
from vectorpen.domain.pathdata import format_number, parse, serialize
from vectorpen.domain.shapes import (
    CircleShape,
    EllipseShape,
    PathShape,
    PolygonShape,
    RectShape,
    Shape,
    shape_from_dict,
)

__all__: list[str] = [
    # Enums
    "HandleKind",
    "PointerAction",
    "Tool",
    # Commands
    "Point",
    "MoveTo",
    "LineTo",
    "CurveTo",
    "Close",
    "Command",
    "command_from_dict",
    # Path data
    "format_number",
    "parse",
    "serialize",
    # Shapes
    "RectShape",
    "CircleShape",
    "EllipseShape",
    "PolygonShape",
    "PathShape",
    "Shape",
    "shape_from_dict",
    "Document",
    # Events
    "PointerEvent",
    "KeyEvent",
    "ToolChange",
    "Event",
]
