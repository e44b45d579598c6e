"""Editing-session states for the interaction state machine.

The session is always in exactly one of these states. Gesture data lives on
the state that needs it, so combinations such as "dragging a handle while
connecting points" cannot be represented.
"""

from dataclasses import dataclass
from typing import Union

from vectorpen.domain import HandleKind, Point, Tool


@dataclass(frozen=True)
class Idle:
    """No path in progress and no gesture running."""


@dataclass(frozen=True)
class PathInProgress:
    """The pen tool is building ``path_id``."""

    path_id: str


@dataclass(frozen=True)
class DraggingHandle:
    """An anchor or control handle of a path follows the pointer.

    Attributes:
        path_id: Path being edited
        cmd_index: Index of the command owning the handle
        handle: Which point of the command moves
        resume_path_id: In-progress path to return to on release
        moved: Whether the pointer moved since the press
    """

    path_id: str
    cmd_index: int
    handle: HandleKind
    resume_path_id: str | None = None
    moved: bool = False


@dataclass(frozen=True)
class DraggingVertex:
    """A polygon vertex follows the pointer."""

    shape_id: str
    vertex_index: int
    moved: bool = False


@dataclass(frozen=True)
class SnapTarget:
    """A point anchor the pointer is close enough to snap onto."""

    cmd_index: int
    point: Point


@dataclass(frozen=True)
class ConnectingFrom:
    """A connection is being drawn out of a point anchor.

    Attributes:
        path_id: In-progress path
        cmd_index: Index of the MoveTo the connection leaves from
        anchor: Position of that MoveTo
        drag_origin: Where the current drag started
        has_moved: Whether the pointer left the drag threshold
        hovered: Anchor the pointer currently snaps to
        preview: Provisional end of the connection
    """

    path_id: str
    cmd_index: int
    anchor: Point
    drag_origin: Point
    has_moved: bool = False
    hovered: SnapTarget | None = None
    preview: Point | None = None


@dataclass(frozen=True)
class DrawingShape:
    """A rect, circle or ellipse is being dragged out.

    ``shape_id`` stays None until the first pointer move creates the shape.
    """

    tool: Tool
    start: Point
    shape_id: str | None = None


SessionState = Union[
    Idle,
    PathInProgress,
    DraggingHandle,
    DraggingVertex,
    ConnectingFrom,
    DrawingShape,
]


def in_progress_path_id(state: SessionState) -> str | None:
    """The path the pen tool is building, whatever gesture is running."""
    if isinstance(state, (PathInProgress, ConnectingFrom)):
        return state.path_id
    if isinstance(state, DraggingHandle):
        return state.resume_path_id
    return None
