"""Core editing algorithms for vectorpen.

This module contains the core algorithms for:

- Geometry operations (promotion, connectors, handles, polygon vertices)
- Pointer hit testing (stroke sampling, shape containment)
- The interaction state machine driving pen and shape tools

Geometry and hit testing are:
- Stateless (plain command lists in, new lists out)
- Pure (no side effects beyond debug logging)

Key functions:
- promote_line_to_curve: Turn a LineTo into an equivalent CurveTo
- derive_connection: Build the line or curve joining two points
- connect: Set the single outgoing segment of a point
- move_handle: Move an anchor or control handle
- regular_polygon_points / star_points: Generate polygon vertices
- hit_test_path: Stroke hit test against a rendered path
- pick_shape: Topmost-first shape picking in document order

Key classes:
- Editor: Pointer/keyboard driven editing session
- FlattenedPath: Portable renderable built from path commands
"""

from vectorpen.core.editor import INVALID_PATH_DATA_MESSAGE, Editor
from vectorpen.core.geometry import (
    connect,
    current_point_before,
    derive_connection,
    effective_start_point,
    find_connector,
    line_midpoint,
    move_handle,
    point_in_circle,
    point_in_ellipse,
    point_in_polygon,
    point_in_rect,
    promote_line_to_curve,
    regular_polygon_points,
    star_points,
)
from vectorpen.core.hittest import (
    FlattenedPath,
    Renderable,
    flattened_renderable,
    hit_test_path,
    pick_shape,
    shape_contains,
)
from vectorpen.core.session import (
    ConnectingFrom,
    DraggingHandle,
    DraggingVertex,
    DrawingShape,
    Idle,
    PathInProgress,
    SessionState,
    SnapTarget,
)

__all__ = [
    # Editor
    "Editor",
    "INVALID_PATH_DATA_MESSAGE",
    # Session states
    "ConnectingFrom",
    "DraggingHandle",
    "DraggingVertex",
    "DrawingShape",
    "Idle",
    "PathInProgress",
    "SessionState",
    "SnapTarget",
    # Hit testing
    "FlattenedPath",
    "Renderable",
    "flattened_renderable",
    "hit_test_path",
    "pick_shape",
    "shape_contains",
    # Geometry functions
    "connect",
    "current_point_before",
    "derive_connection",
    "effective_start_point",
    "find_connector",
    "line_midpoint",
    "move_handle",
    "point_in_circle",
    "point_in_ellipse",
    "point_in_polygon",
    "point_in_rect",
    "promote_line_to_curve",
    "regular_polygon_points",
    "star_points",
]
