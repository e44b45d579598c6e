"""Geometric derivations for path editing.

This module provides the pure functions behind structural path edits:
- Start-point lookup for a segment
- Line to curve promotion
- Connector derivation and insertion (one outgoing segment per point)
- Anchor and control-handle updates
- Regular polygon and star vertex generation
- Containment tests for the simple shapes

Functions take and return plain command lists. An operation aimed at an
index that does not hold the expected command returns its input unchanged.
"""

import logging
import math
from collections.abc import Sequence

from vectorpen.domain import (
    Close,
    Command,
    CurveTo,
    HandleKind,
    LineTo,
    MoveTo,
    Point,
)

logger = logging.getLogger(__name__)

# Fractions of the span where promoted control points are placed
PROMOTE_FIRST_FRACTION = 0.33
PROMOTE_SECOND_FRACTION = 0.67


def effective_start_point(commands: Sequence[Command], index: int) -> Point:
    """Find the start point used when promoting the segment at ``index``.

    Scans backward for the nearest MoveTo or CurveTo anchor. LineTo and
    Close commands are skipped over, so a run of lines is promoted relative
    to the point or curve that precedes the whole run.

    Args:
        commands: Path commands
        index: Index of the segment

    Returns:
        Anchor of the nearest preceding MoveTo/CurveTo, or the origin
    """
    for i in range(index - 1, -1, -1):
        command = commands[i]
        if isinstance(command, (MoveTo, CurveTo)):
            return command.anchor
    return Point(0.0, 0.0)


def current_point_before(commands: Sequence[Command], index: int) -> Point:
    """Find the pen position where the segment at ``index`` starts.

    Unlike ``effective_start_point`` this follows the path exactly: the
    previous anchor of any kind, or the sub-figure start after a Close.

    Args:
        commands: Path commands
        index: Index of the segment

    Returns:
        Current point before the segment, or the origin for the first one
    """
    current = Point(0.0, 0.0)
    figure_start = current
    for command in commands[:index]:
        if isinstance(command, MoveTo):
            current = figure_start = command.anchor
        elif isinstance(command, Close):
            current = figure_start
        else:
            current = command.anchor
    return current


def line_midpoint(commands: Sequence[Command], index: int) -> Point | None:
    """Position of the line-to-curve affordance for the LineTo at ``index``.

    Returns:
        Midpoint of the drawn line, or None if ``index`` is not a LineTo
    """
    if not 0 <= index < len(commands) or not isinstance(commands[index], LineTo):
        return None
    start = current_point_before(commands, index)
    end = commands[index].anchor
    return Point((start.x + end.x) / 2, (start.y + end.y) / 2)


def promote_line_to_curve(commands: Sequence[Command], index: int) -> list[Command]:
    """Replace the LineTo at ``index`` with an equivalent, editable CurveTo.

    The control points sit at 0.33 and 0.67 of the vector from the
    effective start point to the line end, so the curve still draws as a
    straight line.

    Args:
        commands: Path commands
        index: Index of the LineTo to promote

    Returns:
        New command list; a copy of the input if ``index`` is out of range
        or does not hold a LineTo

    Examples:
        >>> promote_line_to_curve([MoveTo(0, 0), LineTo(30, 0)], 1)[1].x1
        9.9
    """
    if not 0 <= index < len(commands) or not isinstance(commands[index], LineTo):
        logger.debug("Promotion ignored: no line at index %s", index)
        return list(commands)

    start = effective_start_point(commands, index)
    line = commands[index]
    dx = line.x - start.x
    dy = line.y - start.y

    curve = CurveTo(
        x1=start.x + dx * PROMOTE_FIRST_FRACTION,
        y1=start.y + dy * PROMOTE_FIRST_FRACTION,
        x2=start.x + dx * PROMOTE_SECOND_FRACTION,
        y2=start.y + dy * PROMOTE_SECOND_FRACTION,
        x=line.x,
        y=line.y,
    )
    return [*commands[:index], curve, *commands[index + 1 :]]


def derive_connection(
    from_point: Point,
    to_point: Point,
    drag_start: Point | None = None,
    as_curve: bool = False,
) -> LineTo | CurveTo:
    """Build the segment connecting two points.

    For a curve the drag start acts as a waypoint: the first control point
    is the midpoint of from_point -> drag_start, the second is to_point
    pulled back by half the vector drag_start -> to_point.

    Args:
        from_point: Start of the connection
        to_point: End of the connection
        drag_start: Where the drag gesture began (required for curves)
        as_curve: Whether to build a CurveTo

    Returns:
        CurveTo when as_curve and a drag start are given, LineTo otherwise
    """
    if not as_curve or drag_start is None:
        return LineTo(to_point.x, to_point.y)

    return CurveTo(
        x1=from_point.x + (drag_start.x - from_point.x) * 0.5,
        y1=from_point.y + (drag_start.y - from_point.y) * 0.5,
        x2=to_point.x - (to_point.x - drag_start.x) * 0.5,
        y2=to_point.y - (to_point.y - drag_start.y) * 0.5,
        x=to_point.x,
        y=to_point.y,
    )


def find_connector(commands: Sequence[Command], from_index: int) -> int | None:
    """Index of the connector owned by the MoveTo at ``from_index``.

    The connector is the first LineTo/CurveTo after the MoveTo and before
    the next MoveTo.
    """
    for i in range(from_index + 1, len(commands)):
        command = commands[i]
        if isinstance(command, MoveTo):
            return None
        if isinstance(command, (LineTo, CurveTo)):
            return i
    return None


def connect(
    commands: Sequence[Command],
    from_index: int,
    segment: LineTo | CurveTo,
) -> list[Command]:
    """Set the outgoing segment of the MoveTo at ``from_index``.

    An existing connector is replaced in place; otherwise the segment is
    inserted directly after the MoveTo. Repeated calls therefore never
    accumulate segments.

    Args:
        commands: Path commands
        from_index: Index of the MoveTo to connect from
        segment: New connector

    Returns:
        New command list; a copy of the input if ``from_index`` does not
        hold a MoveTo
    """
    if not 0 <= from_index < len(commands) or not isinstance(commands[from_index], MoveTo):
        logger.debug("Connection ignored: no point at index %s", from_index)
        return list(commands)

    connector = find_connector(commands, from_index)
    if connector is not None:
        return [*commands[:connector], segment, *commands[connector + 1 :]]
    return [*commands[: from_index + 1], segment, *commands[from_index + 1 :]]


def move_handle(
    commands: Sequence[Command],
    index: int,
    handle: HandleKind,
    point: Point,
) -> list[Command]:
    """Move the anchor or a control handle of the command at ``index``.

    Anchors exist on MoveTo, LineTo and CurveTo; control handles only on
    CurveTo. Any other combination leaves the commands unchanged.

    Args:
        commands: Path commands
        index: Index of the command to edit
        handle: Which point of the command to move
        point: New position

    Returns:
        New command list
    """
    if not 0 <= index < len(commands):
        return list(commands)

    command = commands[index]
    updated: Command | None = None

    if handle is HandleKind.ANCHOR:
        if isinstance(command, MoveTo):
            updated = MoveTo(point.x, point.y)
        elif isinstance(command, LineTo):
            updated = LineTo(point.x, point.y)
        elif isinstance(command, CurveTo):
            updated = CurveTo(command.x1, command.y1, command.x2, command.y2, point.x, point.y)
    elif isinstance(command, CurveTo):
        if handle is HandleKind.HANDLE1:
            updated = CurveTo(point.x, point.y, command.x2, command.y2, command.x, command.y)
        else:
            updated = CurveTo(command.x1, command.y1, point.x, point.y, command.x, command.y)

    if updated is None:
        logger.debug("Handle update ignored: %s on %s", handle.value, type(command).__name__)
        return list(commands)
    return [*commands[:index], updated, *commands[index + 1 :]]


def regular_polygon_points(center: Point, sides: int, radius: float = 50.0) -> list[Point]:
    """Vertices of a regular polygon.

    Starts at the top (12 o'clock, y grows downward) and proceeds clockwise.

    Args:
        center: Polygon centre
        sides: Number of sides, floored and clamped to at least 3
        radius: Circumradius

    Returns:
        ``sides`` vertices
    """
    count = max(3, math.floor(sides))
    return [
        Point(
            center.x + radius * math.cos(-math.pi / 2 + 2 * math.pi * i / count),
            center.y + radius * math.sin(-math.pi / 2 + 2 * math.pi * i / count),
        )
        for i in range(count)
    ]


def star_points(
    center: Point,
    points: int,
    outer_radius: float = 50.0,
    inner_radius: float = 25.0,
) -> list[Point]:
    """Vertices of a star, alternating outer and inner radius.

    Starts with an outer vertex at the top and proceeds clockwise.

    Args:
        center: Star centre
        points: Number of star points, floored and clamped to at least 3
        outer_radius: Radius of the tips
        inner_radius: Radius of the notches

    Returns:
        ``2 * points`` vertices
    """
    count = max(3, math.floor(points))
    vertices: list[Point] = []
    for i in range(count * 2):
        angle = -math.pi / 2 + math.pi * i / count
        radius = outer_radius if i % 2 == 0 else inner_radius
        vertices.append(
            Point(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle))
        )
    return vertices


def point_in_rect(point: Point, x: float, y: float, width: float, height: float) -> bool:
    """Check if a point lies inside (or on the edge of) a rectangle."""
    return x <= point.x <= x + width and y <= point.y <= y + height


def point_in_circle(point: Point, center: Point, radius: float) -> bool:
    """Check if a point lies inside (or on) a circle."""
    return point.distance_to(center) <= radius


def point_in_ellipse(point: Point, center: Point, rx: float, ry: float) -> bool:
    """Check if a point lies inside (or on) an axis-aligned ellipse."""
    if rx <= 0 or ry <= 0:
        return False
    dx = point.x - center.x
    dy = point.y - center.y
    return (dx * dx) / (rx * rx) + (dy * dy) / (ry * ry) <= 1


def point_in_polygon(point: Point, polygon: Sequence[Point]) -> bool:
    """Determine if a point is inside a polygon using ray casting algorithm.

    Casts a horizontal ray from the point to the right and counts intersections
    with polygon edges. Odd number of intersections = inside, even = outside.

    Args:
        point: The point to test
        polygon: List of points forming the polygon boundary

    Returns:
        True if point is inside polygon, False otherwise

    Examples:
        >>> square = [Point(0.0, 0.0), Point(2.0, 0.0), Point(2.0, 2.0), Point(0.0, 2.0)]
        >>> point_in_polygon(Point(1.0, 1.0), square)
        True
        >>> point_in_polygon(Point(3.0, 3.0), square)
        False
    """
    n = len(polygon)
    if n < 3:
        return False

    inside = False
    x, y = point.x, point.y
    j = n - 1

    for i in range(n):
        xi, yi = polygon[i].x, polygon[i].y
        xj, yj = polygon[j].x, polygon[j].y

        # Check if ray from point intersects edge (j, i)
        if ((yi > y) != (yj > y)) and (x < (xj - xi) * (y - yi) / (yj - yi) + xi):
            inside = not inside

        j = i

    return inside
