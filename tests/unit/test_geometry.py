"""Unit tests for geometric path derivations."""

import math

import pytest

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
from vectorpen.domain import Close, CurveTo, HandleKind, LineTo, MoveTo, Point


class TestStartPoints:
    """Tests for start-point lookup."""

    def test_effective_start_skips_lines(self) -> None:
        """LineTo anchors are skipped when looking for the start."""
        commands = [MoveTo(0, 0), LineTo(10, 0), LineTo(20, 0)]
        assert effective_start_point(commands, 2) == Point(0, 0)

    def test_effective_start_uses_curve(self) -> None:
        """A preceding CurveTo anchor is a start point."""
        commands = [MoveTo(0, 0), CurveTo(1, 1, 2, 2, 5, 5), LineTo(20, 0)]
        assert effective_start_point(commands, 2) == Point(5, 5)

    def test_effective_start_defaults_to_origin(self) -> None:
        """Without any preceding point the origin is used."""
        assert effective_start_point([LineTo(10, 0)], 0) == Point(0, 0)

    def test_current_point_follows_every_anchor(self) -> None:
        """The drawn start follows lines and returns to the figure after Close."""
        commands = [MoveTo(0, 0), LineTo(10, 0), LineTo(10, 10), Close(), LineTo(5, 5)]
        assert current_point_before(commands, 2) == Point(10, 0)
        assert current_point_before(commands, 4) == Point(0, 0)

    def test_line_midpoint(self) -> None:
        """The affordance sits halfway along the drawn line."""
        commands = [MoveTo(0, 0), LineTo(10, 0), LineTo(10, 20)]
        assert line_midpoint(commands, 2) == Point(10, 10)
        assert line_midpoint(commands, 0) is None


class TestPromoteLineToCurve:
    """Tests for line to curve promotion."""

    def test_promote_simple_line(self) -> None:
        """Control points sit at 0.33 and 0.67 of the line."""
        result = promote_line_to_curve([MoveTo(0, 0), LineTo(30, 0)], 1)
        curve = result[1]
        assert isinstance(curve, CurveTo)
        assert curve.x1 == pytest.approx(9.9)
        assert curve.y1 == pytest.approx(0)
        assert curve.x2 == pytest.approx(20.1)
        assert curve.y2 == pytest.approx(0)
        assert (curve.x, curve.y) == (30, 0)

    def test_promote_keeps_other_commands(self) -> None:
        """Only the promoted command changes."""
        commands = [MoveTo(0, 0), LineTo(30, 0), MoveTo(50, 50)]
        result = promote_line_to_curve(commands, 1)
        assert result[0] == commands[0]
        assert result[2] == commands[2]
        assert len(result) == 3

    def test_promote_uses_effective_start(self) -> None:
        """A run of lines is promoted relative to the point before the run."""
        commands = [MoveTo(0, 0), LineTo(10, 0), LineTo(30, 0)]
        curve = promote_line_to_curve(commands, 2)[2]
        assert curve.x1 == pytest.approx(9.9)

    @pytest.mark.parametrize("index", [0, 2, -1, 5])
    def test_promote_non_line_is_noop(self, index: int) -> None:
        """Promoting anything but a LineTo returns the input unchanged."""
        commands = [MoveTo(0, 0), LineTo(30, 0), CurveTo(1, 1, 2, 2, 3, 3)]
        assert promote_line_to_curve(commands, index) == commands


class TestConnections:
    """Tests for connector derivation and insertion."""

    def test_derive_line(self) -> None:
        """Without the curve flag the connector is a line."""
        assert derive_connection(Point(0, 0), Point(10, 0)) == LineTo(10, 0)

    def test_derive_curve_without_drag_start_is_line(self) -> None:
        """A curve needs a drag start; without it a line is built."""
        assert derive_connection(Point(0, 0), Point(10, 0), as_curve=True) == LineTo(10, 0)

    def test_derive_curve(self) -> None:
        """The drag start shapes both control points."""
        segment = derive_connection(Point(10, 10), Point(100, 10), Point(55, 5), as_curve=True)
        assert segment == CurveTo(32.5, 7.5, 77.5, 7.5, 100, 10)

    def test_connect_inserts_after_point(self) -> None:
        """A point without a connector gets one right after it."""
        commands = [MoveTo(10, 10), MoveTo(100, 10)]
        assert connect(commands, 0, LineTo(100, 10)) == [
            MoveTo(10, 10),
            LineTo(100, 10),
            MoveTo(100, 10),
        ]

    def test_connect_replaces_existing(self) -> None:
        """Connecting again replaces the connector instead of adding one."""
        commands = [MoveTo(10, 10), MoveTo(100, 10)]
        once = connect(commands, 0, LineTo(50, 50))
        twice = connect(once, 0, CurveTo(1, 1, 2, 2, 100, 10))
        assert twice == [MoveTo(10, 10), CurveTo(1, 1, 2, 2, 100, 10), MoveTo(100, 10)]
        assert find_connector(twice, 0) == 1

    def test_connect_from_non_point_is_noop(self) -> None:
        """Only MoveTo commands own connectors."""
        commands = [MoveTo(0, 0), LineTo(5, 5)]
        assert connect(commands, 1, LineTo(9, 9)) == commands

    def test_find_connector_stops_at_next_point(self) -> None:
        """A connector of the next point does not belong to this one."""
        commands = [MoveTo(0, 0), MoveTo(5, 5), LineTo(9, 9)]
        assert find_connector(commands, 0) is None
        assert find_connector(commands, 1) == 2


class TestMoveHandle:
    """Tests for anchor and control-handle updates."""

    @pytest.fixture
    def commands(self) -> list:
        """Path with a point, a line and a curve."""
        return [MoveTo(0, 0), LineTo(10, 0), CurveTo(1, 2, 3, 4, 5, 6)]

    def test_move_anchor(self, commands: list) -> None:
        """Anchors move on every command kind."""
        assert move_handle(commands, 0, HandleKind.ANCHOR, Point(7, 7))[0] == MoveTo(7, 7)
        assert move_handle(commands, 1, HandleKind.ANCHOR, Point(7, 7))[1] == LineTo(7, 7)
        assert move_handle(commands, 2, HandleKind.ANCHOR, Point(7, 7))[2] == CurveTo(
            1, 2, 3, 4, 7, 7
        )

    def test_move_control_handles(self, commands: list) -> None:
        """Each control handle moves independently."""
        assert move_handle(commands, 2, HandleKind.HANDLE1, Point(9, 9))[2] == CurveTo(
            9, 9, 3, 4, 5, 6
        )
        assert move_handle(commands, 2, HandleKind.HANDLE2, Point(9, 9))[2] == CurveTo(
            1, 2, 9, 9, 5, 6
        )

    def test_control_handle_on_line_is_noop(self, commands: list) -> None:
        """Lines have no control handles."""
        assert move_handle(commands, 1, HandleKind.HANDLE1, Point(9, 9)) == commands

    def test_out_of_range_is_noop(self, commands: list) -> None:
        """A stale index leaves the commands unchanged."""
        assert move_handle(commands, 9, HandleKind.ANCHOR, Point(9, 9)) == commands


class TestPolygonGenerators:
    """Tests for regular polygon and star vertices."""

    def test_polygon_vertex_count_and_radius(self) -> None:
        """All vertices lie on the circumcircle."""
        center = Point(100, 100)
        points = regular_polygon_points(center, 6, 40)
        assert len(points) == 6
        for p in points:
            assert p.distance_to(center) == pytest.approx(40)

    def test_polygon_starts_at_top(self) -> None:
        """The first vertex is straight above the centre (y grows downward)."""
        first = regular_polygon_points(Point(0, 0), 5, 50)[0]
        assert first.x == pytest.approx(0, abs=1e-9)
        assert first.y == pytest.approx(-50)

    def test_polygon_goes_clockwise(self) -> None:
        """The second vertex of a square is to the right."""
        second = regular_polygon_points(Point(0, 0), 4, 10)[1]
        assert second.x == pytest.approx(10)
        assert second.y == pytest.approx(0, abs=1e-9)

    @pytest.mark.parametrize("sides,expected", [(2, 3), (0, 3), (-4, 3), (7.8, 7)])
    def test_polygon_sides_clamped(self, sides: float, expected: int) -> None:
        """Side counts are floored and clamped to at least three."""
        assert len(regular_polygon_points(Point(0, 0), sides)) == expected

    def test_star_alternates_radii(self) -> None:
        """Tips and notches alternate, starting with a tip at the top."""
        center = Point(0, 0)
        points = star_points(center, 5, 50, 20)
        assert len(points) == 10
        for i, p in enumerate(points):
            expected = 50 if i % 2 == 0 else 20
            assert p.distance_to(center) == pytest.approx(expected)
        assert points[0].y == pytest.approx(-50)

    def test_star_notch_angle(self) -> None:
        """Notches sit halfway between tips."""
        points = star_points(Point(0, 0), 4, 10, 5)
        angle = math.atan2(points[1].y, points[1].x)
        assert angle == pytest.approx(-math.pi / 4)

    def test_star_points_clamped(self) -> None:
        """Fewer than three points is clamped."""
        assert len(star_points(Point(0, 0), 1)) == 6


class TestContainment:
    """Tests for simple-shape containment."""

    def test_point_in_rect(self) -> None:
        """Inside, edge and outside."""
        assert point_in_rect(Point(5, 5), 0, 0, 10, 10)
        assert point_in_rect(Point(10, 10), 0, 0, 10, 10)
        assert not point_in_rect(Point(11, 5), 0, 0, 10, 10)

    def test_point_in_circle(self) -> None:
        """Distance to the centre decides."""
        assert point_in_circle(Point(3, 4), Point(0, 0), 5)
        assert not point_in_circle(Point(4, 4), Point(0, 0), 5)

    def test_point_in_ellipse(self) -> None:
        """Axis radii are honoured; degenerate ellipses contain nothing."""
        assert point_in_ellipse(Point(9, 0), Point(0, 0), 10, 2)
        assert not point_in_ellipse(Point(0, 3), Point(0, 0), 10, 2)
        assert not point_in_ellipse(Point(0, 0), Point(0, 0), 0, 2)

    def test_point_in_polygon(self) -> None:
        """Ray casting distinguishes inside from outside."""
        square = [Point(0, 0), Point(2, 0), Point(2, 2), Point(0, 2)]
        assert point_in_polygon(Point(1, 1), square)
        assert not point_in_polygon(Point(3, 3), square)
        assert not point_in_polygon(Point(0, 0), square[:2])
