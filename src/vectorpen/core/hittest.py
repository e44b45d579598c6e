"""Pointer hit testing for shapes and stroked paths.

Paths are hit-tested against a *renderable*: anything that can report its
total arc length and the point at a given arc length, and optionally answer
a native "is this point within the stroke" query. ``FlattenedPath`` is the
portable renderable built straight from commands; a host with a real
rendering surface can pass its own.
"""

import bisect
import logging
import math
from collections.abc import Callable, Sequence
from typing import Protocol, runtime_checkable

from vectorpen.config import HitTestConfig
from vectorpen.core._bezier import flatten_cubic
from vectorpen.core.geometry import (
    point_in_circle,
    point_in_ellipse,
    point_in_polygon,
    point_in_rect,
)
from vectorpen.domain import (
    CircleShape,
    Close,
    Command,
    CurveTo,
    Document,
    EllipseShape,
    LineTo,
    MoveTo,
    PathShape,
    Point,
    PolygonShape,
    RectShape,
    Shape,
)
from vectorpen.exceptions import HitTestUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 5.0
DEFAULT_MIN_SAMPLES = 10
DEFAULT_SAMPLE_SPACING = 10.0


@runtime_checkable
class Renderable(Protocol):
    """What the hit tester needs from a rendered path."""

    def total_length(self) -> float: ...

    def point_at_length(self, distance: float) -> Point: ...


class FlattenedPath:
    """Polyline approximation of a path with arc-length lookup.

    Each sub-figure becomes one run of points; the jump made by a MoveTo
    contributes no length. Close adds the segment back to the sub-figure
    start.

    Example:
        renderable = FlattenedPath.from_commands(parse("M 0 0 L 100 0"))
        renderable.total_length()  # 100.0
        renderable.point_at_length(25)  # Point(25.0, 0.0)
    """

    def __init__(self, runs: list[list[Point]]) -> None:
        """Initialize from polyline runs.

        Args:
            runs: Non-empty point lists, one per sub-figure
        """
        self._points: list[Point] = []
        self._offsets: list[float] = []
        # Index pairs (i, i + 1) that form a drawn segment
        self._segments: list[int] = []

        total = 0.0
        for run in runs:
            if not run:
                continue
            start = len(self._points)
            self._points.append(run[0])
            self._offsets.append(total)
            for k in range(1, len(run)):
                total += run[k - 1].distance_to(run[k])
                self._points.append(run[k])
                self._offsets.append(total)
                self._segments.append(start + k - 1)

        self._total = total
        self._segment_ends = [self._offsets[i + 1] for i in self._segments]

    @classmethod
    def from_commands(
        cls, commands: Sequence[Command], tolerance: float = 0.25
    ) -> "FlattenedPath":
        """Flatten path commands into polyline runs.

        Args:
            commands: Path commands
            tolerance: Cubic flattening tolerance

        Returns:
            FlattenedPath instance
        """
        runs: list[list[Point]] = []
        run: list[Point] = []
        current = Point(0.0, 0.0)
        figure_start = current

        for command in commands:
            if isinstance(command, MoveTo):
                if run:
                    runs.append(run)
                current = figure_start = command.anchor
                run = [current]
            elif isinstance(command, LineTo):
                if not run:
                    run = [current]
                current = command.anchor
                run.append(current)
            elif isinstance(command, CurveTo):
                if not run:
                    run = [current]
                curve = flatten_cubic(
                    [current, command.handle1, command.handle2, command.anchor], tolerance
                )
                run.extend(curve[1:])
                current = command.anchor
            elif isinstance(command, Close):
                if run:
                    run.append(figure_start)
                    runs.append(run)
                current = figure_start
                run = [current]

        if run:
            runs.append(run)
        return cls(runs)

    @property
    def is_empty(self) -> bool:
        return not self._points

    def total_length(self) -> float:
        return self._total

    def point_at_length(self, distance: float) -> Point:
        """Point at the given arc length, clamped to the path ends.

        Raises:
            ValueError: If the path has no points
        """
        if not self._points:
            raise ValueError("Empty path has no points")
        if not self._segments or distance <= 0:
            return self._points[0]
        if distance >= self._total:
            return self._points[self._segments[-1] + 1]

        # First drawn segment whose end offset reaches the distance
        seg = self._segments[bisect.bisect_left(self._segment_ends, distance)]
        a, b = self._points[seg], self._points[seg + 1]
        length = self._offsets[seg + 1] - self._offsets[seg]
        if length == 0:
            return a
        t = (distance - self._offsets[seg]) / length
        return Point(a.x + (b.x - a.x) * t, a.y + (b.y - a.y) * t)


def hit_test_path(
    renderable: Renderable,
    point: Point,
    stroke_width: float,
    tolerance: float = DEFAULT_TOLERANCE,
    min_samples: int = DEFAULT_MIN_SAMPLES,
    sample_spacing: float = DEFAULT_SAMPLE_SPACING,
) -> bool:
    """Check whether a point lies on or near a rendered path.

    The renderable's native ``is_point_in_stroke`` query is used when it has
    one. Otherwise the path is sampled at ``max(min_samples,
    floor(length / sample_spacing))`` evenly spaced arc lengths and a sample
    within ``stroke_width / 2 + tolerance`` of the point counts as a hit.
    Sampling can miss thin, sharply curved features between samples.

    Args:
        renderable: Rendered path
        point: Pointer position
        stroke_width: Stroke width of the path
        tolerance: Extra pick distance beyond the stroke
        min_samples: Minimum sample count
        sample_spacing: Arc length per sample on long paths

    Returns:
        True if the point hits the path
    """
    native = getattr(renderable, "is_point_in_stroke", None)
    if callable(native):
        try:
            return bool(native(point.x, point.y))
        except HitTestUnavailableError as e:
            logger.debug("Native stroke query unavailable, sampling instead: %s", e)

    total = renderable.total_length()
    samples = max(min_samples, math.floor(total / sample_spacing))
    threshold = stroke_width / 2 + tolerance

    for i in range(samples + 1):
        sample = renderable.point_at_length(total * i / samples)
        if sample.distance_to(point) <= threshold:
            return True
    return False


RenderableFactory = Callable[[PathShape], Renderable]


def flattened_renderable(tolerance: float = 0.25) -> RenderableFactory:
    """Factory producing FlattenedPath renderables for path shapes."""

    def factory(shape: PathShape) -> Renderable:
        return FlattenedPath.from_commands(shape.commands, tolerance)

    return factory


def shape_contains(
    shape: Shape,
    point: Point,
    renderable_factory: RenderableFactory | None = None,
    config: HitTestConfig | None = None,
) -> bool:
    """Check if a pointer position selects a shape.

    Simple shapes use their filled area; paths use the stroke hit test.
    Empty paths are never hit.
    """
    if isinstance(shape, RectShape):
        return point_in_rect(point, shape.x, shape.y, shape.width, shape.height)
    if isinstance(shape, CircleShape):
        return point_in_circle(point, Point(shape.cx, shape.cy), shape.r)
    if isinstance(shape, EllipseShape):
        return point_in_ellipse(point, Point(shape.cx, shape.cy), shape.rx, shape.ry)
    if isinstance(shape, PolygonShape):
        return point_in_polygon(point, shape.points)
    if isinstance(shape, PathShape):
        if shape.is_empty:
            return False
        config = config or HitTestConfig()
        factory = renderable_factory or flattened_renderable(config.flatten_tolerance)
        return hit_test_path(
            factory(shape),
            point,
            shape.stroke_width,
            tolerance=config.tolerance,
            min_samples=config.min_samples,
            sample_spacing=config.sample_spacing,
        )
    return False


def pick_shape(
    document: Document,
    point: Point,
    renderable_factory: RenderableFactory | None = None,
    config: HitTestConfig | None = None,
) -> Shape | None:
    """Find the first shape, in document order, under the pointer."""
    for shape in document:
        if shape_contains(shape, point, renderable_factory, config):
            return shape
    return None
