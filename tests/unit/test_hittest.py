"""Unit tests for pointer hit testing."""

import pytest

from vectorpen.config import HitTestConfig
from vectorpen.core.hittest import (
    FlattenedPath,
    Renderable,
    hit_test_path,
    pick_shape,
    shape_contains,
)
from vectorpen.domain import (
    CircleShape,
    Close,
    CurveTo,
    Document,
    LineTo,
    MoveTo,
    PathShape,
    Point,
    RectShape,
    parse,
)
from vectorpen.exceptions import HitTestUnavailableError


class NativeRenderable:
    """Renderable with a native stroke query that records its calls."""

    def __init__(self, answer: bool = True, available: bool = True) -> None:
        self.answer = answer
        self.available = available
        self.queries: list[tuple[float, float]] = []
        self._fallback = FlattenedPath.from_commands(parse("M 0 0 L 100 0"))

    def is_point_in_stroke(self, x: float, y: float) -> bool:
        self.queries.append((x, y))
        if not self.available:
            raise HitTestUnavailableError()
        return self.answer

    def total_length(self) -> float:
        return self._fallback.total_length()

    def point_at_length(self, distance: float) -> Point:
        return self._fallback.point_at_length(distance)


class TestFlattenedPath:
    """Tests for the portable renderable."""

    def test_line_length_and_lookup(self) -> None:
        """A straight line measures its length exactly."""
        path = FlattenedPath.from_commands(parse("M 0 0 L 100 0"))
        assert path.total_length() == pytest.approx(100)
        assert path.point_at_length(25) == Point(25, 0)

    def test_lookup_clamped_to_ends(self) -> None:
        """Distances outside the path clamp to its ends."""
        path = FlattenedPath.from_commands(parse("M 0 0 L 100 0"))
        assert path.point_at_length(-5) == Point(0, 0)
        assert path.point_at_length(500) == Point(100, 0)

    def test_move_adds_no_length(self) -> None:
        """Jumps between sub-figures are not drawn."""
        path = FlattenedPath.from_commands(
            [MoveTo(0, 0), LineTo(10, 0), MoveTo(100, 100), LineTo(100, 110)]
        )
        assert path.total_length() == pytest.approx(20)
        assert path.point_at_length(15) == Point(100, 105)

    def test_close_returns_to_start(self) -> None:
        """Close draws back to the sub-figure start."""
        path = FlattenedPath.from_commands(
            [MoveTo(0, 0), LineTo(10, 0), LineTo(10, 10), Close()]
        )
        assert path.total_length() == pytest.approx(20 + 200**0.5)

    def test_straight_curve_length(self) -> None:
        """A promoted (collinear) curve measures like its line."""
        path = FlattenedPath.from_commands([MoveTo(0, 0), CurveTo(9.9, 0, 20.1, 0, 30, 0)])
        assert path.total_length() == pytest.approx(30)

    def test_curve_bulges(self) -> None:
        """A bent curve is longer than its chord."""
        path = FlattenedPath.from_commands([MoveTo(0, 0), CurveTo(0, 50, 100, 50, 100, 0)])
        assert path.total_length() > 100

    def test_empty(self) -> None:
        """An empty path has no points to look up."""
        path = FlattenedPath.from_commands([])
        assert path.is_empty
        with pytest.raises(ValueError):
            path.point_at_length(0)

    def test_satisfies_protocol(self) -> None:
        """FlattenedPath is a Renderable."""
        assert isinstance(FlattenedPath.from_commands(parse("M 0 0")), Renderable)


class TestHitTestPath:
    """Tests for stroke hit testing."""

    @pytest.fixture
    def line(self) -> FlattenedPath:
        """Horizontal line of length 100."""
        return FlattenedPath.from_commands(parse("M 0 0 L 100 0"))

    def test_point_near_stroke_hits(self, line: FlattenedPath) -> None:
        """A point within half the width plus tolerance is a hit."""
        assert hit_test_path(line, Point(50, 1), stroke_width=2)

    def test_point_far_from_stroke_misses(self, line: FlattenedPath) -> None:
        """A point beyond the threshold is a miss."""
        assert not hit_test_path(line, Point(50, 20), stroke_width=2)

    def test_endpoints_are_sampled(self, line: FlattenedPath) -> None:
        """Both ends of the path are among the samples."""
        assert hit_test_path(line, Point(104, 0), stroke_width=2)
        assert hit_test_path(line, Point(-4, 0), stroke_width=2)

    def test_tolerance_widens_hits(self, line: FlattenedPath) -> None:
        """A larger tolerance accepts points further away."""
        assert not hit_test_path(line, Point(50, 12), stroke_width=2)
        assert hit_test_path(line, Point(50, 12), stroke_width=2, tolerance=12)

    def test_native_query_preferred(self) -> None:
        """The native answer is used when available."""
        renderable = NativeRenderable(answer=False)
        assert not hit_test_path(renderable, Point(50, 0), stroke_width=2)
        assert renderable.queries == [(50, 0)]

    def test_native_unavailable_falls_back(self) -> None:
        """An unavailable native query falls back to sampling."""
        renderable = NativeRenderable(available=False)
        assert hit_test_path(renderable, Point(50, 1), stroke_width=2)
        assert not hit_test_path(renderable, Point(50, 20), stroke_width=2)


class TestPicking:
    """Tests for shape picking."""

    @pytest.fixture
    def document(self) -> Document:
        """Overlapping rect and circle with a path above them."""
        return Document(
            (
                RectShape(id="rect", x=0, y=0, width=100, height=100),
                CircleShape(id="circle", cx=50, cy=50, r=20),
                PathShape(id="path", commands=tuple(parse("M 0 200 L 100 200"))),
            )
        )

    def test_first_in_document_order_wins(self, document: Document) -> None:
        """Overlapping shapes resolve to the first one in the document."""
        assert pick_shape(document, Point(50, 50)).id == "rect"

    def test_path_picked_by_stroke(self, document: Document) -> None:
        """Paths are picked near their stroke."""
        assert pick_shape(document, Point(50, 202)).id == "path"

    def test_empty_area_picks_nothing(self, document: Document) -> None:
        """No shape under the pointer gives None."""
        assert pick_shape(document, Point(500, 500)) is None

    def test_empty_path_never_hit(self) -> None:
        """A path without commands cannot be picked."""
        assert not shape_contains(PathShape(id="p"), Point(0, 0))

    def test_custom_renderable_factory(self) -> None:
        """A host renderable answers instead of the flattened path."""
        path = PathShape(id="p", commands=(MoveTo(0, 0), LineTo(10, 0)))
        renderable = NativeRenderable(answer=True)
        assert shape_contains(path, Point(900, 900), lambda _: renderable)

    def test_config_tolerance_used(self) -> None:
        """Picking honours the configured tolerance."""
        path = PathShape(id="p", commands=tuple(parse("M 0 0 L 100 0")))
        assert not shape_contains(path, Point(50, 12))
        assert shape_contains(path, Point(50, 12), config=HitTestConfig(tolerance=12))
