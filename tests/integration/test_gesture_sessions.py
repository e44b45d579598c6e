"""End-to-end editing sessions driven through the event interface."""

import pytest

from vectorpen.core import Editor
from vectorpen.core.hittest import pick_shape
from vectorpen.domain import CurveTo, LineTo, MoveTo, Point, Tool, parse, serialize
from vectorpen.io import export_document, import_document, parse_events


def replay(script: list[dict], editor: Editor | None = None) -> Editor:
    """Feed a decoded event script to an editor."""
    editor = editor or Editor()
    for event in parse_events(script):
        editor.handle(event)
    return editor


def click(x: float, y: float, **extra) -> list[dict]:
    """Events a host delivers for one physical click."""
    return [
        {"type": "down", "x": x, "y": y, **extra},
        {"type": "up", "x": x, "y": y, **extra},
        {"type": "click", "x": x, "y": y, **extra},
    ]


class TestPenGestures:
    """Gesture sequences from first click to finished path."""

    def test_click_click_connect_line(self) -> None:
        """Two clicks and a press/release between the points give a line."""
        editor = replay(
            [
                {"type": "tool", "tool": "pen"},
                *click(10, 10),
                *click(100, 10),
                {"type": "down", "x": 10, "y": 10},
                {"type": "up", "x": 100, "y": 10},
                {"type": "click", "x": 100, "y": 10},
            ]
        )
        commands = editor.current_path.commands
        assert commands[0] == MoveTo(10, 10)
        assert commands[1] == LineTo(100, 10)
        # The trailing click was consumed by the connection gesture
        assert len(commands) == 3

    def test_first_click_single_move(self) -> None:
        """The first click creates a path with exactly one MoveTo."""
        editor = replay([{"type": "tool", "tool": "pen"}, *click(10, 10)])
        assert editor.current_path.commands == (MoveTo(10, 10),)

    def test_shift_drag_through_waypoint_gives_curve(self) -> None:
        """Dragging through (55,5) with Shift ends a curve on the target."""
        editor = replay(
            [
                {"type": "tool", "tool": "pen"},
                *click(10, 10),
                *click(100, 10),
                {"type": "down", "x": 10, "y": 10},
                {"type": "move", "x": 55, "y": 5, "shift": True},
                {"type": "move", "x": 100, "y": 10, "shift": True},
                {"type": "up", "x": 100, "y": 10, "shift": True},
                {"type": "click", "x": 100, "y": 10, "shift": True},
            ]
        )
        segment = editor.current_path.commands[1]
        assert isinstance(segment, CurveTo)
        assert segment.anchor == Point(100, 10)
        assert editor.stats.connections == 1

    def test_full_session_finishes_and_exports(self) -> None:
        """A triangle drawn, promoted, finished and exported round-trips."""
        editor = replay(
            [
                {"type": "tool", "tool": "pen"},
                *click(0, 0),
                *click(100, 0),
                *click(50, 80),
                {"type": "down", "x": 0, "y": 0},
                {"type": "up", "x": 100, "y": 0},
                {"type": "down", "x": 100, "y": 0},
                {"type": "up", "x": 50, "y": 80},
                *click(50, 0),
                {"type": "key", "key": "Enter"},
            ]
        )
        path = editor.document.get_path("path-1")
        assert editor.current_path is None
        assert isinstance(path.commands[1], CurveTo)
        assert path.d == serialize(path.commands)
        assert parse(path.d) == list(path.commands)

        restored = import_document(export_document(editor.document))
        assert restored.document.get_path("path-1").d == path.d
        assert restored.dropped == []

    def test_double_click_then_new_path(self) -> None:
        """After a double click the next click starts a second path."""
        editor = replay(
            [
                {"type": "tool", "tool": "pen"},
                *click(10, 10),
                *click(60, 10),
                *click(60, 10),
                {"type": "down", "x": 60, "y": 10},
                {"type": "up", "x": 60, "y": 10},
                {"type": "click", "x": 60, "y": 10, "clicks": 2},
                *click(200, 200),
            ]
        )
        assert [p.id for p in editor.document.paths()] == ["path-1", "path-2"]
        assert editor.document.get_path("path-1").d == "M 10 10 M 60 10"


class TestMixedTools:
    """Sessions that combine several tools."""

    def test_draw_select_and_edit(self) -> None:
        """Shapes drawn with different tools can be picked and edited."""
        editor = replay(
            [
                {"type": "tool", "tool": "rect"},
                {"type": "down", "x": 0, "y": 0},
                {"type": "move", "x": 40, "y": 40},
                {"type": "up", "x": 40, "y": 40},
                {"type": "click", "x": 40, "y": 40},
                {"type": "tool", "tool": "star"},
                *click(200, 200),
                {"type": "tool", "tool": "pen"},
                *click(300, 300),
                *click(400, 300),
                {"type": "tool", "tool": "select"},
                *click(20, 20),
            ]
        )
        assert editor.tool is Tool.SELECT
        assert editor.selected.id == "rect-1"
        assert pick_shape(editor.document, Point(200, 200)).id == "star-2"

        editor.click(300, 302)
        assert editor.selected.id == "path-3"
        assert editor.update_path_data("M 300 300 L 400 300")
        assert editor.document.get_path("path-3").commands[1] == LineTo(400, 300)

    @pytest.mark.parametrize("key", ["Delete", "Backspace"])
    def test_delete_key(self, key: str) -> None:
        """Delete keys remove the selected shape."""
        editor = replay(
            [
                {"type": "tool", "tool": "polygon"},
                *click(100, 100),
                {"type": "key", "key": key},
            ]
        )
        assert len(editor.document) == 0
