"""Interaction state machine turning pointer gestures into document edits.

The Editor owns the document reference and the editing-session state. Each
event is handled synchronously; every edit swaps in a new Document, so the
previous state stays intact when an edit is rejected.

Pen tool gestures:
- Click on empty canvas: add a point (MoveTo), starting a path if needed
- Press or click on a point of the path in progress: start a connection
- Drag out of a point: live connector, curved with Shift (or curve mode)
- Release without dragging: straight connector to the release position
- Click on a line midpoint: promote the line to a curve
- Double click or Enter: finish the path

Example:
    editor = Editor()
    editor.set_tool(Tool.PEN)
    editor.click(10, 10)
    editor.click(100, 10)
    editor.pointer_down(10, 10)
    editor.pointer_up(100, 10)
    editor.current_path.d  # 'M 10 10 L 100 10 M 100 10'
"""

import itertools
from dataclasses import replace

import structlog

from vectorpen.config import EditorSettings, get_default_settings
from vectorpen.core.geometry import (
    connect,
    derive_connection,
    line_midpoint,
    move_handle,
    promote_line_to_curve,
    regular_polygon_points,
    star_points,
)
from vectorpen.core.hittest import RenderableFactory, flattened_renderable, pick_shape
from vectorpen.core.session import (
    ConnectingFrom,
    DraggingHandle,
    DraggingVertex,
    DrawingShape,
    Idle,
    PathInProgress,
    SessionState,
    SnapTarget,
    in_progress_path_id,
)
from vectorpen.domain import (
    CircleShape,
    CurveTo,
    Document,
    EllipseShape,
    Event,
    HandleKind,
    KeyEvent,
    LineTo,
    MoveTo,
    PathShape,
    Point,
    PointerAction,
    PointerEvent,
    PolygonShape,
    RectShape,
    Shape,
    Tool,
    ToolChange,
    parse,
)
from vectorpen.exceptions import PathParseError
from vectorpen.utils import SessionLogger, SessionStats

INVALID_PATH_DATA_MESSAGE = "Invalid path data. Supported: M, L, C, Z (absolute only)"

_DRAWING_TOOLS = (Tool.RECT, Tool.CIRCLE, Tool.ELLIPSE)


class Editor:
    """Pointer-driven editor for a document of shapes.

    Attributes:
        settings: Editor settings (pick radii, tool defaults, styles)
        path_data_error: Message of the last rejected text edit, if any
    """

    def __init__(
        self,
        settings: EditorSettings | None = None,
        document: Document | None = None,
        renderable_factory: RenderableFactory | None = None,
        logger: structlog.stdlib.BoundLogger | None = None,
    ) -> None:
        """Initialize the editor.

        Args:
            settings: Editor settings (defaults if None)
            document: Initial document (empty if None)
            renderable_factory: Builds hit-test renderables for paths;
                commands are flattened when None
            logger: Bound logger for session events
        """
        self.settings = settings or get_default_settings()
        self._document = document if document is not None else Document()
        self._renderable_factory = renderable_factory or flattened_renderable(
            self.settings.hit_test.flatten_tolerance
        )
        self._session = SessionLogger(logger)
        self._tool = Tool.SELECT
        self._state: SessionState = Idle()
        self._suppress_click = False
        self._ids = itertools.count(1)
        self.path_data_error: str | None = None

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def document(self) -> Document:
        return self._document

    @property
    def tool(self) -> Tool:
        return self._tool

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def stats(self) -> SessionStats:
        return self._session.stats

    @property
    def current_path_id(self) -> str | None:
        """Id of the path in progress, if any."""
        return in_progress_path_id(self._state)

    @property
    def current_path(self) -> PathShape | None:
        """The path in progress, if any."""
        return self._document.get_path(self.current_path_id)

    @property
    def selected(self) -> Shape | None:
        return self._document.selected

    @property
    def preview_line(self) -> tuple[Point, Point] | None:
        """Start and provisional end of the connection being drawn."""
        state = self._state
        if isinstance(state, ConnectingFrom) and state.preview is not None:
            return (state.anchor, state.preview)
        return None

    @property
    def hovered_target(self) -> SnapTarget | None:
        """Point anchor the running connection would snap to."""
        state = self._state
        return state.hovered if isinstance(state, ConnectingFrom) else None

    # ------------------------------------------------------------------
    # Event entry points
    # ------------------------------------------------------------------

    def handle(self, event: Event) -> None:
        """Process one input event.

        Raises:
            TypeError: If the event type is unknown
        """
        if isinstance(event, PointerEvent):
            handlers = {
                PointerAction.DOWN: self._on_down,
                PointerAction.MOVE: self._on_move,
                PointerAction.UP: self._on_up,
                PointerAction.CLICK: self._on_click,
            }
            handlers[event.action](event)
        elif isinstance(event, KeyEvent):
            self.key(event.key)
        elif isinstance(event, ToolChange):
            self.set_tool(event.tool)
        else:
            raise TypeError(f"Unsupported event {event!r}")

    def pointer_down(self, x: float, y: float, shift: bool = False) -> None:
        self.handle(PointerEvent(PointerAction.DOWN, x, y, shift=shift))

    def pointer_move(self, x: float, y: float, shift: bool = False) -> None:
        self.handle(PointerEvent(PointerAction.MOVE, x, y, shift=shift))

    def pointer_up(self, x: float, y: float, shift: bool = False) -> None:
        self.handle(PointerEvent(PointerAction.UP, x, y, shift=shift))

    def click(self, x: float, y: float, clicks: int = 1, shift: bool = False) -> None:
        """Deliver a full click: press, release and click at one position."""
        self.pointer_down(x, y, shift=shift)
        self.pointer_up(x, y, shift=shift)
        self.handle(PointerEvent(PointerAction.CLICK, x, y, shift=shift, clicks=clicks))

    def double_click(self, x: float, y: float) -> None:
        """Deliver the two clicks of a double click."""
        self.click(x, y, clicks=1)
        self.click(x, y, clicks=2)

    def key(self, key: str) -> None:
        """Handle a key press ("Enter" finishes the path, "Delete" removes)."""
        if key == "Enter" and self._tool is Tool.PEN:
            self.finalize()
        elif key in ("Delete", "Backspace"):
            self.delete_selected()

    def set_tool(self, tool: Tool) -> None:
        """Switch tools, finishing any path in progress."""
        self.finalize()
        self._set_state(Idle())
        self._suppress_click = False
        self._tool = tool

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def finalize(self) -> None:
        """Finish the path in progress, leaving its commands as they are."""
        path_id = self.current_path_id
        if path_id is None:
            return
        self._set_state(Idle())
        path = self._document.get_path(path_id)
        self._session.log_path_finalized(path_id, len(path.commands) if path else 0)

    def update_path_data(self, text: str) -> bool:
        """Replace the selected path's commands with parsed text.

        On a parse failure the document is left untouched and
        ``path_data_error`` holds a message for the user.

        Args:
            text: New path-description text

        Returns:
            True if the edit was applied
        """
        path = self._document.selected
        if not isinstance(path, PathShape):
            self.path_data_error = "No path selected"
            return False

        try:
            commands = parse(text)
        except PathParseError as e:
            self.path_data_error = INVALID_PATH_DATA_MESSAGE
            self._session.log_text_edit(path.id, text, error=e)
            return False

        self.path_data_error = None
        self._commit(self._document.replace(path.with_commands(commands)))
        self._release_gesture_on(path.id)
        self._session.log_text_edit(path.id, text)
        return True

    def delete_selected(self) -> bool:
        """Remove the selected shape.

        Returns:
            True if a shape was removed
        """
        shape = self._document.selected
        if shape is None:
            return False
        self._commit(self._document.remove(shape.id))
        self._release_gesture_on(shape.id)
        self._session.logger.info("Shape deleted", shape=shape.id)
        return True

    # ------------------------------------------------------------------
    # Pointer handlers
    # ------------------------------------------------------------------

    def _on_down(self, event: PointerEvent) -> None:
        self._suppress_click = False
        point = event.point
        state = self._state

        if isinstance(state, ConnectingFrom):
            # Second press of click-to-connect: the drag restarts here
            self._set_state(replace(state, drag_origin=point, has_moved=False))
            return

        if self._tool is Tool.PEN:
            path = self.current_path
            if path is not None:
                index = self._find_point_anchor(path, point, self.settings.pen.anchor_pick_radius)
                if index is not None:
                    self._start_connecting(path, index, drag_origin=point)
                    return
            self._start_handle_drag(point)
        elif self._tool is Tool.SELECT:
            if not self._start_handle_drag(point):
                self._start_vertex_drag(point)
        elif self._tool in _DRAWING_TOOLS:
            self._set_state(DrawingShape(tool=self._tool, start=point))

    def _on_move(self, event: PointerEvent) -> None:
        state = self._state
        point = event.point

        if isinstance(state, DraggingHandle):
            path = self._document.get_path(state.path_id)
            if path is None:
                return
            commands = move_handle(path.commands, state.cmd_index, state.handle, point)
            self._commit(self._document.replace(path.with_commands(commands)))
            if not state.moved:
                self._set_state(replace(state, moved=True))
        elif isinstance(state, DraggingVertex):
            polygon = self._document.get(state.shape_id)
            if not isinstance(polygon, PolygonShape):
                return
            self._commit(self._document.replace(polygon.with_vertex(state.vertex_index, point)))
            if not state.moved:
                self._set_state(replace(state, moved=True))
        elif isinstance(state, ConnectingFrom):
            self._update_connection(state, event)
        elif isinstance(state, DrawingShape):
            self._update_drawing(state, point)

    def _on_up(self, event: PointerEvent) -> None:
        state = self._state

        if isinstance(state, ConnectingFrom):
            self._finish_connecting(state, event)
        elif isinstance(state, DraggingHandle):
            if state.moved:
                self._session.log_handle_drag(state.path_id, state.cmd_index, state.handle.value)
                self._suppress_click = True
            resume = state.resume_path_id
            if resume is not None and self._document.get_path(resume) is not None:
                self._set_state(PathInProgress(resume))
            else:
                self._set_state(Idle())
        elif isinstance(state, DraggingVertex):
            if state.moved:
                self._session.log_handle_drag(state.shape_id, state.vertex_index, "vertex")
                self._suppress_click = True
            self._set_state(Idle())
        elif isinstance(state, DrawingShape):
            if state.shape_id is not None:
                shape = self._document.get(state.shape_id)
                self._session.log_shape_created(
                    state.shape_id, shape.shape_type if shape else state.tool.value
                )
                self._suppress_click = True
            self._set_state(Idle())

    def _on_click(self, event: PointerEvent) -> None:
        if self._suppress_click:
            # The click that trails a finished drag gesture
            self._suppress_click = False
            return

        if self._tool is Tool.PEN:
            self._pen_click(event)
        elif self._tool is Tool.SELECT:
            shape = pick_shape(
                self._document, event.point, self._renderable_factory, self.settings.hit_test
            )
            self._commit(self._document.select(shape.id if shape else None))
        elif self._tool in (Tool.POLYGON, Tool.STAR):
            self._create_polygon(event.point)

    def _pen_click(self, event: PointerEvent) -> None:
        if event.clicks >= 2:
            self.finalize()
            return
        if isinstance(self._state, ConnectingFrom):
            return

        point = event.point
        path = self.current_path
        if path is not None:
            index = self._find_point_anchor(path, point, self.settings.pen.anchor_pick_radius)
            if index is not None:
                self._start_connecting(path, index, drag_origin=path.commands[index].anchor)
                return
            line_index = self._find_midpoint(path, point)
            if line_index is not None:
                commands = promote_line_to_curve(path.commands, line_index)
                self._commit(self._document.replace(path.with_commands(commands)))
                self._session.log_promotion(path.id, line_index)
                return

        self._add_point(point)

    # ------------------------------------------------------------------
    # Pen helpers
    # ------------------------------------------------------------------

    def _add_point(self, point: Point) -> None:
        path = self.current_path
        if path is None:
            style = self.settings.style
            path = PathShape(
                id=self._new_id("path"),
                commands=(MoveTo(point.x, point.y),),
                fill=style.path_fill,
                stroke=style.path_stroke,
                stroke_width=style.path_stroke_width,
            )
            self._commit(self._document.add(path).select(path.id))
            self._set_state(PathInProgress(path.id))
            self._session.log_path_created(path.id, point.x, point.y)
            return

        commands = [*path.commands, MoveTo(point.x, point.y)]
        self._commit(self._document.replace(path.with_commands(commands)))
        self._session.log_point_added(path.id, len(commands) - 1, point.x, point.y)

    def _start_connecting(self, path: PathShape, index: int, drag_origin: Point) -> None:
        self._set_state(
            ConnectingFrom(
                path_id=path.id,
                cmd_index=index,
                anchor=path.commands[index].anchor,
                drag_origin=drag_origin,
            )
        )

    def _update_connection(self, state: ConnectingFrom, event: PointerEvent) -> None:
        path = self._document.get_path(state.path_id)
        if path is None:
            self._set_state(Idle())
            return

        point = event.point
        target = self._snap_target(path, point, exclude=state.cmd_index)
        end = target.point if target is not None else point
        has_moved = state.has_moved

        if point.distance_to(state.drag_origin) > self.settings.pen.drag_threshold:
            has_moved = True
            self._connect(path, state, end, as_curve=self._curve_requested(event), live=True)

        self._set_state(replace(state, has_moved=has_moved, hovered=target, preview=end))

    def _finish_connecting(self, state: ConnectingFrom, event: PointerEvent) -> None:
        path = self._document.get_path(state.path_id)
        if path is None:
            self._set_state(Idle())
            return

        release = event.point
        target = self._snap_target(path, release, exclude=state.cmd_index) or state.hovered
        committed = state.has_moved

        if not state.has_moved:
            on_origin = release.distance_to(state.anchor) <= self.settings.pen.anchor_pick_radius
            if target is not None or not on_origin:
                end = target.point if target is not None else release
                self._connect(path, state, end, as_curve=False, live=False)
                committed = True
        elif target is not None:
            self._connect(
                path, state, target.point, as_curve=self._curve_requested(event), live=False
            )
        else:
            # The live connector already ends at the last pointer position
            self._session.log_connection(path.id, state.cmd_index, self._connector_letter(state), False)

        self._suppress_click = committed
        self._set_state(PathInProgress(path.id))

    def _connect(
        self,
        path: PathShape,
        state: ConnectingFrom,
        end: Point,
        as_curve: bool,
        live: bool,
    ) -> None:
        segment = derive_connection(state.anchor, end, state.drag_origin, as_curve)
        commands = connect(path.commands, state.cmd_index, segment)
        self._commit(self._document.replace(path.with_commands(commands)))
        self._session.log_connection(path.id, state.cmd_index, segment.letter, live)

    def _connector_letter(self, state: ConnectingFrom) -> str:
        path = self._document.get_path(state.path_id)
        if path is not None:
            for command in path.commands[state.cmd_index + 1 :]:
                if isinstance(command, MoveTo):
                    break
                if isinstance(command, (LineTo, CurveTo)):
                    return command.letter
        return "L"

    def _curve_requested(self, event: PointerEvent) -> bool:
        return event.shift or self.settings.pen.curve_mode

    def _find_point_anchor(self, path: PathShape, point: Point, radius: float) -> int | None:
        for i, command in enumerate(path.commands):
            if isinstance(command, MoveTo) and command.anchor.distance_to(point) <= radius:
                return i
        return None

    def _snap_target(self, path: PathShape, point: Point, exclude: int) -> SnapTarget | None:
        radius = self.settings.pen.snap_radius
        for i, command in enumerate(path.commands):
            if i == exclude or not isinstance(command, MoveTo):
                continue
            if command.anchor.distance_to(point) <= radius:
                return SnapTarget(cmd_index=i, point=command.anchor)
        return None

    def _find_midpoint(self, path: PathShape, point: Point) -> int | None:
        radius = self.settings.pen.midpoint_pick_radius
        for i, command in enumerate(path.commands):
            if not isinstance(command, LineTo):
                continue
            midpoint = line_midpoint(path.commands, i)
            if midpoint is not None and midpoint.distance_to(point) <= radius:
                return i
        return None

    # ------------------------------------------------------------------
    # Handle and vertex dragging
    # ------------------------------------------------------------------

    def _start_handle_drag(self, point: Point) -> bool:
        """Start dragging the nearest anchor/handle circle under the pointer."""
        radius = self.settings.pen.handle_pick_radius
        in_progress = self.current_path_id
        best: tuple[float, str, int, HandleKind] | None = None

        for path in self._document.paths():
            is_current = path.id == in_progress and self._tool is Tool.PEN
            if not (path.selected or is_current):
                continue
            for i, command in enumerate(path.commands):
                candidates: list[tuple[HandleKind, Point]] = []
                if isinstance(command, MoveTo) and not is_current:
                    candidates.append((HandleKind.ANCHOR, command.anchor))
                elif isinstance(command, LineTo) and path.selected:
                    candidates.append((HandleKind.ANCHOR, command.anchor))
                elif isinstance(command, CurveTo):
                    candidates.append((HandleKind.ANCHOR, command.anchor))
                    candidates.append((HandleKind.HANDLE1, command.handle1))
                    candidates.append((HandleKind.HANDLE2, command.handle2))

                for handle, position in candidates:
                    distance = position.distance_to(point)
                    if distance <= radius and (best is None or distance < best[0]):
                        best = (distance, path.id, i, handle)

        if best is None:
            return False

        _, path_id, index, handle = best
        self._set_state(
            DraggingHandle(
                path_id=path_id,
                cmd_index=index,
                handle=handle,
                resume_path_id=in_progress,
            )
        )
        return True

    def _start_vertex_drag(self, point: Point) -> bool:
        radius = self.settings.shapes.vertex_pick_radius
        for shape in self._document:
            if not isinstance(shape, PolygonShape) or not shape.selected:
                continue
            for i, vertex in enumerate(shape.points):
                if vertex.distance_to(point) <= radius:
                    self._set_state(DraggingVertex(shape_id=shape.id, vertex_index=i))
                    return True
        return False

    # ------------------------------------------------------------------
    # Simple shape tools
    # ------------------------------------------------------------------

    def _update_drawing(self, state: DrawingShape, point: Point) -> None:
        shape_id = state.shape_id or self._new_id(state.tool.value)
        shape = self._drawn_shape(state.tool, shape_id, state.start, point)

        if state.shape_id is None:
            self._commit(self._document.add(shape).select(shape_id))
            self._set_state(replace(state, shape_id=shape_id))
        else:
            self._commit(self._document.replace(shape))

    def _drawn_shape(self, tool: Tool, shape_id: str, start: Point, point: Point) -> Shape:
        style = {
            "id": shape_id,
            "fill": self.settings.style.shape_fill,
            "stroke": self.settings.style.shape_stroke,
            "stroke_width": self.settings.style.shape_stroke_width,
            "selected": True,
        }
        if tool is Tool.RECT:
            return RectShape(
                **style,
                x=min(start.x, point.x),
                y=min(start.y, point.y),
                width=abs(point.x - start.x),
                height=abs(point.y - start.y),
            )
        if tool is Tool.CIRCLE:
            return CircleShape(**style, cx=start.x, cy=start.y, r=start.distance_to(point))
        return EllipseShape(
            **style,
            cx=start.x,
            cy=start.y,
            rx=abs(point.x - start.x),
            ry=abs(point.y - start.y),
        )

    def _create_polygon(self, point: Point) -> None:
        config = self.settings.shapes
        if self._tool is Tool.POLYGON:
            points = regular_polygon_points(point, config.polygon_sides, config.polygon_radius)
            prefix = "polygon"
        else:
            points = star_points(
                point, config.star_points, config.star_outer_radius, config.star_inner_radius
            )
            prefix = "star"

        shape = PolygonShape(
            id=self._new_id(prefix),
            points=tuple(points),
            fill=self.settings.style.shape_fill,
            stroke=self.settings.style.shape_stroke,
            stroke_width=self.settings.style.shape_stroke_width,
        )
        self._commit(self._document.add(shape).select(shape.id))
        self._session.log_shape_created(shape.id, prefix)

    # ------------------------------------------------------------------
    # State plumbing
    # ------------------------------------------------------------------

    def _release_gesture_on(self, shape_id: str) -> None:
        """Drop a running gesture whose indices point into ``shape_id``."""
        state = self._state
        if isinstance(state, ConnectingFrom) and state.path_id == shape_id:
            self._set_state(PathInProgress(shape_id))
        elif isinstance(state, DraggingHandle) and state.path_id == shape_id:
            resume = state.resume_path_id
            self._set_state(PathInProgress(resume) if resume else Idle())
        elif isinstance(state, DraggingVertex) and state.shape_id == shape_id:
            self._set_state(Idle())
        elif isinstance(state, DrawingShape) and state.shape_id == shape_id:
            self._set_state(Idle())

        if self.current_path_id is not None and self.current_path is None:
            self._set_state(Idle())

    def _set_state(self, state: SessionState) -> None:
        self._session.log_state_change(type(self._state).__name__, type(state).__name__)
        self._state = state

    def _commit(self, document: Document) -> None:
        self._document = document

    def _new_id(self, prefix: str) -> str:
        while True:
            candidate = f"{prefix}-{next(self._ids)}"
            if self._document.get(candidate) is None:
                return candidate
