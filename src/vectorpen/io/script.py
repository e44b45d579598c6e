"""Event scripts for replaying editing sessions.

A script is a JSON array of event objects:

    [
        {"type": "tool", "tool": "pen"},
        {"type": "click", "x": 10, "y": 10},
        {"type": "down", "x": 10, "y": 10},
        {"type": "move", "x": 55, "y": 5, "shift": true},
        {"type": "up", "x": 100, "y": 10, "shift": true},
        {"type": "click", "x": 100, "y": 10, "clicks": 2},
        {"type": "key", "key": "Enter"}
    ]
"""

import json
import math
from pathlib import Path
from typing import Any

from vectorpen.domain import Event, KeyEvent, PointerAction, PointerEvent, Tool, ToolChange
from vectorpen.exceptions import EventScriptError

_POINTER_TYPES = {action.value: action for action in PointerAction}


def parse_events(data: Any) -> list[Event]:
    """Decode a list of event objects.

    Args:
        data: Decoded JSON value

    Returns:
        Events in script order

    Raises:
        EventScriptError: If the script or one of its entries is malformed
    """
    if not isinstance(data, list):
        raise EventScriptError(-1, "script must be a JSON array")
    return [_parse_event(index, entry) for index, entry in enumerate(data)]


def _parse_event(index: int, entry: Any) -> Event:
    if not isinstance(entry, dict):
        raise EventScriptError(index, "entry must be an object")

    kind = entry.get("type")
    if kind in _POINTER_TYPES:
        x = _coordinate(index, entry, "x")
        y = _coordinate(index, entry, "y")
        clicks = entry.get("clicks", 1)
        if not isinstance(clicks, int) or isinstance(clicks, bool) or clicks < 1:
            raise EventScriptError(index, f"clicks must be a positive integer, got {clicks!r}")
        return PointerEvent(
            _POINTER_TYPES[kind],
            x,
            y,
            shift=bool(entry.get("shift", False)),
            clicks=clicks,
        )
    if kind == "key":
        key = entry.get("key")
        if not isinstance(key, str) or not key:
            raise EventScriptError(index, "key event needs a 'key' name")
        return KeyEvent(key)
    if kind == "tool":
        try:
            return ToolChange(Tool(entry.get("tool")))
        except ValueError as e:
            raise EventScriptError(index, f"unknown tool {entry.get('tool')!r}") from e

    raise EventScriptError(index, f"unknown event type {kind!r}")


def _coordinate(index: int, entry: dict[str, Any], name: str) -> float:
    value = entry.get(name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EventScriptError(index, f"'{name}' must be a number, got {value!r}")
    if not math.isfinite(value):
        raise EventScriptError(index, f"'{name}' must be finite")
    return float(value)


def load_event_script(path: Path) -> list[Event]:
    """Read an event script file.

    Raises:
        FileNotFoundError: If the script does not exist
        EventScriptError: If the file is not a valid script
    """
    if not path.exists():
        raise FileNotFoundError(f"Event script not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise EventScriptError(-1, f"not valid JSON ({e.msg} at line {e.lineno})") from e
    return parse_events(data)
