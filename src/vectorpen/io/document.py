"""Document import and export.

Documents travel as an indented JSON array of shape records. Import is
forgiving: records that cannot be decoded are dropped (and logged) instead
of failing the whole document, and path records always get their
description text rebuilt from their structured commands.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from vectorpen.domain import Document, PathShape, Shape, parse, shape_from_dict
from vectorpen.domain.shapes import SHAPE_TYPES
from vectorpen.exceptions import (
    DocumentFormatError,
    DocumentLoadError,
    DocumentSaveError,
    PathParseError,
)

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of importing a document.

    Attributes:
        document: Shapes that could be decoded, selection cleared
        dropped: One reason per record that was left out
        repaired: Ids of paths whose supplied ``d`` disagreed with their commands
    """

    document: Document
    dropped: list[str] = field(default_factory=list)
    repaired: list[str] = field(default_factory=list)


def export_document(document: Document) -> str:
    """Serialize a document to an indented JSON array."""
    return json.dumps(document.to_list(), indent=2)


def import_document(text: str) -> ImportResult:
    """Decode a JSON array of shape records.

    Args:
        text: Document JSON

    Returns:
        ImportResult with the decoded document and what was dropped/repaired

    Raises:
        DocumentFormatError: If the text is not JSON or not an array
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DocumentFormatError(f"not valid JSON ({e.msg} at line {e.lineno})") from e

    if not isinstance(data, list):
        raise DocumentFormatError(f"expected an array of shapes, got {type(data).__name__}")

    result = ImportResult(document=Document())
    shapes: list[Shape] = []
    seen: set[str] = set()

    for index, record in enumerate(data):
        reason = _reject_reason(record, seen)
        if reason is None:
            try:
                shape = _decode_record(record)
            except (KeyError, TypeError, ValueError, PathParseError) as e:
                reason = f"{type(e).__name__}: {e}"
            else:
                if isinstance(shape, PathShape) and "d" in record and record["d"] != shape.d:
                    result.repaired.append(shape.id)
                    logger.info("Path data of %s rebuilt from commands", shape.id)
                shapes.append(shape)
                seen.add(shape.id)
                continue

        logger.warning("Shape record #%d dropped: %s", index, reason)
        result.dropped.append(f"#{index}: {reason}")

    result.document = Document(tuple(shapes)).select(None)
    return result


def _reject_reason(record: Any, seen: set[str]) -> str | None:
    if not isinstance(record, dict):
        return "not an object"
    if not record.get("id"):
        return "missing id"
    if record.get("type") not in SHAPE_TYPES:
        return f"unknown type {record.get('type')!r}"
    if str(record["id"]) in seen:
        return f"duplicate id {record['id']!r}"
    return None


def _decode_record(record: dict[str, Any]) -> Shape:
    if record["type"] == PathShape.shape_type and "commands" not in record:
        # Records written by hand may carry only the description text
        commands = [c.to_dict() for c in parse(str(record.get("d", "")))]
        record = {**record, "commands": commands}
    return shape_from_dict(record)


def load_document(path: Path) -> ImportResult:
    """Read and import a document file.

    Raises:
        DocumentLoadError: If the file cannot be read or is malformed
    """
    if not path.exists():
        raise DocumentLoadError(str(path), "file not found")

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DocumentLoadError(str(path), str(e)) from e

    try:
        return import_document(text)
    except DocumentFormatError as e:
        raise DocumentLoadError(str(path), e.details) from e


def save_document(document: Document, path: Path) -> None:
    """Export a document to a file.

    Raises:
        DocumentSaveError: If the file cannot be written
    """
    try:
        path.write_text(export_document(document) + "\n", encoding="utf-8")
    except OSError as e:
        raise DocumentSaveError(str(path), str(e)) from e
    logger.info("Saved %d shapes to %s", len(document), path)
