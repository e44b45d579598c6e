"""Document and event-script I/O for vectorpen.

This module handles moving documents and recorded input in and out of the
editor as JSON.

Key responsibilities:
- Export a document as an indented JSON array of shapes
- Import documents, dropping undecodable records and rebuilding path text
- Load event scripts for replaying an editing session

Key functions:
- export_document / import_document: JSON text conversion
- load_document / save_document: File wrappers
- load_event_script / parse_events: Event-script decoding
"""

from vectorpen.io.document import (
    ImportResult,
    export_document,
    import_document,
    load_document,
    save_document,
)
from vectorpen.io.script import load_event_script, parse_events

__all__ = [
    "ImportResult",
    "export_document",
    "import_document",
    "load_document",
    "load_event_script",
    "parse_events",
    "save_document",
]
