"""Exception hierarchy for Vectorpen."""


class VectorPenError(Exception):
    """Base exception for all Vectorpen errors."""

    pass


class PathError(VectorPenError):
    """Errors related to path data."""

    pass


class PathParseError(PathError):
    """Path-description text could not be turned into commands.

    The original text is kept so that an editor can show it back to the user
    next to the message.
    """

    def __init__(self, text: str, reason: str = "no valid commands recovered") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Invalid path data {text!r}: {reason}")


class GeometryError(VectorPenError):
    """Errors in geometric calculations."""

    pass


class HitTestUnavailableError(GeometryError):
    """The rendering surface cannot answer a native stroke query."""

    def __init__(self, reason: str = "native stroke query unavailable") -> None:
        self.reason = reason
        super().__init__(reason)


class DocumentError(VectorPenError):
    """Errors related to document import or export."""

    pass


class DocumentLoadError(DocumentError):
    """Error loading a document file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load document '{path}': {reason}")


class DocumentSaveError(DocumentError):
    """Error saving a document file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save document '{path}': {reason}")


class DocumentFormatError(DocumentError):
    """Document text is not a JSON array of shape records."""

    def __init__(self, details: str) -> None:
        self.details = details
        super().__init__(f"Invalid document format: {details}")


class EventScriptError(VectorPenError):
    """An entry of an event script could not be decoded."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid event #{index}: {reason}")
