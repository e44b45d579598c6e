"""Document: the ordered shape collection.

The document is a persistent value. Every edit returns a new ``Document``
and leaves the old one untouched, so a caller that hits an error keeps the
previous valid state simply by not swapping its reference.
"""

from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any

from vectorpen.domain.shapes import PathShape, Shape


@dataclass(frozen=True)
class Document:
    """Ordered, immutable collection of shapes.

    Attributes:
        shapes: Shapes in paint order (first is bottom-most)
    """

    shapes: tuple[Shape, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "shapes", tuple(self.shapes))

    def __len__(self) -> int:
        return len(self.shapes)

    def __iter__(self) -> Iterator[Shape]:
        return iter(self.shapes)

    def get(self, shape_id: str | None) -> Shape | None:
        """Find a shape by id."""
        if shape_id is None:
            return None
        for shape in self.shapes:
            if shape.id == shape_id:
                return shape
        return None

    def get_path(self, shape_id: str | None) -> PathShape | None:
        """Find a path by id; None if missing or not a path."""
        shape = self.get(shape_id)
        return shape if isinstance(shape, PathShape) else None

    @property
    def selected(self) -> Shape | None:
        """The currently selected shape, if any."""
        for shape in self.shapes:
            if shape.selected:
                return shape
        return None

    def add(self, shape: Shape) -> "Document":
        """Return a document with the shape appended on top."""
        return Document(self.shapes + (shape,))

    def replace(self, shape: Shape) -> "Document":
        """Return a document with the same-id shape swapped for ``shape``.

        The document is returned unchanged when no shape has that id.
        """
        if self.get(shape.id) is None:
            return self
        return Document(tuple(shape if s.id == shape.id else s for s in self.shapes))

    def remove(self, shape_id: str) -> "Document":
        """Return a document without the given shape."""
        return Document(tuple(s for s in self.shapes if s.id != shape_id))

    def select(self, shape_id: str | None) -> "Document":
        """Return a document where only ``shape_id`` is selected.

        Passing None (or an unknown id) clears the selection.
        """
        return Document(
            tuple(
                s if s.selected == (s.id == shape_id) else replace(s, selected=s.id == shape_id)
                for s in self.shapes
            )
        )

    def paths(self) -> list[PathShape]:
        """All path shapes in paint order."""
        return [s for s in self.shapes if isinstance(s, PathShape)]

    def to_list(self) -> list[dict[str, Any]]:
        """Serialize to the document export shape."""
        return [shape.to_dict() for shape in self.shapes]
