"""
In-memory document tree.

A ``Document`` is an ordered sequence of ``Entry`` objects plus a label index
used for membership tests. The index is a multiset of labels and is updated by
every mutating method, so ``has()`` always agrees with the entry sequence even
when labels repeat.
"""

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, replace
from os import PathLike
from typing import Any, Optional, Union

from .values import Value


@dataclass(frozen=True)
class Entry:
    """A label/value pair inside a document. Labels are fixed; use Document.rename."""

    label: str
    value: Value

    def __post_init__(self) -> None:
        if not isinstance(self.label, str):
            raise TypeError(f"Labels must be str, got {type(self.label).__name__}")
        if not isinstance(self.value, Value):
            raise TypeError(f"Expected Value, got {type(self.value).__name__}")

    def copy(self) -> "Entry":
        return Entry(self.label, self.value.copy())

    # Entry values are mutable, so entries are not hashable
    __hash__ = None  # type: ignore[assignment]


class Document:
    """Ordered collection of entries forming one object."""

    def __init__(self, entries: Optional[list[Entry]] = None) -> None:
        self._entries: list[Entry] = []
        self._labels: Counter[str] = Counter()
        for entry in entries or []:
            self.add(entry)

    @classmethod
    def from_dict(cls, mapping: dict[str, Any]) -> "Document":
        """Build a document from a dict, converting values with ``Value.of``."""
        document = cls()
        for label, obj in mapping.items():
            document._append(Entry(label, Value.of(obj)))
        return document

    @classmethod
    def from_string(cls, text: Union[str, bytes, bytearray]) -> "Document":
        """Parse document text."""
        # Import here to avoid circular imports
        from ..core.engine import loads  # pylint: disable=import-outside-toplevel

        return loads(text)

    @classmethod
    def from_file(cls, path: Union[str, "PathLike[str]"]) -> "Document":
        """Read and parse a document file."""
        # Import here to avoid circular imports
        from ..utils.files import read_document  # pylint: disable=import-outside-toplevel

        return read_document(path)

    def get(self, label: str) -> Optional[Value]:
        """Return the value of the first entry with this label."""
        entry = self.get_entry(label)
        return entry.value if entry is not None else None

    def get_entry(self, label: str) -> Optional[Entry]:
        """Return the first entry with this label."""
        index = self._index_of(label)
        return self._entries[index] if index is not None else None

    def has(self, label: str) -> bool:
        """Whether some entry carries this label."""
        return self._labels[label] > 0

    def add(self, entry: Entry) -> None:
        """
        Append a copy of an entry.

        Duplicate labels are kept; the first one wins for ``get``. The document
        owns what it stores, so later changes to the caller's value do not
        reach it.
        """
        if not isinstance(entry, Entry):
            raise TypeError(f"Expected Entry, got {type(entry).__name__}")
        self._append(entry.copy())

    def set_content(self, label: str, value: Value) -> bool:
        """Replace the value of the first entry with this label."""
        index = self._index_of(label)
        if index is None:
            return False
        self._entries[index] = replace(self._entries[index], value=_owned(value))
        return True

    def rename(self, label: str, new_label: str) -> bool:
        """Change the label of the first entry with this label."""
        index = self._index_of(label)
        if index is None:
            return False
        self._entries[index] = replace(self._entries[index], label=new_label)
        self._forget(label)
        self._labels[new_label] += 1
        return True

    def remove(self, label: str) -> bool:
        """Remove the first entry with this label, keeping the others in order."""
        index = self._index_of(label)
        if index is None:
            return False
        del self._entries[index]
        self._forget(label)
        return True

    def entries(self) -> list[Entry]:
        """Return a copy of all entries in document order."""
        return [entry.copy() for entry in self._entries]

    def labels(self) -> list[str]:
        return [entry.label for entry in self._entries]

    def copy(self) -> "Document":
        document = Document()
        for entry in self._entries:
            document._append(entry.copy())
        return document

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dict of plain Python objects; the first duplicate wins."""
        result: dict[str, Any] = {}
        for entry in self._entries:
            if entry.label not in result:
                result[entry.label] = entry.value.to_python()
        return result

    def render(self, indent: Union[int, str, None] = None) -> str:
        # Import here to avoid circular imports
        from ..core.renderer import render  # pylint: disable=import-outside-toplevel

        return render(self, indent=indent)

    def to_bytes(self, indent: Union[int, str, None] = None) -> bytes:
        return self.render(indent).encode("utf-8")

    def write_to_file(
        self, path: Union[str, "PathLike[str]"], indent: Union[int, str, None] = None
    ) -> bool:
        """Render into a file; returns whether the write succeeded."""
        # Import here to avoid circular imports
        from ..utils.files import write_document  # pylint: disable=import-outside-toplevel

        return write_document(self, path, indent=indent)

    def _append(self, entry: Entry) -> None:
        """Store an entry the document already owns; no copy is made."""
        self._entries.append(entry)
        self._labels[entry.label] += 1

    def _index_of(self, label: str) -> Optional[int]:
        if not self.has(label):
            return None
        for index, entry in enumerate(self._entries):
            if entry.label == label:
                return index
        return None

    def _forget(self, label: str) -> None:
        self._labels[label] -= 1
        if self._labels[label] <= 0:
            del self._labels[label]

    def __contains__(self, label: object) -> bool:
        return isinstance(label, str) and self.has(label)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Document):
            return NotImplemented
        return self._entries == other._entries

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Document({self._entries!r})"


def _owned(value: Value) -> Value:
    if not isinstance(value, Value):
        raise TypeError(f"Expected Value, got {type(value).__name__}")
    return value.copy()
