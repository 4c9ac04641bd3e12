"""
Value types stored in a document.

``Value`` is a closed tagged union: a ``ValueKind`` plus a payload whose Python
type is fixed by the kind. Construct values through the classmethods rather
than the raw initializer: they copy nested lists and documents, so a value
never shares structure with the caller.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .document import Document

# Largest INT payload; wider integers are not representable in the grammar
MAX_INT = 2 ** 64 - 1


class ValueKind(Enum):
    """Kinds of values a document entry can hold."""

    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    NULL = "null"
    LIST = "list"
    OBJECT = "object"


@dataclass(eq=True)
class Value:
    """A scalar or composite document value."""

    kind: ValueKind
    data: Any = None

    def __post_init__(self) -> None:
        _validate_payload(self.kind, self.data)

    @classmethod
    def string(cls, text: str) -> "Value":
        return cls(ValueKind.STRING, text)

    @classmethod
    def integer(cls, number: int) -> "Value":
        return cls(ValueKind.INT, number)

    @classmethod
    def floating(cls, number: float) -> "Value":
        return cls(ValueKind.FLOAT, float(number))

    @classmethod
    def boolean(cls, flag: bool) -> "Value":
        return cls(ValueKind.BOOL, flag)

    @classmethod
    def null(cls) -> "Value":
        return cls(ValueKind.NULL, None)

    @classmethod
    def list_of(cls, items: Optional[list["Value"]] = None) -> "Value":
        """Build a LIST value from copies of ``items``."""
        return cls(
            ValueKind.LIST,
            [item.copy() if isinstance(item, Value) else item for item in items or []],
        )

    @classmethod
    def object_of(cls, document: Optional["Document"] = None) -> "Value":
        # Import here to avoid circular imports
        from .document import Document  # pylint: disable=import-outside-toplevel

        if document is None:
            return cls(ValueKind.OBJECT, Document())
        if isinstance(document, Document):
            return cls(ValueKind.OBJECT, document.copy())
        return cls(ValueKind.OBJECT, document)

    @classmethod
    def of(cls, obj: Any) -> "Value":
        """
        Build a Value from a plain Python object.

        Accepts str, int in 0..MAX_INT, non-negative float, bool, None, lists/tuples of
        such objects, dicts with str keys, Documents and existing Values.
        """
        # Import here to avoid circular imports
        from .document import Document  # pylint: disable=import-outside-toplevel

        if isinstance(obj, Value):
            return obj.copy()
        if obj is None:
            return cls.null()
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            return cls.integer(obj)
        if isinstance(obj, float):
            return cls.floating(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        if isinstance(obj, (list, tuple)):
            return cls(ValueKind.LIST, [cls.of(item) for item in obj])
        if isinstance(obj, dict):
            return cls(ValueKind.OBJECT, Document.from_dict(obj))
        if isinstance(obj, Document):
            return cls.object_of(obj)
        raise TypeError(f"Cannot convert {type(obj).__name__} to a document value")

    def as_string(self) -> Optional[str]:
        return self.data if self.kind is ValueKind.STRING else None

    def as_int(self) -> Optional[int]:
        return self.data if self.kind is ValueKind.INT else None

    def as_float(self) -> Optional[float]:
        return self.data if self.kind is ValueKind.FLOAT else None

    def as_bool(self) -> Optional[bool]:
        return self.data if self.kind is ValueKind.BOOL else None

    def as_list(self) -> Optional[list["Value"]]:
        return self.data if self.kind is ValueKind.LIST else None

    def as_document(self) -> Optional["Document"]:
        return self.data if self.kind is ValueKind.OBJECT else None

    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    def copy(self) -> "Value":
        """Return a deep copy; nested lists and documents are duplicated."""
        if self.kind is ValueKind.LIST:
            return Value(ValueKind.LIST, [item.copy() for item in self.data])
        if self.kind is ValueKind.OBJECT:
            return Value(ValueKind.OBJECT, self.data.copy())
        return Value(self.kind, self.data)

    def to_python(self) -> Any:
        """Convert to plain Python objects (nested documents become dicts)."""
        if self.kind is ValueKind.LIST:
            return [item.to_python() for item in self.data]
        if self.kind is ValueKind.OBJECT:
            return self.data.to_dict()
        return self.data

    def __repr__(self) -> str:
        if self.kind is ValueKind.NULL:
            return "Value.null()"
        return f"Value({self.kind.name}, {self.data!r})"


def _validate_payload(kind: ValueKind, data: Any) -> None:
    # Import here to avoid circular imports
    from .document import Document  # pylint: disable=import-outside-toplevel

    expected: type
    if kind is ValueKind.STRING:
        expected = str
    elif kind is ValueKind.INT:
        if isinstance(data, bool) or not isinstance(data, int):
            raise TypeError(f"INT value requires an int, got {type(data).__name__}")
        if not 0 <= data <= MAX_INT:
            raise ValueError(f"INT value must be between 0 and {MAX_INT}")
        return
    elif kind is ValueKind.FLOAT:
        if isinstance(data, bool) or not isinstance(data, float):
            raise TypeError(f"FLOAT value requires a float, got {type(data).__name__}")
        if not math.isfinite(data) or math.copysign(1.0, data) < 0:
            raise ValueError(f"FLOAT value must be finite and non-negative, got {data}")
        return
    elif kind is ValueKind.BOOL:
        expected = bool
    elif kind is ValueKind.NULL:
        if data is not None:
            raise TypeError("NULL value carries no payload")
        return
    elif kind is ValueKind.LIST:
        if not isinstance(data, list) or not all(isinstance(v, Value) for v in data):
            raise TypeError("LIST value requires a list of Value objects")
        return
    else:
        expected = Document

    if not isinstance(data, expected):
        raise TypeError(
            f"{kind.name} value requires a {expected.__name__}, "
            f"got {type(data).__name__}"
        )
