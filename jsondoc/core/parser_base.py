"""
Base parser functionality: token-to-value conversion and structure tracking.
"""

from typing import Any, Optional

from ..model.document import Document, Entry
from ..model.values import Value, ValueKind
from ..security.limits import LimitValidator
from .tokenizer import Token, TokenType


class BaseParserMixin:
    """Common parsing helpers used by the recursive-descent parser."""

    def scalar_token_to_value(self, token: Token) -> Value:
        """Convert a scalar token into the matching Value."""
        if token.type == TokenType.STRING:
            return Value.string(self._token_value(token, str))
        if token.type == TokenType.INT:
            return Value.integer(self._token_value(token, int))
        if token.type == TokenType.FLOAT:
            return Value.floating(self._token_value(token, float))
        if token.type == TokenType.BOOLEAN:
            return Value.boolean(self._token_value(token, bool))
        if token.type == TokenType.NULL:
            return Value.null()
        raise ValueError(f"{token.type} is not a scalar token")

    @staticmethod
    def _token_value(token: Token, expected: type) -> Any:
        if not isinstance(token.value, expected):
            raise TypeError(
                f"{token.type} token carries {type(token.value).__name__}, "
                f"expected {expected.__name__}"
            )
        return token.value

    def validate_and_enter_structure(self, validator: Optional[LimitValidator]) -> None:
        """Validate and enter a structure if validator exists."""
        if validator:
            validator.enter_structure()

    def validate_and_exit_structure(self, validator: Optional[LimitValidator]) -> None:
        """Validate and exit a structure if validator exists."""
        if validator:
            validator.exit_structure()

    def init_empty_list(self) -> list[Value]:
        """Initialize an empty list."""
        return []

    def init_empty_object(self) -> Document:
        """Initialize an empty document."""
        return Document()

    def append_entry(self, document: Document, label: str, value: Value) -> None:
        """Append a freshly parsed entry without copying it."""
        document._append(Entry(label, value))  # pylint: disable=protected-access

    def wrap_list(self, items: list[Value]) -> Value:
        return Value(ValueKind.LIST, items)

    def wrap_object(self, document: Document) -> Value:
        return Value(ValueKind.OBJECT, document)
