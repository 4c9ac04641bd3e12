"""
Resource limits applied while tokenizing and parsing.

Every check raises ``SecurityError`` so callers can tell a hostile or
oversized document apart from a merely malformed one.
"""

from typing import TYPE_CHECKING, Optional, Union

from ..utils.config import ParseLimits
from .exceptions import SecurityError

if TYPE_CHECKING:
    from ..core.tokenizer import Position


class LimitValidator:
    """Tracks nesting depth and checks sizes against a ParseLimits."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits
        self.depth = 0
        self.peak_depth = 0

    def validate_input_size(self, text: Union[str, bytes]) -> None:
        self._check("Input size", len(text), self.limits.max_input_size)

    def validate_string_length(
        self, string: str, position: Optional["Position"] = None
    ) -> None:
        """Check a decoded string token; ``position`` is where it started."""
        self._check(
            "String length", len(string), self.limits.max_string_length, position
        )

    def validate_number_length(
        self, literal: str, position: Optional["Position"] = None
    ) -> None:
        """Check the raw digit-and-dot run before it is converted."""
        self._check(
            "Number length", len(literal), self.limits.max_number_length, position
        )

    def enter_structure(self) -> None:
        self.depth += 1
        self.peak_depth = max(self.peak_depth, self.depth)
        self._check("Nesting depth", self.depth, self.limits.max_nesting_depth)

    def exit_structure(self) -> None:
        if self.depth > 0:
            self.depth -= 1

    def validate_entry_count(self, count: int) -> None:
        self._check("Object entry count", count, self.limits.max_object_keys)

    def validate_element_count(self, count: int) -> None:
        self._check("List element count", count, self.limits.max_list_items)

    def reset(self) -> None:
        self.depth = 0
        self.peak_depth = 0

    @staticmethod
    def _check(
        subject: str,
        actual: int,
        limit: int,
        position: Optional["Position"] = None,
    ) -> None:
        if actual > limit:
            raise SecurityError(f"{subject} {actual} exceeds limit {limit}", position)
