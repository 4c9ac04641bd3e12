"""
Exception hierarchy and error reporting for jsondoc.

Format problems (``LexError``, ``ParseError``) share the ``FormatError`` base so
callers can tell them apart from file system failures (``DocumentIOError``) and
resource limit violations (``SecurityError``).
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.tokenizer import Position


@dataclass
class ErrorContext:
    """Source text surrounding an error location."""

    text: str
    position: "Position"
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class JsonDocError(Exception):
    """Base class for every error raised by jsondoc."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message

        if self.position:
            msg += f" at line {self.position.line}, column {self.position.column}"

        if self.context:
            msg += f"\n\nContext:\n{self.context.line_text}"
            msg += f"\n{self.context.column_indicator}"

        if self.suggestions:
            msg += "\n\nSuggestions:"
            for suggestion in self.suggestions:
                msg += f"\n- {suggestion}"

        return msg


class FormatError(JsonDocError):
    """The input text does not follow the document grammar."""


class LexError(FormatError):
    """Raised when the tokenizer cannot turn the input into tokens."""


class ParseError(FormatError):
    """Raised when the token sequence does not form a valid document."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        token_index: Optional[int] = None,
    ):
        self.token_index = token_index
        super().__init__(message, position, context, suggestions)


class SecurityError(JsonDocError):
    """Raised when input exceeds the configured resource limits."""


class DocumentIOError(JsonDocError):
    """Raised when a document file cannot be read."""

    def __init__(self, message: str, path: str, cause: Optional[OSError] = None):
        self.path = path
        self.cause = cause
        super().__init__(message)


class ErrorReporter:
    """Builds errors that carry a snippet of the original text."""

    def __init__(self, text: str, max_context: int = 50):
        self.text = text
        self.max_context = max_context
        self.lines = text.splitlines() or [""]

    def create_lex_error(
        self,
        message: str,
        position: "Position",
        suggestions: Optional[list[str]] = None,
    ) -> LexError:
        """Create a LexError with context."""
        context = self._build_context(position)
        return LexError(message, position, context, suggestions)

    def create_parse_error(
        self,
        message: str,
        position: "Position",
        suggestions: Optional[list[str]] = None,
        token_index: Optional[int] = None,
    ) -> ParseError:
        """Create a ParseError with context."""
        context = self._build_context(position)
        return ParseError(message, position, context, suggestions, token_index)

    def create_security_error(
        self, message: str, position: Optional["Position"] = None
    ) -> SecurityError:
        """Create a SecurityError, with context when a position is known."""
        context = self._build_context(position) if position else None
        return SecurityError(message, position, context)

    def _build_context(self, position: "Position") -> ErrorContext:
        line_index = min(max(position.line - 1, 0), len(self.lines) - 1)
        line_text = self.lines[line_index]
        column = min(max(position.column - 1, 0), len(line_text))

        start = max(0, column - self.max_context // 2)
        end = min(len(line_text), column + self.max_context // 2)
        snippet = line_text[start:end]

        return ErrorContext(
            text=self.text,
            position=position,
            context_before=line_text[start:column],
            context_after=line_text[column:end],
            error_char=line_text[column] if column < len(line_text) else "",
            line_text=snippet,
            column_indicator=" " * (column - start) + "^",
        )


class ErrorSuggestionEngine:
    """Suggests fixes for common mistakes."""

    @staticmethod
    def suggest_for_unexpected_token(token_value: str) -> list[str]:
        suggestions = []
        if token_value == '"':
            suggestions.append("Check for an unclosed quote in a string")
        elif token_value in ("}", "]"):
            suggestions.append(f"Remove the comma before '{token_value}'")
            suggestions.append("Check for a missing value")
        elif token_value == ",":
            suggestions.append("Remove the extra comma")
        elif token_value == ":":
            suggestions.append("Object labels must be quoted strings")
        if not suggestions:
            suggestions.append("Check the syntax near this location")
        return suggestions

    @staticmethod
    def suggest_for_unclosed_structure(structure_type: str) -> list[str]:
        if structure_type == "object":
            return [
                "Add a closing brace '}' to end the object",
                "Separate entries with ',' and labels from values with ':'",
            ]
        return [
            "Add a closing bracket ']' to end the list",
            "Separate list elements with ','",
        ]

    @staticmethod
    def suggest_for_invalid_value(value: str) -> list[str]:
        lowered = value.lower()
        for literal in ("true", "false", "null"):
            if lowered.startswith(literal[0]) and lowered != value:
                return [f"Literals are lowercase: use '{literal}'"]
            if lowered.startswith(literal[:2]):
                return [f"Did you mean '{literal}'?"]
        if value in ("'", "`"):
            return ["Strings must use double quotes"]
        if value == "-":
            return ["Negative numbers are not supported"]
        return []
