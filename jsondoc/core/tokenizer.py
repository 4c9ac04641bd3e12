"""
Lexer for jsondoc - tokenizes input text for parsing.
"""

import logging
import math
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, NoReturn, Optional, Union

from ..security.exceptions import ErrorReporter, ErrorSuggestionEngine, LexError
from ..model.values import MAX_INT
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .constants import (
    JSON_ESCAPE_MAP,
    LITERALS,
    NUMBER_CHARS,
    WHITESPACE,
    get_structural_token_map,
)

logger = logging.getLogger(__name__)

TokenValue = Union[str, int, float, bool, None]

_MAX_INT_DIGITS = len(str(MAX_INT))


class TokenType(Enum):
    """Token types produced by the lexer."""

    LBRACE = "LBRACE"
    RBRACE = "RBRACE"
    LBRACKET = "LBRACKET"
    RBRACKET = "RBRACKET"
    COLON = "COLON"
    COMMA = "COMMA"

    STRING = "STRING"
    INT = "INT"
    FLOAT = "FLOAT"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"

    EOF = "EOF"


SCALAR_TOKEN_TYPES = frozenset(
    {TokenType.STRING, TokenType.INT, TokenType.FLOAT, TokenType.BOOLEAN, TokenType.NULL}
)


@dataclass
class Position:
    """Position in source text (line and column)."""

    line: int
    column: int


class Token(NamedTuple):
    """Token with type, decoded value and position information."""

    type: TokenType
    value: TokenValue
    position: Position


class Lexer:
    """Lexical analyzer for document text."""

    def __init__(
        self,
        text: str,
        config: Optional[ParseConfig] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ) -> None:
        self.text = text
        self.pos = 0
        self.line = 1
        self.column = 1
        self.config = config or ParseConfig()
        self.validator = (
            LimitValidator(self.config.limits) if self.config.limits else None
        )
        self.error_reporter = error_reporter

    def current_position(self) -> Position:
        """Get current position in the text."""
        return Position(self.line, self.column)

    def at_end(self) -> bool:
        """Whether the cursor has consumed all input."""
        return self.pos >= len(self.text)

    def peek(self, offset: int = 0) -> str:
        """Peek at character at given offset without consuming it."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return ""
        return self.text[pos]

    def advance(self) -> str:
        """Advance position and return the current character."""
        if self.pos >= len(self.text):
            return ""

        char = self.text[self.pos]
        if "\ud800" <= char <= "\udfff":
            self._raise_lex_error(
                "Invalid character encoding (lone surrogate "
                f"U+{ord(char):04X})",
                self.current_position(),
            )
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs, newlines and carriage returns."""
        while self.pos < len(self.text) and self.text[self.pos] in WHITESPACE:
            self.advance()

    def read_string(self) -> str:
        """Read a double-quoted string, decoding simple escapes."""
        start = self.current_position()
        chars = []
        self.advance()

        while not self.at_end():
            char = self.advance()

            if char == '"':
                result = "".join(chars)
                if self.validator:
                    self.validator.validate_string_length(result, start)
                return result
            if char == "\\":
                if self.at_end():
                    break
                escaped = self.advance()
                if escaped in JSON_ESCAPE_MAP:
                    chars.append(JSON_ESCAPE_MAP[escaped])
                else:
                    # Unknown escapes (including \uXXXX) are kept verbatim
                    chars.append(char + escaped)
            else:
                chars.append(char)

        self._raise_lex_error(
            "Unterminated string",
            start,
            ErrorSuggestionEngine.suggest_for_unexpected_token('"'),
        )

    def read_number(self) -> Union[int, float]:
        """Read the maximal run of digits and dots as an int or float."""
        start = self.current_position()
        chars = []

        while not self.at_end() and self.peek() in NUMBER_CHARS:
            chars.append(self.advance())

        number = "".join(chars)
        if self.at_end():
            self._raise_lex_error("Unterminated number", start)
        if self.validator:
            self.validator.validate_number_length(number, start)

        if "." not in number:
            digits = number.lstrip("0") or "0"
            if len(digits) > _MAX_INT_DIGITS or int(digits) > MAX_INT:
                self._raise_lex_error(f"Number out of range (max {MAX_INT})", start)
            return int(digits)

        try:
            value = float(number)
        except ValueError:
            self._raise_lex_error(f"Invalid number '{number}'", start)
        if math.isinf(value):
            self._raise_lex_error("Number out of range", start)
        return value

    def read_literal(self) -> Union[bool, None]:
        """Read one of the exact literals true, false or null."""
        start = self.current_position()
        for literal, value in LITERALS.items():
            if self.text.startswith(literal, self.pos):
                for _ in literal:
                    self.advance()
                return value

        word = self._read_word()
        self._raise_lex_error(
            f"Unrecognized literal '{word}'",
            start,
            ErrorSuggestionEngine.suggest_for_invalid_value(word),
        )

    def _read_word(self) -> str:
        end = self.pos
        while end < len(self.text) and self.text[end].isalnum():
            end += 1
        return self.text[self.pos:end] or self.peek()

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the input text into a sequence of tokens."""
        while self.pos < len(self.text):
            self.skip_whitespace()

            if self.pos >= len(self.text):
                break

            char = self.peek()
            pos = self.current_position()

            token = self._try_string_token(char, pos)
            if token:
                yield token
                continue

            token = self._try_structural_token(char, pos)
            if token:
                yield token
                continue

            token = self._try_number_token(char, pos)
            if token:
                yield token
                continue

            token = self._try_literal_token(char, pos)
            if token:
                yield token
                continue

            if self.config.skip_unknown_characters:
                self.advance()
                continue

            self._raise_lex_error(
                f"Unexpected character {char!r}",
                pos,
                ErrorSuggestionEngine.suggest_for_invalid_value(char),
            )

        yield Token(TokenType.EOF, None, self.current_position())

    def _try_string_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create a string token."""
        if char == '"':
            return Token(TokenType.STRING, self.read_string(), pos)
        return None

    def _try_structural_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create structural tokens (braces, brackets, etc.)."""
        token_map = get_structural_token_map()

        if char in token_map:
            self.advance()
            return Token(token_map[char], char, pos)
        return None

    def _try_number_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create an int or float token."""
        if char in NUMBER_CHARS:
            number = self.read_number()
            if isinstance(number, float):
                return Token(TokenType.FLOAT, number, pos)
            return Token(TokenType.INT, number, pos)
        return None

    def _try_literal_token(self, char: str, pos: Position) -> Optional[Token]:
        """Try to create a boolean or null token."""
        if char in "tfn":
            value = self.read_literal()
            if value is None:
                return Token(TokenType.NULL, None, pos)
            return Token(TokenType.BOOLEAN, value, pos)
        return None

    def get_all_tokens(self) -> list[Token]:
        """Get all tokens as a list."""
        tokens = list(self.tokenize())
        logger.debug(
            "Tokenized %d characters into %d tokens", len(self.text), len(tokens)
        )
        return tokens

    def _raise_lex_error(
        self, message: str, position: Position, suggestions: Optional[list[str]] = None
    ) -> NoReturn:
        if not self.config.include_position:
            raise LexError(message, suggestions=suggestions)
        if self.error_reporter:
            raise self.error_reporter.create_lex_error(message, position, suggestions)
        raise LexError(message, position, suggestions=suggestions)


def tokenize(
    text: Union[str, bytes, bytearray], config: Optional[ParseConfig] = None
) -> list[Token]:
    """
    Tokenize document text.

    Bytes are decoded as UTF-8; undecodable input raises LexError. The returned
    list always ends with an EOF token.
    """
    return Lexer(decode_text(text), config).get_all_tokens()


def decode_text(text: Union[str, bytes, bytearray]) -> str:
    """Decode raw bytes as UTF-8, reporting bad encodings as LexError."""
    if isinstance(text, (bytes, bytearray)):
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError as e:
            raise LexError(
                f"Invalid character encoding at byte {e.start}: {e.reason}"
            ) from e
    return text
