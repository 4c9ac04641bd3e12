"""
Parser for jsondoc - converts tokens into a Document tree.
"""

import logging
from typing import NoReturn, Optional, TextIO, Union

from ..model.document import Document
from ..model.values import Value
from ..security.exceptions import (
    ErrorReporter,
    ErrorSuggestionEngine,
    ParseError,
    SecurityError,
)
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .parser_base import BaseParserMixin
from .renderer import render
from .tokenizer import (
    SCALAR_TOKEN_TYPES,
    Lexer,
    Position,
    Token,
    TokenType,
    decode_text,
)

logger = logging.getLogger(__name__)


class Parser(BaseParserMixin):
    """Recursive-descent parser that turns tokens into a Document."""

    def __init__(
        self,
        tokens: list[Token],
        config: Optional[ParseConfig] = None,
        error_reporter: Optional[ErrorReporter] = None,
    ):
        self.tokens = tokens
        self.pos = 0
        self.config = config or ParseConfig()

        self.validator = (
            LimitValidator(self.config.limits) if self.config.limits else None
        )
        self.error_reporter = error_reporter

    def current_token(self) -> Token:
        """Get the current token; past the end this is an EOF token."""
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        if self.tokens:
            last = self.tokens[-1].position
            return Token(TokenType.EOF, None, Position(last.line, last.column))
        return Token(TokenType.EOF, None, Position(1, 1))

    def previous_token(self) -> Optional[Token]:
        """Get the token just before the current one, if any."""
        if 0 < self.pos <= len(self.tokens):
            return self.tokens[self.pos - 1]
        return None

    def advance(self) -> Token:
        """Move to the next token and return the current token."""
        token = self.current_token()
        if self.pos < len(self.tokens):
            self.pos += 1
        return token

    def parse(self) -> Document:
        """Parse the token sequence as a single top-level object."""
        if self.validator:
            self.validator.reset()

        if self.current_token().type != TokenType.LBRACE:
            self._raise_parse_error(
                "Expected '{' at start of document, found "
                f"{self._describe(self.current_token())}",
                ["A document must be a single object enclosed in '{' and '}'"],
            )

        try:
            document = self.parse_object()
        except RecursionError as e:
            raise SecurityError(
                "Document nesting exceeds the interpreter stack",
                self.current_token().position,
            ) from e

        if self.current_token().type != TokenType.EOF:
            self._raise_parse_error(
                f"Unexpected {self._describe(self.current_token())} after end of document",
                ["Only one top-level object is allowed"],
            )
        return document

    def parse_object(self) -> Document:
        """Parse an object body: label ':' value entries separated by ','."""
        self._expect(TokenType.LBRACE, "Expected '{'")
        self.validate_and_enter_structure(self.validator)

        obj = self.init_empty_object()

        if self.current_token().type == TokenType.RBRACE:
            self.advance()
            self.validate_and_exit_structure(self.validator)
            return obj

        while True:
            label = self._parse_object_label()
            self._expect_colon()
            value = self.parse_value()
            self.append_entry(obj, label, value)

            if self.validator:
                self.validator.validate_entry_count(len(obj))

            if not self._should_continue_object_parsing():
                break

        self._expect(
            TokenType.RBRACE,
            "Expected '}' to close object",
            ErrorSuggestionEngine.suggest_for_unclosed_structure("object"),
        )
        self.validate_and_exit_structure(self.validator)
        return obj

    def parse_value(self) -> Value:
        """Parse a value in value position."""
        token = self.current_token()

        if token.type in SCALAR_TOKEN_TYPES:
            self.advance()
            return self.scalar_token_to_value(token)

        if token.type == TokenType.LBRACE:
            return self.wrap_object(self.parse_object())

        if token.type == TokenType.LBRACKET:
            return self.wrap_list(self.parse_list())

        if token.type == TokenType.EOF:
            self._raise_parse_error(
                "Unexpected end of input, expected a value",
                ["Check for a truncated document"],
            )

        self._raise_parse_error(
            f"Unexpected {self._describe(token)} in value position",
            ErrorSuggestionEngine.suggest_for_unexpected_token(str(token.value)),
        )

    def parse_list(self) -> list[Value]:
        """Parse a list body: values separated by ','."""
        self._expect(TokenType.LBRACKET, "Expected '['")
        self.validate_and_enter_structure(self.validator)

        items = self.init_empty_list()

        if self.current_token().type == TokenType.RBRACKET:
            self.advance()
            self.validate_and_exit_structure(self.validator)
            return items

        while True:
            if self.current_token().type == TokenType.RBRACKET:
                self._raise_parse_error(
                    "Trailing comma before ']'",
                    ErrorSuggestionEngine.suggest_for_unexpected_token("]"),
                )

            items.append(self.parse_value())

            if self.validator:
                self.validator.validate_element_count(len(items))

            if not self._should_continue_list_parsing():
                break

        self._expect(
            TokenType.RBRACKET,
            "Expected ']' to close list",
            ErrorSuggestionEngine.suggest_for_unclosed_structure("array"),
        )
        self.validate_and_exit_structure(self.validator)
        return items

    def _parse_object_label(self) -> str:
        """Parse an object label and return it."""
        token = self.current_token()
        if token.type == TokenType.STRING:
            self.advance()
            return self._token_value(token, str)

        previous = self.previous_token()
        if token.type == TokenType.RBRACE and previous and previous.type == TokenType.COMMA:
            self._raise_parse_error(
                "Trailing comma before '}'",
                ErrorSuggestionEngine.suggest_for_unexpected_token("}"),
            )
        if token.type == TokenType.EOF:
            self._raise_parse_error(
                "Unexpected end of input, expected an object label",
                ErrorSuggestionEngine.suggest_for_unclosed_structure("object"),
            )
        self._raise_parse_error(
            f"Expected a string label, found {self._describe(token)}",
            ["Object labels must be double-quoted strings"],
        )

    def _expect_colon(self) -> None:
        """Expect and consume a colon token."""
        self._expect(
            TokenType.COLON,
            "Expected ':' after label",
            [
                "Object labels must be followed by a colon",
                "Check for a missing colon after the label",
            ],
        )

    def _should_continue_object_parsing(self) -> bool:
        """Consume the separator after an entry; False once '}' is reached."""
        return self._should_continue(TokenType.RBRACE, "object", "'}'")

    def _should_continue_list_parsing(self) -> bool:
        """Consume the separator after an element; False once ']' is reached."""
        return self._should_continue(TokenType.RBRACKET, "array", "']'")

    def _should_continue(
        self, closing: TokenType, structure: str, closing_text: str
    ) -> bool:
        token = self.current_token()

        if token.type == TokenType.COMMA:
            self.advance()
            return True

        if token.type == closing:
            return False

        suggestions = ErrorSuggestionEngine.suggest_for_unclosed_structure(structure)
        if token.type == TokenType.EOF:
            self._raise_parse_error(
                f"Unexpected end of input, expected ',' or {closing_text}",
                suggestions,
            )
        self._raise_parse_error(
            f"Expected ',' or {closing_text}, found {self._describe(token)}",
            suggestions,
        )

    def _expect(
        self,
        token_type: TokenType,
        message: str,
        suggestions: Optional[list[str]] = None,
    ) -> Token:
        token = self.current_token()
        if token.type != token_type:
            self._raise_parse_error(
                f"{message}, found {self._describe(token)}", suggestions
            )
        return self.advance()

    @staticmethod
    def _describe(token: Token) -> str:
        if token.type == TokenType.EOF:
            return "end of input"
        if token.type == TokenType.STRING:
            return f'string "{token.value}"'
        if token.type in SCALAR_TOKEN_TYPES:
            return f"{token.type.value.lower()} token"
        return f"'{token.value}'"

    def _raise_parse_error(
        self, message: str, suggestions: Optional[list[str]] = None
    ) -> NoReturn:
        token = self.current_token()
        position = token.position if self.config.include_position else None
        if self.error_reporter and position is not None:
            raise self.error_reporter.create_parse_error(
                message, position, suggestions, token_index=self.pos
            )
        raise ParseError(message, position, suggestions=suggestions, token_index=self.pos)


def parse(
    text: Union[str, bytes, bytearray], config: Optional[ParseConfig] = None
) -> Document:
    """
    Parse document text into a Document.

    Args:
        text: The document text; bytes are decoded as UTF-8
        config: Optional ParseConfig for limits and error reporting

    Returns:
        The parsed Document

    Raises:
        LexError: If the text cannot be tokenized
        ParseError: If the tokens do not form a single object
        SecurityError: If configured limits are exceeded or nesting exhausts
            the interpreter stack
    """
    config = config or ParseConfig()
    text = decode_text(text)
    _validate_input_size(text, config)

    error_reporter = (
        ErrorReporter(text, config.max_error_context)
        if config.include_context
        else None
    )
    tokens = Lexer(text, config, error_reporter).get_all_tokens()
    document = Parser(tokens, config, error_reporter).parse()
    logger.debug("Parsed document with %d top-level entries", len(document))
    return document


def parse_tokens(tokens: list[Token], config: Optional[ParseConfig] = None) -> Document:
    """Parse an already tokenized document."""
    return Parser(tokens, config).parse()


def _validate_input_size(text: str, config: ParseConfig) -> None:
    """Validate input size if limits are configured."""
    if config.limits:
        LimitValidator(config.limits).validate_input_size(text)


def loads(
    s: Union[str, bytes, bytearray], *, config: Optional[ParseConfig] = None
) -> Document:
    """Deserialize document text (str, bytes or bytearray) to a Document."""
    return parse(s, config)


def load(fp: TextIO, *, config: Optional[ParseConfig] = None) -> Document:
    """Deserialize a document from a file-like object."""
    return loads(fp.read(), config=config)


def dumps(document: Document, *, indent: Union[int, str, None] = None) -> str:
    """Serialize a Document to text; compact unless indent is given."""
    return render(document, indent=indent)


def dump(
    document: Document, fp: TextIO, *, indent: Union[int, str, None] = None
) -> None:
    """Serialize a Document to a file-like object."""
    fp.write(dumps(document, indent=indent))
