"""
Common constants and lookup tables used by the tokenizer and renderer.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .tokenizer import TokenType

# Characters skipped between tokens
WHITESPACE = frozenset(" \t\n\r")

# Characters that make up a number literal (no sign or exponent)
NUMBER_CHARS = frozenset("0123456789.")

# Keyword literals and the Python value each decodes to
LITERALS = {
    "true": True,
    "false": False,
    "null": None,
}

# Simple escape sequences decoded inside strings
JSON_ESCAPE_MAP = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
}

# Inverse of JSON_ESCAPE_MAP for the characters the renderer escapes.
# Order matters: backslashes are escaped before anything that adds one.
RENDER_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\t", "\\t"),
    ("\r", "\\r"),
    ("\b", "\\b"),
    ("\f", "\\f"),
)


def get_structural_token_map() -> dict[str, "TokenType"]:
    """Get the mapping of structural characters to TokenType enums."""
    # Import here to avoid circular imports
    from .tokenizer import TokenType  # pylint: disable=import-outside-toplevel

    return {
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
        "[": TokenType.LBRACKET,
        "]": TokenType.RBRACKET,
        ":": TokenType.COLON,
        ",": TokenType.COMMA,
    }
