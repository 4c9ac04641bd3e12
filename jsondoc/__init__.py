"""
jsondoc - parse JSON-like text into an editable document tree and render it back.

jsondoc turns the text of one object into a ``Document``: an ordered list of
label/value entries that can be queried, edited and serialized again.

Key Features:
- Tokenizer and recursive-descent parser with positioned error messages
- Ordered entries with duplicate labels kept and first-match lookups
- Label index kept in sync with every add, remove and rename
- Compact or indented rendering that parses back to an equal document
- Opt-in resource limits for input size, string length and nesting depth
- Separate errors for unreadable files and malformed content

Quick Start:
    import jsondoc
    doc = jsondoc.loads('{"a": 1, "b": [1, 2, 3]}')
    doc.get("a")                                  # Value(INT, 1)

    doc.add(jsondoc.Entry("c", jsondoc.Value.string("x")))
    doc.remove("b")
    jsondoc.dumps(doc)                            # '{"a":1,"c":"x"}'
"""

from .core.engine import dump, dumps, load, loads, parse, parse_tokens
from .core.renderer import render
from .core.tokenizer import Token, TokenType, tokenize
from .model.document import Document, Entry
from .model.values import Value, ValueKind
from .security.exceptions import (
    DocumentIOError,
    FormatError,
    JsonDocError,
    LexError,
    ParseError,
    SecurityError,
)
from .utils.config import ParseConfig, ParseLimits
from .utils.files import read_document, write_document

__version__ = "0.1.0"
__author__ = "jsondoc contributors"

__all__ = [
    # Text entry points
    "loads", "load", "dumps", "dump", "parse", "parse_tokens", "render", "tokenize",
    # File helpers
    "read_document", "write_document",
    # Document model
    "Document", "Entry", "Value", "ValueKind", "Token", "TokenType",
    # Configuration classes
    "ParseConfig", "ParseLimits",
    # Exception classes
    "JsonDocError", "FormatError", "LexError", "ParseError", "SecurityError",
    "DocumentIOError",
]
