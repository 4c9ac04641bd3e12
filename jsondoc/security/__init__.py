"""
jsondoc error taxonomy and resource limits.
"""

from .exceptions import (
    DocumentIOError,
    ErrorReporter,
    FormatError,
    JsonDocError,
    LexError,
    ParseError,
    SecurityError,
)
from .limits import LimitValidator

__all__ = [
    'JsonDocError', 'FormatError', 'LexError', 'ParseError',
    'SecurityError', 'DocumentIOError', 'ErrorReporter', 'LimitValidator'
]
