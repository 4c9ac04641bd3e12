"""
jsondoc document model: values, entries and documents.
"""

from .document import Document, Entry
from .values import Value, ValueKind

__all__ = ['Document', 'Entry', 'Value', 'ValueKind']
