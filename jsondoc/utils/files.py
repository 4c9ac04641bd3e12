"""
File helpers: read a document from disk and write one back.

Reading distinguishes file system failures (``DocumentIOError``) from bad
content (``LexError`` / ``ParseError``). Writing only reports success.
"""

import logging
from os import PathLike, fspath
from typing import Optional, Union

from ..core.engine import parse
from ..core.renderer import render
from ..model.document import Document
from ..security.exceptions import DocumentIOError
from .config import ParseConfig

logger = logging.getLogger(__name__)

PathType = Union[str, "PathLike[str]"]


def read_document(path: PathType, config: Optional[ParseConfig] = None) -> Document:
    """Read a whole file as UTF-8 and parse it."""
    try:
        with open(path, "rb") as fp:
            data = fp.read()
    except OSError as e:
        raise DocumentIOError(
            f"Cannot read {fspath(path)}: {e.strerror or e}", fspath(path), e
        ) from e

    logger.debug("Read %d bytes from %s", len(data), fspath(path))
    return parse(data, config)


def write_document(
    document: Document, path: PathType, indent: Union[int, str, None] = None
) -> bool:
    """Render a document into a file. Returns False if the write failed."""
    text = render(document, indent=indent)
    try:
        with open(path, "w", encoding="utf-8") as fp:
            fp.write(text)
    except OSError as e:
        logger.warning("Failed to write document to %s: %s", fspath(path), e)
        return False

    logger.debug("Wrote %d characters to %s", len(text), fspath(path))
    return True
