"""
Source loading

Reads a whole input (a file or standard input) into a Document before
conversion starts.
"""

import sys
from pathlib import Path
from typing import Optional, TextIO

from ..models.document import Document
from .log import LOG


STDIN_NAME = "stdin"


class LoadError(Exception):
    """
    Raised when an input cannot be read

    The message names the failing operation followed by the OS error
    description in brackets, e.g. "Unable to open 'x.md' [No such file or
    directory]".
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation} [{reason}]")
        self.operation = operation
        self.reason = reason


def source_load(path: str, stdin: Optional[TextIO] = None) -> Document:
    """
    Load one input into memory

    Args:
        path: File path, or "-" for standard input
        stdin: Stream read for "-" (default sys.stdin)

    Returns:
        Document named after the file stem, or "stdin"

    Raises:
        LoadError: If the input cannot be opened, read or decoded
    """
    if path == "-":
        stream = stdin if stdin is not None else sys.stdin
        try:
            source = stream.read()
        except OSError as e:
            raise LoadError("Unable to read standard input", e.strerror or str(e)) from e
        LOG(f"Read {len(source)} characters from {STDIN_NAME}", level=2)
        return Document(name=STDIN_NAME, source=source)

    input_file = Path(path)
    try:
        source = input_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise LoadError(f"Unable to decode '{path}'", e.reason) from e
    except OSError as e:
        raise LoadError(f"Unable to open '{path}'", e.strerror or str(e)) from e

    LOG(f"Read {len(source)} characters from {input_file.name}", level=2)
    return Document(name=input_file.stem, source=source)
