"""
md2roff - Markdown to roff converter

Write documentation once in markdown and typeset it with the man, mdoc,
mm or mom macro packages.
"""

__version__ = "1.1.0"
__author__ = "Nicholas Christopoulos"
__email__ = "nereus@freemail.gr"

from .lib import Converter, transform, FatalParseError, LoadError, LOG, state_connectToLogger
from .models import Dialect, Document

__all__ = [
    "Converter",
    "transform",
    "FatalParseError",
    "LoadError",
    "Dialect",
    "Document",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
