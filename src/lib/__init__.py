"""
md2roff - Markdown to roff converter

Converts a markdown subset to man, mdoc, mm or mom markup.
"""

__version__ = "1.1.0"

from .converter import Converter, transform
from .transducer import Transducer, FatalParseError
from .emitter import Emitter
from .liststack import ListStack, ListDepthError
from .loader import source_load, LoadError
from .squeeze import line_squeeze
from .log import LOG, state_connectToLogger

__all__ = [
    "Converter",
    "transform",
    "Transducer",
    "FatalParseError",
    "Emitter",
    "ListStack",
    "ListDepthError",
    "source_load",
    "LoadError",
    "line_squeeze",
    "LOG",
    "state_connectToLogger",
    "__version__",
]
