"""
Models package for md2roff

Contains data structures and type definitions for the conversion pipeline.
"""

from .state import ProgramState, pipeline
from .dialect import Dialect
from .document import Document
from .events import (
    Event,
    BlockEvent,
    InlineEvent,
    ListKind,
    ListFrame,
    HeaderLevel,
    InlineStyle,
    ParagraphEnd,
    LineBreak,
    CodeBlockOpen,
    CodeBlockClose,
    CodeLine,
    ListOpen,
    ListItemOpen,
    ListItemEnd,
    ListClose,
    SectionHeader,
    BoxOpen,
    BoxClose,
    ManReference,
    Hyperlink,
    StyleOpen,
    StyleClose,
    InlineCode,
)

__all__ = [
    "ProgramState",
    "pipeline",
    "Dialect",
    "Document",
    "Event",
    "BlockEvent",
    "InlineEvent",
    "ListKind",
    "ListFrame",
    "HeaderLevel",
    "InlineStyle",
    "ParagraphEnd",
    "LineBreak",
    "CodeBlockOpen",
    "CodeBlockClose",
    "CodeLine",
    "ListOpen",
    "ListItemOpen",
    "ListItemEnd",
    "ListClose",
    "SectionHeader",
    "BoxOpen",
    "BoxClose",
    "ManReference",
    "Hyperlink",
    "StyleOpen",
    "StyleClose",
    "InlineCode",
]
