"""
Output dialect definitions

A dialect is one of the roff macro packages md2roff can target. The
dialect is picked once per run and threaded explicitly through the
converter, transducer and emitter.
"""

from enum import Enum


class Dialect(Enum):
    """
    Supported roff macro packages

    The value is the name used on the command line and in settings.
    """
    MAN = "man"      # Linux man pages
    MDOC = "mdoc"    # BSD man pages
    MM = "mm"        # memorandum macros
    MOM = "mom"      # typesetting macros

    @property
    def tmac(self) -> str:
        """Macro file activated by the preamble"""
        # groff ships the mm macros as m.tmac
        if self is Dialect.MM:
            return "m.tmac"
        return f"{self.value}.tmac"
