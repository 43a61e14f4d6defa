"""
Document model

A Document is the unit of conversion: the complete source text of one
input plus the name shown in the generated page header.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Document:
    """
    One markdown input, fully loaded into memory

    Attributes:
        name: Display name used by the preamble (file stem or "stdin")
        source: Complete document text
    """
    name: str
    source: str

    @property
    def text(self) -> str:
        """Source with CRLF line endings normalized to LF"""
        return self.source.replace("\r\n", "\n")
