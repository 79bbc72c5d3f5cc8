"""
Character sources for the Kaleidoscope lexer.

The lexer pulls one character at a time and never seeks, so anything that can
hand out characters in order works: an in-memory string, a file, or an
interactive terminal.

Author: xwest
"""

from abc import ABC, abstractmethod
from typing import Optional, TextIO


class CharacterSource(ABC):
    """Pull-based provider of characters."""

    #: Name used in source locations
    name: str = "<unknown>"

    @abstractmethod
    def read(self) -> str:
        """Return the next character, or '' once the input is exhausted."""
        pass


class StringSource(CharacterSource):
    """Characters from an in-memory buffer."""

    def __init__(self, text: str, name: str = "<string>"):
        self.text = text
        self.name = name
        self.pos = 0

    def read(self) -> str:
        if self.pos >= len(self.text):
            return ""
        char = self.text[self.pos]
        self.pos += 1
        return char


class StreamSource(CharacterSource):
    """
    Characters from a text stream such as an open file or ``sys.stdin``.

    Reads a single character per call so that interactive input is only
    consumed as far as the parser needs it.
    """

    def __init__(self, stream: TextIO, name: Optional[str] = None):
        self.stream = stream
        self.name = name or getattr(stream, "name", "<stream>")
        self._exhausted = False

    def read(self) -> str:
        if self._exhausted:
            return ""
        char = self.stream.read(1)
        if not char:
            # Don't block on a terminal again after EOF was seen
            self._exhausted = True
        return char
