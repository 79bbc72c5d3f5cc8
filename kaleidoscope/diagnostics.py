"""
Diagnostics for the Kaleidoscope front end.

A Diagnostic is a plain record of something worth telling the user about
(currently only syntax errors). Diagnostics are handed to a DiagnosticSink,
which either writes them out, one line each, or keeps them for later
inspection.

Author: xwest
"""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, TextIO

from .lexer.tokens import SourceLocation


@dataclass
class Diagnostic:
    """A single error/warning report."""
    message: str
    location: Optional[SourceLocation]
    severity: str = "error"  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None

    def __str__(self) -> str:
        result = f"{self.severity.capitalize()}: {self.message}"
        if self.location is not None:
            result += f" ({self.location})"
        return result

    def format_long(self) -> str:
        """Multi-line rendering with code and help text."""
        prefix = self.severity.upper()
        if self.code:
            prefix += f"[{self.code}]"
        result = f"{prefix}: {self.message}\n"
        if self.location is not None:
            result += f"  --> {self.location}\n"
        if self.help_text:
            result += f"  help: {self.help_text}\n"
        return result


class DiagnosticSink(ABC):
    """Write-only channel for diagnostics."""

    @abstractmethod
    def emit(self, diagnostic: Diagnostic):
        pass


class StreamDiagnosticSink(DiagnosticSink):
    """Writes each diagnostic as one line to a text stream (stderr by default)."""

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def emit(self, diagnostic: Diagnostic):
        # Resolve stderr late so redirected/captured stderr is honoured
        stream = self.stream if self.stream is not None else sys.stderr
        stream.write(f"{diagnostic}\n")
        stream.flush()


class ListDiagnosticSink(DiagnosticSink):
    """Keeps diagnostics in memory."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def emit(self, diagnostic: Diagnostic):
        self.diagnostics.append(diagnostic)

    def messages(self) -> List[str]:
        return [d.message for d in self.diagnostics]

    def __len__(self) -> int:
        return len(self.diagnostics)
