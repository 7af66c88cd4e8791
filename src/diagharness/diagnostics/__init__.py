from .models import BaselineStatus, Diagnostic, DiagnosticCategory, Position, TextRange
from .sink import DiagnosticSink

__all__ = [
    "BaselineStatus",
    "Diagnostic",
    "DiagnosticCategory",
    "DiagnosticSink",
    "Position",
    "TextRange",
]
