from __future__ import annotations

from collections.abc import Iterable

from .models import Diagnostic, DiagnosticCategory, TextRange


class DiagnosticSink:
    """Ordered collector for diagnostics reported outside the checker, e.g. by the parser."""

    def __init__(self) -> None:
        self._diagnostics: list[Diagnostic] = []

    def add(self, diagnostic: Diagnostic) -> Diagnostic:
        self._diagnostics.append(diagnostic)
        return diagnostic

    def add_many(self, diagnostics: Iterable[Diagnostic]) -> None:
        self._diagnostics.extend(diagnostics)

    def add_error(self, message: str, text_range: TextRange, *, rule: str | None = None) -> Diagnostic:
        return self.add(
            Diagnostic(
                category=DiagnosticCategory.ERROR,
                message=message,
                range=text_range,
                rule=rule,
            )
        )

    def add_warning(
        self, message: str, text_range: TextRange, *, rule: str | None = None
    ) -> Diagnostic:
        return self.add(
            Diagnostic(
                category=DiagnosticCategory.WARNING,
                message=message,
                range=text_range,
                rule=rule,
            )
        )

    @property
    def diagnostics(self) -> tuple[Diagnostic, ...]:
        return tuple(self._diagnostics)

    def fetch_and_clear(self) -> tuple[Diagnostic, ...]:
        fetched = tuple(self._diagnostics)
        self._diagnostics.clear()
        return fetched

    def __len__(self) -> int:
        return len(self._diagnostics)
