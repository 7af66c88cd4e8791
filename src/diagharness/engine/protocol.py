from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from diagharness.diagnostics import Diagnostic, DiagnosticSink

from .config import EngineConfig, ParseOptions

type PreCheckCallback = Callable[[object, object], None]


@runtime_checkable
class ParseResults(Protocol):
    @property
    def parse_tree(self) -> object: ...


@runtime_checkable
class AnalysisEngine(Protocol):
    def set_tracked_files(self, file_ids: Sequence[Path]) -> None: ...

    def analyze(self) -> bool: ...

    def get_diagnostics(
        self, file_id: Path, config: EngineConfig
    ) -> Sequence[Diagnostic] | None: ...

    def get_parse_results(self, file_id: Path) -> ParseResults | None: ...

    def set_pre_check_callback(self, callback: PreCheckCallback | None) -> None: ...

    def dispose(self) -> None: ...


@runtime_checkable
class EngineFactory(Protocol):
    def __call__(self, config: EngineConfig, scratch_dir: Path) -> AnalysisEngine: ...


@runtime_checkable
class ParseTreeWalker(Protocol):
    def walk(self, node: object) -> None: ...


@runtime_checkable
class SourceParser(Protocol):
    def parse_source_file(
        self, text: str, options: ParseOptions, sink: DiagnosticSink
    ) -> object: ...
