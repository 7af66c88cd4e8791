from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import pytest

from diagharness.diagnostics import Diagnostic
from diagharness.engine import EngineConfig, PreCheckCallback

EVALUATOR_TOKEN = "scripted-evaluator"


@dataclass(frozen=True, slots=True)
class ScriptedParseResults:
    parse_tree: object


class ScriptedEngine:
    def __init__(
        self,
        config: EngineConfig,
        scratch_dir: Path,
        *,
        scripts: dict[Path, tuple[Diagnostic, ...]],
        pending_passes: int,
    ) -> None:
        self.config = config
        self.scratch_dir = scratch_dir
        self.scratch_existed = scratch_dir.is_dir()
        self.tracked: tuple[Path, ...] = ()
        self.analyze_calls = 0
        self.diagnostic_configs: list[EngineConfig] = []
        self.pre_check: PreCheckCallback | None = None
        self.disposed = False
        self._scripts = scripts
        self._pending = pending_passes

    def set_tracked_files(self, file_ids: Sequence[Path]) -> None:
        self.tracked = tuple(file_ids)

    def analyze(self) -> bool:
        self.analyze_calls += 1
        if self.analyze_calls == 1 and self.pre_check is not None:
            for file_id in self.tracked:
                parse_results = self.get_parse_results(file_id)
                if parse_results is not None:
                    self.pre_check(parse_results.parse_tree, EVALUATOR_TOKEN)
        if self._pending > 0:
            self._pending -= 1
            return True
        return False

    def get_diagnostics(self, file_id: Path, config: EngineConfig) -> Sequence[Diagnostic] | None:
        self.diagnostic_configs.append(config)
        if file_id not in self.tracked or file_id not in self._scripts:
            return None
        return list(self._scripts[file_id])

    def get_parse_results(self, file_id: Path) -> ScriptedParseResults | None:
        if file_id not in self.tracked or file_id not in self._scripts:
            return None
        return ScriptedParseResults(parse_tree=("module", file_id.name))

    def set_pre_check_callback(self, callback: PreCheckCallback | None) -> None:
        self.pre_check = callback

    def dispose(self) -> None:
        self.disposed = True


class ScriptedEngineFactory:
    def __init__(self) -> None:
        self.scripts: dict[Path, tuple[Diagnostic, ...]] = {}
        self.pending_passes = 1
        self.engines: list[ScriptedEngine] = []

    def script(self, file_id: Path, diagnostics: Sequence[Diagnostic] = ()) -> None:
        self.scripts[file_id] = tuple(diagnostics)

    def __call__(self, config: EngineConfig, scratch_dir: Path) -> ScriptedEngine:
        engine = ScriptedEngine(
            config,
            scratch_dir,
            scripts=self.scripts,
            pending_passes=self.pending_passes,
        )
        self.engines.append(engine)
        return engine

    @property
    def last(self) -> ScriptedEngine:
        return self.engines[-1]


@pytest.fixture
def engine_factory() -> ScriptedEngineFactory:
    return ScriptedEngineFactory()
