from __future__ import annotations

import logging
import tempfile
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from pathlib import Path

from diagharness.engine import (
    AnalysisEngine,
    EngineConfig,
    EngineFactory,
    ParseTreeWalker,
    PreCheckCallback,
)

from .classify import classify_diagnostics
from .compare import ResultsDiff, validate_results
from .config import DEFAULT_MAX_ANALYSIS_PASSES, HarnessConfig
from .errors import AnalysisNotConvergedError, SourceFileNotFoundError
from .expectations import ExpectedResults
from .results import FileAnalysisResult
from .sample_files import resolve_sample_file_path

logger = logging.getLogger(__name__)

_SCRATCH_PREFIX = "diagharness-"


def run_to_fixpoint(engine: AnalysisEngine, *, max_passes: int) -> int:
    """Advance ``engine`` until it reports no pending work.

    Returns the number of passes that still reported pending work. Raises
    :class:`AnalysisNotConvergedError` once that number reaches ``max_passes``.
    """
    if max_passes < 1:
        raise ValueError("max_passes must be >= 1")
    passes = 0
    while engine.analyze():
        passes += 1
        if passes >= max_passes:
            raise AnalysisNotConvergedError(max_passes)
    logger.debug("analysis converged after %d pending pass(es)", passes)
    return passes


def get_analysis_results(
    engine: AnalysisEngine,
    file_ids: Sequence[Path],
    config: EngineConfig | None = None,
    *,
    max_passes: int | None = None,
) -> tuple[FileAnalysisResult, ...]:
    engine_config = (config or EngineConfig()).for_tests()
    run_to_fixpoint(
        engine,
        max_passes=DEFAULT_MAX_ANALYSIS_PASSES if max_passes is None else max_passes,
    )

    results: list[FileAnalysisResult] = []
    for file_id in file_ids:
        diagnostics = engine.get_diagnostics(file_id, engine_config)
        if diagnostics is None:
            raise SourceFileNotFoundError(file_id, FileAnalysisResult.empty(file_id))
        results.append(
            classify_diagnostics(
                file_id,
                diagnostics,
                parse_results=engine.get_parse_results(file_id),
            )
        )
    return tuple(results)


@contextmanager
def engine_session(
    engine_factory: EngineFactory,
    config: EngineConfig | None = None,
) -> Iterator[AnalysisEngine]:
    engine_config = (config or EngineConfig()).for_tests()
    with tempfile.TemporaryDirectory(prefix=_SCRATCH_PREFIX) as scratch:
        engine = engine_factory(engine_config, Path(scratch))
        try:
            yield engine
        finally:
            engine.dispose()


def type_analyze_sample_files(
    file_names: Sequence[str | Path],
    *,
    engine_factory: EngineFactory,
    config: HarnessConfig | None = None,
    pre_check: PreCheckCallback | None = None,
) -> tuple[FileAnalysisResult, ...]:
    harness_config = config or HarnessConfig()
    file_ids = [
        resolve_sample_file_path(name, samples_root=harness_config.samples_root)
        for name in file_names
    ]
    with engine_session(engine_factory, harness_config.engine) as engine:
        engine.set_tracked_files(file_ids)
        if pre_check is not None:
            engine.set_pre_check_callback(pre_check)
        return get_analysis_results(
            engine,
            file_ids,
            harness_config.engine,
            max_passes=harness_config.max_analysis_passes,
        )


def validate_sample_file(
    file_name: str | Path,
    expected: ExpectedResults,
    *,
    engine_factory: EngineFactory,
    config: HarnessConfig | None = None,
    pre_check: PreCheckCallback | None = None,
) -> ResultsDiff:
    """Analyze one sample and validate it in the configured ``match_mode``."""
    harness_config = config or HarnessConfig()
    results = type_analyze_sample_files(
        [file_name],
        engine_factory=engine_factory,
        config=harness_config,
        pre_check=pre_check,
    )
    return validate_results(results, expected, mode=harness_config.match_mode)


def walk_sample_file[W: ParseTreeWalker](
    file_name: str | Path,
    walker: W,
    *,
    engine_factory: EngineFactory,
    config: HarnessConfig | None = None,
    subdirectory: str | None = None,
) -> W:
    harness_config = config or HarnessConfig()
    relative = Path(subdirectory) / file_name if subdirectory else Path(file_name)
    file_id = resolve_sample_file_path(relative, samples_root=harness_config.samples_root)
    with engine_session(engine_factory, harness_config.engine) as engine:
        engine.set_tracked_files([file_id])
        parse_results = engine.get_parse_results(file_id)
        if parse_results is None:
            raise SourceFileNotFoundError(file_id, FileAnalysisResult.empty(file_id))
        walker.walk(parse_results.parse_tree)
    return walker
