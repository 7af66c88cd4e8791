from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from types import MappingProxyType

from diagharness.diagnostics import Diagnostic, DiagnosticCategory

from .results import RESULT_BUCKETS, FileAnalysisResult, ResultBucket


def _build_bucket_table(
    entries: tuple[tuple[DiagnosticCategory, ResultBucket], ...],
) -> Mapping[DiagnosticCategory, ResultBucket]:
    table: dict[DiagnosticCategory, ResultBucket] = {}
    for category, bucket in entries:
        if category in table:
            raise ValueError(f"duplicate category in bucket table: {category}")
        table[category] = bucket
    missing = set(DiagnosticCategory) - set(table)
    if missing:
        raise ValueError(f"categories without a bucket: {sorted(missing)}")
    if sorted(table.values()) != sorted(RESULT_BUCKETS):
        raise ValueError("every result bucket must receive exactly one category")
    return MappingProxyType(table)


CATEGORY_BUCKETS: Mapping[DiagnosticCategory, ResultBucket] = _build_bucket_table(
    (
        (DiagnosticCategory.ERROR, "errors"),
        (DiagnosticCategory.WARNING, "warnings"),
        (DiagnosticCategory.INFORMATION, "infos"),
        (DiagnosticCategory.UNUSED_CODE, "unused_codes"),
        (DiagnosticCategory.UNREACHABLE_CODE, "unreachable_codes"),
        (DiagnosticCategory.DEPRECATED, "deprecateds"),
    )
)


def bucket_for(category: DiagnosticCategory) -> ResultBucket:
    return CATEGORY_BUCKETS[category]


def classify_diagnostics(
    file_id: Path,
    diagnostics: Iterable[Diagnostic],
    parse_results: object | None = None,
) -> FileAnalysisResult:
    buckets: dict[ResultBucket, list[Diagnostic]] = {name: [] for name in RESULT_BUCKETS}
    for diagnostic in diagnostics:
        buckets[bucket_for(diagnostic.category)].append(diagnostic)
    return FileAnalysisResult(
        file_id=file_id,
        parse_results=parse_results,
        errors=tuple(buckets["errors"]),
        warnings=tuple(buckets["warnings"]),
        infos=tuple(buckets["infos"]),
        unused_codes=tuple(buckets["unused_codes"]),
        unreachable_codes=tuple(buckets["unreachable_codes"]),
        deprecateds=tuple(buckets["deprecateds"]),
    )
