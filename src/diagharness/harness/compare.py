from __future__ import annotations

import warnings
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from diagharness.diagnostics import BaselineStatus, Diagnostic

from .config import MatchMode
from .errors import ResultContractError, ResultCountMismatchError, ResultMismatchError
from .expectations import ExpectedResult, ExpectedResults
from .reporting import format_results_diff
from .results import RESULT_BUCKETS, FileAnalysisResult, ResultBucket


@dataclass(frozen=True, slots=True)
class ProjectedDiagnostic:
    message: str
    line: int
    rule: str | None
    baseline_status: BaselineStatus | None

    def describe(self) -> str:
        parts = [f"message={self.message!r}", f"line={self.line!r}"]
        if self.rule is not None:
            parts.append(f"rule={self.rule!r}")
        if self.baseline_status is not None:
            parts.append(f"baseline_status={self.baseline_status!r}")
        return "{" + ", ".join(parts) + "}"


@dataclass(frozen=True, slots=True)
class BucketDiff:
    bucket: ResultBucket
    unmatched_actual: tuple[ProjectedDiagnostic, ...]
    unmatched_expected: tuple[ExpectedResult, ...]

    @property
    def ok(self) -> bool:
        return not self.unmatched_actual and not self.unmatched_expected


@dataclass(frozen=True, slots=True)
class ResultsDiff:
    file_id: Path
    mode: MatchMode
    buckets: tuple[BucketDiff, ...]

    @property
    def ok(self) -> bool:
        return all(bucket.ok for bucket in self.buckets)

    @property
    def mismatched(self) -> tuple[BucketDiff, ...]:
        return tuple(bucket for bucket in self.buckets if not bucket.ok)

    def bucket(self, name: ResultBucket) -> BucketDiff:
        for bucket_diff in self.buckets:
            if bucket_diff.bucket == name:
                return bucket_diff
        raise KeyError(name)


def project_diagnostic(diagnostic: Diagnostic) -> ProjectedDiagnostic:
    return ProjectedDiagnostic(
        message=diagnostic.message,
        line=diagnostic.range.start.line,
        rule=diagnostic.rule,
        baseline_status=diagnostic.baseline_status,
    )


def compare_bucket(
    bucket: ResultBucket,
    actual: Sequence[Diagnostic],
    expected: Sequence[ExpectedResult],
    *,
    mode: MatchMode = "set",
) -> BucketDiff:
    projected = [project_diagnostic(diagnostic) for diagnostic in actual]
    if mode == "set":
        return _compare_as_sets(bucket, projected, expected)
    if mode == "multiset":
        return _compare_as_multisets(bucket, projected, expected)
    raise ValueError(f"unsupported match mode: {mode!r}")


def compare_results(
    result: FileAnalysisResult,
    expected: ExpectedResults,
    *,
    mode: MatchMode = "set",
) -> ResultsDiff:
    return ResultsDiff(
        file_id=result.file_id,
        mode=mode,
        buckets=tuple(
            compare_bucket(name, result.bucket(name), expected.bucket(name), mode=mode)
            for name in RESULT_BUCKETS
        ),
    )


def validate_results(
    results: Sequence[FileAnalysisResult],
    expected: ExpectedResults,
    *,
    mode: MatchMode = "set",
) -> ResultsDiff:
    result = _require_single_result(results)
    diff = compare_results(result, expected, mode=mode)
    if not diff.ok:
        raise ResultMismatchError(diff, format_results_diff(diff))
    return diff


def validate_result_counts(  # noqa: PLR0913
    results: Sequence[FileAnalysisResult],
    error_count: int,
    warning_count: int = 0,
    info_count: int | None = None,
    unused_code_count: int | None = None,
    unreachable_code_count: int | None = None,
    deprecated_count: int | None = None,
) -> None:
    """Count-only comparison kept for older call sites.

    Deprecated: use :func:`validate_results`, which also checks messages,
    lines, rules and baseline status.
    """
    warnings.warn(
        "validate_result_counts is deprecated; use validate_results instead",
        DeprecationWarning,
        stacklevel=2,
    )
    result = _require_single_result(results)
    expected_counts: tuple[tuple[ResultBucket, int | None], ...] = (
        ("errors", error_count),
        ("warnings", warning_count),
        ("infos", info_count),
        ("unused_codes", unused_code_count),
        ("unreachable_codes", unreachable_code_count),
        ("deprecateds", deprecated_count),
    )
    for bucket, count in expected_counts:
        if count is None:
            continue
        actual = len(result.bucket(bucket))
        if actual != count:
            raise ResultCountMismatchError(bucket, count, actual)


def _require_single_result(results: Sequence[FileAnalysisResult]) -> FileAnalysisResult:
    if len(results) != 1:
        raise ResultContractError(len(results))
    return results[0]


def _compare_as_sets(
    bucket: ResultBucket,
    projected: Sequence[ProjectedDiagnostic],
    expected: Sequence[ExpectedResult],
) -> BucketDiff:
    # Equal projections and equal templates collapse first; the collapsed
    # sides must then pair off one to one, so their sizes have to agree.
    return _compare_as_multisets(
        bucket,
        tuple(dict.fromkeys(projected)),
        tuple(dict.fromkeys(expected)),
    )


def _compare_as_multisets(
    bucket: ResultBucket,
    projected: Sequence[ProjectedDiagnostic],
    expected: Sequence[ExpectedResult],
) -> BucketDiff:
    candidates = [
        [index for index, template in enumerate(expected) if template.matches(item)]
        for item in projected
    ]
    template_owner: list[int | None] = [None] * len(expected)
    for actual_index in range(len(projected)):
        _augment(actual_index, candidates, template_owner, set())

    matched_actual = {owner for owner in template_owner if owner is not None}
    return BucketDiff(
        bucket=bucket,
        unmatched_actual=tuple(
            item for index, item in enumerate(projected) if index not in matched_actual
        ),
        unmatched_expected=tuple(
            template
            for index, template in enumerate(expected)
            if template_owner[index] is None
        ),
    )


def _augment(
    actual_index: int,
    candidates: list[list[int]],
    template_owner: list[int | None],
    visited: set[int],
) -> bool:
    for template_index in candidates[actual_index]:
        if template_index in visited:
            continue
        visited.add(template_index)
        owner = template_owner[template_index]
        if owner is None or _augment(owner, candidates, template_owner, visited):
            template_owner[template_index] = actual_index
            return True
    return False
