from __future__ import annotations

from pathlib import Path

import pytest

from diagharness.diagnostics import BaselineStatus, Diagnostic, DiagnosticCategory, TextRange
from diagharness.harness import (
    ExpectedResult,
    ExpectedResults,
    FileAnalysisResult,
    ProjectedDiagnostic,
    ResultContractError,
    ResultCountMismatchError,
    ResultMismatchError,
    classify_diagnostics,
    compare_bucket,
    compare_results,
    project_diagnostic,
    validate_result_counts,
    validate_results,
)

pytestmark = pytest.mark.unit

_FILE = Path("/samples/undefined_name.py")


def _diag(**overrides: object) -> Diagnostic:
    payload: dict[str, object] = {
        "category": DiagnosticCategory.ERROR,
        "message": "undefined name 'x'",
        "range": TextRange.single_line(3, 6, 7),
        "rule": "reportUndefinedVariable",
    }
    payload.update(overrides)
    return Diagnostic(**payload)


def _result(*diagnostics: Diagnostic) -> FileAnalysisResult:
    return classify_diagnostics(_FILE, diagnostics)


def test_projection_keeps_message_line_rule_and_status() -> None:
    projected = project_diagnostic(_diag(baseline_status=BaselineStatus.BASELINED))
    assert projected == ProjectedDiagnostic(
        message="undefined name 'x'",
        line=3,
        rule="reportUndefinedVariable",
        baseline_status=BaselineStatus.BASELINED,
    )


def test_legacy_counts_pass_for_single_error() -> None:
    with pytest.deprecated_call():
        validate_result_counts([_result(_diag())], error_count=1, warning_count=0)


def test_legacy_counts_check_optional_buckets_only_when_given() -> None:
    result = _result(_diag(), _diag(category=DiagnosticCategory.INFORMATION, message="i"))

    with pytest.deprecated_call():
        validate_result_counts([result], 1)

    with pytest.deprecated_call(), pytest.raises(ResultCountMismatchError) as excinfo:
        validate_result_counts([result], 1, 0, info_count=0)
    assert excinfo.value.bucket == "infos"
    assert excinfo.value.expected == 0
    assert excinfo.value.actual == 1
    assert excinfo.value.code == "E_HARNESS_COUNT_MISMATCH"


def test_legacy_counts_report_warning_mismatch() -> None:
    with pytest.deprecated_call(), pytest.raises(ResultCountMismatchError, match="warnings"):
        validate_result_counts([_result(_diag())], error_count=1, warning_count=2)


def test_line_only_expectation_passes() -> None:
    diff = validate_results(
        [_result(_diag())], ExpectedResults(errors=(ExpectedResult(line=3),))
    )
    assert diff.ok
    assert diff.mismatched == ()


def test_wrong_message_reports_both_unmatched_sides() -> None:
    expected = ExpectedResults(errors=(ExpectedResult(line=3, message="wrong text"),))

    with pytest.raises(ResultMismatchError) as excinfo:
        validate_results([_result(_diag())], expected)

    diff = excinfo.value.diff
    errors = diff.bucket("errors")
    assert errors.unmatched_actual == (project_diagnostic(_diag()),)
    assert errors.unmatched_expected == (ExpectedResult(line=3, message="wrong text"),)
    assert [bucket.bucket for bucket in diff.mismatched] == ["errors"]
    assert "wrong text" in str(excinfo.value)
    assert "undefined name 'x'" in str(excinfo.value)


def test_zero_diagnostics_pass_against_empty_expectations() -> None:
    assert validate_results([_result()], ExpectedResults()).ok


def test_unexpected_diagnostic_in_other_bucket_fails() -> None:
    result = _result(_diag(), _diag(category=DiagnosticCategory.WARNING, message="w", rule=None))
    with pytest.raises(ResultMismatchError) as excinfo:
        validate_results([result], ExpectedResults(errors=(ExpectedResult(line=3),)))
    warnings = excinfo.value.diff.bucket("warnings")
    assert len(warnings.unmatched_actual) == 1
    assert warnings.unmatched_expected == ()


def test_missing_diagnostic_is_reported_as_unmatched_expected() -> None:
    expected = ExpectedResults(deprecateds=(ExpectedResult(line=1),))
    diff = compare_results(_result(), expected)
    assert not diff.ok
    assert diff.bucket("deprecateds").unmatched_expected == (ExpectedResult(line=1),)


@pytest.mark.parametrize("count", [0, 2])
def test_exactly_one_result_is_required(count: int) -> None:
    results = [_result(_diag()) for _ in range(count)]
    with pytest.raises(ResultContractError, match="exactly one file"):
        validate_results(results, ExpectedResults())
    with pytest.deprecated_call(), pytest.raises(ResultContractError):
        validate_result_counts(results, 0)


def test_set_mode_collapses_duplicate_diagnostics() -> None:
    actual = [_diag(), _diag()]
    diff = compare_bucket("errors", actual, [ExpectedResult(line=3)], mode="set")
    assert diff.ok


def test_set_mode_needs_one_template_per_distinct_diagnostic() -> None:
    actual = [_diag(message="a"), _diag(message="b")]

    diff = compare_bucket("errors", actual, [ExpectedResult(line=3)])
    assert len(diff.unmatched_actual) == 1
    assert diff.unmatched_expected == ()

    with pytest.raises(ResultMismatchError) as excinfo:
        validate_results([_result(*actual)], ExpectedResults(errors=(ExpectedResult(line=3),)))
    assert len(excinfo.value.diff.bucket("errors").unmatched_actual) == 1


def test_set_mode_needs_one_diagnostic_per_distinct_template() -> None:
    expected = [ExpectedResult(line=3), ExpectedResult(line=3, rule="reportUndefinedVariable")]

    diff = compare_bucket("errors", [_diag()], expected)
    assert diff.unmatched_actual == ()
    assert len(diff.unmatched_expected) == 1
    assert compare_bucket("errors", [_diag(), _diag(message="y")], expected).ok


def test_multiset_mode_counts_duplicates() -> None:
    actual = [_diag(), _diag()]

    short = compare_bucket("errors", actual, [ExpectedResult(line=3)], mode="multiset")
    assert short.unmatched_actual == (project_diagnostic(_diag()),)
    assert short.unmatched_expected == ()

    exact = compare_bucket(
        "errors", actual, [ExpectedResult(line=3), ExpectedResult(line=3)], mode="multiset"
    )
    assert exact.ok


def test_multiset_mode_finds_assignment_when_greedy_would_fail() -> None:
    actual = [_diag(message="a"), _diag(message="b")]
    expected = [ExpectedResult(line=3), ExpectedResult(line=3, message="a")]

    assert compare_bucket("errors", actual, expected, mode="multiset").ok
    assert compare_bucket("errors", actual, list(reversed(expected)), mode="multiset").ok


def test_validate_results_forwards_mode() -> None:
    result = _result(_diag(), _diag())
    expected = ExpectedResults(errors=(ExpectedResult(line=3),))
    assert validate_results([result], expected).ok
    with pytest.raises(ResultMismatchError):
        validate_results([result], expected, mode="multiset")


def test_unknown_mode_is_rejected() -> None:
    with pytest.raises(ValueError, match="unsupported match mode"):
        compare_bucket("errors", [], [], mode="bag")  # type: ignore[arg-type]
