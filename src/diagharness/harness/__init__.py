from .classify import CATEGORY_BUCKETS, bucket_for, classify_diagnostics
from .compare import (
    BucketDiff,
    ProjectedDiagnostic,
    ResultsDiff,
    compare_bucket,
    compare_results,
    project_diagnostic,
    validate_result_counts,
    validate_results,
)
from .config import (
    DEFAULT_MAX_ANALYSIS_PASSES,
    DEFAULT_SAMPLES_ROOT,
    HarnessConfig,
    MatchMode,
    load_harness_config,
)
from .driver import (
    engine_session,
    get_analysis_results,
    run_to_fixpoint,
    type_analyze_sample_files,
    validate_sample_file,
    walk_sample_file,
)
from .errors import (
    AnalysisNotConvergedError,
    HarnessConfigError,
    ResultContractError,
    ResultCountMismatchError,
    ResultMismatchError,
    SourceFileNotFoundError,
)
from .expectations import ANY, DontCare, ExpectedResult, ExpectedResults, load_expected_results
from .reporting import format_results_diff, print_diagnostics
from .results import RESULT_BUCKETS, FileAnalysisResult, ResultBucket
from .sample_files import (
    parse_sample_file,
    parse_text,
    read_sample_file,
    resolve_sample_file_path,
    sample_parse_options,
)

__all__ = [
    "ANY",
    "AnalysisNotConvergedError",
    "BucketDiff",
    "CATEGORY_BUCKETS",
    "DEFAULT_MAX_ANALYSIS_PASSES",
    "DEFAULT_SAMPLES_ROOT",
    "DontCare",
    "ExpectedResult",
    "ExpectedResults",
    "FileAnalysisResult",
    "HarnessConfig",
    "HarnessConfigError",
    "MatchMode",
    "ProjectedDiagnostic",
    "RESULT_BUCKETS",
    "ResultBucket",
    "ResultContractError",
    "ResultCountMismatchError",
    "ResultMismatchError",
    "ResultsDiff",
    "SourceFileNotFoundError",
    "bucket_for",
    "classify_diagnostics",
    "compare_bucket",
    "compare_results",
    "engine_session",
    "format_results_diff",
    "get_analysis_results",
    "load_expected_results",
    "load_harness_config",
    "parse_sample_file",
    "parse_text",
    "print_diagnostics",
    "project_diagnostic",
    "read_sample_file",
    "resolve_sample_file_path",
    "run_to_fixpoint",
    "sample_parse_options",
    "type_analyze_sample_files",
    "validate_result_counts",
    "validate_results",
    "validate_sample_file",
    "walk_sample_file",
]
