from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .compare import ResultsDiff
    from .results import FileAnalysisResult, ResultBucket


class HarnessConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class ResultContractError(ValueError):
    def __init__(self, result_count: int) -> None:
        self.code = "E_HARNESS_RESULT_COUNT"
        self.message = f"expected results for exactly one file, got {result_count}"
        self.result_count = result_count
        super().__init__(f"{self.code}: {self.message}")


class SourceFileNotFoundError(RuntimeError):
    def __init__(self, file_id: Path, placeholder: FileAnalysisResult) -> None:
        self.code = "E_HARNESS_SOURCE_FILE_MISSING"
        self.message = f"source file not found for {file_id.as_posix()}"
        self.file_id = file_id
        self.placeholder = placeholder
        super().__init__(f"{self.code}: {self.message}")


class AnalysisNotConvergedError(RuntimeError):
    def __init__(self, max_passes: int) -> None:
        self.code = "E_HARNESS_NOT_CONVERGED"
        self.message = f"analysis still reported pending work after {max_passes} passes"
        self.max_passes = max_passes
        super().__init__(f"{self.code}: {self.message}")


class ResultMismatchError(AssertionError):
    def __init__(self, diff: ResultsDiff, rendered: str) -> None:
        self.code = "E_HARNESS_RESULT_MISMATCH"
        self.message = rendered
        self.diff = diff
        super().__init__(f"{self.code}: {self.message}")


class ResultCountMismatchError(AssertionError):
    def __init__(self, bucket: ResultBucket, expected: int, actual: int) -> None:
        self.code = "E_HARNESS_COUNT_MISMATCH"
        self.message = f"{bucket}: expected {expected} diagnostic(s), got {actual}"
        self.bucket = bucket
        self.expected = expected
        self.actual = actual
        super().__init__(f"{self.code}: {self.message}")
