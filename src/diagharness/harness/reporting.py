from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .results import FileAnalysisResult

if TYPE_CHECKING:
    from .compare import BucketDiff, ResultsDiff

logger = logging.getLogger(__name__)


def print_diagnostics(result: FileAnalysisResult) -> None:
    file_label = result.file_id.as_posix()
    if result.errors:
        logger.error("Errors in %s:", file_label)
        for diagnostic in result.errors:
            logger.error("  %s", diagnostic.message)

    if result.warnings:
        logger.error("Warnings in %s:", file_label)
        for diagnostic in result.warnings:
            logger.error("  %s", diagnostic.message)


def format_results_diff(diff: ResultsDiff) -> str:
    lines = [f"diagnostics mismatch in {diff.file_id.as_posix()} (mode={diff.mode})"]
    for bucket_diff in diff.mismatched:
        lines.extend(_format_bucket_diff(bucket_diff))
    return "\n".join(lines)


def _format_bucket_diff(bucket_diff: BucketDiff) -> list[str]:
    lines = [f"  {bucket_diff.bucket}:"]
    for projected in bucket_diff.unmatched_actual:
        lines.append(f"    + unexpected {projected.describe()}")
    for template in bucket_diff.unmatched_expected:
        lines.append(f"    - missing    {template.describe()}")
    return lines
