from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Literal

from diagharness.diagnostics import Diagnostic

type ResultBucket = Literal[
    "errors",
    "warnings",
    "infos",
    "unused_codes",
    "unreachable_codes",
    "deprecateds",
]

RESULT_BUCKETS: Final[tuple[ResultBucket, ...]] = (
    "errors",
    "warnings",
    "infos",
    "unused_codes",
    "unreachable_codes",
    "deprecateds",
)


@dataclass(frozen=True, slots=True)
class FileAnalysisResult:
    file_id: Path
    parse_results: object | None = None
    errors: tuple[Diagnostic, ...] = ()
    warnings: tuple[Diagnostic, ...] = ()
    infos: tuple[Diagnostic, ...] = ()
    unused_codes: tuple[Diagnostic, ...] = ()
    unreachable_codes: tuple[Diagnostic, ...] = ()
    deprecateds: tuple[Diagnostic, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "file_id", Path(self.file_id))
        for bucket in RESULT_BUCKETS:
            object.__setattr__(self, bucket, tuple(getattr(self, bucket)))

    @classmethod
    def empty(cls, file_id: Path) -> FileAnalysisResult:
        return cls(file_id=file_id)

    def bucket(self, name: ResultBucket) -> tuple[Diagnostic, ...]:
        if name not in RESULT_BUCKETS:
            raise KeyError(name)
        return getattr(self, name)

    def iter_buckets(self) -> Iterator[tuple[ResultBucket, tuple[Diagnostic, ...]]]:
        for name in RESULT_BUCKETS:
            yield (name, self.bucket(name))

    @property
    def diagnostic_count(self) -> int:
        return sum(len(items) for _, items in self.iter_buckets())
