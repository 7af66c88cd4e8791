from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Final, cast

from diagharness.diagnostics import BaselineStatus

from .config import load_yaml_mapping
from .errors import HarnessConfigError
from .results import RESULT_BUCKETS, ResultBucket

if TYPE_CHECKING:
    from .compare import ProjectedDiagnostic


class DontCare(Enum):
    ANY = "any"

    def __repr__(self) -> str:
        return "ANY"


ANY: Final = DontCare.ANY

_PATTERN_FIELDS: Final[tuple[str, ...]] = ("message", "line", "rule", "baseline_status")
_INVALID_EXPECTATION = "E_HARNESS_EXPECTATION_INVALID"


@dataclass(frozen=True, slots=True, kw_only=True)
class ExpectedResult:
    """Partial description of one diagnostic.

    ``line`` is always compared. The other fields default to ``ANY`` and are
    ignored until given a value; ``rule=None`` or ``baseline_status=None``
    require the actual diagnostic to have no rule or no baseline status.
    """

    line: int
    message: str | DontCare = ANY
    rule: str | None | DontCare = ANY
    baseline_status: BaselineStatus | None | DontCare = ANY

    def __post_init__(self) -> None:
        if isinstance(self.line, bool) or not isinstance(self.line, int) or self.line < 0:
            raise ValueError("expected line must be an integer >= 0")
        if self.message is not ANY and (not isinstance(self.message, str) or not self.message):
            raise ValueError("expected message must be a non-empty string when given")
        if self.rule is not ANY and self.rule is not None and (
            not isinstance(self.rule, str) or not self.rule
        ):
            raise ValueError("expected rule must be a non-empty string, None, or ANY")
        if isinstance(self.baseline_status, str) and not isinstance(
            self.baseline_status, BaselineStatus
        ):
            object.__setattr__(self, "baseline_status", BaselineStatus(self.baseline_status))
        elif self.baseline_status is not ANY and self.baseline_status is not None and (
            not isinstance(self.baseline_status, BaselineStatus)
        ):
            raise ValueError("expected baseline_status must be a BaselineStatus, None, or ANY")

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> ExpectedResult:
        unknown = sorted(str(key) for key in data if key not in _PATTERN_FIELDS)
        if unknown:
            raise HarnessConfigError(
                _INVALID_EXPECTATION, f"unknown expectation keys: {', '.join(unknown)}"
            )
        if "line" not in data:
            raise HarnessConfigError(_INVALID_EXPECTATION, "expectation requires 'line'")
        try:
            return cls(**cast(dict[str, object], dict(data)))  # type: ignore[arg-type]
        except ValueError as exc:
            raise HarnessConfigError(_INVALID_EXPECTATION, str(exc)) from exc

    def specified_fields(self) -> tuple[str, ...]:
        return tuple(name for name in _PATTERN_FIELDS if getattr(self, name) is not ANY)

    def matches(self, projected: ProjectedDiagnostic) -> bool:
        return all(
            getattr(self, name) == getattr(projected, name) for name in self.specified_fields()
        )

    def describe(self) -> str:
        parts = [f"{name}={getattr(self, name)!r}" for name in self.specified_fields()]
        return "{" + ", ".join(parts) + "}"


@dataclass(frozen=True, slots=True)
class ExpectedResults:
    errors: tuple[ExpectedResult, ...] = ()
    warnings: tuple[ExpectedResult, ...] = ()
    infos: tuple[ExpectedResult, ...] = ()
    unused_codes: tuple[ExpectedResult, ...] = ()
    unreachable_codes: tuple[ExpectedResult, ...] = ()
    deprecateds: tuple[ExpectedResult, ...] = ()

    def __post_init__(self) -> None:
        for bucket in RESULT_BUCKETS:
            object.__setattr__(self, bucket, _coerce_templates(bucket, getattr(self, bucket)))

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> ExpectedResults:
        unknown = sorted(str(key) for key in data if key not in RESULT_BUCKETS)
        if unknown:
            raise HarnessConfigError(
                _INVALID_EXPECTATION, f"unknown result buckets: {', '.join(unknown)}"
            )
        payload: dict[str, tuple[ExpectedResult, ...]] = {}
        for bucket in RESULT_BUCKETS:
            raw = data.get(bucket)
            if raw is None:
                continue
            if isinstance(raw, str | bytes | Mapping) or not isinstance(raw, Iterable):
                raise HarnessConfigError(
                    _INVALID_EXPECTATION, f"bucket '{bucket}' must be a list of expectations"
                )
            payload[bucket] = _coerce_templates(bucket, cast(Iterable[object], raw))
        return cls(**payload)

    def bucket(self, name: ResultBucket) -> tuple[ExpectedResult, ...]:
        if name not in RESULT_BUCKETS:
            raise KeyError(name)
        return getattr(self, name)

    def is_empty(self) -> bool:
        return all(not getattr(self, item.name) for item in fields(self))


def load_expected_results(path: str | Path) -> ExpectedResults:
    raw = load_yaml_mapping(Path(path), artifact="expected results")
    return ExpectedResults.from_mapping(raw)


def _coerce_templates(bucket: str, items: Iterable[object]) -> tuple[ExpectedResult, ...]:
    out: list[ExpectedResult] = []
    for index, item in enumerate(items):
        if isinstance(item, ExpectedResult):
            out.append(item)
        elif isinstance(item, Mapping):
            out.append(ExpectedResult.from_mapping(cast(Mapping[str, object], item)))
        else:
            raise HarnessConfigError(
                _INVALID_EXPECTATION,
                f"bucket '{bucket}' entry {index} must be an expectation mapping",
            )
    return tuple(out)
