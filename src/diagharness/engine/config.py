from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Literal

type DiagnosticRuleSet = Literal["off", "basic", "standard", "strict", "all"]

_RULE_SETS: frozenset[str] = frozenset({"off", "basic", "standard", "strict", "all"})


def _current_root_directory() -> Path:
    return Path.cwd().resolve()


@dataclass(frozen=True, slots=True)
class EngineConfig:
    root_directory: Path = field(default_factory=_current_root_directory)
    internal_test_mode: bool = True
    python_version: str | None = None
    python_platform: str | None = None
    extra_paths: tuple[Path, ...] = ()
    diagnostic_rule_set: DiagnosticRuleSet = "standard"

    def __post_init__(self) -> None:
        object.__setattr__(self, "root_directory", Path(self.root_directory))
        object.__setattr__(self, "extra_paths", tuple(Path(item) for item in self.extra_paths))
        if self.diagnostic_rule_set not in _RULE_SETS:
            raise ValueError(
                f"diagnostic_rule_set must be one of: {','.join(sorted(_RULE_SETS))}"
            )
        if self.python_version is not None and not _is_version_string(self.python_version):
            raise ValueError("python_version must look like '<major>.<minor>'")

    def for_tests(self) -> EngineConfig:
        if self.internal_test_mode:
            return self
        return replace(self, internal_test_mode=True)


def _is_version_string(value: str) -> bool:
    parts = value.split(".")
    return len(parts) == 2 and all(part.isdigit() for part in parts)  # noqa: PLR2004


@dataclass(frozen=True, slots=True)
class ParseOptions:
    is_stub_file: bool = False
    python_version: str | None = None

    def __post_init__(self) -> None:
        if self.python_version is not None and not _is_version_string(self.python_version):
            raise ValueError("python_version must look like '<major>.<minor>'")
