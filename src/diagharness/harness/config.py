from __future__ import annotations

from dataclasses import dataclass, field
from functools import cache
from pathlib import Path
from typing import Final, Literal, cast

import yaml  # type: ignore[import-untyped]

from diagharness.engine import DiagnosticRuleSet, EngineConfig

from .errors import HarnessConfigError

type MatchMode = Literal["set", "multiset"]

DEFAULT_SAMPLES_ROOT: Final[Path] = Path(__file__).resolve().parent / "samples"
DEFAULT_MAX_ANALYSIS_PASSES: Final[int] = 64
_MATCH_MODES: Final[tuple[MatchMode, ...]] = ("set", "multiset")
_HARNESS_KEYS: Final[frozenset[str]] = frozenset(
    {"samples_root", "max_analysis_passes", "match_mode", "engine"}
)
_ENGINE_KEYS: Final[frozenset[str]] = frozenset(
    {
        "root_directory",
        "internal_test_mode",
        "python_version",
        "python_platform",
        "extra_paths",
        "diagnostic_rule_set",
    }
)


@dataclass(frozen=True, slots=True)
class HarnessConfig:
    samples_root: Path = DEFAULT_SAMPLES_ROOT
    max_analysis_passes: int = DEFAULT_MAX_ANALYSIS_PASSES
    match_mode: MatchMode = "set"
    engine: EngineConfig = field(default_factory=EngineConfig)

    def __post_init__(self) -> None:
        object.__setattr__(self, "samples_root", Path(self.samples_root))
        if isinstance(self.max_analysis_passes, bool) or self.max_analysis_passes < 1:
            raise ValueError("max_analysis_passes must be >= 1")
        if self.match_mode not in _MATCH_MODES:
            raise ValueError("match_mode must be 'set' or 'multiset'")


def load_harness_config(path: str | Path | None = None) -> HarnessConfig:
    if path is None:
        return HarnessConfig()
    return _load_harness_config_cached(str(Path(path).resolve()))


@cache
def _load_harness_config_cached(path: str) -> HarnessConfig:
    target = Path(path)
    raw = load_yaml_mapping(target, artifact="harness config")
    _reject_unknown_keys(raw, _HARNESS_KEYS, scope="harness")
    base_dir = target.parent

    engine_raw = raw.get("engine", {})
    if not isinstance(engine_raw, dict):
        raise HarnessConfigError(
            "E_HARNESS_CONFIG_INVALID", "missing or invalid mapping for key 'engine'"
        )
    engine_block = cast(dict[str, object], engine_raw)
    _reject_unknown_keys(engine_block, _ENGINE_KEYS, scope="engine")

    try:
        engine = EngineConfig(
            root_directory=_optional_path(engine_block, "root_directory", base_dir)
            or base_dir,
            internal_test_mode=_optional_bool(engine_block, "internal_test_mode", default=True),
            python_version=_optional_string(engine_block, "python_version"),
            python_platform=_optional_string(engine_block, "python_platform"),
            extra_paths=_optional_path_tuple(engine_block, "extra_paths", base_dir),
            diagnostic_rule_set=cast(
                DiagnosticRuleSet,
                _optional_string(engine_block, "diagnostic_rule_set") or "standard",
            ),
        )
        return HarnessConfig(
            samples_root=_optional_path(raw, "samples_root", base_dir) or DEFAULT_SAMPLES_ROOT,
            max_analysis_passes=_optional_int(
                raw, "max_analysis_passes", default=DEFAULT_MAX_ANALYSIS_PASSES
            ),
            match_mode=cast(MatchMode, _optional_string(raw, "match_mode") or "set"),
            engine=engine,
        )
    except ValueError as exc:
        if isinstance(exc, HarnessConfigError):
            raise
        raise HarnessConfigError("E_HARNESS_CONFIG_INVALID", str(exc)) from exc


def load_yaml_mapping(path: Path, *, artifact: str) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise HarnessConfigError(
            "E_HARNESS_CONFIG_READ_FAILED",
            f"unable to read {artifact} '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise HarnessConfigError(
            "E_HARNESS_CONFIG_PARSE_FAILED",
            f"invalid {artifact} yaml in '{path}': {exc}",
        ) from exc
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise HarnessConfigError(
            "E_HARNESS_CONFIG_INVALID", f"{artifact} root must be a mapping"
        )
    return cast(dict[str, object], payload)


def _reject_unknown_keys(data: dict[str, object], allowed: frozenset[str], *, scope: str) -> None:
    unknown = sorted(str(key) for key in data if key not in allowed)
    if unknown:
        raise HarnessConfigError(
            "E_HARNESS_CONFIG_INVALID", f"unknown {scope} keys: {', '.join(unknown)}"
        )


def _optional_string(data: dict[str, object], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, str) and value:
        return value
    raise HarnessConfigError("E_HARNESS_CONFIG_INVALID", f"invalid string for key '{key}'")


def _optional_bool(data: dict[str, object], key: str, *, default: bool) -> bool:
    value = data.get(key, default)
    if isinstance(value, bool):
        return value
    raise HarnessConfigError("E_HARNESS_CONFIG_INVALID", f"invalid bool for key '{key}'")


def _optional_int(data: dict[str, object], key: str, *, default: int) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise HarnessConfigError("E_HARNESS_CONFIG_INVALID", f"invalid integer for key '{key}'")
    return value


def _optional_path(data: dict[str, object], key: str, base_dir: Path) -> Path | None:
    value = _optional_string(data, key)
    if value is None:
        return None
    return _resolve_relative(Path(value), base_dir)


def _optional_path_tuple(data: dict[str, object], key: str, base_dir: Path) -> tuple[Path, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise HarnessConfigError("E_HARNESS_CONFIG_INVALID", f"invalid list for key '{key}'")
    out: list[Path] = []
    for index, item in enumerate(value):
        if not isinstance(item, str) or not item:
            raise HarnessConfigError(
                "E_HARNESS_CONFIG_INVALID", f"invalid path at index {index} for key '{key}'"
            )
        out.append(_resolve_relative(Path(item), base_dir))
    return tuple(out)


def _resolve_relative(path: Path, base_dir: Path) -> Path:
    if path.is_absolute():
        return path
    return (base_dir / path).resolve()
