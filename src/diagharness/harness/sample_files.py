from __future__ import annotations

import logging
from pathlib import Path

from diagharness.diagnostics import DiagnosticSink
from diagharness.engine import ParseOptions, SourceParser

from .config import DEFAULT_SAMPLES_ROOT

logger = logging.getLogger(__name__)

_STUB_SUFFIX = ".pyi"


def resolve_sample_file_path(file_name: str | Path, *, samples_root: Path | None = None) -> Path:
    root = DEFAULT_SAMPLES_ROOT if samples_root is None else Path(samples_root)
    return (root / file_name).resolve()


def read_sample_file(file_name: str | Path, *, samples_root: Path | None = None) -> str:
    """Return the sample's text, or an empty string when it cannot be read.

    Analysis proceeds on empty input rather than aborting the harness; the
    failure is only logged.
    """
    file_path = resolve_sample_file_path(file_name, samples_root=samples_root)
    try:
        return file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error('Could not read file "%s": %s', file_name, exc)
        return ""


def sample_parse_options(
    file_name: str | Path, *, python_version: str | None = None
) -> ParseOptions:
    return ParseOptions(
        is_stub_file=str(file_name).endswith(_STUB_SUFFIX),
        python_version=python_version,
    )


def parse_text(
    text: str,
    sink: DiagnosticSink,
    parser: SourceParser,
    options: ParseOptions | None = None,
) -> object:
    return parser.parse_source_file(text, options or ParseOptions(), sink)


def parse_sample_file(
    file_name: str | Path,
    sink: DiagnosticSink,
    parser: SourceParser,
    *,
    samples_root: Path | None = None,
    python_version: str | None = None,
) -> object:
    text = read_sample_file(file_name, samples_root=samples_root)
    options = sample_parse_options(file_name, python_version=python_version)
    return parse_text(text, sink, parser, options)
