from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class DiagnosticCategory(StrEnum):
    ERROR = "error"
    WARNING = "warning"
    INFORMATION = "information"
    UNUSED_CODE = "unused_code"
    UNREACHABLE_CODE = "unreachable_code"
    DEPRECATED = "deprecated"


class BaselineStatus(StrEnum):
    BASELINED = "baselined"
    BASELINED_WITH_HINT = "baselined_with_hint"


class Position(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    line: int = Field(ge=0)
    character: int = Field(default=0, ge=0)


class TextRange(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    start: Position
    end: Position

    @model_validator(mode="after")
    def _validate_ordering(self) -> TextRange:
        if (self.end.line, self.end.character) < (self.start.line, self.start.character):
            raise ValueError("range end must not precede range start")
        return self

    @classmethod
    def single_line(cls, line: int, start: int = 0, end: int | None = None) -> TextRange:
        return cls(
            start=Position(line=line, character=start),
            end=Position(line=line, character=start if end is None else end),
        )


class Diagnostic(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    category: DiagnosticCategory
    message: str = Field(min_length=1)
    range: TextRange
    rule: str | None = Field(default=None, min_length=1)
    baseline_status: BaselineStatus | None = None

    @property
    def line(self) -> int:
        return self.range.start.line
