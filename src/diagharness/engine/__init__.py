from .config import DiagnosticRuleSet, EngineConfig, ParseOptions
from .protocol import (
    AnalysisEngine,
    EngineFactory,
    ParseResults,
    ParseTreeWalker,
    PreCheckCallback,
    SourceParser,
)

__all__ = [
    "AnalysisEngine",
    "DiagnosticRuleSet",
    "EngineConfig",
    "EngineFactory",
    "ParseOptions",
    "ParseResults",
    "ParseTreeWalker",
    "PreCheckCallback",
    "SourceParser",
]
