from __future__ import annotations

from .generator import (
    CancellationToken,
    GenerationReport,
    TargetOutcome,
    TargetStatus,
    TranslateOne,
    generate,
    translate_bundle,
    write_bundle,
)

__all__ = [
    "CancellationToken",
    "GenerationReport",
    "TargetOutcome",
    "TargetStatus",
    "TranslateOne",
    "generate",
    "translate_bundle",
    "write_bundle",
]
