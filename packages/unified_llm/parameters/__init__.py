"""Parameter unification engine and the shared request vocabulary."""

from packages.unified_llm.parameters.schema import ChatParameters, CompleteParameters
from packages.unified_llm.parameters.unified import (
    FieldSpec,
    UnifiedParameters,
    value_present,
)

__all__ = [
    "ChatParameters",
    "CompleteParameters",
    "FieldSpec",
    "UnifiedParameters",
    "value_present",
]
