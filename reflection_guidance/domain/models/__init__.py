"""Domain models package."""

from .reflection import (
    FALLBACK_HINT,
    MAX_ANSWER_HELPERS,
    DecodeIssue,
    ReflectionFlow,
    ReflectionSession,
    ReflectionTurn,
    RiskFlag,
    is_fallback_hint,
)
from .guidance import (
    Analysis,
    AnalyzeResult,
    JourneyEntry,
    JourneyInsights,
    MiniChallenge,
    MoodResponse,
    StoryResult,
    StructuredThoughtResult,
)

__all__ = [
    "FALLBACK_HINT",
    "MAX_ANSWER_HELPERS",
    "DecodeIssue",
    "ReflectionFlow",
    "ReflectionSession",
    "ReflectionTurn",
    "RiskFlag",
    "is_fallback_hint",
    "Analysis",
    "AnalyzeResult",
    "JourneyEntry",
    "JourneyInsights",
    "MiniChallenge",
    "MoodResponse",
    "StoryResult",
    "StructuredThoughtResult",
]
