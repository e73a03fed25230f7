"""Auxiliary guidance records (analysis, challenges, journey, stories).

Simpler immutable value records decoded with the same tolerant convention as
ReflectionTurn: every field is individually defaulted and decoding never
fails on absence.
"""

from typing import Any, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field


class Analysis(BaseModel):
    """Analysis of a free-text or voice entry.

    sorc and levers are passed through as opaque JSON values.
    """

    model_config = ConfigDict(frozen=True)

    sorc: Any = None
    levers: Tuple[Any, ...] = ()
    mirror: Optional[str] = None
    question: Optional[str] = None
    risk_level: Optional[str] = None


class MiniChallenge(BaseModel):
    """Small follow-up exercise with ordered steps."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    steps: Tuple[str, ...] = ()


class AnalyzeResult(BaseModel):
    """Result of an analyze call: analysis plus an optional challenge."""

    model_config = ConfigDict(frozen=True)

    analysis: Analysis = Field(default_factory=Analysis)
    challenge: Optional[MiniChallenge] = None


class StructuredThoughtResult(BaseModel):
    """A thought broken into bullets, a core idea and next steps.

    source is "server" for backend results and "offline" for locally
    produced ones.
    """

    model_config = ConfigDict(frozen=True)

    bullets: Tuple[str, ...] = ()
    core_idea: str = ""
    mood_hint: Optional[str] = None
    next_steps: Tuple[str, ...] = ()
    source: str = "server"


class JourneyEntry(BaseModel):
    """One dated journal snippet fed into journey insights."""

    model_config = ConfigDict(frozen=True)

    date_iso: str = ""  # YYYY-MM-DD
    text: str = ""
    mood_label: Optional[str] = None


class JourneyInsights(BaseModel):
    """Observations across entries plus one guiding question."""

    model_config = ConfigDict(frozen=True)

    insights: Tuple[str, ...] = ()
    question: str = ""


class MoodResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    saved: bool = False


class StoryResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = ""
    title: str = ""
    body: str = ""
    audio_url: Optional[str] = None
