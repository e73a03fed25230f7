"""
Tolerant decoders for the auxiliary guidance records.

Sub-record decoders (decode_analysis, decode_mini_challenge) return None when
the value is not a mapping, so the parent can tell "absent" from "empty".
Top-level decoders always return a record built from per-field defaults.
"""

import copy
from typing import Any, Optional

from reflection_guidance.domain.models import (
    FALLBACK_HINT,
    Analysis,
    AnalyzeResult,
    JourneyEntry,
    JourneyInsights,
    MiniChallenge,
    MoodResponse,
    StoryResult,
    StructuredThoughtResult,
)
from reflection_guidance.normalization.raw import (
    RawKind,
    as_mapping,
    is_true,
    kind_of,
)
from reflection_guidance.normalization.text import (
    first_text,
    string_list,
    trimmed_or_none,
)
from reflection_guidance.normalization.turn import decode_turn_or_default


def decode_analysis(raw: Any) -> Optional[Analysis]:
    mapping = as_mapping(raw)
    if mapping is None:
        return None
    levers = mapping.get("levers")
    return Analysis(
        sorc=copy.deepcopy(mapping.get("sorc")),
        levers=tuple(copy.deepcopy(levers)) if kind_of(levers) is RawKind.LIST else (),
        mirror=trimmed_or_none(mapping.get("mirror")),
        question=trimmed_or_none(mapping.get("question")),
        risk_level=first_text(mapping, ("riskLevel", "risk_level")),
    )


def decode_mini_challenge(raw: Any) -> Optional[MiniChallenge]:
    mapping = as_mapping(raw)
    if mapping is None:
        return None
    return MiniChallenge(
        id=trimmed_or_none(mapping.get("id")) or "",
        title=trimmed_or_none(mapping.get("title")) or "",
        steps=string_list(mapping.get("steps")),
    )


def decode_analyze_result(raw: Any) -> AnalyzeResult:
    mapping = as_mapping(raw) or {}
    return AnalyzeResult(
        analysis=decode_analysis(mapping.get("analysis")) or Analysis(),
        challenge=decode_mini_challenge(mapping.get("challenge")),
    )


def analysis_from_reflect_payload(raw: Any) -> Analysis:
    """
    Build an Analysis straight from a full reflect payload.

    The question is the turn's primary question; when the payload only has a
    statement, it is turned into a question. Nothing usable yields the
    fallback hint.
    """
    turn = decode_turn_or_default(raw)
    question = turn.primary_question
    if question is None and not turn.is_fallback:
        text = turn.output_text.strip()
        question = text if text.endswith("?") else f"{text}?"
    return Analysis(
        mirror=turn.mirror,
        question=question or FALLBACK_HINT,
        risk_level=turn.risk_level,
    )


def decode_structured_thought(raw: Any) -> StructuredThoughtResult:
    mapping = as_mapping(raw) or {}
    return StructuredThoughtResult(
        bullets=string_list(mapping.get("bullets")),
        core_idea=trimmed_or_none(mapping.get("core_idea")) or "",
        mood_hint=trimmed_or_none(mapping.get("mood_hint")),
        next_steps=string_list(mapping.get("next_steps")),
        source=trimmed_or_none(mapping.get("source")) or "server",
    )


def decode_journey_entry(raw: Any) -> JourneyEntry:
    mapping = as_mapping(raw) or {}
    return JourneyEntry(
        date_iso=first_text(mapping, ("date", "date_iso", "dateIso")) or "",
        text=trimmed_or_none(mapping.get("text")) or "",
        mood_label=first_text(mapping, ("mood_label", "moodLabel")),
    )


def decode_journey_insights(raw: Any) -> JourneyInsights:
    mapping = as_mapping(raw) or {}
    return JourneyInsights(
        insights=string_list(mapping.get("insights")),
        question=trimmed_or_none(mapping.get("question")) or "",
    )


def decode_mood_response(raw: Any) -> MoodResponse:
    mapping = as_mapping(raw) or {}
    return MoodResponse(saved=is_true(mapping.get("saved")))


def decode_story_result(raw: Any) -> StoryResult:
    mapping = as_mapping(raw) or {}
    return StoryResult(
        id=trimmed_or_none(mapping.get("id")) or "",
        title=trimmed_or_none(mapping.get("title")) or "",
        body=trimmed_or_none(mapping.get("body")) or "",
        audio_url=first_text(mapping, ("audio_url", "audioUrl")),
    )
