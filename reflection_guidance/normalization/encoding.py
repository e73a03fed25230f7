"""
Canonical encoders: records -> the one fixed JSON shape.

Empty optionals and empty collections are omitted. Exceptions for turns:
flow is always written (defaults when the turn has none), session and
risk_level are always written, and output_text is dropped when it is the
fallback hint so a degraded turn never persists the placeholder.

Canonical turn shape:

    {
      "output_text"?: str, "question"?: str, "mirror"?: str,
      "context"?: [str], "followups"?: [str], "answer_helpers"?: [str],
      "flow": {"recommend_end": bool, "suggest_break": bool,
               "risk_notice"?: str, "session_turn"?: int,
               "talk_only"?: true, "allow_reflect": bool, "mood_prompt"?: true},
      "session": {"id": str, "turn": int, "max_turns": int},
      "tags"?: [str], "risk_level": "none" | "mild" | "high",
      "questions"?: [str], "talk"?: [str]
    }
"""

import copy
from typing import Any, Dict, Optional

from reflection_guidance.domain.models import (
    Analysis,
    AnalyzeResult,
    JourneyEntry,
    JourneyInsights,
    MiniChallenge,
    MoodResponse,
    ReflectionFlow,
    ReflectionSession,
    ReflectionTurn,
    StoryResult,
    StructuredThoughtResult,
    is_fallback_hint,
)

JsonMap = Dict[str, Any]


def _put(target: JsonMap, key: str, value: Any) -> None:
    """Set key unless value is None or an empty string/sequence."""
    if value is None:
        return
    if isinstance(value, (str, tuple, list)) and not value:
        return
    target[key] = list(value) if isinstance(value, tuple) else value


def encode_session(session: ReflectionSession) -> JsonMap:
    return {
        "id": session.thread_id,
        "turn": session.turn_index,
        "max_turns": session.max_turns,
    }


def encode_flow(flow: Optional[ReflectionFlow]) -> JsonMap:
    flow = flow or ReflectionFlow()
    data: JsonMap = {
        "recommend_end": flow.recommend_end,
        "suggest_break": flow.suggest_break,
    }
    if flow.risk_notice is not None:
        data["risk_notice"] = flow.risk_notice
    if flow.session_turn is not None:
        data["session_turn"] = flow.session_turn
    if flow.talk_only:
        data["talk_only"] = True
    data["allow_reflect"] = flow.allow_reflect
    if flow.mood_prompt:
        data["mood_prompt"] = True
    return data


def encode_turn(turn: ReflectionTurn) -> JsonMap:
    """Serialize a turn to the canonical shape (key order is stable)."""
    data: JsonMap = {}
    if not is_fallback_hint(turn.output_text):
        _put(data, "output_text", turn.output_text)
    _put(data, "question", turn.primary_question)
    _put(data, "mirror", turn.mirror)
    _put(data, "context", turn.context)
    _put(data, "followups", turn.followups)
    _put(data, "answer_helpers", turn.answer_helpers)
    data["flow"] = encode_flow(turn.flow)
    data["session"] = encode_session(turn.session)
    _put(data, "tags", turn.tags)
    data["risk_level"] = turn.risk_level
    _put(data, "questions", turn.questions)
    _put(data, "talk", turn.talk)
    return data


# =============================================================================
# Auxiliary records
# =============================================================================


def encode_analysis(analysis: Analysis) -> JsonMap:
    data: JsonMap = {}
    if analysis.sorc is not None:
        data["sorc"] = copy.deepcopy(analysis.sorc)
    _put(data, "levers", [copy.deepcopy(lever) for lever in analysis.levers])
    _put(data, "mirror", analysis.mirror)
    _put(data, "question", analysis.question)
    _put(data, "riskLevel", analysis.risk_level)
    return data


def encode_mini_challenge(challenge: MiniChallenge) -> JsonMap:
    data: JsonMap = {}
    _put(data, "id", challenge.id)
    _put(data, "title", challenge.title)
    _put(data, "steps", challenge.steps)
    return data


def encode_analyze_result(result: AnalyzeResult) -> JsonMap:
    data: JsonMap = {"analysis": encode_analysis(result.analysis)}
    if result.challenge is not None:
        data["challenge"] = encode_mini_challenge(result.challenge)
    return data


def encode_structured_thought(result: StructuredThoughtResult) -> JsonMap:
    data: JsonMap = {}
    _put(data, "bullets", result.bullets)
    _put(data, "core_idea", result.core_idea)
    _put(data, "mood_hint", result.mood_hint)
    _put(data, "next_steps", result.next_steps)
    _put(data, "source", result.source)
    return data


def encode_journey_entry(entry: JourneyEntry) -> JsonMap:
    data: JsonMap = {}
    _put(data, "date", entry.date_iso)
    _put(data, "mood_label", entry.mood_label)
    _put(data, "text", entry.text)
    return data


def encode_journey_insights(insights: JourneyInsights) -> JsonMap:
    data: JsonMap = {}
    _put(data, "insights", insights.insights)
    _put(data, "question", insights.question)
    return data


def encode_mood_response(response: MoodResponse) -> JsonMap:
    return {"saved": response.saved}


def encode_story_result(story: StoryResult) -> JsonMap:
    data: JsonMap = {}
    _put(data, "id", story.id)
    _put(data, "title", story.title)
    _put(data, "body", story.body)
    _put(data, "audio_url", story.audio_url)
    return data
