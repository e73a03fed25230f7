"""Tolerant decoders and canonical encoders for guidance responses."""

from .encoding import (
    encode_analysis,
    encode_analyze_result,
    encode_flow,
    encode_journey_entry,
    encode_journey_insights,
    encode_mini_challenge,
    encode_mood_response,
    encode_session,
    encode_story_result,
    encode_structured_thought,
    encode_turn,
)
from .flow import decode_flow
from .helpers import extract_answer_helpers
from .records import (
    analysis_from_reflect_payload,
    decode_analysis,
    decode_analyze_result,
    decode_journey_entry,
    decode_journey_insights,
    decode_mini_challenge,
    decode_mood_response,
    decode_story_result,
    decode_structured_thought,
)
from .risk import classify_risk, display_level
from .session import decode_session
from .turn import decode_turn, decode_turn_or_default, default_turn

__all__ = [
    "analysis_from_reflect_payload",
    "classify_risk",
    "decode_analysis",
    "decode_analyze_result",
    "decode_flow",
    "decode_journey_entry",
    "decode_journey_insights",
    "decode_mini_challenge",
    "decode_mood_response",
    "decode_session",
    "decode_story_result",
    "decode_structured_thought",
    "decode_turn",
    "decode_turn_or_default",
    "default_turn",
    "display_level",
    "encode_analysis",
    "encode_analyze_result",
    "encode_flow",
    "encode_journey_entry",
    "encode_journey_insights",
    "encode_mini_challenge",
    "encode_mood_response",
    "encode_session",
    "encode_story_result",
    "encode_structured_thought",
    "encode_turn",
    "extract_answer_helpers",
]
