"""
Turn decoding: raw guidance payload -> ReflectionTurn.

Orchestrates the session, flow, risk and helper decoders and extracts the
text fields. Any structurally wrong or partially-shaped input degrades field
by field to defaults; decode_turn() never raises.

Alias precedence (first non-empty wins unless noted):

    output_text   output_text, outputText, question, primary_question,
                  then legacy primary, lead, lead_question, choices[0],
                  content, raw; FALLBACK_HINT when all are empty
    questions     union of questions, qs, multi_questions, then alt,
                  alternatives, secondary_question (deduped)
    mirror        mirror, empathy
    tags          tags plus normalized therapeutic schools
    talk          talk plus smalltalk_reply
"""

from typing import Any, List, Mapping, Optional

import structlog
from pydantic import ValidationError

from reflection_guidance.domain.models import (
    FALLBACK_HINT,
    MAX_ANSWER_HELPERS,
    DecodeIssue,
    ReflectionSession,
    ReflectionTurn,
)
from reflection_guidance.normalization.flow import decode_flow
from reflection_guidance.normalization.helpers import extract_answer_helpers
from reflection_guidance.normalization.raw import (
    RawKind,
    as_mapping,
    kind_of,
)
from reflection_guidance.normalization.risk import decode_risk
from reflection_guidance.normalization.schools import SCHOOL_KEYS, normalize_schools
from reflection_guidance.normalization.session import decode_session
from reflection_guidance.normalization.text import (
    dedupe,
    first_text,
    normalize_for_compare,
    string_list,
    trimmed_or_none,
    union_lists,
)

log = structlog.get_logger(__name__)

OUTPUT_TEXT_KEYS = ("output_text", "outputText", "question", "primary_question")
LEGACY_PRIMARY_KEYS = ("primary", "lead", "lead_question")
LEGACY_BODY_KEYS = ("content", "raw")
QUESTION_KEYS = ("questions", "qs", "multi_questions")
ALT_QUESTION_KEYS = ("alt", "alternatives", "secondary_question")
MIRROR_KEYS = ("mirror", "empathy")


def default_turn(session: Optional[ReflectionSession] = None) -> ReflectionTurn:
    """All-defaults turn; its output text is the fallback hint."""
    return ReflectionTurn(session=session or ReflectionSession())


def decode_turn(
    raw: Any,
    session: Optional[ReflectionSession] = None,
    helper_limit: int = MAX_ANSWER_HELPERS,
) -> Optional[ReflectionTurn]:
    """
    Decode one guidance payload.

    Args:
        raw: Parsed JSON payload (any shape)
        session: Session of the conversation so far; fills session fields
            the payload leaves out
        helper_limit: Maximum answer helpers kept

    Returns:
        ReflectionTurn, or None when raw is not a mapping
    """
    mapping = as_mapping(raw)
    if mapping is None:
        log.debug(
            "guidance_decode_degraded",
            field="turn",
            issue=DecodeIssue.MALFORMED_INPUT.value,
            kind=kind_of(raw).value,
        )
        return None

    try:
        turn = _decode_mapping(mapping, session, helper_limit)
    except ValidationError as e:
        log.warning("guidance_turn_decode_failed", error=str(e))
        return None

    log.debug(
        "guidance_turn_decoded",
        fallback=turn.is_fallback,
        question_count=len(turn.questions),
        helper_count=len(turn.answer_helpers),
        risk_level=turn.risk_level,
    )
    return turn


def decode_turn_or_default(
    raw: Any,
    session: Optional[ReflectionSession] = None,
    helper_limit: int = MAX_ANSWER_HELPERS,
) -> ReflectionTurn:
    """decode_turn(), substituting default_turn() when nothing decodes."""
    turn = decode_turn(raw, session=session, helper_limit=helper_limit)
    return turn if turn is not None else default_turn(session)


def _decode_mapping(
    mapping: Mapping,
    session: Optional[ReflectionSession],
    helper_limit: int,
) -> ReflectionTurn:
    decoded_session = decode_session(mapping.get("session"), fallback=session)

    return ReflectionTurn(
        output_text=extract_output_text(mapping) or FALLBACK_HINT,
        mirror=first_text(mapping, MIRROR_KEYS),
        context=string_list(mapping.get("context")),
        followups=string_list(mapping.get("followups")),
        answer_helpers=extract_answer_helpers(mapping, limit=helper_limit),
        tags=_tags(mapping),
        questions=extract_questions(mapping),
        talk=_talk(mapping),
        risk_flag=decode_risk(mapping),
        flow=decode_flow(mapping.get("flow")),
        session=decoded_session or session or ReflectionSession(),
    )


def extract_output_text(mapping: Mapping) -> Optional[str]:
    """First non-empty output text candidate, or None."""
    text = first_text(mapping, OUTPUT_TEXT_KEYS) or first_text(
        mapping, LEGACY_PRIMARY_KEYS
    )
    if text:
        return text
    from_choices = content_from_choices(mapping.get("choices"))
    if from_choices:
        return from_choices
    return first_text(mapping, LEGACY_BODY_KEYS)


def content_from_choices(value: Any) -> Optional[str]:
    """
    Text of the first choice in an OpenAI-style payload:
    {"choices": [{"message": {"content": ...}}]} or {"choices": [{"text": ...}]}.
    """
    if kind_of(value) is not RawKind.LIST or not value:
        return None
    first = as_mapping(value[0])
    if first is None:
        return None
    message = as_mapping(first.get("message"))
    if message is not None:
        content = trimmed_or_none(message.get("content"))
        if content:
            return content
    return trimmed_or_none(first.get("text"))


def extract_questions(mapping: Mapping) -> List[str]:
    """Union of all question aliases, deduped, in alias order."""
    return dedupe(
        union_lists(mapping, QUESTION_KEYS) + union_lists(mapping, ALT_QUESTION_KEYS)
    )


def _tags(mapping: Mapping) -> List[str]:
    schools = normalize_schools(union_lists(mapping, SCHOOL_KEYS))
    return dedupe(string_list(mapping.get("tags")) + schools)


def _talk(mapping: Mapping) -> List[str]:
    talk = string_list(mapping.get("talk"))
    smalltalk = trimmed_or_none(mapping.get("smalltalk_reply"))
    if smalltalk:
        known = {normalize_for_compare(line) for line in talk}
        if normalize_for_compare(smalltalk) not in known:
            talk.append(smalltalk)
    return talk
