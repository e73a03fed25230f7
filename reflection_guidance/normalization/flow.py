"""
Session-control flag decoding.

Boolean flags only count when the value is the literal true; "true",
1 and similar are treated as absent. allow_reflect is the one flag that
defaults to True and is only switched off by a literal false.
"""

from typing import Any, Optional

import structlog

from reflection_guidance.domain.models import DecodeIssue, ReflectionFlow
from reflection_guidance.normalization.raw import (
    as_int,
    as_mapping,
    is_true,
    kind_of,
    stringify,
)

log = structlog.get_logger(__name__)


def decode_flow(raw: Any) -> Optional[ReflectionFlow]:
    """
    Decode a flow block.

    Returns:
        ReflectionFlow, or None when raw is not a mapping
    """
    flow = as_mapping(raw)
    if flow is None:
        if raw is not None:
            log.debug(
                "guidance_decode_degraded",
                field="flow",
                issue=DecodeIssue.MALFORMED_INPUT.value,
                kind=kind_of(raw).value,
            )
        return None

    session_turn = as_int(flow.get("session_turn"))
    if session_turn is not None and session_turn < 0:
        session_turn = 0

    return ReflectionFlow(
        recommend_end=is_true(flow.get("recommend_end")) or is_true(flow.get("end")),
        suggest_break=is_true(flow.get("suggest_break")) or is_true(flow.get("break")),
        risk_notice=stringify(flow.get("risk_notice")),
        session_turn=session_turn,
        talk_only=is_true(flow.get("talk_only")),
        allow_reflect=flow.get("allow_reflect") is not False,
        mood_prompt=is_true(flow.get("mood_prompt")) or is_true(flow.get("moodPrompt")),
    )
