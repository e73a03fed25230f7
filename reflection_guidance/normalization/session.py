"""
Session metadata decoding.

Each field walks its own alias table; the first alias holding a value of the
right type wins, independently of the other fields:

    thread_id   id -> thread_id -> threadId          (default "")
    turn_index  turn -> turn_index -> turnIndex      (default 0, numbers only)
    max_turns   max_turns -> maxTurns                (default 3, numbers only)
"""

from typing import Any, Optional

import structlog

from reflection_guidance.domain.models import DecodeIssue, ReflectionSession
from reflection_guidance.normalization.raw import (
    RawKind,
    as_mapping,
    first_int,
    kind_of,
    stringify,
)

log = structlog.get_logger(__name__)

THREAD_ID_KEYS = ("id", "thread_id", "threadId")
TURN_INDEX_KEYS = ("turn", "turn_index", "turnIndex")
MAX_TURNS_KEYS = ("max_turns", "maxTurns")


def decode_session(
    raw: Any, fallback: Optional[ReflectionSession] = None
) -> Optional[ReflectionSession]:
    """
    Decode a session block.

    Args:
        raw: Value found under "session" (any shape)
        fallback: Session whose values fill absent fields, e.g. the session
            of the previous turn. Defaults to ReflectionSession().

    Returns:
        ReflectionSession, or None when raw is not a mapping
    """
    mapping = as_mapping(raw)
    if mapping is None:
        if raw is not None:
            log.debug(
                "guidance_decode_degraded",
                field="session",
                issue=DecodeIssue.MALFORMED_INPUT.value,
                kind=kind_of(raw).value,
            )
        return None

    base = fallback or ReflectionSession()

    thread_id = base.thread_id
    for key in THREAD_ID_KEYS:
        value = mapping.get(key)
        if kind_of(value) in (RawKind.STRING, RawKind.NUMBER):
            thread_id = stringify(value)
            break

    turn_index = first_int(mapping, TURN_INDEX_KEYS)
    if turn_index is None:
        turn_index = base.turn_index
    elif turn_index < 0:
        log.debug(
            "guidance_decode_degraded",
            field="session.turn",
            issue=DecodeIssue.TYPE_MISMATCH.value,
            value=turn_index,
        )
        turn_index = 0

    max_turns = first_int(mapping, MAX_TURNS_KEYS)
    if max_turns is None:
        max_turns = base.max_turns

    return ReflectionSession(
        thread_id=thread_id, turn_index=turn_index, max_turns=max_turns
    )
