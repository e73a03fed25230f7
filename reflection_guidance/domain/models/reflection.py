"""Reflection turn domain models for the guidance conversation.

This module defines the immutable records the UI consumes after a backend
guidance response has been normalized.

Core Models:
    - ReflectionTurn: One normalized backend answer within a session
    - ReflectionFlow: Session-control flags (end, break, mood prompt, ...)
    - ReflectionSession: Thread identifier and turn budget
    - RiskFlag: Closed severity enumeration (none/support/crisis)

Key Concepts:
    - Fallback hint: a fixed placeholder sentence used whenever nothing usable
      could be decoded. Detect it with is_fallback_hint(), never by comparing
      strings at call sites.
    - Answer helpers: short sentence starters shown as tappable chips; never
      questions, at most three per turn.
    - Immutability: every record is frozen and stores sequences as tuples, so
      a decoded turn shares no mutable state with the raw payload.
"""

from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

FALLBACK_HINT = (
    "ZenYourself could not find the little flowers right now. "
    "Please check your connection."
)

MAX_ANSWER_HELPERS = 3


def is_fallback_hint(text: Optional[str]) -> bool:
    """True when text is the fixed placeholder substituted for missing output."""
    return (text or "").strip() == FALLBACK_HINT


class RiskFlag(str, Enum):
    """Backend-signaled severity for the current turn.

    Values:
        - NONE: No risk signal
        - SUPPORT: Show a supportive hint (display level "mild")
        - CRISIS: Show crisis resources (display level "high")
    """

    NONE = "none"
    SUPPORT = "support"
    CRISIS = "crisis"

    @property
    def level(self) -> str:
        """Display level used on the wire (risk_level)."""
        return _DISPLAY_LEVELS[self]


_DISPLAY_LEVELS = {
    RiskFlag.NONE: "none",
    RiskFlag.SUPPORT: "mild",
    RiskFlag.CRISIS: "high",
}


class DecodeIssue(str, Enum):
    """Why a field fell back to its default during decoding.

    None of these is ever raised; decoders log them and substitute defaults.
    """

    MALFORMED_INPUT = "malformed_input"  # not a mapping where one was expected
    MISSING_FIELD = "missing_field"  # key absent
    TYPE_MISMATCH = "type_mismatch"  # key present, value of the wrong type


class ReflectionSession(BaseModel):
    """Thread identifier and turn budget of a reflection session.

    An empty thread_id means the backend has not opened a session yet.
    """

    model_config = ConfigDict(frozen=True)

    thread_id: str = ""
    turn_index: int = Field(default=0, ge=0)
    max_turns: int = 3

    def with_updates(self, **changes) -> "ReflectionSession":
        """Return a copy with the given fields replaced."""
        return self.model_copy(update=changes)


class ReflectionFlow(BaseModel):
    """Session-control flags sent alongside a turn."""

    model_config = ConfigDict(frozen=True)

    recommend_end: bool = False
    suggest_break: bool = False
    risk_notice: Optional[str] = None
    session_turn: Optional[int] = Field(default=None, ge=0)
    talk_only: bool = False
    allow_reflect: bool = True
    mood_prompt: bool = False


class ReflectionTurn(BaseModel):
    """One normalized guidance answer.

    Fields:
        - output_text: Main text shown to the user; FALLBACK_HINT when the
          payload carried nothing usable
        - mirror: Short empathic restatement, if any
        - questions: Posed questions, in backend order
        - answer_helpers: Up to three reply starters (never questions)
        - risk_flag: Closed severity enum
        - flow: Session-control flags, None when the backend sent none
        - session: Always present; defaults describe "no session yet"

    Derived:
        - primary_question: lead question for the UI, always ending with '?'
        - risk_level: wire display level for risk_flag
    """

    model_config = ConfigDict(frozen=True)

    output_text: str = FALLBACK_HINT
    mirror: Optional[str] = None
    context: Tuple[str, ...] = ()
    followups: Tuple[str, ...] = ()
    answer_helpers: Tuple[str, ...] = Field(default=(), max_length=MAX_ANSWER_HELPERS)
    tags: Tuple[str, ...] = ()
    questions: Tuple[str, ...] = ()
    talk: Tuple[str, ...] = ()
    risk_flag: RiskFlag = RiskFlag.NONE
    flow: Optional[ReflectionFlow] = None
    session: ReflectionSession = Field(default_factory=ReflectionSession)

    @property
    def primary_question(self) -> Optional[str]:
        if self.questions:
            first = self.questions[0].strip()
            if first:
                return first if first.endswith("?") else f"{first}?"
        text = self.output_text.strip()
        if text and text.endswith("?") and not is_fallback_hint(text):
            return text
        return None

    @property
    def risk_level(self) -> str:
        return self.risk_flag.level

    @property
    def is_risk(self) -> bool:
        return self.risk_flag in (RiskFlag.SUPPORT, RiskFlag.CRISIS)

    @property
    def is_fallback(self) -> bool:
        return is_fallback_hint(self.output_text)
