"""
Shared test fixtures for the normalization layer.

Payload fixtures mirror the shapes the backend has shipped over time: the
current canonical shape, an older alias-heavy variant and a chat-completion
style body.
"""

import pytest

from reflection_guidance.core.config import (
    HelperConfig,
    NormalizerConfig,
    SessionDefaultsConfig,
)
from reflection_guidance.domain.models import (
    ReflectionFlow,
    ReflectionSession,
    ReflectionTurn,
    RiskFlag,
)


@pytest.fixture
def canonical_payload():
    """Payload in the current canonical shape."""
    return {
        "output_text": "What would feel like a small step today?",
        "mirror": "It sounds like the week has been heavy.",
        "context": ["Work deadlines", "Little sleep"],
        "followups": ["What helped last time?"],
        "answer_helpers": ["I feel", "I need", "One thing I could try"],
        "flow": {
            "recommend_end": False,
            "suggest_break": True,
            "session_turn": 2,
            "allow_reflect": True,
        },
        "session": {"id": "thread-42", "turn": 2, "max_turns": 3},
        "tags": ["stress", "sleep"],
        "risk_level": "none",
        "questions": ["What would feel like a small step today?"],
    }


@pytest.fixture
def legacy_payload():
    """Older backend shape: camelCase keys, string lists, nested helpers."""
    return {
        "outputText": "Thanks for sharing that.",
        "qs": "How did that feel?\nWhat did you need?",
        "chips": "Try this: • Name one feeling; • Name one need.",
        "ui": {"chips": ["I noticed...", "name one feeling"]},
        "session": {"threadId": "legacy-1", "turnIndex": 1, "maxTurns": 4},
        "risk": "support",
        "empathy": "That sounds exhausting.",
    }


@pytest.fixture
def chat_completion_payload():
    """Body forwarded straight from a chat-completion endpoint."""
    return {
        "choices": [
            {"message": {"role": "assistant", "content": "What is on your mind?"}}
        ]
    }


@pytest.fixture
def sample_session():
    """Session carried over from a previous turn."""
    return ReflectionSession(thread_id="thread-42", turn_index=1, max_turns=3)


@pytest.fixture
def full_turn():
    """Turn with every field populated."""
    return ReflectionTurn(
        output_text="How are you arriving today?",
        mirror="You sound tired.",
        context=("Long week",),
        followups=("What drained you most?",),
        answer_helpers=("I feel", "I need"),
        tags=("energy",),
        questions=("How are you arriving today?", "What do you need?"),
        talk=("Good to see you again.",),
        risk_flag=RiskFlag.SUPPORT,
        flow=ReflectionFlow(
            recommend_end=True,
            suggest_break=True,
            risk_notice="Consider reaching out to someone you trust.",
            session_turn=2,
            talk_only=True,
            allow_reflect=False,
            mood_prompt=True,
        ),
        session=ReflectionSession(thread_id="thread-7", turn_index=2, max_turns=5),
    )


@pytest.fixture
def narrow_config():
    """Normalizer config with a tighter helper limit and a larger turn budget."""
    return NormalizerConfig(
        session=SessionDefaultsConfig(default_max_turns=5),
        helpers=HelperConfig(limit=1),
    )
