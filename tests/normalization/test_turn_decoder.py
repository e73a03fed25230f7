"""Tests for turn decoding."""

import pytest

from reflection_guidance.domain.models import (
    FALLBACK_HINT,
    ReflectionFlow,
    ReflectionSession,
    ReflectionTurn,
    RiskFlag,
)
from reflection_guidance.normalization.turn import (
    content_from_choices,
    decode_turn,
    decode_turn_or_default,
    default_turn,
    extract_output_text,
    extract_questions,
)


class TestDecodeTurn:
    """Tests for decode_turn() on well-formed payloads."""

    def test_canonical_payload(self, canonical_payload):
        """A canonical payload decodes every field."""
        turn = decode_turn(canonical_payload)

        assert turn.output_text == "What would feel like a small step today?"
        assert turn.mirror == "It sounds like the week has been heavy."
        assert turn.context == ("Work deadlines", "Little sleep")
        assert turn.followups == ("What helped last time?",)
        assert turn.answer_helpers == ("I feel", "I need", "One thing I could try")
        assert turn.tags == ("stress", "sleep")
        assert turn.risk_flag is RiskFlag.NONE
        assert turn.flow == ReflectionFlow(suggest_break=True, session_turn=2)
        assert turn.session == ReflectionSession(
            thread_id="thread-42", turn_index=2, max_turns=3
        )
        assert turn.primary_question == "What would feel like a small step today?"
        assert not turn.is_fallback

    def test_legacy_payload(self, legacy_payload):
        """An alias-heavy legacy payload decodes to the same record shape."""
        turn = decode_turn(legacy_payload)

        assert turn.output_text == "Thanks for sharing that."
        assert turn.questions == ("How did that feel?", "What did you need?")
        assert turn.primary_question == "How did that feel?"
        assert turn.answer_helpers == ("Name one feeling", "Name one need", "I noticed")
        assert turn.mirror == "That sounds exhausting."
        assert turn.risk_flag is RiskFlag.SUPPORT
        assert turn.session == ReflectionSession(
            thread_id="legacy-1", turn_index=1, max_turns=4
        )
        assert turn.flow is None

    def test_chat_completion_payload(self, chat_completion_payload):
        """Chat-completion bodies use the first choice's content."""
        turn = decode_turn(chat_completion_payload)

        assert turn.output_text == "What is on your mind?"
        assert turn.primary_question == "What is on your mind?"


class TestOutputText:
    """Tests for output text alias precedence."""

    def test_output_text_before_question(self):
        """outputText wins over question."""
        assert extract_output_text({"question": "Q?", "outputText": "O"}) == "O"

    def test_blank_output_text_falls_through(self):
        """A blank output_text does not win."""
        assert extract_output_text({"output_text": "  ", "question": "How?"}) == "How?"

    def test_legacy_primary_keys(self):
        """primary, lead and lead_question are read after the current keys."""
        assert extract_output_text({"lead": "L", "content": "C"}) == "L"
        assert extract_output_text({"lead_question": "LQ?"}) == "LQ?"

    def test_body_keys_last(self):
        """content and raw are the last resort."""
        assert extract_output_text({"content": "body"}) == "body"
        assert extract_output_text({"raw": "raw text"}) == "raw text"

    def test_nothing_usable(self):
        """No candidate yields None and the turn falls back."""
        assert extract_output_text({"output_text": ["x"]}) is None
        assert decode_turn({"output_text": ""}).output_text == FALLBACK_HINT


class TestContentFromChoices:
    """Tests for content_from_choices()."""

    def test_message_content(self):
        """message.content is preferred."""
        choices = [{"message": {"content": " Hi "}, "text": "ignored"}]

        assert content_from_choices(choices) == "Hi"

    def test_text_choice(self):
        """Completion-style text choices are read."""
        assert content_from_choices([{"text": "Hello"}]) == "Hello"

    @pytest.mark.parametrize("value", [None, [], "choices", [1], [{"message": "x"}]])
    def test_malformed(self, value):
        """Malformed choices yield None."""
        assert content_from_choices(value) is None


class TestQuestionsAndTextFields:
    """Tests for questions, mirror, tags and talk."""

    def test_question_union_deduped(self):
        """All question aliases merge; repeats appear once."""
        raw = {
            "questions": ["What helps?"],
            "qs": "What hurts?",
            "multi_questions": ["what helps?"],
            "alt": "Anything else?",
        }

        assert extract_questions(raw) == ["What helps?", "What hurts?", "Anything else?"]

    def test_questions_keep_statements(self):
        """Questions are not filtered by question mark."""
        turn = decode_turn({"questions": ["feeling ok"]})

        assert turn.questions == ("feeling ok",)
        assert turn.primary_question == "feeling ok?"

    def test_colon_lead_question_kept(self):
        """A colon-terminated first line is a question entry, not a heading."""
        turn = decode_turn({"questions": "Think about it:\nWhat happened?"})

        assert turn.questions == ("Think about it:", "What happened?")

    def test_colon_starter_helpers_kept(self):
        """Newline-separated colon starters all become helpers."""
        turn = decode_turn({"answer_helpers": "I feel:\nI need:"})

        assert turn.answer_helpers == ("I feel", "I need")

    def test_secondary_question(self):
        """secondary_question contributes to questions."""
        turn = decode_turn({"questions": "First?", "secondary_question": "Second?"})

        assert turn.questions == ("First?", "Second?")

    def test_mirror_trimmed_or_none(self):
        """Blank mirrors are None; empathy is a fallback alias."""
        assert decode_turn({"mirror": "  "}).mirror is None
        assert decode_turn({"mirror": " ok "}).mirror == "ok"
        assert decode_turn({"empathy": "I hear you"}).mirror == "I hear you"

    def test_tags_include_schools(self):
        """Therapeutic schools are folded into tags; unknown names kept."""
        raw = {"tags": ["sleep", "CBT"], "schools": ["kvt", "Achtsamkeit", "unknown"]}

        assert decode_turn(raw).tags == ("sleep", "CBT", "Mindfulness", "unknown")

    def test_smalltalk_reply_appended(self):
        """smalltalk_reply joins talk unless already present."""
        assert decode_turn({"smalltalk_reply": "Nice to see you"}).talk == (
            "Nice to see you",
        )
        assert decode_turn({"talk": ["Hi"], "smalltalk_reply": "hi"}).talk == ("Hi",)


class TestSessionCarryOver:
    """Tests for session handling across turns."""

    def test_session_carried_when_absent(self, sample_session):
        """A payload without session keeps the caller's session."""
        turn = decode_turn({"output_text": "Hello"}, session=sample_session)

        assert turn.session == sample_session

    def test_partial_session_merged(self, sample_session):
        """Present session fields override, absent ones carry over."""
        turn = decode_turn({"session": {"turn": 2}}, session=sample_session)

        assert turn.session == ReflectionSession(
            thread_id="thread-42", turn_index=2, max_turns=3
        )

    def test_malformed_session_uses_caller_session(self, sample_session):
        """A non-mapping session block is ignored."""
        turn = decode_turn({"session": "thread-9"}, session=sample_session)

        assert turn.session == sample_session


class TestDegradation:
    """Tests for the never-raises contract."""

    @pytest.mark.parametrize("raw", [None, 42, 3.5, "text", True, [1, 2], ["a"]])
    def test_non_mapping_not_found(self, raw):
        """Non-mappings report not found."""
        assert decode_turn(raw) is None

    @pytest.mark.parametrize("raw", [None, 42, "text", [{"output_text": "x"}]])
    def test_non_mapping_defaults(self, raw):
        """decode_turn_or_default() substitutes the all-defaults turn."""
        turn = decode_turn_or_default(raw)

        assert turn == default_turn()
        assert turn.output_text == FALLBACK_HINT
        assert turn.is_fallback

    def test_wrong_typed_fields_degrade(self):
        """Every wrongly typed field falls back independently."""
        raw = {
            "output_text": {"text": "nested"},
            "mirror": ["x"],
            "questions": 5,
            "context": {"a": 1},
            "answer_helpers": {"a": "b"},
            "flow": [True],
            "session": 7,
            "risk_level": ["high"],
            "tags": None,
            "talk": 1.5,
            "followups": "Next step",
        }

        turn = decode_turn(raw)

        assert turn == ReflectionTurn(followups=("Next step",))

    def test_decoded_turn_does_not_alias_payload(self, canonical_payload):
        """Mutating the payload afterwards leaves the turn unchanged."""
        turn = decode_turn(canonical_payload)
        canonical_payload["context"].append("Changed")
        canonical_payload["session"]["turn"] = 9

        assert turn.context == ("Work deadlines", "Little sleep")
        assert turn.session.turn_index == 2

    def test_helper_limit_passed_through(self):
        """A lower helper limit is honored."""
        turn = decode_turn({"answer_helpers": ["a", "b", "c"]}, helper_limit=2)

        assert turn.answer_helpers == ("a", "b")


class TestDefaultTurn:
    """Tests for default_turn()."""

    def test_uses_given_session(self, sample_session):
        """The default turn keeps the supplied session."""
        assert default_turn(sample_session).session == sample_session

    def test_all_defaults(self):
        """Without a session everything is default."""
        assert default_turn() == ReflectionTurn()
