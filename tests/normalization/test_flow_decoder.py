"""Tests for flow block decoding."""

from reflection_guidance.domain.models import ReflectionFlow
from reflection_guidance.normalization.flow import decode_flow


class TestDecodeFlow:
    """Tests for decode_flow()."""

    def test_empty_block_uses_defaults(self):
        """An empty mapping decodes to the default flow."""
        assert decode_flow({}) == ReflectionFlow()

    def test_non_mapping_not_found(self):
        """Non-mappings report not found."""
        assert decode_flow(None) is None
        assert decode_flow([True]) is None
        assert decode_flow("end") is None

    def test_full_block(self):
        """Every canonical flag decodes."""
        flow = decode_flow(
            {
                "recommend_end": True,
                "suggest_break": True,
                "risk_notice": "Please reach out to someone.",
                "session_turn": 3,
                "talk_only": True,
                "allow_reflect": False,
                "mood_prompt": True,
            }
        )

        assert flow == ReflectionFlow(
            recommend_end=True,
            suggest_break=True,
            risk_notice="Please reach out to someone.",
            session_turn=3,
            talk_only=True,
            allow_reflect=False,
            mood_prompt=True,
        )

    def test_short_aliases(self):
        """'end', 'break' and 'moodPrompt' are accepted."""
        flow = decode_flow({"end": True, "break": True, "moodPrompt": True})

        assert flow.recommend_end
        assert flow.suggest_break
        assert flow.mood_prompt

    def test_only_literal_true_sets_flags(self):
        """Truthy strings and numbers are not true."""
        flow = decode_flow({"recommend_end": "true", "suggest_break": 1, "talk_only": "yes"})

        assert flow.recommend_end is False
        assert flow.suggest_break is False
        assert flow.talk_only is False

    def test_allow_reflect_only_disabled_by_literal_false(self):
        """allow_reflect stays on unless the payload sends false."""
        assert decode_flow({"allow_reflect": False}).allow_reflect is False
        assert decode_flow({"allow_reflect": "false"}).allow_reflect is True
        assert decode_flow({"allow_reflect": None}).allow_reflect is True
        assert decode_flow({"allow_reflect": 0}).allow_reflect is True

    def test_risk_notice_stringified(self):
        """Scalar risk notices become text."""
        assert decode_flow({"risk_notice": 5}).risk_notice == "5"
        assert decode_flow({"risk_notice": None}).risk_notice is None

    def test_session_turn(self):
        """session_turn accepts numbers only and clamps negatives."""
        assert decode_flow({"session_turn": 2.4}).session_turn == 2
        assert decode_flow({"session_turn": -1}).session_turn == 0
        assert decode_flow({"session_turn": "2"}).session_turn is None
