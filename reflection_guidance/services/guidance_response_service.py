"""
Guidance response service.

Entry point the app uses to turn raw backend guidance payloads into records
and records back into the canonical JSON shape.

Pipeline:
1. Decode the raw payload tolerantly (never raises)
2. Carry the caller's session forward for fields the payload leaves out
3. Encode to the canonical shape for UI, storage and telemetry

Graceful degradation: payloads with nothing usable decode to the all-defaults
turn whose output text is the fallback hint.
"""

from typing import Any, Dict, Optional

import structlog

from reflection_guidance.core.config import NormalizerConfig, load_normalizer_config
from reflection_guidance.domain.models import (
    AnalyzeResult,
    ReflectionSession,
    ReflectionTurn,
    StructuredThoughtResult,
)
from reflection_guidance.normalization import (
    analysis_from_reflect_payload,
    decode_analyze_result,
    decode_structured_thought,
    decode_turn,
    default_turn,
    encode_turn,
)

log = structlog.get_logger(__name__)


class GuidanceResponseService:
    """
    Service for normalizing guidance responses.

    Holds the normalizer configuration (helper limit, session defaults) so
    callers do not have to thread it through every decode call.
    """

    def __init__(self, config: Optional[NormalizerConfig] = None):
        """
        Initialize guidance response service.

        Args:
            config: Normalizer configuration (loads config/normalizer_config.yaml
                if None)
        """
        self.config = config or load_normalizer_config()
        self.default_session = ReflectionSession(
            max_turns=self.config.session.default_max_turns
        )

        log.info(
            "guidance_response_service_initialized",
            helper_limit=self.config.helpers.limit,
            default_max_turns=self.config.session.default_max_turns,
        )

    def new_session(self, thread_id: str = "") -> ReflectionSession:
        """Fresh session with the configured turn budget."""
        return self.default_session.with_updates(thread_id=thread_id)

    def decode_turn(
        self, raw: Any, session: Optional[ReflectionSession] = None
    ) -> ReflectionTurn:
        """
        Decode a raw guidance payload into a ReflectionTurn.

        Args:
            raw: Parsed JSON payload (any shape)
            session: Current session; fills session fields the payload omits

        Returns:
            ReflectionTurn (all-defaults turn when nothing usable decodes)
        """
        session = session or self.default_session
        turn = decode_turn(raw, session=session, helper_limit=self.config.helpers.limit)

        if turn is None:
            log.warning(
                "guidance_payload_unusable",
                payload_type=type(raw).__name__,
                thread_id=session.thread_id,
            )
            return default_turn(session)

        if turn.is_fallback:
            log.info("guidance_turn_fallback", thread_id=turn.session.thread_id)
        if turn.is_risk:
            log.info(
                "guidance_turn_risk",
                thread_id=turn.session.thread_id,
                risk_level=turn.risk_level,
            )
        return turn

    def encode_turn(self, turn: ReflectionTurn) -> Dict[str, Any]:
        """Canonical JSON for a turn."""
        return encode_turn(turn)

    def normalize_turn(
        self, raw: Any, session: Optional[ReflectionSession] = None
    ) -> Dict[str, Any]:
        """Decode then re-encode: any tolerated payload -> canonical shape."""
        return encode_turn(self.decode_turn(raw, session=session))

    def decode_analyze(self, raw: Any) -> AnalyzeResult:
        """Decode an analyze response ({analysis, challenge?})."""
        return decode_analyze_result(raw)

    def analyze_from_reflect(self, raw: Any) -> AnalyzeResult:
        """
        Build an AnalyzeResult from a full reflect payload.

        Used when the analyze call is served by the reflect endpoint, which
        answers with a turn rather than an analysis block.
        """
        analysis = analysis_from_reflect_payload(raw)
        return AnalyzeResult(analysis=analysis)

    def decode_structured_thought(self, raw: Any) -> StructuredThoughtResult:
        return decode_structured_thought(raw)


def get_guidance_response_service(
    config: Optional[NormalizerConfig] = None,
) -> GuidanceResponseService:
    """Create a guidance response service."""
    return GuidanceResponseService(config=config)
