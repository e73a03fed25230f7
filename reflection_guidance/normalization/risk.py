"""
Risk vocabulary classification.

Free-text risk tokens are folded into RiskFlag at the decode boundary; only
RiskFlag travels further. display_level() is the inverse used on the wire,
and classify_risk(display_level(flag)) == flag for every flag.
"""

from typing import Any, Mapping

from reflection_guidance.domain.models import RiskFlag
from reflection_guidance.normalization.raw import first_present, stringify

RISK_KEYS = ("risk_level", "risk_flag", "risk")

CRISIS_TOKENS = frozenset({"high", "crisis"})
SUPPORT_TOKENS = frozenset({"mild", "support"})


def classify_risk(token: Any) -> RiskFlag:
    """Map a raw risk token to RiskFlag. Unknown vocabulary means NONE."""
    text = (stringify(token) or "none").strip().lower()
    if text in CRISIS_TOKENS:
        return RiskFlag.CRISIS
    if text in SUPPORT_TOKENS:
        return RiskFlag.SUPPORT
    return RiskFlag.NONE


def display_level(flag: RiskFlag) -> str:
    """Inverse mapping: none -> "none", support -> "mild", crisis -> "high"."""
    return flag.level


def decode_risk(mapping: Mapping) -> RiskFlag:
    """
    Read the risk token of a turn payload.

    Legacy payloads send `"risk": true` instead of a level; that reads as
    SUPPORT.
    """
    found = first_present(mapping, RISK_KEYS)
    if found is None:
        return RiskFlag.NONE
    _, value = found
    if value is True:
        return RiskFlag.SUPPORT
    return classify_risk(value)
