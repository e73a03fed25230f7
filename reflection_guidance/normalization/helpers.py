"""
Answer-helper harvesting.

Backends have shipped reply starters under many names over time, some of them
nested under "flow" or "ui". All aliases are read and merged (not first-wins)
so that no backend version loses its chips:

    1. collect string_list() of every alias, top-level first, then nested
    2. drop anything ending in '?' (those are questions, not reply starters)
    3. strip trailing colons and periods until the text is stable
    4. dedupe on the lower-cased text, first occurrence wins
    5. stop at the limit (3)
"""

import re
from typing import Any, List, Tuple

from reflection_guidance.domain.models import MAX_ANSWER_HELPERS
from reflection_guidance.normalization.raw import as_mapping
from reflection_guidance.normalization.text import string_list

HELPER_KEYS = (
    "answer_helpers",
    "answer_scaffolds",
    "answer_templates",
    "helpers",
    "chips",
    "answers",
)

NESTED_HELPER_KEYS = (
    ("flow", "answer_helpers"),
    ("flow", "helpers"),
    ("ui", "answer_helpers"),
    ("ui", "chips"),
)

_TRAILING_COLON = re.compile(r"\s*[:：]\s*$")
_TRAILING_PERIODS = re.compile(r"[.。]+$")


def normalize_helper(text: str) -> str:
    """
    Strip a trailing colon (ASCII or fullwidth) and trailing periods.

    Repeated until stable, so "Note:." and "Note." both end up as "Note" and
    an encoded helper decodes back to itself.
    """
    cleaned = text.strip()
    while True:
        stripped = _TRAILING_COLON.sub("", cleaned, count=1)
        stripped = _TRAILING_PERIODS.sub("", stripped.rstrip()).strip()
        if stripped == cleaned:
            return cleaned
        cleaned = stripped


def collect_helper_candidates(raw: Any) -> List[str]:
    """Raw candidates from every helper alias, in alias order."""
    mapping = as_mapping(raw)
    if mapping is None:
        return []

    candidates: List[str] = []
    for key in HELPER_KEYS:
        candidates.extend(string_list(mapping.get(key)))
    for parent, key in NESTED_HELPER_KEYS:
        nested = as_mapping(mapping.get(parent))
        if nested is not None:
            candidates.extend(string_list(nested.get(key)))
    return candidates


def extract_answer_helpers(raw: Any, limit: int = MAX_ANSWER_HELPERS) -> Tuple[str, ...]:
    """
    Harvest up to `limit` answer helpers from a raw turn payload.

    Args:
        raw: Turn payload (any shape; non-mappings yield no helpers)
        limit: Maximum helpers kept, capped at MAX_ANSWER_HELPERS

    Returns:
        Ordered tuple of normalized, unique, non-question helpers
    """
    limit = max(0, min(limit, MAX_ANSWER_HELPERS))
    helpers: List[str] = []
    seen = set()

    for candidate in collect_helper_candidates(raw):
        if len(helpers) >= limit:
            break
        if candidate.endswith("?"):
            continue
        text = normalize_helper(candidate)
        # "Why?." only reveals its question mark after normalization.
        if not text or text.endswith("?"):
            continue
        key = text.lower()
        if key in seen:
            continue
        seen.add(key)
        helpers.append(text)

    return tuple(helpers)
