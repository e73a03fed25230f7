"""
Text and string-list extraction shared by all decoders.

string_list() is the tolerant list rule used for every list-valued field:

    list   -> each non-null element stringified, trimmed, empties dropped
    string -> split on newlines, on a bullet marker followed by whitespace,
              or on a semicolon followed by whitespace; an unsplittable
              string is kept whole
    other  -> empty

A leading segment ending with a colon is treated as a list heading and dropped
only when a bullet marker follows it ("Try this: • ..."). Colon-terminated
sentence starters on separate lines are kept.
"""

import re
from typing import Any, Iterable, List, Mapping, Optional

from reflection_guidance.normalization.raw import RawKind, kind_of, stringify

# Bullets: U+2022, ASCII hyphen, U+2011, en dash, em dash
_SPLIT_PATTERN = re.compile(r"\n+|[•\-‑–—]\s+|;\s+")
_BULLET_START = re.compile(r"\s*[•\-‑–—]\s")
_HEADING_SUFFIXES = (":", "：")
_WHITESPACE = re.compile(r"\s+")


def _has_heading(text: str) -> bool:
    """True when the text before the first separator ends in a colon and a
    bullet marker comes next."""
    first = _SPLIT_PATTERN.search(text)
    if first is None:
        return False
    head = text[: first.start()].strip()
    return head.endswith(_HEADING_SUFFIXES) and bool(
        _BULLET_START.match(text, first.start())
    )


def split_text(text: str) -> List[str]:
    stripped = text.strip()
    if not stripped:
        return []
    parts = [p.strip() for p in _SPLIT_PATTERN.split(stripped)]
    parts = [p for p in parts if p]
    if not parts:
        return [stripped]
    if len(parts) > 1 and _has_heading(stripped):
        parts = parts[1:]
    return parts


def string_list(value: Any) -> List[str]:
    """Tolerant string-list extraction from one field value."""
    kind = kind_of(value)
    if kind is RawKind.LIST:
        items = []
        for element in value:
            text = stringify(element)
            if text is None:
                continue
            text = text.strip()
            if text:
                items.append(text)
        return items
    if kind is RawKind.STRING:
        return split_text(value)
    return []


def union_lists(mapping: Mapping, keys: Iterable[str]) -> List[str]:
    """Concatenate string_list() over every alias, in alias order."""
    merged: List[str] = []
    for key in keys:
        merged.extend(string_list(mapping.get(key)))
    return merged


def normalize_for_compare(text: str) -> str:
    """Lower-case, whitespace-collapsed comparison key."""
    return _WHITESPACE.sub(" ", text).strip().lower()


def dedupe(items: Iterable[str]) -> List[str]:
    """Drop case/whitespace-insensitive repeats, keeping first occurrences."""
    seen = set()
    out = []
    for item in items:
        key = normalize_for_compare(item)
        if not key or key in seen:
            continue
        seen.add(key)
        out.append(item.strip())
    return out


def trimmed_or_none(value: Any) -> Optional[str]:
    """Trimmed scalar text, or None for null, containers and blank strings."""
    if kind_of(value) in (RawKind.LIST, RawKind.MAPPING):
        return None
    text = stringify(value)
    if text is None:
        return None
    text = text.strip()
    return text or None


def first_text(mapping: Mapping, keys: Iterable[str]) -> Optional[str]:
    """First alias holding a non-empty trimmed text."""
    for key in keys:
        text = trimmed_or_none(mapping.get(key))
        if text:
            return text
    return None
