"""
Therapeutic school labels.

Backends tag turns with the therapy approaches a reply draws on, in free text
and in several languages ("kvt", "Cognitive Behavioral Therapy", "act", ...).
These are folded into a small set of canonical labels that end up in a
turn's tags; names outside that set are kept, shortened.
"""

import re
from typing import Iterable, List, Optional

SCHOOL_KEYS = ("schools", "therapeutic_schools", "approaches")

CBT = "CBT"
ACT = "ACT"
DBT = "DBT"
SCHEMA = "Schema Therapy"
SYSTEMIC = "Systemic"
PSYCHODYNAMIC = "Psychodynamic"
HUMANISTIC = "Humanistic"
SOLUTION_FOCUSED = "Solution-Focused"
MOTIVATIONAL = "Motivational Interviewing"
MINDFULNESS = "Mindfulness"

SCHOOL_ALIASES = {
    "cbt": CBT,
    "kvt": CBT,
    "cbt/kvt": CBT,
    "kognitive verhaltenstherapie": CBT,
    "cognitive behavioral therapy": CBT,
    "act": ACT,
    "acceptance and commitment therapy": ACT,
    "dbt": DBT,
    "dialektisch-behaviorale therapie": DBT,
    "dialectical behavior therapy": DBT,
    "schema": SCHEMA,
    "schematherapie": SCHEMA,
    "schema therapy": SCHEMA,
    "systemic": SYSTEMIC,
    "systemisch": SYSTEMIC,
    "systemic therapy": SYSTEMIC,
    "psychodynamic": PSYCHODYNAMIC,
    "psychodynamisch": PSYCHODYNAMIC,
    "tiefenpsychologisch": PSYCHODYNAMIC,
    "humanistic": HUMANISTIC,
    "humanistisch": HUMANISTIC,
    "client-centered": HUMANISTIC,
    "personzentriert": HUMANISTIC,
    "solution focused": SOLUTION_FOCUSED,
    "solution-focused": SOLUTION_FOCUSED,
    "lösungsfokussiert": SOLUTION_FOCUSED,
    "sfbt": SOLUTION_FOCUSED,
    "mi": MOTIVATIONAL,
    "motivational interviewing": MOTIVATIONAL,
    "mindfulness": MINDFULNESS,
    "achtsamkeit": MINDFULNESS,
    "mbct": MINDFULNESS,
}

# Pattern fallbacks, checked in order; first hit wins. DBT precedes CBT so
# "dialectical behaviour therapy" is not read as CBT.
_PATTERN_RULES = (
    (re.compile(r"dbt|dialekt|dialect"), DBT),
    (re.compile(r"kvt|cognitive|behavio"), CBT),
    (re.compile(r"\bact\b"), ACT),
    (re.compile(r"schema"), SCHEMA),
    (re.compile(r"system"), SYSTEMIC),
    (re.compile(r"dynam"), PSYCHODYNAMIC),
    (re.compile(r"human|client|person"), HUMANISTIC),
    (re.compile(r"solution|lösung"), SOLUTION_FOCUSED),
    (re.compile(r"motiv"), MOTIVATIONAL),
    (re.compile(r"mindful|achtsam|mbct"), MINDFULNESS),
)

# Unrecognized names are kept as tags, cut to this length.
MAX_UNKNOWN_LENGTH = 40


def school_label(name: str) -> Optional[str]:
    """Canonical label for one school name, or None when unrecognized."""
    key = name.strip().lower()
    if not key:
        return None
    if key in SCHOOL_ALIASES:
        return SCHOOL_ALIASES[key]
    for pattern, label in _PATTERN_RULES:
        if pattern.search(key):
            return label
    return None


def normalize_schools(names: Iterable[str]) -> List[str]:
    """
    Tags for a list of school names, deduped, first-seen order.

    Recognized names become their canonical label; other non-blank names are
    kept trimmed and cut to MAX_UNKNOWN_LENGTH characters.
    """
    labels: List[str] = []
    for name in names:
        label = school_label(name) or name.strip()[:MAX_UNKNOWN_LENGTH].strip()
        if label and label not in labels:
            labels.append(label)
    return labels
