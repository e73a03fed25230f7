#!/usr/bin/env python3
"""
Normalize a raw backend guidance payload into its canonical JSON shape.

Handy for checking how a captured (possibly legacy) backend response will be
read by the app.

Usage:
    python scripts/normalize_payload.py payload.json
    cat payload.json | python scripts/normalize_payload.py --kind analyze

Options:
    --kind K        Record kind (default: turn)
    --config PATH   normalizer_config.yaml to use
    --log-dir DIR   Write a session log to DIR (logs go to stderr either way)
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from reflection_guidance.core.config import load_normalizer_config
from reflection_guidance.core.exceptions import ConfigurationError
from reflection_guidance.core.logging import configure_logging, configure_stderr_logging
from reflection_guidance.normalization import (
    decode_journey_entry,
    decode_journey_insights,
    decode_mood_response,
    decode_story_result,
    encode_analyze_result,
    encode_journey_entry,
    encode_journey_insights,
    encode_mood_response,
    encode_story_result,
    encode_structured_thought,
)
from reflection_guidance.services import GuidanceResponseService

KINDS = (
    "turn",
    "analyze",
    "analyze-from-reflect",
    "structured-thought",
    "journey-entry",
    "journey-insights",
    "mood",
    "story",
)


def normalize(raw, kind: str, service: GuidanceResponseService) -> dict:
    """Decode raw as the given record kind and return its canonical JSON."""
    if kind == "turn":
        return service.normalize_turn(raw)
    if kind == "analyze":
        return encode_analyze_result(service.decode_analyze(raw))
    if kind == "analyze-from-reflect":
        return encode_analyze_result(service.analyze_from_reflect(raw))
    if kind == "structured-thought":
        return encode_structured_thought(service.decode_structured_thought(raw))
    if kind == "journey-entry":
        return encode_journey_entry(decode_journey_entry(raw))
    if kind == "journey-insights":
        return encode_journey_insights(decode_journey_insights(raw))
    if kind == "mood":
        return encode_mood_response(decode_mood_response(raw))
    return encode_story_result(decode_story_result(raw))


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Normalize a backend guidance payload to canonical JSON"
    )
    parser.add_argument(
        "payload",
        nargs="?",
        type=Path,
        help="JSON file to read (default: stdin)",
    )
    parser.add_argument(
        "--kind",
        choices=KINDS,
        default="turn",
        help="Record kind to decode (default: turn)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to normalizer_config.yaml",
    )
    parser.add_argument(
        "--log-dir",
        type=Path,
        help="Write a session log file to this directory",
    )

    args = parser.parse_args()

    # stdout carries the JSON result; logs must stay on stderr
    if args.log_dir:
        configure_logging(log_dir=args.log_dir)
    else:
        configure_stderr_logging()

    try:
        config = load_normalizer_config(args.config)
    except ConfigurationError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 2

    try:
        if args.payload:
            raw = json.loads(args.payload.read_text(encoding="utf-8"))
        else:
            raw = json.load(sys.stdin)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Error: could not read payload: {e}", file=sys.stderr)
        return 1

    service = GuidanceResponseService(config=config)
    result = normalize(raw, args.kind, service)

    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
