#!/usr/bin/env python3
"""Replay a recorded match through the engine and print what it produces.

The input file is a single ``MatchRecord`` as JSON. The output is a JSON
document with the insights (or ``null`` when the match has too little point
detail), the experience award applied to a fresh or given profile state, and
the achievement counters the match alone would report.

Usage:
  python scripts/analyze_match.py match.json
  python scripts/analyze_match.py match.json --total-xp 1200 --today 2025-07-04
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import Any

sys.path.insert(0, str(Path(__file__).parent.parent))

from pydantic import ValidationError  # noqa: E402

from src.contracts.experience import ExperienceState  # noqa: E402
from src.contracts.match import MatchRecord  # noqa: E402
from src.core.achievements.evaluator import evaluate_counters  # noqa: E402
from src.core.insights.calculator import compute_insights  # noqa: E402
from src.core.leveling.engine import award_experience  # noqa: E402


def analyze(match: MatchRecord, *, total_experience: int = 0, today: date | None = None) -> dict[str, Any]:
    """Build the JSON-ready summary for one match."""
    insights = compute_insights(match)
    result = award_experience(match, ExperienceState.from_total(total_experience))
    counters = evaluate_counters([match], today=today or match.played_at.date())

    return {
        "match_id": match.match_id,
        "insights": insights.model_dump(mode="json") if insights else None,
        "experience": {
            "award": result.award.model_dump(mode="json"),
            "state": result.state.model_dump(mode="json"),
            "experience_into_level": result.state.experience_into_level,
            "experience_for_next_level": result.state.experience_for_next_level,
            "levels_gained": result.levels_gained,
        },
        "counters": {identifier.value: value for identifier, value in counters.items()},
    }


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Replay a match JSON file through the point engine")
    parser.add_argument("path", type=Path, help="Path to a MatchRecord JSON file")
    parser.add_argument("--total-xp", type=int, default=0, help="Starting total experience")
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Evaluation date for streak-style counters (YYYY-MM-DD, default: match day)",
    )
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (0 for compact)")
    args = parser.parse_args(argv)

    try:
        match = MatchRecord.model_validate_json(args.path.read_text("utf-8"))
    except FileNotFoundError:
        print(f"Match file not found: {args.path}", file=sys.stderr)
        return 2
    except ValidationError as exc:
        print(f"Invalid match record in {args.path}:\n{exc}", file=sys.stderr)
        return 1

    summary = analyze(match, total_experience=args.total_xp, today=args.today)
    print(json.dumps(summary, indent=args.indent or None, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    # Engine logs go to stderr so stdout stays a clean JSON document
    logging.basicConfig(level=logging.WARNING, format="%(message)s", stream=sys.stderr)
    sys.exit(main())
