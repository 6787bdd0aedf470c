#!/usr/bin/env python3
"""Score a survey answer set from a JSON file and print the result record.

The input file holds one answer set (``{"q1": 3, "q2": "4", ...}``) or a
stored survey document with answers under ``answers`` / ``raw.answers``.

Usage::

    # Patient-facing record
    python scripts/score_answers.py answers.json

    # Social-worker comment templates, with per-domain percentiles
    python scripts/score_answers.py answers.json --audience social_worker --percentiles

    # Rebuild from a stored document's meanScores instead of raw answers
    python scripts/score_answers.py survey_doc.json --from-means
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Ensure src/ is on sys.path so the script runs from a plain checkout.
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _SCRIPT_DIR.parent
sys.path.insert(0, str(_REPO_ROOT / "src"))

from survey_scoring.config import configure_logging, load_settings  # noqa: E402
from survey_scoring.engine import ScoringEngine  # noqa: E402
from survey_scoring.ingest import normalize_scores_document  # noqa: E402
from survey_scoring.reference import ReferenceStore  # noqa: E402
from survey_scoring.scoring import dashboard_risk_level  # noqa: E402

logger = logging.getLogger("score_answers")


def main() -> None:
    settings = load_settings()

    parser = argparse.ArgumentParser(
        description="Score a survey answer set and print the stored-record shape.",
    )
    parser.add_argument("path", type=Path, help="JSON file with answers or a stored survey document")
    parser.add_argument(
        "--audience",
        choices=["patient", "social_worker"],
        default=settings.comment_audience,
        help="Overall comment voice (default: SCORING_COMMENT_AUDIENCE or patient)",
    )
    parser.add_argument(
        "--from-means",
        action="store_true",
        help="Rescore from the document's meanScores instead of raw answers",
    )
    parser.add_argument(
        "--percentiles",
        action="store_true",
        help="Include per-domain percentiles and the dashboard badge level",
    )
    args = parser.parse_args()

    configure_logging(settings)

    try:
        doc = json.loads(args.path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        print(f"Error: cannot read {args.path}: {exc}")
        sys.exit(1)

    store = ReferenceStore(settings.reference_dir)
    store.load()
    engine = ScoringEngine(store, audience=args.audience)

    stored = normalize_scores_document(doc, store) if isinstance(doc, dict) else None
    if args.from_means:
        if not stored or not stored["meanScores"]:
            print("Error: --from-means needs a document with meanScores")
            sys.exit(1)
        result = engine.rescore_from_means(stored["meanScores"], stored["answers"])
    else:
        answers = stored["answers"] if stored and stored["answers"] else doc
        result = engine.score(answers)

    record = result.to_record()
    if args.percentiles:
        record["percentiles"] = result.percentiles()
        level = dashboard_risk_level(record["stdScores"])
        record["dashboardRiskLevel"] = level.value if level is not None else None

    logger.info("Scored %s", args.path.name)
    print(json.dumps(record, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
