"""Ingestion boundary — normalizes caller-supplied data once, up front.

Answer sets from the survey form and score documents read back from
storage arrive in several historical shapes.  Everything downstream of this
module sees a single shape:

  - free-text reason lists are plain ``list[str]`` with the ``"N) "``
    choice prefix stripped
  - domain-keyed score maps use canonical domain ids (legacy misspellings
    resolved through the store's alias table)
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping

from survey_scoring.reference import ReferenceStore

logger = logging.getLogger(__name__)

# Composite keys holding multi-select free-text answers, e.g. "q12_reasons".
REASONS_KEY_RE = re.compile(r"^q\d+_reasons$")

# "1) 무엇을 해야 할지 몰라서" -> "무엇을 해야 할지 몰라서"
_CHOICE_PREFIX_RE = re.compile(r"^[0-9]+\)\s*")


def strip_choice_prefix(text: Any) -> str:
    return _CHOICE_PREFIX_RE.sub("", str(text))


def normalize_reasons(value: Any) -> list[str]:
    """Coerce a reason-list answer into ``list[str]``.

    Lists/tuples are used as-is, mappings contribute their values (the form
    once stored checkbox state as ``{index: text}``), a lone string becomes a
    one-item list, and None becomes an empty list.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        items = value
    elif isinstance(value, Mapping):
        items = list(value.values())
    else:
        items = [value]
    return [strip_choice_prefix(item) for item in items]


def normalize_answers(answers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of *answers* with reason lists normalized.

    Other values are passed through untouched; numeric coercion is the
    reverse scorer's job.
    """
    out: dict[str, Any] = {}
    for key, value in (answers or {}).items():
        if isinstance(key, str) and REASONS_KEY_RE.match(key):
            out[key] = normalize_reasons(value)
        else:
            out[key] = value
    return out


def normalize_scores_document(doc: Mapping[str, Any] | None, store: ReferenceStore) -> dict[str, Any] | None:
    """Normalize a stored score document into the current record shape.

    Handles:
      - ``tScores`` as the legacy name of ``stdScores``
      - legacy misspelled domain keys in stdScores/meanScores/riskGroups
      - answers nested under ``raw.answers``, ``rawAnswers`` or
        ``surveyAnswers``
    """
    if not doc:
        return None
    d = dict(doc)
    if not d.get("stdScores") and d.get("tScores"):
        logger.debug("Score document uses legacy tScores container")
    d["stdScores"] = store.canonicalize(d.get("stdScores") or d.get("tScores") or {})
    d["meanScores"] = store.canonicalize(d.get("meanScores") or {})
    d["riskGroups"] = store.canonicalize(d.get("riskGroups") or {})
    d.pop("tScores", None)

    raw = d.get("raw") if isinstance(d.get("raw"), Mapping) else {}
    answers = d.get("answers") or raw.get("answers") or d.get("rawAnswers") or d.get("surveyAnswers") or {}
    d["answers"] = normalize_answers(answers)
    return d
