"""Scoring functions — pure transforms from answers to tiers.

Pipeline stages, in call order:

  1. apply_reverse_scores  — coerce Likert values, invert reverse-coded items
  2. aggregate_domain      — sum/mean over the domain's present items
  3. standardize           — mean → round(z * 16.67 + 50)
  4. classify_risk         — mean → High / Caution / Low by reference cutoff
  5. summarize_overall     — present domain means → overall mean, tier, comment

None means "unscored" at every stage and is propagated, never replaced by
zero or a default tier.

``dashboard_risk_level`` and ``likert_to_yes_no`` are display helpers kept
here so callers do not re-derive them ad hoc.
"""

from __future__ import annotations

import logging
import math
import re
from typing import Any, Iterable, Mapping

from survey_scoring.constants import (
    DASHBOARD_HIGH_BELOW,
    DASHBOARD_MEDIUM_BELOW,
    LIKERT_MAX,
    LIKERT_MIN,
    T_CENTER,
    T_SCALE,
)
from survey_scoring.models.enums import DashboardRiskLevel, RiskTier
from survey_scoring.models.reference import CommentTemplates, DomainDefinition, ReferenceStats
from survey_scoring.models.result import DomainScore, OverallSummary
from survey_scoring.percentile import round_half_away

logger = logging.getLogger(__name__)

# Instrument item keys: "q1", "q13_1_3", ...
ITEM_KEY_RE = re.compile(r"^q\d+")
# Bare items carry a reverse-coding index: "q18" -> 18
_ITEM_INDEX_RE = re.compile(r"^q(\d+)$")


def coerce_number(value: Any) -> float | None:
    """Coerce a raw answer to a finite float, or None if it is unanswered.

    Absent, blank, non-numeric, boolean, non-finite and out-of-float-range
    values are all unanswered.  No range check is applied.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            n = float(value)
        except OverflowError:
            return None
        return n if math.isfinite(n) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            n = float(text)
        except ValueError:
            return None
        return n if math.isfinite(n) else None
    return None


def reverse_score(value: float, max_value: int = LIKERT_MAX, min_value: int = LIKERT_MIN) -> float:
    """Invert a Likert value: ``max + min - value``.  Not clamped."""
    return max_value + min_value - value


def item_index(key: str) -> int | None:
    """Numeric suffix of a bare item key ("q18" -> 18); None for composite keys."""
    match = _ITEM_INDEX_RE.match(key)
    return int(match.group(1)) if match else None


def apply_reverse_scores(answers: Mapping[str, Any], reverse_coded: Iterable[int]) -> dict[str, float | None]:
    """Coerce every instrument item and invert the reverse-coded ones.

    Only string keys matching ``q<digits>...`` are considered.  Free-text list
    answers are exempt and left out of the result.  Items that fail
    coercion map to None rather than being dropped.
    """
    reverse_set = frozenset(reverse_coded)
    result: dict[str, float | None] = {}
    for key, raw in answers.items():
        if not isinstance(key, str) or not ITEM_KEY_RE.match(key):
            continue
        if isinstance(raw, (list, tuple, Mapping)):
            continue
        n = coerce_number(raw)
        if n is None:
            result[key] = None
            continue
        result[key] = reverse_score(n) if item_index(key) in reverse_set else n
    return result


def aggregate_domain(domain: DomainDefinition, scored: Mapping[str, float | None]) -> DomainScore:
    """Sum and average the present (non-None) items of one domain.

    The returned DomainScore carries only the aggregate; standardization
    and classification are filled in by the caller.
    """
    values = [scored[k] for k in domain.items if scored.get(k) is not None]
    raw_sum = float(sum(values))
    return DomainScore(
        domain_id=domain.id,
        raw_sum=raw_sum,
        present_count=len(values),
        mean=raw_sum / len(values) if values else None,
    )


def standardize(mean: float | None, stats: ReferenceStats) -> int | None:
    """Standardized (T-like) score, or None when the mean is unscored."""
    if mean is None:
        return None
    z = (mean - stats.mean) / stats.sd
    return round_half_away(z * T_SCALE + T_CENTER)


def classify_risk(mean: float | None, stats: ReferenceStats) -> RiskTier | None:
    """Bucket a mean against ``stats``; thresholds are inclusive at the cutoff.

    Returns None for an unscored mean; no tier is assumed.
    """
    if mean is None:
        return None
    if mean <= stats.cutoff:
        return RiskTier.HIGH
    if mean <= stats.mean:
        return RiskTier.CAUTION
    return RiskTier.LOW


def summarize_overall(
    domain_means: Iterable[float | None],
    overall_stats: ReferenceStats,
    comments: CommentTemplates,
    audience: str = "patient",
) -> OverallSummary:
    """Average the present domain means and classify the result.

    The overall tier uses the dedicated overall reference entry, not the
    per-domain statistics.  With no present means, the summary carries the
    fixed no-data comment and no tier.
    """
    present = [m for m in domain_means if m is not None]
    if not present:
        return OverallSummary(mean=None, risk_tier=None, comment=comments.no_data)

    mean = sum(present) / len(present)
    tier = classify_risk(mean, overall_stats)
    logger.debug("Overall mean %.4f over %d domains -> %s", mean, len(present), tier.name)
    return OverallSummary(mean=mean, risk_tier=tier, comment=comments.for_tier(tier, audience))


def dashboard_risk_level(std_scores: Mapping[str, Any]) -> DashboardRiskLevel | None:
    """Badge level from the average of the numeric standardized scores.

    ``< 40`` → high, ``< 50`` → medium, otherwise low; None with no scores.
    This is independent of (and may disagree with) the overall risk tier.
    """
    values = [
        v for v in std_scores.values()
        if isinstance(v, (int, float)) and not isinstance(v, bool) and math.isfinite(v)
    ]
    if not values:
        return None
    avg = sum(values) / len(values)
    if avg < DASHBOARD_HIGH_BELOW:
        return DashboardRiskLevel.HIGH
    if avg < DASHBOARD_MEDIUM_BELOW:
        return DashboardRiskLevel.MEDIUM
    return DashboardRiskLevel.LOW


def likert_to_yes_no(value: Any) -> str | None:
    """Collapse a Likert answer to 예 (3 and above) / 아니오 (1–2)."""
    n = coerce_number(value)
    if n is None:
        return None
    return "예" if n >= 3 else "아니오"
