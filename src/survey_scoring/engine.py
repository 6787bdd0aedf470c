"""ScoringEngine — the orchestrator for one survey scoring invocation.

Stateless engine pattern: the engine holds only read-only reference data
(loaded once by a :class:`ReferenceStore`) and compiled feedback rules.
Each call builds a fresh :class:`ScoringResult`; nothing is kept between
calls, so one engine can serve concurrent callers.

Flow of :meth:`ScoringEngine.score`::

    answers ─ normalize ─ reverse-code ─┬─ aggregate per domain
                                        │    ├─ standardize
                                        │    └─ classify
                                        ├─ summarize overall
                                        └─ feedback rules (raw answers + means + tiers)
"""

from __future__ import annotations

import logging
from typing import Any, Mapping

from survey_scoring.constants import AUDIENCES, LIKERT_MIN
from survey_scoring.evaluator import FeedbackRuleEngine
from survey_scoring.ingest import normalize_answers
from survey_scoring.models.result import DomainScore, ScoringResult
from survey_scoring.reference import ReferenceStore
from survey_scoring.scoring import (
    aggregate_domain,
    apply_reverse_scores,
    classify_risk,
    coerce_number,
    standardize,
    summarize_overall,
)

logger = logging.getLogger(__name__)


class ScoringEngine:
    """Scores answer sets against a loaded ReferenceStore."""

    def __init__(self, store: ReferenceStore, *, audience: str = "patient") -> None:
        if audience not in AUDIENCES:
            raise ValueError(f"audience must be one of {sorted(AUDIENCES)}, got {audience!r}")
        self._store = store
        self._audience = audience
        self._feedback = FeedbackRuleEngine.from_specs(store.feedback_rules)

    @property
    def feedback(self) -> FeedbackRuleEngine:
        return self._feedback

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def score(self, answers: Mapping[str, Any] | None) -> ScoringResult:
        """Score one respondent's answers.

        Never raises for missing or malformed answers: unanswered items are
        excluded, empty domains are carried as unscored, and an empty
        instrument yields the no-data overall comment.

        Args:
            answers: item key → raw value.  Unknown keys are ignored.

        Returns:
            ScoringResult with all six domains, overall summary and feedback.
        """
        normalized = normalize_answers(answers)
        scored_items = apply_reverse_scores(normalized, self._store.reverse_coded)

        domains: dict[str, DomainScore] = {}
        for domain in self._store.domains:
            agg = aggregate_domain(domain, scored_items)
            domains[domain.id] = agg.model_copy(update={
                "standardized": standardize(agg.mean, domain),
                "risk_tier": classify_risk(agg.mean, domain),
            })

        result = self._finish(domains, normalized)
        logger.debug(
            "Scored %d answers: %d/%d domains scored, overall=%s, %d feedback items",
            len(normalized),
            sum(1 for d in domains.values() if d.is_scored),
            len(domains),
            result.overall.risk_tier.name if result.overall.risk_tier else None,
            len(result.feedback),
        )
        return result

    def rescore_from_means(
        self,
        domain_means: Mapping[str, Any] | None,
        answers: Mapping[str, Any] | None = None,
    ) -> ScoringResult:
        """Rebuild scores from stored domain means (e.g. after a reference update).

        Legacy domain keys are resolved once here.  A mean that is not a
        number, or is below the Likert minimum (older records stored
        unscored domains as 0), is treated as unscored.  Raw sums and
        present counts are not recoverable from means and are left at zero.
        """
        means = self._store.canonicalize(domain_means)

        domains: dict[str, DomainScore] = {}
        for domain in self._store.domains:
            mean = coerce_number(means.get(domain.id))
            if mean is not None and mean < LIKERT_MIN:
                mean = None
            domains[domain.id] = DomainScore(
                domain_id=domain.id,
                mean=mean,
                standardized=standardize(mean, domain),
                risk_tier=classify_risk(mean, domain),
            )

        return self._finish(domains, normalize_answers(answers))

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _finish(self, domains: dict[str, DomainScore], answers: Mapping[str, Any]) -> ScoringResult:
        """Overall summary and feedback, shared by both scoring entry points."""
        means = {k: d.mean for k, d in domains.items()}
        risks = {k: d.risk_tier for k, d in domains.items()}

        overall = summarize_overall(
            means.values(),
            self._store.overall,
            self._store.comments,
            self._audience,
        )
        feedback = self._feedback.evaluate(answers, means, risks)
        return ScoringResult(domains=domains, overall=overall, feedback=feedback)
