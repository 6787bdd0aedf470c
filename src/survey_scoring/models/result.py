"""Result models — the contract between the engine and its callers.

These models are what persistence and rendering collaborators receive.
They are built fresh for every scoring call.

  - DomainScore: one domain's aggregate, standardized score, and tier
  - OverallSummary: whole-instrument mean, tier, and fixed comment
  - ScoringResult: all six domains + overall + feedback

``ScoringResult.to_record()`` flattens the result into the stored-document
shape (camelCase keys, ``"-"`` for unclassified tiers).
"""

from typing import Dict, List, Optional

from pydantic import BaseModel

from survey_scoring.constants import UNCLASSIFIED
from survey_scoring.percentile import estimate_percentile

from .enums import RiskTier
from .rules import FeedbackItem


class DomainScore(BaseModel):
    """Aggregate for one domain.

    When ``present_count`` is 0 the domain is unscored: ``mean``,
    ``standardized`` and ``risk_tier`` are all None and ``raw_sum`` is 0.
    """

    domain_id: str
    raw_sum: float = 0.0
    present_count: int = 0
    mean: Optional[float] = None
    standardized: Optional[int] = None
    risk_tier: Optional[RiskTier] = None

    @property
    def is_scored(self) -> bool:
        return self.mean is not None


class OverallSummary(BaseModel):
    mean: Optional[float] = None
    risk_tier: Optional[RiskTier] = None
    comment: str


class ScoringResult(BaseModel):
    """Full output of one scoring invocation."""

    domains: Dict[str, DomainScore]
    overall: OverallSummary
    feedback: List[FeedbackItem] = []

    def percentiles(self) -> Dict[str, int | str]:
        """Percentile of each domain's standardized score (``"-"`` if unscored)."""
        return {
            domain_id: estimate_percentile(score.standardized)
            for domain_id, score in self.domains.items()
        }

    def to_record(self) -> dict:
        """Flatten into the stored-document shape.

        Every domain key is present in every map.  Unscored means and
        standardized scores are None; unscored tiers are ``"-"``.
        """
        return {
            "rawScores": {k: d.raw_sum for k, d in self.domains.items()},
            "meanScores": {k: d.mean for k, d in self.domains.items()},
            "stdScores": {k: d.standardized for k, d in self.domains.items()},
            "riskGroups": {
                k: d.risk_tier.value if d.risk_tier is not None else UNCLASSIFIED
                for k, d in self.domains.items()
            },
            "overallMean": self.overall.mean,
            "overallRiskGroup": (
                self.overall.risk_tier.value if self.overall.risk_tier is not None else UNCLASSIFIED
            ),
            "overallFeedback": self.overall.comment,
            "additionalFeedback": [item.model_dump() for item in self.feedback],
        }
