"""survey_scoring — Survivorship survey scoring and risk-classification SDK.

Public API:
    ScoringEngine      — orchestrates one scoring invocation
    ReferenceStore     — loads YAML reference data into typed models
    FeedbackRuleEngine — evaluates the additional-feedback rule table
    ScoringResult      — six domain scores, overall summary, feedback
    DomainScore        — one domain's sum, mean, standardized score, tier
    OverallSummary     — whole-instrument mean, tier, comment
    FeedbackItem       — one advisory message ({text, style})
    RiskTier           — High / Caution / Low

Helpers:
    estimate_percentile  — standardized score → approximate percentile
    dashboard_risk_level — dashboard badge level from standardized scores
    normalize_scores_document — normalize stored score documents
"""

from survey_scoring.engine import ScoringEngine
from survey_scoring.evaluator import FeedbackRuleEngine
from survey_scoring.ingest import normalize_answers, normalize_scores_document
from survey_scoring.models import (
    DashboardRiskLevel,
    DomainScore,
    FeedbackItem,
    FeedbackRule,
    OverallSummary,
    RiskTier,
    ScoringResult,
)
from survey_scoring.percentile import estimate_percentile
from survey_scoring.reference import ReferenceStore
from survey_scoring.scoring import dashboard_risk_level, likert_to_yes_no

__all__ = [
    # Engine & store
    "ScoringEngine",
    "ReferenceStore",
    "FeedbackRuleEngine",
    # Models
    "DashboardRiskLevel",
    "DomainScore",
    "FeedbackItem",
    "FeedbackRule",
    "OverallSummary",
    "RiskTier",
    "ScoringResult",
    # Helpers
    "dashboard_risk_level",
    "estimate_percentile",
    "likert_to_yes_no",
    "normalize_answers",
    "normalize_scores_document",
]
