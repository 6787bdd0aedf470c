"""Public model re-exports for survey_scoring.

Consumers should import from ``survey_scoring.models`` rather than
reaching into sub-modules directly.
"""

# --- Enums ---
from survey_scoring.models.enums import DashboardRiskLevel, RiskTier

# --- Reference data ---
from survey_scoring.models.reference import (
    CommentTemplates,
    DomainDefinition,
    Instrument,
    ReferenceStats,
)

# --- Feedback rules ---
from survey_scoring.models.rules import (
    Condition,
    FeedbackItem,
    FeedbackRule,
    RuleSpec,
    Severity,
)

# --- Results ---
from survey_scoring.models.result import (
    DomainScore,
    OverallSummary,
    ScoringResult,
)

__all__ = [
    # Enums
    "DashboardRiskLevel",
    "RiskTier",
    # Reference data
    "CommentTemplates",
    "DomainDefinition",
    "Instrument",
    "ReferenceStats",
    # Rules
    "Condition",
    "FeedbackItem",
    "FeedbackRule",
    "RuleSpec",
    "Severity",
    # Results
    "DomainScore",
    "OverallSummary",
    "ScoringResult",
]
