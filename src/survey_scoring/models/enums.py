"""Scoring enumerations."""

import enum


class RiskTier(str, enum.Enum):
    """Risk tier assigned by comparing a mean to its reference cutoff.

    Values are the Korean labels written to stored records and used as keys
    in comments.yaml and feedback.yaml.

    Ordering (by mean):
        mean <= ref_mean - ref_sd      -> HIGH
        mean <= ref_mean               -> CAUTION
        otherwise                      -> LOW
    """

    HIGH = "고위험집단"
    CAUTION = "주의집단"
    LOW = "저위험집단"


class DashboardRiskLevel(str, enum.Enum):
    """Dashboard badge level derived from the average standardized score.

    Not interchangeable with :class:`RiskTier`: the two use different
    inputs and cutoffs and can disagree for the same respondent.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
