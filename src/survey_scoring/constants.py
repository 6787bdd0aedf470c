"""Scoring constants shared across the SDK.

These values are referenced by the scoring functions, the feedback
evaluator, and the reference store.  They mirror conventions encoded in the
YAML reference data under ``data/``.

Unlike the reference statistics, these are fixed properties of the
instrument and are not overridable from the environment.
"""

# Likert scale bounds for every numeric item.
LIKERT_MIN = 1
LIKERT_MAX = 5

# Standardized (T-like) score transform: round(z * T_SCALE + T_CENTER).
# 16.67 is the literal constant used by the instrument; do not replace it
# with 50 / 3.
T_SCALE = 16.67
T_CENTER = 50

# Percentile estimation treats the standardized score as N(50, 10).
PERCENTILE_T_SD = 10

# Abramowitz–Stegun 7.1.26 coefficients for erf().
ERF_A1 = 0.254829592
ERF_A2 = -0.284496736
ERF_A3 = 1.421413741
ERF_A4 = -1.453152027
ERF_A5 = 1.061405429
ERF_P = 0.3275911

# Sentinel written in persisted records when a tier or percentile cannot
# be computed.
UNCLASSIFIED = "-"

# Key of the whole-instrument reference entry in domains.yaml.
OVERALL_KEY = "overall"

# Dashboard badge cutoffs applied to the average standardized score.
# This is a separate derivation from the mean-based overall tier.
DASHBOARD_HIGH_BELOW = 40
DASHBOARD_MEDIUM_BELOW = 50

# Comment audiences available in comments.yaml.
AUDIENCES: set[str] = {"patient", "social_worker"}

# Feedback severities, matching the UI alert styles.
SEVERITIES: tuple[str, ...] = ("info", "warning", "error", "success")
