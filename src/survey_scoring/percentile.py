"""Approximate normal percentile of a standardized score.

The standardized score is treated as N(50, 10) and mapped through the
Abramowitz–Stegun rational approximation of erf (max error ~1.5e-7).
"""

from __future__ import annotations

import math
from typing import Any

from survey_scoring.constants import (
    ERF_A1,
    ERF_A2,
    ERF_A3,
    ERF_A4,
    ERF_A5,
    ERF_P,
    PERCENTILE_T_SD,
    T_CENTER,
    UNCLASSIFIED,
)


def round_half_away(x: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 → 3, -2.5 → -3)."""
    return int(math.copysign(math.floor(abs(x) + 0.5), x))


def erf(x: float) -> float:
    sign = 1.0 if x >= 0 else -1.0
    x = abs(x)
    t = 1.0 / (1.0 + ERF_P * x)
    y = 1.0 - (((((ERF_A5 * t + ERF_A4) * t) + ERF_A3) * t + ERF_A2) * t + ERF_A1) * t * math.exp(-x * x)
    return sign * y


def estimate_percentile(t_score: Any) -> int | str:
    """Return the rounded percentile (0–100) of *t_score*.

    Numeric strings are accepted since stored records may carry them.
    Non-numeric input (None, text, NaN, booleans) yields the ``"-"``
    sentinel instead of raising.
    """
    if isinstance(t_score, str):
        try:
            t_score = float(t_score.strip())
        except ValueError:
            return UNCLASSIFIED
    if isinstance(t_score, bool) or not isinstance(t_score, (int, float)):
        return UNCLASSIFIED
    if not math.isfinite(t_score):
        return UNCLASSIFIED
    z = (t_score - T_CENTER) / PERCENTILE_T_SD
    return round_half_away(100 * 0.5 * (1 + erf(z / math.sqrt(2))))
