"""Scoring configuration — reads settings from environment variables.

All settings have sensible defaults for local use.  Deployments typically
override them via env vars.
"""

import logging
import os
from dataclasses import dataclass

from survey_scoring.constants import AUDIENCES


@dataclass(frozen=True)
class ScoringSettings:
    """Immutable scoring configuration read from environment at startup."""

    # Reference data directory (None → packaged data/ directory)
    reference_dir: str | None = None

    # Logging
    log_level: str = "INFO"

    # Which overall-comment template set to use: "patient" or "social_worker"
    comment_audience: str = "patient"


def load_settings() -> ScoringSettings:
    """Build settings from ``SCORING_*`` environment variables."""
    audience = os.getenv("SCORING_COMMENT_AUDIENCE", "patient").strip().lower()
    if audience not in AUDIENCES:
        raise ValueError(
            f"SCORING_COMMENT_AUDIENCE must be one of {sorted(AUDIENCES)}, got {audience!r}"
        )

    return ScoringSettings(
        reference_dir=os.getenv("SCORING_REFERENCE_DIR") or None,
        log_level=os.getenv("SCORING_LOG_LEVEL", "INFO").upper(),
        comment_audience=audience,
    )


def configure_logging(settings: ScoringSettings) -> None:
    """Apply the process-wide logging format at the configured level."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
