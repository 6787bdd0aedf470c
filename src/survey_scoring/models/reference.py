"""Pydantic models for scoring reference data.

These models mirror the YAML files in ``data/const/``:

  - ReferenceStats: population mean/SD for one domain or the whole instrument
  - DomainDefinition: a clinical domain with its ordered item keys
  - Instrument: the six domains, the overall entry, reverse-coded items,
    and the legacy domain-key alias table
  - CommentTemplates: fixed overall comments per audience and tier

All models are frozen; the store builds them once and shares them.
"""

from typing import Dict, FrozenSet, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from .enums import RiskTier


class ReferenceStats(BaseModel):
    """Population reference statistics for a domain (or the overall mean)."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    label: str
    mean: float
    sd: float

    @field_validator("sd")
    @classmethod
    def _positive_sd(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("sd must be > 0")
        return v

    @property
    def cutoff(self) -> float:
        """High-risk threshold: reference mean minus one reference SD."""
        return self.mean - self.sd


class DomainDefinition(ReferenceStats):
    """One of the six clinical domains and the item keys it aggregates."""

    items: Tuple[str, ...]


class Instrument(BaseModel):
    """Everything in domains.yaml, validated as a unit."""

    model_config = ConfigDict(frozen=True)

    reverse_coded: FrozenSet[int]
    domains: Tuple[DomainDefinition, ...]
    overall: ReferenceStats
    aliases: Dict[str, str] = {}

    @model_validator(mode="after")
    def _chk(self):
        ids = [d.id for d in self.domains]
        if len(ids) != len(set(ids)):
            raise ValueError(f"duplicate domain ids: {ids}")
        for legacy, canonical in self.aliases.items():
            if canonical not in ids:
                raise ValueError(f"alias {legacy!r} points to unknown domain {canonical!r}")
        return self


class CommentTemplates(BaseModel):
    """Overall comments from comments.yaml.

    ``patient`` speaks to the respondent; ``social_worker`` is the
    case-dashboard phrasing of the same tier.
    """

    model_config = ConfigDict(frozen=True)

    no_data: str
    patient: Dict[RiskTier, str]
    social_worker: Dict[RiskTier, str]

    @model_validator(mode="after")
    def _chk(self):
        for audience in ("patient", "social_worker"):
            missing = set(RiskTier) - set(getattr(self, audience))
            if missing:
                raise ValueError(f"{audience} comments missing tiers: {sorted(t.value for t in missing)}")
        return self

    def for_tier(self, tier: RiskTier, audience: str = "patient") -> str:
        """Return the fixed comment for *tier* in the given audience's voice."""
        templates = self.social_worker if audience == "social_worker" else self.patient
        return templates[tier]
