"""ReferenceStore — loads the scoring reference YAML into typed models.

This is the single source of truth for reference data at runtime.  The
store is loaded once at startup and shared read-only by every scoring call.

Usage::

    store = ReferenceStore()        # defaults to the packaged data/ directory
    store.load()                    # parse all YAML files

    stats = store.get_domain("psychologicalBurden")
    comment = store.comments.for_tier(RiskTier.HIGH)
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from survey_scoring.models.reference import (
    CommentTemplates,
    DomainDefinition,
    Instrument,
    ReferenceStats,
)
from survey_scoring.models.rules import RuleSpec

logger = logging.getLogger(__name__)

DEFAULT_REFERENCE_DIR = Path(__file__).resolve().parent / "data"


def load_yaml(path: Path | str) -> Any:
    """Load a single YAML file and return the parsed contents."""
    if isinstance(path, str):
        path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing YAML file: {path}")
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f)


class ReferenceStore:
    """Loads all YAML from the reference directory and provides typed lookup.

    Attributes populated after :meth:`load`:

        instrument     — Instrument (domains, overall stats, reverse set, aliases)
        comments       — CommentTemplates
        feedback_rules — tuple[RuleSpec, ...] in file order
    """

    def __init__(self, reference_dir: str | Path | None = None) -> None:
        self._base = Path(reference_dir) if reference_dir is not None else DEFAULT_REFERENCE_DIR

        # Populated by load()
        self.instrument: Instrument | None = None
        self.comments: CommentTemplates | None = None
        self.feedback_rules: tuple[RuleSpec, ...] = ()

        self._domains: dict[str, DomainDefinition] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> None:
        """Parse all YAML files under the reference directory.

        Call this once at startup.  Raises ``FileNotFoundError`` if expected
        YAML files are missing and ``pydantic.ValidationError`` if their
        contents do not match the models.
        """
        self._load_instrument()
        self._load_comments()
        self._load_feedback_rules()
        logger.info(
            "ReferenceStore loaded: %d domains, %d reverse-coded items, %d feedback rules",
            len(self._domains),
            len(self.instrument.reverse_coded),
            len(self.feedback_rules),
        )

    def _load_instrument(self) -> None:
        """Load data/const/domains.yaml into an Instrument."""
        raw = load_yaml(self._base / "const" / "domains.yaml")
        self.instrument = Instrument(**raw)
        self._domains = {d.id: d for d in self.instrument.domains}

    def _load_comments(self) -> None:
        """Load data/const/comments.yaml into CommentTemplates."""
        raw = load_yaml(self._base / "const" / "comments.yaml")
        self.comments = CommentTemplates(**raw)

    def _load_feedback_rules(self) -> None:
        """Load data/rules/feedback.yaml, preserving file order."""
        raw_list = load_yaml(self._base / "rules" / "feedback.yaml")
        specs = [RuleSpec(**raw) for raw in raw_list]
        ids = [s.id for s in specs]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Duplicate feedback rule ids in feedback.yaml: {ids}")
        self.feedback_rules = tuple(specs)

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------

    @property
    def domains(self) -> tuple[DomainDefinition, ...]:
        """The six domain definitions in YAML order."""
        return self.instrument.domains

    @property
    def domain_ids(self) -> list[str]:
        return [d.id for d in self.instrument.domains]

    @property
    def overall(self) -> ReferenceStats:
        """The whole-instrument reference entry."""
        return self.instrument.overall

    @property
    def reverse_coded(self) -> frozenset[int]:
        return self.instrument.reverse_coded

    def get_domain(self, domain_id: str) -> DomainDefinition:
        """Look up a domain by id (legacy aliases accepted).

        Raises:
            KeyError: if the id is neither a domain nor a known alias.
        """
        return self._domains[self.resolve_domain_key(domain_id)]

    def resolve_domain_key(self, key: str) -> str:
        """Map a legacy (misspelled or snake_case) domain key to its canonical id.

        Keys that are not aliases are returned unchanged.
        """
        return self.instrument.aliases.get(key, key)

    def canonicalize(self, mapping: Mapping[str, Any] | None) -> dict[str, Any]:
        """Return a copy of a domain-keyed mapping with aliases resolved.

        When both the canonical key and a legacy alias are present, the
        canonical value wins unless it is missing (None).  Among several
        aliases of one domain, the first non-None value wins.
        """
        out: dict[str, Any] = {}
        legacy: dict[str, Any] = {}
        for key, value in (mapping or {}).items():
            canonical = self.resolve_domain_key(key)
            if canonical != key:
                if legacy.get(canonical) is None:
                    legacy[canonical] = value
            else:
                out[key] = value
        for canonical, value in legacy.items():
            if out.get(canonical) is None:
                out[canonical] = value
        return out
