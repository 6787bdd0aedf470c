"""Feedback rule models.

Rules are declared in ``data/rules/feedback.yaml`` as :class:`RuleSpec`
records and compiled by the evaluator into :class:`FeedbackRule` objects,
whose ``predicate`` is a pure function of
``(answers, domain_means, domain_risks)``.

Operators:
  - eq: equality (risk tiers compare equal to their YAML label)
  - le: numeric at-most
  - between: value is [min, max] inclusive
  - in: numeric membership, value is a list
  - contains_any: any listed value is in the answer list (or substring)
"""

from dataclasses import dataclass
from typing import Any, Callable, List, Literal, Mapping

from pydantic import BaseModel, model_validator

Severity = Literal["info", "warning", "error", "success"]

# (answers, domain_means, domain_risks) -> bool
Predicate = Callable[[Mapping[str, Any], Mapping[str, Any], Mapping[str, Any]], Any]


class Condition(BaseModel):
    """A single comparison against one of the three rule inputs."""

    source: Literal["answer", "mean", "risk"] = "answer"
    key: str
    op: Literal["eq", "le", "between", "in", "contains_any"]
    value: Any


class RuleSpec(BaseModel):
    """Declarative feedback rule as written in YAML.

    The rule matches when every ``when`` condition holds AND (if
    ``when_any`` is non-empty) at least one ``when_any`` condition holds.
    """

    id: str
    severity: Severity
    message: str
    when: List[Condition] = []
    when_any: List[Condition] = []

    @model_validator(mode="after")
    def _chk(self):
        if not self.when and not self.when_any:
            raise ValueError(f"rule {self.id!r} has no conditions")
        return self


@dataclass(frozen=True)
class FeedbackRule:
    """Compiled rule: a data record carrying a pure predicate."""

    id: str
    predicate: Predicate
    message: str
    severity: Severity


class FeedbackItem(BaseModel):
    """One advisory message produced by a matching rule."""

    text: str
    style: Severity
