"""FeedbackRuleEngine — evaluates the additional-feedback rule table.

Every rule in the table is checked against the same three inputs:

  - **answers**: the normalized answer set (raw values, not reverse-coded)
  - **domain_means**: domain id → mean (None if unscored)
  - **domain_risks**: domain id → RiskTier (None if unscored)

All matching rules fire, in table order.  A predicate that raises or
returns anything other than a bool counts as non-matching; it is logged
and the remaining rules are still evaluated.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Sequence

from survey_scoring.models.rules import Condition, FeedbackItem, FeedbackRule, RuleSpec
from survey_scoring.scoring import coerce_number

logger = logging.getLogger(__name__)


class FeedbackRuleEngine:
    """Evaluates an ordered, immutable table of feedback rules."""

    def __init__(self, rules: Sequence[FeedbackRule]) -> None:
        self._rules: tuple[FeedbackRule, ...] = tuple(rules)

    @classmethod
    def from_specs(cls, specs: Iterable[RuleSpec]) -> "FeedbackRuleEngine":
        """Compile declarative YAML rules into an engine."""
        return cls([compile_rule(spec) for spec in specs])

    @property
    def rules(self) -> tuple[FeedbackRule, ...]:
        return self._rules

    def evaluate(
        self,
        answers: Mapping[str, Any],
        domain_means: Mapping[str, Any],
        domain_risks: Mapping[str, Any],
    ) -> list[FeedbackItem]:
        """Return one FeedbackItem per matching rule, in table order."""
        return [
            FeedbackItem(text=rule.message, style=rule.severity)
            for rule in self.matching_rules(answers, domain_means, domain_risks)
        ]

    def matching_rules(
        self,
        answers: Mapping[str, Any],
        domain_means: Mapping[str, Any],
        domain_risks: Mapping[str, Any],
    ) -> list[FeedbackRule]:
        matched: list[FeedbackRule] = []
        for rule in self._rules:
            try:
                result = rule.predicate(answers, domain_means, domain_risks)
            except Exception:
                logger.warning("Feedback rule %s raised; treating as non-matching", rule.id, exc_info=True)
                continue
            if not isinstance(result, bool):
                logger.warning(
                    "Feedback rule %s returned %s instead of bool; treating as non-matching",
                    rule.id,
                    type(result).__name__,
                )
                continue
            if result:
                matched.append(rule)
        return matched


# ------------------------------------------------------------------
# Rule compilation
# ------------------------------------------------------------------

def compile_rule(spec: RuleSpec) -> FeedbackRule:
    """Turn a RuleSpec into a FeedbackRule with a pure predicate.

    ``when`` conditions are AND-ed; if ``when_any`` is non-empty at least
    one of its conditions must also hold.
    """
    when = tuple(spec.when)
    when_any = tuple(spec.when_any)

    def predicate(answers, domain_means, domain_risks) -> bool:
        sources = {"answer": answers, "mean": domain_means, "risk": domain_risks}
        if not all(eval_condition(c, sources) for c in when):
            return False
        if when_any and not any(eval_condition(c, sources) for c in when_any):
            return False
        return True

    return FeedbackRule(id=spec.id, predicate=predicate, message=spec.message, severity=spec.severity)


def eval_condition(cond: Condition, sources: Mapping[str, Mapping[str, Any]]) -> bool:
    """Evaluate one condition against the input it names.

    If the referenced key is absent (or None), the condition is False.
    """
    actual = (sources.get(cond.source) or {}).get(cond.key)
    if actual is None:
        return False
    return _compare(cond.op, actual, cond.value)


def _compare(op: str, answer: Any, value: Any) -> bool:
    """Apply an operator to an answer and an expected value.

    Numeric operators coerce the answer; one that is not a number (blank,
    text, bool) never satisfies them.
    """
    if op == "eq":
        return answer == value

    if op == "contains_any":
        if isinstance(answer, list):
            return any(v in answer for v in value)
        ans_str = str(answer)
        return any(str(v) in ans_str for v in value)

    ans_num = coerce_number(answer)
    if ans_num is None:
        return False
    if op == "le":
        return ans_num <= float(value)
    if op == "between":
        lo, hi = float(value[0]), float(value[1])
        return lo <= ans_num <= hi
    if op == "in":
        return ans_num in {float(v) for v in value}

    logger.warning("Unknown condition operator: %s", op)
    return False
