"""Validation engine that aggregates rule triggers into a fraud verdict.

Every rule is evaluated, in order, even after an earlier rule triggers, so
that the result carries the full set of evidence. The risk score is the sum
of the weights of all triggered rules.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import asdict, dataclass, field
from typing import TYPE_CHECKING, Any

from finvalidator.rules import ValidationRule
from finvalidator.transaction import TransactionData

if TYPE_CHECKING:
    from finvalidator.ruleset import RuleSet

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """Result of validating one transaction."""

    is_fraud: bool = False
    risk_score: int = 0
    triggers: list[str] = field(default_factory=list)  # reasons, in rule order
    matched_rules: list[str] = field(default_factory=list)  # rule names

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def validate(
    transaction: TransactionData,
    rules: Iterable[ValidationRule],
) -> ValidationResult:
    """Evaluate rules against a transaction and aggregate the outcome.

    Args:
        transaction: Transaction to score.
        rules: Rules to evaluate, in order. The order determines the order of
            ``triggers`` but not the risk score.

    Returns:
        A new ValidationResult. An empty rule collection yields a non-fraud,
        zero-score result.
    """
    risk_score = 0
    triggers = []
    matched_rules = []

    for rule in rules:
        triggered, reason = rule.evaluate(transaction)
        if not triggered:
            continue

        logger.debug(
            "Rule %s triggered for user %s (weight=%d): %s",
            rule.name,
            transaction.user_id,
            rule.weight,
            reason,
        )
        risk_score += rule.weight
        triggers.append(reason or f"rule_matched:{rule.name}")
        matched_rules.append(rule.name)

    result = ValidationResult(
        is_fraud=bool(triggers),
        risk_score=risk_score,
        triggers=triggers,
        matched_rules=matched_rules,
    )
    if result.is_fraud:
        logger.info(
            "Transaction for user %s flagged: risk_score=%d, rules=%s",
            transaction.user_id,
            risk_score,
            matched_rules,
        )
    return result


class ValidationEngine:
    """Holds an ordered, immutable collection of rules.

    The engine keeps no per-call state, so one instance can be shared
    across threads.
    """

    def __init__(self, rules: Sequence[ValidationRule]):
        self._rules = tuple(rules)

    @classmethod
    def from_ruleset(cls, ruleset: "RuleSet") -> "ValidationEngine":
        """Create an engine from a loaded RuleSet."""
        return cls(ruleset.rules)

    @property
    def rules(self) -> tuple[ValidationRule, ...]:
        return self._rules

    def validate(self, transaction: TransactionData) -> ValidationResult:
        """Validate a transaction against this engine's rules."""
        return validate(transaction, self._rules)
