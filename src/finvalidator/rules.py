"""Weighted fraud rules.

Each rule is an immutable configuration plus a pure ``evaluate`` check.
Configuration problems are rejected when a rule is constructed, so that
evaluating a rule never raises for a well-formed transaction.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, NamedTuple

from finvalidator.transaction import TransactionData

logger = logging.getLogger(__name__)


class RuleConfigurationError(ValueError):
    """Raised when a rule is constructed with an invalid configuration."""


class RuleType(str, Enum):
    """Identifiers of the supported rule variants."""

    AMOUNT_THRESHOLD = "amount_threshold"
    COUNTRY_BLOCKLIST = "country_blocklist"
    IP_BLOCKLIST = "ip_blocklist"
    FREQUENCY_LIMIT = "frequency_limit"


class RuleOutcome(NamedTuple):
    """Outcome of evaluating one rule against one transaction."""

    triggered: bool
    reason: str | None = None


NOT_TRIGGERED = RuleOutcome(triggered=False, reason=None)

MAX_WINDOW_SECONDS = int(timedelta.max.total_seconds())


def _check_positive_int(name: str, value: Any) -> None:
    # bool is an int subclass; True must not pass as a weight of 1
    if isinstance(value, bool) or not isinstance(value, int):
        raise RuleConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < 1:
        raise RuleConfigurationError(f"{name} must be positive, got {value}")


def _to_blocklist(name: str, values: Any) -> frozenset[str]:
    if values is None:
        raise RuleConfigurationError(f"{name} is required")
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise RuleConfigurationError(f"{name} must be a collection of strings")
    try:
        items = frozenset(values)
    except TypeError as e:
        raise RuleConfigurationError(f"{name} entries must be strings") from e
    for item in items:
        if not isinstance(item, str):
            raise RuleConfigurationError(
                f"{name} entries must be strings, got {item!r}"
            )
    return items


class ValidationRule(ABC):
    """A single weighted fraud check.

    ``weight`` is only read by the engine when aggregating a risk score;
    rules never use it themselves.
    """

    name: ClassVar[str]
    weight: int

    @abstractmethod
    def evaluate(self, transaction: TransactionData) -> RuleOutcome:
        """Check the transaction and report whether the rule triggers."""
        ...


@dataclass(frozen=True)
class AmountThresholdRule(ValidationRule):
    """Triggers when the amount is strictly greater than the threshold."""

    name: ClassVar[str] = RuleType.AMOUNT_THRESHOLD.value

    threshold: Decimal
    weight: int = 20

    def __post_init__(self):
        """Normalize the threshold to Decimal and validate configuration."""
        if isinstance(self.threshold, bool):
            raise RuleConfigurationError("threshold must be a number")
        try:
            # str() first so floats like 0.1 keep their printed value
            threshold = Decimal(str(self.threshold))
        except (InvalidOperation, ValueError) as e:
            raise RuleConfigurationError(
                f"Invalid threshold: {self.threshold!r}"
            ) from e
        if not threshold.is_finite() or threshold < 0:
            raise RuleConfigurationError(
                f"threshold must be a finite, non-negative number, got {threshold}"
            )
        object.__setattr__(self, "threshold", threshold)
        _check_positive_int("weight", self.weight)

    def evaluate(self, transaction: TransactionData) -> RuleOutcome:
        if transaction.amount > self.threshold:
            return RuleOutcome(
                True, f"amount exceeds threshold of {self.threshold:f}"
            )
        return NOT_TRIGGERED


@dataclass(frozen=True)
class CountryBlocklistRule(ValidationRule):
    """Triggers when the country is in the blocklist (case-sensitive)."""

    name: ClassVar[str] = RuleType.COUNTRY_BLOCKLIST.value

    blocked_countries: frozenset[str]
    weight: int = 20

    def __post_init__(self):
        object.__setattr__(
            self,
            "blocked_countries",
            _to_blocklist("blocked_countries", self.blocked_countries),
        )
        _check_positive_int("weight", self.weight)

    def evaluate(self, transaction: TransactionData) -> RuleOutcome:
        if transaction.country in self.blocked_countries:
            return RuleOutcome(
                True, f"transaction from blocked country: {transaction.country}"
            )
        return NOT_TRIGGERED


@dataclass(frozen=True)
class IPBlocklistRule(ValidationRule):
    """Triggers when the IP address is in the blocklist (exact match)."""

    name: ClassVar[str] = RuleType.IP_BLOCKLIST.value

    blocked_ips: frozenset[str]
    weight: int = 25

    def __post_init__(self):
        object.__setattr__(
            self, "blocked_ips", _to_blocklist("blocked_ips", self.blocked_ips)
        )
        _check_positive_int("weight", self.weight)

    def evaluate(self, transaction: TransactionData) -> RuleOutcome:
        if transaction.ip_address in self.blocked_ips:
            return RuleOutcome(True, f"IP on blacklist: {transaction.ip_address}")
        return NOT_TRIGGERED


@dataclass(frozen=True)
class FrequencyLimitRule(ValidationRule):
    """Triggers when too many prior transactions fall in the trailing window.

    The window is the closed interval ``[timestamp - window_seconds, timestamp]``.
    History entries after the transaction's own timestamp are not counted.
    """

    name: ClassVar[str] = RuleType.FREQUENCY_LIMIT.value

    max_per_minute: int = 3
    weight: int = 15
    window_seconds: int = 60

    def __post_init__(self):
        _check_positive_int("max_per_minute", self.max_per_minute)
        _check_positive_int("weight", self.weight)
        _check_positive_int("window_seconds", self.window_seconds)
        if self.window_seconds > MAX_WINDOW_SECONDS:
            raise RuleConfigurationError(
                f"window_seconds must be at most {MAX_WINDOW_SECONDS}, "
                f"got {self.window_seconds}"
            )

    def count_recent(self, transaction: TransactionData) -> int:
        """Count history entries inside the trailing window."""
        # datetime - datetime cannot overflow, datetime - timedelta can
        end = transaction.timestamp
        window = timedelta(seconds=self.window_seconds)
        return sum(
            1
            for ts in transaction.recent_timestamps
            if timedelta(0) <= end - ts <= window
        )

    def evaluate(self, transaction: TransactionData) -> RuleOutcome:
        count = self.count_recent(transaction)
        if count >= self.max_per_minute:
            return RuleOutcome(
                True, f"high transaction frequency: {count} in the last minute"
            )
        return NOT_TRIGGERED


RULE_TYPES: dict[str, type[ValidationRule]] = {
    RuleType.AMOUNT_THRESHOLD.value: AmountThresholdRule,
    RuleType.COUNTRY_BLOCKLIST.value: CountryBlocklistRule,
    RuleType.IP_BLOCKLIST.value: IPBlocklistRule,
    RuleType.FREQUENCY_LIMIT.value: FrequencyLimitRule,
}


def build_rule(data: dict[str, Any]) -> ValidationRule:
    """Create a rule from a plain mapping.

    Args:
        data: Mapping with a ``type`` key naming the rule variant; the
            remaining keys are passed to the rule's constructor.

    Returns:
        The constructed rule.

    Raises:
        RuleConfigurationError: If the type is unknown or the remaining
            fields do not form a valid configuration.
    """
    if not isinstance(data, dict):
        raise RuleConfigurationError("Rule definition must be a mapping")
    if "type" not in data:
        raise RuleConfigurationError("Rule definition must have 'type' field")

    params = dict(data)
    rule_type = params.pop("type")
    rule_cls = RULE_TYPES.get(rule_type) if isinstance(rule_type, str) else None
    if rule_cls is None:
        raise RuleConfigurationError(
            f"Unknown rule type: {rule_type}. Must be one of {sorted(RULE_TYPES)}"
        )

    try:
        rule = rule_cls(**params)
    except TypeError as e:
        raise RuleConfigurationError(f"Invalid fields for {rule_type}: {e}") from e

    logger.debug("Built rule %s with weight %d", rule.name, rule.weight)
    return rule
