"""Rule-based fraud validation for financial transactions."""

from finvalidator.engine import ValidationEngine, ValidationResult, validate
from finvalidator.rules import (
    AmountThresholdRule,
    CountryBlocklistRule,
    FrequencyLimitRule,
    IPBlocklistRule,
    RuleConfigurationError,
    RuleOutcome,
    RuleType,
    ValidationRule,
    build_rule,
)
from finvalidator.ruleset import RuleSet
from finvalidator.transaction import TransactionData

__all__ = [
    "AmountThresholdRule",
    "CountryBlocklistRule",
    "FrequencyLimitRule",
    "IPBlocklistRule",
    "RuleConfigurationError",
    "RuleOutcome",
    "RuleSet",
    "RuleType",
    "TransactionData",
    "ValidationEngine",
    "ValidationResult",
    "ValidationRule",
    "build_rule",
    "validate",
]
