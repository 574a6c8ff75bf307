"""Shared pytest fixtures for fraud validation tests."""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from finvalidator.rules import (
    AmountThresholdRule,
    CountryBlocklistRule,
    FrequencyLimitRule,
    IPBlocklistRule,
    ValidationRule,
)
from finvalidator.transaction import TransactionData

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def _make_transaction(**overrides) -> TransactionData:
    data = {
        "user_id": "user123",
        "amount": Decimal("500"),
        "currency": "USD",
        "country": "US",
        "ip_address": "1.1.1.1",
        "timestamp": BASE_TIME,
        "recent_timestamps": (),
    }
    data.update(overrides)
    return TransactionData(**data)


@pytest.fixture
def base_time() -> datetime:
    """Fixed timestamp used as the transaction time."""
    return BASE_TIME


@pytest.fixture
def make_transaction():
    """Factory building a low-risk transaction with selected fields overridden."""
    return _make_transaction


@pytest.fixture
def flagged_transaction() -> TransactionData:
    """Transaction that trips every rule in standard_rules."""
    return _make_transaction(
        amount=Decimal("12000"),
        country="RU",
        ip_address="123.45.67.89",
        recent_timestamps=tuple(
            BASE_TIME - timedelta(seconds=s) for s in (30, 20, 10)
        ),
    )


@pytest.fixture
def clean_transaction() -> TransactionData:
    """Transaction that trips no rule in standard_rules."""
    return _make_transaction()


@pytest.fixture
def standard_rules() -> list[ValidationRule]:
    """The four rules with the weights of the reference scenario."""
    return [
        AmountThresholdRule(threshold=Decimal("10000"), weight=30),
        CountryBlocklistRule(blocked_countries=["RU", "KP"], weight=25),
        IPBlocklistRule(blocked_ips=["123.45.67.89"], weight=20),
        FrequencyLimitRule(max_per_minute=2, weight=15),
    ]
