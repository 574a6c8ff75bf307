"""Environment configuration for finvalidator."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class FinValidatorConfig:
    rules_path: str | None
    log_level: str
    fail_on_fraud: bool

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level)


def load_config() -> FinValidatorConfig:
    return FinValidatorConfig(
        rules_path=os.getenv("FINVALIDATOR_RULES_PATH") or None,
        log_level=_get_log_level("FINVALIDATOR_LOG_LEVEL", "INFO"),
        fail_on_fraud=_get_bool("FINVALIDATOR_FAIL_ON_FRAUD", False),
    )


def _get_log_level(key: str, default: str) -> str:
    value = os.getenv(key)
    if value is None or value.strip() == "":
        return default
    value = value.strip().upper()
    if value not in LOG_LEVELS:
        return default
    return value


def _get_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None or value == "":
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}
