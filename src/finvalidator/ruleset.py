"""Versioned rule collections loaded from plain data or JSON files."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from finvalidator.rules import RuleConfigurationError, ValidationRule, build_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuleSet:
    """An ordered collection of rules with a version label."""

    version: str
    rules: tuple[ValidationRule, ...]

    def __post_init__(self):
        object.__setattr__(self, "rules", tuple(self.rules))

    def __len__(self) -> int:
        return len(self.rules)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleSet":
        """Create RuleSet from dictionary.

        Args:
            data: Dictionary with 'version' and 'rules' keys. Each entry of
                'rules' is a rule definition accepted by ``build_rule``.

        Returns:
            RuleSet instance, rules kept in the order given.

        Raises:
            RuleConfigurationError: If required fields are missing or any
                rule definition is invalid.
        """
        if not isinstance(data, dict):
            raise RuleConfigurationError("RuleSet definition must be a mapping")
        if "version" not in data:
            raise RuleConfigurationError("RuleSet must have 'version' field")
        if "rules" not in data:
            raise RuleConfigurationError("RuleSet must have 'rules' field")
        if not isinstance(data["rules"], list):
            raise RuleConfigurationError("'rules' must be a list")

        rules = []
        for i, rule_dict in enumerate(data["rules"]):
            try:
                rules.append(build_rule(rule_dict))
            except RuleConfigurationError as e:
                raise RuleConfigurationError(f"Invalid rule at index {i}: {e}") from e

        ruleset = cls(version=str(data["version"]), rules=tuple(rules))
        logger.info(
            "Loaded ruleset %s with %d rules", ruleset.version, len(ruleset.rules)
        )
        return ruleset

    @classmethod
    def load_from_file(cls, path: str | Path) -> "RuleSet":
        """Load RuleSet from JSON file.

        Raises:
            FileNotFoundError: If file does not exist.
            RuleConfigurationError: If file cannot be read, is invalid JSON or
                describes an invalid ruleset.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Rules file not found: {path}")

        try:
            with open(path) as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise RuleConfigurationError(f"Invalid JSON in rules file: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise RuleConfigurationError(f"Cannot read rules file {path}: {e}") from e
        return cls.from_dict(data)

    @classmethod
    def empty(cls, version: str = "v1") -> "RuleSet":
        """Create an empty RuleSet."""
        return cls(version=version, rules=())
