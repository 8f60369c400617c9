"""
Configuration for the comment rule engine.

This module provides configuration dataclasses for engine settings,
per-rule overrides and parameters, and merging of layered settings.
Configuration is built from dictionaries; reading them from disk is
left to the caller.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RuleConfig:
    """Configuration for a single rule."""

    enabled: bool = True
    severity_override: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleConfig":
        """Create RuleConfig from dictionary."""
        return cls(
            enabled=data.get("enabled", True),
            severity_override=data.get("severity"),
            parameters=data.get("parameters", {}),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {"enabled": self.enabled}
        if self.severity_override:
            result["severity"] = self.severity_override
        if self.parameters:
            result["parameters"] = self.parameters
        return result


@dataclass
class PerformanceConfig:
    """Performance configuration for multi-file scans."""

    parallel_execution: bool = True
    max_parallel_workers: int = 4

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PerformanceConfig":
        """Create PerformanceConfig from dictionary."""
        return cls(
            parallel_execution=data.get("parallelExecution", True),
            max_parallel_workers=data.get("maxParallelWorkers", 4),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "parallelExecution": self.parallel_execution,
            "maxParallelWorkers": self.max_parallel_workers,
        }


@dataclass
class RuleEngineConfig:
    """Configuration for the rule engine."""

    # Global settings
    enabled: bool = True
    continue_on_error: bool = True

    # Performance settings
    performance: PerformanceConfig = field(default_factory=PerformanceConfig)

    # Per-rule settings
    rules: dict[str, RuleConfig] = field(default_factory=dict)

    def is_rule_enabled(self, rule_id: str) -> bool:
        """Check if a rule is enabled.

        Args:
            rule_id: The rule identifier

        Returns:
            True if the rule is enabled, False otherwise
        """
        if not self.enabled:
            return False

        if rule_id in self.rules:
            return self.rules[rule_id].enabled

        return True

    def get_rule_config(self, rule_id: str) -> RuleConfig:
        """Get configuration for a specific rule.

        Args:
            rule_id: The rule identifier

        Returns:
            RuleConfig for the rule (default if not configured)
        """
        return self.rules.get(rule_id, RuleConfig())

    def get_rule_parameter(
        self, rule_id: str, param_name: str, default: Any = None
    ) -> Any:
        """Get a specific parameter for a rule.

        Args:
            rule_id: The rule identifier
            param_name: The parameter name
            default: Default value if not configured

        Returns:
            The parameter value or default
        """
        config = self.get_rule_config(rule_id)
        return config.parameters.get(param_name, default)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuleEngineConfig":
        """Create RuleEngineConfig from dictionary."""
        config = cls(
            enabled=data.get("enabled", True),
            continue_on_error=data.get("continueOnError", True),
        )

        if "performance" in data:
            config.performance = PerformanceConfig.from_dict(data["performance"])

        if "rules" in data:
            for rule_id, rule_data in data["rules"].items():
                config.rules[rule_id] = RuleConfig.from_dict(rule_data)

        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "enabled": self.enabled,
            "continueOnError": self.continue_on_error,
            "performance": self.performance.to_dict(),
            "rules": {k: v.to_dict() for k, v in self.rules.items()},
        }

    def merge(self, other: "RuleEngineConfig") -> "RuleEngineConfig":
        """Merge another config into this one (other takes precedence).

        Args:
            other: Configuration to merge in

        Returns:
            New RuleEngineConfig with merged settings
        """
        result = RuleEngineConfig(
            enabled=other.enabled,
            continue_on_error=other.continue_on_error,
            performance=PerformanceConfig(
                parallel_execution=other.performance.parallel_execution,
                max_parallel_workers=other.performance.max_parallel_workers,
            ),
        )

        result.rules = dict(self.rules)
        result.rules.update(other.rules)

        return result
