"""Environment-driven configuration."""

from .config import Config, RulePolicy, load_config, load_policy, validate_config

__all__ = ["Config", "RulePolicy", "load_config", "load_policy", "validate_config"]
