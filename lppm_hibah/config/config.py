"""Configuration management for the hibah rule engine."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


REQUIRED_VARS = [
    "SUPABASE_URL",
    "SUPABASE_KEY",
]


class Config(BaseSettings):
    """Application configuration from environment variables."""

    # Required
    supabase_url: str
    supabase_key: str

    # Optional
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


class RulePolicy(BaseSettings):
    """Business-rule knobs, read from LPPM_-prefixed env vars.

    Team-size bounds apply at submission time only; defaults are the
    portal's 5-7 accepted members.
    """

    team_min_members: int = 5
    team_max_members: int = 7
    min_funding_score: float = 70.0
    review_weights_path: Optional[str] = None
    budget_years_back: int = 1
    budget_years_ahead: int = 5

    model_config = SettingsConfigDict(
        env_prefix="LPPM_", env_file=".env", case_sensitive=False, extra="ignore"
    )


def validate_config() -> Config:
    """Load and validate configuration from environment.

    Raises ValueError with descriptive message listing ALL missing
    required variables (not just the first one).
    """
    try:
        return Config()  # type: ignore[call-arg]
    except Exception as exc:
        missing = []
        err_str = str(exc)
        for var in REQUIRED_VARS:
            if var.lower() in err_str.lower():
                missing.append(var)
        if missing:
            names = ", ".join(missing)
            raise ValueError(
                f"Missing required environment variable(s): {names}. "
                "Please set them in your .env file or environment."
            ) from exc
        raise


def load_config() -> Config:
    """Load configuration from environment (startup entry point)."""
    return validate_config()


def load_policy() -> RulePolicy:
    """Load rule policy; every field has a default, so this never fails on missing vars."""
    policy = RulePolicy()
    if policy.team_min_members > policy.team_max_members:
        raise ValueError(
            f"LPPM_TEAM_MIN_MEMBERS ({policy.team_min_members}) must not exceed "
            f"LPPM_TEAM_MAX_MEMBERS ({policy.team_max_members})"
        )
    return policy
