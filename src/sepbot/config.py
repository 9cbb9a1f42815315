"""Configuration and LangSmith setup."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from sepbot.rules import (
    MAINTAINER_INACTIVITY_DAYS,
    PING_COOLDOWN_DAYS,
    get_staleness_rule,
)
from sepbot.sep.models import SEPState

# Default values
DEFAULT_TARGET_OWNER = "modelcontextprotocol"
DEFAULT_TARGET_REPO = "modelcontextprotocol"
DEFAULT_MAINTAINERS_TEAM = "core-maintainers"
DEFAULT_LOG_LEVEL = "info"

# Threshold defaults come from the rules table
_PROPOSAL_RULE = get_staleness_rule(SEPState.PROPOSAL)
_DRAFT_RULE = get_staleness_rule(SEPState.DRAFT)
_ACCEPTED_RULE = get_staleness_rule(SEPState.ACCEPTED)

DEFAULT_PROPOSAL_PING_DAYS = _PROPOSAL_RULE.ping_after_days if _PROPOSAL_RULE else 90
DEFAULT_PROPOSAL_DORMANT_DAYS = (
    _PROPOSAL_RULE.dormant_after_days
    if _PROPOSAL_RULE and _PROPOSAL_RULE.dormant_after_days
    else 180
)
DEFAULT_DRAFT_PING_DAYS = _DRAFT_RULE.ping_after_days if _DRAFT_RULE else 90
DEFAULT_ACCEPTED_PING_DAYS = _ACCEPTED_RULE.ping_after_days if _ACCEPTED_RULE else 30

# Config file path, relative to the repository root
CONFIG_PATH = ".github/sep-lifecycle.yml"

# Environment variable -> ThresholdsConfig attribute
THRESHOLD_ENV_VARS = {
    "PROPOSAL_PING_DAYS": "proposal_ping_days",
    "PROPOSAL_DORMANT_DAYS": "proposal_dormant_days",
    "DRAFT_PING_DAYS": "draft_ping_days",
    "ACCEPTED_PING_DAYS": "accepted_ping_days",
    "MAINTAINER_INACTIVITY_DAYS": "maintainer_inactivity_days",
    "PING_COOLDOWN_DAYS": "ping_cooldown_days",
}


class ConfigError(ValueError):
    """Raised when configuration is missing or malformed."""


@dataclass
class AuthConfig:
    """GitHub credentials: either a token or GitHub App credentials."""

    github_token: Optional[str] = None
    app_id: Optional[str] = None
    app_private_key: Optional[str] = None

    @property
    def has_token(self) -> bool:
        return bool(self.github_token)

    @property
    def has_app_credentials(self) -> bool:
        return bool(self.app_id and self.app_private_key)


@dataclass
class ThresholdsConfig:
    """Timing thresholds in days."""

    proposal_ping_days: int = DEFAULT_PROPOSAL_PING_DAYS
    proposal_dormant_days: int = DEFAULT_PROPOSAL_DORMANT_DAYS
    draft_ping_days: int = DEFAULT_DRAFT_PING_DAYS
    accepted_ping_days: int = DEFAULT_ACCEPTED_PING_DAYS
    maintainer_inactivity_days: int = MAINTAINER_INACTIVITY_DAYS
    ping_cooldown_days: int = PING_COOLDOWN_DAYS


@dataclass
class SEPBotConfig:
    """Main configuration class."""

    auth: AuthConfig = field(default_factory=AuthConfig)
    target_owner: str = DEFAULT_TARGET_OWNER
    target_repo: str = DEFAULT_TARGET_REPO
    maintainers_team: str = DEFAULT_MAINTAINERS_TEAM
    thresholds: ThresholdsConfig = field(default_factory=ThresholdsConfig)
    dry_run: bool = False
    discord_webhook_url: Optional[str] = None
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def full_repo(self) -> str:
        return f"{self.target_owner}/{self.target_repo}"


def _parse_int(key: str, value: object) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        raise ConfigError(f"{key} must be a number, got: {value}") from None


def _mapping(key: str, value: object) -> dict:
    """A config section as a dict; a missing or empty section is an empty dict."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{key} must be a mapping, got: {type(value).__name__}")
    return value


def _parse_bool(value: object) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() == "true"


def load_config(repo_path: Optional[Path] = None, require_auth: bool = True) -> SEPBotConfig:
    """Load sepbot configuration.

    Priority (highest to lowest):
    1. Environment variables (GITHUB_TOKEN, PROPOSAL_PING_DAYS, etc.)
    2. Repo config file (.github/sep-lifecycle.yml)
    3. Defaults derived from sepbot.rules

    Credentials are only read from the environment.

    Args:
        repo_path: Path to repository root. Defaults to current directory.
        require_auth: Raise ConfigError when no credentials are configured.

    Returns:
        SEPBotConfig instance
    """
    config = SEPBotConfig()

    if repo_path is None:
        repo_path = Path.cwd()

    config_file = repo_path / CONFIG_PATH
    if config_file.exists():
        with open(config_file) as f:
            data = _mapping(CONFIG_PATH, yaml.safe_load(f))

        # Parse target
        target = _mapping("target", data.get("target"))
        config.target_owner = target.get("owner") or DEFAULT_TARGET_OWNER
        config.target_repo = target.get("repo") or DEFAULT_TARGET_REPO
        config.maintainers_team = data.get("maintainers_team") or DEFAULT_MAINTAINERS_TEAM

        # Parse thresholds
        thresholds = _mapping("thresholds", data.get("thresholds"))
        for attr in THRESHOLD_ENV_VARS.values():
            if thresholds.get(attr) is not None:
                setattr(config.thresholds, attr, _parse_int(attr, thresholds[attr]))

        if data.get("dry_run") is not None:
            config.dry_run = _parse_bool(data["dry_run"])
        config.discord_webhook_url = data.get("discord_webhook_url") or None
        config.log_level = str(data.get("log_level") or DEFAULT_LOG_LEVEL)

    # Override with environment variables
    config.auth = AuthConfig(
        github_token=os.environ.get("GITHUB_TOKEN") or None,
        app_id=os.environ.get("APP_ID") or None,
        app_private_key=os.environ.get("APP_PRIVATE_KEY") or None,
    )
    if env_owner := os.environ.get("TARGET_OWNER"):
        config.target_owner = env_owner
    if env_repo := os.environ.get("TARGET_REPO"):
        config.target_repo = env_repo
    if env_team := os.environ.get("MAINTAINERS_TEAM"):
        config.maintainers_team = env_team
    for key, attr in THRESHOLD_ENV_VARS.items():
        if env_value := os.environ.get(key):
            setattr(config.thresholds, attr, _parse_int(key, env_value))
    if env_dry_run := os.environ.get("DRY_RUN"):
        config.dry_run = _parse_bool(env_dry_run)
    if env_webhook := os.environ.get("DISCORD_WEBHOOK_URL"):
        config.discord_webhook_url = env_webhook
    if env_log_level := os.environ.get("LOG_LEVEL"):
        config.log_level = env_log_level

    # Require either a token or both app credentials
    if require_auth and not (config.auth.has_token or config.auth.has_app_credentials):
        raise ConfigError(
            "Authentication required: set GITHUB_TOKEN or both APP_ID and APP_PRIVATE_KEY"
        )

    return config


def setup_langsmith() -> bool:
    """Configure LangSmith tracing if API key is available.

    Returns:
        True if LangSmith is enabled, False otherwise.
    """
    if not os.environ.get("LANGCHAIN_API_KEY"):
        os.environ["LANGCHAIN_TRACING_V2"] = "false"
        return False

    os.environ.setdefault("LANGCHAIN_TRACING_V2", "true")
    os.environ.setdefault("LANGCHAIN_PROJECT", "sepbot")
    return True
