import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "repo": "bitcoin/bitcoin",
    "project_name": "Bitcoin Core",
    "mode": "ack",
    "output": "index.html",
    "format": "html",
    "state": "all",  # pull request state filter passed to the API
    "pr_limit": 50,  # pull requests scanned per run without a token
    "pr_limit_authenticated": 250,  # ... and with one
    "request_delay": 0.2,  # seconds between comment fetches
    "bot_accounts": ["bitcoin-core-ci"],
}


def load_config(config_path: str = ".ackamoto.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .ackamoto.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "bot_accounts": list(DEFAULT_CONFIG["bot_accounts"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    # An empty `bot_accounts:` key loads as None.
    config["bot_accounts"] = list(config.get("bot_accounts") or [])

    if cli_overrides:
        config = apply_overrides(config, cli_overrides)

    config["github_token"] = resolve_github_token()

    return config


def apply_overrides(config: dict, overrides: dict) -> dict:
    """Return a copy of ``config`` with every non-None override applied."""
    merged = dict(config)
    for key, value in overrides.items():
        if value is not None:
            merged[key] = value
    return merged


def resolve_pr_limit(config: dict) -> int:
    """Pick the pull request ceiling for this run from token presence.

    An explicit ``limit`` (e.g. from ``--limit``) wins over both defaults.
    """
    if config.get("limit") is not None:
        limit = int(config["limit"])
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")
        return limit
    if config.get("github_token"):
        return int(config["pr_limit_authenticated"])
    return int(config["pr_limit"])


def resolve_github_token() -> Optional[str]:
    """Return the access token from GITHUB_TOKEN, or None.

    The token is optional: it only raises the number of pull requests a run
    scans (see resolve_pr_limit). Blank values count as unset.
    """
    token = os.environ.get("GITHUB_TOKEN", "").strip()
    return token or None
