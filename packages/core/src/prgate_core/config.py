import os
from pathlib import Path
from typing import Optional

import yaml

from prgate_core.errors import ConfigError

DEFAULT_CONFIG: dict = {
    "require_codeowners_file": False,
    "require_code_owner": True,
    "require_code_owner_review": True,
    "require_codeteams_file": False,
    "require_code_team_review": True,
    "require_approved_review": True,
    "required_mergeable_state": ["clean", "has_hooks", "unstable"],
}

BOOLEAN_KEYS = (
    "require_codeowners_file",
    "require_code_owner",
    "require_code_owner_review",
    "require_codeteams_file",
    "require_code_team_review",
    "require_approved_review",
)


def _as_bool(key: str, value) -> bool:
    # GitHub Actions inputs always arrive as strings.
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ConfigError(f"{key} must be true or false, got {value!r}")


def _as_state_list(value) -> list[str]:
    # Accepts the action input form '["clean","has_hooks"]' as well as a YAML list.
    if value is None:
        return []
    if isinstance(value, str):
        value = yaml.safe_load(value) if value.strip() else []
    if not isinstance(value, (list, tuple)) or not all(isinstance(s, str) for s in value):
        raise ConfigError(f"required_mergeable_state must be a list of state names, got {value!r}")
    return list(value)


def load_config(config_path: str = ".prgate.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prgate.yml in the current directory
      3. CLI argument overrides

    Raises ConfigError when a value cannot be interpreted.
    """
    config = {**DEFAULT_CONFIG, "required_mergeable_state": list(DEFAULT_CONFIG["required_mergeable_state"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigError(f"{config_path} must contain a mapping of settings.")
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    for key in BOOLEAN_KEYS:
        config[key] = _as_bool(key, config[key])
    config["required_mergeable_state"] = _as_state_list(config["required_mergeable_state"])

    # Resolve credentials and workflow context from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["github_actor"] = os.environ.get("GITHUB_ACTOR")
    config["github_repository"] = os.environ.get("GITHUB_REPOSITORY")

    return config
