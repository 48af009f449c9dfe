"""Tests for configuration loading."""

import pytest

from prgate_core.config import load_config
from prgate_core.errors import ConfigError


def test_defaults_applied_when_no_config_file(tmp_path):
    config = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    assert config["require_codeowners_file"] is False
    assert config["require_code_owner"] is True
    assert config["require_code_owner_review"] is True
    assert config["require_codeteams_file"] is False
    assert config["require_code_team_review"] is True
    assert config["require_approved_review"] is True
    assert config["required_mergeable_state"] == ["clean", "has_hooks", "unstable"]


def test_config_file_overrides_defaults(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("require_code_owner: false\nrequired_mergeable_state:\n  - clean\n")
    config = load_config(config_path=str(cfg))
    assert config["require_code_owner"] is False
    assert config["required_mergeable_state"] == ["clean"]


def test_cli_overrides_config_file(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("require_code_team_review: false\n")
    config = load_config(config_path=str(cfg), cli_overrides={"require_code_team_review": True})
    assert config["require_code_team_review"] is True


def test_none_cli_overrides_ignored(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("require_approved_review: false\n")
    config = load_config(config_path=str(cfg), cli_overrides={"require_approved_review": None})
    assert config["require_approved_review"] is False


def test_action_style_string_inputs(tmp_path):
    config = load_config(
        config_path=str(tmp_path / "nonexistent.yml"),
        cli_overrides={"require_codeowners_file": "TRUE", "required_mergeable_state": '["clean","behind"]'},
    )
    assert config["require_codeowners_file"] is True
    assert config["required_mergeable_state"] == ["clean", "behind"]


def test_empty_mergeable_state_list_disables_check(tmp_path):
    config = load_config(config_path=str(tmp_path / "none.yml"), cli_overrides={"required_mergeable_state": "[]"})
    assert config["required_mergeable_state"] == []


def test_invalid_flag_raises(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("require_code_owner: sometimes\n")
    with pytest.raises(ConfigError, match="require_code_owner"):
        load_config(config_path=str(cfg))


def test_invalid_mergeable_state_raises(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("required_mergeable_state: 3\n")
    with pytest.raises(ConfigError, match="required_mergeable_state"):
        load_config(config_path=str(cfg))


def test_non_mapping_config_file_raises(tmp_path):
    cfg = tmp_path / ".gate.yml"
    cfg.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError):
        load_config(config_path=str(cfg))


def test_env_vars_loaded(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "gh-token")
    monkeypatch.setenv("GITHUB_ACTOR", "octocat")
    monkeypatch.setenv("GITHUB_REPOSITORY", "octo/repo")
    config = load_config(config_path="nonexistent.yml")
    assert config["github_token"] == "gh-token"
    assert config["github_actor"] == "octocat"
    assert config["github_repository"] == "octo/repo"


def test_state_list_is_not_shared_reference(tmp_path):
    config_a = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_b = load_config(config_path=str(tmp_path / "nonexistent.yml"))
    config_a["required_mergeable_state"].append("dirty")
    assert config_b["required_mergeable_state"] == ["clean", "has_hooks", "unstable"]
