"""
Tests for reskilling/config/settings.py.

What we test
------------
get_settings():
  - Defaults when no environment overrides are set.
  - Environment overrides for data dir, budget cut and limits.
  - Out-of-range or non-numeric budget cuts raise ValueError.
  - An explicit budget cut replaces the environment value before validation.
"""

from __future__ import annotations

import pytest

from reskilling.config.settings import get_settings, validate_budget_cut

ENV_VARS = [
    "RESKILLING_DATA_DIR",
    "RESKILLING_BUDGET_CUT",
    "RESKILLING_TOP_ROLES",
    "RESKILLING_INSIGHT_LIMIT",
    "RESKILLING_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = get_settings()
    assert settings.budget_cut_percentage == 20.0
    assert settings.top_roles_limit == 10
    assert settings.insight_limit == 3
    assert settings.log_level == "INFO"
    assert settings.data_dir == settings.base_dir / "db"


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("RESKILLING_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("RESKILLING_BUDGET_CUT", "35")
    monkeypatch.setenv("RESKILLING_TOP_ROLES", "5")
    monkeypatch.setenv("RESKILLING_LOG_LEVEL", "debug")

    settings = get_settings()
    assert settings.data_dir == tmp_path
    assert settings.budget_cut_percentage == 35.0
    assert settings.top_roles_limit == 5
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value", ["5", "50.5", "abc"])
def test_invalid_budget_cut(monkeypatch, value):
    monkeypatch.setenv("RESKILLING_BUDGET_CUT", value)
    with pytest.raises(ValueError, match="RESKILLING_BUDGET_CUT|Budget cut"):
        get_settings()


@pytest.mark.parametrize("value", [10, 27.5, 50])
def test_budget_cut_bounds_are_inclusive(value):
    assert validate_budget_cut(value) == value


def test_explicit_budget_cut_skips_environment(monkeypatch):
    monkeypatch.setenv("RESKILLING_BUDGET_CUT", "abc")
    assert get_settings(budget_cut=30).budget_cut_percentage == 30


def test_explicit_budget_cut_is_validated():
    with pytest.raises(ValueError, match="Budget cut"):
        get_settings(budget_cut=60)
