"""Tests for the environment validation script."""

import importlib.util
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "utils" / "validate_env.py"


@pytest.fixture
def validate_env():
    spec = importlib.util.spec_from_file_location("validate_env", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ("COINGECKO_API_KEY", "COINGECKO_BASE_URL", "CRYPTOMAP_CONFIG_DIR"):
        monkeypatch.delenv(var, raising=False)


def test_missing_api_key_fails(validate_env):
    assert validate_env.validate_environment() is False


def test_api_key_without_prefix_only_warns(validate_env, monkeypatch, caplog):
    monkeypatch.setenv("COINGECKO_API_KEY", "abc123")

    assert validate_env.validate_environment() is True
    assert "does not look like a CoinGecko key" in caplog.text


def test_non_http_base_url_fails(validate_env, monkeypatch):
    monkeypatch.setenv("COINGECKO_API_KEY", "CG-test")
    monkeypatch.setenv("COINGECKO_BASE_URL", "ftp://example.com")

    assert validate_env.validate_environment() is False


def test_missing_config_files_are_not_fatal(validate_env, monkeypatch, tmp_path, caplog):
    monkeypatch.setenv("CRYPTOMAP_CONFIG_DIR", str(tmp_path))

    assert validate_env.check_config_files() is True
    assert "coingecko.yaml" in caplog.text
