"""Tests for settings loaded from the environment."""

from pathlib import Path

import pytest

from jsrcli.config_manager import DEFAULT_JSR_URL, ConfigManager, Settings


@pytest.fixture
def manager():
    return ConfigManager()


def test_defaults(manager):
    settings = manager.load_from_env({})
    assert settings.jsr_url == DEFAULT_JSR_URL
    assert settings.npm_registry_url == "https://npm.jsr.io"
    assert settings.deno_bin_path is None
    assert settings.user_agent is None
    assert settings.debug is False
    assert settings.cache_dir == str(Path.home() / ".cache" / "jsr-cli")


def test_environment_values(manager):
    settings = manager.load_from_env(
        {
            "JSR_URL": "http://jsr.test/",
            "DENO_BIN_PATH": "/usr/local/bin/deno",
            "npm_config_user_agent": "pnpm/8.14.3 npm/? node/v20.11.0",
            "XDG_CACHE_HOME": "/tmp/cache",
        }
    )
    assert settings.jsr_url == "http://jsr.test"
    assert settings.npm_compat_url == "http://npm.jsr.test"
    assert settings.deno_bin_path == "/usr/local/bin/deno"
    assert settings.user_agent.startswith("pnpm/")
    assert settings.cache_dir == str(Path("/tmp/cache") / "jsr-cli")


@pytest.mark.parametrize(
    "value,expected",
    [("1", True), ("true", True), ("YES", True), ("on", True), ("0", False), ("false", False), ("", False), ("jsr:*", False)],
)
def test_debug_env(manager, value, expected):
    assert manager.load_from_env({"DEBUG": value}).debug is expected


def test_cli_debug_overrides_env(manager):
    settings = manager.load(debug=True, environ={})
    assert settings.debug is True


def test_merge_keeps_env_debug(manager):
    settings = manager.merge_config_and_args(Settings(debug=True), debug=False)
    assert settings.debug is True


def test_npm_compat_url_default():
    assert Settings().npm_compat_url == "https://npm.jsr.io"
