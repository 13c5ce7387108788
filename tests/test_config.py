"""Tests for pi.stylish.config -- environment-driven settings."""

from __future__ import annotations

import logging

import pytest

from pi.stylish.config import Config, get_config, load_config, reset_config, set_config

_VARS = (
    "PI_STYLISH_ELLIPSIS",
    "PI_STYLISH_TAB_WIDTH",
    "PI_STYLISH_WIDTH_CACHE_SIZE",
    "PI_STYLISH_SHIFT_POLICY",
)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadConfig:
    """load_config reads PI_STYLISH_* variables."""

    def test_defaults(self, clean_env: pytest.MonkeyPatch) -> None:
        config = load_config()
        assert config == Config()
        assert config.ellipsis == "…"
        assert config.tab_width == 3
        assert config.width_cache_size == 512
        assert config.shift_policy == "lenient"

    def test_reads_values(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("PI_STYLISH_ELLIPSIS", "...")
        clean_env.setenv("PI_STYLISH_TAB_WIDTH", "8")
        clean_env.setenv("PI_STYLISH_WIDTH_CACHE_SIZE", "0")
        clean_env.setenv("PI_STYLISH_SHIFT_POLICY", "Strict")
        config = load_config()
        assert config.ellipsis == "..."
        assert config.tab_width == 8
        assert config.width_cache_size == 0
        assert config.shift_policy == "strict"

    def test_invalid_int_falls_back(
        self, clean_env: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        clean_env.setenv("PI_STYLISH_TAB_WIDTH", "wide")
        with caplog.at_level(logging.WARNING, logger="pi.stylish.config"):
            config = load_config()
        assert config.tab_width == 3
        assert "PI_STYLISH_TAB_WIDTH" in caplog.text

    def test_negative_int_falls_back(self, clean_env: pytest.MonkeyPatch) -> None:
        clean_env.setenv("PI_STYLISH_WIDTH_CACHE_SIZE", "-1")
        assert load_config().width_cache_size == 512

    def test_unknown_policy_falls_back(
        self, clean_env: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        clean_env.setenv("PI_STYLISH_SHIFT_POLICY", "whatever")
        with caplog.at_level(logging.WARNING, logger="pi.stylish.config"):
            config = load_config()
        assert config.shift_policy == "lenient"
        assert "PI_STYLISH_SHIFT_POLICY" in caplog.text


class TestGlobalConfig:
    """get_config caches; set_config / reset_config replace the cached value."""

    def test_get_returns_same_instance(self, clean_env: pytest.MonkeyPatch) -> None:
        assert get_config() is get_config()

    def test_set_config_overrides(self) -> None:
        custom = Config(ellipsis="~")
        set_config(custom)
        assert get_config() is custom

    def test_reset_rereads_environment(self, clean_env: pytest.MonkeyPatch) -> None:
        assert get_config().ellipsis == "…"
        clean_env.setenv("PI_STYLISH_ELLIPSIS", ">")
        assert get_config().ellipsis == "…"
        reset_config()
        assert get_config().ellipsis == ">"
