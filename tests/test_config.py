# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Tests for tracker configuration."""

import pytest

from bug_tracker import BugTrackerConfig, EnvConfigProvider


class TestEnvConfigProvider:
    """Tests for EnvConfigProvider."""

    def test_get(self):
        env = EnvConfigProvider({"KEY": "value"})

        assert env.get("KEY") == "value"
        assert env.get("MISSING", "default") == "default"

    @pytest.mark.parametrize("value,expected", [
        ("true", True), ("1", True), ("YES", True), ("on", True),
        ("false", False), ("0", False), ("no", False), ("off", False),
    ])
    def test_get_bool(self, value, expected):
        assert EnvConfigProvider({"FLAG": value}).get_bool("FLAG") is expected

    def test_blank_values_count_as_unset(self):
        env = EnvConfigProvider({"KEY": "   ", "FLAG": ""})

        assert env.get("KEY", "default") == "default"
        assert env.get_bool("FLAG", True) is True
        assert BugTrackerConfig.from_env({"SENTRY_DSN": " "}).dsn is None

    def test_get_bool_invalid_uses_default(self):
        assert EnvConfigProvider({"FLAG": "maybe"}).get_bool("FLAG", True) is True

    def test_get_list(self):
        env = EnvConfigProvider({"ITEMS": " production, staging ,,qa "})

        assert env.get_list("ITEMS") == ["production", "staging", "qa"]
        assert env.get_list("MISSING", ["a"]) == ["a"]


class TestBugTrackerConfig:
    """Tests for BugTrackerConfig."""

    def test_defaults(self):
        """Test the default configuration."""
        config = BugTrackerConfig()

        assert config.sink == "sentry"
        assert config.enabled_environments == ["production", "staging"]
        assert config.environment is None
        assert config.trace_filter is None
        assert config.diagnostic_mode is False
        assert config.dsn is None
        assert config.logger_name is None

    def test_default_environments_not_shared(self):
        """Test that each config gets its own list."""
        first = BugTrackerConfig()
        first.enabled_environments.append("qa")

        assert BugTrackerConfig().enabled_environments == ["production", "staging"]

    def test_from_empty_env(self):
        """Test that an empty environment gives the defaults."""
        assert BugTrackerConfig.from_env({}) == BugTrackerConfig()

    def test_from_env(self):
        """Test reading every field from the environment."""
        config = BugTrackerConfig.from_env({
            "BUG_TRACKER_SINK": "null",
            "BUG_TRACKER_ENABLED_ENVIRONMENTS": "production,qa",
            "BUG_TRACKER_ENVIRONMENT": "qa",
            "BUG_TRACKER_TRACE_FILTER": "my_app",
            "BUG_TRACKER_DIAGNOSTIC_MODE": "true",
            "SENTRY_DSN": "https://key@sentry.example/1",
            "BUG_TRACKER_LOGGER_NAME": "my_app.errors",
        })

        assert config == BugTrackerConfig(
            sink="null",
            enabled_environments=["production", "qa"],
            environment="qa",
            trace_filter="my_app",
            diagnostic_mode=True,
            dsn="https://key@sentry.example/1",
            logger_name="my_app.errors",
        )

    def test_app_env_fallback(self):
        """Test that APP_ENV is used when no tracker environment is set."""
        assert BugTrackerConfig.from_env({"APP_ENV": "staging"}).environment == "staging"

    def test_diagnostic_mode_follows_development(self):
        """Test that diagnostic mode defaults on in development."""
        assert BugTrackerConfig.from_env({"APP_ENV": "development"}).diagnostic_mode is True
        assert BugTrackerConfig.from_env({"APP_ENV": "production"}).diagnostic_mode is False

    def test_diagnostic_mode_explicit_off_in_development(self):
        config = BugTrackerConfig.from_env({
            "APP_ENV": "development",
            "BUG_TRACKER_DIAGNOSTIC_MODE": "false",
        })

        assert config.diagnostic_mode is False

    def test_overrides_win(self):
        """Test that explicit overrides beat the environment."""
        config = BugTrackerConfig.from_env({"BUG_TRACKER_SINK": "sentry"}, sink="silent")

        assert config.sink == "silent"

    def test_reads_os_environ(self, monkeypatch):
        """Test that os.environ is used by default."""
        monkeypatch.setenv("BUG_TRACKER_TRACE_FILTER", "billing")

        assert BugTrackerConfig.from_env().trace_filter == "billing"

    @pytest.mark.parametrize("environment,expected", [
        (None, True),
        ("production", True),
        ("staging", True),
        ("development", False),
        ("test", False),
    ])
    def test_is_enabled(self, environment, expected):
        assert BugTrackerConfig(environment=environment).is_enabled() is expected
