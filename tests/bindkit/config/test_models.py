import logging

import pydantic
import pytest

from bindkit.config.base import Settings
from bindkit.config.models import ApplicationSettings, LoggingSettings
from bindkit.context.context import DuplicateBindingPolicy


class TestApplicationSettings:
    """Tests for ApplicationSettings."""

    def test_is_settings(self):
        """Test application settings extend the base settings."""
        assert issubclass(ApplicationSettings, Settings)

    def test_policy_by_value(self):
        """Test the duplicate policy is parsed from its value."""
        settings = ApplicationSettings(duplicate_bindings="reject")

        assert settings.duplicate_bindings is DuplicateBindingPolicy.REJECT

    def test_name_stripped(self):
        """Test surrounding whitespace is removed from the name."""
        assert ApplicationSettings(name="  inventory ").name == "inventory"

    def test_empty_name(self):
        """Test blank names are rejected."""
        with pytest.raises(pydantic.ValidationError):
            ApplicationSettings(name="   ")

    def test_dotenv(self, tmp_path):
        """Test values are read from a .env file in the working directory."""
        (tmp_path / ".env").write_text("BINDKIT_NAME=from-dotenv\nUNRELATED=1\n")

        assert ApplicationSettings().name == "from-dotenv"

    def test_config_path_default(self):
        """Test no configuration file is set by default."""
        assert ApplicationSettings().config_path is None

    def test_config_path_expands_user(self, monkeypatch, tmp_path):
        """Test a leading tilde in config_path is expanded."""
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("USERPROFILE", str(tmp_path))

        settings = ApplicationSettings(config_path="~/app.yaml")

        assert settings.config_path == tmp_path / "app.yaml"

    def test_config_path_expands_env_vars(self, monkeypatch, tmp_path):
        """Test environment variables in config_path are expanded."""
        monkeypatch.setenv("BINDKIT_TEST_CONFIG_DIR", str(tmp_path))

        settings = ApplicationSettings(config_path="$BINDKIT_TEST_CONFIG_DIR/app.yaml")

        assert settings.config_path == tmp_path / "app.yaml"

    def test_config_path_from_env(self, monkeypatch, tmp_path):
        """Test config_path is read from the prefixed environment variable."""
        monkeypatch.setenv("BINDKIT_CONFIG_PATH", str(tmp_path / "app.json"))

        assert ApplicationSettings().config_path == tmp_path / "app.json"


class TestLoggingSettings:
    """Tests for the nested logging settings."""

    def test_defaults(self):
        """Test the application logger defaults to INFO."""
        settings = ApplicationSettings()

        assert isinstance(settings.logging, LoggingSettings)
        assert settings.logging.level == "INFO"
        assert "%(message)s" in settings.logging.format

    def test_level_normalized(self):
        """Test level names are case insensitive and numeric levels accepted."""
        assert LoggingSettings(level=" debug ").level == "DEBUG"
        assert LoggingSettings(level=logging.WARNING).level == "WARNING"

    def test_unknown_level(self):
        """Test unknown level names are rejected."""
        with pytest.raises(pydantic.ValidationError):
            LoggingSettings(level="chatty")

    def test_nested_env(self, monkeypatch):
        """Test nested values are read from underscore separated variables."""
        monkeypatch.setenv("BINDKIT_LOGGING_LEVEL", "debug")
        monkeypatch.setenv("BINDKIT_LOGGING_FORMAT", "%(name)s: %(message)s")

        settings = ApplicationSettings()

        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "%(name)s: %(message)s"

    def test_nested_env_single_level(self, monkeypatch):
        """Test only the first underscore after the field name nests."""
        monkeypatch.setenv("BINDKIT_START_CONCURRENTLY", "false")

        assert ApplicationSettings().start_concurrently is False

    def test_nested_from_mapping(self):
        """Test nested values are accepted as a mapping."""
        settings = ApplicationSettings(logging={"level": "ERROR"})

        assert settings.logging.level == "ERROR"
