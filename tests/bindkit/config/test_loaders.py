import pydantic
import pytest

from bindkit.config.loaders import load_file, load_settings
from bindkit.context.context import DuplicateBindingPolicy


class TestLoadFile:
    """Tests for load_file."""

    def test_load_yaml(self, sample_yaml_config):
        """Test loading a YAML file."""
        data = load_file(sample_yaml_config)

        assert data == {
            "name": "inventory",
            "duplicate_bindings": "reject",
            "start_concurrently": False,
        }

    def test_load_json(self, sample_json_config):
        """Test loading a JSON file."""
        data = load_file(sample_json_config)

        assert data["name"] == "orders"

    def test_load_empty(self, empty_config_file):
        """Test empty files load as an empty mapping."""
        assert load_file(empty_config_file) == {}

    def test_missing_file(self, temp_dir):
        """Test missing files raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_file(temp_dir / "missing.yaml")

    def test_directory(self, temp_dir):
        """Test directories raise IsADirectoryError."""
        with pytest.raises(IsADirectoryError):
            load_file(temp_dir)

    def test_unsupported_type(self, temp_dir):
        """Test other file types raise RuntimeError."""
        path = temp_dir / "settings.toml"
        path.write_text("name = 'x'")

        with pytest.raises(RuntimeError, match="Invalid file type"):
            load_file(path)


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self):
        """Test settings without a file use defaults."""
        settings = load_settings()

        assert settings.name == "application"
        assert settings.duplicate_bindings is DuplicateBindingPolicy.OVERWRITE
        assert settings.start_concurrently is True

    def test_from_yaml(self, sample_yaml_config):
        """Test settings are read from a file."""
        settings = load_settings(sample_yaml_config)

        assert settings.name == "inventory"
        assert settings.duplicate_bindings is DuplicateBindingPolicy.REJECT
        assert settings.start_concurrently is False

    def test_from_string_path(self, sample_json_config):
        """Test the path may be given as a string."""
        assert load_settings(str(sample_json_config)).name == "orders"

    def test_overrides_win(self, sample_yaml_config):
        """Test explicit overrides take precedence over the file."""
        settings = load_settings(sample_yaml_config, name="override")

        assert settings.name == "override"

    def test_environment(self, monkeypatch):
        """Test BINDKIT_ variables are read."""
        monkeypatch.setenv("BINDKIT_NAME", "from-env")
        monkeypatch.setenv("BINDKIT_START_CONCURRENTLY", "false")

        settings = load_settings()

        assert settings.name == "from-env"
        assert settings.start_concurrently is False

    def test_file_must_be_mapping(self, temp_dir):
        """Test a file holding a list is refused."""
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(RuntimeError, match="mapping"):
            load_settings(path)

    def test_invalid_policy(self):
        """Test unknown duplicate policies are rejected."""
        with pytest.raises(pydantic.ValidationError):
            load_settings(duplicate_bindings="ignore")

    def test_records_config_path(self, sample_yaml_config):
        """Test the file settings were loaded from is kept on the settings."""
        assert load_settings(sample_yaml_config).config_path == sample_yaml_config

    def test_config_path_from_env(self, monkeypatch, sample_yaml_config):
        """Test the file named by BINDKIT_CONFIG_PATH is loaded without a path."""
        monkeypatch.setenv("BINDKIT_CONFIG_PATH", str(sample_yaml_config))

        settings = load_settings()

        assert settings.name == "inventory"
        assert settings.config_path == sample_yaml_config

    def test_config_path_override(self, sample_json_config):
        """Test config_path given as an override selects the file."""
        assert load_settings(config_path=sample_json_config).name == "orders"

    def test_nested_overrides_merge(self, temp_dir):
        """Test nested overrides keep the nested values of the file."""
        path = temp_dir / "logging.yaml"
        path.write_text("logging:\n  level: warning\n  format: '%(message)s'\n")

        settings = load_settings(path, logging={"level": "debug"})

        assert settings.logging.level == "DEBUG"
        assert settings.logging.format == "%(message)s"
