"""
Tests for the configuration loader.
"""
import pytest

from certreview.config import (
    ReviewConfig,
    get_config,
    reload_config,
    ConfigurationError,
    CONFIG_PATH_ENV,
    DATABASE_URL_ENV,
)


class TestReviewConfig:
    """Tests for ReviewConfig class."""

    def test_load_default_config(self):
        """Test loading the default configuration file."""
        config = get_config()
        assert config.version == "1.0.0"
        assert config.path.name == "certreview_config.yaml"

    def test_record_defaults(self):
        """Test analysis record defaults."""
        config = get_config()
        assert config.default_document_code == "RAC-001"
        assert config.default_document_version == "2.1"

    def test_evaluation_settings(self):
        """Test evaluation precision."""
        assert get_config().decimal_places == 4

    def test_api_settings(self):
        """Test CORS origins."""
        assert get_config().cors_origins == ["*"]

    def test_logging_settings(self):
        """Test logging level and format."""
        config = get_config()
        assert config.log_level == "INFO"
        assert "%(levelname)s" in config.log_format

    def test_raw_access(self):
        """Test raw top-level access."""
        config = get_config()
        assert config.get("evaluation")["decimal_places"] == 4
        assert config.get("missing", "fallback") == "fallback"

    def test_empty_sections_use_defaults(self, tmp_path):
        """Test that a section left empty in YAML falls back to defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("records:\nlogging:\n")

        config = ReviewConfig(path)

        assert config.default_document_version == "2.1"
        assert config.log_level == "INFO"


class TestDatabaseUrl:
    """Tests for database URL resolution."""

    def test_file_value(self, tmp_path, monkeypatch):
        """Test the url from the config file."""
        monkeypatch.delenv(DATABASE_URL_ENV, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text('database:\n  url: "sqlite:///./other.db"\n')

        assert ReviewConfig(path).database_url == "sqlite:///./other.db"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        """Test that the environment variable wins."""
        monkeypatch.setenv(DATABASE_URL_ENV, "postgresql://review@localhost/rac")
        path = tmp_path / "config.yaml"
        path.write_text('database:\n  url: "sqlite:///./other.db"\n')

        assert ReviewConfig(path).database_url == "postgresql://review@localhost/rac"

    def test_default_when_unset(self, tmp_path, monkeypatch):
        monkeypatch.delenv(DATABASE_URL_ENV, raising=False)
        path = tmp_path / "config.yaml"
        path.write_text('version: "2.0"\n')

        config = ReviewConfig(path)
        assert config.database_url == "sqlite:///./certreview.db"
        assert config.decimal_places == 4
        assert config.default_document_code == "RAC-001"


class TestConfigErrors:
    """Tests for configuration failures."""

    def test_missing_file(self, tmp_path):
        """Test that a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="not found"):
            ReviewConfig(tmp_path / "absent.yaml")

    def test_invalid_yaml(self, tmp_path):
        """Test that malformed YAML raises ConfigurationError."""
        path = tmp_path / "config.yaml"
        path.write_text("records: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            ReviewConfig(path)

    def test_non_mapping(self, tmp_path):
        """Test that a YAML list is rejected."""
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            ReviewConfig(path)


class TestConfigSingleton:
    """Tests for the cached instance."""

    def test_singleton(self):
        """Test that get_config returns the same instance."""
        assert get_config() is get_config()

    def test_reload(self):
        """Test that reload_config returns a fresh instance."""
        first = get_config()
        second = reload_config()

        assert second is not first
        assert second is get_config()
        assert second.version == first.version

    def test_path_from_environment(self, tmp_path, monkeypatch):
        """Test CERTREVIEW_CONFIG selects the file."""
        path = tmp_path / "custom.yaml"
        path.write_text('version: "9.9.9"\n')
        monkeypatch.setenv(CONFIG_PATH_ENV, str(path))

        config = ReviewConfig()

        assert config.path == path
        assert config.version == "9.9.9"
