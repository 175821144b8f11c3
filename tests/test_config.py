"""Unit tests for settings."""

import pytest

from student_api.core.config import Settings


class TestSettings:
    """Test cases for the Settings class."""

    def test_database_url_built_from_storage_path(self):
        """Test that DATABASE_URL defaults to a SQLite file at STORAGE_PATH."""
        settings = Settings(STORAGE_PATH="data/students.db")

        assert settings.DATABASE_URL == "sqlite:///data/students.db"

    def test_explicit_database_url_wins(self):
        """Test that an explicit DATABASE_URL is kept."""
        settings = Settings(DATABASE_URL="sqlite://")

        assert settings.DATABASE_URL == "sqlite://"

    def test_api_prefix_trailing_slash(self):
        """Test that the router prefix never ends with a slash."""
        assert Settings(API_PREFIX="/api/").API_PREFIX == "/api"

    def test_reads_environment(self, monkeypatch):
        """Test that values come from environment variables."""
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        settings = Settings()

        assert settings.PORT == 9000
        assert settings.LOG_LEVEL == "DEBUG"


class TestYamlConfig:
    """Test cases for the CONFIG_PATH config file."""

    @pytest.fixture
    def config_file(self, tmp_path, monkeypatch):
        path = tmp_path / "local.yaml"
        path.write_text("ENV: production\nSTORAGE_PATH: storage/prod.db\nPORT: 9001\n")
        monkeypatch.setenv("CONFIG_PATH", str(path))
        return path

    def test_values_from_file(self, config_file):
        """Test that settings are read from the YAML file."""
        settings = Settings()

        assert settings.ENV == "production"
        assert settings.PORT == 9001
        assert settings.DATABASE_URL == "sqlite:///storage/prod.db"

    def test_environment_overrides_file(self, config_file, monkeypatch):
        """Test that an environment variable beats the file."""
        monkeypatch.setenv("PORT", "9100")

        assert Settings().PORT == 9100

    def test_missing_file(self, tmp_path, monkeypatch):
        """Test that a CONFIG_PATH pointing nowhere is an error."""
        monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "missing.yaml"))

        with pytest.raises(FileNotFoundError, match="Config file does not exist"):
            Settings()
