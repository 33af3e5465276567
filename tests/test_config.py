"""Tests for application settings."""

import pytest
from pydantic import ValidationError

from book_catalog.config import Settings

VALID_KEY = "a" * 32


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        monkeypatch.delenv("AUTO_CREATE_TABLES", raising=False)

        settings = Settings(secret_key=VALID_KEY, _env_file=None)

        assert settings.app_name == "Book Catalog"
        assert settings.database_url == "sqlite:///./book_catalog.db"
        assert settings.db_pool_size == 5
        assert settings.auto_create_tables is True
        assert not settings.is_production

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DB_POOL_SIZE", "12")
        monkeypatch.setenv("ENVIRONMENT", "Production")

        settings = Settings(secret_key=VALID_KEY, _env_file=None)

        assert settings.db_pool_size == 12
        assert settings.is_production

    @pytest.mark.parametrize(
        "key",
        ["REPLACE_WITH_YOUR_GENERATED_SECRET_KEY", "change-me-" + "x" * 30, "short"],
    )
    def test_rejects_weak_secret_key(self, key):
        with pytest.raises(ValidationError):
            Settings(secret_key=key, _env_file=None)

    def test_log_level_uppercased(self):
        assert Settings(secret_key=VALID_KEY, log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_rejects_unknown_log_level(self):
        with pytest.raises(ValidationError):
            Settings(secret_key=VALID_KEY, log_level="LOUD", _env_file=None)

    def test_rejects_zero_pool_size(self):
        with pytest.raises(ValidationError):
            Settings(secret_key=VALID_KEY, db_pool_size=0, _env_file=None)
