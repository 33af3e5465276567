"""
Tests for the Database gateway and application startup.
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import text
from sqlalchemy.pool import StaticPool

from book_catalog.config import get_settings
from book_catalog.database import Database, engine_options
from book_catalog.exceptions import StoreUnavailable
from book_catalog.main import create_app

UNREACHABLE_URL = "sqlite:////nonexistent-directory/book_catalog.db"


class TestEngineOptions:
    def test_postgres_uses_pool_settings(self):
        options = engine_options("postgresql://user:pw@localhost/books", 7, 3)

        assert options == {"pool_pre_ping": True, "pool_size": 7, "max_overflow": 3}

    def test_sqlite_file(self):
        options = engine_options("sqlite:///./books.db", 5, 10)

        assert options["connect_args"] == {"check_same_thread": False}
        assert options["pool_size"] == 5
        assert "poolclass" not in options

    @pytest.mark.parametrize("url", ["sqlite://", "sqlite:///:memory:"])
    def test_sqlite_memory_uses_static_pool(self, url):
        options = engine_options(url, 5, 10)

        assert options["poolclass"] is StaticPool
        assert "pool_size" not in options


class TestDatabase:
    def test_requires_url_or_engine(self):
        with pytest.raises(ValueError):
            Database()

    def test_verify_connection(self, database):
        database.verify_connection()
        assert database.is_healthy()

    def test_sessions_share_the_pool(self, database):
        with database.session() as first, database.session() as second:
            assert first is not second
            assert first.get_bind() is second.get_bind() is database.engine

    def test_create_tables(self, database):
        with database.session() as db:
            assert db.execute(text("SELECT COUNT(*) FROM books")).scalar_one() == 0

    def test_sqlite_lower_folds_unicode(self, database):
        with database.session() as db:
            assert db.execute(text("SELECT lower('ÉMILE Ørsted')")).scalar_one() == "émile ørsted"

    def test_unreachable_database(self):
        database = Database(UNREACHABLE_URL)

        with pytest.raises(StoreUnavailable):
            database.verify_connection()
        assert not database.is_healthy()

        database.dispose()


class TestStartup:
    def test_startup_fails_without_database(self):
        """The application refuses to start when the store is unreachable."""
        app = create_app(get_settings(), database=Database(UNREACHABLE_URL))

        with pytest.raises(StoreUnavailable):
            with TestClient(app):
                pass

    def test_startup_creates_tables(self, tmp_path):
        settings = get_settings().model_copy(update={"auto_create_tables": True})
        database = Database(f"sqlite:///{tmp_path / 'fresh.db'}")
        app = create_app(settings, database=database)

        with TestClient(app) as client:
            response = client.get("/")

        assert response.status_code == 200
        assert "No books found" in response.text
