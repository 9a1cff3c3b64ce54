"""
Tests for configuration, the data-access handle, and logging setup.
"""

from __future__ import annotations

import pytest
import structlog
from structlog.testing import capture_logs

from climate_registry.core.config import Settings, get_settings
from climate_registry.core.database import Database
from climate_registry.core.logging import configure_logging
from climate_registry.models.reference import Agency


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)
        assert settings.database_url.startswith("postgresql+asyncpg://")
        assert settings.log_format == "json"

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("REGISTRY_DATABASE_URL", "sqlite+aiosqlite:///./from-env.db")
        monkeypatch.setenv("REGISTRY_DB_POOL_SIZE", "12")
        settings = Settings(_env_file=None)
        assert settings.database_url == "sqlite+aiosqlite:///./from-env.db"
        assert settings.db_pool_size == 12

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestDatabase:
    async def test_from_settings_sqlite(self, tmp_path):
        settings = Settings(_env_file=None, database_url=f"sqlite+aiosqlite:///{tmp_path / 'x.db'}")
        db = Database.from_settings(settings)
        try:
            assert db.dialect == "sqlite"
        finally:
            await db.dispose()

    async def test_from_settings_applies_pool_sizing(self):
        settings = Settings(_env_file=None, db_pool_size=7, db_max_overflow=3)
        db = Database.from_settings(settings)
        try:
            assert db.dialect == "postgresql"
            assert db.engine.pool.size() == 7
        finally:
            await db.dispose()

    async def test_transaction_commits(self, db, count_rows):
        async with db.transaction() as session:
            session.add(Agency(name="Bangladesh Water Development Board"))

        assert await count_rows(Agency) == 1

    async def test_transaction_rolls_back_and_reraises(self, db, count_rows):
        with capture_logs() as logs:
            with pytest.raises(RuntimeError, match="boom"):
                async with db.transaction() as session:
                    session.add(Agency(name="Never Stored"))
                    await session.flush()
                    raise RuntimeError("boom")

        assert await count_rows(Agency) == 0
        rollback = [entry for entry in logs if entry["event"] == "database.rollback"]
        assert rollback and rollback[0]["error"] == "RuntimeError"

    async def test_sqlite_enforces_foreign_keys(self, db):
        async with db.engine.connect() as conn:
            result = await conn.exec_driver_sql("PRAGMA foreign_keys")
            assert result.scalar_one() == 1


class TestLogging:
    def teardown_method(self):
        structlog.reset_defaults()

    def test_text_format_uses_console_renderer(self):
        configure_logging("debug", "text")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_json_format_uses_json_renderer(self):
        configure_logging("info", "json")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_level_filters_lower_events(self, capsys):
        configure_logging("WARNING", "json")
        logger = structlog.get_logger()

        logger.info("registry.quiet")
        logger.warning("registry.loud")

        out = capsys.readouterr().out
        assert "registry.quiet" not in out
        assert "registry.loud" in out
