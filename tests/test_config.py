import pytest
from pydantic import ValidationError

from credit_updater.core.config import Settings


class TestSettings:

    @pytest.mark.parametrize("url,expected", [
        ("postgres://gcd:pw@db:5432/gcd", "postgresql+asyncpg://gcd:pw@db:5432/gcd"),
        ("postgresql://gcd:pw@db:5432/gcd", "postgresql+asyncpg://gcd:pw@db:5432/gcd"),
        ("postgresql+asyncpg://gcd:pw@db:5432/gcd", "postgresql+asyncpg://gcd:pw@db:5432/gcd"),
        ("sqlite+aiosqlite:///gcd.db", "sqlite+aiosqlite:///gcd.db"),
    ])
    def test_database_url_uses_async_driver(self, url, expected):
        assert Settings(DATABASE_URL=url).DATABASE_URL == expected

    def test_defaults(self, monkeypatch):
        for key in ("TARGET_SCHEMA", "SOURCE_SCHEMA", "PIPELINE_FETCH_SIZE", "CHARACTERS_STARTING_STORY_ID"):
            monkeypatch.delenv(key, raising=False)

        settings = Settings(DATABASE_URL="postgresql+asyncpg://localhost/gcd", _env_file=None)

        assert settings.TARGET_SCHEMA is None
        assert settings.SOURCE_SCHEMA is None
        assert settings.PIPELINE_FETCH_SIZE == 1000
        assert settings.CHARACTERS_STARTING_STORY_ID == 0

    def test_schemas_from_environment(self, monkeypatch):
        monkeypatch.setenv("TARGET_SCHEMA", "gcd_migrated")
        monkeypatch.setenv("SOURCE_SCHEMA", "gcd_dump")

        settings = Settings(DATABASE_URL="postgresql+asyncpg://localhost/gcd")

        assert settings.TARGET_SCHEMA == "gcd_migrated"
        assert settings.SOURCE_SCHEMA == "gcd_dump"

    def test_fetch_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            Settings(DATABASE_URL="postgresql+asyncpg://localhost/gcd", PIPELINE_FETCH_SIZE=0)
