"""
Pytest configuration and fixtures for credit updater tests.
"""
import os
import tempfile
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import event
from unittest.mock import AsyncMock, MagicMock

# Set test environment before importing credit_updater modules
os.environ["ENVIRONMENT"] = "development"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(tempfile.gettempdir(), "credit_updater_unused.db")
os.environ["PIPELINE_FETCH_SIZE"] = "2"

from credit_updater.core.database import Base, create_engine_for, create_session_factory  # noqa: E402
from credit_updater.models import (  # noqa: E402
    GcdCreatorNameDetail,
    GcdIssue,
    GcdPublisher,
    GcdSeries,
    GcdStory,
    GcdStoryCredit,
    MigrateStory,
)

STORIES = [
    {
        "id": 1,
        "issue_id": 10,
        "characters": "Aquaman [Arthur Curry]; Batman [Bruce Wayne] (cameo); Lois Lane",
        "script": "Stan Lee (plot); Jack Kirby ?",
        "pencils": "Jack Kirby",
        "inks": "Steve Ditko [as S. Ditko]",
    },
    {
        "id": 2,
        "issue_id": 20,
        "characters": "Teen Titans [Robin; Kid Flash; Wonder Girl]",
        "script": "Marv Wolfman",
    },
    {
        "id": 3,
        "issue_id": 10,
        "characters": "",
        "editing": "Stan Lee",
    },
]


def _enable_wal(dbapi_connection, connection_record):
    # Lets extractor sessions commit while the pipeline stream is open
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.close()


@pytest_asyncio.fixture
async def db_engine(tmp_path) -> AsyncGenerator:
    """Empty file-backed SQLite database with all tables created."""
    engine = create_engine_for(f"sqlite+aiosqlite:///{tmp_path / 'gcd.db'}")
    event.listen(engine.sync_engine.pool, "connect", _enable_wal)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest_asyncio.fixture
async def seeded_engine(db_engine, session_factory):
    """
    Two publishers, one series and issue each, three stories (mirrored in
    migrate_stories as story 101), and three creator name details.
    """
    async with session_factory() as session:
        session.add_all([
            GcdPublisher(id=1, name="Marvel"),
            GcdPublisher(id=2, name="DC"),
        ])
        session.add_all([
            GcdSeries(id=100, name="Fantastic Four", publisher_id=1),
            GcdSeries(id=200, name="New Teen Titans", publisher_id=2),
        ])
        session.add_all([
            GcdIssue(id=10, number="1", series_id=100),
            GcdIssue(id=20, number="1", series_id=200),
        ])
        session.add_all([GcdStory(**story) for story in STORIES])
        session.add(MigrateStory(id=101, issue_id=20, characters="Raven; Starfire (cameo)", script="Marv Wolfman"))
        session.add_all([
            GcdCreatorNameDetail(id=1, name="Stan Lee", creator_id=1),
            GcdCreatorNameDetail(id=2, name="Jack Kirby", creator_id=2),
            GcdCreatorNameDetail(id=3, name="Steve Ditko", creator_id=3),
        ])
        # Pencils credit for Kirby on story 1 already exists relationally
        session.add(GcdStoryCredit(id=1, creator_id=2, credit_type_id=2, story_id=1))
        await session.commit()

    return db_engine


@pytest.fixture
def mock_db() -> AsyncMock:
    """Create mock async database session."""
    db = AsyncMock()
    db.add = MagicMock()
    db.flush = AsyncMock()
    db.commit = AsyncMock()
    db.rollback = AsyncMock()
    db.execute = AsyncMock()
    return db
