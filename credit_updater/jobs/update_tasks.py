"""
Update Tasks

Builds the story queries for each extractor and runs them through the
UpdatePipeline.

Resuming: every query selects stories with id greater than the starting
story id, ordered by id. The number of stories at or below that id is
passed to the pipeline as starting_complete so the percentage and ETA
carry on from the interrupted run. Counts use the same FROM clause as the
query, so stories the character joins drop are not counted either.

Source table:
- initial=True reads gcd_story (first full extraction)
- initial=False reads migrate_stories (stories from a newer dump)
"""
import logging
from typing import Optional, Type

from sqlalchemy import func, join, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from credit_updater.core.config import settings
from credit_updater.core.database import engine as default_engine
from credit_updater.extractors.character_extractor import CharacterExtractor
from credit_updater.extractors.credit_extractor import CreditExtractor
from credit_updater.jobs.progress import ProgressTracker
from credit_updater.jobs.update_pipeline import PipelineSummary, UpdatePipeline
from credit_updater.models.characters import CreditType
from credit_updater.models.gcd import GcdIssue, GcdSeries, GcdStory, MigrateStory

logger = logging.getLogger(__name__)


def story_model(initial: bool) -> Type:
    return GcdStory if initial else MigrateStory


def character_source(initial: bool = True):
    """Stories joined to their issue and series."""
    story = story_model(initial).__table__
    issue = GcdIssue.__table__
    series = GcdSeries.__table__
    return join(story, issue, issue.c.id == story.c.issue_id).join(series, series.c.id == issue.c.series_id)


def build_character_query(last_id: int, initial: bool = True):
    """id, characters and the series publisher_id of stories after last_id."""
    story = story_model(initial)
    return (
        select(story.id, story.characters, GcdSeries.publisher_id)
        .select_from(character_source(initial))
        .where(story.id > last_id)
        .order_by(story.id)
    )


def build_credit_query(last_id: int, initial: bool = True):
    """id and the six credit text columns of stories after last_id."""
    story = story_model(initial)
    credit_columns = [getattr(story, credit_type.field_name) for credit_type in CreditType]
    return (
        select(story.id, *credit_columns)
        .where(story.id > last_id)
        .order_by(story.id)
    )


async def count_items(engine: AsyncEngine, table, condition=None) -> int:
    """SELECT COUNT(*) FROM table [WHERE condition]."""
    query = select(func.count()).select_from(table)
    if condition is not None:
        query = query.where(condition)
    async with engine.connect() as conn:
        result = await conn.execute(query)
        return result.scalar_one()


async def _resume_counts(engine: AsyncEngine, source, initial: bool, last_id: int):
    story = story_model(initial)
    starting_complete = await count_items(engine, source, story.id <= last_id)
    total_expected = await count_items(engine, source)
    return starting_complete, total_expected


async def extract_characters(
    starting_id: Optional[int] = None,
    initial: bool = True,
    starting_complete: Optional[int] = None,
    total_expected: Optional[int] = None,
    engine: Optional[AsyncEngine] = None,
    session_factory: Optional[async_sessionmaker] = None,
    tracker: Optional[ProgressTracker] = None,
) -> PipelineSummary:
    """
    Extract characters and appearances from every story after starting_id.

    Args:
        starting_id: Last story id already done (default CHARACTERS_STARTING_STORY_ID)
        initial: Read gcd_story instead of migrate_stories
        starting_complete: Override the computed count of stories already done
        total_expected: Override the computed total story count
        engine: Engine for the read stream (default application engine)
        session_factory: Session factory for extractor writes
        tracker: Progress output
    """
    last_id = settings.CHARACTERS_STARTING_STORY_ID if starting_id is None else starting_id
    extractor = CharacterExtractor(session_factory=session_factory)
    return await _run(
        extractor, build_character_query(last_id, initial), character_source(initial), last_id, initial,
        starting_complete, total_expected, engine, tracker,
    )


async def extract_credits(
    starting_id: Optional[int] = None,
    initial: bool = True,
    starting_complete: Optional[int] = None,
    total_expected: Optional[int] = None,
    engine: Optional[AsyncEngine] = None,
    session_factory: Optional[async_sessionmaker] = None,
    tracker: Optional[ProgressTracker] = None,
) -> PipelineSummary:
    """Extract story credits from every story after starting_id."""
    last_id = settings.CREDITS_STARTING_STORY_ID if starting_id is None else starting_id
    extractor = CreditExtractor(session_factory=session_factory)
    return await _run(
        extractor, build_credit_query(last_id, initial), story_model(initial), last_id, initial,
        starting_complete, total_expected, engine, tracker,
    )


async def _run(
    extractor,
    query,
    source,
    last_id: int,
    initial: bool,
    starting_complete: Optional[int],
    total_expected: Optional[int],
    engine: Optional[AsyncEngine],
    tracker: Optional[ProgressTracker],
) -> PipelineSummary:
    engine = engine or default_engine
    table = story_model(initial).__tablename__
    logger.info(f"[{extractor.extracted_item}] Table: {table} | Starting after {extractor.from_value} {last_id}")

    if starting_complete is None or total_expected is None:
        counted_complete, counted_total = await _resume_counts(engine, source, initial, last_id)
        if starting_complete is None:
            starting_complete = counted_complete
        if total_expected is None:
            total_expected = counted_total

    pipeline = UpdatePipeline(engine=engine, tracker=tracker)
    return await pipeline.run(query, starting_complete, total_expected, extractor)
