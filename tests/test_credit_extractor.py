"""
Tests for CreditExtractor and CreditRepository.
"""
from unittest.mock import MagicMock

import pytest
from sqlalchemy import select

from credit_updater.db.credit_repository import CreditRepository
from credit_updater.extractors.credit_extractor import CreditExtractor
from credit_updater.models import CreditType, MStoryCredit, StoryCredit

STORY_1 = {
    "id": 1,
    "script": "Stan Lee (plot); Jack Kirby ?",
    "pencils": "Jack Kirby",
    "inks": "Steve Ditko [as S. Ditko]",
    "colors": "",
    "letters": None,
    "editing": "",
}


async def stored_credits(session_factory):
    async with session_factory() as session:
        result = await session.execute(
            select(MStoryCredit.creator_id, MStoryCredit.story_id, MStoryCredit.credit_type_id)
            .order_by(MStoryCredit.id)
        )
        return result.all()


class TestCreditExtractor:

    @pytest.mark.asyncio
    async def test_links_known_creators(self, seeded_engine, session_factory):
        extractor = CreditExtractor(session_factory=session_factory)

        result = await extractor.extract_and_persist(STORY_1)

        assert result.ok
        assert result.extracted == 3
        # Kirby's pencils credit already exists in gcd_story_credit
        assert await stored_credits(session_factory) == [
            (1, 1, CreditType.SCRIPT),
            (2, 1, CreditType.SCRIPT),
            (3, 1, CreditType.INKS),
        ]

    @pytest.mark.asyncio
    async def test_rerun_adds_nothing(self, seeded_engine, session_factory):
        extractor = CreditExtractor(session_factory=session_factory)

        await extractor.extract_and_persist(STORY_1)
        second = await extractor.extract_and_persist(STORY_1)

        assert second.extracted == 0
        assert len(await stored_credits(session_factory)) == 3

    @pytest.mark.asyncio
    async def test_unknown_creator_is_skipped(self, seeded_engine, session_factory):
        extractor = CreditExtractor(session_factory=session_factory)

        result = await extractor.extract_and_persist({"id": 2, "script": "Marv Wolfman"})

        assert result.ok
        assert result.extracted == 0
        assert await stored_credits(session_factory) == []

    @pytest.mark.asyncio
    async def test_every_credit_field_is_read(self, seeded_engine, session_factory):
        extractor = CreditExtractor(session_factory=session_factory)
        row = {"id": 3}
        row.update({credit_type.field_name: "Stan Lee" for credit_type in CreditType})

        result = await extractor.extract_and_persist(row)

        assert result.extracted == 6
        credit_types = [credit_type_id for _, _, credit_type_id in await stored_credits(session_factory)]
        assert credit_types == [1, 2, 3, 4, 5, 6]


class TestCreditRepository:

    @pytest.mark.asyncio
    async def test_no_name_detail_means_no_insert(self, mock_db):
        lookup = MagicMock()
        lookup.scalar_one_or_none.return_value = None
        mock_db.execute.return_value = lookup

        inserted = await CreditRepository(mock_db).insert_story_credit_if_not_exists("Nobody", 1, 1)

        assert inserted is False
        mock_db.add.assert_not_called()
        assert mock_db.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_existing_migrated_credit_is_found(self, seeded_engine, session_factory):
        async with session_factory() as session:
            repository = CreditRepository(session)
            credit_id = await repository.insert_story_credit(
                StoryCredit(story_id=2, creator_id=3, credit_type_id=CreditType.LETTERS)
            )
            await session.commit()

        async with session_factory() as session:
            repository = CreditRepository(session)
            assert await repository.lookup_story_credit_id(3, 2, CreditType.LETTERS) == credit_id
            assert await repository.lookup_story_credit_id(3, 2, CreditType.INKS) is None
            # gcd_story_credit row from the seed
            assert await repository.lookup_story_credit_id(2, 1, CreditType.PENCILS) == 1
