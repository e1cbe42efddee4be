"""
Credit Repository

Links creator names found in story credit text to gcd_creator_name_detail
rows and records the link in m_story_credit, unless the dump already has
the same relational credit in gcd_story_credit.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from credit_updater.models.characters import StoryCredit
from credit_updater.models.gcd import GcdCreatorNameDetail, GcdStoryCredit
from credit_updater.models.migration import MStoryCredit

logger = logging.getLogger(__name__)


class CreditRepository:
    """Persists story credits extracted from text fields."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def insert_story_credit_if_not_exists(
        self,
        extracted_name: str,
        story_id: int,
        credit_type_id: int,
    ) -> bool:
        """
        Create an m_story_credit row for extracted_name unless one exists.

        Names with no gcd_creator_name_detail match are skipped.

        Returns:
            True if a row was inserted
        """
        gcnd_id = await self.lookup_gcnd_id(extracted_name)
        if gcnd_id is None:
            logger.debug(f"[m_story_credit] No creator name detail for {extracted_name!r}")
            return False

        if await self.lookup_story_credit_id(gcnd_id, story_id, credit_type_id) is not None:
            return False

        await self.insert_story_credit(
            StoryCredit(story_id=story_id, creator_id=gcnd_id, credit_type_id=credit_type_id)
        )
        return True

    async def lookup_gcnd_id(self, extracted_name: str) -> Optional[int]:
        result = await self.db.execute(
            select(GcdCreatorNameDetail.id)
            .where(GcdCreatorNameDetail.name == extracted_name)
            .order_by(GcdCreatorNameDetail.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def lookup_story_credit_id(
        self,
        gcnd_id: int,
        story_id: int,
        credit_type_id: int,
    ) -> Optional[int]:
        """Check gcd_story_credit first, then m_story_credit."""
        for model in (GcdStoryCredit, MStoryCredit):
            result = await self.db.execute(
                select(model.id)
                .where(
                    model.creator_id == gcnd_id,
                    model.story_id == story_id,
                    model.credit_type_id == credit_type_id,
                )
                .limit(1)
            )
            credit_id = result.scalar_one_or_none()
            if credit_id is not None:
                return credit_id
        return None

    async def insert_story_credit(self, credit: StoryCredit) -> int:
        row = MStoryCredit(
            creator_id=credit.creator_id,
            story_id=credit.story_id,
            credit_type_id=credit.credit_type_id,
        )
        self.db.add(row)
        await self.db.flush()
        return row.id
