"""
Credit Extractor

Parses the six gcd_story credit text fields and links each name that
matches a gcd_creator_name_detail row through m_story_credit.
"""
import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from credit_updater.db.credit_repository import CreditRepository
from credit_updater.extractors.base import Extractor
from credit_updater.models.characters import CreditType
from credit_updater.parsers.credit_parser import parse_credit_names

logger = logging.getLogger(__name__)


class CreditExtractor(Extractor):
    extracted_item = "Credit"

    async def extract_and_insert(self, row: Mapping[str, Any], session: AsyncSession) -> int:
        story_id = row["id"]
        repository = CreditRepository(session)

        inserted = 0
        for credit_type in CreditType:
            for name in parse_credit_names(row.get(credit_type.field_name)):
                if await repository.insert_story_credit_if_not_exists(name, story_id, credit_type.value):
                    inserted += 1

        if inserted:
            logger.debug(f"[{self.extracted_item}] {self.from_value} {story_id}: {inserted} credits inserted")
        return inserted
