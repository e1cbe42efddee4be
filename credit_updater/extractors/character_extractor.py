"""
Character Extractor

Parses gcd_story.characters and records each character in m_character and
its appearance in m_character_appearance.
"""
import logging
from typing import Any, Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from credit_updater.db.character_repository import CharacterRepository
from credit_updater.extractors.base import Extractor
from credit_updater.models.characters import Appearance, Individual, Team
from credit_updater.parsers.character_parser import parse_characters

logger = logging.getLogger(__name__)


class CharacterExtractor(Extractor):
    extracted_item = "Character"

    async def extract_and_insert(self, row: Mapping[str, Any], session: AsyncSession) -> int:
        story_id = row["id"]
        publisher_id = row["publisher_id"]
        characters = parse_characters(row["characters"])
        if not characters:
            return 0

        repository = CharacterRepository(session)

        # dict keeps first-seen order while dropping repeats within the row
        appearances = {}
        for character in characters:
            if isinstance(character, Team):
                character_id = await repository.upsert_character(character.name, None, publisher_id)
                membership = character.members
            elif isinstance(character, Individual):
                character_id = await repository.upsert_character(
                    character.name, character.alter_ego, publisher_id
                )
                membership = None
            else:
                raise TypeError(f"Unexpected character type: {type(character).__name__}")

            appearance = Appearance(
                story_id=story_id,
                character_id=character_id,
                details=character.appearance_notes,
                membership=membership,
            )
            appearances[appearance] = None

        inserted = await repository.insert_character_appearances(appearances)
        logger.debug(
            f"[{self.extracted_item}] {self.from_value} {story_id}: "
            f"{len(characters)} parsed, {inserted} appearances inserted"
        )
        return inserted
