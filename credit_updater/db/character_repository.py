"""
Character Repository

Lookup-then-insert access to m_character and m_character_appearance.

Characters are keyed by (name, alter_ego, publisher_id). Names are
whitespace-normalized and truncated to the column width before both lookup
and insert so repeated runs find the row they wrote earlier.

NOTE: there is no unique constraint behind the natural key. Two runs
upserting the same character at the same moment can both insert.
"""
import logging
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from credit_updater.models.characters import Appearance
from credit_updater.models.migration import MCharacter, MCharacterAppearance, NAME_MAX_LENGTH
from credit_updater.utils.text import cleanup, truncate

logger = logging.getLogger(__name__)


def _matches(column, value):
    """Equality that treats None as IS NULL."""
    return column.is_(None) if value is None else column == value


class CharacterRepository:
    """Persists parsed characters and their story appearances."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def upsert_character(
        self,
        name: str,
        alter_ego: Optional[str],
        publisher_id: int,
    ) -> int:
        """
        Get the id of the matching character, inserting it if missing.

        Args:
            name: Character name
            alter_ego: Alter ego, or None (always None for teams)
            publisher_id: Publisher of the story's series

        Returns:
            m_character.id
        """
        name = truncate(cleanup(name), NAME_MAX_LENGTH)
        if alter_ego is not None:
            alter_ego = truncate(cleanup(alter_ego), NAME_MAX_LENGTH)

        character_id = await self.lookup_character(name, alter_ego, publisher_id)
        if character_id is not None:
            return character_id
        return await self.insert_character(name, alter_ego, publisher_id)

    async def lookup_character(
        self,
        name: str,
        alter_ego: Optional[str],
        publisher_id: int,
    ) -> Optional[int]:
        result = await self.db.execute(
            select(MCharacter.id)
            .where(
                MCharacter.name == name,
                MCharacter.publisher_id == publisher_id,
                _matches(MCharacter.alter_ego, alter_ego),
            )
            .order_by(MCharacter.id)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def insert_character(
        self,
        name: str,
        alter_ego: Optional[str],
        publisher_id: int,
    ) -> int:
        character = MCharacter(name=name, alter_ego=alter_ego, publisher_id=publisher_id)
        self.db.add(character)
        await self.db.flush()
        logger.debug(f"[m_character] Inserted {name!r} ({alter_ego!r}) id={character.id}")
        return character.id

    async def insert_character_appearances(self, appearances: Iterable[Appearance]) -> int:
        """
        Insert appearances that are not already recorded.

        An appearance counts as recorded when story, character, details and
        membership all match an existing row.

        Returns:
            Number of rows inserted
        """
        inserted = 0
        for appearance in appearances:
            if await self.appearance_exists(appearance):
                continue
            self.db.add(
                MCharacterAppearance(
                    details=appearance.details,
                    character_id=appearance.character_id,
                    story_id=appearance.story_id,
                    notes=appearance.notes,
                    membership=appearance.membership,
                )
            )
            inserted += 1

        if inserted:
            await self.db.flush()
        return inserted

    async def appearance_exists(self, appearance: Appearance) -> bool:
        result = await self.db.execute(
            select(MCharacterAppearance.id)
            .where(
                MCharacterAppearance.story_id == appearance.story_id,
                MCharacterAppearance.character_id == appearance.character_id,
                _matches(MCharacterAppearance.details, appearance.details),
                _matches(MCharacterAppearance.membership, appearance.membership),
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
