"""
Extractor contract

An extractor takes one story row, parses a free-text field, and writes the
parsed entities inside its own session. Row-level failures come back as a
failed ExtractionResult instead of an exception so the pipeline can keep
going. Connection errors are not row-level and always propagate.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from credit_updater.core.database import CONNECTION_ERRORS, AsyncSessionLocal, get_db_session
from credit_updater.core.exceptions import ExtractionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionResult:
    """Outcome of extracting one row."""
    item_id: Any
    extracted: int = 0
    error: Optional[str] = None
    code: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failed(cls, error: ExtractionError) -> "ExtractionResult":
        return cls(item_id=error.item_id, extracted=0, error=error.message, code=error.code)


class Extractor(ABC):
    """
    Base class for story field extractors.

    Subclasses set extracted_item and implement extract_and_insert().
    """

    extract_table: str = "gcd_story"
    extracted_item: str = ""
    from_value: str = "StoryId"

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self.session_factory = session_factory or AsyncSessionLocal

    async def extract_and_persist(self, row: Mapping[str, Any]) -> ExtractionResult:
        """
        Extract one row in a fresh session and commit it.

        Database errors roll the session back and are reported in the
        result. Connection errors and anything else propagate to the caller.
        """
        item_id = row["id"]
        try:
            async with get_db_session(self.session_factory) as session:
                extracted = await self.extract_and_insert(row, session)
        except CONNECTION_ERRORS:
            raise
        except SQLAlchemyError as e:
            error = ExtractionError(
                f"{self.extracted_item} extraction failed: {type(e).__name__}: {e}", item_id=item_id
            )
            logger.error(f"[{self.extracted_item}] {self.from_value} {item_id}: {error.to_dict()}")
            return ExtractionResult.failed(error)

        return ExtractionResult(item_id=item_id, extracted=extracted)

    @abstractmethod
    async def extract_and_insert(self, row: Mapping[str, Any], session: AsyncSession) -> int:
        """
        Parse the row and write what was found.

        Returns:
            Number of rows written
        """
