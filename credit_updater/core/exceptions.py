"""
Credit Updater Exception Hierarchy

All exceptions include code, message, and details so a failed run can be
logged with enough context to build a resume invocation.

Exception Hierarchy:
    CreditUpdaterError
    ├── PipelineConnectionError   (fatal, ends the run)
    └── ExtractionError           (row-level, absorbed by the pipeline)
"""
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class CreditUpdaterError(Exception):
    """
    Base exception for all credit updater errors.

    Attributes:
        message: Human-readable error description
        code: Machine-readable error code for programmatic handling
        details: Additional context for debugging
    """

    default_code: str = "CREDIT_UPDATER_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class PipelineConnectionError(CreditUpdaterError):
    """The pipeline lost (or never got) its database connection."""

    default_code = "PIPELINE_CONNECTION_LOST"

    def __init__(
        self,
        message: str,
        query: str = "",
        rows_completed: int = 0,
        last_item_id: Optional[int] = None,
        code: Optional[str] = None,
    ):
        details = {
            "query": query,
            "rows_completed": rows_completed,
            "last_item_id": last_item_id,
        }
        super().__init__(message, code=code, details=details)
        self.query = query
        self.rows_completed = rows_completed
        self.last_item_id = last_item_id


class ExtractionError(CreditUpdaterError):
    """A single row could not be extracted or persisted."""

    default_code = "ROW_EXTRACTION_FAILED"

    def __init__(self, message: str, item_id: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message, code=code, details={"item_id": item_id})
        self.item_id = item_id
