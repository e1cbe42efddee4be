from credit_updater.db.character_repository import CharacterRepository
from credit_updater.db.credit_repository import CreditRepository

__all__ = ["CharacterRepository", "CreditRepository"]
