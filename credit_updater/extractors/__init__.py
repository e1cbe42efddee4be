from credit_updater.extractors.base import ExtractionResult, Extractor
from credit_updater.extractors.character_extractor import CharacterExtractor
from credit_updater.extractors.credit_extractor import CreditExtractor

__all__ = ["ExtractionResult", "Extractor", "CharacterExtractor", "CreditExtractor"]
